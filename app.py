"""
Streamlit UI for the mortgage refinance scenario engine.

Single page that:

- Seeds the inputs from the URL query string (falling back to defaults)
- Calls `calculate_all_scenarios` through `ui.scenarios.run_scenarios`
- Writes the current inputs back to the query string so the page can be shared
- Renders KPIs, the scenario table, a narrative summary and per-scenario schedules
"""

from __future__ import annotations

import pandas as pd
import streamlit as st
from loguru import logger

from refi_engine.engine.config import DEFAULT_INPUTS, InputValidationError, validate_inputs
from refi_engine.engine.formatting import format_currency, format_duration
from refi_engine.engine.simulator import schedule_frame
from refi_engine.engine.types import CalculatorInputs
from refi_engine.log import setup_logging
from ui.comparison import best_scenario_index
from ui.persistence import inputs_from_query, inputs_to_query
from ui.scenarios import diff_lines, run_scenarios, summary_paragraphs


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

def _seed_inputs() -> CalculatorInputs:
    """Inputs from the query string, or the defaults when a shared link is out of range."""
    seed = inputs_from_query(st.query_params.to_dict())
    try:
        return validate_inputs(seed)
    except InputValidationError as exc:
        logger.warning("Ignoring query-string inputs: {}", exc)
        st.warning(f"Ignored the inputs in the link ({exc}); showing the defaults instead.")
        return DEFAULT_INPUTS


def _sidebar_inputs(seed: CalculatorInputs) -> CalculatorInputs:
    """Render the sidebar form. `seed` supplies the initial widget values."""
    with st.sidebar:
        st.header("Loan")
        loan_amount = st.number_input("Loan amount", min_value=0.01, value=float(seed.loan_amount), step=10_000.0)
        interest_rate = st.number_input("Interest rate (%)", min_value=0.0, value=float(seed.interest_rate), step=0.125)
        loan_term_months = st.number_input("Loan term (months)", min_value=1, value=int(seed.loan_term_months), step=12)
        extra_payment = st.number_input("Extra monthly payment", min_value=0.0, value=float(seed.extra_payment), step=100.0)
        lump_sum_at_start = st.number_input("Lump sum at start", min_value=0.0, value=float(seed.lump_sum_at_start), step=1_000.0)

        st.header("Refinance")
        refi_after_months = st.number_input("Refinance after (months)", min_value=0, value=int(seed.refi_after_months), step=12)
        refi_term_months = st.number_input("Refinance term (months)", min_value=1, value=int(seed.refi_term_months), step=12)
        refi_rate = st.number_input("Refinance rate (%)", min_value=0.0, value=float(seed.refi_rate), step=0.125)
        extra_after = st.number_input(
            "Extra monthly payment after refi", min_value=0.0, value=float(seed.extra_payment_after_refi), step=100.0
        )
        lump_after = st.number_input("Lump sum at refi", min_value=0.0, value=float(seed.lump_sum_after_refi), step=1_000.0)

    return CalculatorInputs(
        loan_amount=float(loan_amount),
        interest_rate=float(interest_rate),
        loan_term_months=int(loan_term_months),
        extra_payment=float(extra_payment),
        lump_sum_at_start=float(lump_sum_at_start),
        refi_after_months=int(refi_after_months),
        refi_term_months=int(refi_term_months),
        refi_rate=float(refi_rate),
        extra_payment_after_refi=float(extra_after),
        lump_sum_after_refi=float(lump_after),
    )


# ---------------------------------------------------------------------------
# UI helpers
# ---------------------------------------------------------------------------

def _render_kpi_row(scenarios) -> None:
    standard = scenarios[0]
    best = scenarios[best_scenario_index(scenarios)]

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Standard monthly P&I", format_currency(standard.monthly_payment))
    col2.metric("Standard total paid", format_currency(standard.total_paid))
    col3.metric(
        "Best total paid",
        format_currency(best.total_paid),
        delta=format_currency(best.total_paid - standard.total_paid),
        delta_color="inverse",
    )
    col4.metric("Best payoff time", format_duration(best.duration_months))


_TONE_COLORS = {"good": "green", "bad": "red"}


def _md(text: str) -> str:
    # A bare "$" starts a LaTeX span in Streamlit markdown.
    return text.replace("$", "\\$")


def _render_diffs(scenarios, inputs: CalculatorInputs) -> None:
    for label, text, tone in diff_lines(scenarios, inputs):
        color = _TONE_COLORS.get(tone)
        body = f":{color}[{_md(text)}]" if color else _md(text)
        st.markdown(f"**{label}:** {body}")


def _render_schedules(scenarios) -> None:
    st.subheader("Monthly schedules")
    for idx, s in enumerate(scenarios, 1):
        with st.expander(f"Scenario {idx}: {s.name}"):
            df: pd.DataFrame = schedule_frame(s)
            st.caption(s.description)
            st.dataframe(df, use_container_width=True, height=300)


def scenario_panel() -> None:
    st.title("Mortgage Refinance Scenarios")

    seed = _seed_inputs()
    inputs = _sidebar_inputs(seed)

    try:
        validate_inputs(inputs)
        scenarios, table = run_scenarios(inputs)
    except InputValidationError as exc:
        st.error(f"Invalid inputs: {exc}")
        st.stop()
    except Exception as exc:  # noqa: BLE001
        st.error(f"Calculation failed: {exc}")
        st.stop()

    st.query_params.from_dict(inputs_to_query(inputs))

    _render_kpi_row(scenarios)

    st.subheader("Scenarios")
    st.dataframe(table, use_container_width=True, hide_index=True)

    st.subheader("Summary")
    for paragraph in summary_paragraphs(scenarios, inputs):
        st.markdown(_md(paragraph))
    _render_diffs(scenarios, inputs)

    _render_schedules(scenarios)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    setup_logging("WARNING")
    st.set_page_config(
        page_title="Mortgage Refinance Scenarios",
        layout="wide",
    )
    scenario_panel()


if __name__ == "__main__":
    main()
