#!/usr/bin/env python3
import argparse
from pathlib import Path
from typing import Dict, List

from loguru import logger

from refi_engine.engine.config import (
    DEFAULT_INPUTS,
    InputValidationError,
    apply_overrides,
    load_inputs,
    validate_inputs,
)
from refi_engine.engine.formatting import format_currency, format_duration
from refi_engine.engine.scenarios import calculate_all_scenarios, scenarios_frame
from refi_engine.engine.simulator import schedule_frame
from refi_engine.engine.types import ScenarioResult
from refi_engine.log import setup_logging


def _parse_overrides(pairs: List[str]) -> Dict[str, str]:
    overrides = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise InputValidationError(pair, "expected key=value")
        overrides[key.strip()] = value.strip()
    return overrides


def format_table(scenarios: List[ScenarioResult]) -> str:
    lines = []
    lines.append("=" * 96)
    lines.append(f"{'#':<3} {'Scenario':<58} {'Total Paid':>14} {'Interest':>12} {'Duration':>8}")
    lines.append("-" * 96)
    for idx, s in enumerate(scenarios, 1):
        lines.append(
            f"{idx:<3} {s.name[:58]:<58} {format_currency(s.total_paid):>14} "
            f"{format_currency(s.total_interest):>12} {format_duration(s.duration_months):>8}"
        )
    lines.append("=" * 96)
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Compare mortgage payoff and refinance scenarios")
    parser.add_argument("--inputs", type=Path, help="JSON inputs file (defaults used when omitted)")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override one input, e.g. --set refi_rate=5.25",
    )
    parser.add_argument("--out-prefix", type=str, default="out/refi_scenarios")
    parser.add_argument("--schedule", action="store_true", help="Also write each scenario's monthly schedule")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        inputs = load_inputs(args.inputs) if args.inputs else DEFAULT_INPUTS
        inputs = validate_inputs(apply_overrides(inputs, _parse_overrides(args.overrides)))
    except (ValueError, OSError) as exc:
        parser.error(str(exc))

    scenarios = calculate_all_scenarios(inputs)

    out = Path(args.out_prefix)
    out.parent.mkdir(parents=True, exist_ok=True)
    scenarios_path = out.with_name(out.name + "_Scenarios.csv")
    scenarios_frame(scenarios).to_csv(scenarios_path, index=False)
    logger.info("Wrote {}", scenarios_path)

    if args.schedule:
        for idx, s in enumerate(scenarios, 1):
            path = out.with_name(f"{out.name}_Schedule_{idx}.csv")
            schedule_frame(s).to_csv(path, index=False)
            logger.info("Wrote {}", path)

    print(format_table(scenarios))


if __name__ == "__main__":
    main()
