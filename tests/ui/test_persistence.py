from refi_engine.engine.config import DEFAULT_INPUTS
from refi_engine.engine.types import CalculatorInputs
from ui.persistence import from_query_string, inputs_from_query, inputs_to_query, to_query_string


def test_query_uses_calculator_keys():
    q = inputs_to_query(DEFAULT_INPUTS)
    assert q["loanAmount"] == "500000"
    assert q["loanTermMonths"] == "360"
    assert q["refiRate"] == "6"
    assert len(q) == 10


def test_query_string_restores_inputs():
    inputs = CalculatorInputs(loan_amount=1_234_567.5, interest_rate=5.875, refi_after_months=84)
    assert from_query_string("?" + to_query_string(inputs)) == inputs


def test_bad_query_values_use_defaults():
    inputs = from_query_string("loanAmount=abc&refiRate=5.5&unknown=1")
    assert inputs.loan_amount == DEFAULT_INPUTS.loan_amount
    assert inputs.refi_rate == 5.5


def test_inputs_from_query_custom_defaults():
    seed = CalculatorInputs(loan_amount=100_000)
    assert inputs_from_query({}, defaults=seed) == seed
