"""
Input configuration for the scenario engine.

The calculation core trusts its inputs; this module is the caller-side layer
that loads them (JSON files, query strings, CLI overrides), falls back to the
defaults for absent or unparsable values, and validates the result against
`refi_engine/schema/calculator_inputs.json`.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from jsonschema import Draft202012Validator
from loguru import logger

from .types import CalculatorInputs

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schema" / "calculator_inputs.json"

DEFAULT_INPUTS = CalculatorInputs()

FIELD_NAMES = [f.name for f in fields(CalculatorInputs)]
INT_FIELDS = {"loan_term_months", "refi_after_months", "refi_term_months"}

# Keys used by the original web calculator (query string / local storage).
CAMEL_KEYS = {
    "loan_amount": "loanAmount",
    "interest_rate": "interestRate",
    "loan_term_months": "loanTermMonths",
    "extra_payment": "extraPayment",
    "lump_sum_at_start": "lumpSumAtStart",
    "refi_after_months": "refiAfterMonths",
    "refi_term_months": "refiTermMonths",
    "refi_rate": "refiRate",
    "extra_payment_after_refi": "extraPaymentAfterRefi",
    "lump_sum_after_refi": "lumpSumAfterRefi",
}


class InputValidationError(ValueError):
    """Raised when an inputs record violates the schema."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


@lru_cache(maxsize=1)
def load_schema() -> dict:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def inputs_from_mapping(
    data: Mapping[str, Any],
    defaults: CalculatorInputs = DEFAULT_INPUTS,
) -> CalculatorInputs:
    """Build inputs from snake_case or camelCase keys.

    Values that are absent, empty or not numbers keep the value from
    `defaults`. Month fields are truncated to whole months.
    """
    values: Dict[str, Any] = asdict(defaults)
    for name in FIELD_NAMES:
        raw = data.get(name, data.get(CAMEL_KEYS[name]))
        number = _parse_number(raw)
        if number is None:
            if raw is not None:
                logger.debug("Ignoring unparsable value {!r} for {}", raw, name)
            continue
        values[name] = int(number) if name in INT_FIELDS else number
    return CalculatorInputs(**values)


def inputs_to_dict(inputs: CalculatorInputs) -> Dict[str, Any]:
    return asdict(inputs)


def validate_inputs(inputs: CalculatorInputs) -> CalculatorInputs:
    """Check the record against the schema, raising on the first violation."""
    validator = Draft202012Validator(load_schema())
    errors = sorted(validator.iter_errors(inputs_to_dict(inputs)), key=lambda e: list(e.path))
    if errors:
        err = errors[0]
        field = ".".join(str(p) for p in err.path)
        raise InputValidationError(field, err.message)
    return inputs


def apply_overrides(inputs: CalculatorInputs, overrides: Mapping[str, Any]) -> CalculatorInputs:
    """Return a copy of `inputs` with `overrides` applied."""
    if not overrides:
        return inputs
    unknown = [k for k in overrides if k not in FIELD_NAMES and k not in CAMEL_KEYS.values()]
    if unknown:
        raise InputValidationError(unknown[0], "unknown input field")
    return inputs_from_mapping(overrides, defaults=inputs)


def load_inputs(path: Path | str) -> CalculatorInputs:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InputValidationError("", f"{p} must contain a JSON object")
    logger.debug("Loaded inputs from {}", p)
    return validate_inputs(apply_overrides(DEFAULT_INPUTS, data))
