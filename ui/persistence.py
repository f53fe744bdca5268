"""
Query-string persistence for calculator inputs.

Keys match the original web calculator (`loanAmount`, `refiRate`, ...) so
shared links keep working. Parsing is lenient: anything missing or
unparsable falls back to the defaults.
"""

from __future__ import annotations

from typing import Dict, Mapping
from urllib.parse import parse_qsl, urlencode

from refi_engine.engine.config import CAMEL_KEYS, DEFAULT_INPUTS, inputs_from_mapping, inputs_to_dict
from refi_engine.engine.types import CalculatorInputs


def _format_value(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def inputs_to_query(inputs: CalculatorInputs) -> Dict[str, str]:
    return {CAMEL_KEYS[k]: _format_value(v) for k, v in inputs_to_dict(inputs).items()}


def inputs_from_query(
    params: Mapping[str, str],
    defaults: CalculatorInputs = DEFAULT_INPUTS,
) -> CalculatorInputs:
    return inputs_from_mapping(params, defaults=defaults)


def to_query_string(inputs: CalculatorInputs) -> str:
    return urlencode(inputs_to_query(inputs))


def from_query_string(query: str, defaults: CalculatorInputs = DEFAULT_INPUTS) -> CalculatorInputs:
    return inputs_from_query(dict(parse_qsl(query.lstrip("?"))), defaults=defaults)
