"""
Deep JSON parsing for log payloads.
"""

import json
from typing import Any


def _parse(value: Any) -> Any:
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except (ValueError, RecursionError):
            return value
    else:
        parsed = value

    if isinstance(parsed, list):
        return [_parse(item) for item in parsed]

    if isinstance(parsed, dict):
        for key in parsed:
            parsed[key] = _parse(parsed[key])

    return parsed


def parse_data(value: Any) -> Any:
    """
    Deeply parse every JSON string inside ``value``.

    Strings are decoded with ``json.loads``; strings that are not JSON come
    back unchanged. Lists and dicts are walked so that JSON strings nested
    at any depth are decoded too. Input nested too deeply for the
    interpreter stack is returned unchanged.

    Example:
        >>> parse_data('{"a": "{\\"b\\": \\"c\\"}"}')
        {'a': {'b': 'c'}}
    """
    try:
        return _parse(value)
    except RecursionError:
        return value
