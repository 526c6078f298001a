"""
Registry of well-known exception classes, keyed by class name.

Serialized error records carry the exception type as a plain ``name``
string. Deserialization looks the name up here to rebuild an instance of
the same type; unknown names fall back to :class:`Exception`.
"""

import builtins
from typing import Dict, Optional, Type

# Names missing from the running interpreter are skipped
_KNOWN_ERRORS = (
    "ArithmeticError",
    "AssertionError",
    "AttributeError",
    "BufferError",
    "ConnectionError",
    "EOFError",
    "FileNotFoundError",
    "ImportError",
    "IndexError",
    "KeyError",
    "LookupError",
    "ModuleNotFoundError",
    "NameError",
    "NotImplementedError",
    "OSError",
    "OverflowError",
    "PermissionError",
    "PythonFinalizationError",
    "RecursionError",
    "ReferenceError",
    "RuntimeError",
    "StopIteration",
    "SyntaxError",
    "SystemError",
    "TimeoutError",
    "TypeError",
    "UnicodeError",
    "ValueError",
    "ZeroDivisionError",
)

error_constructors: Dict[str, Type[BaseException]] = {
    name: getattr(builtins, name)
    for name in _KNOWN_ERRORS
    if isinstance(getattr(builtins, name, None), type)
}


def get_error_constructor(name: Optional[str]) -> Type[BaseException]:
    """Exception class registered under ``name``, or ``Exception``."""
    if isinstance(name, str):
        return error_constructors.get(name, Exception)
    return Exception
