"""
Error serialization and deserialization.

Converts raised exceptions (or anything else that gets logged as one) into
plain, JSON-ready dictionaries, and rebuilds usable exception instances
from such dictionaries.

Both directions share one traversal, the guarded copy. It walks an
arbitrary object graph and copies it into a fresh target while:

    - replacing references back to an ancestor on the current path with
      ``"[Circular]"`` (shared objects that are not ancestors are copied
      independently in each branch)
    - stopping at ``max_depth`` and returning what has been copied so far
    - replacing a node with its JSON hook result (``to_json``,
      ``isoformat``, pydantic ``model_dump`` and friends) when serializing
    - replacing buffers and streams with placeholder strings
    - dropping function-valued fields
    - copying the well-known error fields ``name``, ``message``, ``stack``,
      ``code`` and ``cause`` explicitly, recursing into an error-like cause

Error fields in Python:
    An exception's ``name`` is its class name, its ``message`` its single
    string argument (or ``str(exc)``), its ``stack`` the formatted
    traceback and its ``cause`` the ``__cause__``. Deserialized exceptions
    store these four as hidden attributes: they are readable as
    ``exc.message`` and friends but are left out of
    :func:`enumerable_fields`, while ``code`` and every other copied field
    are enumerable.

Example:
    >>> record = serialize_error(ValueError("boom"))
    >>> record["name"], record["message"]
    ('ValueError', 'boom')
    >>> error = deserialize_error(record)
    >>> isinstance(error, ValueError), error.message
    (True, 'boom')
"""

import functools
import inspect
import io
import json
import math
import traceback
from collections.abc import Mapping, Sequence, Set
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from uuid import UUID

from pydantic import BaseModel

from conlog.core.logging.logger import get_logger
from conlog.helpers.serialize.constructors import get_error_constructor

logger = get_logger(__name__)

CIRCULAR = "[Circular]"
BUFFER = "[object Buffer]"
STREAM = "[object Stream]"

HIDDEN_FIELDS = ("name", "message", "stack", "cause")

# copied explicitly after the field walk; all but "code" are HIDDEN_FIELDS
COMMON_PROPERTIES = ("name", "message", "stack", "code", "cause")

# nesting kept when a graph is too deep for the interpreter stack
FALLBACK_DEPTH = 64

_PRIMITIVES = (str, int, float, complex, bool, type(None))

# marker for function-valued fields, which are left out of copies
_DROPPED = object()

# ids of nodes whose JSON hook is running
_to_json_called: set = set()


class NonError(Exception):
    """
    Wraps a value that was raised or logged as an error but is not one.

    The message is the JSON encoding of the value, or its ``str()`` when
    the value cannot be encoded.
    """

    name = "NonError"

    def __init__(self, value: Any) -> None:
        message = self._prepare_message(value)
        super().__init__(message)
        self.message = message

    @staticmethod
    def _prepare_message(value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError, RecursionError):
            return str(value)


def _is_function(value: Any) -> bool:
    return (
        inspect.isroutine(value)
        or inspect.isclass(value)
        or isinstance(value, functools.partial)
    )


def _function_name(value: Any) -> str:
    name = getattr(value, "__name__", None)
    if isinstance(value, functools.partial):
        name = getattr(value.func, "__name__", None)
    if not name or name == "<lambda>":
        return "anonymous"
    return name


def _is_buffer(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def _has_callable(value: Any, attribute: str) -> bool:
    try:
        return callable(getattr(value, attribute, None))
    except Exception:
        return False


def _is_stream(value: Any) -> bool:
    if isinstance(value, io.IOBase):
        return True
    return any(_has_callable(value, attribute) for attribute in ("read", "write", "pipe"))


def _is_object(value: Any) -> bool:
    return not isinstance(value, _PRIMITIVES)


def _is_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, Set))


def _has_attribute(value: Any, attribute: str) -> bool:
    try:
        return hasattr(value, attribute)
    except Exception:
        return False


def is_error_like(value: Any) -> bool:
    """
    True for exceptions and for values exposing ``name``, ``message`` and
    ``stack``, whether as mapping keys or as attributes.
    """
    if isinstance(value, BaseException):
        return True
    if not _is_object(value) or _is_sequence(value):
        return False
    if isinstance(value, Mapping):
        return all(key in value for key in ("name", "message", "stack"))
    return all(_has_attribute(value, key) for key in ("name", "message", "stack"))


def _is_minimum_viable_serialized_error(value: Any) -> bool:
    return isinstance(value, Mapping) and "message" in value


def enumerable_fields(value: Any) -> Dict[str, Any]:
    """
    Fields of ``value`` that the guarded copy walks.

    Mappings contribute their items. Other objects contribute their public
    instance attributes; exceptions additionally hide ``name``,
    ``message``, ``stack`` and ``cause``.
    """
    if isinstance(value, Mapping):
        return {key if isinstance(key, str) else str(key): item for key, item in value.items()}
    try:
        fields = vars(value)
    except TypeError:
        return {}
    hidden = HIDDEN_FIELDS if isinstance(value, BaseException) else ()
    return {
        key: item
        for key, item in fields.items()
        if not key.startswith("_") and key not in hidden
    }


def _format_stack(error: BaseException) -> str:
    lines = traceback.format_exception(type(error), error, error.__traceback__, chain=False)
    return "".join(lines).rstrip("\n")


def _error_message(error: BaseException) -> str:
    if len(error.args) == 1 and isinstance(error.args[0], str):
        return error.args[0]
    return str(error)


def read_error_property(value: Any, name: str) -> Any:
    """
    Read one of the well-known error properties from ``value``.

    Returns ``None`` when the property is missing or reading it fails.
    """
    try:
        if isinstance(value, Mapping):
            return value.get(name)
        if isinstance(value, BaseException):
            stored = vars(value).get(name)
            if stored is not None:
                return stored
            if name == "name":
                return type(value).__name__
            if name == "message":
                return _error_message(value)
            if name == "stack":
                return _format_stack(value)
            if name == "cause":
                return value.__cause__
            return getattr(value, name, None)
        return getattr(value, name, None)
    except Exception as e:
        logger.debug(
            "error property read failed",
            property=name,
            type=type(value).__name__,
            error=str(e),
        )
        return None


def _json_hook(value: Any) -> Optional[Callable[[], Any]]:
    try:
        to_json = getattr(value, "to_json", None)
    except Exception:
        to_json = None
    if callable(to_json):
        return to_json
    if isinstance(value, (datetime, date, time)):
        return value.isoformat
    if isinstance(value, BaseModel):
        return functools.partial(value.model_dump, mode="json")
    if isinstance(value, Enum):
        return lambda: value.value
    if isinstance(value, (UUID, Decimal, PurePath)):
        return functools.partial(str, value)
    return None


def _call_json_hook(value: Any, hook: Callable[[], Any]) -> Tuple[bool, Any]:
    _to_json_called.add(id(value))
    try:
        return True, hook()
    except Exception as e:
        logger.debug("to_json hook failed", type=type(value).__name__, error=str(e))
        return False, None
    finally:
        _to_json_called.discard(id(value))


def new_error(name: Optional[str]) -> BaseException:
    """Fresh, empty instance of the registered exception class for ``name``."""
    constructor = get_error_constructor(name)
    try:
        error = constructor()
    except Exception:
        error = Exception()
    _assign(error, "name", type(error).__name__)
    _assign(error, "message", "")
    return error


def _assign(target: Any, key: Any, value: Any) -> None:
    if isinstance(target, list):
        target.append(value)
    elif isinstance(target, dict):
        target[key] = value
    elif not str(key).startswith("__"):
        try:
            setattr(target, str(key), value)
        except (AttributeError, TypeError, ValueError) as e:
            logger.debug(
                "read-only field skipped",
                field=key,
                type=type(target).__name__,
                error=str(e),
            )


def _define_property(target: Any, name: str, value: Any) -> None:
    if isinstance(target, BaseException):
        if name == "message":
            target.args = (value,)
        elif name == "cause" and isinstance(value, BaseException):
            target.__cause__ = value
    _assign(target, name, value)


def _destroy_circular(
    source: Any,
    seen: List[Any],
    *,
    max_depth: float,
    depth: int,
    use_to_json: bool,
    serialize: bool,
    target: Any = None,
) -> Any:
    if target is None:
        if _is_sequence(source):
            target = []
        elif not serialize and is_error_like(source):
            target = new_error(read_error_property(source, "name"))
        else:
            target = {}

    seen.append(source)

    if depth >= max_depth:
        return target

    def descend(value: Any) -> Any:
        return _destroy_circular(
            value,
            list(seen),
            max_depth=max_depth,
            depth=depth + 1,
            use_to_json=use_to_json,
            serialize=serialize,
        )

    if use_to_json and id(source) not in _to_json_called:
        hook = _json_hook(source)
        if hook is not None:
            called, result = _call_json_hook(source, hook)
            if called and result is not source:
                if not _is_object(result) or _is_function(result):
                    return result
                # hook stays marked so a result pointing back is walked, not hooked
                _to_json_called.add(id(source))
                try:
                    return _destroy_circular(
                        result,
                        list(seen),
                        max_depth=max_depth,
                        depth=depth,
                        use_to_json=use_to_json,
                        serialize=serialize,
                    )
                finally:
                    _to_json_called.discard(id(source))

    def convert(value: Any) -> Any:
        if not _is_object(value):
            return value
        if _is_buffer(value):
            return BUFFER
        if _is_function(value):
            return _DROPPED
        if _is_stream(value):
            return STREAM
        if any(value is ancestor for ancestor in seen):
            return CIRCULAR
        return descend(value)

    entries = enumerate(source) if _is_sequence(source) else enumerable_fields(source).items()

    for key, value in entries:
        copied = convert(value)
        if copied is _DROPPED:
            # keep positions in sequences
            if isinstance(target, list):
                target.append(None)
            continue
        _assign(target, key, copied)

    if isinstance(target, list):
        return target

    for name in COMMON_PROPERTIES:
        value = read_error_property(source, name)
        if value is None:
            continue
        copied = convert(value)
        if copied is not _DROPPED:
            _define_property(target, name, copied)

    return target


def _depth_limit(max_depth: Optional[int]) -> float:
    return math.inf if max_depth is None else max_depth


def _guarded_copy(
    value: Any,
    max_depth: Optional[int],
    *,
    use_to_json: bool,
    serialize: bool,
    make_target: Callable[[], Any] = lambda: None,
) -> Any:
    limit = _depth_limit(max_depth)
    try:
        return _destroy_circular(
            value,
            [],
            target=make_target(),
            max_depth=limit,
            depth=0,
            use_to_json=use_to_json,
            serialize=serialize,
        )
    except RecursionError:
        logger.debug(
            "graph too deep, copying with fallback depth",
            type=type(value).__name__,
            fallback_depth=FALLBACK_DEPTH,
        )
    return _destroy_circular(
        value,
        [],
        target=make_target(),
        max_depth=min(limit, FALLBACK_DEPTH),
        depth=0,
        use_to_json=use_to_json,
        serialize=serialize,
    )


def serialize_error(
    value: Any,
    *,
    max_depth: Optional[int] = None,
    use_to_json: bool = True,
) -> Any:
    """
    Convert ``value`` into plain, JSON-ready data.

    Args:
        value: Anything; usually an exception
        max_depth: Levels of nesting to copy (``None`` for no limit)
        use_to_json: Replace nodes that have a JSON hook with its result

    Returns:
        A dict (or list) for objects, a placeholder string for functions,
        buffers and streams, or ``value`` itself for primitives.
    """
    if _is_function(value):
        return f"[Function: {_function_name(value)}]"
    if _is_buffer(value):
        return BUFFER
    if _is_stream(value):
        return STREAM
    if not _is_object(value):
        return value

    return _guarded_copy(value, max_depth, use_to_json=use_to_json, serialize=True)


def deserialize_error(
    value: Any,
    *,
    max_depth: Optional[int] = None,
) -> Union[BaseException, NonError]:
    """
    Rebuild an exception from a serialized error record.

    Args:
        value: An exception, a serialized record or any other value
        max_depth: Levels of nesting to copy (``None`` for no limit)

    Returns:
        ``value`` itself when it already is an exception; an instance of the
        class named by the record's ``name`` when ``value`` is a mapping
        with a ``message``; otherwise a :class:`NonError` wrapping it.
    """
    if isinstance(value, BaseException):
        return value

    if _is_minimum_viable_serialized_error(value):
        return _guarded_copy(
            value,
            max_depth,
            use_to_json=False,
            serialize=False,
            make_target=lambda: new_error(value.get("name")),
        )

    return NonError(value)
