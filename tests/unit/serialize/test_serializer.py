"""
Tests for error serialization and deserialization.
"""

import io
import json
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

import pytest
from pydantic import BaseModel

from conlog.helpers.serialize import (
    BUFFER,
    CIRCULAR,
    STREAM,
    NonError,
    deserialize_error,
    enumerable_fields,
    error_constructors,
    get_error_constructor,
    is_error_like,
    serialize_error,
)


class Colour(Enum):
    RED = 1


class Order(BaseModel):
    id: int
    placed: datetime


class Money:
    def __init__(self, amount):
        self.amount = amount

    def to_json(self):
        return {"amount": str(self.amount), "currency": "AUD"}


class TestSerializeError:
    """Test cases for serialize_error."""

    def test_primitives_are_unchanged(self):
        for value in (None, "text", 1, 2.5, True):
            assert serialize_error(value) == value

    def test_exception_record(self):
        record = serialize_error(ValueError("boom"))
        assert record["name"] == "ValueError"
        assert record["message"] == "boom"
        assert record["stack"].startswith("ValueError: boom")
        assert "cause" not in record
        assert "code" not in record

    def test_exception_record_is_json_ready(self):
        try:
            raise KeyError("missing")
        except KeyError as e:
            record = serialize_error(e)
        assert json.loads(json.dumps(record)) == record
        assert "Traceback" in record["stack"]

    def test_custom_attributes_are_kept(self):
        error = ValueError("boom")
        error.status = 404
        error.code = "E_BOOM"
        error._private = "hidden"
        record = serialize_error(error)
        assert record["status"] == 404
        assert record["code"] == "E_BOOM"
        assert "_private" not in record

    def test_cause_chain(self):
        try:
            try:
                raise KeyError("inner")
            except KeyError as inner:
                raise RuntimeError("outer") from inner
        except RuntimeError as e:
            record = serialize_error(e)
        assert record["message"] == "outer"
        assert record["cause"]["name"] == "KeyError"
        assert record["cause"]["message"] == "inner"

    def test_self_cause_is_circular(self):
        error = ValueError("loop")
        error.__cause__ = error
        assert serialize_error(error)["cause"] == CIRCULAR

    def test_circular_reference(self):
        obj = {"name": "parent"}
        obj["child"] = {"parent": obj}
        result = serialize_error(obj)
        assert result["child"]["parent"] == CIRCULAR
        assert obj["child"]["parent"] is obj

    def test_shared_siblings_are_copied_independently(self):
        common = {"thing": {"deep": 1}}
        obj = {"one": {"a": common}, "two": {"b": common}}
        result = serialize_error(obj)
        assert result["one"]["a"]["thing"] == {"deep": 1}
        assert result["two"]["b"]["thing"] == {"deep": 1}

    def test_shared_ancestor_sibling_is_circular(self):
        obj = {}
        common = {"thing": obj}
        obj["one"] = {"a": common}
        obj["two"] = {"b": common}
        result = serialize_error(obj)
        assert result["one"]["a"]["thing"] == CIRCULAR
        assert result["two"]["b"]["thing"] == CIRCULAR

    def test_sequences(self):
        result = serialize_error([1, {"a": 1}, (2, 3)])
        assert result == [1, {"a": 1}, [2, 3]]

    def test_functions_are_dropped(self):
        result = serialize_error({"x": 1, "f": lambda: 1, "g": print, "cls": ValueError})
        assert result == {"x": 1}

    def test_functions_in_sequences_leave_a_hole(self):
        assert serialize_error([1, len, 2]) == [1, None, 2]

    def test_top_level_functions(self):
        def handler():
            pass

        assert serialize_error(handler) == "[Function: handler]"
        assert serialize_error(lambda: 1) == "[Function: anonymous]"

    def test_buffers_and_streams(self):
        assert serialize_error({"a": b"bytes"}) == {"a": BUFFER}
        assert serialize_error({"a": bytearray(2), "m": memoryview(b"x")}) == {
            "a": BUFFER,
            "m": BUFFER,
        }
        assert serialize_error({"s": io.StringIO()}) == {"s": STREAM}
        assert serialize_error(b"raw") == BUFFER
        assert serialize_error(io.BytesIO()) == STREAM

    def test_stream_like_objects(self):
        class Pipe:
            def pipe(self, target):
                return target

        assert serialize_error({"p": Pipe()}) == {"p": STREAM}

    def test_plain_objects_use_public_attributes(self):
        class Point:
            def __init__(self):
                self.x = 1
                self.y = 2
                self._cache = {}

        assert serialize_error({"point": Point()}) == {"point": {"x": 1, "y": 2}}

    def test_max_depth_zero_is_an_empty_shell(self):
        assert serialize_error({"a": {"b": 1}, "c": 2}, max_depth=0) == {}
        assert serialize_error(ValueError("boom"), max_depth=0) == {}
        assert serialize_error([1, [2]], max_depth=0) == []

    def test_max_depth_limits_nesting(self):
        value = {"a": {"b": {"c": 1}}, "top": 1}
        assert serialize_error(value, max_depth=1) == {"a": {}, "top": 1}
        assert serialize_error(value, max_depth=2) == {"a": {"b": {}}, "top": 1}

    def test_to_json_hook(self):
        assert serialize_error({"price": Money(5)}) == {
            "price": {"amount": "5", "currency": "AUD"}
        }

    def test_to_json_hook_disabled(self):
        assert serialize_error({"price": Money(5)}, use_to_json=False) == {"price": {"amount": 5}}

    def test_to_json_returning_a_primitive(self):
        class Token:
            def to_json(self):
                return "token"

        assert serialize_error(Token()) == "token"
        assert serialize_error({"t": Token()}) == {"t": "token"}

    def test_to_json_returning_itself_walks_fields(self):
        class Selfish:
            def __init__(self):
                self.value = 1

            def to_json(self):
                return self

        assert serialize_error(Selfish()) == {"value": 1}

    def test_failing_to_json_walks_fields(self):
        class Broken:
            def __init__(self):
                self.value = 1

            def to_json(self):
                raise RuntimeError("no")

        assert serialize_error(Broken()) == {"value": 1}

    def test_to_json_result_pointing_back(self):
        class Node:
            def to_json(self):
                return {"me": self}

        assert serialize_error(Node()) == {"me": CIRCULAR}

    def test_builtin_json_hooks(self):
        stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        uid = UUID("12345678-1234-5678-1234-567812345678")
        result = serialize_error(
            {
                "at": stamp,
                "id": uid,
                "amount": Decimal("1.50"),
                "colour": Colour.RED,
                "order": Order(id=7, placed=stamp),
            }
        )
        assert result == {
            "at": "2024-05-01T12:30:00+00:00",
            "id": "12345678-1234-5678-1234-567812345678",
            "amount": "1.50",
            "colour": 1,
            "order": {"id": 7, "placed": "2024-05-01T12:30:00Z"},
        }

    def test_error_nested_in_mapping(self):
        result = serialize_error({"error": TypeError("bad")})
        assert result["error"]["name"] == "TypeError"
        assert result["error"]["message"] == "bad"

    def test_input_is_not_mutated(self):
        value = {"a": [1, 2], "f": len}
        serialize_error(value)
        assert value == {"a": [1, 2], "f": len}


class TestDeserializeError:
    """Test cases for deserialize_error."""

    def test_exceptions_pass_through(self):
        error = ValueError("boom")
        assert deserialize_error(error) is error

    def test_minimal_record(self):
        error = deserialize_error({"message": "x"})
        assert type(error) is Exception
        assert error.name == "Exception"
        assert error.message == "x"
        assert str(error) == "x"

    def test_round_trip_keeps_type_and_message(self):
        for error_type in (ValueError, TypeError, KeyError, RuntimeError, ZeroDivisionError):
            restored = deserialize_error(serialize_error(error_type("boom")))
            assert type(restored) is error_type
            assert restored.message == "boom"

    def test_unknown_names_fall_back_to_exception(self):
        error = deserialize_error({"name": "DOMException", "message": "x"})
        assert type(error) is Exception
        assert error.name == "DOMException"

    def test_fields_are_restored(self):
        record = {"name": "ValueError", "message": "m", "stack": "s", "code": "E1", "status": 500}
        error = deserialize_error(record)
        assert error.stack == "s"
        assert error.code == "E1"
        assert error.status == 500

    def test_hidden_fields_are_not_enumerable(self):
        record = serialize_error(ValueError("boom"))
        record["status"] = 500
        error = deserialize_error(record)
        fields = enumerable_fields(error)
        assert fields == {"status": 500}

    def test_code_is_enumerable(self):
        error = deserialize_error({"message": "m", "code": "E1"})
        assert enumerable_fields(error) == {"code": "E1"}

    def test_cause_is_linked(self):
        record = {
            "name": "RuntimeError",
            "message": "outer",
            "stack": "s",
            "cause": {"name": "KeyError", "message": "inner", "stack": "t"},
        }
        error = deserialize_error(record)
        assert isinstance(error.__cause__, KeyError)
        assert error.__cause__.message == "inner"
        assert error.cause is error.__cause__

    def test_nested_error_like_mappings_become_exceptions(self):
        record = {
            "message": "outer",
            "details": {"name": "TypeError", "message": "in", "stack": "s"},
        }
        error = deserialize_error(record)
        assert isinstance(error.details, TypeError)

    def test_circular_record(self):
        record = {"message": "loop"}
        record["self"] = record
        error = deserialize_error(record)
        assert error.self == CIRCULAR

    def test_max_depth(self):
        error = deserialize_error({"message": "m", "data": {"a": {"b": 1}}}, max_depth=1)
        assert error.data == {}
        assert error.message == "m"

    @pytest.mark.parametrize(
        "value,message",
        [
            ("text", '"text"'),
            (42, "42"),
            (None, "null"),
            ([1, 2], "[1, 2]"),
            ({"no": "message"}, '{"no": "message"}'),
        ],
    )
    def test_non_errors(self, value, message):
        error = deserialize_error(value)
        assert isinstance(error, NonError)
        assert error.message == message
        assert error.name == "NonError"

    def test_non_error_falls_back_to_str(self):
        value = object()
        assert deserialize_error(value).message == str(value)

        loop = []
        loop.append(loop)
        assert deserialize_error(loop).message == str(loop)


class TestHelpers:
    """Test cases for error-like detection and the constructor registry."""

    def test_is_error_like(self):
        class Shaped:
            name = "n"
            message = "m"
            stack = "s"

        assert is_error_like(ValueError())
        assert is_error_like({"name": "n", "message": "m", "stack": "s"})
        assert is_error_like(Shaped())
        assert not is_error_like({"message": "m"})
        assert not is_error_like(["name", "message", "stack"])
        assert not is_error_like("name message stack")
        assert not is_error_like(None)

    def test_registry_contains_builtins(self):
        assert error_constructors["TypeError"] is TypeError
        assert error_constructors["OSError"] is OSError
        assert "ExceptionGroup" not in error_constructors

    def test_registry_fallback(self):
        assert get_error_constructor("ValueError") is ValueError
        assert get_error_constructor("Nope") is Exception
        assert get_error_constructor(None) is Exception


class TestNestingLimits:
    """Test cases for arrays with cycles, depth limits and very deep graphs."""

    def test_cycles_through_lists(self):
        obj = {}
        common = [obj]
        x = [common]
        y = [["test"], common]
        y[0].append(y)
        obj["a"] = {"x": x}
        obj["b"] = {"y": y}

        serialized = serialize_error(obj)

        assert isinstance(serialized["a"]["x"], list)
        assert serialized["a"]["x"][0][0] == CIRCULAR
        assert serialized["b"]["y"][0][0] == "test"
        assert serialized["b"]["y"][1][0] == CIRCULAR
        assert serialized["b"]["y"][0][1] == CIRCULAR

    def test_raised_error_with_cause_and_max_depth(self):
        try:
            try:
                raise KeyError("inner")
            except KeyError as inner:
                raise RuntimeError("outer") from inner
        except RuntimeError as e:
            e.details = {"deep": {"deeper": 1}}
            shallow = serialize_error(e, max_depth=1)
            deeper = serialize_error(e, max_depth=2)

        assert shallow["message"] == "outer"
        assert shallow["details"] == {}
        assert shallow["cause"] == {}

        assert deeper["details"] == {"deep": {}}
        assert deeper["cause"]["name"] == "KeyError"
        assert deeper["cause"]["message"] == "inner"

    @staticmethod
    def _chain(levels):
        node = {"leaf": True}
        for _ in range(levels):
            node = {"c": node}
        return node

    @staticmethod
    def _levels(value):
        count = 0
        while isinstance(value, dict) and "c" in value:
            value = value["c"]
            count += 1
        return count

    def test_very_deep_graph_serializes_with_fallback_depth(self):
        result = serialize_error(self._chain(2000))
        assert isinstance(result, dict)
        assert 0 < self._levels(result) <= 64

    def test_very_deep_record_deserializes_with_fallback_depth(self):
        error = deserialize_error({"message": "deep", "c": self._chain(2000)})
        assert error.message == "deep"
        assert 0 < self._levels(error.c) <= 64

    def test_explicit_max_depth_is_kept_for_deep_graphs(self):
        result = serialize_error(self._chain(2000), max_depth=3)
        assert self._levels(result) == 3
