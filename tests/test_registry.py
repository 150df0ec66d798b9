from typing import Optional

import pytest

from calendar_mcp.api import registry as registry_module
from calendar_mcp.api.registry import ToolSchema, call_api, get_api_function, register_api
from calendar_mcp.core.errors import ToolValidationError, UnknownToolError


@pytest.fixture
def empty_registry(monkeypatch):
    monkeypatch.setattr(registry_module, "REGISTRY", {})
    return registry_module.REGISTRY


def _schema() -> ToolSchema:
    return ToolSchema(
        required=("query", "mode"),
        optional=("limit", "exact"),
        types={"query": "string", "mode": "string", "limit": "integer", "exact": "boolean"},
        choices={"mode": ("fast", "full")},
    )


class TestToolSchema:
    def test_reports_every_missing_field(self) -> None:
        with pytest.raises(ToolValidationError) as excinfo:
            _schema().validate({"query": ""})
        assert excinfo.value.fields == ("query", "mode")
        assert str(excinfo.value) == "Missing required arguments: query, mode"

    def test_drops_unknown_and_null_arguments(self) -> None:
        cleaned = _schema().validate({"query": "x", "mode": "fast", "limit": None, "extra": 1})
        assert cleaned == {"query": "x", "mode": "fast"}

    def test_rejects_value_outside_choices(self) -> None:
        with pytest.raises(ToolValidationError, match="mode"):
            _schema().validate({"query": "x", "mode": "slow"})

    @pytest.mark.parametrize("value", ["3", 2.5, True])
    def test_integer_type_is_strict(self, value) -> None:
        with pytest.raises(ToolValidationError, match="limit"):
            _schema().validate({"query": "x", "mode": "fast", "limit": value})

    def test_boolean_type_is_strict(self) -> None:
        with pytest.raises(ToolValidationError, match="exact"):
            _schema().validate({"query": "x", "mode": "fast", "exact": "yes"})

    def test_json_schema(self) -> None:
        schema = _schema().as_json_schema()
        assert schema["required"] == ["query", "mode"]
        assert schema["properties"]["mode"] == {"type": "string", "enum": ["fast", "full"]}
        assert schema["properties"]["limit"] == {"type": "integer"}


class TestRegisterApi:
    def test_signature_drives_schema(self, empty_registry) -> None:
        @register_api("demo", description="Demo tool.", category="test", params={"text": "Text to echo"})
        def demo(text: str, times: Optional[int] = None) -> str:
            return text * (times or 1)

        api_function = get_api_function("demo")
        assert api_function.schema.required == ("text",)
        assert api_function.schema.optional == ("times",)
        assert api_function.as_tool() == {
            "name": "demo",
            "description": "Demo tool.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "text": {"type": "string", "description": "Text to echo"},
                    "times": {"type": "integer"},
                },
                "required": ["text"],
            },
        }
        assert call_api("demo", text="ab", times=2.0) == "abab"

    def test_duplicate_names_are_rejected(self, empty_registry) -> None:
        @register_api("demo", description="Demo tool.", category="test")
        def demo() -> None:
            return None

        with pytest.raises(ValueError, match="already registered"):
            register_api("demo", description="Again.", category="test")(demo)

    def test_unknown_name(self, empty_registry) -> None:
        with pytest.raises(UnknownToolError, match="Unknown tool: nope"):
            call_api("nope")


@pytest.mark.parametrize(
    "annotation, expected",
    [(str, "string"), (int, "integer"), (bool, "boolean"), (Optional[int], "integer"), (Optional[bool], "boolean")],
)
def test_json_type_of_tool_annotations(annotation, expected) -> None:
    assert registry_module._json_type(annotation) == expected
