from __future__ import annotations

import inspect
import types
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union, get_args, get_origin

from ..core.errors import ToolValidationError, UnknownToolError

JsonSchema = Dict[str, Any]

_JSON_TYPES = {str: "string", int: "integer", bool: "boolean"}


def _json_type(annotation: Any) -> str:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        annotation = args[0] if args else str
    return _JSON_TYPES.get(annotation, "string")


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _coerce(name: str, value: Any, json_type: str) -> Any:
    if json_type == "string" and isinstance(value, str):
        return value
    if json_type == "boolean" and isinstance(value, bool):
        return value
    if json_type == "integer" and not isinstance(value, bool):
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    raise ToolValidationError.invalid(name, f"expected {json_type}, got {type(value).__name__}")


@dataclass(frozen=True)
class ToolSchema:
    """Declarative argument contract for a single tool."""

    required: Tuple[str, ...]
    optional: Tuple[str, ...]
    types: Mapping[str, str]
    choices: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    descriptions: Mapping[str, str] = field(default_factory=dict)

    @property
    def parameters(self) -> Tuple[str, ...]:
        return self.required + self.optional

    def as_json_schema(self) -> JsonSchema:
        properties: JsonSchema = {}
        for name in self.parameters:
            prop: JsonSchema = {"type": self.types[name]}
            if name in self.descriptions:
                prop["description"] = self.descriptions[name]
            if name in self.choices:
                prop["enum"] = list(self.choices[name])
            properties[name] = prop
        return {"type": "object", "properties": properties, "required": list(self.required)}

    def validate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Check ``arguments`` against the contract and return call kwargs.

        Missing required fields are all reported together. Unknown names are
        dropped.
        """

        missing = [name for name in self.required if _is_missing(arguments.get(name))]
        if missing:
            raise ToolValidationError.missing(missing)

        cleaned: Dict[str, Any] = {}
        for name in self.parameters:
            value = arguments.get(name)
            if value is None:
                continue
            value = _coerce(name, value, self.types[name])
            allowed = self.choices.get(name)
            if allowed is not None and value not in allowed:
                raise ToolValidationError.invalid(name, f"{value!r} is not one of {', '.join(allowed)}")
            cleaned[name] = value
        return cleaned


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    tags: tuple[str, ...]
    schema: ToolSchema

    @property
    def parameter_schema(self) -> JsonSchema:
        return self.schema.as_json_schema()

    def as_tool(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameter_schema,
        }


def _build_schema(
    func: Callable[..., Any],
    choices: Optional[Mapping[str, Iterable[str]]],
    params: Optional[Mapping[str, str]],
) -> ToolSchema:
    signature = inspect.signature(func, eval_str=True)
    required: List[str] = []
    optional: List[str] = []
    types_by_name: Dict[str, str] = {}
    for param in signature.parameters.values():
        types_by_name[param.name] = _json_type(param.annotation)
        if param.default is inspect.Parameter.empty:
            required.append(param.name)
        else:
            optional.append(param.name)
    return ToolSchema(
        required=tuple(required),
        optional=tuple(optional),
        types=types_by_name,
        choices={name: tuple(values) for name, values in (choices or {}).items()},
        descriptions=dict(params or {}),
    )


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(
    name: str,
    *,
    description: str,
    category: str,
    tags: Optional[Iterable[str]] = None,
    choices: Optional[Mapping[str, Iterable[str]]] = None,
    params: Optional[Mapping[str, str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags or ()),
            schema=_build_schema(func, choices, params),
        )
        return func

    return decorator


def get_api_functions() -> List[ApiFunction]:
    return list(REGISTRY.values())


def get_api_function(name: str) -> ApiFunction:
    try:
        return REGISTRY[name]
    except KeyError as exc:
        raise UnknownToolError(name) from exc


def call_api(name: str, /, **kwargs: Any) -> Any:
    api_function = get_api_function(name)
    return api_function.func(**api_function.schema.validate(kwargs))
