"""Typed decoding and encoding of JSON values with pydantic.

Typed destinations (dataclasses, pydantic models, plain and generic types)
are validated in strict JSON mode:
    - a JSON number binds to float, a JSON boolean never binds to int/float
    - a JSON string never binds to a number
    - unknown keys are ignored, absent fields take their declared defaults

JSON names come from ``Field(alias=...)``. Fields with ``Field(exclude=True)``
stay off the wire when encoding.
"""

from __future__ import annotations

import dataclasses
import functools
import json
import typing
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from restful.errors import DecodeError


@functools.lru_cache(maxsize=256)
def adapter_for(tp: Any) -> TypeAdapter:
    """Return a cached TypeAdapter for ``tp``."""
    return TypeAdapter(tp)


def validate(target: Any, raw: str | bytes) -> Any:
    """Validate a JSON document against a type in strict mode.

    Raises:
        DecodeError: The document does not fit ``target``. The pydantic
            ValidationError is chained as the cause.
    """
    try:
        return adapter_for(target).validate_json(raw, strict=True)
    except ValidationError as exc:
        raise DecodeError(
            f"cannot decode JSON into {_type_name(target)}: {_summarize(exc)}"
        ) from exc


def bind(value: Any, target: Any = None, *, raw: str | bytes | None = None) -> Any:
    """Bind a decoded JSON value to a destination.

    Args:
        value: Result of ``json.loads``.
        target: None, a type, a dataclass or model instance, a dict or a list.
        raw: The JSON text ``value`` was decoded from, when available.

    Returns:
        The bound value. Instance targets are populated in place and
        returned.

    Raises:
        DecodeError: The JSON value does not fit the destination.
        TypeError: The destination is not something a JSON value can bind to.
    """
    if target is None:
        return value

    if isinstance(target, dict):
        target.update(_require_object(value, "dict"))
        return target
    if isinstance(target, list):
        if not isinstance(value, list):
            raise DecodeError(f"cannot decode JSON {_kind(value)} into list")
        target[:] = value
        return target
    if _is_record(target):
        return _assign(value, target)

    if isinstance(target, type) or typing.get_origin(target) is not None:
        return validate(target, raw if raw is not None else json.dumps(value))

    raise TypeError(f"unsupported decode target: {type(target).__name__}")


def to_jsonable(obj: Any) -> Any:
    """``json.dumps`` default hook: dataclasses and models become JSON objects."""
    if _is_record(obj):
        return adapter_for(type(obj)).dump_python(obj, mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _assign(value: Any, instance: Any) -> Any:
    cls = type(instance)
    if _is_frozen(instance):
        raise DecodeError(f"cannot decode into frozen {cls.__name__} instance")
    obj = _require_object(value, cls.__name__)

    # Current values overlaid with the input, validated as a whole
    current = adapter_for(cls).dump_python(instance, mode="json", by_alias=True)
    fresh = validate(cls, json.dumps({**current, **obj}))
    for name in _field_names(cls):
        setattr(instance, name, getattr(fresh, name))
    return instance


def _is_record(obj: Any) -> bool:
    if isinstance(obj, type):
        return False
    return isinstance(obj, BaseModel) or dataclasses.is_dataclass(obj)


def _is_frozen(obj: Any) -> bool:
    if isinstance(obj, BaseModel):
        return bool(type(obj).model_config.get("frozen"))
    return type(obj).__dataclass_params__.frozen


def _field_names(cls: type) -> list[str]:
    if issubclass(cls, BaseModel):
        return list(cls.model_fields)
    return [f.name for f in dataclasses.fields(cls)]


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


def _require_object(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"cannot decode JSON {_kind(value)} into {name}")
    return value


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
