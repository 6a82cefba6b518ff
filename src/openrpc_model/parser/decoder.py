"""Decode OpenRPC documents from JSON text into :class:`~openrpc_model.models.Document`.

Decoding is a single pass: the text is parsed with :mod:`json`, and the
resulting value is validated against the :mod:`openrpc_model.models` tree by
Pydantic. Defaults, aliases, strict scalar checks and example-variant
selection all happen inside that validation.

When validation fails, the first Pydantic error is translated into one of the
:class:`~openrpc_model.exceptions.DecodeError` subclasses. Its ``loc`` tuple
is walked against the model annotations to recover the entity that owns the
failing field, so that ``{"methods": [{"params": [{}]}]}`` is reported as a
missing ``name`` in ``ContentDescriptor`` at ``methods[0].params[0].name``
rather than as a bare Pydantic message.

The two public functions are:

* :func:`parse` -- decode JSON text (``str`` or UTF-8 ``bytes``).
* :func:`parse_obj` -- decode an already-parsed JSON value.
"""

from __future__ import annotations

import json
import logging
import types as pytypes
from typing import Annotated, Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel, Tag as UnionTag, ValidationError

from openrpc_model.exceptions import (
    DecodeError,
    InvalidEnumValueError,
    MalformedInputError,
    MissingFieldError,
    TypeMismatchError,
    UndiscriminatedVariantError,
)
from openrpc_model.models import EXAMPLE_VARIANT_ERROR, Document, ParamStructure

logger = logging.getLogger(__name__)

# Pydantic error type -> JSON kind the field expected
_EXPECTED_KINDS = {
    "string_type": "string",
    "int_type": "integer",
    "bool_type": "boolean",
    "list_type": "array",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
}

# Pydantic bound error type -> (operator, ctx key)
_BOUND_ERRORS = {
    "greater_than_equal": (">=", "ge"),
    "less_than_equal": ("<=", "le"),
}


def parse(text: str | bytes) -> Document:
    """Decode an OpenRPC document from JSON text.

    Args:
        text: The document as a ``str`` or as UTF-8 encoded ``bytes``.

    Returns:
        The decoded :class:`~openrpc_model.models.Document`.

    Raises:
        MalformedInputError: If *text* is not valid JSON.
        DecodeError: If the JSON value does not match the OpenRPC model.
            The concrete subclass names the failure kind.

    Example::

        doc = parse('{"openrpc": "1.2.6", "info": {"title": "T", "version": "1"}, "methods": []}')
        assert doc.info.title == "T"
    """
    try:
        data = json.loads(
            text,
            parse_constant=_reject_constant,
            object_pairs_hook=_reject_duplicate_keys,
        )
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"Invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"Input is not valid UTF-8: {exc}") from exc
    except RecursionError as exc:
        raise MalformedInputError("Invalid JSON: input nesting too deep") from exc
    return parse_obj(data)


def parse_obj(data: Any) -> Document:
    """Decode an OpenRPC document from an already-parsed JSON value.

    Args:
        data: The value produced by a JSON (or YAML) parser.

    Returns:
        The decoded :class:`~openrpc_model.models.Document`.

    Raises:
        DecodeError: If *data* does not match the OpenRPC model.
    """
    if not isinstance(data, dict):
        raise TypeMismatchError((), "Document", ("Document",), "object", json_kind(data))

    try:
        document = Document.model_validate(data)
    except ValidationError as exc:
        raise _translate(exc) from exc
    except RecursionError as exc:
        raise MalformedInputError("Input nesting too deep") from exc

    logger.debug(
        "Decoded OpenRPC %s document %r with %d method(s)",
        document.openrpc,
        document.info.title,
        len(document.methods),
    )
    return document


def _reject_constant(name: str) -> Any:
    """Refuse ``NaN``, ``Infinity`` and ``-Infinity``, which Python's parser accepts."""
    raise MalformedInputError(f"Invalid JSON: {name} is not a JSON value")


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Build a JSON object, refusing a key that appears twice in it."""
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise MalformedInputError(f"Invalid JSON: duplicate key {key!r}")
        obj[key] = value
    return obj


def json_kind(value: Any) -> str:
    """Name the JSON kind of a parsed value (``object``, ``array``, ``null``, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _translate(exc: ValidationError) -> DecodeError:
    """Convert the first error of a Pydantic ``ValidationError`` into a :class:`DecodeError`."""
    err = exc.errors(include_url=False)[0]
    error_type = err["type"]
    path, type_names = _walk_location(err["loc"])
    owner = type_names[-1]
    value = err.get("input")

    if error_type == "missing":
        return MissingFieldError(path, owner, type_names)

    if error_type == EXAMPLE_VARIANT_ERROR:
        return UndiscriminatedVariantError(path, type_names + ("ExampleObject",))

    if error_type == "enum":
        if not isinstance(value, str):
            return TypeMismatchError(path, owner, type_names, "string", json_kind(value))
        return InvalidEnumValueError(
            path, owner, type_names, value, [member.value for member in ParamStructure]
        )

    if error_type in _BOUND_ERRORS:
        op, key = _BOUND_ERRORS[error_type]
        expected = f"integer {op} {err['ctx'][key]}"
        return TypeMismatchError(path, owner, type_names, expected, str(value))

    expected = _EXPECTED_KINDS.get(error_type)
    if expected is not None:
        return TypeMismatchError(path, owner, type_names, expected, json_kind(value))

    return DecodeError(err["msg"], path=path, type_name=owner, types=type_names)


def _walk_location(
    loc: tuple[str | int, ...],
) -> tuple[tuple[str | int, ...], tuple[str, ...]]:
    """Follow a Pydantic error location through the model annotations.

    Returns the location with union tags removed (so it matches the keys and
    indices of the input document) together with the names of the models
    visited, starting at ``Document``.
    """
    current: Any = Document
    path: list[str | int] = []
    visited: list[str] = [Document.__name__]

    for item in loc:
        current = _unwrap(current)

        if isinstance(current, type) and issubclass(current, BaseModel):
            if current.__name__ != visited[-1]:
                visited.append(current.__name__)
            path.append(item)
            current = _field_annotation(current, item)
            continue

        origin = get_origin(current)
        if origin is list:
            path.append(item)
            current = get_args(current)[0]
        elif origin is dict:
            path.append(item)
            current = get_args(current)[1]
        elif _is_union(current):
            # Tagged union members appear in the location as their tag.
            current = _union_member(current, item)
        else:
            path.append(item)
            current = None

    return tuple(path), tuple(visited)


def _unwrap(annotation: Any) -> Any:
    """Strip ``Optional`` and non-union ``Annotated`` wrappers."""
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            inner = get_args(annotation)[0]
            if _is_union(inner):
                return inner
            annotation = inner
        elif _is_union(annotation):
            members = [a for a in get_args(annotation) if a is not type(None)]
            if len(members) != 1:
                return annotation
            annotation = members[0]
        else:
            return annotation


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is pytypes.UnionType


def _union_member(annotation: Any, tag: Any) -> Any:
    """Return the member of a tagged union registered under *tag*."""
    for member in get_args(annotation):
        if get_origin(member) is Annotated:
            for meta in get_args(member)[1:]:
                if isinstance(meta, UnionTag) and meta.tag == tag:
                    return get_args(member)[0]
    return None


def _field_annotation(model: type[BaseModel], key: Any) -> Optional[Any]:
    """Return the annotation of the field of *model* whose wire name is *key*."""
    for name, field in model.model_fields.items():
        if (field.alias or name) == key:
            return field.annotation
    return None
