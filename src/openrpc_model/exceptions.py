"""Exception hierarchy for openrpc-model.

All exceptions inherit from :class:`OpenRpcModelError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`openrpc_model.exit_codes`. The CLI entry point catches
``OpenRpcModelError`` and exits with the appropriate code.

Subclass hierarchy::

    OpenRpcModelError (exit 1)
    +-- InvalidUsageError               (exit 2)
    +-- SourceError                     (exit 1)
    |   +-- DocumentNotFoundError       (exit 4)
    |   +-- ConnectionError_            (exit 6)
    +-- DecodeError                     (exit 7)
        +-- MalformedInputError
        +-- MissingFieldError
        +-- TypeMismatchError
        +-- InvalidEnumValueError
        +-- UndiscriminatedVariantError

Every :class:`DecodeError` identifies where in the document the failure
happened: ``path`` is the raw key/index sequence from the root object,
``type_name`` is the entity that owns the failing field and ``types`` is the
chain of entity names walked from :class:`~openrpc_model.models.Document`.
"""

from __future__ import annotations

from typing import Any, Sequence

from openrpc_model.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_DOCUMENT,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
)


class OpenRpcModelError(Exception):
    """Base exception for all openrpc-model errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OpenRpcModelError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class SourceError(OpenRpcModelError):
    """Raised when a document source cannot be read (empty file, unreadable stdin)."""

    exit_code = EXIT_GENERIC_FAILURE


class DocumentNotFoundError(SourceError):
    """Raised when a local document path does not exist."""

    exit_code = EXIT_NOT_FOUND


class ConnectionError_(SourceError):
    """Raised when a remote document cannot be fetched (HTTP error, timeout, DNS).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


def format_location(path: Sequence[str | int]) -> str:
    """Render a key/index path as ``methods[0].params[1].schema``.

    The empty path renders as ``<root>``.
    """
    if not path:
        return "<root>"
    parts: list[str] = []
    for item in path:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)


class DecodeError(OpenRpcModelError):
    """Raised when a document does not decode into the OpenRPC model.

    Args:
        message: Description of the failure, without location.
        path: Keys and list indices leading from the root object to the
            failing value.
        type_name: Name of the entity owning the failing field.
        types: Entity names walked from the root, ending with ``type_name``.
    """

    exit_code = EXIT_INVALID_DOCUMENT

    def __init__(
        self,
        message: str,
        path: Sequence[str | int] = (),
        type_name: str = "Document",
        types: Sequence[str] = ("Document",),
    ):
        self.path = tuple(path)
        self.type_name = type_name
        self.types = tuple(types)
        self.reason = message
        super().__init__(f"{message} (at {self.location})")

    @property
    def location(self) -> str:
        """Dotted form of :attr:`path`."""
        return format_location(self.path)

    @property
    def field(self) -> str | None:
        """The wire name of the failing field, or ``None`` for list items and the root."""
        if self.path and isinstance(self.path[-1], str):
            return self.path[-1]
        return None


class MalformedInputError(DecodeError):
    """Raised when the input text is not valid JSON (or YAML) at all."""

    def __init__(self, message: str):
        super().__init__(message)


class MissingFieldError(DecodeError):
    """Raised when a required field is absent."""

    def __init__(self, path: Sequence[str | int], type_name: str, types: Sequence[str]):
        field = str(path[-1]) if path else "<root>"
        super().__init__(
            f"missing field `{field}` in {type_name}",
            path=path,
            type_name=type_name,
            types=types,
        )


class TypeMismatchError(DecodeError):
    """Raised when a field holds the wrong JSON kind (e.g. a string instead of an object)."""

    def __init__(
        self,
        path: Sequence[str | int],
        type_name: str,
        types: Sequence[str],
        expected: str,
        actual: str,
    ):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"invalid type in {type_name}: expected {expected}, got {actual}",
            path=path,
            type_name=type_name,
            types=types,
        )


class InvalidEnumValueError(DecodeError):
    """Raised when an enumerated field holds a token outside its vocabulary."""

    def __init__(
        self,
        path: Sequence[str | int],
        type_name: str,
        types: Sequence[str],
        value: Any,
        allowed: Sequence[str],
    ):
        self.value = value
        self.allowed = tuple(allowed)
        choices = ", ".join(f"`{a}`" for a in self.allowed)
        super().__init__(
            f"unknown variant {value!r} in {type_name}, expected one of {choices}",
            path=path,
            type_name=type_name,
            types=types,
        )


class UndiscriminatedVariantError(DecodeError):
    """Raised when an example object carries neither ``value`` nor ``externalValue``."""

    def __init__(self, path: Sequence[str | int], types: Sequence[str]):
        super().__init__(
            "example object has neither `value` nor `externalValue`",
            path=path,
            type_name="ExampleObject",
            types=types,
        )
