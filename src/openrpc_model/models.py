"""Pydantic models for the OpenRPC document format.

This is the single source of truth for the shape of an OpenRPC document
(https://spec.open-rpc.org/). Every entity is a frozen model: it is built
once, during decoding, and never reassigned afterwards. The models fall into
five groups:

**Root and metadata**:
    :class:`Document`, :class:`Info`, :class:`Contact`, :class:`License`,
    :class:`ExternalDocumentation`, :class:`ServerObject`,
    :class:`ServerVariableObject`.

**Methods and parameters**:
    :class:`Method`, :class:`ContentDescriptor`, :class:`Tag`,
    :class:`ErrorObject`, :class:`ParamStructure`, :class:`LinkObject`.

**Examples**:
    :class:`ExampleObject` with its two variants :class:`InlineExample` and
    :class:`ExternalExample`, selected by :func:`example_variant`, and
    :class:`ExamplePairingObject`.

**Registry**:
    :class:`Components`.

Decoding rules shared by every model:

* Scalars are strict (``StrictStr``, ``StrictInt``, ``StrictBool``): a
  string is never coerced into an integer and ``1`` is never a boolean.
* Unknown keys are ignored so that newer documents still decode.
* Wire names that differ from the Python attribute name (``termsOfService``,
  ``externalDocs``, ``paramStructure``, ...) are declared as aliases. Only
  the wire name is accepted on input; ``model_dump(by_alias=True)`` yields
  it back.

``$ref`` objects are not resolved: a reference in place of, say, a content
descriptor is decoded exactly like an inline content descriptor, and fails
for lack of the required fields.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, ClassVar, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    Tag as UnionTag,
)

RuntimeExpression = StrictStr
"""A URL template evaluated by the API consumer. Opaque to this model."""

JsonSchema = dict[str, Any]
"""A JSON Schema object. Its content is not validated."""

DEFAULT_SERVER_URL = "localhost"
"""URL of the implicit server used when a document declares no servers."""


class OpenRpcModel(BaseModel):
    """Base class for every OpenRPC entity."""

    model_config = ConfigDict(frozen=True, extra="ignore")


# --- Leaves ---


class ExternalDocumentation(OpenRpcModel):
    """Additional external documentation."""

    description: Optional[StrictStr] = None
    url: StrictStr


class Contact(OpenRpcModel):
    """Contact information for the exposed API."""

    name: Optional[StrictStr] = None
    url: Optional[StrictStr] = None
    email: Optional[StrictStr] = None


class License(OpenRpcModel):
    """License information for the exposed API."""

    name: StrictStr
    url: Optional[StrictStr] = None


class ServerVariableObject(OpenRpcModel):
    """A variable for server URL template substitution.

    ``default`` is the value sent when the caller supplies no alternative;
    ``enum`` optionally restricts the allowed substitutions.
    """

    enum: list[StrictStr] = Field(default_factory=list)
    default: StrictStr
    description: Optional[StrictStr] = None


class Tag(OpenRpcModel):
    """A tag used for logical grouping of methods."""

    name: StrictStr
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    external_docs: Optional[ExternalDocumentation] = Field(
        default=None, alias="externalDocs"
    )


class ErrorObject(OpenRpcModel):
    """An application-defined error that a method may return.

    ``code`` is a 16-bit signed integer. Codes from -32768 to -32000
    inclusive are reserved for pre-defined JSON-RPC errors; they are accepted
    here and flagged by :attr:`is_reserved`.

    ``data`` is free-form and takes no part in equality: two errors with the
    same code and message compare equal whatever their payload.
    """

    RESERVED_RANGE: ClassVar[tuple[int, int]] = (-32768, -32000)

    code: StrictInt = Field(ge=-32768, le=32767)
    message: StrictStr
    data: Any = None

    @property
    def is_reserved(self) -> bool:
        low, high = self.RESERVED_RANGE
        return low <= self.code <= high

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorObject):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))


class ParamStructure(str, enum.Enum):
    """How a caller must shape the ``params`` of a JSON-RPC request.

    ``BY_NAME`` requires an object keyed by content descriptor names,
    ``BY_POSITION`` requires an array, ``EITHER`` accepts both.
    """

    BY_NAME = "by-name"
    BY_POSITION = "by-position"
    EITHER = "either"


class ServerObject(OpenRpcModel):
    """Connectivity information for a target server.

    ``url`` may contain ``{variable}`` placeholders substituted from
    :attr:`variables`; it is kept verbatim.
    """

    name: StrictStr
    url: RuntimeExpression
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    variables: dict[str, ServerVariableObject] = Field(default_factory=dict)


class LinkObject(OpenRpcModel):
    """A possible design-time link from a method result to another method.

    Every field is optional; ``params`` values are either literal JSON values
    or runtime-expression strings.
    """

    name: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    method: Optional[StrictStr] = None
    params: dict[str, Any] = Field(default_factory=dict)
    server: Optional[ServerObject] = None


# --- Examples ---


class ExampleObject(OpenRpcModel):
    """Fields shared by both example variants."""

    variant: ClassVar[str]

    name: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None


class InlineExample(ExampleObject):
    """An example embedded as a literal JSON value (``null`` included)."""

    variant: ClassVar[str] = "inline"

    value: Any


class ExternalExample(ExampleObject):
    """An example stored elsewhere and referenced by URL."""

    variant: ClassVar[str] = "external"

    external_value: StrictStr = Field(alias="externalValue")


def example_variant(data: Any) -> Optional[str]:
    """Select the example variant for *data* by key presence.

    ``externalValue`` wins over ``value`` when a producer supplies both.
    Anything that is not a JSON object is routed to the inline variant so
    that the failure is reported as a type mismatch. Returns ``None`` when
    the object carries neither key.
    """
    if isinstance(data, ExampleObject):
        return data.variant
    if not isinstance(data, dict):
        return InlineExample.variant
    if "externalValue" in data:
        return ExternalExample.variant
    if "value" in data:
        return InlineExample.variant
    return None


EXAMPLE_VARIANT_ERROR = "example_variant_missing"

AnyExample = Annotated[
    Union[
        Annotated[InlineExample, UnionTag(InlineExample.variant)],
        Annotated[ExternalExample, UnionTag(ExternalExample.variant)],
    ],
    Discriminator(
        example_variant,
        custom_error_type=EXAMPLE_VARIANT_ERROR,
        custom_error_message="Example object has neither `value` nor `externalValue`",
    ),
]


class ExamplePairingObject(OpenRpcModel):
    """A set of example params and the result they produce.

    A pairing without ``result`` illustrates a notification.
    """

    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    params: list[AnyExample]
    result: Optional[AnyExample] = None


# --- Methods ---


class ContentDescriptor(OpenRpcModel):
    """A named, schema-bearing description of a parameter or result.

    The schema is exposed as ``schema_`` because ``schema`` is reserved on
    Pydantic models; its wire name is still ``schema``.
    """

    name: StrictStr
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    required: StrictBool = False
    schema_: JsonSchema = Field(alias="schema")
    deprecated: StrictBool = False


class Method(OpenRpcModel):
    """The interface of a single JSON-RPC method.

    ``name`` must be unique within a document and ``params`` must list
    required parameters before optional ones. Neither rule is checked here.
    """

    name: StrictStr
    tags: list[Tag] = Field(default_factory=list)
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    external_docs: Optional[ExternalDocumentation] = Field(
        default=None, alias="externalDocs"
    )
    params: list[ContentDescriptor]
    result: Optional[ContentDescriptor] = None
    deprecated: StrictBool = False
    servers: list[ServerObject] = Field(default_factory=list)
    errors: list[ErrorObject] = Field(default_factory=list)
    links: list[LinkObject] = Field(default_factory=list)
    param_structure: ParamStructure = Field(
        default=ParamStructure.EITHER, alias="paramStructure"
    )
    examples: list[ExamplePairingObject] = Field(default_factory=list)

    @property
    def is_notification(self) -> bool:
        """True when the method declares no result and may only be notified."""
        return self.result is None


# --- Registry ---


class Components(OpenRpcModel):
    """Named pools of reusable entities, keyed by the names used in ``$ref``.

    Pools are independent: the same key may appear in several of them.
    """

    content_descriptors: dict[str, ContentDescriptor] = Field(
        default_factory=dict, alias="contentDescriptors"
    )
    schemas: dict[str, JsonSchema] = Field(default_factory=dict)
    examples: dict[str, AnyExample] = Field(default_factory=dict)
    links: dict[str, LinkObject] = Field(default_factory=dict)
    errors: dict[str, ErrorObject] = Field(default_factory=dict)
    example_pairing_objects: dict[str, ExamplePairingObject] = Field(
        default_factory=dict, alias="examplePairingObjects"
    )
    tags: dict[str, Tag] = Field(default_factory=dict)

    def pools(self) -> dict[str, dict[str, Any]]:
        """Return every pool keyed by its wire name, in declaration order."""
        return {
            (field.alias or name): getattr(self, name)
            for name, field in type(self).model_fields.items()
        }

    def is_empty(self) -> bool:
        return not any(self.pools().values())


# --- Root ---


class Info(OpenRpcModel):
    """Metadata about the API."""

    title: StrictStr
    description: Optional[StrictStr] = None
    terms_of_service: Optional[StrictStr] = Field(
        default=None, alias="termsOfService"
    )
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: StrictStr


class Document(OpenRpcModel):
    """A complete OpenRPC document.

    ``openrpc`` is the version of the OpenRPC format the document uses, not
    the version of the described API (that is ``info.version``).

    An absent or empty ``servers`` list means the API is served from
    ``localhost``. The list is kept as written; :meth:`effective_servers`
    materialises the implicit server.

    See Also:
        :func:`openrpc_model.parser.parse`: Decode a document from JSON text.
    """

    openrpc: StrictStr
    info: Info
    servers: list[ServerObject] = Field(default_factory=list)
    methods: list[Method]
    components: Components = Field(default_factory=Components)
    external_docs: Optional[ExternalDocumentation] = Field(
        default=None, alias="externalDocs"
    )

    def effective_servers(self) -> list[ServerObject]:
        """Return the declared servers, or the implicit ``localhost`` server."""
        if self.servers:
            return list(self.servers)
        return [ServerObject(name="default", url=DEFAULT_SERVER_URL)]

    def method_names(self) -> list[str]:
        return [method.name for method in self.methods]

    def get_method(self, name: str) -> Optional[Method]:
        """Return the first method called *name*, or ``None``."""
        for method in self.methods:
            if method.name == name:
                return method
        return None
