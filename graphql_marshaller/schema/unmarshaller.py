"""
Dispatch from type tags of a marshalled document to decorator classes.

Invariants:
    - A static data fetcher is read back as a data fetcher with a value
    - Any object holding ``__schemas`` is a schema document, whatever its tag
    - A node without a tag is a format error, an unknown tag a type error
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Type

from ..errors import FormatError, UnknownTypeError
from ..props import (
    MARSHALED_TYPE,
    SCHEMAS,
    TAG_ARGUMENT,
    TAG_DATA_FETCHER,
    TAG_DIRECTIVE,
    TAG_ENUM,
    TAG_ENUM_VALUE,
    TAG_FIELD_DEFINITION,
    TAG_INPUT_FIELD,
    TAG_INPUT_OBJECT,
    TAG_INTERFACE,
    TAG_LIST,
    TAG_NON_NULL,
    TAG_OBJECT,
    TAG_SCALAR,
    TAG_SCHEMA,
    TAG_STATIC_DATA_FETCHER,
    TAG_TYPE_REFERENCE,
    TAG_TYPE_RESOLVER,
    TAG_UNION,
)
from .behaviors import DataFetcherDecorator, TypeResolverDecorator
from .decorator import SchemaDecorator, Serialized, construct
from .fields import ArgumentDecorator, DirectiveDecorator, FieldDefinitionDecorator
from .schema import SchemaNodeDecorator
from .types import (
    EnumTypeDecorator,
    EnumValueDecorator,
    InputFieldDecorator,
    InputObjectTypeDecorator,
    InterfaceTypeDecorator,
    ListDecorator,
    NonNullDecorator,
    ObjectTypeDecorator,
    ScalarTypeDecorator,
    TypeReferenceDecorator,
    UnionTypeDecorator,
)

if TYPE_CHECKING:
    from .context import SchemaContext

CONSTRUCTORS: Dict[str, Type[SchemaDecorator]] = {
    TAG_ARGUMENT: ArgumentDecorator,
    TAG_DATA_FETCHER: DataFetcherDecorator,
    TAG_DIRECTIVE: DirectiveDecorator,
    TAG_ENUM: EnumTypeDecorator,
    TAG_ENUM_VALUE: EnumValueDecorator,
    TAG_FIELD_DEFINITION: FieldDefinitionDecorator,
    TAG_INPUT_FIELD: InputFieldDecorator,
    TAG_INPUT_OBJECT: InputObjectTypeDecorator,
    TAG_INTERFACE: InterfaceTypeDecorator,
    TAG_LIST: ListDecorator,
    TAG_NON_NULL: NonNullDecorator,
    TAG_OBJECT: ObjectTypeDecorator,
    TAG_SCALAR: ScalarTypeDecorator,
    TAG_SCHEMA: SchemaNodeDecorator,
    TAG_TYPE_REFERENCE: TypeReferenceDecorator,
    TAG_TYPE_RESOLVER: TypeResolverDecorator,
    TAG_UNION: UnionTypeDecorator,
}


def normalize_tag(json: Dict[str, Any]) -> str:
    """Return the constructor tag of a JSON node.

    Raises:
        FormatError: If the node has no tag and is not a schema document
    """
    if SCHEMAS in json:
        return TAG_SCHEMA
    tag = json.get(MARSHALED_TYPE)
    if tag == TAG_STATIC_DATA_FETCHER:
        return TAG_DATA_FETCHER
    if tag == TAG_SCHEMA:
        raise FormatError(
            "A schema entry cannot be read outside of its document", tag=tag
        )
    if not isinstance(tag, str):
        raise FormatError(
            "Failed to unmarshall, incorrect format or missing marshaling data",
            tag=None if tag is None else str(tag),
        )
    return tag


def unmarshall_node(
    json: Any,
    context: SchemaContext,
    parent: Optional[SchemaDecorator] = None,
) -> SchemaDecorator:
    """Decorate a JSON node that the context has not seen yet.

    Raises:
        FormatError: If the node is not an object or carries no tag
        UnknownTypeError: If no constructor is registered for the tag
    """
    if not isinstance(json, dict):
        raise FormatError(f"Expected a JSON object, got {type(json).__name__}")
    tag = normalize_tag(json)
    decorator_cls = CONSTRUCTORS.get(tag)
    if decorator_cls is None:
        raise UnknownTypeError(f"No constructor registered for type tag '{tag}'", tag=tag)
    return construct(decorator_cls, Serialized(json), context, parent)
