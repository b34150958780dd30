"""
Schema decorators and the marshalling context.

Example:
    >>> from graphql_marshaller.schema import SchemaContext
    >>> context = SchemaContext()
    >>> schema = context.decorator_of(graphql_schema)
    >>> schema.query_type.get_field_definition("hello").type.name
    'String'
"""

from .behaviors import DataFetcherDecorator, StaticDataFetcher, TypeResolverDecorator
from .context import SchemaContext
from .decorator import Live, SchemaChildDecorator, SchemaDecorator, Serialized
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
    TypeReference,
    TypeReferenceDecorator,
    UnionTypeDecorator,
)

__all__ = [
    "ArgumentDecorator",
    "DataFetcherDecorator",
    "DirectiveDecorator",
    "EnumTypeDecorator",
    "EnumValueDecorator",
    "FieldDefinitionDecorator",
    "InputFieldDecorator",
    "InputObjectTypeDecorator",
    "InterfaceTypeDecorator",
    "ListDecorator",
    "Live",
    "NonNullDecorator",
    "ObjectTypeDecorator",
    "ScalarTypeDecorator",
    "SchemaChildDecorator",
    "SchemaContext",
    "SchemaDecorator",
    "SchemaNodeDecorator",
    "Serialized",
    "StaticDataFetcher",
    "TypeReference",
    "TypeReferenceDecorator",
    "TypeResolverDecorator",
    "UnionTypeDecorator",
]
