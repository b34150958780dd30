"""
Dispatch from live graphql-core objects to decorator classes.

The table is keyed by class and walked along the MRO of the object being
decorated, so subclasses of graphql-core types are handled by the decorator
of their closest registered base. Callables have no class of their own in
the table: a callable owned by a field is a data fetcher, one owned by an
interface or union is a type resolver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Type

from graphql import (
    GraphQLArgument,
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
)

from ..errors import UnknownTypeError
from .behaviors import DataFetcherDecorator, StaticDataFetcher, TypeResolverDecorator
from .decorator import Live, SchemaDecorator, construct
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

if TYPE_CHECKING:
    from .context import SchemaContext

DECORATORS: Dict[type, Type[SchemaDecorator]] = {
    GraphQLSchema: SchemaNodeDecorator,
    GraphQLScalarType: ScalarTypeDecorator,
    GraphQLObjectType: ObjectTypeDecorator,
    GraphQLInterfaceType: InterfaceTypeDecorator,
    GraphQLUnionType: UnionTypeDecorator,
    GraphQLEnumType: EnumTypeDecorator,
    GraphQLEnumValue: EnumValueDecorator,
    GraphQLInputObjectType: InputObjectTypeDecorator,
    GraphQLInputField: InputFieldDecorator,
    GraphQLField: FieldDefinitionDecorator,
    GraphQLArgument: ArgumentDecorator,
    GraphQLDirective: DirectiveDecorator,
    GraphQLList: ListDecorator,
    GraphQLNonNull: NonNullDecorator,
    TypeReference: TypeReferenceDecorator,
    StaticDataFetcher: DataFetcherDecorator,
}


def decorator_class(source: Any, parent: Optional[SchemaDecorator] = None) -> Type[SchemaDecorator]:
    """Pick the decorator class for a live object.

    Raises:
        UnknownTypeError: If the object is not a supported schema object
    """
    for cls in type(source).__mro__:
        decorator_cls = DECORATORS.get(cls)
        if decorator_cls is not None:
            return decorator_cls
    if callable(source):
        if isinstance(parent, FieldDefinitionDecorator):
            return DataFetcherDecorator
        if isinstance(parent, (InterfaceTypeDecorator, UnionTypeDecorator)):
            return TypeResolverDecorator
    class_name = f"{type(source).__module__}.{type(source).__qualname__}"
    raise UnknownTypeError(
        f"Failed to decorate GraphQL object. Class '{class_name}' is not a known GraphQL schema class",
        tag=class_name,
    )


def create_decorator(
    source: Any,
    context: SchemaContext,
    parent: Optional[SchemaDecorator] = None,
    name: Optional[str] = None,
) -> SchemaDecorator:
    """Decorate a live object that the context has not seen yet."""
    if source is None:
        raise ValueError("GraphQL object cannot be None")
    return construct(decorator_class(source, parent), Live(source), context, parent, name)
