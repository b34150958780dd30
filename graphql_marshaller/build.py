"""
Rebuild an executable ``GraphQLSchema`` from a schema decorator.

Live decorators give back the object they wrap. Serialized decorators are
turned into fresh graphql-core types. Field and interface thunks defer the
lookup of named types, so cycles between types are rebuilt without
recursion problems.

Behaviour comes from, in order:
    - the ``data_fetchers`` / ``type_resolvers`` overrides, keyed by the
      placeholder id written in the document
    - the static value of a static data fetcher
    - graphql-core's defaults
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from graphql import (
    DirectiveLocation,
    GraphQLArgument,
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    specified_directives,
    specified_scalar_types,
)

from .errors import UnknownTypeError
from .props import (
    TAG_ENUM,
    TAG_INPUT_OBJECT,
    TAG_INTERFACE,
    TAG_LIST,
    TAG_NON_NULL,
    TAG_OBJECT,
    TAG_SCALAR,
    TAG_TYPE_REFERENCE,
    TAG_UNION,
)
from .schema.behaviors import StaticDataFetcher

logger = logging.getLogger(__name__)

SPECIFIED_SCALARS = dict(specified_scalar_types)
SPECIFIED_DIRECTIVES = {directive.name: directive for directive in specified_directives}


class SchemaBuilder:
    """Builds graphql-core types from decorators, one instance per schema."""

    def __init__(
        self,
        data_fetchers: Optional[Mapping[str, Callable[..., Any]]] = None,
        type_resolvers: Optional[Mapping[str, Callable[..., Any]]] = None,
    ) -> None:
        self._data_fetchers = dict(data_fetchers or {})
        self._type_resolvers = dict(type_resolvers or {})
        self._types: Dict[str, GraphQLNamedType] = {}

    def build(self, schema: Any) -> GraphQLSchema:
        if schema.is_live:
            return schema.original
        query = self.named_type(schema.query_type)
        mutation = self.named_type(schema.mutation_type) if schema.is_supporting_mutations else None
        subscription = schema.subscription_type
        types = [
            self.named_type(type_)
            for type_ in schema.all_types
            if not type_.name.startswith("__")
        ]
        directives = [self.directive(directive) for directive in schema.directives]
        logger.debug(f"Rebuilt {len(types)} types of schema '{schema.name}'")
        return GraphQLSchema(
            query=query,
            mutation=mutation,
            subscription=self.named_type(subscription) if subscription is not None else None,
            types=types,
            directives=directives or None,
            description=schema.description,
        )

    def type_of(self, decorator: Any) -> Any:
        """Rebuild a type, modifiers included."""
        if decorator.is_live:
            return decorator.original
        if decorator.tag == TAG_LIST:
            return GraphQLList(self.type_of(decorator.wrapped_type))
        if decorator.tag == TAG_NON_NULL:
            return GraphQLNonNull(self.type_of(decorator.wrapped_type))
        return self.named_type(decorator)

    def named_type(self, decorator: Any) -> GraphQLNamedType:
        """Rebuild a named type, once per name."""
        if decorator.is_live:
            return decorator.original
        if decorator.tag == TAG_TYPE_REFERENCE:
            return self.named_type(decorator.target)
        name = decorator.name
        built = self._types.get(name)
        if built is not None:
            return built
        builder = self._builders().get(decorator.tag)
        if builder is None:
            raise UnknownTypeError(f"Cannot rebuild a type tagged '{decorator.tag}'", tag=decorator.tag)
        built = builder(decorator)
        self._types[name] = built
        return built

    def _builders(self) -> Dict[str, Callable[[Any], GraphQLNamedType]]:
        return {
            TAG_SCALAR: self._scalar,
            TAG_OBJECT: self._object,
            TAG_INTERFACE: self._interface,
            TAG_UNION: self._union,
            TAG_ENUM: self._enum,
            TAG_INPUT_OBJECT: self._input_object,
        }

    def _scalar(self, decorator: Any) -> GraphQLScalarType:
        specified = SPECIFIED_SCALARS.get(decorator.name)
        if specified is not None:
            return specified
        return GraphQLScalarType(
            decorator.name,
            description=decorator.description,
            specified_by_url=decorator.specified_by_url,
        )

    def _object(self, decorator: Any) -> GraphQLObjectType:
        return GraphQLObjectType(
            decorator.name,
            fields=lambda: self._fields(decorator),
            interfaces=lambda: [self.named_type(i) for i in decorator.interfaces],
            description=decorator.description,
        )

    def _interface(self, decorator: Any) -> GraphQLInterfaceType:
        return GraphQLInterfaceType(
            decorator.name,
            fields=lambda: self._fields(decorator),
            interfaces=lambda: [self.named_type(i) for i in decorator.interfaces],
            resolve_type=self._type_resolver(decorator.type_resolver),
            description=decorator.description,
        )

    def _union(self, decorator: Any) -> GraphQLUnionType:
        return GraphQLUnionType(
            decorator.name,
            types=lambda: [self.named_type(member) for member in decorator.types],
            resolve_type=self._type_resolver(decorator.type_resolver),
            description=decorator.description,
        )

    def _enum(self, decorator: Any) -> GraphQLEnumType:
        values = {
            value.name: GraphQLEnumValue(
                value.value,
                description=value.description,
                deprecation_reason=value.deprecation_reason,
            )
            for value in decorator.values
        }
        return GraphQLEnumType(decorator.name, values, description=decorator.description)

    def _input_object(self, decorator: Any) -> GraphQLInputObjectType:
        return GraphQLInputObjectType(
            decorator.name,
            fields=lambda: {
                field.name: GraphQLInputField(
                    self.type_of(field.type),
                    default_value=field.default_value,
                    description=field.description,
                    deprecation_reason=field.deprecation_reason,
                )
                for field in decorator.input_fields
            },
            description=decorator.description,
        )

    def _fields(self, decorator: Any) -> Dict[str, GraphQLField]:
        return {
            field.name: GraphQLField(
                self.type_of(field.type),
                args=self._arguments(field),
                resolve=self._data_fetcher(field.data_fetcher),
                description=field.description,
                deprecation_reason=field.deprecation_reason,
            )
            for field in decorator.field_definitions
        }

    def _arguments(self, decorator: Any) -> Dict[str, GraphQLArgument]:
        return {
            argument.name: GraphQLArgument(
                self.type_of(argument.type),
                default_value=argument.default_value,
                description=argument.description,
                deprecation_reason=argument.deprecation_reason,
            )
            for argument in decorator.arguments
        }

    def directive(self, decorator: Any) -> GraphQLDirective:
        if decorator.is_live:
            return decorator.original
        specified = SPECIFIED_DIRECTIVES.get(decorator.name)
        if specified is not None:
            return specified
        return GraphQLDirective(
            decorator.name,
            locations=[DirectiveLocation[location] for location in decorator.locations],
            args=self._arguments(decorator),
            is_repeatable=decorator.is_repeatable,
            description=decorator.description,
        )

    def _data_fetcher(self, decorator: Any) -> Optional[Callable[..., Any]]:
        if decorator is None:
            return None
        if decorator.is_live:
            return decorator.original
        override = self._data_fetchers.get(decorator.id)
        if override is not None:
            return override
        if decorator.has_static_value:
            return StaticDataFetcher(decorator.static_value)
        logger.debug(f"Data fetcher {decorator.id} falls back to the default resolver")
        return None

    def _type_resolver(self, decorator: Any) -> Optional[Callable[..., Any]]:
        if decorator is None:
            return None
        if decorator.is_live:
            return decorator.original
        return self._type_resolvers.get(decorator.id)


def materialize(
    schema: Any,
    data_fetchers: Optional[Mapping[str, Callable[..., Any]]] = None,
    type_resolvers: Optional[Mapping[str, Callable[..., Any]]] = None,
) -> GraphQLSchema:
    """Return an executable ``GraphQLSchema`` for a schema decorator.

    Args:
        schema: A live or serialized schema decorator
        data_fetchers: Resolvers to use, keyed by data fetcher id
        type_resolvers: Type resolvers to use, keyed by type resolver id

    Returns:
        The wrapped schema when live, a rebuilt one otherwise
    """
    return SchemaBuilder(data_fetchers, type_resolvers).build(schema)
