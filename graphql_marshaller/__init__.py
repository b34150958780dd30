"""
GraphQL schema marshaller - serialize graphql-core schemas to JSON and back.

This package provides:
- marshal / unmarshal between a live ``GraphQLSchema`` and a JSON document
- Schema decorators with one read API over live and un-marshalled schemas
- materialize / query to execute queries against un-marshalled schemas

Shared named types are written once and referenced with ``{"$ref": ...}``
objects; resolvers are written as placeholders keyed by an opaque id.

Example:
    >>> from graphql_marshaller import marshal, unmarshal, query
    >>>
    >>> document = marshal(schema)
    >>> restored = unmarshal(document)
    >>> query(restored, "{ hello }").data
    {'hello': 'world'}

Invariants:
    - marshal(unmarshal(document)) == document
    - Every shared node appears exactly once in a document
    - Behaviour other than static values is not serialized

Version: 1.0.0
"""

__version__ = "1.0.0"

from .build import materialize
from .config import INTROSPECTION_TYPES, MarshallerOptions
from .errors import FormatError, IdentityError, MarshallerError, UnknownTypeError
from .marshaller import decorate, dumps, fingerprint, loads, marshal, unmarshal
from .query import ErrorType, QueryError, QueryResult, query
from .reference import JsonReference
from .schema import SchemaContext, SchemaNodeDecorator, StaticDataFetcher, TypeReference

__all__ = [
    "ErrorType",
    "FormatError",
    "INTROSPECTION_TYPES",
    "IdentityError",
    "JsonReference",
    "MarshallerError",
    "MarshallerOptions",
    "QueryError",
    "QueryResult",
    "SchemaContext",
    "SchemaNodeDecorator",
    "StaticDataFetcher",
    "TypeReference",
    "UnknownTypeError",
    "decorate",
    "dumps",
    "fingerprint",
    "loads",
    "marshal",
    "materialize",
    "query",
    "unmarshal",
]
