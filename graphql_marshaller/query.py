"""
Execute GraphQL queries against live or un-marshalled schemas.

Errors are reported in the result, never raised, and classified as:
    - InvalidSyntax: the query does not parse
    - ValidationError: the query does not validate against the schema
    - DataFetchingException: a resolver raised while executing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from graphql import GraphQLError, GraphQLSchema, GraphQLSyntaxError, graphql_sync

from .build import materialize

logger = logging.getLogger(__name__)


class ErrorType(str, Enum):
    INVALID_SYNTAX = "InvalidSyntax"
    VALIDATION_ERROR = "ValidationError"
    DATA_FETCHING_EXCEPTION = "DataFetchingException"


@dataclass(frozen=True)
class QueryError:
    """One error of a query result."""

    error_type: ErrorType
    message: str
    locations: Tuple[Tuple[int, int], ...] = ()
    path: Tuple[Any, ...] = ()

    @classmethod
    def from_graphql_error(cls, error: GraphQLError) -> QueryError:
        return cls(
            error_type=classify_error(error),
            message=error.message,
            locations=tuple((loc.line, loc.column) for loc in error.locations or ()),
            path=tuple(error.path or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "errorType": self.error_type.value,
            "message": self.message,
        }
        if self.locations:
            result["locations"] = [{"line": line, "column": column} for line, column in self.locations]
        if self.path:
            result["path"] = list(self.path)
        return result


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a query. ``succeeded`` is true when there are no errors."""

    data: Optional[Dict[str, Any]] = None
    errors: Tuple[QueryError, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"data": self.data}
        if self.errors:
            result["errors"] = [error.to_dict() for error in self.errors]
        return result


def classify_error(error: GraphQLError) -> ErrorType:
    if isinstance(error, GraphQLSyntaxError):
        return ErrorType.INVALID_SYNTAX
    if error.path is not None:
        return ErrorType.DATA_FETCHING_EXCEPTION
    return ErrorType.VALIDATION_ERROR


def query(
    schema: Any,
    source: str,
    variables: Optional[Dict[str, Any]] = None,
    root_value: Any = None,
    context_value: Any = None,
    operation_name: Optional[str] = None,
    data_fetchers: Optional[Mapping[str, Callable[..., Any]]] = None,
    type_resolvers: Optional[Mapping[str, Callable[..., Any]]] = None,
) -> QueryResult:
    """Run a query against a schema.

    Args:
        schema: A ``GraphQLSchema`` or a schema decorator
        source: The query document
        variables: Variable values of the operation
        root_value: Value passed to the resolvers of the root type
        context_value: Context passed to every resolver
        operation_name: Operation to run when the document holds several
        data_fetchers: Resolvers for an un-marshalled schema, by fetcher id
        type_resolvers: Type resolvers for an un-marshalled schema, by id

    Returns:
        The data and the classified errors
    """
    if not isinstance(schema, GraphQLSchema):
        schema = materialize(schema, data_fetchers, type_resolvers)
    result = graphql_sync(
        schema,
        source,
        root_value=root_value,
        context_value=context_value,
        variable_values=variables,
        operation_name=operation_name,
    )
    errors = tuple(QueryError.from_graphql_error(error) for error in result.errors or ())
    for error in errors:
        logger.debug(f"Query error ({error.error_type.value}): {error.message}")
    return QueryResult(data=result.data, errors=errors)
