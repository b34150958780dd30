"""
Entry points for marshalling GraphQL schemas to and from JSON documents.

Example:
    >>> document = marshal(schema)
    >>> restored = unmarshal(document)
    >>> restored.query_type.get_field_definition("hello").type.name
    'String'

Invariants:
    - Every call uses a fresh context; nothing is shared between calls
    - ``marshal(unmarshal(document))`` returns a document equal to
      ``document``
    - ``fingerprint`` depends only on the document's content
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Dict, Optional

from .config import MarshallerOptions
from .errors import FormatError
from .schema.context import SchemaContext
from .schema.schema import SchemaNodeDecorator

logger = logging.getLogger(__name__)


def decorate(schema: Any, options: Optional[MarshallerOptions] = None) -> SchemaNodeDecorator:
    """Wrap a live ``GraphQLSchema`` in a schema decorator.

    A schema that is already decorated is returned unchanged.

    Raises:
        ValueError: If ``schema`` is None or has no query type
    """
    if schema is None:
        raise ValueError("GraphQL schema cannot be None")
    if isinstance(schema, SchemaNodeDecorator):
        return schema
    if getattr(schema, "query_type", None) is None:
        raise ValueError("GraphQL schema must define a query type")
    return SchemaContext(options).decorator_of(schema)


def marshal(schema: Any, options: Optional[MarshallerOptions] = None) -> Dict[str, Any]:
    """Marshal a schema into a JSON-compatible document.

    Args:
        schema: A live ``GraphQLSchema`` or a schema decorator
        options: Marshalling options

    Returns:
        The document as plain dicts and lists
    """
    decorated = decorate(schema, options)
    document = decorated.to_json()
    logger.info(f"Marshalled schema '{decorated.name}'")
    return document


def unmarshal(document: Dict[str, Any], options: Optional[MarshallerOptions] = None) -> SchemaNodeDecorator:
    """Read a marshalled document back into a schema decorator.

    Args:
        document: A document produced by ``marshal``
        options: Marshalling options

    Returns:
        A decorator exposing the same read API as a live schema

    Raises:
        FormatError: If the document is malformed
        UnknownTypeError: If a node carries an unknown type tag
    """
    if document is None:
        raise ValueError("Document cannot be None")
    context = SchemaContext(options, document)
    schema = context.unmarshall(document)
    if not isinstance(schema, SchemaNodeDecorator):
        raise FormatError("Document root is not a schema", tag=schema.tag)
    logger.info(f"Un-marshalled schema '{schema.name}'")
    return schema


def dumps(schema: Any, options: Optional[MarshallerOptions] = None, indent: Optional[int] = 2) -> str:
    """Marshal a schema to a JSON string."""
    return json.dumps(marshal(schema, options), indent=indent, sort_keys=True)


def loads(text: str, options: Optional[MarshallerOptions] = None) -> SchemaNodeDecorator:
    """Un-marshal a schema from a JSON string."""
    return unmarshal(json.loads(text), options)


def fingerprint(document: Dict[str, Any]) -> str:
    """SHA-256 fingerprint of a document's canonical JSON form."""
    canonical = json.dumps(document, sort_keys=True, separators=(",", ":"))
    hash_bytes = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"sha256:{hash_bytes}"
