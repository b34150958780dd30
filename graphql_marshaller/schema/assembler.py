"""
Assembly of the top-level marshalled document.

Layout::

    {
      "__types":          {name: object | union | enum | input object},
      "__interfaces":     {name: interface},
      "__typeResolvers":  {id: placeholder},     only when non-empty
      "__dataFetchers":   {id: placeholder},     only when non-empty
      "__scalarTypes":    {name: scalar},        only when non-empty
      "__schemas":        {query type name: schema entry}
    }

Invariants:
    - Types are written in the order the schema lists them
    - Scalars never appear in ``__types``
    - Introspection types are left out unless the options include them
    - Side tables are written after the types and the schema entry, so they
      hold every behaviour and scalar that those reference
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from ..props import (
    DATA_FETCHERS,
    SCALAR_TYPES,
    SCHEMA_INTERFACES,
    SCHEMA_TYPES,
    SCHEMAS,
    TAG_INTERFACE,
    TAG_SCALAR,
    TYPE_RESOLVERS,
)

logger = logging.getLogger(__name__)


def build_document(schema: Any) -> Dict[str, Any]:
    """Marshal a decorated schema, live or serialized, into a document.

    Args:
        schema: The schema decorator

    Returns:
        The document as plain JSON-compatible dicts and lists
    """
    context = schema.context
    options = context.options

    types: Dict[str, Any] = {}
    interfaces: Dict[str, Any] = {}
    for type_ in schema.all_types:
        if type_.tag == TAG_SCALAR or not options.includes_type(type_.name):
            continue
        bucket = interfaces if type_.tag == TAG_INTERFACE else types
        bucket[type_.name] = type_.to_json()

    entry = schema.entry_json()

    document: Dict[str, Any] = {SCHEMA_TYPES: types, SCHEMA_INTERFACES: interfaces}
    _put_table(document, TYPE_RESOLVERS, context.type_resolvers)
    _put_table(document, DATA_FETCHERS, context.data_fetchers)
    _put_table(document, SCALAR_TYPES, context.scalar_types)
    document[SCHEMAS] = {schema.json_reference.target_key: entry}

    logger.debug(
        f"Assembled schema '{schema.name}': {len(types)} types, "
        f"{len(interfaces)} interfaces, {len(context.data_fetchers)} data fetchers"
    )
    return document


def _put_table(document: Dict[str, Any], key: str, table: Mapping[str, Any]) -> None:
    if table:
        document[key] = {name: decorator.to_json() for name, decorator in table.items()}
