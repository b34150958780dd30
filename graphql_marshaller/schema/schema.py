"""
Decorator of a whole GraphQL schema.

A live schema wraps a ``GraphQLSchema``. A serialized schema wraps the root
of a marshalled document; its entry is the single object inside
``__schemas``, keyed by the name of the query type.

Invariants:
    - A document holds exactly one schema entry
    - The serialized schema is registered before the document buckets are
      primed, and the buckets are primed before anything else is read
    - ``to_json`` of either backing produces the whole document
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple

from graphql import GraphQLNamedType, get_named_type, is_specified_scalar_type

from ..errors import FormatError
from ..props import (
    DATA_FETCHERS,
    DESCRIPTION,
    DICTIONARY,
    DIRECTIVES,
    MARSHALED_TYPE,
    MUTATION_TYPE,
    QUERY_TYPE,
    SCALAR_TYPES,
    SCHEMA_INTERFACES,
    SCHEMA_TYPES,
    SCHEMAS,
    SUBSCRIPTION_TYPE,
    TAG_SCHEMA,
    TYPE_RESOLVERS,
)
from ..reference import SCHEMAS_REFERENCE
from .assembler import build_document
from .decorator import Backing, SchemaDecorator, Serialized, put_if_not_empty, put_if_present

if TYPE_CHECKING:
    from .context import SchemaContext
    from .fields import DirectiveDecorator
    from .types import ObjectTypeDecorator

logger = logging.getLogger(__name__)


def schema_entry(document: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """Return the key and the entry of the single schema of a document.

    Raises:
        FormatError: If the document holds zero or several schemas
    """
    schemas = document.get(SCHEMAS)
    count = len(schemas) if isinstance(schemas, dict) else 0
    if count != 1:
        raise FormatError(f"Expected 1 schema in '{SCHEMAS}', found: {count}", tag=TAG_SCHEMA)
    key, entry = next(iter(schemas.items()))
    if not isinstance(entry, dict):
        raise FormatError(f"Schema entry '{key}' is not an object", tag=TAG_SCHEMA)
    return key, entry


def extra_types(schema: Any) -> List[GraphQLNamedType]:
    """Types of a live schema that cannot be reached from its root types.

    Introspection types and the specified scalars are never extra.
    """
    reachable: Set[str] = set()
    pending: List[Any] = [schema.query_type, schema.mutation_type, schema.subscription_type]
    for directive in schema.directives:
        pending.extend(argument.type for argument in directive.args.values())
    while pending:
        type_ = pending.pop()
        if type_ is None:
            continue
        named = get_named_type(type_)
        if named.name in reachable:
            continue
        reachable.add(named.name)
        for field in getattr(named, "fields", {}).values():
            pending.append(field.type)
            pending.extend(argument.type for argument in getattr(field, "args", {}).values())
        pending.extend(getattr(named, "interfaces", ()))
        pending.extend(getattr(named, "types", ()))
    return [
        type_
        for name, type_ in schema.type_map.items()
        if name not in reachable
        and not name.startswith("__")
        and not is_specified_scalar_type(type_)
    ]


class SchemaNodeDecorator(SchemaDecorator):
    """Decorator of a schema, the root of every marshalling run."""

    tag = TAG_SCHEMA
    bucket_prefix = SCHEMAS_REFERENCE

    def __init__(self, backing: Backing, context: SchemaContext) -> None:
        self._entry_key: Optional[str] = None
        self._entry: Dict[str, Any] = {}
        if isinstance(backing, Serialized):
            self._entry_key, self._entry = schema_entry(backing.json)
            context.use_document(backing.json)
        super().__init__(backing, context)
        if isinstance(backing, Serialized):
            self._prime(backing.json)

    def _prime(self, root: Dict[str, Any]) -> None:
        for bucket in (SCHEMA_TYPES, SCHEMA_INTERFACES, SCALAR_TYPES, TYPE_RESOLVERS, DATA_FETCHERS):
            self._context.unmarshall_list(root, bucket)
        if self._context.options.include_directives:
            self._context.unmarshall_list(self._entry, DIRECTIVES, self)
        logger.debug(f"Primed document buckets for schema '{self._entry_key}'")

    @property
    def reference_key(self) -> str:
        return self._select(lambda original: original.query_type.name, lambda _: self._entry_key)

    @property
    def name(self) -> Optional[str]:
        return self.reference_key

    @property
    def description(self) -> Optional[str]:
        return self._select(
            lambda original: original.description,
            lambda _: self._entry.get(DESCRIPTION),
        )

    def _entry_type(self, key: str, live_attribute: str) -> Optional[ObjectTypeDecorator]:
        return self._select(
            lambda original: self._context.decorator_of(getattr(original, live_attribute))
            if getattr(original, live_attribute) is not None
            else None,
            lambda _: self._context.unmarshall(self._entry.get(key)),
        )

    @property
    def query_type(self) -> ObjectTypeDecorator:
        return self._entry_type(QUERY_TYPE, "query_type")

    @property
    def mutation_type(self) -> Optional[ObjectTypeDecorator]:
        return self._entry_type(MUTATION_TYPE, "mutation_type")

    @property
    def subscription_type(self) -> Optional[ObjectTypeDecorator]:
        return self._entry_type(SUBSCRIPTION_TYPE, "subscription_type")

    @property
    def is_supporting_mutations(self) -> bool:
        return self._select(
            lambda original: original.mutation_type is not None,
            lambda _: isinstance(self._entry.get(MUTATION_TYPE), dict),
        )

    @property
    def directives(self) -> List[DirectiveDecorator]:
        return self._select(
            lambda original: [self._context.decorator_of(d, self) for d in original.directives],
            lambda _: self._context.unmarshall_list(self._entry, DIRECTIVES, self),
        )

    def get_directive(self, name: str) -> DirectiveDecorator:
        """Look up a directive by name.

        Raises:
            UnknownTypeError: If the schema has no such directive
        """
        return self._find(self.directives, name, "Directive")

    @property
    def dictionary(self) -> List[SchemaDecorator]:
        """Types that belong to the schema but cannot be reached from its roots."""
        return self._select(
            lambda original: [self._context.decorator_of(t) for t in extra_types(original)],
            lambda _: self._context.unmarshall_list(self._entry, DICTIONARY),
        )

    @property
    def all_types(self) -> List[SchemaDecorator]:
        """Every named type of the schema, scalars included."""
        return self._select(
            lambda original: [self._context.decorator_of(t) for t in original.type_map.values()],
            lambda json: [
                decorator
                for bucket in (SCHEMA_TYPES, SCHEMA_INTERFACES, SCALAR_TYPES)
                for decorator in self._context.unmarshall_list(json, bucket)
            ],
        )

    def get_type(self, name: str) -> Optional[SchemaDecorator]:
        """Look up a named type, None when the schema has no such type."""
        for type_ in self.all_types:
            if type_.name == name:
                return type_
        return None

    def entry_json(self) -> Dict[str, Any]:
        """The schema entry alone, as written under ``__schemas``."""
        return self._select(lambda _: self._marshal_entry(), lambda _: self._entry)

    def _marshal_entry(self) -> Dict[str, Any]:
        context = self._context
        json: Dict[str, Any] = {MARSHALED_TYPE: self.tag}
        put_if_present(json, DESCRIPTION, self.description)
        json[QUERY_TYPE] = context.reference_to(self.query_type)
        if self.is_supporting_mutations:
            json[MUTATION_TYPE] = context.reference_to(self.mutation_type)
        if self.subscription_type is not None:
            json[SUBSCRIPTION_TYPE] = context.reference_to(self.subscription_type)
        if context.options.include_directives:
            json[DIRECTIVES] = [directive.to_json() for directive in self.directives]
        put_if_not_empty(json, DICTIONARY, [context.reference_to(t) for t in self.dictionary])
        return json

    def to_json(self) -> Dict[str, Any]:
        """The whole document, for both live and serialized schemas."""
        return build_document(self)
