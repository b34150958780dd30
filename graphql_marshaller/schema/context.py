"""
Per-run marshalling context.

A context owns every decorator created during one marshal or unmarshal run.
Decorators are kept in an arena and looked up by the identity of their
source: the ``id()`` of the live object or of the JSON node they wrap.
graphql-core fields and arguments compare by value, so an identity map is
the only way to tell two equal but distinct nodes apart. A live field,
argument, enum value or input field is also keyed by its owner and name,
since one object may be reused under several keys.

Side tables:
    - data fetchers and type resolvers, keyed by placeholder id
    - scalar types, keyed by name
    - named types, keyed by name, for type references

Invariants:
    - Decorating the same source twice returns the same decorator
    - Every decorator registers itself before it decorates any child, so
      cycles between types terminate
    - The wrapped sources stay referenced by their decorators, so their
      ``id()`` is never reused while the context is alive
    - A context is not thread-safe; use one context per run

How to change safely:
    - New decorator kinds must register through ``register`` (or one of the
      specialised register methods) in their constructor
    - Keep deduplication of behaviours in sync with ``matches`` on the
      behaviour decorators
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional

from ..config import MarshallerOptions
from ..errors import FormatError, IdentityError
from ..props import (
    TAG_ENUM,
    TAG_INPUT_OBJECT,
    TAG_INTERFACE,
    TAG_OBJECT,
    TAG_SCALAR,
    TAG_UNION,
)
from ..reference import REF_KEY, ROOT_REFERENCE, JsonReference, create_reference, is_reference, resolve_reference
from .behaviors import DataFetcherDecorator, TypeResolverDecorator
from .decorator import SchemaDecorator, source_identity
from .marshaller import create_decorator
from .types import ListDecorator, NonNullDecorator
from .unmarshaller import unmarshall_node

logger = logging.getLogger(__name__)

NAMED_TYPE_TAGS = frozenset(
    {TAG_ENUM, TAG_INPUT_OBJECT, TAG_INTERFACE, TAG_OBJECT, TAG_SCALAR, TAG_UNION}
)


class SchemaContext:
    """Arena of the decorators created during one marshalling run.

    Args:
        options: Marshalling options, defaults are read from the environment
        document: Root of the document being un-marshalled, if any

    Example:
        >>> context = SchemaContext()
        >>> schema = context.decorator_of(graphql_schema)
        >>> document = context.marshall(schema)
    """

    def __init__(
        self,
        options: Optional[MarshallerOptions] = None,
        document: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._options = options or MarshallerOptions()
        self._document = document
        self._nodes: List[SchemaDecorator] = []
        self._handles: Dict[Hashable, int] = {}
        self._named_types: Dict[str, SchemaDecorator] = {}
        self._data_fetchers: Dict[str, DataFetcherDecorator] = {}
        self._type_resolvers: Dict[str, TypeResolverDecorator] = {}
        self._scalar_types: Dict[str, SchemaDecorator] = {}

    @property
    def options(self) -> MarshallerOptions:
        return self._options

    @property
    def document(self) -> Optional[Dict[str, Any]]:
        """Root of the document references are resolved against."""
        return self._document

    def use_document(self, document: Dict[str, Any]) -> None:
        """Resolve references against ``document`` unless one is already set."""
        if self._document is None:
            self._document = document

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, decorator: SchemaDecorator) -> JsonReference:
        """Compute the address of a decorator and remember it.

        Returns:
            The decorator's address
        """
        reference = create_reference(decorator)
        self._remember(decorator)
        if decorator.tag in NAMED_TYPE_TAGS and decorator.name is not None:
            self._named_types.setdefault(decorator.name, decorator)
        logger.debug(f"Registered {decorator.tag} at {reference}")
        return reference

    def register_scalar_type(self, decorator: SchemaDecorator) -> JsonReference:
        """Register a scalar. A later scalar with the same name replaces it."""
        reference = self.register(decorator)
        self._scalar_types[decorator.name] = decorator
        self._named_types[decorator.name] = decorator
        return reference

    def register_data_fetcher(self, decorator: DataFetcherDecorator) -> JsonReference:
        """Register a data fetcher, reusing the address of an equivalent one.

        Returns:
            The address of the equivalent fetcher if one is already known,
            otherwise the address of ``decorator``
        """
        for existing in self._data_fetchers.values():
            if existing.matches(decorator):
                self._remember(decorator)
                logger.debug(f"Data fetcher {decorator.id} shares {existing.json_reference}")
                return existing.json_reference
        reference = self.register(decorator)
        self._data_fetchers[decorator.id] = decorator
        return reference

    def register_type_resolver(self, decorator: TypeResolverDecorator) -> JsonReference:
        """Register a type resolver, reusing the address of an equivalent one."""
        for existing in self._type_resolvers.values():
            if existing.matches(decorator):
                self._remember(decorator)
                logger.debug(f"Type resolver {decorator.id} shares {existing.json_reference}")
                return existing.json_reference
        reference = self.register(decorator)
        self._type_resolvers[decorator.id] = decorator
        return reference

    def _remember(self, decorator: SchemaDecorator) -> None:
        identity = decorator.identity
        if identity in self._handles:
            return
        self._handles[identity] = len(self._nodes)
        self._nodes.append(decorator)

    def _lookup(
        self,
        source: Any,
        parent: Optional[SchemaDecorator] = None,
        name: Optional[str] = None,
    ) -> Optional[SchemaDecorator]:
        return self._lookup_identity(source_identity(source, parent, name))

    def is_registered(self, decorator: SchemaDecorator) -> bool:
        return decorator.context is self and self._lookup_identity(decorator.identity) is decorator

    def _lookup_identity(self, identity: Hashable) -> Optional[SchemaDecorator]:
        handle = self._handles.get(identity)
        return None if handle is None else self._nodes[handle]

    # =========================================================================
    # Decoration
    # =========================================================================

    def decorator_of(
        self,
        source: Any,
        parent: Optional[SchemaDecorator] = None,
        name: Optional[str] = None,
    ) -> SchemaDecorator:
        """Return the decorator of a live schema object, creating it once.

        Args:
            source: A graphql-core schema object, resolver, or a decorator
            parent: Decorator of the node that owns ``source``
            name: Name of ``source`` when its parent keys it by name

        Raises:
            UnknownTypeError: If ``source`` is not a supported schema object
        """
        if isinstance(source, SchemaDecorator):
            return source
        existing = self._lookup(source, parent, name)
        if existing is not None:
            return existing
        return create_decorator(source, self, parent, name)

    def reference_to(self, decorator: SchemaDecorator) -> Dict[str, Any]:
        """JSON that points at a decorated node from elsewhere in the document.

        Modifiers are written inline; every other node as a ``$ref`` object.

        Raises:
            IdentityError: If the node was not registered by this context
        """
        if not self.is_registered(decorator):
            raise IdentityError(
                f"{decorator.tag} '{decorator.name}' is not registered in this context",
                reference=str(decorator.json_reference),
            )
        if isinstance(decorator, (ListDecorator, NonNullDecorator)):
            return decorator.to_json()
        return decorator.json_reference.to_json()

    def marshall(self, source: Any) -> Dict[str, Any]:
        """JSON form of a live object or decorator."""
        return self.decorator_of(source).to_json()

    # =========================================================================
    # Un-marshalling
    # =========================================================================

    def dereference(
        self,
        json: Dict[str, Any],
        parent: Optional[SchemaDecorator] = None,
    ) -> Optional[SchemaDecorator]:
        """Return the decorator already created for a JSON node or ``$ref``.

        Returns:
            The decorator, or None if ``json`` is a node seen for the first time

        Raises:
            FormatError: If a ``$ref`` cannot be resolved
        """
        existing = self._lookup(json)
        if existing is not None:
            return existing
        if not is_reference(json):
            return None
        if self._document is None:
            raise FormatError(
                "No document to resolve references against", reference=json[REF_KEY]
            )
        target = resolve_reference(self._document, json[REF_KEY])
        logger.debug(f"Dereferenced {json[REF_KEY]}")
        return self.unmarshall(target, parent)

    def unmarshall(
        self,
        json: Optional[Dict[str, Any]],
        parent: Optional[SchemaDecorator] = None,
    ) -> Optional[SchemaDecorator]:
        """Return the decorator of a JSON node, creating it once.

        Raises:
            FormatError: If the node has no recognisable type tag
            UnknownTypeError: If the type tag has no registered constructor
        """
        if json is None:
            return None
        existing = self.dereference(json, parent)
        if existing is not None:
            return existing
        return unmarshall_node(json, self, parent)

    def unmarshall_list(
        self,
        json: Optional[Dict[str, Any]],
        key: str,
        parent: Optional[SchemaDecorator] = None,
    ) -> List[SchemaDecorator]:
        """Un-marshall the collection stored at ``key``.

        The collection may be an array or an object keyed by name.

        Raises:
            FormatError: If the value is neither an array nor an object
        """
        if json is None:
            return []
        items = json.get(key)
        if items is None:
            return []
        if isinstance(items, dict):
            values = list(items.values())
        elif isinstance(items, list):
            values = items
        else:
            base = ROOT_REFERENCE if parent is None else parent.json_reference.reference
            path = f"{base.rstrip('/')}/{key}"
            raise FormatError(f"Expected an array or an object at '{path}'", reference=path)
        return [self.unmarshall(item, parent) for item in values]

    # =========================================================================
    # Views
    # =========================================================================

    def named_type(self, name: str) -> Optional[SchemaDecorator]:
        return self._named_types.get(name)

    @property
    def data_fetchers(self) -> Mapping[str, DataFetcherDecorator]:
        return MappingProxyType(self._data_fetchers)

    @property
    def type_resolvers(self) -> Mapping[str, TypeResolverDecorator]:
        return MappingProxyType(self._type_resolvers)

    @property
    def scalar_types(self) -> Mapping[str, SchemaDecorator]:
        return MappingProxyType(self._scalar_types)

    def nodes(self) -> Iterator[SchemaDecorator]:
        """Iterate over every decorator, in registration order."""
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
