"""
Decorators of behaviour attached to a schema: data fetchers and type resolvers.

Behaviour cannot be serialized. A fetcher or resolver is marshalled as a
placeholder carrying an opaque id, the class it was an instance of, and a
reference to the node that owns it. A static fetcher also carries its value,
which is enough to reconstruct it after un-marshalling.

Invariants:
    - Placeholders live in the ``__dataFetchers`` / ``__typeResolvers``
      buckets, keyed by id
    - The id of a live behaviour is derived from its owner's address, so
      marshalling the same schema twice yields the same ids
    - The ``__parent`` reference is informative only and never dereferenced
    - Invoking an un-marshalled placeholder returns the static value if it
      has one, None otherwise

How to change safely:
    - Keep ``matches`` in sync with the context's deduplication rules
    - Never store anything in a placeholder that cannot be written as JSON
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any, Dict, Optional

from graphql import default_field_resolver

from ..errors import FormatError
from ..props import (
    ID,
    MARSHALED_TYPE,
    MARSHALED_TYPE_CLASS,
    PARENT,
    STATIC_VALUE,
    TAG_DATA_FETCHER,
    TAG_STATIC_DATA_FETCHER,
    TAG_TYPE_RESOLVER,
)
from ..reference import FETCHERS_REFERENCE, RESOLVERS_REFERENCE
from .decorator import Backing, SchemaChildDecorator, SchemaDecorator, Serialized, to_json_value

if TYPE_CHECKING:
    from ..reference import JsonReference
    from .context import SchemaContext

logger = logging.getLogger(__name__)


class StaticDataFetcher:
    """Field resolver that always returns the same value.

    Example:
        >>> GraphQLField(GraphQLString, resolve=StaticDataFetcher("world"))
    """

    def __init__(self, value: Any) -> None:
        self.value = value

    def __call__(self, source: Any, info: Any, **args: Any) -> Any:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StaticDataFetcher):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash(repr(self.value))

    def __repr__(self) -> str:
        return f"StaticDataFetcher({self.value!r})"


def is_trivial_fetcher(resolve: Any) -> bool:
    """Whether a field resolver is graphql-core's default and need not be kept."""
    return resolve is None or resolve is default_field_resolver


def _qualified_class_name(obj: Any) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


class _BehaviorDecorator(SchemaChildDecorator):
    """Common placeholder handling for fetchers and resolvers."""

    def __init__(
        self,
        backing: Backing,
        context: SchemaContext,
        parent: Optional[SchemaDecorator],
        name: Optional[str] = None,
    ) -> None:
        self._id = self._resolve_id(backing, parent)
        super().__init__(backing, context, parent, name)

    @staticmethod
    def _resolve_id(backing: Backing, parent: Optional[SchemaDecorator]) -> str:
        if isinstance(backing, Serialized):
            json = backing.json
            value = json.get(ID)
            if not isinstance(value, str):
                raise FormatError(
                    f"Behaviour placeholder without an id: {json}",
                    tag=json.get(MARSHALED_TYPE),
                )
            return value
        if parent is None:
            return str(uuid.uuid4())
        return str(uuid.uuid5(uuid.NAMESPACE_URL, parent.json_reference.reference))

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._id

    @property
    def reference_key(self) -> str:
        return self._id

    @property
    def description(self) -> Optional[str]:
        return None

    @property
    def marshaled_class(self) -> Optional[str]:
        """Qualified class name of the behaviour that was marshalled."""
        return self._select(_qualified_class_name, lambda json: json.get(MARSHALED_TYPE_CLASS))

    def _placeholder(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {
            MARSHALED_TYPE: self.tag,
            MARSHALED_TYPE_CLASS: self.marshaled_class,
        }
        if self._parent is not None:
            json[PARENT] = self._parent.json_reference.to_json()
        json[ID] = self._id
        return json


class DataFetcherDecorator(_BehaviorDecorator):
    """Placeholder for a field resolver.

    Calling the decorator runs the wrapped resolver when live. An
    un-marshalled placeholder answers with its static value, if any.
    """

    bucket_prefix = FETCHERS_REFERENCE

    def _register(self) -> JsonReference:
        return self._context.register_data_fetcher(self)

    @property
    def tag(self) -> str:  # type: ignore[override]
        return self._select(
            lambda original: TAG_STATIC_DATA_FETCHER
            if isinstance(original, StaticDataFetcher)
            else TAG_DATA_FETCHER,
            lambda json: json.get(MARSHALED_TYPE, TAG_DATA_FETCHER),
        )

    @property
    def has_static_value(self) -> bool:
        return self._select(
            lambda original: isinstance(original, StaticDataFetcher),
            lambda json: STATIC_VALUE in json,
        )

    @property
    def static_value(self) -> Any:
        return self._select(
            lambda original: original.value if isinstance(original, StaticDataFetcher) else None,
            lambda json: json.get(STATIC_VALUE),
        )

    def matches(self, other: DataFetcherDecorator) -> bool:
        """Whether two placeholders stand for the same fetcher."""
        if self._id == other.id:
            return True
        if self.is_live and other.is_live and self.original is other.original:
            return True
        if self.has_static_value and other.has_static_value:
            mine, theirs = self.static_value, other.static_value
            return type(mine) is type(theirs) and mine == theirs
        return False

    def __call__(self, source: Any, info: Any, **args: Any) -> Any:
        return self._select(
            lambda original: original(source, info, **args),
            lambda _: self._invoke_placeholder(),
        )

    def _invoke_placeholder(self) -> Any:
        if self.has_static_value:
            return self.static_value
        logger.debug(f"Data fetcher {self._id} has no behaviour after un-marshalling")
        return None

    def _marshal(self) -> Dict[str, Any]:
        json = self._placeholder()
        if self.has_static_value:
            json[STATIC_VALUE] = to_json_value(self.static_value)
        return json


class TypeResolverDecorator(_BehaviorDecorator):
    """Placeholder for the ``resolve_type`` of an interface or union."""

    tag = TAG_TYPE_RESOLVER
    bucket_prefix = RESOLVERS_REFERENCE

    def _register(self) -> JsonReference:
        return self._context.register_type_resolver(self)

    def matches(self, other: TypeResolverDecorator) -> bool:
        """Whether two placeholders stand for the same resolver."""
        if self._id == other.id:
            return True
        return self.is_live and other.is_live and self.original is other.original

    def __call__(self, value: Any, info: Any, abstract_type: Any) -> Any:
        return self._select(
            lambda original: original(value, info, abstract_type),
            lambda _: self._invoke_placeholder(),
        )

    def _invoke_placeholder(self) -> None:
        logger.debug(f"Type resolver {self._id} has no behaviour after un-marshalling")
        return None

    def _marshal(self) -> Dict[str, Any]:
        return self._placeholder()
