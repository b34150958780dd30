"""
Base classes for schema decorators.

A decorator wraps exactly one schema node and exposes a read API over it.
Each decorator is backed by one of:
- Live: an in-memory graphql-core object being marshalled
- Serialized: a JSON node of a document being un-marshalled

Every accessor goes through ``_select`` (or its shorthand ``_read``), which is
the only place that looks at the backing.

Invariants:
    - A decorator is immutable once constructed
    - Its address is computed and registered with the context in the
      constructor, before any child node is decorated or un-marshalled
    - Child decorators keep their parent only to compute their address
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, Hashable, List, Optional, Type, TypeVar, Union

from ..errors import UnknownTypeError
from ..props import DEPRECATION_REASON, DESCRIPTION, MARSHALED_TYPE, NAME

if TYPE_CHECKING:
    from ..reference import JsonReference
    from .context import SchemaContext

T = TypeVar("T")


@dataclass(frozen=True)
class Live:
    """Backing of a decorator that wraps an in-memory schema object."""

    original: Any


@dataclass(frozen=True)
class Serialized:
    """Backing of a decorator that wraps a node of a parsed document."""

    json: Dict[str, Any]


Backing = Union[Live, Serialized]


def put_if_present(json: Dict[str, Any], key: str, value: Any) -> None:
    """Put ``value`` at ``key`` unless it is None."""
    if value is not None:
        json[key] = value


def put_if_not_empty(json: Dict[str, Any], key: str, values: Optional[List[Any]]) -> None:
    """Put a list at ``key`` unless it is None or empty."""
    if values:
        json[key] = values


def source_identity(source: Any, parent: Any = None, name: Optional[str] = None) -> Hashable:
    """Identity key of a live source.

    graphql-core keeps the name of a field, argument, enum value or input
    field as the key of its owner's mapping, so one object can be reused
    under several keys or owners. Named children are therefore keyed by
    owner, name and object; everything else by the object alone.
    """
    if name is None:
        return id(source)
    return (id(parent), name, id(source))


def to_json_value(value: Any) -> Any:
    """Convert a runtime value to its JSON form. Enum members become their name."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value


class SchemaDecorator:
    """Decorator of a top-level schema node.

    Subclasses declare their type ``tag`` and either a ``bucket_prefix``
    (top-level nodes) or a ``child_bucket`` (nodes addressed below a parent).
    """

    tag: ClassVar[str]
    bucket_prefix: ClassVar[Optional[str]] = None
    child_bucket: ClassVar[Optional[str]] = None

    def __init__(self, backing: Backing, context: SchemaContext) -> None:
        self._backing = backing
        self._context = context
        self._reference = self._register()

    def _register(self) -> JsonReference:
        return self._context.register(self)

    def _select(self, live: Callable[[Any], T], serialized: Callable[[Dict[str, Any]], T]) -> T:
        backing = self._backing
        if isinstance(backing, Live):
            return live(backing.original)
        return serialized(backing.json)

    def _read(self, live: Callable[[Any], T], key: str, default: Any = None) -> T:
        return self._select(live, lambda json: json.get(key, default))

    @property
    def context(self) -> SchemaContext:
        return self._context

    @property
    def parent(self) -> Optional[SchemaDecorator]:
        return None

    @property
    def is_live(self) -> bool:
        """Whether this decorator wraps an in-memory object."""
        return isinstance(self._backing, Live)

    @property
    def original(self) -> Any:
        """The wrapped in-memory object, or None when JSON backed."""
        return self._select(lambda original: original, lambda _: None)

    @property
    def identity(self) -> Hashable:
        """Key under which the context registers this decorator."""
        return self._select(source_identity, id)

    @property
    def json_reference(self) -> JsonReference:
        return self._reference

    @property
    def reference_key(self) -> str:
        return self.name

    @property
    def name(self) -> Optional[str]:
        return self._read(lambda original: original.name, NAME)

    @property
    def description(self) -> Optional[str]:
        return self._read(lambda original: original.description, DESCRIPTION)

    def to_json(self) -> Dict[str, Any]:
        """JSON form of this node. JSON backed nodes return their own JSON."""
        return self._select(lambda _: self._marshal(), lambda json: json)

    def _marshal(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _base_json(self) -> Dict[str, Any]:
        json: Dict[str, Any] = {MARSHALED_TYPE: self.tag, NAME: self.name}
        put_if_present(json, DESCRIPTION, self.description)
        return json

    def _find(self, items: List[T], name: str, what: str) -> T:
        for item in items:
            if item.name == name:  # type: ignore[attr-defined]
                return item
        raise UnknownTypeError(f"{what} '{name}' not found in '{self.name}'", name=name)

    def __repr__(self) -> str:
        backing = "live" if self.is_live else "json"
        return f"<{type(self).__name__} {self._reference} ({backing})>"


class SchemaChildDecorator(SchemaDecorator):
    """Decorator of a node that is addressed below a parent node.

    graphql-core keeps the names of fields, arguments, enum values and input
    fields as keys of their parent's mapping, so the parent hands the name
    over when the child is decorated.
    """

    def __init__(
        self,
        backing: Backing,
        context: SchemaContext,
        parent: Optional[SchemaDecorator],
        name: Optional[str] = None,
    ) -> None:
        self._parent = parent
        self._name = name
        super().__init__(backing, context)

    @property
    def parent(self) -> Optional[SchemaDecorator]:
        return self._parent

    @property
    def identity(self) -> Hashable:
        return self._select(
            lambda original: source_identity(original, self._parent, self._name),
            id,
        )

    @property
    def name(self) -> Optional[str]:
        return self._read(lambda _: self._name, NAME)


class DeprecatableMixin:
    """Deprecation is stored only as a reason; the flag is derived."""

    _read: Callable[..., Any]

    @property
    def deprecation_reason(self) -> Optional[str]:
        return self._read(lambda original: original.deprecation_reason, DEPRECATION_REASON)

    @property
    def is_deprecated(self) -> bool:
        return bool(self.deprecation_reason)


def construct(
    decorator_cls: Type[SchemaDecorator],
    backing: Backing,
    context: SchemaContext,
    parent: Optional[SchemaDecorator] = None,
    name: Optional[str] = None,
) -> SchemaDecorator:
    """Instantiate a decorator, passing the parent only to child kinds."""
    if issubclass(decorator_cls, SchemaChildDecorator):
        return decorator_cls(backing, context, parent, name)
    return decorator_cls(backing, context)
