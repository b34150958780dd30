"""
JSON references between nodes of a marshalled schema document.

A reference is a slash delimited path with a leading ``#/`` that locates one
node inside the document, in the style of the JSON Reference draft
(https://tools.ietf.org/html/draft-pbryan-zyp-json-ref-03). Shared nodes are
written once and pointed at with ``{"$ref": "<path>"}`` objects.

Addressing rules:
    - The document root is ``#/``
    - Named top-level nodes live under a bucket prefix: ``#/__types/Query``
    - Child nodes append a child bucket and a child key to the parent address:
      ``#/__types/Query/fieldDefinitions/hello``
    - List and non-null modifiers have an empty child key, so their address
      ends in ``/wrappedType/``

Invariants:
    - Two references are equal iff their path strings are equal
    - The referenced target never takes part in equality or hashing
    - This module holds no state
"""

from __future__ import annotations

from typing import Any, List, Optional

from .errors import FormatError
from .props import NAME

REF_KEY = "$ref"
SLASH = "/"

ROOT_REFERENCE = "#/"
SCHEMAS_REFERENCE = ROOT_REFERENCE + "__schemas/"
TYPES_REFERENCE = ROOT_REFERENCE + "__types/"
INTERFACES_REFERENCE = ROOT_REFERENCE + "__interfaces/"
RESOLVERS_REFERENCE = ROOT_REFERENCE + "__typeResolvers/"
FETCHERS_REFERENCE = ROOT_REFERENCE + "__dataFetchers/"
SCALARS_REFERENCE = ROOT_REFERENCE + "__scalarTypes/"


class JsonReference:
    """Reference to a node inside the marshalled document.

    Attributes:
        reference: The path string, ``#/`` for the document root
        target: The node being referenced (ignored for equality)

    Example:
        >>> ref = JsonReference("#/__types/Query")
        >>> ref.target_key
        'Query'
        >>> ref.to_json()
        {'$ref': '#/__types/Query'}
    """

    __slots__ = ("_reference", "_target")

    def __init__(self, reference: str, target: Any = None) -> None:
        self._reference = reference or ROOT_REFERENCE
        self._target = target

    @property
    def reference(self) -> str:
        """The path string of this reference."""
        return self._reference

    @property
    def target(self) -> Any:
        """The node this reference points at, if known."""
        return self._target

    @property
    def target_key(self) -> str:
        """The final path segment, empty for the document root."""
        if self._reference == ROOT_REFERENCE:
            return ""
        return self._reference[self._reference.rfind(SLASH) + 1:]

    def segments(self) -> List[str]:
        """Path segments below the document root."""
        return parse_reference(self._reference)

    def to_json(self) -> dict:
        """The ``{"$ref": ...}`` object written into the document."""
        return {REF_KEY: self._reference}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonReference):
            return NotImplemented
        return self._reference == other._reference

    def __hash__(self) -> int:
        return hash(self._reference)

    def __str__(self) -> str:
        return self._reference

    def __repr__(self) -> str:
        return f"JsonReference({self._reference!r})"


def is_reference(json: Any) -> bool:
    """Whether a JSON value is a ``{"$ref": ...}`` pointer object."""
    return isinstance(json, dict) and isinstance(json.get(REF_KEY), str)


def parse_reference(reference: str) -> List[str]:
    """Split a reference string into its path segments.

    Raises:
        FormatError: If the reference does not start at the document root
    """
    if not reference.startswith(ROOT_REFERENCE):
        raise FormatError(
            f"Reference '{reference}' does not start with '{ROOT_REFERENCE}'",
            reference=reference,
        )
    path = reference[len(ROOT_REFERENCE):]
    if not path:
        return []
    return path.split(SLASH)


def create_reference(decorator: Any) -> JsonReference:
    """Compute the address of a decorator from its kind and parent.

    Top-level kinds declare a ``bucket_prefix`` and a ``reference_key``.
    Child kinds declare a ``child_bucket`` and are addressed below their
    parent. A child without a parent is addressed below the document root.
    """
    prefix: Optional[str] = getattr(decorator, "bucket_prefix", None)
    if prefix is not None:
        return JsonReference(prefix + decorator.reference_key, decorator)

    bucket: Optional[str] = getattr(decorator, "child_bucket", None)
    if bucket is None:
        raise TypeError(f"Cannot address {type(decorator).__name__}: no bucket declared")
    parent = decorator.parent
    base = ROOT_REFERENCE if parent is None else parent.json_reference.reference
    base = base.rstrip(SLASH)
    return JsonReference(f"{base}{SLASH}{bucket}{SLASH}{decorator.reference_key}", decorator)


def resolve_reference(root: Any, reference: str) -> Any:
    """Walk the document from its root to the node a reference points at.

    Keyed objects are walked by key. Arrays are walked by the ``name`` of
    their elements, or by position when the segment is an index.

    Raises:
        FormatError: If a segment does not resolve
    """
    node = root
    for segment in parse_reference(reference):
        node = _step(node, segment, reference)
    return node


def _step(node: Any, segment: str, reference: str) -> Any:
    if isinstance(node, dict):
        if segment in node:
            return node[segment]
    elif isinstance(node, list):
        for element in node:
            if isinstance(element, dict) and element.get(NAME) == segment:
                return element
        if segment.isdigit() and int(segment) < len(node):
            return node[int(segment)]
    raise FormatError(
        f"Failed to resolve reference '{reference}': segment '{segment}' not found",
        reference=reference,
    )
