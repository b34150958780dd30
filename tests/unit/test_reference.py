"""
Unit tests for JSON references.

Tests cover:
- Reference equality and target keys
- Address computation for top-level and child nodes
- Resolving reference paths inside a document
"""

import pytest

from graphql_marshaller.errors import FormatError
from graphql_marshaller.reference import (
    ROOT_REFERENCE,
    JsonReference,
    create_reference,
    is_reference,
    parse_reference,
    resolve_reference,
)


class _Node:
    def __init__(self, reference_key, bucket_prefix=None, child_bucket=None, parent=None):
        self.reference_key = reference_key
        self.bucket_prefix = bucket_prefix
        self.child_bucket = child_bucket
        self.parent = parent
        self.json_reference = create_reference(self)


class TestJsonReference:
    """Tests for JsonReference."""

    def test_equality_ignores_target(self):
        """References with the same path are equal whatever they point at."""
        assert JsonReference("#/__types/Query", "a") == JsonReference("#/__types/Query", "b")
        assert hash(JsonReference("#/__types/Query")) == hash(JsonReference("#/__types/Query"))

    def test_empty_reference_is_root(self):
        """An empty path is the document root."""
        ref = JsonReference("")

        assert ref.reference == ROOT_REFERENCE
        assert ref.target_key == ""
        assert ref.segments() == []

    def test_target_key(self):
        """The target key is the last path segment."""
        assert JsonReference("#/__types/Query/fieldDefinitions/hello").target_key == "hello"
        assert JsonReference("#/__types/Query/fieldDefinitions/hello/type/wrappedType/").target_key == ""

    def test_to_json(self):
        """A reference is written as a $ref object."""
        assert JsonReference("#/__scalarTypes/String").to_json() == {"$ref": "#/__scalarTypes/String"}

    def test_is_reference(self):
        """Only objects with a string $ref are references."""
        assert is_reference({"$ref": "#/__types/Query"})
        assert not is_reference({"name": "Query"})
        assert not is_reference("#/__types/Query")

    def test_parse_rejects_relative_path(self):
        """References must start at the document root."""
        with pytest.raises(FormatError, match="does not start with"):
            parse_reference("__types/Query")


class TestCreateReference:
    """Tests for address computation."""

    def test_top_level_node(self):
        """Top-level nodes live under their bucket prefix."""
        query = _Node("Query", bucket_prefix="#/__types/")

        assert str(query.json_reference) == "#/__types/Query"

    def test_child_node(self):
        """Children append bucket and key to their parent's address."""
        query = _Node("Query", bucket_prefix="#/__types/")
        hello = _Node("hello", child_bucket="fieldDefinitions", parent=query)

        assert str(hello.json_reference) == "#/__types/Query/fieldDefinitions/hello"

    def test_nested_modifiers(self):
        """Modifiers have an empty key and nest without doubled slashes."""
        query = _Node("Query", bucket_prefix="#/__types/")
        field = _Node("ids", child_bucket="fieldDefinitions", parent=query)
        outer = _Node("", child_bucket="wrappedType", parent=field)
        inner = _Node("", child_bucket="wrappedType", parent=outer)

        assert str(outer.json_reference) == "#/__types/Query/fieldDefinitions/ids/wrappedType/"
        assert str(inner.json_reference) == "#/__types/Query/fieldDefinitions/ids/wrappedType/wrappedType/"

    def test_orphan_child_is_addressed_below_root(self):
        """A child without a parent hangs off the document root."""
        value = _Node("RED", child_bucket="values")

        assert str(value.json_reference) == "#/values/RED"

    def test_no_bucket_raises(self):
        """A node without any bucket cannot be addressed."""
        with pytest.raises(TypeError, match="no bucket declared"):
            _Node("X")


class TestResolveReference:
    """Tests for resolving paths inside a document."""

    DOCUMENT = {
        "__types": {
            "Query": {
                "name": "Query",
                "fieldDefinitions": [
                    {"name": "hello", "type": {"$ref": "#/__scalarTypes/String"}},
                ],
            },
        },
        "__scalarTypes": {"String": {"name": "String"}},
    }

    def test_resolve_keyed_object(self):
        """Objects are walked by key."""
        assert resolve_reference(self.DOCUMENT, "#/__scalarTypes/String") == {"name": "String"}

    def test_resolve_array_by_name(self):
        """Arrays are walked by element name."""
        field = resolve_reference(self.DOCUMENT, "#/__types/Query/fieldDefinitions/hello")

        assert field["type"] == {"$ref": "#/__scalarTypes/String"}

    def test_resolve_array_by_index(self):
        """Arrays can also be walked by position."""
        field = resolve_reference(self.DOCUMENT, "#/__types/Query/fieldDefinitions/0")

        assert field["name"] == "hello"

    def test_resolve_root(self):
        """The root reference resolves to the document."""
        assert resolve_reference(self.DOCUMENT, "#/") is self.DOCUMENT

    def test_unresolvable_segment_raises(self):
        """A missing segment is a format error naming the reference."""
        with pytest.raises(FormatError, match="segment 'Mutation' not found") as exc_info:
            resolve_reference(self.DOCUMENT, "#/__types/Mutation")

        assert exc_info.value.reference == "#/__types/Mutation"
        assert exc_info.value.code == "FORMAT_ERROR"
