"""
Unit tests for un-marshalling documents.

Tests cover:
- Round trips through marshal and unmarshal
- The read API over un-marshalled schemas
- Shared identity and cycles after un-marshalling
- Malformed documents
"""

import copy

import pytest
from graphql import GraphQLField, GraphQLObjectType, GraphQLSchema, Undefined

from graphql_marshaller import (
    FormatError,
    MarshallerOptions,
    UnknownTypeError,
    decorate,
    dumps,
    loads,
    marshal,
    unmarshal,
)
from graphql_marshaller.schema import (
    DataFetcherDecorator,
    InterfaceTypeDecorator,
    NonNullDecorator,
    ScalarTypeDecorator,
)


def minimal_document():
    return {
        "__types": {
            "Query": {
                "__marshaled": "Object",
                "name": "Query",
                "fieldDefinitions": [
                    {
                        "__marshaled": "FieldDefinition",
                        "name": "hello",
                        "type": {"$ref": "#/__scalarTypes/String"},
                    },
                ],
            },
        },
        "__interfaces": {},
        "__scalarTypes": {"String": {"__marshaled": "Scalar", "name": "String"}},
        "__schemas": {
            "Query": {"__marshaled": "Schema", "queryType": {"$ref": "#/__types/Query"}},
        },
    }


class TestRoundTrip:
    """Tests for marshal(unmarshal(document)) == document."""

    def test_hello_round_trip(self, hello_schema):
        """A minimal document survives a round trip."""
        document = marshal(hello_schema)

        assert marshal(unmarshal(document)) == document

    def test_starwars_round_trip(self, starwars_schema):
        """A document with every kind of node survives a round trip."""
        document = marshal(starwars_schema)

        assert marshal(unmarshal(document)) == document

    def test_round_trip_with_all_options(self, starwars_schema):
        """Directives and introspection types survive a round trip."""
        options = MarshallerOptions(include_directives=True, include_introspection_types=True)
        document = marshal(starwars_schema, options)

        assert marshal(unmarshal(document, options)) == document

    def test_round_trip_does_not_mutate_input(self, starwars_schema):
        """Un-marshalling leaves the document untouched."""
        document = marshal(starwars_schema)
        snapshot = copy.deepcopy(document)

        marshal(unmarshal(document))

        assert document == snapshot

    def test_text_round_trip(self, starwars_schema):
        """loads reads what dumps writes."""
        text = dumps(starwars_schema)

        assert dumps(loads(text)) == text


class TestReadApi:
    """Tests for reading un-marshalled schemas."""

    def test_hello_field(self, hello_schema):
        """Query.hello is a String field after un-marshalling."""
        schema = unmarshal(marshal(hello_schema))

        hello = schema.query_type.get_field_definition("hello")

        assert not schema.is_live
        assert schema.query_type.name == "Query"
        assert isinstance(hello.type, ScalarTypeDecorator)
        assert hello.type.name == "String"
        assert hello.data_fetcher is None
        assert not schema.is_supporting_mutations
        assert schema.mutation_type is None

    def test_same_read_api_as_live(self, starwars_schema):
        """Live and un-marshalled decorators answer the same questions alike."""
        document = marshal(starwars_schema)
        restored = unmarshal(document)
        decorated = decorate(starwars_schema)

        for schema in (restored, decorated):
            droid = schema.get_type("Droid")
            assert [field.name for field in droid.field_definitions] == [
                "id",
                "name",
                "friends",
                "appearsIn",
                "primaryFunction",
            ]
            assert droid.get_field_definition("primaryFunction").is_deprecated
            assert [i.name for i in droid.interfaces] == ["Character"]
            assert [t.name for t in schema.dictionary] == ["Planet"]
            assert schema.is_supporting_mutations

    def test_interfaces_and_resolver(self, starwars_schema):
        """Interfaces keep their type resolver placeholder."""
        document = marshal(starwars_schema)
        schema = unmarshal(document)

        character = schema.get_type("Character")

        assert isinstance(character, InterfaceTypeDecorator)
        assert character.type_resolver.id in document["__typeResolvers"]
        assert character.type_resolver(None, None, None) is None
        assert schema.get_type("Human").interfaces == [character]

    def test_union_members(self, starwars_schema):
        """Union members resolve to the shared type decorators."""
        schema = unmarshal(marshal(starwars_schema))

        members = schema.get_type("SearchResult").types

        assert members == [schema.get_type("Human"), schema.get_type("Droid")]

    def test_enum_values(self, starwars_schema):
        """Enum values keep value, description and deprecation."""
        episode = unmarshal(marshal(starwars_schema)).get_type("Episode")

        jedi = episode.get_value("JEDI")

        assert [value.name for value in episode.values] == ["NEWHOPE", "EMPIRE", "JEDI"]
        assert jedi.value == 6
        assert jedi.is_deprecated
        assert jedi.deprecation_reason == "Use RETURN"
        assert episode.get_value("NEWHOPE").description == "Released in 1977."

    def test_input_defaults(self, starwars_schema):
        """Input fields distinguish no default from a default value."""
        review = unmarshal(marshal(starwars_schema)).get_type("ReviewInput")

        stars = review.get_field("stars")
        commentary = review.get_field("commentary")

        assert not stars.has_default_value
        assert stars.default_value is Undefined
        assert commentary.default_value == "none"
        assert isinstance(stars.type, NonNullDecorator)
        assert stars.type.wrapped_type.name == "Int"

    def test_arguments(self, starwars_schema):
        """Arguments keep their type and default value."""
        query = unmarshal(marshal(starwars_schema)).query_type

        droid_id = query.get_field_definition("droid").get_argument("id")
        text = query.get_field_definition("search").args["text"]

        assert isinstance(droid_id.type, NonNullDecorator)
        assert droid_id.type.wrapped_type.name == "String"
        assert text.default_value == "R2"

    def test_static_fetcher_keeps_value(self, starwars_schema):
        """A static fetcher answers with its value after un-marshalling."""
        query = unmarshal(marshal(starwars_schema)).query_type

        motto = query.get_field_definition("motto").data_fetcher

        assert isinstance(motto, DataFetcherDecorator)
        assert motto.has_static_value
        assert motto(None, None) == "May the Force be with you"

    def test_other_fetchers_lose_behaviour(self, starwars_schema):
        """Fetchers without a static value answer None after un-marshalling."""
        query = unmarshal(marshal(starwars_schema)).query_type

        hero = query.get_field_definition("hero").data_fetcher

        assert hero.marshaled_class == "builtins.function"
        assert hero(None, None, episode=5) is None

    def test_directives(self, hello_schema):
        """Directives are readable when included."""
        options = MarshallerOptions(include_directives=True)
        schema = unmarshal(marshal(hello_schema, options), options)

        skip = schema.get_directive("skip")

        assert skip.is_on_field
        assert skip.is_on_fragment
        assert not skip.is_on_operation
        assert skip.get_argument("if").type.wrapped_type.name == "Boolean"

    def test_directive_locations_derived_from_flags(self):
        """Directives written without locations get them back from the flags."""
        document = minimal_document()
        document["__schemas"]["Query"]["directives"] = [
            {
                "__marshaled": "Directive",
                "name": "auth",
                "isOnOperation": True,
                "isOnFragment": False,
                "isOnField": True,
            },
        ]

        auth = unmarshal(document).get_directive("auth")

        assert auth.locations == ["QUERY", "MUTATION", "SUBSCRIPTION", "FIELD"]
        assert not auth.is_repeatable

    def test_keyed_collections_are_accepted(self):
        """Child collections may be objects keyed by name instead of arrays."""
        document = minimal_document()
        fields = document["__types"]["Query"]["fieldDefinitions"]
        document["__types"]["Query"]["fieldDefinitions"] = {"hello": fields[0]}

        schema = unmarshal(document)

        assert schema.query_type.get_field_definition("hello").type.name == "String"

    def test_unknown_field_raises(self, hello_schema):
        """Looking up a missing field raises UnknownTypeError."""
        schema = unmarshal(marshal(hello_schema))

        with pytest.raises(UnknownTypeError, match="Field 'goodbye' not found in 'Query'"):
            schema.query_type.get_field_definition("goodbye")

    def test_unknown_type_is_none(self, hello_schema):
        """get_type answers None for a missing type, like GraphQLSchema."""
        assert unmarshal(marshal(hello_schema)).get_type("Mutation") is None


class TestIdentity:
    """Tests for shared identity after un-marshalling."""

    def test_shared_type_is_one_decorator(self, starwars_schema):
        """Every reference to a type yields the same decorator."""
        schema = unmarshal(marshal(starwars_schema))
        query = schema.query_type

        from_droid_field = query.get_field_definition("droid").type

        assert from_droid_field is schema.get_type("Droid")
        assert query.get_field_definition("hero").type is schema.get_type("Character")

    def test_cycle(self):
        """A.b.a is A after un-marshalling."""
        a_type = GraphQLObjectType("A", lambda: {"b": GraphQLField(b_type)})
        b_type = GraphQLObjectType("B", lambda: {"a": GraphQLField(a_type)})
        query = GraphQLObjectType("Query", {"a": GraphQLField(a_type)})
        schema = unmarshal(marshal(GraphQLSchema(query)))

        a = schema.get_type("A")
        b = a.get_field_definition("b").type

        assert b.name == "B"
        assert b.get_field_definition("a").type is a

    def test_children_are_cached(self, starwars_schema):
        """Reading a field twice returns the same decorator."""
        query = unmarshal(marshal(starwars_schema)).query_type

        assert query.get_field_definition("hero") is query.get_field_definition("hero")


class TestMalformedDocuments:
    """Tests for documents that cannot be un-marshalled."""

    def test_no_schema(self):
        """A document without schemas is a format error."""
        document = minimal_document()
        document["__schemas"] = {}

        with pytest.raises(FormatError, match="Expected 1 schema in '__schemas', found: 0"):
            unmarshal(document)

    def test_two_schemas(self):
        """A document with two schemas is a format error."""
        document = minimal_document()
        document["__schemas"]["Other"] = dict(document["__schemas"]["Query"])

        with pytest.raises(FormatError, match="found: 2"):
            unmarshal(document)

    def test_missing_tag(self):
        """A root without tag or schemas is a format error."""
        with pytest.raises(FormatError, match="missing marshaling data"):
            unmarshal({"foo": 1})

    def test_untagged_type(self):
        """A type without a tag is a format error."""
        document = minimal_document()
        document["__types"]["Broken"] = {"name": "Broken"}

        with pytest.raises(FormatError):
            unmarshal(document)

    def test_unknown_tag(self):
        """A tag without a constructor is an unknown type error."""
        document = minimal_document()
        document["__types"]["Widget"] = {"__marshaled": "Widget", "name": "Widget"}

        with pytest.raises(UnknownTypeError, match="'Widget'") as exc_info:
            unmarshal(document)

        assert exc_info.value.tag == "Widget"

    def test_dangling_reference(self):
        """A reference to a missing node fails when it is followed."""
        document = minimal_document()
        document["__schemas"]["Query"]["queryType"] = {"$ref": "#/__types/Missing"}
        schema = unmarshal(document)

        with pytest.raises(FormatError, match="segment 'Missing' not found"):
            schema.query_type

    def test_root_that_is_not_a_schema(self):
        """A tagged root that is not a schema is rejected."""
        with pytest.raises(FormatError, match="not a schema"):
            unmarshal({"__marshaled": "Scalar", "name": "Date"})

    def test_none_document(self):
        """Un-marshalling nothing is an error."""
        with pytest.raises(ValueError, match="cannot be None"):
            unmarshal(None)

    def test_collection_of_wrong_shape(self):
        """A child collection that is neither array nor object names its path."""
        document = minimal_document()
        document["__types"]["Query"]["fieldDefinitions"] = "hello"
        schema = unmarshal(document)

        with pytest.raises(FormatError, match="at '#/__types/Query/fieldDefinitions'") as exc_info:
            schema.query_type.field_definitions

        assert exc_info.value.reference == "#/__types/Query/fieldDefinitions"
        assert exc_info.value.tag is None

    def test_bucket_of_wrong_shape(self):
        """A top-level bucket that is neither array nor object is a format error."""
        document = minimal_document()
        document["__interfaces"] = 5

        with pytest.raises(FormatError) as exc_info:
            unmarshal(document)

        assert exc_info.value.reference == "#/__interfaces"
