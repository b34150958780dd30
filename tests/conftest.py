"""
Shared schema fixtures for the marshaller tests.

Provides:
- hello_schema: a single ``Query.hello: String`` field
- starwars_schema: interfaces, unions, enums, input objects, arguments,
  resolvers and a mutation
"""

import pytest
from graphql import (
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
)

from graphql_marshaller import StaticDataFetcher

DROIDS = {
    "2001": {"id": "2001", "name": "R2-D2", "primaryFunction": "Astromech", "friends": ["1000"]},
}
HUMANS = {
    "1000": {"id": "1000", "name": "Luke Skywalker", "homePlanet": "Tatooine", "friends": ["2001"]},
}


def get_character(character_id):
    return HUMANS.get(character_id) or DROIDS.get(character_id)


def resolve_character_type(character, info, abstract_type):
    return "Droid" if character["id"] in DROIDS else "Human"


def get_friends(character, info):
    return [get_character(friend) for friend in character["friends"]]


def get_hero(root, info, episode=None):
    return HUMANS["1000"] if episode == 5 else DROIDS["2001"]


def get_droid(root, info, id):
    return DROIDS.get(id)


def create_review(root, info, episode, review):
    return f"{review['stars']} stars: {review['commentary']}"


def build_starwars_schema():
    episode_enum = GraphQLEnumType(
        "Episode",
        {
            "NEWHOPE": GraphQLEnumValue(4, description="Released in 1977."),
            "EMPIRE": GraphQLEnumValue(5, description="Released in 1980."),
            "JEDI": GraphQLEnumValue(6, deprecation_reason="Use RETURN"),
        },
        description="One of the films in the Star Wars Trilogy",
    )

    character_interface = GraphQLInterfaceType(
        "Character",
        lambda: {
            "id": GraphQLField(GraphQLNonNull(GraphQLString)),
            "name": GraphQLField(GraphQLString),
            "friends": GraphQLField(GraphQLList(character_interface)),
            "appearsIn": GraphQLField(GraphQLList(episode_enum)),
        },
        resolve_type=resolve_character_type,
        description="A character in the Star Wars Trilogy",
    )

    human_type = GraphQLObjectType(
        "Human",
        lambda: {
            "id": GraphQLField(GraphQLNonNull(GraphQLString)),
            "name": GraphQLField(GraphQLString),
            "friends": GraphQLField(GraphQLList(character_interface), resolve=get_friends),
            "appearsIn": GraphQLField(GraphQLList(episode_enum)),
            "homePlanet": GraphQLField(GraphQLString),
        },
        interfaces=[character_interface],
    )

    droid_type = GraphQLObjectType(
        "Droid",
        lambda: {
            "id": GraphQLField(GraphQLNonNull(GraphQLString)),
            "name": GraphQLField(GraphQLString),
            "friends": GraphQLField(GraphQLList(character_interface), resolve=get_friends),
            "appearsIn": GraphQLField(GraphQLList(episode_enum)),
            "primaryFunction": GraphQLField(GraphQLString, deprecation_reason="Ask the droid"),
        },
        interfaces=[character_interface],
    )

    search_result = GraphQLUnionType(
        "SearchResult",
        [human_type, droid_type],
        resolve_type=resolve_character_type,
    )

    planet_type = GraphQLObjectType(
        "Planet",
        {"name": GraphQLField(GraphQLString), "climate": GraphQLField(GraphQLString)},
        description="Only reachable through the schema type list",
    )

    review_input = GraphQLInputObjectType(
        "ReviewInput",
        {
            "stars": GraphQLInputField(GraphQLNonNull(GraphQLInt)),
            "commentary": GraphQLInputField(GraphQLString, default_value="none"),
        },
    )

    query_type = GraphQLObjectType(
        "Query",
        lambda: {
            "hero": GraphQLField(
                character_interface,
                args={"episode": GraphQLArgument(episode_enum, description="The film")},
                resolve=get_hero,
            ),
            "droid": GraphQLField(
                droid_type,
                args={"id": GraphQLArgument(GraphQLNonNull(GraphQLString))},
                resolve=get_droid,
            ),
            "search": GraphQLField(
                GraphQLList(search_result),
                args={"text": GraphQLArgument(GraphQLString, default_value="R2")},
            ),
            "motto": GraphQLField(GraphQLString, resolve=StaticDataFetcher("May the Force be with you")),
        },
    )

    mutation_type = GraphQLObjectType(
        "Mutation",
        {
            "createReview": GraphQLField(
                GraphQLString,
                args={
                    "episode": GraphQLArgument(episode_enum),
                    "review": GraphQLArgument(GraphQLNonNull(review_input)),
                },
                resolve=create_review,
            ),
        },
    )

    return GraphQLSchema(query_type, mutation_type, types=[human_type, planet_type])


@pytest.fixture
def hello_schema():
    """Schema with a single ``Query.hello: String`` field."""
    query_type = GraphQLObjectType("Query", {"hello": GraphQLField(GraphQLString)})
    return GraphQLSchema(query_type)


@pytest.fixture
def static_hello_schema():
    """Schema whose ``hello`` field always answers ``world``."""
    query_type = GraphQLObjectType(
        "Query",
        {"hello": GraphQLField(GraphQLString, resolve=StaticDataFetcher("world"))},
    )
    return GraphQLSchema(query_type)


@pytest.fixture
def starwars_schema():
    """Schema covering every kind of schema node."""
    return build_starwars_schema()


@pytest.fixture
def starwars_factory():
    """Builds a fresh, equal star wars schema on every call."""
    return build_starwars_schema
