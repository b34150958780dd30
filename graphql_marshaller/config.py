"""
Marshalling options for the GraphQL schema marshaller.

Uses pydantic-settings so defaults can be overridden from the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

# Reserved names of the schema meta-model, excluded unless requested
INTROSPECTION_TYPES = (
    "__Schema",
    "__Type",
    "__TypeKind",
    "__Field",
    "__InputValue",
    "__EnumValue",
    "__Directive",
    "__DirectiveLocation",
)


class MarshallerOptions(BaseSettings):
    """Options applied while marshalling and un-marshalling a schema."""

    include_introspection_types: bool = Field(
        default=False,
        description="Emit the introspection types (__Schema, __Type, ...)",
    )
    include_directives: bool = Field(
        default=False,
        description="Emit and read the schema directives section",
    )

    model_config = {"env_prefix": "GRAPHQL_MARSHALLER_", "frozen": True}

    def includes_type(self, name: str) -> bool:
        """Whether a named type passes the introspection filter."""
        return self.include_introspection_types or name not in INTROSPECTION_TYPES
