"""
Decorators of field definitions, arguments and directives.

Field definitions and arguments are written inline inside their parent.
A field keeps its data fetcher only when it is not graphql-core's default
resolver; the fetcher itself is written to ``__dataFetchers`` and referenced.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from graphql import DirectiveLocation

from ..props import (
    ARGUMENTS,
    DATA_FETCHER,
    DEPRECATION_REASON,
    DIRECTIVES,
    FIELD_DEFINITIONS,
    IS_ON_FIELD,
    IS_ON_FRAGMENT,
    IS_ON_OPERATION,
    IS_REPEATABLE,
    LOCATIONS,
    NAME,
    TAG_ARGUMENT,
    TAG_DIRECTIVE,
    TAG_FIELD_DEFINITION,
    TYPE,
)
from .behaviors import DataFetcherDecorator, is_trivial_fetcher
from .decorator import DeprecatableMixin, SchemaChildDecorator, SchemaDecorator, put_if_not_empty, put_if_present
from .types import InputValueDecorator

OPERATION_LOCATIONS = ("QUERY", "MUTATION", "SUBSCRIPTION")
FRAGMENT_LOCATIONS = ("FRAGMENT_DEFINITION", "FRAGMENT_SPREAD", "INLINE_FRAGMENT")
FIELD_LOCATIONS = ("FIELD",)


class _ArgumentsDecorator(SchemaChildDecorator):
    """Argument lookup shared by fields and directives."""

    @property
    def arguments(self) -> List[ArgumentDecorator]:
        return self._select(
            lambda original: [
                self._context.decorator_of(argument, self, name)
                for name, argument in original.args.items()
            ],
            lambda json: self._context.unmarshall_list(json, ARGUMENTS, self),
        )

    @property
    def args(self) -> Dict[str, ArgumentDecorator]:
        return {argument.name: argument for argument in self.arguments}

    def get_argument(self, name: str) -> ArgumentDecorator:
        """Look up an argument by name.

        Raises:
            UnknownTypeError: If there is no such argument
        """
        return self._find(self.arguments, name, "Argument")

    def _arguments_json(self) -> List[Dict[str, Any]]:
        return [argument.to_json() for argument in self.arguments]


class FieldDefinitionDecorator(DeprecatableMixin, _ArgumentsDecorator):
    tag = TAG_FIELD_DEFINITION
    child_bucket = FIELD_DEFINITIONS

    @property
    def type(self) -> SchemaDecorator:
        return self._select(
            lambda original: self._context.decorator_of(original.type, self),
            lambda json: self._context.unmarshall(json.get(TYPE), self),
        )

    @property
    def data_fetcher(self) -> Optional[DataFetcherDecorator]:
        """The field's resolver, or None when it resolves by default."""
        return self._select(
            lambda original: None
            if is_trivial_fetcher(original.resolve)
            else self._context.decorator_of(original.resolve, self),
            lambda json: self._context.unmarshall(json.get(DATA_FETCHER), self),
        )

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        json[TYPE] = self._context.reference_to(self.type)
        fetcher = self.data_fetcher
        if fetcher is not None:
            json[DATA_FETCHER] = self._context.reference_to(fetcher)
        put_if_not_empty(json, ARGUMENTS, self._arguments_json())
        put_if_present(json, DEPRECATION_REASON, self.deprecation_reason)
        return json


class ArgumentDecorator(InputValueDecorator):
    tag = TAG_ARGUMENT
    child_bucket = ARGUMENTS

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        self._put_input_value(json)
        return json


class DirectiveDecorator(_ArgumentsDecorator):
    """Directive definition of a schema.

    The three ``isOn*`` flags are derived from the locations of a live
    directive. A serialized directive without locations gets them back
    from the flags.
    """

    tag = TAG_DIRECTIVE
    child_bucket = DIRECTIVES

    @property
    def name(self) -> Optional[str]:
        return self._read(lambda original: original.name, NAME)

    @property
    def locations(self) -> List[str]:
        return self._select(
            lambda original: [location.name for location in original.locations],
            self._locations_from_json,
        )

    @property
    def directive_locations(self) -> List[DirectiveLocation]:
        return [DirectiveLocation[location] for location in self.locations]

    @property
    def is_on_operation(self) -> bool:
        return self._flag(IS_ON_OPERATION, OPERATION_LOCATIONS)

    @property
    def is_on_fragment(self) -> bool:
        return self._flag(IS_ON_FRAGMENT, FRAGMENT_LOCATIONS)

    @property
    def is_on_field(self) -> bool:
        return self._flag(IS_ON_FIELD, FIELD_LOCATIONS)

    @property
    def is_repeatable(self) -> bool:
        return bool(self._read(lambda original: original.is_repeatable, IS_REPEATABLE, False))

    def _flag(self, key: str, locations: tuple) -> bool:
        stored = self._read(lambda _: None, key)
        if stored is not None:
            return bool(stored)
        return any(location in locations for location in self.locations)

    @staticmethod
    def _locations_from_json(json: Dict[str, Any]) -> List[str]:
        if LOCATIONS in json:
            return list(json[LOCATIONS])
        locations: List[str] = []
        if json.get(IS_ON_OPERATION):
            locations.extend(OPERATION_LOCATIONS)
        if json.get(IS_ON_FRAGMENT):
            locations.extend(FRAGMENT_LOCATIONS)
        if json.get(IS_ON_FIELD):
            locations.extend(FIELD_LOCATIONS)
        return locations

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        put_if_not_empty(json, ARGUMENTS, self._arguments_json())
        json[IS_ON_OPERATION] = self.is_on_operation
        json[IS_ON_FRAGMENT] = self.is_on_fragment
        json[IS_ON_FIELD] = self.is_on_field
        json[LOCATIONS] = self.locations
        json[IS_REPEATABLE] = self.is_repeatable
        return json
