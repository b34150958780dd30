"""
Decorators of GraphQL types: named types, type modifiers and type references.

Named types (scalar, object, interface, union, enum, input object) are
written once into their bucket and referenced everywhere else. List and
non-null modifiers are always written inline. A type reference is a named
placeholder resolved by name against the types of the same schema.

Invariants:
    - Scalars are keyed by name; registering a second scalar with the same
      name replaces the first
    - Interfaces live in ``__interfaces``, every other non-scalar named type
      in ``__types``
    - Children (enum values, input fields) are read from the same backing as
      their parent
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from graphql import Undefined

from ..errors import UnknownTypeError
from ..props import (
    DEFAULT_VALUE,
    DEPRECATION_REASON,
    FIELD_DEFINITIONS,
    FIELDS,
    INTERFACES,
    MARSHALED_TYPE,
    NAME,
    SPECIFIED_BY_URL,
    TAG_ENUM,
    TAG_ENUM_VALUE,
    TAG_INPUT_FIELD,
    TAG_INPUT_OBJECT,
    TAG_INTERFACE,
    TAG_LIST,
    TAG_NON_NULL,
    TAG_OBJECT,
    TAG_SCALAR,
    TAG_TYPE_REFERENCE,
    TAG_UNION,
    TYPE,
    TYPE_RESOLVER,
    TYPES,
    VALUE,
    VALUES,
    WRAPPED_TYPE,
)
from ..reference import INTERFACES_REFERENCE, SCALARS_REFERENCE, TYPES_REFERENCE
from .decorator import (
    DeprecatableMixin,
    SchemaChildDecorator,
    SchemaDecorator,
    put_if_present,
    put_if_not_empty,
    to_json_value,
)

if TYPE_CHECKING:
    from ..reference import JsonReference
    from .behaviors import TypeResolverDecorator
    from .fields import FieldDefinitionDecorator


@dataclass(frozen=True)
class TypeReference:
    """A named placeholder for a type, resolved against the schema's types."""

    name: str


class ScalarTypeDecorator(SchemaDecorator):
    tag = TAG_SCALAR
    bucket_prefix = SCALARS_REFERENCE

    def _register(self) -> JsonReference:
        return self._context.register_scalar_type(self)

    @property
    def specified_by_url(self) -> Optional[str]:
        return self._read(lambda original: original.specified_by_url, SPECIFIED_BY_URL)

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        put_if_present(json, SPECIFIED_BY_URL, self.specified_by_url)
        return json


class _FieldsContainerDecorator(SchemaDecorator):
    """Field lookup shared by object and interface types."""

    @property
    def field_definitions(self) -> List[FieldDefinitionDecorator]:
        return self._select(
            lambda original: [
                self._context.decorator_of(field, self, name)
                for name, field in original.fields.items()
            ],
            lambda json: self._context.unmarshall_list(json, FIELD_DEFINITIONS, self),
        )

    @property
    def fields(self) -> Dict[str, FieldDefinitionDecorator]:
        return {field.name: field for field in self.field_definitions}

    def get_field_definition(self, name: str) -> FieldDefinitionDecorator:
        """Look up a field by name.

        Raises:
            UnknownTypeError: If the type has no such field
        """
        return self._find(self.field_definitions, name, "Field")

    @property
    def interfaces(self) -> List[InterfaceTypeDecorator]:
        return self._select(
            lambda original: [
                self._context.decorator_of(interface)
                for interface in original.interfaces
            ],
            lambda json: self._context.unmarshall_list(json, INTERFACES),
        )

    def _fields_json(self) -> List[Dict[str, Any]]:
        return [field.to_json() for field in self.field_definitions]

    def _interfaces_json(self) -> List[Dict[str, Any]]:
        return [self._context.reference_to(i) for i in self.interfaces]


class _TypeResolverDecorator(SchemaDecorator):
    """Type resolver of an abstract type, kept only when set."""

    @property
    def type_resolver(self) -> Optional[TypeResolverDecorator]:
        return self._select(
            lambda original: None
            if original.resolve_type is None
            else self._context.decorator_of(original.resolve_type, self),
            lambda json: self._context.unmarshall(json.get(TYPE_RESOLVER), self),
        )

    def _put_type_resolver(self, json: Dict[str, Any]) -> None:
        resolver = self.type_resolver
        if resolver is not None:
            json[TYPE_RESOLVER] = self._context.reference_to(resolver)


class ObjectTypeDecorator(_FieldsContainerDecorator):
    tag = TAG_OBJECT
    bucket_prefix = TYPES_REFERENCE

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        json[FIELD_DEFINITIONS] = self._fields_json()
        put_if_not_empty(json, INTERFACES, self._interfaces_json())
        return json


class InterfaceTypeDecorator(_TypeResolverDecorator, _FieldsContainerDecorator):
    tag = TAG_INTERFACE
    bucket_prefix = INTERFACES_REFERENCE

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        self._put_type_resolver(json)
        json[FIELD_DEFINITIONS] = self._fields_json()
        put_if_not_empty(json, INTERFACES, self._interfaces_json())
        return json


class UnionTypeDecorator(_TypeResolverDecorator):
    tag = TAG_UNION
    bucket_prefix = TYPES_REFERENCE

    @property
    def types(self) -> List[ObjectTypeDecorator]:
        """Member types of the union, in declaration order."""
        return self._select(
            lambda original: [self._context.decorator_of(member) for member in original.types],
            lambda json: self._context.unmarshall_list(json, TYPES),
        )

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        json[TYPES] = [self._context.reference_to(member) for member in self.types]
        self._put_type_resolver(json)
        return json


class EnumTypeDecorator(SchemaDecorator):
    tag = TAG_ENUM
    bucket_prefix = TYPES_REFERENCE

    @property
    def values(self) -> List[EnumValueDecorator]:
        return self._select(
            lambda original: [
                self._context.decorator_of(value, self, name)
                for name, value in original.values.items()
            ],
            lambda json: self._context.unmarshall_list(json, VALUES, self),
        )

    def get_value(self, name: str) -> EnumValueDecorator:
        """Look up an enum value by name.

        Raises:
            UnknownTypeError: If the enum has no such value
        """
        return self._find(self.values, name, "Enum value")

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        json[VALUES] = [value.to_json() for value in self.values]
        return json


class EnumValueDecorator(DeprecatableMixin, SchemaChildDecorator):
    tag = TAG_ENUM_VALUE
    child_bucket = VALUES

    @property
    def value(self) -> Any:
        """Runtime value. Python enum members are kept by name."""
        return self._select(lambda original: to_json_value(original.value), lambda json: json.get(VALUE))

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        json[VALUE] = self.value
        put_if_present(json, DEPRECATION_REASON, self.deprecation_reason)
        return json


class InputObjectTypeDecorator(SchemaDecorator):
    tag = TAG_INPUT_OBJECT
    bucket_prefix = TYPES_REFERENCE

    @property
    def input_fields(self) -> List[InputFieldDecorator]:
        return self._select(
            lambda original: [
                self._context.decorator_of(field, self, name)
                for name, field in original.fields.items()
            ],
            lambda json: self._context.unmarshall_list(json, FIELDS, self),
        )

    @property
    def fields(self) -> Dict[str, InputFieldDecorator]:
        return {field.name: field for field in self.input_fields}

    def get_field(self, name: str) -> InputFieldDecorator:
        """Look up an input field by name.

        Raises:
            UnknownTypeError: If the input object has no such field
        """
        return self._find(self.input_fields, name, "Input field")

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        json[FIELDS] = [field.to_json() for field in self.input_fields]
        return json


class InputValueDecorator(DeprecatableMixin, SchemaChildDecorator):
    """Type and default value shared by arguments and input fields."""

    @property
    def type(self) -> SchemaDecorator:
        return self._select(
            lambda original: self._context.decorator_of(original.type, self),
            lambda json: self._context.unmarshall(json.get(TYPE), self),
        )

    @property
    def has_default_value(self) -> bool:
        return self._select(
            lambda original: original.default_value is not Undefined,
            lambda json: DEFAULT_VALUE in json,
        )

    @property
    def default_value(self) -> Any:
        """Default value, or ``Undefined`` when none is defined. May be None."""
        return self._select(
            lambda original: to_json_value(original.default_value)
            if original.default_value is not Undefined
            else Undefined,
            lambda json: json.get(DEFAULT_VALUE, Undefined),
        )

    def _put_input_value(self, json: Dict[str, Any]) -> None:
        json[TYPE] = self._context.reference_to(self.type)
        if self.has_default_value:
            json[DEFAULT_VALUE] = self.default_value
        put_if_present(json, DEPRECATION_REASON, self.deprecation_reason)


class InputFieldDecorator(InputValueDecorator):
    tag = TAG_INPUT_FIELD
    child_bucket = FIELDS

    def _marshal(self) -> Dict[str, Any]:
        json = self._base_json()
        self._put_input_value(json)
        return json


class _ModifierDecorator(SchemaChildDecorator):
    """List and non-null modifiers. Always written inline."""

    child_bucket = WRAPPED_TYPE

    @property
    def reference_key(self) -> str:
        return ""

    @property
    def name(self) -> None:
        return None

    @property
    def description(self) -> None:
        return None

    @property
    def wrapped_type(self) -> SchemaDecorator:
        return self._select(
            lambda original: self._context.decorator_of(original.of_type, self),
            lambda json: self._context.unmarshall(json.get(WRAPPED_TYPE), self),
        )

    of_type = wrapped_type

    def _marshal(self) -> Dict[str, Any]:
        return {
            MARSHALED_TYPE: self.tag,
            WRAPPED_TYPE: self._context.reference_to(self.wrapped_type),
        }


class ListDecorator(_ModifierDecorator):
    tag = TAG_LIST


class NonNullDecorator(_ModifierDecorator):
    tag = TAG_NON_NULL


class TypeReferenceDecorator(SchemaDecorator):
    """Named placeholder for a type.

    It is addressed at the bucket of the type it names, so references to it
    are written as references to that type. The target is looked up lazily.
    """

    tag = TAG_TYPE_REFERENCE

    @property
    def description(self) -> None:
        return None

    @property
    def bucket_prefix(self) -> str:  # type: ignore[override]
        target = self._context.named_type(self.name)
        if target is not None and target is not self:
            return target.bucket_prefix
        return TYPES_REFERENCE

    @property
    def target(self) -> SchemaDecorator:
        """The named type this reference resolves to.

        Raises:
            UnknownTypeError: If no type of that name is known to the context
        """
        target = self._context.named_type(self.name)
        if target is None or target is self:
            raise UnknownTypeError(
                f"Type reference '{self.name}' does not resolve", tag=self.tag, name=self.name
            )
        return target

    def _marshal(self) -> Dict[str, Any]:
        return {MARSHALED_TYPE: self.tag, NAME: self.name}
