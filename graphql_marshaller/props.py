"""
Property names and type tags used as keys in the marshalled document.

The type tag of every node lives under ``MARSHALED_TYPE``. Tags are plain
kind names, independent of the Python classes that back them.
"""

# Node properties
ARGUMENTS = "arguments"
DATA_FETCHER = "dataFetcher"
DEFAULT_VALUE = "defaultValue"
DEPRECATION_REASON = "deprecationReason"
DESCRIPTION = "description"
DICTIONARY = "dictionary"
DIRECTIVES = "directives"
FIELD_DEFINITIONS = "fieldDefinitions"
FIELDS = "fields"
ID = "id"
INTERFACES = "interfaces"
IS_ON_FIELD = "isOnField"
IS_ON_FRAGMENT = "isOnFragment"
IS_ON_OPERATION = "isOnOperation"
IS_REPEATABLE = "isRepeatable"
LOCATIONS = "locations"
MUTATION_TYPE = "mutationType"
NAME = "name"
QUERY_TYPE = "queryType"
SPECIFIED_BY_URL = "specifiedByURL"
STATIC_VALUE = "staticValue"
SUBSCRIPTION_TYPE = "subscriptionType"
TYPE = "type"
TYPES = "types"
TYPE_RESOLVER = "typeResolver"
VALUE = "value"
VALUES = "values"
WRAPPED_TYPE = "wrappedType"

# Document envelope
DATA_FETCHERS = "__dataFetchers"
MARSHALED_TYPE = "__marshaled"
MARSHALED_TYPE_CLASS = "__marshaledClass"
PARENT = "__parent"
SCALAR_TYPES = "__scalarTypes"
SCHEMA_INTERFACES = "__interfaces"
SCHEMA_TYPES = "__types"
SCHEMAS = "__schemas"
TYPE_RESOLVERS = "__typeResolvers"

# Type tags
TAG_ARGUMENT = "Argument"
TAG_DATA_FETCHER = "DataFetcher"
TAG_DIRECTIVE = "Directive"
TAG_ENUM = "Enum"
TAG_ENUM_VALUE = "EnumValue"
TAG_FIELD_DEFINITION = "FieldDefinition"
TAG_INPUT_FIELD = "InputField"
TAG_INPUT_OBJECT = "InputObject"
TAG_INTERFACE = "Interface"
TAG_LIST = "List"
TAG_NON_NULL = "NonNull"
TAG_OBJECT = "Object"
TAG_SCALAR = "Scalar"
TAG_SCHEMA = "Schema"
TAG_STATIC_DATA_FETCHER = "StaticDataFetcher"
TAG_TYPE_REFERENCE = "TypeReference"
TAG_TYPE_RESOLVER = "TypeResolver"
TAG_UNION = "Union"
