"""Message ids, markers and type sets used by the naming rules."""

STATIC_MARKER = "s_"
PRIVATE_FIELD_MARKER = "_"

# Declared types that are primitives/value types rather than class types.
VALUE_TYPE_NAMES = frozenset({
    "int",
    "float",
    "complex",
    "bool",
    "str",
    "bytes",
    "bytearray",
    "NoneType",
    "None",
})

FALLBACK_TYPE_NAME = "object"

UNDERSCORE_MSG_ID = "E9901"
UNDERSCORE_MSG_SYMBOL = "underscore-in-identifier"
UNDERSCORE_MSG_TEMPLATE = "Symbol '%s' contains an underscore '_'"

FIELD_PREFIX_MSG_ID = "E9902"
FIELD_PREFIX_MSG_SYMBOL = "field-prefix-mismatch"
FIELD_PREFIX_MSG_TEMPLATE = "Field '%s' must start with the '%s' prefix"

HANDLER_PREFIX_MSG_ID = "E9903"
HANDLER_PREFIX_MSG_SYMBOL = "handler-prefix-violation"
HANDLER_PREFIX_MSG_TEMPLATE = (
    "Handler method '%s' must be named '%s' followed by a capitalized name"
)

NAMING_MSGS = {
    UNDERSCORE_MSG_ID: (
        UNDERSCORE_MSG_TEMPLATE,
        UNDERSCORE_MSG_SYMBOL,
        "Identifiers must not contain underscores between their first and last character.",
    ),
    FIELD_PREFIX_MSG_ID: (
        FIELD_PREFIX_MSG_TEMPLATE,
        FIELD_PREFIX_MSG_SYMBOL,
        "Component fields carry a prefix derived from their declared type "
        "(public: 'Btn_Name', private: '_btnName').",
    ),
    HANDLER_PREFIX_MSG_ID: (
        HANDLER_PREFIX_MSG_TEMPLATE,
        HANDLER_PREFIX_MSG_SYMBOL,
        "Event and RPC handlers use an allow-listed prefix followed by a "
        "capitalized, underscore-free name.",
    ),
}

DEFAULT_HOOK_COMMAND = "underscore-lint check"
HOOK_MARKER_SUFFIX = ".underscore-naming-installed"
