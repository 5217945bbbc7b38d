class Defaults:
    MAX_CONCURRENT_ROWS = 64
    MIN_CONFIDENCE = 0.8
    CSV_ENCODING = "utf-8"
    INTERPOLATE_FORMAT = "${0}"
    CONFIG_FILE = "data_import_utility.toml"


class Limits:
    UNBOUNDED_LENGTH = 2_147_483_647
    CALCULATE_MIN_PLACES = -1
    CALCULATE_MAX_PLACES = 15


class Patterns:
    PLACEHOLDER = r"\$\{(\d+)\}"


class Messages:
    OPERATION_FAILED = "The operation failed."
    INVALID_FOR_COLLECTIONS = (
        "The operation cannot be applied to a collection of values."
    )
    INVALID_CALCULATION = "The calculation format is invalid."
    INVALID_REGEX = "Invalid regex pattern: {detail}"
    FIELD_NOT_IN_ROW = "Field '{field}' not found in data row."
    FIELD_NOT_IN_TABLE = "The field '{field}' does not exist in the data table."
    COMBINE_FIELD_FAILED = (
        "Failed to transform source field '{field}' for combination: {detail}"
    )
    NO_RECORD = "No data row is available to resolve source fields."
    NO_SOURCE_FIELD = "No source field is configured for this rule."
    CONDITIONAL_MISSING_COMPONENT = (
        "The conditional transformation requires a comparison operation, "
        "and both true and false mapping rules."
    )
    FIELD_REQUIRED = "The field is required."
    OPERAND_FAILED = "Failed to evaluate {operand} for {operation} operation: {detail}"
    OPERAND_MISSING = "{operand} must be configured for {operation} operation."
    TYPE_ALREADY_REGISTERED = "A type with TypeId '{type_id}' is already registered."
    MISSING_SOURCE_FIELDS = (
        "The source table does not contain the following mapped source fields: "
        "{fields}"
    )
    CONVERSION_FAILED = "Cannot convert '{value}' to {type_name}."
    RULE_MISCONFIGURED = "The rule for field '{field}' is misconfigured: {detail}"
