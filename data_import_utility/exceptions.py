from .constants import Messages


class DataImportError(Exception):
    pass


class ConfigurationError(DataImportError):
    pass


class TypeRegistrationError(ConfigurationError):
    pass


class TypeResolutionError(ConfigurationError):
    pass


class MissingOperandError(ConfigurationError):
    pass


class OperandEvaluationError(ConfigurationError):
    pass


class MaxSourceFieldsExceededError(ConfigurationError):
    pass


class MissingFieldMappingError(ConfigurationError):
    def __init__(self, missing_fields: list[str], message: str | None = None) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(
            message
            or Messages.MISSING_SOURCE_FIELDS.format(fields=", ".join(missing_fields))
        )


class SweepCancelledError(DataImportError):
    pass
