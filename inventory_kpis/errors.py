"""Exceptions raised by the KPI pipeline."""


class KpiPipelineError(Exception):
    """Base class for pipeline failures."""


class InvalidConfigurationError(KpiPipelineError, ValueError):
    """A configuration value is outside its valid domain."""


class MalformedInputError(KpiPipelineError):
    """Input rows do not conform to the transaction or reference schemas."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []
