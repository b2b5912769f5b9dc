from __future__ import annotations


class ReadinessError(Exception):
    """Base class for failures of a readiness analysis request."""


class ConfigurationError(ReadinessError, RuntimeError):
    """Credential or model configuration is missing. Raised before any network call."""


class ServiceError(ReadinessError, RuntimeError):
    """The model service could not be reached or rejected the request."""


class ReportFormatError(ReadinessError, ValueError):
    """The model response is empty, not JSON, or does not match the report contract."""


class InvalidTransitionError(RuntimeError):
    pass
