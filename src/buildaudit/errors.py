"""Exceptions raised by the audit checks."""


class AuditError(Exception):
    """Base class for failures that should fail the build."""


class ConfigError(AuditError):
    """The project descriptor is missing, unreadable or malformed."""


class CheckFailed(AuditError):
    """A top-level check hit an unexpected error. The cause is chained."""
