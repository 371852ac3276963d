class AttributionError(Exception):
    """Base class for fatal conditions that abort the run with a non-zero exit."""

    exit_code = 1


class CIEnvironmentError(AttributionError):
    """Event payload, output sink or configuration is missing or unusable."""


class RevisionError(AttributionError):
    """Base/head could not be resolved or the commit range could not be listed."""


class DeclarationError(AttributionError):
    """The PR body carries no valid declared AI percentage."""
