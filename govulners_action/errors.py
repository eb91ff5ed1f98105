"""Exception hierarchy for the action.

Severity gating is not an error: it is reported through
:class:`~govulners_action.models.BuildStatus`.
"""


class ActionError(Exception):
    """Base class for errors that abort a run."""


class ConfigurationError(ActionError):
    """Bad or contradictory input. Raised before any process is started."""


class InstallationError(ActionError):
    """Fetching or installing the scanner failed."""


class ExecutionError(ActionError):
    """The scanner process could not be spawned."""
