"""Exception taxonomy for the update client.

Every error is terminal for the process and maps to exit code 1.
"""


class UpdateClientError(Exception):
    """Base class for all update client errors."""


class UsageError(UpdateClientError):
    """Bad or missing flags, stray positional arguments, invalid config."""


class ServiceConnectionError(UpdateClientError):
    """The update service could not be reached."""


class CallFailure(UpdateClientError):
    """A remote call returned a not-ok result."""


class SchedulingFailure(UpdateClientError):
    """The deferred exit task could not be queued on the event loop."""
