class PitchTrackerError(Exception):
    """Base class for all pitch tracker errors."""


class ValidationError(PitchTrackerError):
    """Raised when input is malformed or missing. No state is changed."""


class PreconditionError(PitchTrackerError):
    """Raised when an action is attempted out of order. No state is changed."""


class PersistenceError(PitchTrackerError):
    """Raised when the session snapshot could not be written to storage.

    The in-memory mutation that triggered the write has already been applied
    and stays authoritative for the rest of the process.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class ConfigError(PitchTrackerError):
    """Raised when a configuration value is unusable."""
