"""Engine exceptions."""


class UnoError(Exception):
    """Base class for all engine errors."""


class InvalidStateError(UnoError, ValueError):
    """Construction arguments or a snapshot violate a game invariant."""


class IllegalActionError(UnoError, ValueError):
    """An action is not allowed in the current state. The state is unchanged."""


class ConfigurationError(UnoError):
    """A required capability (shuffler, randomizer) is missing or unusable."""
