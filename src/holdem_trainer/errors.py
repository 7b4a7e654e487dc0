"""Exception types raised by the trainer engine."""


class HoldemError(Exception):
    """Base class for trainer errors."""


class ConfigurationError(HoldemError, ValueError):
    """Game settings are invalid (blinds, player count, stacks)."""


class DeckExhaustedError(HoldemError, RuntimeError):
    """The deck ran out of cards mid-hand. Indicates a corrupted hand state."""


class HandNotReadyError(HoldemError, RuntimeError):
    """A new hand cannot be dealt, e.g. fewer than two players have chips."""
