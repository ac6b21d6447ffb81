"""Exception types raised by the clustering core."""


class LengthMismatchError(ValueError):
    """Two symbol strings that must share one fixed length do not."""


class ProtocolError(RuntimeError):
    """A participant received an envelope out of protocol order."""
