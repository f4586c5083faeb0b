class DecodeError(Exception):
    """Base class for every failure while decoding a single NatNet packet.

    Errors are local to the packet that raised them; the decoder keeps no state
    between calls so the caller can drop the packet and continue with the next.
    """


class UnexpectedEof(DecodeError):
    """The buffer ended before a field could be read in full."""

    def __init__(self, needed: int, remaining: int) -> None:
        super().__init__(f"Need {needed} byte(s) but only {remaining} remain in buffer")
        self.needed = needed
        self.remaining = remaining


class InvalidText(DecodeError):
    """A null-terminated text field is not valid UTF-8."""


class LengthMismatch(DecodeError):
    """A declared length or count disagrees with the bytes actually available."""

    def __init__(self, declared: int, available: int, what: str = "payload length") -> None:
        super().__init__(f"Declared {what} {declared} but {available} byte(s) available")
        self.declared = declared
        self.available = available


class MalformedTerminator(DecodeError):
    """End-of-data tag is not zero, most likely a version mismatch."""

    def __init__(self, value: int) -> None:
        super().__init__(
            f"End of data tag 0 != {value} (most likely caused by version mismatch)"
        )
        self.value = value


class ParseError(ValueError):
    """A protocol version string could not be parsed."""


class UnknownDataSetType(DecodeError):
    """A model definition names a data set type outside marker set, rigid body and skeleton."""

    def __init__(self, value: int) -> None:
        super().__init__(f"Unknown data set type {value} in model definition")
        self.value = value
