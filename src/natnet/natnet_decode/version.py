from typing import NamedTuple

from natnet_decode.errors import ParseError


class ProtocolVersion(NamedTuple):
    """NatNet stream version as (major, minor, patch, build).

    Ordering is plain tuple ordering, major first, so version gates are
    written as ``version >= SKELETONS``.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0

    @classmethod
    def parse(cls, text: str) -> "ProtocolVersion":
        """Parse a dotted version such as ``"2.9"`` or ``"4.1.0.0"``.

        Missing trailing components default to 0.

        :raises ParseError: on an empty string, a non-numeric component or
            more than four components
        """
        if not isinstance(text, str):
            raise ParseError(f"Version must be a string, got {type(text).__name__}")
        stripped = text.strip()
        if not stripped:
            raise ParseError("Empty version string")
        parts = stripped.split(".")
        if len(parts) > 4:
            raise ParseError(f"Too many version components in '{text}'")
        numbers = []
        for part in parts:
            if not part.isdigit() or not part.isascii():
                raise ParseError(f"Invalid version component '{part}' in '{text}'")
            numbers.append(int(part))
        return cls(*numbers)

    @classmethod
    def from_bytes(cls, data: bytes | memoryview) -> "ProtocolVersion":
        """Build a version from the 4 unsigned bytes a server sends in its info packet."""
        if len(data) != 4:
            raise ParseError(f"Version needs exactly 4 bytes, got {len(data)}")
        return cls(*bytes(data))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}.{self.build}"


# Field groups and the stream version that introduced (or removed) them.
SKELETONS = ProtocolVersion(2, 1)
LABELED_MARKERS = ProtocolVersion(2, 3)
RIGID_BODY_PARAMS = ProtocolVersion(2, 6)
LABELED_MARKER_SIZE = ProtocolVersion(2, 6)
LABELED_MARKER_PARAMS = ProtocolVersion(2, 6)
DOUBLE_TIMESTAMP = ProtocolVersion(2, 7)
FORCE_PLATES = ProtocolVersion(2, 9)
# legacy latency is only sent below this version
LATENCY_REMOVED = ProtocolVersion(3, 0)
CAMERA_TIMESTAMPS = ProtocolVersion(3, 0)


def has_field(version: ProtocolVersion, threshold: ProtocolVersion) -> bool:
    """True when a field group introduced at ``threshold`` is on the wire for ``version``."""
    return version >= threshold


def as_version(version: "ProtocolVersion | str | tuple[int, ...]") -> ProtocolVersion:
    """Coerce a version given as a string or plain tuple into a ProtocolVersion."""
    if isinstance(version, ProtocolVersion):
        return version
    if isinstance(version, str):
        return ProtocolVersion.parse(version)
    if isinstance(version, tuple) and len(version) <= 4 and all(
        isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in version
    ):
        return ProtocolVersion(*version)
    raise ParseError(f"Cannot interpret {version!r} as a protocol version")
