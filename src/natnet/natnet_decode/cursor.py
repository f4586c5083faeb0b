import struct

from natnet_decode.errors import InvalidText, UnexpectedEof

# Create structs for reading various object types to speed up parsing.
Int16Value = struct.Struct("<h")
UInt16Value = struct.Struct("<H")
Int32Value = struct.Struct("<i")
UInt32Value = struct.Struct("<I")
Int64Value = struct.Struct("<q")
UInt64Value = struct.Struct("<Q")
FloatValue = struct.Struct("<f")
DoubleValue = struct.Struct("<d")
Vector3Value = struct.Struct("<fff")
QuaternionValue = struct.Struct("<ffff")


class ByteCursor:
    """Bounds-checked little-endian reader over an immutable byte buffer.

    The cursor reads the window ``[start, end)`` of ``data``. Every read
    advances the position by exactly the bytes it consumed, and every read
    raises :class:`UnexpectedEof` when the window holds fewer bytes than the
    field needs. After a failed read the position is unspecified and the
    cursor should be discarded.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(
        self, data: bytes | bytearray | memoryview, start: int = 0, end: int | None = None
    ) -> None:
        # a private immutable copy is only made for mutable inputs
        self._data = data if isinstance(data, bytes) else bytes(data)
        size = len(self._data)
        if end is None:
            end = size
        if not 0 <= start <= end <= size:
            raise ValueError(f"Invalid cursor window [{start}, {end}) for buffer of {size} bytes")
        self._pos = start
        self._end = end

    @property
    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return self._end - self._pos

    def _take(self, size: int) -> int:
        # returns the offset to read from and advances past it
        if size < 0:
            raise ValueError(f"Cannot read a negative number of bytes ({size})")
        remaining = self._end - self._pos
        if size > remaining:
            raise UnexpectedEof(size, remaining)
        offset = self._pos
        self._pos = offset + size
        return offset

    def _unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack_from(self._data, self._take(fmt.size))

    # Integers
    # ----------------------------------------
    def read_i16(self) -> int:
        return self._unpack(Int16Value)[0]

    def read_u16(self) -> int:
        return self._unpack(UInt16Value)[0]

    def read_i32(self) -> int:
        return self._unpack(Int32Value)[0]

    def read_u32(self) -> int:
        return self._unpack(UInt32Value)[0]

    def read_i64(self) -> int:
        return self._unpack(Int64Value)[0]

    def read_u64(self) -> int:
        return self._unpack(UInt64Value)[0]

    # Floats
    # ----------------------------------------
    def read_f32(self) -> float:
        return self._unpack(FloatValue)[0]

    def read_f64(self) -> float:
        return self._unpack(DoubleValue)[0]

    def read_vector3(self) -> tuple[float, float, float]:
        return self._unpack(Vector3Value)

    def read_quaternion(self) -> tuple[float, float, float, float]:
        return self._unpack(QuaternionValue)

    def read_floats(self, count: int) -> tuple[float, ...]:
        """Read ``count`` consecutive little-endian f32 values."""
        if count < 0:
            raise ValueError(f"Cannot read a negative number of floats ({count})")
        offset = self._take(FloatValue.size * count)
        return struct.unpack_from(f"<{count}f", self._data, offset)

    # Text and raw bytes
    # ----------------------------------------
    def read_cstring(self) -> str:
        """Read a null-terminated UTF-8 string, consuming the terminator."""
        terminator = self._data.find(b"\0", self._pos, self._end)
        if terminator < 0:
            remaining = self.remaining()
            raise UnexpectedEof(remaining + 1, remaining)
        raw = self._data[self._pos : terminator]
        self._pos = terminator + 1
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidText(f"Could not convert C-String {raw!r} into str: {e.reason}") from e

    def read_bytes(self, size: int) -> bytes:
        """Read ``size`` opaque bytes as an owned copy."""
        offset = self._take(size)
        return self._data[offset : offset + size]

    def skip(self, size: int) -> None:
        """Advance past ``size`` bytes without interpreting them."""
        self._take(size)

    def sub_cursor(self, size: int) -> "ByteCursor":
        """Consume ``size`` bytes and return a new cursor bounded to exactly them."""
        offset = self._take(size)
        return ByteCursor(self._data, offset, offset + size)
