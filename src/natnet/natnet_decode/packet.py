from enum import IntEnum

from natnet_decode.config.schema import DecoderArgs
from natnet_decode.cursor import ByteCursor
from natnet_decode.errors import LengthMismatch
from natnet_decode.frame_decoder import unpack_frame_of_data
from natnet_decode.mocap_data import NatNetPacket, Unsupported
from natnet_decode.utils.logger import INFO, configure, get_logger
from natnet_decode.version import ProtocolVersion, as_version

# message id (u16) + payload size (u16)
HEADER_SIZE = 4


class NatNetMessageId(IntEnum):
    """Client/server message ids."""

    CONNECT = 0
    SERVER_INFO = 1
    REQUEST = 2
    RESPONSE = 3
    REQUEST_MODELDEF = 4
    MODELDEF = 5
    REQUEST_FRAMEOFDATA = 6
    FRAME_OF_DATA = 7
    MESSAGE_STRING = 8
    DISCONNECT = 9
    KEEP_ALIVE = 10
    UNRECOGNIZED_REQUEST = 100


def message_name(message_id: int) -> str:
    try:
        return NatNetMessageId(message_id).name
    except ValueError:
        return "UNKNOWN"


def unpack_header(cursor: ByteCursor) -> tuple[int, int]:
    message_id = cursor.read_u16()
    packet_size = cursor.read_u16()
    return message_id, packet_size


def decode(version: ProtocolVersion | str, data: bytes | bytearray | memoryview) -> NatNetPacket:
    """Decode one complete NatNet datagram.

    Frames of data are fully decoded using ``version`` to decide which optional
    fields are on the wire. Any other message kind comes back as
    :class:`Unsupported` with its raw payload so a receive loop never stops on a
    message it does not interpret.

    :param version: the stream version negotiated with the server
    :param data: the datagram, starting at the message header
    :raises UnexpectedEof: the datagram is shorter than a field requires
    :raises LengthMismatch: the declared payload size exceeds the datagram
    :raises InvalidText: a text field is not UTF-8
    :raises MalformedTerminator: the frame's end-of-data tag is not zero
    """
    version = as_version(version)
    logger = get_logger()

    cursor = ByteCursor(data)
    message_id, packet_size = unpack_header(cursor)
    if logger.is_enabled_for(INFO):
        logger.info(f"Message ID : {message_id:3d} {message_name(message_id)}")
        logger.info(f"Packet Size: {packet_size}")

    if packet_size > cursor.remaining():
        raise LengthMismatch(packet_size, cursor.remaining())
    payload = cursor.sub_cursor(packet_size)

    if message_id == NatNetMessageId.FRAME_OF_DATA:
        return unpack_frame_of_data(version, payload)
    return Unsupported(message_id=message_id, payload=payload.read_bytes(packet_size))


class NatNet:
    """Decoder bound to one negotiated stream version.

    Holds nothing but the immutable version, so a single instance can be shared
    by any number of receive threads.
    """

    def __init__(self, version: ProtocolVersion | str) -> None:
        self._version = as_version(version)

    @classmethod
    def from_args(cls, args: DecoderArgs) -> "NatNet":
        if args.log_level != "DISABLED":
            configure(format_strings=list(args.log_format), level=args.log_level)
        return cls(args.protocol_version)

    @property
    def version(self) -> ProtocolVersion:
        return self._version

    def unpack(self, data: bytes | bytearray | memoryview) -> NatNetPacket:
        return decode(self._version, data)

    def unpack_type(
        self, message_id: int, data: bytes | bytearray | memoryview
    ) -> NatNetPacket | None:
        """Decode ``data`` only when its header carries ``message_id``.

        Returns None for any other kind, or when the datagram is too short to
        hold a header. Useful to pick out server info packets before the
        stream version is known.
        """
        if len(data) < HEADER_SIZE:
            return None
        peeked_id, _ = unpack_header(ByteCursor(data, 0, HEADER_SIZE))
        if peeked_id != message_id:
            return None
        return decode(self._version, data)

    def __repr__(self) -> str:
        return f"NatNet(version='{self._version}')"
