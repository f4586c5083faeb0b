"""Helpers for the payloads of message kinds that ``decode`` returns as Unsupported.

None of these are called by the frame decoder. A receive loop picks them up
once it has matched ``Unsupported.message_id`` against
:class:`~natnet_decode.packet.NatNetMessageId`.
"""

from natnet_schemas.base_types import NatNetPydanticModel

from natnet_decode.cursor import ByteCursor
from natnet_decode.errors import InvalidText, ParseError
from natnet_decode.mocap_data import get_tab_str
from natnet_decode.utils.logger import DEBUG, get_logger
from natnet_decode.version import ProtocolVersion

# fixed width of the application name in a server info payload
MAX_NAMELENGTH = 256


class ServerInfo(NatNetPydanticModel):
    application_name: str
    server_version: ProtocolVersion
    natnet_version: ProtocolVersion

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_str = f"{out_tab_str}Application Name: {self.application_name}\n"
        out_str += f"{out_tab_str}Server Version  : {self.server_version}\n"
        out_str += f"{out_tab_str}NatNet Version  : {self.natnet_version}\n"
        return out_str


def decode_server_info(payload: bytes | memoryview) -> ServerInfo:
    """Decode a SERVER_INFO payload (the server's reply to CONNECT).

    :raises UnexpectedEof: the payload is shorter than 264 bytes
    :raises InvalidText: the application name is not UTF-8
    """
    cursor = ByteCursor(payload)
    # the name is null padded to a fixed width
    raw_name = cursor.read_bytes(MAX_NAMELENGTH).partition(b"\0")[0]
    try:
        application_name = raw_name.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidText(f"Could not convert application name {raw_name!r}: {e.reason}") from e
    server_version = ProtocolVersion.from_bytes(cursor.read_bytes(4))
    natnet_version = ProtocolVersion.from_bytes(cursor.read_bytes(4))

    logger = get_logger()
    if logger.is_enabled_for(DEBUG):
        logger.debug(f"Sending Application Name: {application_name}")
        logger.debug(f"NatNetVersion {natnet_version}")
        logger.debug(f"ServerVersion {server_version}")

    return ServerInfo(
        application_name=application_name,
        server_version=server_version,
        natnet_version=natnet_version,
    )


def decode_message_string(payload: bytes | memoryview) -> str:
    """Decode a MESSAGE_STRING payload."""
    return ByteCursor(payload).read_cstring()


def decode_response(payload: bytes | memoryview) -> int | str:
    """Decode a RESPONSE payload.

    A 4 byte payload is a signed command result code, anything else is the
    text reply to a string command.
    """
    cursor = ByteCursor(payload)
    if cursor.remaining() == 4:
        return cursor.read_i32()
    return cursor.read_cstring()


def bitstream_version(text: str) -> ProtocolVersion | None:
    """Extract the stream version from a ``"Bitstream,<major>.<minor>"`` response.

    Returns None when ``text`` is any other response.
    """
    message_list = text.split(",")
    if len(message_list) < 2 or message_list[0] != "Bitstream":
        return None
    # a bare major number is not a version report
    if "." not in message_list[1]:
        return None
    try:
        return ProtocolVersion.parse(message_list[1])
    except ParseError:
        return None
