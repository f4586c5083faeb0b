import struct

import pytest
from natnet_decode.errors import InvalidText, UnexpectedEof
from natnet_decode.messages import (
    MAX_NAMELENGTH,
    bitstream_version,
    decode_message_string,
    decode_response,
    decode_server_info,
)
from natnet_decode.version import ProtocolVersion


def make_server_info(name: bytes, server: bytes, natnet: bytes) -> bytes:
    return name.ljust(MAX_NAMELENGTH, b"\0") + server + natnet


def test_decode_server_info() -> None:
    payload = make_server_info(b"Motive", bytes([3, 0, 1, 0]), bytes([3, 1, 0, 0]))
    info = decode_server_info(payload)
    assert info.application_name == "Motive"
    assert info.server_version == ProtocolVersion(3, 0, 1)
    assert info.natnet_version == ProtocolVersion(3, 1)
    assert "Application Name: Motive" in info.get_as_string()


def test_server_info_name_fills_field() -> None:
    payload = make_server_info(b"M" * MAX_NAMELENGTH, bytes(4), bytes([2, 9, 0, 0]))
    info = decode_server_info(payload)
    assert info.application_name == "M" * MAX_NAMELENGTH
    assert info.natnet_version == ProtocolVersion(2, 9)


def test_server_info_truncated() -> None:
    payload = make_server_info(b"Motive", bytes(4), bytes(4))
    with pytest.raises(UnexpectedEof):
        decode_server_info(payload[:-1])


def test_server_info_bad_name() -> None:
    with pytest.raises(InvalidText):
        decode_server_info(make_server_info(b"\xff", bytes(4), bytes(4)))


def test_decode_message_string() -> None:
    assert decode_message_string(b"Hello\0") == "Hello"
    with pytest.raises(UnexpectedEof):
        decode_message_string(b"Hello")


def test_decode_response() -> None:
    assert decode_response(struct.pack("<i", -1)) == -1
    assert decode_response(struct.pack("<i", 0)) == 0
    assert decode_response(b"Bitstream,3.1\0") == "Bitstream,3.1"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Bitstream,3.1", ProtocolVersion(3, 1)),
        ("Bitstream,4.1.0.0", ProtocolVersion(4, 1)),
        ("Bitstream,2", None),
        ("Bitstream", None),
        ("Bitstream,x.y", None),
        ("TimelinePlay", None),
        ("", None),
    ],
)
def test_bitstream_version(text: str, expected: ProtocolVersion | None) -> None:
    assert bitstream_version(text) == expected
