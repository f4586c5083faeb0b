from natnet_decode.config.registry import DecoderArgsRegistry
from natnet_decode.config.schema import DecoderArgs, load_decoder_args
from natnet_decode.data_descriptions import (
    MarkerSetDescription,
    RigidBodyDescription,
    SkeletonDescription,
    decode_model_def,
)
from natnet_decode.errors import (
    DecodeError,
    InvalidText,
    LengthMismatch,
    MalformedTerminator,
    ParseError,
    UnexpectedEof,
    UnknownDataSetType,
)
from natnet_decode.messages import (
    ServerInfo,
    bitstream_version,
    decode_message_string,
    decode_response,
    decode_server_info,
)
from natnet_decode.mocap_data import (
    ForcePlate,
    FrameOfData,
    FrameParams,
    FrameTiming,
    LabeledMarker,
    MarkerSet,
    NatNetPacket,
    QuaternionOrder,
    RigidBody,
    Skeleton,
    Timecode,
    Unsupported,
)
from natnet_decode.packet import NatNet, NatNetMessageId, decode
from natnet_decode.version import ProtocolVersion

__all__ = [
    "DecodeError",
    "DecoderArgs",
    "DecoderArgsRegistry",
    "ForcePlate",
    "FrameOfData",
    "FrameParams",
    "FrameTiming",
    "InvalidText",
    "LabeledMarker",
    "LengthMismatch",
    "MalformedTerminator",
    "MarkerSet",
    "MarkerSetDescription",
    "NatNet",
    "NatNetMessageId",
    "NatNetPacket",
    "ParseError",
    "ProtocolVersion",
    "QuaternionOrder",
    "RigidBody",
    "RigidBodyDescription",
    "ServerInfo",
    "Skeleton",
    "SkeletonDescription",
    "Timecode",
    "UnexpectedEof",
    "UnknownDataSetType",
    "Unsupported",
    "bitstream_version",
    "decode",
    "decode_message_string",
    "decode_model_def",
    "decode_response",
    "decode_server_info",
    "load_decoder_args",
]
