"""Writes NatNet datagrams in wire order for a given stream version (test only)."""

import struct
from typing import Any

from natnet_decode.packet import NatNetMessageId
from natnet_decode.version import ProtocolVersion, as_version


def pack_cstring(text: str) -> bytes:
    return text.encode("utf-8") + b"\0"


def pack_rigid_body(version: ProtocolVersion, rb: dict[str, Any]) -> bytes:
    out = struct.pack("<i", rb["id"])
    out += struct.pack("<fff", *rb.get("position", (0.0, 0.0, 0.0)))
    out += struct.pack("<ffff", *rb.get("orientation", (0.0, 0.0, 0.0, 1.0)))
    out += struct.pack("<f", rb.get("mean_error", 0.0))
    if version >= (2, 6):
        out += struct.pack("<h", rb.get("param", 0x01))
    return out


def build_frame_payload(
    version: ProtocolVersion | str,
    frame_number: int = 0,
    marker_sets: list[tuple[str, list[tuple[float, float, float]]]] | None = None,
    unlabeled_markers: list[tuple[float, float, float]] | None = None,
    rigid_bodies: list[dict[str, Any]] | None = None,
    skeletons: list[tuple[int, list[dict[str, Any]]]] | None = None,
    labeled_markers: list[dict[str, Any]] | None = None,
    force_plates: list[tuple[int, list[list[float]]]] | None = None,
    latency: float = 0.0,
    timecode: tuple[int, int] = (0, 0),
    timestamp: float = 0.0,
    camera_stamps: tuple[int, int, int] = (0, 0, 0),
    params: int = 0,
    eod: int = 0,
) -> bytes:
    version = as_version(version)
    marker_sets = marker_sets or []
    unlabeled_markers = unlabeled_markers or []
    rigid_bodies = rigid_bodies or []
    skeletons = skeletons or []
    labeled_markers = labeled_markers or []
    force_plates = force_plates or []

    out = struct.pack("<i", frame_number)

    out += struct.pack("<i", len(marker_sets))
    for name, markers in marker_sets:
        out += pack_cstring(name)
        out += struct.pack("<i", len(markers))
        for pos in markers:
            out += struct.pack("<fff", *pos)

    out += struct.pack("<i", len(unlabeled_markers))
    for pos in unlabeled_markers:
        out += struct.pack("<fff", *pos)

    out += struct.pack("<i", len(rigid_bodies))
    for rb in rigid_bodies:
        out += pack_rigid_body(version, rb)

    if version >= (2, 1):
        out += struct.pack("<i", len(skeletons))
        for skeleton_id, bones in skeletons:
            out += struct.pack("<ii", skeleton_id, len(bones))
            for rb in bones:
                out += pack_rigid_body(version, rb)

    if version >= (2, 3):
        out += struct.pack("<i", len(labeled_markers))
        for marker in labeled_markers:
            out += struct.pack("<i", marker["id"])
            out += struct.pack("<fff", *marker.get("position", (0.0, 0.0, 0.0)))
            if version >= (2, 6):
                out += struct.pack("<f", marker.get("size", 0.0))
                out += struct.pack("<h", marker.get("param", 0))

    if version >= (2, 9):
        out += struct.pack("<i", len(force_plates))
        for plate_id, channels in force_plates:
            out += struct.pack("<ii", plate_id, len(channels))
            for samples in channels:
                out += struct.pack(f"<i{len(samples)}f", len(samples), *samples)

    if version < (3, 0):
        out += struct.pack("<f", latency)

    out += struct.pack("<II", *timecode)

    if version >= (2, 7):
        out += struct.pack("<d", timestamp)
    else:
        out += struct.pack("<f", timestamp)

    if version >= (3, 0):
        out += struct.pack("<QQQ", *camera_stamps)

    out += struct.pack("<h", params)
    out += struct.pack("<i", eod)
    return out


def wrap(message_id: int, payload: bytes, declared_size: int | None = None) -> bytes:
    """Prefix ``payload`` with a message header, optionally lying about its size."""
    if declared_size is None:
        declared_size = len(payload)
    return struct.pack("<HH", message_id, declared_size) + payload


def build_frame(version: ProtocolVersion | str, **kwargs: Any) -> bytes:
    return wrap(NatNetMessageId.FRAME_OF_DATA, build_frame_payload(version, **kwargs))


def pack_rigid_body_description(
    name: str, rb_id: int, parent_id: int, offset: tuple[float, float, float]
) -> bytes:
    return pack_cstring(name) + struct.pack("<ii3f", rb_id, parent_id, *offset)


def build_model_def_payload(data_sets: list[tuple[int, bytes]]) -> bytes:
    """``data_sets`` holds (type tag, packed body) pairs, written in order."""
    out = struct.pack("<i", len(data_sets))
    for data_type, body in data_sets:
        out += struct.pack("<i", data_type) + body
    return out
