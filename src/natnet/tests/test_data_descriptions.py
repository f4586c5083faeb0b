import struct

import pytest
from natnet_decode.data_descriptions import (
    DataSetType,
    MarkerSetDescription,
    RigidBodyDescription,
    SkeletonDescription,
    decode_model_def,
)
from natnet_decode.errors import DecodeError, LengthMismatch, UnexpectedEof, UnknownDataSetType
from natnet_decode.mocap_data import Unsupported
from natnet_decode.packet import NatNetMessageId, decode
from packet_builder import (
    build_model_def_payload,
    pack_cstring,
    pack_rigid_body_description,
    wrap,
)


@pytest.fixture()
def model_def_payload() -> bytes:
    marker_set = pack_cstring("Wand") + struct.pack("<i", 2)
    marker_set += pack_cstring("M1") + pack_cstring("M2")
    rigid_body = pack_rigid_body_description("Drone", 3, -1, (0.5, 1.0, 1.5))
    skeleton = (
        pack_cstring("Actor")
        + struct.pack("<ii", 9, 2)
        + pack_rigid_body_description("Hip", 1, -1, (0.0, 1.0, 0.0))
        + pack_rigid_body_description("Chest", 2, 1, (0.0, 0.25, 0.0))
    )
    return build_model_def_payload(
        [
            (DataSetType.MARKER_SET, marker_set),
            (DataSetType.RIGID_BODY, rigid_body),
            (DataSetType.SKELETON, skeleton),
        ]
    )


def test_decode_all_description_kinds(model_def_payload: bytes) -> None:
    marker_set, rigid_body, skeleton = decode_model_def("3.0.0", model_def_payload)

    assert marker_set == MarkerSetDescription(name="Wand", marker_names=["M1", "M2"])
    assert rigid_body == RigidBodyDescription(
        name="Drone", id=3, parent_id=-1, offset=(0.5, 1.0, 1.5)
    )
    assert isinstance(skeleton, SkeletonDescription)
    assert skeleton.name == "Actor"
    assert skeleton.id == 9
    assert [rb.name for rb in skeleton.rigid_bodies] == ["Hip", "Chest"]
    assert skeleton.rigid_bodies[1].parent_id == 1
    assert skeleton.rigid_bodies[1].offset == (0.0, 0.25, 0.0)


def test_empty_model_def() -> None:
    assert decode_model_def("2.9", struct.pack("<i", 0)) == []


def test_model_def_arrives_as_unsupported(model_def_payload: bytes) -> None:
    packet = decode("3.0.0", wrap(NatNetMessageId.MODELDEF, model_def_payload))
    assert isinstance(packet, Unsupported)
    assert len(decode_model_def("3.0.0", packet.payload)) == 3


def test_truncated_model_def(model_def_payload: bytes) -> None:
    for cut in range(len(model_def_payload)):
        with pytest.raises(UnexpectedEof):
            decode_model_def("3.0.0", model_def_payload[:cut])


def test_unknown_data_set_type() -> None:
    payload = build_model_def_payload([(7, pack_cstring("Plate"))])
    with pytest.raises(UnknownDataSetType) as exc_info:
        decode_model_def("3.0.0", payload)
    assert exc_info.value.value == 7
    assert isinstance(exc_info.value, DecodeError)


def test_negative_marker_name_count() -> None:
    body = pack_cstring("Wand") + struct.pack("<i", -2)
    with pytest.raises(LengthMismatch):
        decode_model_def("3.0.0", build_model_def_payload([(DataSetType.MARKER_SET, body)]))


def test_description_dump(model_def_payload: bytes) -> None:
    dumps = [d.get_as_string() for d in decode_model_def("3.0.0", model_def_payload)]
    assert "Markerset Name: Wand" in dumps[0]
    assert "Rigid Body Name   : Drone" in dumps[1]
    assert "Rigid Body (Bone) Count : 2" in dumps[2]
