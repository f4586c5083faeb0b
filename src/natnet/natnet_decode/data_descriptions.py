"""Model definitions, the server's reply to REQUEST_MODELDEF.

The payload is a data set count followed by that many tagged descriptions.
Only marker set, rigid body and skeleton descriptions are understood; any
other tag stops the decode since its length cannot be known.
"""

from enum import IntEnum

from natnet_schemas.base_types import NatNetPydanticModel

from natnet_decode.cursor import ByteCursor
from natnet_decode.errors import UnknownDataSetType
from natnet_decode.frame_decoder import unpack_count
from natnet_decode.mocap_data import Vector3, format_vector, get_tab_str
from natnet_decode.utils.logger import DEBUG, get_logger
from natnet_decode.version import ProtocolVersion, as_version


class DataSetType(IntEnum):
    MARKER_SET = 0
    RIGID_BODY = 1
    SKELETON = 2


class MarkerSetDescription(NatNetPydanticModel):
    name: str
    marker_names: list[str] = []

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_tab_str2 = get_tab_str(tab_str, level + 1)
        out_tab_str3 = get_tab_str(tab_str, level + 2)
        out_str = f"{out_tab_str}Markerset Name: {self.name}\n"
        out_str += f"{out_tab_str2}Marker Count   : {len(self.marker_names)}\n"
        for i, marker_name in enumerate(self.marker_names):
            out_str += f"{out_tab_str3}{i:3d} Marker Name: {marker_name}\n"
        return out_str


class RigidBodyDescription(NatNetPydanticModel):
    name: str
    id: int
    parent_id: int
    # offset from the parent body
    offset: Vector3 = (0.0, 0.0, 0.0)

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_str = f"{out_tab_str}Rigid Body Name   : {self.name}\n"
        out_str += f"{out_tab_str}ID                : {self.id}\n"
        out_str += f"{out_tab_str}Parent ID         : {self.parent_id}\n"
        out_str += f"{out_tab_str}Position          : {format_vector(self.offset)}\n"
        return out_str


class SkeletonDescription(NatNetPydanticModel):
    name: str
    id: int
    rigid_bodies: list[RigidBodyDescription] = []

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_tab_str2 = get_tab_str(tab_str, level + 1)
        out_str = f"{out_tab_str}Name                    : {self.name}\n"
        out_str += f"{out_tab_str}ID                      : {self.id}\n"
        out_str += f"{out_tab_str}Rigid Body (Bone) Count : {len(self.rigid_bodies)}\n"
        for i, rigid_body in enumerate(self.rigid_bodies):
            out_str += f"{out_tab_str2}Rigid Body (Bone) {i}\n"
            out_str += rigid_body.get_as_string(tab_str, level + 2)
        return out_str


DataSetDescription = MarkerSetDescription | RigidBodyDescription | SkeletonDescription


def unpack_marker_set_description(cursor: ByteCursor) -> MarkerSetDescription:
    name = cursor.read_cstring()
    marker_count = unpack_count(cursor, "marker name")
    marker_names = [cursor.read_cstring() for _ in range(marker_count)]
    return MarkerSetDescription(name=name, marker_names=marker_names)


def unpack_rigid_body_description(cursor: ByteCursor) -> RigidBodyDescription:
    name = cursor.read_cstring()
    new_id = cursor.read_i32()
    parent_id = cursor.read_i32()
    offset = cursor.read_vector3()
    return RigidBodyDescription(name=name, id=new_id, parent_id=parent_id, offset=offset)


def unpack_skeleton_description(cursor: ByteCursor) -> SkeletonDescription:
    name = cursor.read_cstring()
    new_id = cursor.read_i32()
    rigid_body_count = unpack_count(cursor, "skeleton rigid body")
    rigid_bodies = [unpack_rigid_body_description(cursor) for _ in range(rigid_body_count)]
    return SkeletonDescription(name=name, id=new_id, rigid_bodies=rigid_bodies)


def unpack_data_set(cursor: ByteCursor) -> DataSetDescription:
    data_type = cursor.read_i32()
    if data_type == DataSetType.MARKER_SET:
        return unpack_marker_set_description(cursor)
    if data_type == DataSetType.RIGID_BODY:
        return unpack_rigid_body_description(cursor)
    if data_type == DataSetType.SKELETON:
        return unpack_skeleton_description(cursor)
    raise UnknownDataSetType(data_type)


def decode_model_def(
    version: ProtocolVersion | str, payload: bytes | memoryview
) -> list[DataSetDescription]:
    """Decode a MODELDEF payload into its data set descriptions, in wire order.

    The layout has not changed across the versions handled here; ``version``
    is accepted so callers treat it like every other decode entry point.

    :raises UnexpectedEof: the payload ends inside a description
    :raises LengthMismatch: a count is negative
    :raises InvalidText: a name is not UTF-8
    :raises UnknownDataSetType: a data set carries an unknown type tag
    """
    as_version(version)
    logger = get_logger()
    cursor = ByteCursor(payload)
    data_set_count = unpack_count(cursor, "data set")
    data_sets = [unpack_data_set(cursor) for _ in range(data_set_count)]
    if logger.is_enabled_for(DEBUG):
        logger.debug(f"Dataset Count: {data_set_count}")
        for data_set in data_sets:
            logger.debug(data_set.get_as_string().rstrip("\n"))
    return data_sets
