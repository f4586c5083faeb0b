"""Frame of data depacketization.

A frame is not self-describing beyond its element counts, so every field is
read strictly in wire order and each optional group is guarded by an inline
comparison against the stream version. A wrong gate desynchronizes every
field after it, which the end-of-data tag then reports.
"""

from natnet_decode.cursor import ByteCursor
from natnet_decode.errors import LengthMismatch, MalformedTerminator
from natnet_decode.mocap_data import (
    ForcePlate,
    FrameOfData,
    FrameParams,
    FrameTiming,
    LabeledMarker,
    MarkerSet,
    RigidBody,
    Skeleton,
    Timecode,
    Vector3,
)
from natnet_decode.utils.logger import DEBUG, get_logger
from natnet_decode.version import (
    CAMERA_TIMESTAMPS,
    DOUBLE_TIMESTAMP,
    FORCE_PLATES,
    LABELED_MARKER_PARAMS,
    LABELED_MARKER_SIZE,
    LABELED_MARKERS,
    LATENCY_REMOVED,
    RIGID_BODY_PARAMS,
    SKELETONS,
    ProtocolVersion,
    has_field,
)

END_OF_DATA = 0


def unpack_count(cursor: ByteCursor, what: str) -> int:
    count = cursor.read_i32()
    if count < 0:
        raise LengthMismatch(count, cursor.remaining(), f"{what} count")
    return count


def unpack_positions(cursor: ByteCursor, count: int) -> list[Vector3]:
    return [cursor.read_vector3() for _ in range(count)]


def unpack_marker_sets(cursor: ByteCursor, trace: bool = False) -> list[MarkerSet]:
    logger = get_logger()
    marker_set_count = unpack_count(cursor, "marker set")
    if trace:
        logger.debug(f"Markerset Count: {marker_set_count}")
    marker_sets = []
    for _ in range(marker_set_count):
        model_name = cursor.read_cstring()
        marker_count = unpack_count(cursor, "marker")
        if trace:
            logger.debug(f"Model Name     : {model_name} ({marker_count} markers)")
        markers = unpack_positions(cursor, marker_count)
        marker_sets.append(MarkerSet(name=model_name, markers=markers))
    return marker_sets


def unpack_rigid_body(cursor: ByteCursor, version: ProtocolVersion) -> RigidBody:
    new_id = cursor.read_i32()
    pos = cursor.read_vector3()
    rot = cursor.read_quaternion()
    marker_error = cursor.read_f32()

    tracking_valid = True
    if has_field(version, RIGID_BODY_PARAMS):
        param = cursor.read_i16()
        tracking_valid = (param & 0x01) != 0

    return RigidBody(
        id=new_id,
        position=pos,
        orientation=rot,
        mean_error=marker_error,
        tracking_valid=tracking_valid,
    )


def unpack_rigid_bodies(
    cursor: ByteCursor, version: ProtocolVersion, trace: bool = False
) -> list[RigidBody]:
    rigid_body_count = unpack_count(cursor, "rigid body")
    if trace:
        get_logger().debug(f"Rigid Body Count: {rigid_body_count}")
    return [unpack_rigid_body(cursor, version) for _ in range(rigid_body_count)]


def unpack_skeleton(cursor: ByteCursor, version: ProtocolVersion, trace: bool = False) -> Skeleton:
    new_id = cursor.read_i32()
    return Skeleton(id=new_id, rigid_bodies=unpack_rigid_bodies(cursor, version, trace))


def unpack_labeled_marker(cursor: ByteCursor, version: ProtocolVersion) -> LabeledMarker:
    new_id = cursor.read_i32()
    pos = cursor.read_vector3()

    size = None
    if has_field(version, LABELED_MARKER_SIZE):
        size = cursor.read_f32()

    if not has_field(version, LABELED_MARKER_PARAMS):
        return LabeledMarker(id=new_id, position=pos, size=size)

    param = cursor.read_i16()
    return LabeledMarker(
        id=new_id,
        position=pos,
        size=size,
        params=param,
        occluded=(param & 0x01) != 0,
        point_cloud_solved=(param & 0x02) != 0,
        model_solved=(param & 0x04) != 0,
    )


def unpack_force_plate(cursor: ByteCursor, trace: bool = False) -> ForcePlate:
    force_plate_id = cursor.read_i32()
    channel_count = unpack_count(cursor, "force plate channel")
    channels = []
    for _ in range(channel_count):
        frame_count = unpack_count(cursor, "force plate frame")
        channels.append(list(cursor.read_floats(frame_count)))
    if trace:
        get_logger().debug(
            f"\tForce Plate ID: {force_plate_id:3d} Num Channels: {channel_count:3d}"
        )
    return ForcePlate(id=force_plate_id, channels=channels)


def unpack_frame_of_data(version: ProtocolVersion, cursor: ByteCursor) -> FrameOfData:
    """Decode one frame of data payload (message header already consumed).

    :raises UnexpectedEof: the payload ends before the frame does
    :raises LengthMismatch: an element count is negative
    :raises InvalidText: a marker set name is not UTF-8
    :raises MalformedTerminator: the end-of-data tag is not zero
    """
    logger = get_logger()
    # formatting is skipped entirely unless tracing is on
    trace = logger.is_enabled_for(DEBUG)

    frame_number = cursor.read_i32()
    if trace:
        logger.debug(f"Frame #: {frame_number:3d}")

    marker_sets = unpack_marker_sets(cursor, trace)

    unlabeled_marker_count = unpack_count(cursor, "unlabeled marker")
    if trace:
        logger.debug(f"Unlabeled Marker Count: {unlabeled_marker_count}")
    unlabeled_markers = unpack_positions(cursor, unlabeled_marker_count)

    rigid_bodies = unpack_rigid_bodies(cursor, version, trace)

    skeletons = []
    if has_field(version, SKELETONS):
        skeleton_count = unpack_count(cursor, "skeleton")
        if trace:
            logger.debug(f"Skeleton Count: {skeleton_count}")
        skeletons = [unpack_skeleton(cursor, version, trace) for _ in range(skeleton_count)]

    labeled_markers = []
    if has_field(version, LABELED_MARKERS):
        labeled_marker_count = unpack_count(cursor, "labeled marker")
        if trace:
            logger.debug(f"Labeled Marker Count: {labeled_marker_count}")
        labeled_markers = [
            unpack_labeled_marker(cursor, version) for _ in range(labeled_marker_count)
        ]

    force_plates = []
    if has_field(version, FORCE_PLATES):
        force_plate_count = unpack_count(cursor, "force plate")
        if trace:
            logger.debug(f"Force Plate Count: {force_plate_count}")
        force_plates = [unpack_force_plate(cursor, trace) for _ in range(force_plate_count)]

    # software latency was dropped when the camera timestamps arrived
    latency = None
    if not has_field(version, LATENCY_REMOVED):
        latency = cursor.read_f32()

    timecode = Timecode(timecode=cursor.read_u32(), subframe=cursor.read_u32())

    if has_field(version, DOUBLE_TIMESTAMP):
        timestamp = cursor.read_f64()
    else:
        timestamp = cursor.read_f32()
    if trace:
        logger.debug(f"Timestamp: {timestamp:3.2f}")

    stamp_camera_mid_exposure = None
    stamp_data_received = None
    stamp_transmit = None
    if has_field(version, CAMERA_TIMESTAMPS):
        stamp_camera_mid_exposure = cursor.read_u64()
        stamp_data_received = cursor.read_u64()
        stamp_transmit = cursor.read_u64()

    params = FrameParams.from_bits(cursor.read_i16())

    eod = cursor.read_i32()
    if eod != END_OF_DATA:
        raise MalformedTerminator(eod)
    if trace and cursor.remaining() > 0:
        logger.debug(f"Ignoring {cursor.remaining()} trailing byte(s) after end of data tag")

    return FrameOfData(
        version=version,
        frame_number=frame_number,
        marker_sets=marker_sets,
        unlabeled_markers=unlabeled_markers,
        rigid_bodies=rigid_bodies,
        skeletons=skeletons,
        labeled_markers=labeled_markers,
        force_plates=force_plates,
        timecode=timecode,
        timing=FrameTiming(
            timestamp=timestamp,
            latency=latency,
            stamp_camera_mid_exposure=stamp_camera_mid_exposure,
            stamp_data_received=stamp_data_received,
            stamp_transmit=stamp_transmit,
        ),
        params=params,
    )
