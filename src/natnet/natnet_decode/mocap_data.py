import numpy as np
import numpy.typing as npt
from natnet_schemas.base_types import NatNetEnum, NatNetPydanticModel

from natnet_decode.version import ProtocolVersion

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]


class QuaternionOrder(NatNetEnum):
    # NatNet sends (qx, qy, qz, qw)
    XYZW = "XYZW"
    WXYZ = "WXYZ"


# MoCap Frame Classes
class MarkerSet(NatNetPydanticModel):
    name: str
    markers: list[Vector3] = []

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_tab_str2 = get_tab_str(tab_str, level + 1)
        out_str = f"{out_tab_str}Model Name : {self.name}\n"
        out_str += f"{out_tab_str}Marker Count :{len(self.markers):3d}\n"
        for i, pos in enumerate(self.markers):
            out_str += f"{out_tab_str2}Marker {i:3d} pos : {format_vector(pos)}\n"
        return out_str


class RigidBody(NatNetPydanticModel):
    id: int
    position: Vector3
    orientation: Quaternion
    mean_error: float = 0.0
    # not on the wire before 2.6, assumed tracked
    tracking_valid: bool = True

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_str = f"{out_tab_str}ID            : {self.id:3d}\n"
        out_str += f"{out_tab_str}  Position      : {format_vector(self.position)}\n"
        out_str += f"{out_tab_str}  Orientation   : {format_vector(self.orientation)}\n"
        out_str += f"{out_tab_str}  Marker Error  : {self.mean_error:3.2f}\n"
        out_str += f"{out_tab_str}  Tracking Valid: {self.tracking_valid}\n"
        return out_str


class Skeleton(NatNetPydanticModel):
    id: int
    rigid_bodies: list[RigidBody] = []

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_str = f"{out_tab_str}ID: {self.id:3d}\n"
        out_str += f"{out_tab_str}Rigid Body Count: {len(self.rigid_bodies):3d}\n"
        for rigid_body in self.rigid_bodies:
            out_str += rigid_body.get_as_string(tab_str, level + 1)
        return out_str


class LabeledMarker(NatNetPydanticModel):
    id: int
    position: Vector3
    size: float | None = None
    # raw parameter bits, None when the stream predates them
    params: int | None = None
    occluded: bool | None = None
    point_cloud_solved: bool | None = None
    model_solved: bool | None = None

    @property
    def model_id(self) -> int:
        return (self.id >> 16) & 0x0000FFFF

    @property
    def marker_id(self) -> int:
        return self.id & 0x0000FFFF

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_str = (
            f"{out_tab_str}ID                 : "
            f"[MarkerID: {self.marker_id:3d}] [ModelID: {self.model_id:3d}]\n"
        )
        out_str += f"{out_tab_str}pos                : {format_vector(self.position)}\n"
        if self.size is not None:
            out_str += f"{out_tab_str}size               : [{self.size:3.2f}]\n"
        if self.params is not None:
            out_str += f"{out_tab_str}occluded           : [{self.occluded}]\n"
            out_str += f"{out_tab_str}point_cloud_solved : [{self.point_cloud_solved}]\n"
            out_str += f"{out_tab_str}model_solved       : [{self.model_solved}]\n"
        return out_str


class ForcePlate(NatNetPydanticModel):
    id: int
    # one list of samples per channel
    channels: list[list[float]] = []

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        fc_max = 4
        out_tab_str = get_tab_str(tab_str, level)
        out_tab_str2 = get_tab_str(tab_str, level + 1)
        out_str = f"{out_tab_str}ID           : {self.id:3d}\n"
        out_str += f"{out_tab_str}  Channel Count: {len(self.channels):3d}\n"
        for channel_num, frames in enumerate(self.channels):
            fc_show = min(len(frames), fc_max)
            out_str += f"{out_tab_str2}Channel {channel_num:3d}: "
            out_str += f"{len(frames):3d} Frames - Frame Data: "
            out_str += "".join(f"{frames[i]:3.2f} " for i in range(fc_show))
            if fc_show < len(frames):
                out_str += f" - Showing {fc_show:3d} of {len(frames):3d} frames"
            out_str += "\n"
        return out_str


class Timecode(NatNetPydanticModel):
    """SMPTE timecode packed as hh:mm:ss:ff bytes plus a subframe counter."""

    timecode: int = 0
    subframe: int = 0

    def decode(self) -> tuple[int, int, int, int, int]:
        hour = (self.timecode >> 24) & 255
        minute = (self.timecode >> 16) & 255
        second = (self.timecode >> 8) & 255
        frame = self.timecode & 255
        return hour, minute, second, frame, self.subframe

    def __str__(self) -> str:
        hour, minute, second, frame, subframe = self.decode()
        return f"{hour:02}:{minute:02}:{second:02}:{frame:02}:{subframe:02}"


class FrameTiming(NatNetPydanticModel):
    timestamp: float
    # only sent below 3.0
    latency: float | None = None
    # only sent from 3.0 on, in high resolution clock ticks
    stamp_camera_mid_exposure: int | None = None
    stamp_data_received: int | None = None
    stamp_transmit: int | None = None

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_str = f"{out_tab_str}Timestamp                      : {self.timestamp:3.3f}\n"
        if self.latency is not None:
            out_str += f"{out_tab_str}Latency                        : {self.latency:3.3f}\n"
        if self.stamp_camera_mid_exposure is not None:
            out_str += (
                f"{out_tab_str}Mid-exposure timestamp         : "
                f"{self.stamp_camera_mid_exposure:3d}\n"
            )
        if self.stamp_data_received is not None:
            out_str += (
                f"{out_tab_str}Camera data received timestamp : {self.stamp_data_received:3d}\n"
            )
        if self.stamp_transmit is not None:
            out_str += f"{out_tab_str}Transmit timestamp             : {self.stamp_transmit:3d}\n"
        return out_str


class FrameParams(NatNetPydanticModel):
    raw: int = 0
    is_recording: bool = False
    tracked_models_changed: bool = False

    @classmethod
    def from_bits(cls, param: int) -> "FrameParams":
        return cls(
            raw=param,
            is_recording=(param & 0x01) != 0,
            tracked_models_changed=(param & 0x02) != 0,
        )


class FrameOfData(NatNetPydanticModel):
    """One complete snapshot of everything the server tracks."""

    version: ProtocolVersion
    frame_number: int
    marker_sets: list[MarkerSet] = []
    unlabeled_markers: list[Vector3] = []
    rigid_bodies: list[RigidBody] = []
    skeletons: list[Skeleton] = []
    labeled_markers: list[LabeledMarker] = []
    force_plates: list[ForcePlate] = []
    timecode: Timecode = Timecode()
    timing: FrameTiming
    params: FrameParams = FrameParams()

    def marker_set(self, name: str) -> MarkerSet | None:
        for marker_set in self.marker_sets:
            if marker_set.name == name:
                return marker_set
        return None

    def rigid_body_poses(
        self,
        quat_order: QuaternionOrder | str = QuaternionOrder.XYZW,
        include_skeletons: bool = False,
    ) -> dict[int, tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]]:
        """
        Positions and orientations keyed by rigid body id.

        Args:
            quat_order: component order of the returned quaternion; NatNet sends XYZW,
                WXYZ matches the simulator convention.
            include_skeletons: also return the bones of every skeleton. A bone overrides
                a free rigid body with the same id.

        Raises:
            ValueError: ``quat_order`` is not a known order (case is ignored).
        """
        if isinstance(quat_order, str):
            quat_order = quat_order.upper()
        quat_order = QuaternionOrder(quat_order)
        bodies = list(self.rigid_bodies)
        if include_skeletons:
            for skeleton in self.skeletons:
                bodies.extend(skeleton.rigid_bodies)
        poses = {}
        for rb in bodies:
            quat = np.array(rb.orientation, dtype=np.float32)
            if quat_order == QuaternionOrder.WXYZ:
                quat = np.roll(quat, 1)
            poses[rb.id] = (np.array(rb.position, dtype=np.float32), quat)
        return poses

    def get_as_string(self, tab_str: str = "  ", level: int = 0) -> str:
        out_tab_str = get_tab_str(tab_str, level)
        out_tab_str2 = get_tab_str(tab_str, level + 1)

        out_str = f"{out_tab_str}MoCap Frame Begin\n{out_tab_str}-----------------\n"
        out_str += f"{out_tab_str}Frame #: {self.frame_number:3d}\n"

        out_str += f"{out_tab_str2}Markerset Count:{len(self.marker_sets):3d}\n"
        for marker_set in self.marker_sets:
            out_str += marker_set.get_as_string(tab_str, level + 2)

        out_str += f"{out_tab_str2}Unlabeled Marker Count:{len(self.unlabeled_markers):3d}\n"
        for i, pos in enumerate(self.unlabeled_markers):
            out_str += f"{out_tab_str2}{tab_str}Marker {i:3d} pos : {format_vector(pos)}\n"

        out_str += f"{out_tab_str2}Rigid Body Count: {len(self.rigid_bodies):3d}\n"
        for rigid_body in self.rigid_bodies:
            out_str += rigid_body.get_as_string(tab_str, level + 2)

        out_str += f"{out_tab_str2}Skeleton Count: {len(self.skeletons):3d}\n"
        for skeleton in self.skeletons:
            out_str += skeleton.get_as_string(tab_str, level + 2)

        out_str += f"{out_tab_str2}Labeled Marker Count: {len(self.labeled_markers):3d}\n"
        for labeled_marker in self.labeled_markers:
            out_str += labeled_marker.get_as_string(tab_str, level + 2)

        out_str += f"{out_tab_str2}Force Plate Count: {len(self.force_plates):3d}\n"
        for force_plate in self.force_plates:
            out_str += force_plate.get_as_string(tab_str, level + 2)

        out_str += f"{out_tab_str2}Timecode: {self.timecode}\n"
        out_str += self.timing.get_as_string(tab_str, level + 1)
        out_str += f"{out_tab_str2}Is Recording: {self.params.is_recording}\n"
        out_str += f"{out_tab_str2}Tracked Models Changed: {self.params.tracked_models_changed}\n"

        out_str += f"{out_tab_str}MoCap Frame End\n{out_tab_str}-----------------\n"
        return out_str


class Unsupported(NatNetPydanticModel):
    """A well-formed message of a kind the frame decoder does not interpret."""

    message_id: int
    payload: bytes


NatNetPacket = FrameOfData | Unsupported


# get_tab_str
# generate a string that takes the nesting level into account
def get_tab_str(tab_str: str, level: int) -> str:
    return tab_str * level


def format_vector(values: tuple[float, ...]) -> str:
    return "[" + ", ".join(f"{v:3.2f}" for v in values) + "]"
