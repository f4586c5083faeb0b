from pathlib import Path

import yaml
from natnet_schemas.base_types import natnet_pydantic_config
from pydantic import BaseModel, field_validator

from natnet_decode.utils.logger import LEVELS
from natnet_decode.version import ProtocolVersion


class DecoderArgs(BaseModel):
    model_config = natnet_pydantic_config(frozen=True)

    # NatNet stream version negotiated with the server, e.g. "3.0"
    version: str = "3.0.0"
    log_level: str = "DISABLED"
    log_format: list[str] = ["stdout"]

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        ProtocolVersion.parse(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LEVELS:
            raise ValueError(f"Unknown logging level '{value}', expected one of {list(LEVELS)}")
        return value

    @property
    def protocol_version(self) -> ProtocolVersion:
        return ProtocolVersion.parse(self.version)


def load_decoder_args(path: str | Path) -> DecoderArgs:
    """Read decoder args from a YAML mapping such as ``{version: "2.9", log_level: INFO}``."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return DecoderArgs(**data)
