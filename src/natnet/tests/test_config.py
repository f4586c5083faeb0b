from pathlib import Path

import pytest
from natnet_decode.config.registry import DecoderArgsRegistry
from natnet_decode.config.schema import DecoderArgs, load_decoder_args
from natnet_decode.version import ProtocolVersion
from pydantic import ValidationError


def test_defaults() -> None:
    args = DecoderArgs()
    assert args.protocol_version == ProtocolVersion(3, 0)
    assert args.log_level == "DISABLED"
    assert args.log_format == ["stdout"]


def test_log_level_is_normalized() -> None:
    assert DecoderArgs(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(version="2.x"),
        dict(version=""),
        dict(log_level="VERBOSE"),
        dict(unknown_field=1),
    ],
)
def test_invalid_args(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        DecoderArgs(**kwargs)


def test_args_are_frozen() -> None:
    args = DecoderArgs()
    with pytest.raises(ValidationError):
        args.version = "2.9"  # type: ignore[misc]


def test_registry_presets() -> None:
    assert DecoderArgsRegistry["motive_1_5"].protocol_version == ProtocolVersion(2, 5)
    assert DecoderArgsRegistry["motive_2_0"].protocol_version == ProtocolVersion(3, 0)
    assert DecoderArgsRegistry["motive_1_9_debug"].log_level == "DEBUG"
    for args in DecoderArgsRegistry.values():
        assert isinstance(args, DecoderArgs)


def test_load_decoder_args(tmp_path: Path) -> None:
    path = tmp_path / "decoder.yaml"
    path.write_text('version: "2.9"\nlog_level: info\nlog_format: [stdout, log]\n')
    args = load_decoder_args(path)
    assert args.protocol_version == ProtocolVersion(2, 9)
    assert args.log_level == "INFO"
    assert args.log_format == ["stdout", "log"]


def test_load_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_decoder_args(path) == DecoderArgs()


def test_load_rejects_bad_fields(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("version: 2.9\nsocket: 1511\n")
    with pytest.raises(ValidationError):
        load_decoder_args(path)


def test_load_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 2.9\n")
    with pytest.raises(ValueError):
        load_decoder_args(path)
