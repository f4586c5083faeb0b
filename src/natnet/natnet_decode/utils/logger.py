# =============================================================================
# SB3 Source:   https://github.com/DLR-RM/stable-baselines3/blob/master/stable_baselines3/common/logger.py
# SB3 License:  MIT License (Copyright (c) 2019–2025 Antonin Raffin et al.)
#
# Modifications:
#   • Reduced to the leveled sequence logger used for packet tracing.
# =============================================================================
import datetime
import os
import sys
import tempfile
from io import TextIOBase
from typing import Any, TextIO

DEBUG = 10
INFO = 20
WARN = 30
ERROR = 40
DISABLED = 50

LEVELS = {"DEBUG": DEBUG, "INFO": INFO, "WARN": WARN, "ERROR": ERROR, "DISABLED": DISABLED}


class SeqWriter:
    """
    sequence writer
    """

    def write_sequence(self, sequence: list[str]) -> None:
        """
        write_sequence an array to file
        """
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class HumanOutputFormat(SeqWriter):
    """A human-readable output format writing one line per log call.

    :param filename_or_file: the file to write the log to
    """

    def __init__(self, filename_or_file: str | TextIO) -> None:
        if isinstance(filename_or_file, str):
            self.file = open(filename_or_file, "w")
            self.own_file = True
        elif isinstance(filename_or_file, TextIOBase) or hasattr(filename_or_file, "write"):
            # Note: in theory `TextIOBase` check should be sufficient,
            # in practice, libraries don't always inherit from it
            self.file = filename_or_file  # type: ignore[assignment]
            self.own_file = False
        else:
            raise ValueError(f"Expected file or str, got {filename_or_file}")

    def write_sequence(self, sequence: list[str]) -> None:
        self.file.write(" ".join(sequence))
        self.file.write("\n")
        self.file.flush()

    def close(self) -> None:
        """
        closes the file
        """
        if self.own_file:
            self.file.close()


def make_output_format(_format: str, log_dir: str | None, log_suffix: str = "") -> SeqWriter:
    if _format == "stdout":
        return HumanOutputFormat(sys.stdout)
    elif _format == "stderr":
        return HumanOutputFormat(sys.stderr)
    elif _format == "log":
        if log_dir is None:
            raise ValueError("The 'log' format needs a log directory")
        os.makedirs(log_dir, exist_ok=True)
        return HumanOutputFormat(os.path.join(log_dir, f"natnet{log_suffix}.txt"))
    else:
        raise ValueError(f"Unknown format specified: {_format}")


# ================================================================
# Backend
# ================================================================


class Logger:
    """
    The logger class.

    :param folder: the logging location
    :param output_formats: the list of output formats
    :param level: the initial logging threshold
    """

    def __init__(
        self, folder: str | None, output_formats: list[SeqWriter], level: int = INFO
    ) -> None:
        self.level = level
        self.dir = folder
        self.output_formats = output_formats

    def log(self, *args, level: int = INFO) -> None:
        """
        Write the sequence of args, separated by spaces,
        to the console and output files (if you've configured an output file).

        :param args: log the arguments
        :param level: the logging level (can be DEBUG=10, INFO=20, WARN=30, ERROR=40, DISABLED=50)
        """
        if self.level <= level:
            self._do_log(args)

    def debug(self, *args) -> None:
        self.log(*args, level=DEBUG)

    def info(self, *args) -> None:
        self.log(*args, level=INFO)

    def warn(self, *args) -> None:
        self.log(*args, level=WARN)

    def error(self, *args) -> None:
        self.log(*args, level=ERROR)

    def is_enabled_for(self, level: int) -> bool:
        return self.level <= level and self.level != DISABLED

    # Configuration
    # ----------------------------------------
    def set_level(self, level: int | str) -> None:
        """
        Set logging threshold on current logger.

        :param level: the logging level, as a number or one of the names in ``LEVELS``
        """
        self.level = parse_level(level)

    def get_dir(self) -> str | None:
        return self.dir

    def close(self) -> None:
        """
        closes the file
        """
        for _format in self.output_formats:
            _format.close()

    # Misc
    # ----------------------------------------
    def _do_log(self, args: tuple[Any, ...]) -> None:
        for _format in self.output_formats:
            _format.write_sequence(list(map(str, args)))


def parse_level(level: int | str) -> int:
    if isinstance(level, str):
        try:
            return LEVELS[level.upper()]
        except KeyError:
            raise ValueError(f"Unknown logging level '{level}', expected one of {list(LEVELS)}")
    return int(level)


# the decoder stays silent until configure() is called
_current_logger = Logger(folder=None, output_formats=[], level=DISABLED)


def get_logger() -> Logger:
    return _current_logger


def configure(
    folder: str | None = None,
    format_strings: list[str] | None = None,
    level: int | str | None = None,
) -> Logger:
    """
    Configure the logger used by the decoder.

    :param folder: the save location for the 'log' format
        (if None, $NATNET_LOGDIR, if still None, tempdir/NATNET-[date & time])
    :param format_strings: the output logging format
        (if None, $NATNET_LOG_FORMAT, if still None, ['stdout'])
    :param level: the logging threshold (if None, $NATNET_LOG_LEVEL, if still None, INFO)
    :return: The logger object.
    """
    global _current_logger

    if format_strings is None:
        format_strings = os.getenv("NATNET_LOG_FORMAT", "stdout").split(",")
    format_strings = list(filter(None, format_strings))

    if "log" in format_strings:
        if folder is None:
            folder = os.getenv("NATNET_LOGDIR")
        if folder is None:
            folder = os.path.join(
                tempfile.gettempdir(),
                datetime.datetime.now().strftime("NATNET-%Y-%m-%d-%H-%M-%S-%f"),
            )

    if level is None:
        level = os.getenv("NATNET_LOG_LEVEL", "INFO")

    output_formats = [make_output_format(f, folder) for f in format_strings]

    _current_logger.close()
    _current_logger = Logger(folder=folder, output_formats=output_formats, level=parse_level(level))
    # Only print when some files will be saved
    if folder is not None:
        _current_logger.log(f"Logging to {folder}")
    return _current_logger
