"""Console output with a prefix and colours, progress bars and compiler-output filtering."""

from __future__ import annotations

import enum
import logging
import re
import sys
from typing import TextIO

from termcolor import colored
from tqdm import tqdm

_log = logging.getLogger(__name__)

YAMBS_PREFIX = "yambs"

_PATTERN_AR = re.compile(r"^ar.*\n+")
_PATTERN_AR_SECOND = re.compile(r"\nar:.*")
_PATTERN_AR_OPEN = re.compile(r".*ar:.*")


class OutputType(enum.Enum):
    STATUS = "status"
    WARNING = "warning"
    ERROR = "error"

    def as_color(self) -> str:
        """Return the terminal colour used for this kind of text."""
        return _COLORS[self]


_COLORS = {
    OutputType.STATUS: "white",
    OutputType.WARNING: "yellow",
    OutputType.ERROR: "red",
}


class PrefixPolicy(enum.Enum):
    WITH_PREFIX = "with_prefix"
    NO_PREFIX = "no_prefix"


class Output:
    """Writes status, warning and error messages to the console and the log."""

    def __init__(self, prefix: str = YAMBS_PREFIX) -> None:
        self.prefix = prefix

    def _add_prefix(self, text: str, policy: PrefixPolicy) -> str:
        if policy is PrefixPolicy.WITH_PREFIX:
            return f"{self.prefix}: {text}"
        return text

    def _print(self, text: str, text_type: OutputType, policy: PrefixPolicy) -> None:
        prepared = colored(self._add_prefix(text, policy), text_type.as_color())
        stream = sys.stderr if text_type is OutputType.ERROR else sys.stdout
        print(prepared, file=stream)

    def status(self, text: str) -> None:
        self._print(text, OutputType.STATUS, PrefixPolicy.WITH_PREFIX)
        _log.info("%s", text)

    def status_without_prefix(self, text: str) -> None:
        self._print(text, OutputType.STATUS, PrefixPolicy.NO_PREFIX)
        _log.info("%s", text)

    def warning(self, text: str) -> None:
        self._print(text, OutputType.WARNING, PrefixPolicy.WITH_PREFIX)
        _log.warning("%s", text)

    def warning_without_prefix(self, text: str) -> None:
        self._print(text, OutputType.WARNING, PrefixPolicy.NO_PREFIX)
        _log.warning("%s", text)

    def error(self, text: str) -> None:
        self._print(text, OutputType.ERROR, PrefixPolicy.WITH_PREFIX)
        _log.error("%s", text)

    def error_without_prefix(self, text: str) -> None:
        self._print(text, OutputType.ERROR, PrefixPolicy.NO_PREFIX)
        _log.error("%s", text)


class ProgressBar:
    """A build progress bar showing elapsed time and a message."""

    def __init__(self, length: int, file: TextIO | None = None) -> None:
        self._file = file
        self.bar = tqdm(
            total=length,
            bar_format="[{bar}] [{elapsed}] {desc}",
            ascii="-=",
            file=file,
        )

    def set_message(self, msg: str) -> None:
        self.bar.set_description_str(msg)

    def set_position(self, position: int) -> None:
        self.bar.n = position
        self.bar.refresh()

    def finish_with_message(self, msg: str) -> None:
        """Print ``msg`` above the bar, then clear and close the bar."""
        tqdm.write(msg, file=self._file)
        self.bar.leave = False
        self.bar.close()

    def fail_with_message(self, msg: str) -> None:
        """Leave the bar on screen where it stopped, showing ``msg``."""
        self.bar.set_description_str(msg)
        self.bar.close()


def filter_string(text: str) -> str:
    """Drop empty lines and archiver chatter, joining what is left."""
    lines = (line.removesuffix("\r") for line in text.split("\n"))
    return "".join(
        line
        for line in lines
        if line
        and not _PATTERN_AR.search(line)
        and not _PATTERN_AR_SECOND.search(line)
        and not _PATTERN_AR_OPEN.search(line)
    )


def print_error_colored(text: str, output: Output) -> None:
    output.error_without_prefix(text)