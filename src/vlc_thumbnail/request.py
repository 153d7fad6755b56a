"""Request model for a single extraction job."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .errors import CleanupError


class OutputFormat(enum.Enum):
    """Snapshot formats cvlc can write; the value is the file extension."""

    JPEG = "jpg"
    PNG = "png"
    TIFF = "tiff"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "OutputFormat | str") -> "OutputFormat":
        """Accept a member, a member name or an extension (case-insensitive)."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.name.lower(), member.value):
                    return member
        raise ValueError(f"value {value!r} is not a valid output format")


@dataclass
class ThumbnailRequest:
    """Which file to snapshot, in which format, at which second.

    ``stdout``, ``stderr`` and ``run_id`` are filled in by the generator and
    only meaningful after ``generate``/``generate_to`` has been called.
    """

    source: Path | str
    output_format: OutputFormat | str = OutputFormat.JPEG
    timestamp: int = 0

    stdout: bytes = field(default=b"", init=False, repr=False)
    stderr: bytes = field(default=b"", init=False, repr=False)
    run_id: str | None = field(default=None, init=False)
    cleanup_error: CleanupError | None = field(default=None, init=False, repr=False)

    def command_log(self) -> Tuple[bytes, bytes]:
        """Return the captured (stdout, stderr) of the last cvlc run."""

        return self.stdout, self.stderr
