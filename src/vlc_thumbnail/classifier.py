"""Detect cvlc failures from its log output.

cvlc often exits 0 after a fatal problem, so the captured output is scanned
for known messages instead of trusting the exit status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple


@dataclass(frozen=True)
class Marker:
    substring: str
    reason: str


@dataclass(frozen=True)
class Classification:
    reason: str
    line: str


DEFAULT_MARKERS: Tuple[Marker, ...] = (
    Marker("could not create snapshot", "snapshot failed"),
    Marker("filesystem stream error", "filesystem stream error"),
    Marker("could not identify codec", "unidentified codec"),
)


class MarkerClassifier:
    """Ordered marker -> reason table, matched line by line."""

    def __init__(self, markers: Sequence[Marker] = DEFAULT_MARKERS) -> None:
        self.markers: Tuple[Marker, ...] = tuple(markers)

    def extended(self, markers: Iterable[Marker]) -> "MarkerClassifier":
        return MarkerClassifier(self.markers + tuple(markers))

    def classify_line(self, line: str) -> Classification | None:
        for marker in self.markers:
            if marker.substring in line:
                return Classification(reason=marker.reason, line=line)
        return None

    def classify(self, output: bytes | str) -> Classification | None:
        """Return the first line of ``output`` containing a marker, if any."""

        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        for line in output.splitlines():
            found = self.classify_line(line)
            if found:
                return found
        return None
