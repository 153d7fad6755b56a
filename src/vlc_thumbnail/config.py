"""Process-wide settings and the resolve-once cache for their defaults."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from .errors import (
    BinaryAccessError,
    BinaryNotFoundError,
    ConfigurationError,
    ConfiguredBinaryMissingError,
    WorkDirUnavailableError,
)

logger = logging.getLogger(__name__)

DEFAULT_BINARY_NAME = "cvlc"
DEFAULT_RUN_ID_PREFIX = "vlc_conv_"

ENV_WORK_DIR = "VLC_THUMBNAIL_WORK_DIR"
ENV_BIN_PATH = "VLC_THUMBNAIL_BIN_PATH"
ENV_DISABLE_HW_CODEC = "VLC_THUMBNAIL_DISABLE_HW_CODEC"
ENV_TIMEOUT = "VLC_THUMBNAIL_TIMEOUT"

_TRUTHY = {"1", "true", "yes", "on"}


def load_env_file(candidates: Iterable[Path] | None = None) -> None:
    """Best-effort load VLC_THUMBNAIL_* settings from .env files.

    Checks the current directory, then HOME. Values already in the
    environment are never overwritten.
    """

    if candidates is None:
        candidates = [Path.cwd() / ".env", Path.home() / ".env"]

    for path in candidates:
        if not path.is_file():
            continue
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key in os.environ:
                continue
            os.environ[key] = value.strip().strip("'\"")


@dataclass(frozen=True)
class ThumbnailConfig:
    """Immutable settings shared by every job.

    ``work_dir`` and ``binary_path`` may be left unset; they are then
    resolved (and cached) on first use by a :class:`ConfigResolver`.
    ``disable_hw_codec`` forces CPU decoding, which can help with broken
    GPU drivers.
    """

    work_dir: Path | None = None
    binary_path: Path | None = None
    disable_hw_codec: bool = False
    timeout: float | None = None
    binary_name: str = DEFAULT_BINARY_NAME
    run_id_prefix: str = DEFAULT_RUN_ID_PREFIX

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ThumbnailConfig":
        env = os.environ if environ is None else environ

        work_dir = env.get(ENV_WORK_DIR) or None
        binary_path = env.get(ENV_BIN_PATH) or None
        disable_hw = env.get(ENV_DISABLE_HW_CODEC, "").strip().lower() in _TRUTHY

        timeout: float | None = None
        raw_timeout = env.get(ENV_TIMEOUT, "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(f"{ENV_TIMEOUT}={raw_timeout!r} is not a number") from exc
            if timeout <= 0:
                raise ConfigurationError(f"{ENV_TIMEOUT} must be > 0")

        return cls(
            work_dir=Path(work_dir).expanduser() if work_dir else None,
            binary_path=Path(binary_path).expanduser() if binary_path else None,
            disable_hw_codec=disable_hw,
            timeout=timeout,
        )


@dataclass(frozen=True)
class ResolvedConfig:
    work_dir: Path
    binary_path: Path
    disable_hw_codec: bool = False
    timeout: float | None = None
    run_id_prefix: str = DEFAULT_RUN_ID_PREFIX


def find_binary(name: str = DEFAULT_BINARY_NAME) -> Path:
    """Locate ``name`` with ``which``. Only works if it lives on PATH."""

    try:
        result = subprocess.run(
            ["which", name],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise BinaryNotFoundError(f"failed to run `which {name}`: {exc}") from exc

    location = result.stdout.strip()
    if result.returncode != 0 or not location:
        raise BinaryNotFoundError(f"failed to find {name} executable (which exited {result.returncode})")
    return Path(location)


class ConfigResolver:
    """Resolve the work directory and binary path once and cache them.

    Thread-safe: concurrent first calls resolve a default exactly once.
    """

    def __init__(
        self,
        config: ThumbnailConfig | None = None,
        *,
        locator: Callable[[str], Path] = find_binary,
        getcwd: Callable[[], str] = os.getcwd,
    ) -> None:
        self.config = config or ThumbnailConfig()
        self._locator = locator
        self._getcwd = getcwd
        self._lock = threading.Lock()
        self._work_dir: Path | None = None
        self._binary_path: Path | None = None

    def reset(self) -> None:
        with self._lock:
            self._work_dir = None
            self._binary_path = None

    def work_dir(self) -> Path:
        with self._lock:
            if self._work_dir is None:
                if self.config.work_dir is not None:
                    self._work_dir = Path(self.config.work_dir)
                else:
                    try:
                        self._work_dir = Path(self._getcwd())
                    except OSError as exc:
                        raise WorkDirUnavailableError(
                            f"work dir was not set and the current directory is unavailable: {exc}"
                        ) from exc
                    logger.debug("using current directory %s as work dir", self._work_dir)
            return self._work_dir

    def binary_path(self) -> Path:
        with self._lock:
            if self._binary_path is not None:
                return self._binary_path

            configured = self.config.binary_path
            if configured is None:
                try:
                    found = self._locator(self.config.binary_name)
                except BinaryNotFoundError:
                    raise
                except (OSError, RuntimeError) as exc:
                    raise BinaryNotFoundError(
                        f"binary path was not set, failed to find {self.config.binary_name}: {exc}"
                    ) from exc
                logger.debug("found %s at %s", self.config.binary_name, found)
                self._binary_path = Path(found)
                return self._binary_path

            path = Path(configured)
            try:
                path.stat()
            except FileNotFoundError as exc:
                raise ConfiguredBinaryMissingError(f"binary path was set but not found at: {path}") from exc
            except OSError as exc:
                raise BinaryAccessError(f"cannot access configured binary {path}: {exc}") from exc
            self._binary_path = path
            return self._binary_path

