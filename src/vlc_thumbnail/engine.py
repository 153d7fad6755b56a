"""Run cvlc to capture a single frame and hand back the image bytes."""

from __future__ import annotations

import itertools
import logging
import os
import subprocess
import threading
import time
from pathlib import Path
from typing import Callable, List

from .arguments import build_arguments
from .classifier import MarkerClassifier
from .config import DEFAULT_RUN_ID_PREFIX, ConfigResolver, ResolvedConfig, ThumbnailConfig, load_env_file
from .errors import (
    CleanupError,
    ClassifiedMediaError,
    LaunchError,
    OutputNotProducedError,
    OutputWriteError,
    ProcessFailedError,
    ProcessTimeoutError,
)
from .request import ThumbnailRequest
from .validator import validate

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]

_sequence = itertools.count(1)
_sequence_lock = threading.Lock()


def new_run_id(prefix: str = DEFAULT_RUN_ID_PREFIX) -> str:
    """Millisecond stamp plus pid and a per-process counter.

    The pid separates processes sharing a work dir, the counter separates
    jobs started within the same millisecond.
    """

    millis = time.time_ns() // 1_000_000
    with _sequence_lock:
        seq = next(_sequence)
    return f"{prefix}{millis}_{os.getpid()}_{seq}"


class ThumbnailGenerator:
    """Validate, run cvlc, read the snapshot and remove the temp file.

    Args:
        config: Settings used to build the resolver when none is given.
        resolver: Shared resolve-once cache for the work dir and binary.
        classifier: Anything with ``classify(bytes) -> Classification | None``.
        runner: ``subprocess.run`` compatible callable.
    """

    def __init__(
        self,
        config: ThumbnailConfig | None = None,
        *,
        resolver: ConfigResolver | None = None,
        classifier: MarkerClassifier | None = None,
        runner: Runner = subprocess.run,
    ) -> None:
        self.resolver = resolver or ConfigResolver(config)
        self.classifier = classifier or MarkerClassifier()
        self._runner = runner

    @property
    def config(self) -> ThumbnailConfig:
        return self.resolver.config

    def generate(self, request: ThumbnailRequest) -> bytes:
        """Return the snapshot of ``request.source`` as bytes.

        Raises a :class:`~vlc_thumbnail.errors.ThumbnailError` subclass on
        failure. A failed temp file removal after a successful read does not
        raise; it is stored on ``request.cleanup_error``.
        """

        resolved = validate(request, self.resolver)

        request.stdout = b""
        request.stderr = b""
        request.cleanup_error = None
        request.run_id = new_run_id(resolved.run_id_prefix)

        temp_path = resolved.work_dir / f"{request.run_id}.{request.output_format.extension}"
        args = build_arguments(
            request.source,
            request.output_format,
            request.timestamp,
            request.run_id,
            resolved.work_dir,
            disable_hw_codec=resolved.disable_hw_codec,
        )

        try:
            self._run(request, resolved, args)
            try:
                data = temp_path.read_bytes()
            except OSError as exc:
                raise OutputNotProducedError(temp_path, exc) from exc
        finally:
            self._clean_temp_file(request, temp_path)

        logger.debug("read %d bytes from %s", len(data), temp_path)
        return data

    def generate_to(self, request: ThumbnailRequest, save_location: Path | str) -> None:
        """Write the snapshot to ``save_location``. No extension is added."""

        data = self.generate(request)
        path = Path(save_location)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise OutputWriteError(path, exc) from exc

    def _run(self, request: ThumbnailRequest, resolved: ResolvedConfig, args: List[str]) -> None:
        argv = [str(resolved.binary_path), *args]
        logger.debug("running %s", argv)

        try:
            result = self._runner(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=resolved.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            request.stdout = exc.stdout or b""
            request.stderr = exc.stderr or b""
            raise ProcessTimeoutError(exc.timeout) from exc
        except OSError as exc:
            raise LaunchError(f"failed to start {resolved.binary_path}: {exc}") from exc

        request.stdout = result.stdout or b""
        request.stderr = result.stderr or b""

        # stderr first: when cvlc does fail loudly the reason lands there
        found = self.classifier.classify(request.stderr) or self.classifier.classify(request.stdout)
        if found is not None:
            logger.info("cvlc failed for %s: %s", request.source, found.line)
            raise ClassifiedMediaError(found.reason, found.line)

        if result.returncode != 0:
            raise ProcessFailedError(result.returncode)

    @staticmethod
    def _clean_temp_file(request: ThumbnailRequest, temp_path: Path) -> None:
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            request.cleanup_error = CleanupError(temp_path, exc)
            logger.warning("%s", request.cleanup_error)


_default_generator: ThumbnailGenerator | None = None
_default_lock = threading.Lock()


def default_generator() -> ThumbnailGenerator:
    """Process-wide generator configured from the environment on first use.

    The first call loads `.env` files into ``os.environ`` (see load_env_file).
    """

    global _default_generator
    with _default_lock:
        if _default_generator is None:
            load_env_file()
            _default_generator = ThumbnailGenerator(ThumbnailConfig.from_env())
        return _default_generator


def configure(config: ThumbnailConfig | None = None) -> ThumbnailGenerator:
    """Replace the process-wide generator.

    ``None`` reloads `.env` files into ``os.environ`` and re-reads the environment.
    """

    global _default_generator
    if config is None:
        load_env_file()
        config = ThumbnailConfig.from_env()
    generator = ThumbnailGenerator(config)
    with _default_lock:
        _default_generator = generator
    return generator


def generate(request: ThumbnailRequest) -> bytes:
    return default_generator().generate(request)


def generate_to(request: ThumbnailRequest, save_location: Path | str) -> None:
    default_generator().generate_to(request, save_location)
