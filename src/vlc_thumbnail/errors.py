"""Exception types raised while validating and running a thumbnail job."""

from __future__ import annotations

from pathlib import Path


class ThumbnailError(RuntimeError):
    pass


class ConfigurationError(ThumbnailError):
    """The work directory or the cvlc binary could not be resolved."""


class WorkDirUnavailableError(ConfigurationError):
    pass


class BinaryNotFoundError(ConfigurationError):
    pass


class ConfiguredBinaryMissingError(ConfigurationError):
    pass


class BinaryAccessError(ConfigurationError):
    pass


class ValidationError(ThumbnailError):
    """The request itself is invalid; nothing was spawned."""


class InvalidOutputFormatError(ValidationError):
    pass


class InvalidTimestampError(ValidationError):
    pass


class SourceNotFoundError(ValidationError):
    pass


class SourceAccessError(ValidationError):
    pass


class ExecutionError(ThumbnailError):
    """Running cvlc failed or produced no usable output."""


class LaunchError(ExecutionError):
    pass


class ClassifiedMediaError(ExecutionError):
    """cvlc printed a known failure marker."""

    def __init__(self, reason: str, line: str) -> None:
        super().__init__(f"vlc error ({reason}): {line}")
        self.reason = reason
        self.line = line


class ProcessFailedError(ExecutionError):
    def __init__(self, returncode: int) -> None:
        super().__init__(
            f"cvlc exited with status {returncode} (see ThumbnailRequest.command_log())"
        )
        self.returncode = returncode


class ProcessTimeoutError(ExecutionError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"cvlc did not finish within {timeout}s and was killed")
        self.timeout = timeout


class OutputNotProducedError(ExecutionError):
    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cvlc reported success but no snapshot could be read at {path}: {cause}")
        self.path = path


class OutputWriteError(ExecutionError):
    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"failed to write snapshot to {path}: {cause}")
        self.path = path
        self.cause = cause


class CleanupError(ThumbnailError):
    """Removing the temporary snapshot failed. Recorded, not raised."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"failed to remove temp file {path}, reason: {cause}")
        self.path = path
        self.cause = cause
