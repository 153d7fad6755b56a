"""Video thumbnails captured by driving cvlc."""

from .classifier import DEFAULT_MARKERS, Classification, Marker, MarkerClassifier
from .config import ConfigResolver, ResolvedConfig, ThumbnailConfig
from .engine import ThumbnailGenerator, configure, generate, generate_to
from .errors import (
    BinaryAccessError,
    BinaryNotFoundError,
    ClassifiedMediaError,
    CleanupError,
    ConfigurationError,
    ConfiguredBinaryMissingError,
    ExecutionError,
    InvalidOutputFormatError,
    InvalidTimestampError,
    LaunchError,
    OutputNotProducedError,
    OutputWriteError,
    ProcessFailedError,
    ProcessTimeoutError,
    SourceAccessError,
    SourceNotFoundError,
    ThumbnailError,
    ValidationError,
    WorkDirUnavailableError,
)
from .request import OutputFormat, ThumbnailRequest

__version__ = "0.1.0"

__all__ = [
    "BinaryAccessError",
    "BinaryNotFoundError",
    "Classification",
    "ClassifiedMediaError",
    "CleanupError",
    "ConfigResolver",
    "ConfigurationError",
    "ConfiguredBinaryMissingError",
    "DEFAULT_MARKERS",
    "ExecutionError",
    "InvalidOutputFormatError",
    "InvalidTimestampError",
    "LaunchError",
    "Marker",
    "MarkerClassifier",
    "OutputFormat",
    "OutputNotProducedError",
    "OutputWriteError",
    "ProcessFailedError",
    "ProcessTimeoutError",
    "ResolvedConfig",
    "SourceAccessError",
    "SourceNotFoundError",
    "ThumbnailConfig",
    "ThumbnailError",
    "ThumbnailGenerator",
    "ThumbnailRequest",
    "ValidationError",
    "WorkDirUnavailableError",
    "__version__",
    "configure",
    "generate",
    "generate_to",
]
