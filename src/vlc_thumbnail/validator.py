"""Check a request and resolve its prerequisites before cvlc is spawned."""

from __future__ import annotations

import os

from .config import ConfigResolver, ResolvedConfig
from .errors import (
    InvalidOutputFormatError,
    InvalidTimestampError,
    SourceAccessError,
    SourceNotFoundError,
)
from .request import OutputFormat, ThumbnailRequest


def validate(request: ThumbnailRequest, resolver: ConfigResolver) -> ResolvedConfig:
    """Validate ``request`` and return the resolved settings for running it.

    ``request.output_format`` is normalised to an :class:`OutputFormat`
    member in place. Checks run in a fixed order so the first problem found
    is the one reported.
    """

    work_dir = resolver.work_dir()

    try:
        request.output_format = OutputFormat.parse(request.output_format)
    except ValueError as exc:
        raise InvalidOutputFormatError(f"invalid output format: {exc}") from exc

    timestamp = request.timestamp
    if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp < 0:
        raise InvalidTimestampError(
            f"invalid timestamp {timestamp!r}, must be an integer equal to or greater than 0"
        )

    try:
        os.stat(request.source)
    except FileNotFoundError as exc:
        raise SourceNotFoundError(f"no source file found at location {request.source}") from exc
    except OSError as exc:
        raise SourceAccessError(f"cannot access source file {request.source}: {exc}") from exc

    binary_path = resolver.binary_path()

    config = resolver.config
    return ResolvedConfig(
        work_dir=work_dir,
        binary_path=binary_path,
        disable_hw_codec=config.disable_hw_codec,
        timeout=config.timeout,
        run_id_prefix=config.run_id_prefix,
    )
