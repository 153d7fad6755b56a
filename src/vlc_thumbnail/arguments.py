"""Argument vector for a cvlc snapshot run."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .request import OutputFormat


def scene_path(work_dir: Path | str) -> str:
    # --scene-path is only treated as a directory with a trailing separator
    path = str(work_dir)
    if not path.endswith(os.sep):
        path += os.sep
    return path


def build_arguments(
    source: Path | str,
    output_format: OutputFormat,
    timestamp: int,
    run_id: str,
    work_dir: Path | str,
    *,
    disable_hw_codec: bool = False,
) -> List[str]:
    """Return the cvlc arguments, in the order cvlc expects them."""

    # relative paths would be read as the URI host
    args = [f"file://{os.path.abspath(source)}"]

    if disable_hw_codec:
        args += ["--avcodec-hw", "none"]

    args += [
        "--rate=99999",
        "--video-filter=scene",
        "--vout=dummy",
        "--aout=dummy",
        f"--start-time={timestamp}",
        f"--stop-time={timestamp + 1}",
        f"--scene-format={output_format.extension}",
        f"--scene-prefix={run_id}",
        "--scene-replace",
        f"--scene-path={scene_path(work_dir)}",
        "vlc://quit",
    ]
    return args
