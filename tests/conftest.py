import io
import subprocess
from pathlib import Path

import pytest
from PIL import Image

from vlc_thumbnail.config import ENV_BIN_PATH, ENV_DISABLE_HW_CODEC, ENV_TIMEOUT, ENV_WORK_DIR


def image_bytes(fmt: str = "JPEG", size=(16, 9)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, "red").save(buf, format=fmt)
    return buf.getvalue()


def scene_options(argv):
    """Pick the --scene-* options out of a cvlc argument vector."""

    opts = {}
    for arg in argv:
        if arg.startswith("--scene-") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            opts[key] = value
    return opts


def snapshot_path(argv) -> Path:
    opts = scene_options(argv)
    return Path(opts["scene-path"]) / f"{opts['scene-prefix']}.{opts['scene-format']}"


class FakeCvlc:
    """Stands in for subprocess.run; writes the snapshot where cvlc would."""

    def __init__(
        self,
        *,
        returncode: int = 0,
        stdout: bytes = b"",
        stderr: bytes = b"",
        payload: bytes | None = None,
        write: bool = True,
        raises: BaseException | None = None,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.payload = payload if payload is not None else image_bytes()
        self.write = write
        self.raises = raises
        self.calls = []

    def __call__(self, argv, **kwargs):
        self.calls.append((argv, kwargs))
        if self.write:
            snapshot_path(argv).write_bytes(self.payload)
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, self.stderr)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (ENV_WORK_DIR, ENV_BIN_PATH, ENV_DISABLE_HW_CODEC, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def video(tmp_path) -> Path:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def fake_binary(tmp_path) -> Path:
    path = tmp_path / "bin" / "cvlc"
    path.parent.mkdir()
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def work_dir(tmp_path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path
