import os

from vlc_thumbnail.arguments import build_arguments, scene_path
from vlc_thumbnail.request import OutputFormat


def test_argument_order():
    args = build_arguments("/videos/clip.mp4", OutputFormat.JPEG, 5, "vlc_conv_1", "/tmp/work/")

    assert args == [
        "file:///videos/clip.mp4",
        "--rate=99999",
        "--video-filter=scene",
        "--vout=dummy",
        "--aout=dummy",
        "--start-time=5",
        "--stop-time=6",
        "--scene-format=jpg",
        "--scene-prefix=vlc_conv_1",
        "--scene-replace",
        "--scene-path=/tmp/work/",
        "vlc://quit",
    ]


def test_hw_codec_flag_follows_source():
    args = build_arguments(
        "/videos/clip.mp4", OutputFormat.PNG, 0, "run", "/tmp", disable_hw_codec=True
    )

    assert args[:4] == ["file:///videos/clip.mp4", "--avcodec-hw", "none", "--rate=99999"]
    assert "--scene-format=png" in args


def test_tiff_extension():
    args = build_arguments("clip.mp4", OutputFormat.TIFF, 3, "run", "/tmp")

    assert "--scene-format=tiff" in args
    assert "--start-time=3" in args
    assert "--stop-time=4" in args


def test_scene_path_gets_trailing_separator():
    assert scene_path("/tmp/work") == "/tmp/work" + os.sep
    assert scene_path("/tmp/work" + os.sep) == "/tmp/work" + os.sep


def test_relative_source_made_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    args = build_arguments("clip.mp4", OutputFormat.JPEG, 0, "run", "/tmp")

    assert args[0] == f"file://{tmp_path / 'clip.mp4'}"
