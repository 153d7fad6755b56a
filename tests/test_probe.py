import pytest

from conftest import image_bytes
from vlc_thumbnail.probe import describe_image
from vlc_thumbnail.request import OutputFormat


@pytest.mark.parametrize(
    "pil_format, output_format",
    [("JPEG", OutputFormat.JPEG), ("PNG", OutputFormat.PNG), ("TIFF", OutputFormat.TIFF)],
)
def test_describe_matches_format(pil_format, output_format):
    info = describe_image(image_bytes(pil_format, size=(40, 30)))

    assert (info.width, info.height) == (40, 30)
    assert info.matches(output_format)
    assert not info.matches(OutputFormat.PNG if output_format is not OutputFormat.PNG else OutputFormat.JPEG)


def test_garbage_bytes():
    with pytest.raises(ValueError):
        describe_image(b"not an image at all")
