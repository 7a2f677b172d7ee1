from collections.abc import Callable
from collections.abc import Sequence

import pytest
from PIL import Image


def luma_image(columns: Sequence[Sequence[int]], height: int = 7) -> Image.Image:
    """Build a mode "L" image where columns[x][y] is the pixel at (x, y)."""

    image = Image.new("L", (len(columns), height))
    for x, column in enumerate(columns):
        for y, value in enumerate(column):
            image.putpixel((x, y), value)
    return image


@pytest.fixture
def make_image() -> Callable[..., Image.Image]:
    return luma_image
