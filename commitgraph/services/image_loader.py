from io import BytesIO
from pathlib import Path

from PIL import Image
from PIL import UnidentifiedImageError

from commitgraph.errors import ImageDecodeFailure
from commitgraph.errors import ImageNotFound


def _to_luma(image: Image.Image, source: str) -> Image.Image:
    try:
        image.load()
        return image.convert("L")
    except (OSError, ValueError) as exc:
        raise ImageDecodeFailure(f"Could not decode image {source}") from exc


def load_luma_image(path: str | Path) -> Image.Image:
    """Open an image file and flatten it to a single 8-bit luma channel."""

    path = Path(path)
    if not path.is_file():
        raise ImageNotFound(f"Could not find file {path}")

    try:
        image = Image.open(path)
    except UnidentifiedImageError as exc:
        raise ImageDecodeFailure(f"Could not decode image {path}") from exc
    except OSError as exc:
        raise ImageNotFound(f"Could not open file {path}") from exc

    with image:
        return _to_luma(image, str(path))


def decode_luma_image(data: bytes, source: str = "<upload>") -> Image.Image:
    """Decode in-memory image bytes to a single 8-bit luma channel."""

    try:
        image = Image.open(BytesIO(data))
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageDecodeFailure(f"Could not decode image {source}") from exc

    return _to_luma(image, source)
