import logging
from datetime import date
from datetime import timedelta

from PIL import Image

from commitgraph.errors import UnsupportedImageShape
from commitgraph.models import CommitHistoryGrid
from commitgraph.models import DAYS_PER_WEEK
from commitgraph.models import DayCell
from commitgraph.models import WeekColumn
from commitgraph.services.calendar import align

logger = logging.getLogger(__name__)


def build_grid(image: Image.Image, today: date) -> CommitHistoryGrid:
    """Lay the pixels of a luma image over the calendar.

    Column `x` becomes the `x`-th week counted from the oldest one, row `y`
    the `y`-th day of that week starting on Sunday. The image must already be
    single-channel; no color conversion happens here.

    Raises:
        UnsupportedImageShape: If the image is not mode "L" or its height is
            not 7.
        DateRangeError: If the grid would leave the representable calendar.
    """

    if image.mode != "L":
        raise UnsupportedImageShape(
            f"Only single-channel (L) images are supported, got mode {image.mode}"
        )

    width, height = image.size
    if height != DAYS_PER_WEEK:
        raise UnsupportedImageShape(
            "Image size is incorrect. Only images of height 7 are supported "
            f"(got {width}x{height})"
        )

    first_day = align(today, width)

    weeks: list[WeekColumn] = []
    for x in range(width):
        days: list[DayCell] = []
        for y in range(height):
            day = first_day + timedelta(days=DAYS_PER_WEEK * x + y)
            days.append(DayCell(date=day, intensity=image.getpixel((x, y))))
        weeks.append(WeekColumn(days=tuple(days)))

    logger.debug("Built %d week columns starting %s", width, first_day.isoformat())
    return CommitHistoryGrid(weeks=tuple(weeks))
