class CommitGraphError(Exception):
    """Base class for every failure that aborts a run."""


class ImageNotFound(CommitGraphError):
    """Raised when the input image path does not exist."""


class ImageDecodeFailure(CommitGraphError):
    """Raised when the input cannot be decoded as an image."""


class UnsupportedImageShape(CommitGraphError):
    """Raised when the image is not a single-channel raster of height 7."""


class InvalidDensity(CommitGraphError):
    """Raised when the density is unparseable or negative."""


class DateRangeError(CommitGraphError):
    """Raised when calendar arithmetic leaves the representable range."""


class SinkInitError(CommitGraphError):
    """Raised when the target repository cannot be prepared."""


class SinkCommitError(CommitGraphError):
    """Raised when a single commit-creation call fails."""
