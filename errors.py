class PhStripError(Exception):
    """Base class for everything the analysis helpers raise on purpose."""


class UnsupportedFile(PhStripError):
    """Upload rejected before sampling: wrong type, undecodable, too large."""

    def __init__(self, reason, mime_type=None):
        super().__init__(reason)
        self.reason = reason
        self.mime_type = mime_type


class RenderingUnavailable(PhStripError):
    """The image was recognised but no pixel buffer could be produced."""


class InvalidColor(PhStripError, ValueError):
    pass
