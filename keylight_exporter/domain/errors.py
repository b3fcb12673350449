class ExporterError(Exception):
    """Base class for poll cycle failures."""


class RequestError(ExporterError):
    """The GET to the device failed or timed out before a response arrived."""


class ReadError(ExporterError):
    """A response arrived but its body could not be read in full."""


class ParseError(ExporterError):
    """The body is not JSON of the expected shape, or reports no lights."""
