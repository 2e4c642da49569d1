class TitleScanError(Exception):
    """Base class for every error raised by titlescan."""


class ConfigError(TitleScanError):
    """Missing required input or an invalid configuration file."""


class FileReadError(TitleScanError):
    """The URL list file could not be read."""


class ProxyParseError(TitleScanError):
    """The proxy URL given on the command line is malformed."""


class RequestBuildError(TitleScanError):
    """A URL from the list cannot be turned into a GET request."""
