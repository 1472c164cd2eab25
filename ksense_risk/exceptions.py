"""Exception hierarchy for ksense-risk."""


class KsenseRiskError(Exception):
    """Base class for all ksense-risk errors."""


class ConfigError(KsenseRiskError):
    """Startup configuration is missing or invalid. Fatal."""


class PageFetchError(KsenseRiskError):
    """A single page could not be retrieved; the sync skips it."""

    def __init__(self, page, message, status_code=None):
        super().__init__(message)
        self.page = page
        self.status_code = status_code


class MalformedPageError(PageFetchError):
    """The response body is not a usable page envelope."""
