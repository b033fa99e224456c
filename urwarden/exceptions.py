class UrwardenError(Exception):
    pass

class ConfigError(UrwardenError):
    """Score thresholds or other settings are inconsistent."""
    pass

# Input errors: one per offending URL, batch processing continues
class URLError(UrwardenError, ValueError):
    pass

class URLParseError(URLError):
    """URL syntax could not be parsed."""
    pass

class InvalidSchemeError(URLError):
    pass

class EmptyHostError(URLError):
    pass

class BlocklistLoadError(UrwardenError):
    """A present blocklist file could not be read. The previous index stays active."""
    pass
