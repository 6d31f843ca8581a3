class OutageMapError(Exception):
    """Base class for outage map service errors."""


class FetchError(OutageMapError):
    """Upstream outage map could not be fetched or parsed."""


class PersistError(OutageMapError):
    """Baseline snapshot could not be written to the state file."""


class ConfigError(OutageMapError):
    """Required configuration is missing or invalid."""
