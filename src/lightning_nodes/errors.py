"""Exception hierarchy for the node sync service."""


class LightningNodesError(Exception):
    """Base exception for all lightning-nodes failures."""


class ConfigError(LightningNodesError):
    """Raised for invalid runtime configuration."""


class FetchError(LightningNodesError):
    """Raised when the remote rankings cannot be retrieved or parsed."""


class StorageError(LightningNodesError):
    """Raised for connectivity, schema or write failures against the node store."""


class CycleError(LightningNodesError):
    """Raised when one sync cycle fails; wraps a FetchError or StorageError."""


class StartupError(LightningNodesError):
    """Raised when the service cannot start (store init, socket bind)."""
