"""Domain-specific errors for stackconf."""


class StackconfError(Exception):
    """Base error for stackconf."""


class ModuleValidationError(StackconfError):
    """Raised when a module definition does not conform to schema or semantics."""


class ModuleLoadError(StackconfError):
    """Raised when loading module definition sources fails."""


class CatalogError(StackconfError):
    """Raised when the board catalog cannot be read or is malformed."""


class ConfigResolutionError(StackconfError):
    """Raised when a module or configurable cannot be found."""


class ChannelMaskError(StackconfError):
    """Raised when a channel index does not fit in the requested mask."""


class InstanceLoadError(StackconfError):
    """Raised when a file of instance values cannot be read or parsed."""
