"""Error types raised by capability adapters and the action registry."""


class CapabilityError(RuntimeError):
    """An external capability (git, launcher, AI, storage) failed."""


class GitCommandError(CapabilityError):
    """A git invocation failed, timed out, or git is not installed."""


class LaunchError(CapabilityError):
    """Opening a path, URL or application failed."""


class TextGenerationError(CapabilityError):
    """The text-generation capability failed or returned nothing usable."""


class CacheStorageError(CapabilityError):
    """The workspace cache document could not be read or written."""


class OperationCancelledError(CapabilityError):
    """The request was cancelled or its deadline passed."""


class DuplicateActionIdError(ValueError):
    """Two registered actions can describe themselves with the same id."""
