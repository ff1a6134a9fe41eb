"""Exception hierarchy for dirscan.

Configuration and root-path errors are fatal and raised before any
traversal starts. Per-file stat failures are raised by the metadata
extractor and recovered by the traversal engine.
"""


class DirscanError(Exception):
    """Base exception for all dirscan errors."""


class ConfigurationError(DirscanError):
    """Raised when scan options cannot be turned into a ScanConfig."""


class InvalidDepthError(ConfigurationError):
    """Raised when --depth is not a non-negative integer."""


class InvalidSizeFilterFormatError(ConfigurationError):
    """Raised when a size filter expression does not match the grammar."""


class UnknownOptionError(ConfigurationError):
    """Raised when an unrecognized flag or extra argument is given."""


class MissingPathError(ConfigurationError):
    """Raised when no root directory argument is given."""


class SettingsError(ConfigurationError):
    """Raised when the settings file cannot be read or validated."""


class ConfigurationErrors(ConfigurationError):
    """Several configuration problems reported together.

    Attributes:
        errors: The individual configuration errors, in detection order.
    """

    def __init__(self, errors: list[ConfigurationError]) -> None:
        self.errors = errors
        super().__init__("; ".join(str(e) for e in errors))


class RootPathError(DirscanError):
    """Raised when the root path is missing or not a directory."""


class StatUnavailableError(DirscanError):
    """Raised when an entry vanishes or cannot be stat'ed after listing."""
