"""Custom exceptions for visrange."""


class VisrangeError(Exception):
    """Base exception for all visrange errors."""

    pass


class ConfigError(VisrangeError):
    """Raised when a configuration file is structurally unusable."""

    pass


class ParseError(VisrangeError):
    """Raised when YAML parsing fails."""

    pass
