"""
Error types raised by the AGCWD core.

All of them subclass ValueError, so callers that already guard image
code with ``except ValueError`` keep working.
"""


class AgcwdError(ValueError):
    """Base class for every error raised by the enhancer."""


class InvalidConfigurationError(AgcwdError):
    """Weighting exponent is missing, non-finite or not strictly positive."""


class MalformedBufferError(AgcwdError):
    """Pixel buffer cannot be viewed as whole 8-bit pixels in place."""
