"""Custom exception hierarchy for iCrop."""

from __future__ import annotations


class ICropError(Exception):
    """Base class for all custom errors raised by iCrop."""


# --- 3-layer hierarchy ---

class DomainError(ICropError):
    """Base class for errors in the crop geometry itself."""


class InfrastructureError(ICropError):
    """Base class for errors raised while touching real pixel buffers."""


class ApplicationError(ICropError):
    """Base class for errors caused by how the session is being driven."""


# --- Domain errors ---

class DegenerateCropError(DomainError):
    """Raised when the computed crop rectangle is empty or otherwise invalid.

    Retrying with the same inputs reproduces the failure, so callers should
    surface a "cannot crop" outcome instead.
    """


# --- Infrastructure errors ---

class RotationError(InfrastructureError):
    """Raised when the rotated surface cannot be produced.

    Callers fall back to the unrotated image and still attempt the crop.
    """


# --- Application errors ---

class LayoutNotReadyError(ApplicationError):
    """Raised when geometry is queried before the viewport size is known."""


class ConfigurationError(ICropError):
    """Raised when a configuration mapping fails schema validation."""
