"""Events published by :class:`iCrop.session.CropSession`."""

from __future__ import annotations

from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class GestureCommittedEvent(Event):
    """A gesture ended and its live values became the committed anchor."""

    gesture: str
    scale: float
    translation: tuple[float, float]
    rotation_angle: float


@dataclass(kw_only=True)
class RotationFallbackEvent(Event):
    """Rotation failed at completion; the crop proceeds on the unrotated image."""

    angle: float
    reason: str


@dataclass(kw_only=True)
class CropCompletedEvent(Event):
    """A crop session produced its output bitmap."""

    shape: str
    circular: bool
    size: tuple[int, int]
    mode: str
