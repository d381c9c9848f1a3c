from .bus import Event, EventBus, Subscription
from .crop_events import CropCompletedEvent, GestureCommittedEvent, RotationFallbackEvent

__all__ = [
    "CropCompletedEvent",
    "Event",
    "EventBus",
    "GestureCommittedEvent",
    "RotationFallbackEvent",
    "Subscription",
]
