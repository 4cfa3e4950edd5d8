"""Push delivery channels."""

from .channel import (
    DeliveryChannel,
    PushConfigurationError,
    PushDeliveryError,
    mask_token,
    stringify_data,
    to_display_string,
)
from .firebase import FirebasePushChannel

__all__ = [
    "DeliveryChannel",
    "FirebasePushChannel",
    "PushConfigurationError",
    "PushDeliveryError",
    "mask_token",
    "stringify_data",
    "to_display_string",
]
