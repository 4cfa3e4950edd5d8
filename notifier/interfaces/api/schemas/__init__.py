from .base import CamelModel, MessageResponse
from .dispatch import (
    BulkDispatchRead,
    DispatchRequest,
    DispatchResponse,
    PushDeliveryRead,
    PushDeliveryResponse,
    RecipientOutcomeRead,
)
from .notification import DeviceTokenUpdate, NotificationListRead, NotificationRead
from .preference import (
    NotificationPreferenceRead,
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
)

__all__ = [
    "BulkDispatchRead",
    "CamelModel",
    "DeviceTokenUpdate",
    "DispatchRequest",
    "DispatchResponse",
    "MessageResponse",
    "NotificationListRead",
    "NotificationPreferenceRead",
    "NotificationPreferenceResponse",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "PushDeliveryRead",
    "PushDeliveryResponse",
    "RecipientOutcomeRead",
]
