from .base import AudioGateway, NotificationGateway, notification_identifier
from .best_effort import BestEffortAudio, BestEffortNotifications
from .logging_gateways import LoggingAudioGateway, LoggingNotificationGateway

__all__ = [
    "AudioGateway",
    "BestEffortAudio",
    "BestEffortNotifications",
    "LoggingAudioGateway",
    "LoggingNotificationGateway",
    "NotificationGateway",
    "notification_identifier",
]
