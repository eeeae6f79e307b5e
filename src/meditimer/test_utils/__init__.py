from .clock import FakeClock
from .gateways import RecordingAudioGateway, RecordingNotificationGateway

__all__ = ["FakeClock", "RecordingAudioGateway", "RecordingNotificationGateway"]
