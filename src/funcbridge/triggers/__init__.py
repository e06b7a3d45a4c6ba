from funcbridge.triggers.base import BaseTrigger, new_base
from funcbridge.triggers.http import (
    HTTPIdentity,
    HTTPIdentityClaims,
    HTTPMetadata,
    HTTPTrigger,
    new_http,
)
from funcbridge.triggers.queue import QueueMetadata, QueueTrigger, new_queue
from funcbridge.triggers.registry import TriggerRegistry, new_trigger, register_trigger
from funcbridge.triggers.timer import TimerSchedule, TimerScheduleStatus, TimerTrigger, new_timer

__all__ = [
    "BaseTrigger",
    "HTTPIdentity",
    "HTTPIdentityClaims",
    "HTTPMetadata",
    "HTTPTrigger",
    "QueueMetadata",
    "QueueTrigger",
    "TimerSchedule",
    "TimerScheduleStatus",
    "TimerTrigger",
    "TriggerRegistry",
    "new_base",
    "new_http",
    "new_queue",
    "new_timer",
    "new_trigger",
    "register_trigger",
]
