from __future__ import annotations

from typing import IO, Any, Optional

from pydantic import Field

from funcbridge.core.contracts import HostDateTime, Metadata, WireModel
from funcbridge.core.envelope import decode_envelope
from funcbridge.core.options import TriggerOption, new_trigger_options
from funcbridge.core.raw import RawPayload
from funcbridge.triggers.registry import register_trigger


class TimerSchedule(WireModel):
    adjust_for_dst: bool = Field(default=False, alias="AdjustForDST")


class TimerScheduleStatus(WireModel):
    last: Optional[HostDateTime] = Field(default=None, alias="Last")
    next: Optional[HostDateTime] = Field(default=None, alias="Next")
    last_updated: Optional[HostDateTime] = Field(default=None, alias="LastUpdated")


class TimerPayload(WireModel):
    """The ``timer`` payload as sent by the host.

    ScheduleStatus -> schedule_status, Schedule -> schedule,
    IsPastDue -> is_past_due.
    """

    schedule_status: TimerScheduleStatus = Field(default_factory=TimerScheduleStatus, alias="ScheduleStatus")
    schedule: TimerSchedule = Field(default_factory=TimerSchedule, alias="Schedule")
    is_past_due: bool = Field(default=False, alias="IsPastDue")


@register_trigger(kind="timer")
class TimerTrigger(WireModel):
    """A timer trigger.

    A timer invocation carries no data besides its schedule, so ``parse``
    and ``data`` are no-ops. Use the fields directly.
    """

    schedule_status: TimerScheduleStatus = Field(default_factory=TimerScheduleStatus)
    schedule: TimerSchedule = Field(default_factory=TimerSchedule)
    is_past_due: bool = False
    metadata: Metadata = Field(default_factory=Metadata)

    @classmethod
    def from_stream(cls, stream: IO[bytes], *options: TriggerOption) -> "TimerTrigger":
        return new_timer(stream, *options)

    def parse(self, target: Any = Any) -> None:
        return None

    def data(self) -> Optional[RawPayload]:
        return None


def new_timer(stream: IO[bytes], *options: TriggerOption) -> TimerTrigger:
    """Create a timer trigger from the envelope in ``stream``.

    The name of the trigger in function.json must be ``timer`` unless
    overridden with ``with_name``.
    """
    opts = new_trigger_options(*options)
    decoded = decode_envelope(stream, opts.name or "timer", TimerPayload, Metadata)
    timer = decoded.payload

    return TimerTrigger(
        schedule_status=timer.schedule_status,
        schedule=timer.schedule,
        is_past_due=timer.is_past_due,
        metadata=decoded.metadata,
    )
