import uuid
from typing import Optional

from medhelper.core.clock import Clock, resolve
from medhelper.schemas.models import LogStatus, MedicationLog
from medhelper.utils.time_of_day import now


def _log_id() -> str:
    return "log_" + uuid.uuid4().hex[:10]


def new_log(
    medication_id: str,
    scheduled_time: str,
    scheduled_date: str,
    status: LogStatus,
    clock: Optional[Clock] = None,
    skip_reason: Optional[str] = None,
) -> MedicationLog:
    clock = resolve(clock)
    return MedicationLog(
        id=_log_id(),
        medication_id=medication_id,
        scheduled_time=scheduled_time,
        scheduled_date=scheduled_date,
        status=status,
        actual_time=str(now(clock)),
        skip_reason=skip_reason,
        created_at=clock.now(),
    )


def record_taken(
    medication_id: str,
    scheduled_time: str,
    scheduled_date: str,
    clock: Optional[Clock] = None,
) -> MedicationLog:
    return new_log(medication_id, scheduled_time, scheduled_date, "taken", clock)


def record_skipped(
    medication_id: str,
    scheduled_time: str,
    scheduled_date: str,
    reason: str,
    clock: Optional[Clock] = None,
) -> MedicationLog:
    # reason is checked by the caller, not here
    return new_log(medication_id, scheduled_time, scheduled_date, "skipped", clock, skip_reason=reason)
