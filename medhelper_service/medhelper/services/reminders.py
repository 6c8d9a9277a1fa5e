# medhelper/services/reminders.py
from datetime import datetime, timedelta
from typing import List

from medhelper.schemas.models import AppSettings, Medication, ReminderRequest
from medhelper.utils.time_of_day import parse_time

REMINDER_TITLE = "Medication Reminder"


def reminder_body(med: Medication) -> str:
    return f"It's time to take {med.name} ({med.dosage})"


def build_reminder(med: Medication, time: str, now_dt: datetime, sound: bool = True) -> ReminderRequest:
    t = parse_time(time)
    first = now_dt.replace(hour=t.hour, minute=t.minute, second=0, microsecond=0)
    if first < now_dt:
        first += timedelta(days=1)

    return ReminderRequest(
        title=REMINDER_TITLE,
        body=reminder_body(med),
        sound=sound,
        data={"medication_id": med.id, "time": str(t)},
        trigger={"hour": t.hour, "minute": t.minute, "repeats": True},
        first_fire_at=first,
    )


def build_reminders(med: Medication, settings: AppSettings, now_dt: datetime) -> List[ReminderRequest]:
    if not settings.notifications_enabled or med.frequency == "asNeeded":
        return []
    return [build_reminder(med, t, now_dt, settings.sound_enabled) for t in med.times]
