from datetime import date, timedelta
from typing import Dict, List, Tuple

from medhelper.schemas.models import AdherenceSummary, Medication, MedicationLog
from medhelper.utils.time_of_day import sort_key

UNKNOWN_MEDICATION = "Unknown Medication"


def medication_name(medications: List[Medication], medication_id: str) -> str:
    med = next((m for m in medications if m.id == medication_id), None)
    return med.name if med else UNKNOWN_MEDICATION


def group_logs_by_date(logs: List[MedicationLog]) -> List[Tuple[str, List[MedicationLog]]]:
    """Newest date first; each day ordered by scheduled time."""
    by_date: Dict[str, List[MedicationLog]] = {}
    for lg in logs:
        by_date.setdefault(lg.scheduled_date, []).append(lg)

    return [
        (d, sorted(by_date[d], key=lambda lg: sort_key(lg.scheduled_time)))
        for d in sorted(by_date, reverse=True)
    ]


def adherence_summary(logs: List[MedicationLog], today: str, days: int = 7) -> AdherenceSummary:
    cutoff = (date.fromisoformat(today) - timedelta(days=days - 1)).isoformat()
    events = [lg for lg in logs if cutoff <= lg.scheduled_date <= today]

    taken = sum(1 for e in events if e.status == "taken")
    missed = sum(1 for e in events if e.status == "missed")
    skipped = sum(1 for e in events if e.status == "skipped")
    total = len(events)
    rate = (taken / total) if total else 0.0

    return AdherenceSummary(
        days=days,
        total_events=total,
        taken=taken,
        missed=missed,
        skipped=skipped,
        adherence_rate=round(rate, 3),
    )
