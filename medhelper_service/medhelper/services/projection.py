# medhelper/services/projection.py
from typing import Dict, Iterable, List, Optional, Tuple

from medhelper.schemas.models import Medication, MedicationLog, ScheduledDose
from medhelper.services.dose_status import classify
from medhelper.utils.time_of_day import TimeLike, sort_key

# display order of the status sections; "upcoming" also holds "current"
STATUS_GROUPS = ("upcoming", "taken", "missed", "skipped")


def find_log(
    logs: Iterable[MedicationLog],
    medication_id: str,
    time: str,
    date: str,
) -> Optional[MedicationLog]:
    """First log for the (medication, time, date) key, in store order."""
    return next(
        (
            lg for lg in logs
            if lg.medication_id == medication_id
            and lg.scheduled_time == time
            and lg.scheduled_date == date
        ),
        None,
    )


def project_doses_for_date(
    medications: List[Medication],
    logs: List[MedicationLog],
    date: str,
    current: TimeLike,
) -> List[ScheduledDose]:
    pairs: List[Tuple[Medication, str]] = []
    for med in medications:
        if med.frequency == "asNeeded":
            continue
        for t in med.times:
            pairs.append((med, t))

    # sorted() is stable, so equal times keep catalog order
    pairs = sorted(pairs, key=lambda p: sort_key(p[1]))

    doses: List[ScheduledDose] = []
    for med, t in pairs:
        log = find_log(logs, med.id, t, date)
        doses.append(ScheduledDose(
            dose_id=f"{med.id}_{t}",
            medication_id=med.id,
            name=med.name,
            dosage=med.dosage,
            notes=med.notes,
            time=t,
            date=date,
            status=log.status if log else classify(t, current),
            log_id=log.id if log else None,
        ))
    return doses


def group_by_status(doses: List[ScheduledDose]) -> Dict[str, List[ScheduledDose]]:
    groups: Dict[str, List[ScheduledDose]] = {}
    for d in doses:
        key = "upcoming" if d.status in ("upcoming", "current") else d.status
        groups.setdefault(key, []).append(d)

    # input is already time-ordered; only the section order needs fixing
    return {k: groups[k] for k in STATUS_GROUPS if k in groups}


def group_by_time(doses: List[ScheduledDose]) -> List[Tuple[str, List[ScheduledDose]]]:
    clusters: List[Tuple[str, List[ScheduledDose]]] = []
    for d in sorted(doses, key=lambda x: sort_key(x.time)):
        if clusters and clusters[-1][0] == d.time:
            clusters[-1][1].append(d)
        else:
            clusters.append((d.time, [d]))
    return clusters
