# medhelper/services/auto_skip.py
import logging
from typing import List, Optional

from medhelper.core.clock import Clock, resolve
from medhelper.core.config import AUTO_SKIP_REASON
from medhelper.schemas.models import Medication, MedicationLog
from medhelper.services.dose_actions import new_log
from medhelper.services.dose_status import classify
from medhelper.services.projection import find_log
from medhelper.utils.time_of_day import compare, now, sort_key

logger = logging.getLogger(__name__)


def find_auto_skips(
    medications: List[Medication],
    logs: List[MedicationLog],
    today: str,
    clock: Optional[Clock] = None,
    reason: str = AUTO_SKIP_REASON,
) -> List[MedicationLog]:
    """
    Missed, unlogged doses whose next dose is already due become "skipped".
    Returns the logs to append; nothing is written here. The last time of
    each schedule has no successor and is never touched.
    """
    clock = resolve(clock)
    current = now(clock)
    out: List[MedicationLog] = []

    for med in medications:
        if med.frequency == "asNeeded":
            continue

        times = sorted(med.times, key=sort_key)
        for t, nxt in zip(times, times[1:]):
            if find_log(logs, med.id, t, today) is not None:
                continue
            if classify(t, current) != "missed":
                continue
            if classify(nxt, current) == "current" or compare(nxt, current) <= 0:
                out.append(new_log(med.id, t, today, "skipped", clock, skip_reason=reason))

    return out


def run_auto_skip(catalog, log_store, clock: Optional[Clock] = None) -> List[MedicationLog]:
    clock = resolve(clock)
    today = clock.today()
    skipped = find_auto_skips(catalog.list(), log_store.list(), today, clock)
    if skipped:
        log_store.extend(skipped)
        logger.info(
            "Auto-skipped %d dose(s) for %s: %s",
            len(skipped),
            today,
            ", ".join(f"{lg.medication_id}@{lg.scheduled_time}" for lg in skipped),
        )
    return skipped
