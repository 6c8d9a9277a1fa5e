from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from medhelper.core.clock import Clock, get_clock
from medhelper.schemas.models import (
    AdherenceSummary, DisplayDose, DoseActionRequest, HistoryDay, MedicationLog,
    ReconcileResponse, ScheduledDose, SkipRequest, TimeCluster, TodayResponse,
)
from medhelper.services.auto_skip import run_auto_skip
from medhelper.services.catalog import CatalogStore, get_catalog
from medhelper.services.dose_actions import record_skipped, record_taken
from medhelper.services.history import adherence_summary, group_logs_by_date, medication_name
from medhelper.services.log_store import LogStore, get_log_store
from medhelper.services.projection import group_by_status, group_by_time, project_doses_for_date
from medhelper.services.settings_store import SettingsStore, get_settings_store
from medhelper.utils.time_of_day import TimeOfDay, format_for_display, now, time_until

router = APIRouter(prefix="/doses", tags=["doses"])

def _due_in(dose: ScheduledDose, current: TimeOfDay):
    if dose.status != "upcoming":
        return None
    hours, minutes = time_until(dose.time, current)
    return {"hours": hours, "minutes": minutes}

def _display(doses: List[ScheduledDose], time_format: str, current: TimeOfDay) -> List[DisplayDose]:
    return [
        DisplayDose(
            **d.model_dump(),
            display_time=format_for_display(d.time, time_format),
            due_in=_due_in(d, current),
        )
        for d in doses
    ]

@router.get("/today", response_model=TodayResponse)
def today_doses(
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
    settings: SettingsStore = Depends(get_settings_store),
):
    fmt = settings.get().time_format
    today = clock.today()
    current = now(clock)

    doses = project_doses_for_date(catalog.list(), logs.list(), today, current)
    groups = {
        status: [
            TimeCluster(time=t, display_time=format_for_display(t, fmt), doses=_display(cluster, fmt, current))
            for t, cluster in group_by_time(members)
        ]
        for status, members in group_by_status(doses).items()
    }
    return TodayResponse(date=today, current_time=str(current), doses=_display(doses, fmt, current), groups=groups)

@router.post("/take", response_model=MedicationLog)
def take(
    req: DoseActionRequest,
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
):
    ev = logs.append(record_taken(req.medication_id, req.scheduled_time, req.scheduled_date or clock.today(), clock))
    run_auto_skip(catalog, logs, clock)
    return ev

@router.post("/skip", response_model=MedicationLog)
def skip(
    req: SkipRequest,
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
):
    reason = req.reason.strip()
    if not reason:
        raise HTTPException(status_code=400, detail="A reason is required to skip a dose.")

    ev = logs.append(record_skipped(req.medication_id, req.scheduled_time, req.scheduled_date or clock.today(), reason, clock))
    run_auto_skip(catalog, logs, clock)
    return ev

@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile(
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
):
    skipped = run_auto_skip(catalog, logs, clock)
    return ReconcileResponse(date=clock.today(), current_time=str(now(clock)), skipped=skipped)

@router.get("/history", response_model=List[HistoryDay])
def history(
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
    settings: SettingsStore = Depends(get_settings_store),
):
    fmt = settings.get().time_format
    meds = catalog.list()
    out: List[HistoryDay] = []
    for day, entries in group_logs_by_date(logs.list()):
        out.append(HistoryDay(date=day, logs=[
            {
                **lg.model_dump(),
                "medication_name": medication_name(meds, lg.medication_id),
                "display_time": format_for_display(lg.scheduled_time, fmt),
                "display_actual_time": format_for_display(lg.actual_time or "", fmt),
            }
            for lg in entries
        ]))
    return out

@router.get("/summary", response_model=AdherenceSummary)
def summary(
    days: int = Query(7, ge=1, le=365),
    clock: Clock = Depends(get_clock),
    logs: LogStore = Depends(get_log_store),
):
    return adherence_summary(logs.list(), clock.today(), days)
