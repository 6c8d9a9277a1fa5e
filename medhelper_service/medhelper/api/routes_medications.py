import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from medhelper.core.clock import Clock, get_clock
from medhelper.schemas.models import (
    ImportResponse, Medication, MedicationCreate, MedicationUpdate, ReminderSchedule, ToolResult,
)
from medhelper.services.auto_skip import run_auto_skip
from medhelper.services.catalog import CatalogStore, MedicationNotFound, build_medication, get_catalog
from medhelper.services.catalog_import import CatalogImportError, import_catalog
from medhelper.services.log_store import LogStore, get_log_store
from medhelper.services.reminders import build_reminders
from medhelper.services.security import verify_internal_service
from medhelper.services.settings_store import SettingsStore, get_settings_store
from medhelper.services.tools import mock_cancel_reminders, mock_schedule_reminders

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/medications", tags=["medications"])

def _get_or_404(catalog: CatalogStore, medication_id: str) -> Medication:
    try:
        return catalog.get(medication_id)
    except MedicationNotFound:
        raise HTTPException(status_code=404, detail="medication not found")

@router.get("", response_model=List[Medication])
def list_medications(catalog: CatalogStore = Depends(get_catalog)):
    return catalog.list()

@router.post("", response_model=Medication, status_code=201)
def create_medication(
    req: MedicationCreate,
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
    settings: SettingsStore = Depends(get_settings_store),
):
    try:
        med = build_medication(req.model_dump(), settings.get(), clock)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False, include_input=False))

    catalog.add(med)
    logger.info("Added medication %s (%s)", med.id, med.name)
    run_auto_skip(catalog, logs, clock)
    return med

@router.post("/import", response_model=ImportResponse)
def import_medications(
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
    settings: SettingsStore = Depends(get_settings_store),
    _ = Depends(verify_internal_service),
):
    s = settings.get()
    try:
        meds = import_catalog(s.api_url, catalog, s, clock)
    except CatalogImportError as e:
        logger.error("Catalog import failed: %s (cause: %r)", e, e.__cause__)
        raise HTTPException(status_code=502, detail=str(e))

    run_auto_skip(catalog, logs, clock)
    return ImportResponse(imported=len(meds), medications=meds)

@router.get("/{medication_id}", response_model=Medication)
def get_medication(medication_id: str, catalog: CatalogStore = Depends(get_catalog)):
    return _get_or_404(catalog, medication_id)

@router.patch("/{medication_id}", response_model=Medication)
def update_medication(
    medication_id: str,
    req: MedicationUpdate,
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    logs: LogStore = Depends(get_log_store),
):
    _get_or_404(catalog, medication_id)
    try:
        med = catalog.update(medication_id, req, clock)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False, include_input=False))

    run_auto_skip(catalog, logs, clock)
    return med

@router.delete("/{medication_id}", response_model=ToolResult)
def delete_medication(medication_id: str, catalog: CatalogStore = Depends(get_catalog)):
    _get_or_404(catalog, medication_id)
    catalog.delete(medication_id)
    logger.info("Deleted medication %s", medication_id)
    return mock_cancel_reminders(medication_id)

@router.post("/{medication_id}/reminders", response_model=ReminderSchedule)
def schedule_reminders(
    medication_id: str,
    clock: Clock = Depends(get_clock),
    catalog: CatalogStore = Depends(get_catalog),
    settings: SettingsStore = Depends(get_settings_store),
):
    med = _get_or_404(catalog, medication_id)
    reminders = build_reminders(med, settings.get(), clock.now())
    mock_cancel_reminders(medication_id)
    result = mock_schedule_reminders(medication_id, reminders)
    return ReminderSchedule(reminders=reminders, result=result)
