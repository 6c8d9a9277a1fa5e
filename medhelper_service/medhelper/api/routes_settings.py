from fastapi import APIRouter, Depends
from medhelper.schemas.models import AppSettings, SettingsUpdate
from medhelper.services.settings_store import SettingsStore, get_settings_store

router = APIRouter(prefix="/settings", tags=["settings"])

@router.get("", response_model=AppSettings)
def read_settings(settings: SettingsStore = Depends(get_settings_store)):
    return settings.get()

@router.patch("", response_model=AppSettings)
def update_settings(req: SettingsUpdate, settings: SettingsStore = Depends(get_settings_store)):
    return settings.update(req)
