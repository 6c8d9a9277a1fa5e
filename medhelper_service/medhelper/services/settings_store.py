from medhelper.core.config import MEDHELPER_CATALOG_URL, MEDHELPER_TIME_FORMAT
from medhelper.schemas.models import AppSettings, SettingsUpdate


def default_settings() -> AppSettings:
    return AppSettings(
        time_format="24h" if MEDHELPER_TIME_FORMAT == "24h" else "12h",
        api_url=MEDHELPER_CATALOG_URL,
    )


class SettingsStore:
    def __init__(self, settings: AppSettings | None = None):
        self._settings = settings or default_settings()

    def get(self) -> AppSettings:
        return self._settings

    def update(self, changes: SettingsUpdate) -> AppSettings:
        current = self._settings.model_dump()
        patch = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "default_times" in patch:
            patch["default_times"] = {**current["default_times"], **patch["default_times"]}
        merged = {**current, **patch}
        self._settings = AppSettings(**merged)
        return self._settings


APP_SETTINGS = SettingsStore()

def get_settings_store() -> SettingsStore:
    return APP_SETTINGS
