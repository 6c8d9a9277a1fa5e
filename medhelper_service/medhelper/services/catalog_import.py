import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from medhelper.core.clock import Clock
from medhelper.core.config import CATALOG_IMPORT_TIMEOUT_S
from medhelper.schemas.models import AppSettings, Medication
from medhelper.services.catalog import CatalogStore, build_medication

logger = logging.getLogger(__name__)

IMPORT_DEFAULTS = {
    "dosage": "1 tablet",
    "frequency": "once",
    "times": ["08:00"],
    "notes": "",
}


class CatalogImportError(RuntimeError):
    pass


def fetch_catalog_records(url: str, timeout_s: Optional[int] = None) -> List[Dict[str, Any]]:
    """GET the remote catalog. Expects {"data": [...]}; anything else yields no records."""
    if not url:
        raise CatalogImportError("No catalog URL configured.")

    try:
        r = requests.get(url, timeout=timeout_s or CATALOG_IMPORT_TIMEOUT_S)
    except requests.RequestException as e:
        raise CatalogImportError(f"Catalog request failed: {e}") from e

    if r.status_code >= 400:
        raise CatalogImportError(f"Catalog {r.status_code}: {r.text[:200]}")

    try:
        payload = r.json()
    except ValueError as e:
        raise CatalogImportError("Catalog response is not valid JSON.") from e

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        logger.warning("Catalog response has no data list; importing nothing")
        return []
    return data


def records_to_medications(
    records: List[Dict[str, Any]],
    settings: AppSettings,
    clock: Optional[Clock] = None,
) -> List[Medication]:
    meds: List[Medication] = []
    for rec in records:
        if not isinstance(rec, dict):
            continue
        name = str(rec.get("name") or "").strip()
        if not name:
            logger.warning("Skipping catalog record without a name: %r", rec)
            continue

        data = {k: rec.get(k) or default for k, default in IMPORT_DEFAULTS.items()}
        # JSON catalogs often send dosage as a bare number
        for k in ("dosage", "notes"):
            if isinstance(data[k], (int, float, str)):
                data[k] = str(data[k]).strip() or IMPORT_DEFAULTS[k]
        data["name"] = name
        try:
            meds.append(build_medication(data, settings, clock))
        except ValidationError as e:
            raise CatalogImportError(f"Invalid catalog record {name!r}") from e
    return meds


def import_catalog(
    url: str,
    catalog: CatalogStore,
    settings: AppSettings,
    clock: Optional[Clock] = None,
) -> List[Medication]:
    """All or nothing: either every converted record lands in the catalog or none does."""
    records = fetch_catalog_records(url)
    meds = records_to_medications(records, settings, clock)
    catalog.add_many(meds)
    logger.info("Imported %d medication(s) from %s", len(meds), url)
    return meds
