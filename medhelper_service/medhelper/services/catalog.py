# medhelper/services/catalog.py
import uuid
from typing import Any, Dict, Iterable, List, Optional

from medhelper.core.clock import Clock, resolve
from medhelper.schemas.models import AppSettings, Medication, MedicationUpdate


class MedicationNotFound(KeyError):
    pass


def _med_id() -> str:
    return "med_" + uuid.uuid4().hex[:10]


def default_times_for(frequency: str, settings: AppSettings) -> List[str]:
    if frequency == "asNeeded":
        return []
    return list(getattr(settings.default_times, frequency, []))


def build_medication(
    data: Dict[str, Any],
    settings: AppSettings,
    clock: Optional[Clock] = None,
) -> Medication:
    """New catalog entry: fresh id + timestamps, default times when none were given."""
    ts = resolve(clock).now()
    frequency = data.get("frequency") or "once"
    times = data.get("times")
    if times is None:
        times = default_times_for(frequency, settings)

    return Medication(
        id=_med_id(),
        name=data["name"],
        dosage=data["dosage"],
        frequency=frequency,
        times=times,
        notes=data.get("notes"),
        created_at=ts,
        updated_at=ts,
    )


class CatalogStore:
    def __init__(self, medications: Iterable[Medication] = ()):
        self._meds: List[Medication] = list(medications)

    def list(self) -> List[Medication]:
        return list(self._meds)

    def get(self, medication_id: str) -> Medication:
        med = next((m for m in self._meds if m.id == medication_id), None)
        if med is None:
            raise MedicationNotFound(medication_id)
        return med

    def add(self, med: Medication) -> Medication:
        self.add_many([med])
        return med

    def add_many(self, meds: List[Medication]) -> None:
        known = {m.id for m in self._meds}
        for m in meds:
            if m.id in known:
                raise ValueError(f"Duplicate medication id: {m.id}")
            known.add(m.id)
        self._meds.extend(meds)

    def update(
        self,
        medication_id: str,
        changes: MedicationUpdate,
        clock: Optional[Clock] = None,
    ) -> Medication:
        current = self.get(medication_id)
        patch = changes.model_dump(exclude_unset=True)
        merged = {**current.model_dump(), **patch, "updated_at": resolve(clock).now()}
        updated = Medication(**merged)

        self._meds = [updated if m.id == medication_id else m for m in self._meds]
        return updated

    def delete(self, medication_id: str) -> Medication:
        med = self.get(medication_id)
        self._meds = [m for m in self._meds if m.id != medication_id]
        return med


_DEFAULT_MEDICINES: List[Dict[str, Any]] = [
    {"id": "med_default_1", "name": "Paracetamol 500mg", "dosage": "500mg", "frequency": "four",
     "times": ["08:00", "12:00", "16:00", "20:00"], "notes": "After meal"},
    {"id": "med_default_2", "name": "Amoxicillin 250mg", "dosage": "250mg", "frequency": "thrice",
     "times": ["08:00", "14:00", "20:00"], "notes": "Before meal, full glass of water"},
    {"id": "med_default_3", "name": "Metformin 850mg", "dosage": "850mg", "frequency": "twice",
     "times": ["08:00", "20:00"], "notes": "With meal"},
    {"id": "med_default_4", "name": "Vitamin D3 1000IU", "dosage": "1000IU", "frequency": "once",
     "times": ["08:00"], "notes": "After breakfast"},
    {"id": "med_default_5", "name": "Ibuprofen 200mg", "dosage": "200mg", "frequency": "asNeeded",
     "times": [], "notes": "After meal, not on empty stomach"},
]


def seed_default_catalog(clock: Optional[Clock] = None) -> List[Medication]:
    ts = resolve(clock).now()
    return [Medication(**m, created_at=ts, updated_at=ts) for m in _DEFAULT_MEDICINES]


MEDICATION_CATALOG = CatalogStore()

def get_catalog() -> CatalogStore:
    return MEDICATION_CATALOG
