from typing import Iterable, List
from medhelper.schemas.models import MedicationLog


class LogStore:
    """Append-only; insertion order is what first-match lookups rely on."""

    def __init__(self, logs: Iterable[MedicationLog] = ()):
        self._logs: List[MedicationLog] = list(logs)

    def append(self, log: MedicationLog) -> MedicationLog:
        self._logs.append(log)
        return log

    def extend(self, logs: Iterable[MedicationLog]) -> None:
        self._logs.extend(logs)

    def list(self) -> List[MedicationLog]:
        return list(self._logs)

    def __len__(self) -> int:
        return len(self._logs)


MEDICATION_LOG = LogStore()

def get_log_store() -> LogStore:
    return MEDICATION_LOG
