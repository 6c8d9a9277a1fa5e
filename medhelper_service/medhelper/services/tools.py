import uuid
from typing import List
from medhelper.schemas.models import ReminderRequest, ToolResult

def mock_schedule_reminders(medication_id: str, reminders: List[ReminderRequest]) -> ToolResult:
    ids = ["ntf_" + uuid.uuid4().hex[:8] for _ in reminders]
    return ToolResult(ok=True, mock=True, details={
        "medication_id": medication_id,
        "scheduled": len(reminders),
        "identifiers": ids,
    })

def mock_cancel_reminders(medication_id: str) -> ToolResult:
    return ToolResult(ok=True, mock=True, details={"medication_id": medication_id, "cancelled": True})
