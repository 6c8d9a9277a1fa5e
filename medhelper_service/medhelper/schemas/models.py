import re
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from medhelper.utils.time_of_day import normalize_time

Frequency = Literal["once", "twice", "thrice", "four", "asNeeded"]
LogStatus = Literal["taken", "skipped", "missed"]
EffectiveStatus = Literal["taken", "skipped", "missed", "upcoming", "current"]
TimeFormat = Literal["12h", "24h"]
Language = Literal["en", "ar", "tr"]


def _unique_times(times: List[str]) -> List[str]:
    # canonical HH:MM, first occurrence wins
    return list(dict.fromkeys(normalize_time(t) for t in times))


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class Medication(BaseModel):
    id: str
    name: str
    dosage: str
    frequency: Frequency
    times: List[str] = Field(default_factory=list, description='24h "HH:MM" values')
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("times")
    @classmethod
    def _check_times(cls, v: List[str]) -> List[str]:
        return _unique_times(v)

    @model_validator(mode="after")
    def _check_schedule(self) -> "Medication":
        if self.frequency == "asNeeded":
            self.times = []
        elif not self.times:
            raise ValueError("Scheduled medications need at least one time.")
        return self


class MedicationLog(BaseModel):
    model_config = {"frozen": True}

    id: str
    medication_id: str
    scheduled_time: str
    scheduled_date: str  # YYYY-MM-DD
    status: LogStatus
    actual_time: Optional[str] = None
    skip_reason: Optional[str] = None
    created_at: datetime


class ScheduledDose(BaseModel):
    dose_id: str
    medication_id: str
    name: str
    dosage: str
    notes: Optional[str] = None
    time: str
    date: str
    status: EffectiveStatus
    log_id: Optional[str] = None


class DefaultTimes(BaseModel):
    once: List[str] = Field(default_factory=lambda: ["08:00"])
    twice: List[str] = Field(default_factory=lambda: ["08:00", "20:00"])
    thrice: List[str] = Field(default_factory=lambda: ["08:00", "14:00", "20:00"])
    four: List[str] = Field(default_factory=lambda: ["08:00", "12:00", "16:00", "20:00"])

    @field_validator("once", "twice", "thrice", "four")
    @classmethod
    def _check_times(cls, v: List[str]) -> List[str]:
        return _unique_times(v)


class AppSettings(BaseModel):
    language: Language = "en"
    notifications_enabled: bool = True
    sound_enabled: bool = True
    time_format: TimeFormat = "12h"
    api_url: str = ""
    default_times: DefaultTimes = Field(default_factory=DefaultTimes)


class SettingsUpdate(BaseModel):
    language: Optional[Language] = None
    notifications_enabled: Optional[bool] = None
    sound_enabled: Optional[bool] = None
    time_format: Optional[TimeFormat] = None
    api_url: Optional[str] = None
    # per-frequency patch; frequencies left out keep their current times
    default_times: Optional[Dict[Literal["once", "twice", "thrice", "four"], List[str]]] = None

    @field_validator("default_times")
    @classmethod
    def _check_default_times(cls, v):
        return {k: _unique_times(times) for k, times in v.items()} if v is not None else None


class MedicationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: Frequency = "once"
    times: Optional[List[str]] = None  # None => settings default for the frequency
    notes: Optional[str] = None

    @field_validator("name", "dosage")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("times")
    @classmethod
    def _check_times(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _unique_times(v) if v is not None else None


class MedicationUpdate(BaseModel):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[Frequency] = None
    times: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("name", "dosage")
    @classmethod
    def _not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _strip_required(v) if v is not None else None

    @field_validator("times")
    @classmethod
    def _check_times(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _unique_times(v) if v is not None else None


class DoseActionRequest(BaseModel):
    medication_id: str
    scheduled_time: str
    scheduled_date: Optional[str] = None  # defaults to today

    @field_validator("scheduled_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("scheduled_date")
    @classmethod
    def _check_date(cls, v: Optional[str]) -> Optional[str]:
        # YYYY-MM-DD, and a real calendar day
        if v is None:
            return v
        if not re.fullmatch(r"[0-9]{4}-[0-9]{2}-[0-9]{2}", v):
            raise ValueError(f"Expected YYYY-MM-DD, got {v!r}")
        return date.fromisoformat(v).isoformat()


class SkipRequest(DoseActionRequest):
    reason: str = ""


class DisplayDose(ScheduledDose):
    display_time: str
    due_in: Optional[Dict[str, int]] = None  # {"hours", "minutes"}, upcoming doses only


class TimeCluster(BaseModel):
    time: str
    display_time: str
    doses: List[DisplayDose]


class TodayResponse(BaseModel):
    date: str
    current_time: str
    doses: List[DisplayDose]
    groups: Dict[str, List[TimeCluster]]


class ReconcileResponse(BaseModel):
    date: str
    current_time: str
    skipped: List[MedicationLog]


class HistoryDay(BaseModel):
    date: str
    logs: List[Dict[str, Any]]


class AdherenceSummary(BaseModel):
    days: int
    total_events: int
    taken: int
    missed: int
    skipped: int
    adherence_rate: float


class ReminderRequest(BaseModel):
    title: str
    body: str
    sound: bool = True
    data: Dict[str, Any] = Field(default_factory=dict)
    trigger: Dict[str, Any] = Field(default_factory=dict)
    first_fire_at: datetime


class ToolResult(BaseModel):
    ok: bool
    mock: bool = True
    details: Dict[str, Any] = Field(default_factory=dict)


class ImportResponse(BaseModel):
    imported: int
    medications: List[Medication]


class ReminderSchedule(BaseModel):
    reminders: List[ReminderRequest]
    result: ToolResult
