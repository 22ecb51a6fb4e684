import re
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Literal
from datetime import datetime, timezone
from enum import Enum


# ===========================
# Calendar Models
# ===========================

class Day(str, Enum):
    """Weekdays eligible for scheduling"""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


class EnrollmentPeriod(BaseModel):
    id: str
    name: str
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_utc(cls, v: datetime) -> datetime:
        # Aware datetimes are stored as naive UTC so they compare with each other
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


# ===========================
# Course Models
# ===========================

CourseStatus = Literal["OPEN", "CLOSED", "CANCELLED"]


class Section(BaseModel):
    """A concrete offering of a course that students enroll into"""
    id: str
    section_code: str             # "A", "B", ..., "Z", "AA", ...
    schedule: str = "TBD"         # "<Day> <start> - <end>"
    room: str = "TBD"
    max_students: int = 30

    @field_validator("section_code")
    @classmethod
    def _letters_only(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if not re.fullmatch(r"[A-Z]+", v):
            raise ValueError("section code must contain only letters A-Z")
        return v


class Course(BaseModel):
    id: str
    code: str
    name: str
    credits: int = 3
    status: CourseStatus = "OPEN"
    capacity: int = 30
    sections: List[Section] = []


# ===========================
# Schedule Generation
# ===========================

class GenerateScheduleRequest(BaseModel):
    """Courses, days and class length for one generation run"""
    course_ids: List[str]
    days: List[Day]
    hours_per_class: float = Field(default=1.5, ge=1, le=5, multiple_of=0.5)


class ScheduledEntry(BaseModel):
    """One placed (course, section, day) class session"""
    course_id: str
    course_code: str
    course_name: str
    section_number: int
    section_code: Optional[str] = None
    day: str                      # "Monday"
    start_time: str               # 12-hour format, e.g. "8:00 AM"
    end_time: str
    duration: Optional[str] = None  # Human-readable: "1h 30min"


class UnplacedRequest(BaseModel):
    """A (course, section, day) demand that found no free slot range"""
    course_id: str
    course_code: str
    section_number: int
    day: str
    reason: str


class ErrorMessage(BaseModel):
    """Error or warning message"""
    title: str
    message: str


class Messages(BaseModel):
    """Collection of error/warning messages"""
    error_message: List[ErrorMessage] = []


OutcomeStatus = Literal["SCHEDULED", "PARTIAL", "UNSCHEDULED", "EMPTY", "INVALID", "ERROR"]


class ScheduleOutcome(BaseModel):
    """Result of a generation run, tagged by how much of the demand was placed"""
    status: OutcomeStatus
    entries: List[ScheduledEntry] = []
    unplaced: List[UnplacedRequest] = []
    slots_needed: int = 0
    messages: Messages = Messages()


# ===========================
# Schedule Persistence
# ===========================

class ScheduleItem(BaseModel):
    """Generated entry submitted for saving onto a course section"""
    course_id: str
    day: str
    start_time: str
    end_time: str
    section_number: Optional[int] = Field(default=None, ge=1)
    section_code: Optional[str] = None


class SaveScheduleRequest(BaseModel):
    schedules: List[ScheduleItem]


class SectionWriteResult(BaseModel):
    """Outcome of saving one schedule item"""
    course_id: str
    success: bool
    updated: bool = False
    section_id: Optional[str] = None
    section_code: Optional[str] = None
    schedule: Optional[str] = None
    error: Optional[str] = None


class SaveScheduleResponse(BaseModel):
    results: List[SectionWriteResult]
    updated_count: int = 0
    created_count: int = 0
    failed_count: int = 0
    message: str = ""


# ===========================
# Catalog Responses
# ===========================

class FinishedPeriodsResponse(BaseModel):
    has_finished_periods: bool
    finished_periods: List[EnrollmentPeriod] = []
