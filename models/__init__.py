"""
Data models and Pydantic schemas for the course scheduling API.
"""
from .schemas import (
    Day,
    EnrollmentPeriod,
    Section,
    Course,
    GenerateScheduleRequest,
    ScheduledEntry,
    UnplacedRequest,
    ErrorMessage,
    Messages,
    ScheduleOutcome,
    ScheduleItem,
    SaveScheduleRequest,
    SectionWriteResult,
    SaveScheduleResponse,
    FinishedPeriodsResponse
)

__all__ = [
    "Day",
    "EnrollmentPeriod",
    "Section",
    "Course",
    "GenerateScheduleRequest",
    "ScheduledEntry",
    "UnplacedRequest",
    "ErrorMessage",
    "Messages",
    "ScheduleOutcome",
    "ScheduleItem",
    "SaveScheduleRequest",
    "SectionWriteResult",
    "SaveScheduleResponse",
    "FinishedPeriodsResponse"
]
