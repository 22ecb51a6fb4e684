import logging
from fastapi import APIRouter, Depends, status

from config.settings import settings
from models.schemas import (
    GenerateScheduleRequest, ScheduleOutcome, SaveScheduleRequest,
    SaveScheduleResponse, ErrorMessage
)
from routers.dependencies import require_finished_period
from service.course_catalog import CourseCatalog
from service.section_writer import SectionScheduleWriter
from service.slot_scheduler import SlotScheduler

logger = logging.getLogger(__name__)

# Create a router instance
router = APIRouter()


@router.post("/schedule/generate", response_model=ScheduleOutcome)
async def generate_schedule(
    request: GenerateScheduleRequest,
    catalog: CourseCatalog = Depends(require_finished_period)
):
    """
    Generate a non-conflicting schedule for the selected open courses.

    Every section of every course gets one class per selected day, placed on
    the first free slot range. Sessions that do not fit are listed under
    `unplaced` rather than failing the request.
    """
    courses = catalog.select_courses(request.course_ids, status="OPEN")

    selected_ids = {course.id for course in courses}
    ignored = [cid for cid in dict.fromkeys(request.course_ids) if cid not in selected_ids]

    scheduler = SlotScheduler(
        day_start=settings.day_start,
        day_end=settings.day_end,
        slot_minutes=settings.slot_minutes
    )
    outcome = scheduler.generate(courses, [d.value for d in request.days], request.hours_per_class)

    if ignored:
        logger.warning(f"Ignoring unknown or non-open courses: {', '.join(ignored)}")
        outcome.messages.error_message.append(ErrorMessage(
            title="Courses Ignored",
            message=f"Unknown or not open for scheduling: {', '.join(ignored)}"
        ))

    return outcome


@router.post("/schedule/save", response_model=SaveScheduleResponse, status_code=status.HTTP_201_CREATED)
async def save_schedule(
    request: SaveScheduleRequest,
    catalog: CourseCatalog = Depends(require_finished_period)
):
    """
    Save generated schedule entries onto course sections.

    Existing sections are overwritten, missing ones created. Items are
    independent; the response reports success per item.
    """
    writer = SectionScheduleWriter(catalog)
    return writer.save(request.schedules)
