from typing import List, Optional
from fastapi import APIRouter, Depends

from models.schemas import Course, FinishedPeriodsResponse
from routers.dependencies import get_catalog, require_admin
from service.course_catalog import CourseCatalog

router = APIRouter()


@router.get("/courses", response_model=List[Course])
async def list_courses(status: Optional[str] = None, catalog: CourseCatalog = Depends(get_catalog)):
    """List courses with their sections, optionally filtered by status (e.g. OPEN)."""
    return catalog.list_courses(status.upper() if status else None)


@router.get("/enrollment-periods/finished", response_model=FinishedPeriodsResponse)
async def finished_enrollment_periods(
    _role: str = Depends(require_admin),
    catalog: CourseCatalog = Depends(get_catalog)
):
    """Enrollment periods that have already ended, most recent first."""
    periods = catalog.finished_enrollment_periods()
    return FinishedPeriodsResponse(
        has_finished_periods=len(periods) > 0,
        finished_periods=periods
    )
