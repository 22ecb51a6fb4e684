"""
In-memory course catalog.

Holds courses with their sections and the enrollment periods used to gate
scheduling. It stands in for the application's database as the course source
and as the target of saved schedules.
"""

import json
import uuid
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from datetime import datetime, timezone

from models.schemas import Course, Section, EnrollmentPeriod

logger = logging.getLogger(__name__)


class CourseNotFoundError(KeyError):
    """Raised when a course id is not in the catalog."""

    def __init__(self, course_id: str):
        super().__init__(course_id)
        self.course_id = course_id

    def __str__(self) -> str:
        return f"Course not found: {self.course_id}"


class CourseCatalog:
    def __init__(self, courses: Optional[Iterable[Course]] = None,
                 enrollment_periods: Optional[Iterable[EnrollmentPeriod]] = None):
        self._courses: Dict[str, Course] = {}
        self._periods: List[EnrollmentPeriod] = []

        for course in courses or []:
            self.add_course(course)
        for period in enrollment_periods or []:
            self.add_enrollment_period(period)

    @classmethod
    def from_file(cls, path: str) -> "CourseCatalog":
        """Load a catalog from a JSON file with "courses" and "enrollment_periods" lists."""
        catalog_path = Path(path)
        with catalog_path.open(encoding="utf-8") as f:
            data = json.load(f)

        catalog = cls(
            courses=[Course(**c) for c in data.get("courses", [])],
            enrollment_periods=[EnrollmentPeriod(**p) for p in data.get("enrollment_periods", [])]
        )
        logger.info(
            f"Loaded {len(catalog._courses)} courses and {len(catalog._periods)} "
            f"enrollment periods from {catalog_path}"
        )
        return catalog

    # ---------- courses ----------

    def add_course(self, course: Course) -> Course:
        self._courses[course.id] = course.model_copy(deep=True)
        return self._courses[course.id]

    def get_course(self, course_id: str) -> Course:
        try:
            return self._courses[course_id]
        except KeyError:
            raise CourseNotFoundError(course_id) from None

    def list_courses(self, status: Optional[str] = None) -> List[Course]:
        """Courses in insertion order, optionally filtered by status."""
        return [
            course.model_copy(deep=True)
            for course in self._courses.values()
            if status is None or course.status == status
        ]

    def select_courses(self, course_ids: Iterable[str], status: Optional[str] = "OPEN") -> List[Course]:
        """Catalog-ordered courses whose id was requested and whose status matches."""
        wanted = set(course_ids)
        return [course for course in self.list_courses(status) if course.id in wanted]

    # ---------- sections ----------

    def update_section_schedule(self, course_id: str, section_id: str, schedule: str) -> Section:
        course = self.get_course(course_id)
        for section in course.sections:
            if section.id == section_id:
                section.schedule = schedule
                return section
        raise KeyError(f"Section {section_id} not found in course {course_id}")

    def create_section(self, course_id: str, section_code: str, schedule: str, room: str = "TBD") -> Section:
        course = self.get_course(course_id)
        section = Section(
            id=uuid.uuid4().hex,
            section_code=section_code,
            schedule=schedule,
            room=room,
            max_students=course.capacity
        )
        course.sections.append(section)
        return section

    # ---------- enrollment periods ----------

    def add_enrollment_period(self, period: EnrollmentPeriod) -> EnrollmentPeriod:
        self._periods.append(period)
        return period

    def finished_enrollment_periods(self, now: Optional[datetime] = None) -> List[EnrollmentPeriod]:
        """Periods that ended before `now`, most recently ended first."""
        if now is None:
            now = datetime.now(timezone.utc).replace(tzinfo=None)
        elif now.tzinfo is not None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)

        finished = [p for p in self._periods if p.end_date < now]
        return sorted(finished, key=lambda p: p.end_date, reverse=True)

    def has_finished_enrollment_period(self, now: Optional[datetime] = None) -> bool:
        return len(self.finished_enrollment_periods(now)) > 0
