"""
Saves generated schedules onto course sections.

Every item is written independently: a failure on one item leaves earlier
writes in place and does not stop later ones.
"""

import logging
from typing import Dict, Iterable, List, Optional

from models.schemas import (
    Course, Section, ScheduleItem, SectionWriteResult, SaveScheduleResponse
)
from service.course_catalog import CourseCatalog, CourseNotFoundError

logger = logging.getLogger(__name__)


def next_section_code(code: str) -> str:
    """Next alphabetic section code: A -> B, Z -> AA, AZ -> BA, ZZ -> AAA."""
    if not code:
        return "A"

    code = code.upper()
    last_char = code[-1]
    prefix = code[:-1]

    if last_char == "Z":
        return next_section_code(prefix) + "A"
    return prefix + chr(ord(last_char) + 1)


def generate_section_code(existing_codes: Iterable[str]) -> str:
    """Code following the highest existing one, or "A" when there are none."""
    codes = [c.upper() for c in existing_codes if c]
    if not codes:
        return "A"

    # Longer codes sort after shorter ones: "AA" follows "Z"
    highest = max(codes, key=lambda c: (len(c), c))
    return next_section_code(highest)


class SectionScheduleWriter:
    def __init__(self, catalog: CourseCatalog):
        self.catalog = catalog

    def save(self, items: List[ScheduleItem]) -> SaveScheduleResponse:
        """
        Write each schedule item onto a section of its course.

        Items naming an existing section (by code, else by 1-based position
        among the sections present before this batch) overwrite its schedule;
        all others create a new section with the next free code.
        """
        grouped: Dict[str, List[ScheduleItem]] = {}
        for item in items:
            grouped.setdefault(item.course_id, []).append(item)

        results: List[SectionWriteResult] = []

        for course_id, course_items in grouped.items():
            try:
                course = self.catalog.get_course(course_id)
            except CourseNotFoundError:
                logger.warning(f"Skipping {len(course_items)} schedule items for unknown course {course_id}")
                for _ in course_items:
                    results.append(SectionWriteResult(
                        course_id=course_id,
                        success=False,
                        error="Course not found"
                    ))
                continue

            existing_sections = list(course.sections)

            for item in course_items:
                results.append(self._write_item(course, existing_sections, item))

        updated_count = sum(1 for r in results if r.success and r.updated)
        created_count = sum(1 for r in results if r.success and not r.updated)
        failed_count = sum(1 for r in results if not r.success)

        logger.info(
            f"Saved schedules: {updated_count} sections updated, "
            f"{created_count} created, {failed_count} failed"
        )

        return SaveScheduleResponse(
            results=results,
            updated_count=updated_count,
            created_count=created_count,
            failed_count=failed_count,
            message=(
                "Schedules saved successfully" if failed_count == 0
                else f"Schedules saved with {failed_count} failures"
            )
        )

    def _write_item(self, course: Course, existing_sections: List[Section], item: ScheduleItem) -> SectionWriteResult:
        schedule = f"{item.day} {item.start_time} - {item.end_time}"

        target = self._resolve_section(course, existing_sections, item)
        if target is not None:
            section = self.catalog.update_section_schedule(course.id, target.id, schedule)
            return SectionWriteResult(
                course_id=course.id,
                success=True,
                updated=True,
                section_id=section.id,
                section_code=section.section_code,
                schedule=schedule
            )

        section_code = generate_section_code(s.section_code for s in course.sections)
        section = self.catalog.create_section(course.id, section_code, schedule)
        return SectionWriteResult(
            course_id=course.id,
            success=True,
            section_id=section.id,
            section_code=section.section_code,
            schedule=schedule
        )

    def _resolve_section(self, course: Course, existing_sections: List[Section],
                         item: ScheduleItem) -> Optional[Section]:
        if item.section_code:
            for section in course.sections:
                if section.section_code == item.section_code.strip().upper():
                    return section

        if item.section_number:
            index = item.section_number - 1
            if index < len(existing_sections):
                return existing_sections[index]

        return None
