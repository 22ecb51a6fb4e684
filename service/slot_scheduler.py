"""
Greedy first-fit slot scheduler.

Assigns every (course, section, day) demand to the first free run of
contiguous fixed-width slots in that day's window. The occupancy grid lives
only for one generation run; nothing is persisted here.
"""

import math
import logging
from typing import Dict, List, Optional, Sequence
from datetime import datetime, time, timedelta

from models.schemas import (
    Course, ScheduledEntry, UnplacedRequest, ScheduleOutcome,
    Messages, ErrorMessage
)

logger = logging.getLogger(__name__)


class SlotScheduler:
    """
    First-fit allocator over a per-day grid of fixed-width slots.

    One class duration applies to the whole batch.
    """

    def __init__(self, day_start: str = "08:00", day_end: str = "17:30", slot_minutes: int = 30):
        """
        Initialize the scheduler.

        Args:
            day_start: First slot start, HH:MM
            day_end: End of the last slot, HH:MM
            slot_minutes: Width of one slot in minutes
        """
        if slot_minutes <= 0:
            raise ValueError("slot_minutes must be positive")

        self.slot_minutes = slot_minutes
        self.day_start = self._parse_time(day_start)
        self.day_end = self._parse_time(day_end)

        # Slot start times for the window, e.g. 08:00 .. 17:00 for 08:00-17:30
        self.start_times: List[time] = []
        current = self.day_start
        next_time = self._add_minutes(current, slot_minutes)
        while current < next_time <= self.day_end:
            self.start_times.append(current)
            current = next_time
            next_time = self._add_minutes(current, slot_minutes)

    @property
    def slot_count(self) -> int:
        return len(self.start_times)

    def slots_needed(self, hours_per_class: float) -> int:
        """Number of contiguous slots one class of this length occupies."""
        return math.ceil(hours_per_class * 60 / self.slot_minutes)

    def generate(self, courses: Sequence[Course], days: Sequence[str], hours_per_class: float) -> ScheduleOutcome:
        """
        Place every requested class session on a non-overlapping slot range.

        Args:
            courses: Courses in the order they should be placed
            days: Day identifiers, e.g. ["monday", "wednesday"]
            hours_per_class: Length of every class in this run

        Returns:
            ScheduleOutcome; never raises
        """
        try:
            return self._generate(courses, days, hours_per_class)
        except Exception as e:
            logger.error(f"Schedule generation error: {str(e)}", exc_info=True)
            return ScheduleOutcome(
                status="ERROR",
                messages=Messages(error_message=[
                    ErrorMessage(title="Generation Error", message=str(e))
                ])
            )

    def _generate(self, courses: Sequence[Course], days: Sequence[str], hours_per_class: float) -> ScheduleOutcome:
        slots_needed = self.slots_needed(hours_per_class)

        if not courses or not days:
            return ScheduleOutcome(status="EMPTY", slots_needed=slots_needed)

        if slots_needed <= 0:
            return ScheduleOutcome(
                status="INVALID",
                slots_needed=slots_needed,
                messages=Messages(error_message=[
                    ErrorMessage(
                        title="Invalid Duration",
                        message=f"{hours_per_class} hours per class does not cover any slot."
                    )
                ])
            )

        day_ids = [d.lower() for d in days]
        grid: Dict[str, List[bool]] = {day: [False] * self.slot_count for day in day_ids}

        entries: List[ScheduledEntry] = []
        unplaced: List[UnplacedRequest] = []

        for course in courses:
            if course.sections:
                demands = [(idx + 1, section.section_code) for idx, section in enumerate(course.sections)]
            else:
                demands = [(1, None)]

            for section_number, section_code in demands:
                for day in day_ids:
                    start = self._find_free_range(grid[day], slots_needed)
                    if start is None:
                        logger.warning(
                            f"No free {slots_needed}-slot range on {day} for "
                            f"{course.code} section {section_number}"
                        )
                        unplaced.append(UnplacedRequest(
                            course_id=course.id,
                            course_code=course.code,
                            section_number=section_number,
                            day=self._format_day(day),
                            reason=f"No free {self._format_duration(slots_needed)} range left on {self._format_day(day)}"
                        ))
                        continue

                    for i in range(start, start + slots_needed):
                        grid[day][i] = True

                    start_time = self.start_times[start]
                    end_time = self._add_minutes(self.start_times[start + slots_needed - 1], self.slot_minutes)

                    entries.append(ScheduledEntry(
                        course_id=course.id,
                        course_code=course.code,
                        course_name=course.name,
                        section_number=section_number,
                        section_code=section_code,
                        day=self._format_day(day),
                        start_time=self._format_12h(start_time),
                        end_time=self._format_12h(end_time),
                        duration=self._format_duration(slots_needed)
                    ))

        return self._build_outcome(entries, unplaced, slots_needed)

    def _find_free_range(self, day_grid: List[bool], slots_needed: int) -> Optional[int]:
        """First start index whose [start, start + slots_needed) range is free."""
        for start in range(0, len(day_grid) - slots_needed + 1):
            if not any(day_grid[start:start + slots_needed]):
                return start
        return None

    def _build_outcome(self, entries: List[ScheduledEntry], unplaced: List[UnplacedRequest],
                       slots_needed: int) -> ScheduleOutcome:
        if not unplaced:
            status = "SCHEDULED"
        elif entries:
            status = "PARTIAL"
        else:
            status = "UNSCHEDULED"

        warnings = []
        if unplaced:
            warnings.append(ErrorMessage(
                title="Unplaced Classes",
                message=f"{len(unplaced)} of {len(entries) + len(unplaced)} class sessions could not be placed."
            ))
        if slots_needed > self.slot_count:
            warnings.append(ErrorMessage(
                title="Class Too Long",
                message=f"A class needs {slots_needed} slots but the day only has {self.slot_count}."
            ))

        return ScheduleOutcome(
            status=status,
            entries=entries,
            unplaced=unplaced,
            slots_needed=slots_needed,
            messages=Messages(error_message=warnings)
        )

    def _parse_time(self, time_str: str) -> time:
        return datetime.strptime(time_str, "%H:%M").time()

    def _add_minutes(self, t: time, minutes: int) -> time:
        dt = datetime.combine(datetime.today(), t) + timedelta(minutes=minutes)
        return dt.time()

    def _format_12h(self, t: time) -> str:
        """Format as "8:00 AM" / "1:30 PM"."""
        period = "PM" if t.hour >= 12 else "AM"
        hour12 = t.hour % 12 or 12
        return f"{hour12}:{t.minute:02d} {period}"

    def _format_day(self, day: str) -> str:
        return day[:1].upper() + day[1:]

    def _format_duration(self, slots: int) -> str:
        """Format a slot count as 'Xh Ymin'."""
        total_minutes = slots * self.slot_minutes
        hours = total_minutes // 60
        minutes = total_minutes % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}min"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}min"


def generate_schedule(courses: Sequence[Course], days: Sequence[str], hours_per_class: float) -> List[ScheduledEntry]:
    """Entries for the default 08:00-17:30 window; unplaceable demand is omitted."""
    return SlotScheduler().generate(courses, days, hours_per_class).entries
