"""
Tests for saving generated schedules onto course sections.
"""
import pytest
from pydantic import ValidationError

from models.schemas import Course, Section, ScheduleItem
from service.course_catalog import CourseCatalog
from service.section_writer import (
    SectionScheduleWriter, next_section_code, generate_section_code
)


@pytest.mark.parametrize("code,expected", [
    ("A", "B"),
    ("Y", "Z"),
    ("Z", "AA"),
    ("AA", "AB"),
    ("AZ", "BA"),
    ("ZZ", "AAA"),
    ("", "A"),
])
def test_next_section_code(code, expected):
    assert next_section_code(code) == expected


def test_generate_section_code_uses_highest_code():
    assert generate_section_code([]) == "A"
    assert generate_section_code(["A", "C", "B"]) == "D"
    # "Z" sorts after "AA" alphabetically but "AA" is the later code
    assert generate_section_code(["Z", "AA"]) == "AB"


def get_catalog():
    return CourseCatalog(courses=[
        Course(id="c1", code="CS101", name="Intro to Programming", capacity=40, sections=[
            Section(id="s1", section_code="A", max_students=40),
            Section(id="s2", section_code="B", max_students=40),
        ]),
        Course(id="c2", code="MA201", name="Linear Algebra", capacity=25),
    ])


def item(course_id, day="Monday", start="8:00 AM", end="9:30 AM", **kwargs):
    return ScheduleItem(course_id=course_id, day=day, start_time=start, end_time=end, **kwargs)


def test_updates_existing_section_by_position():
    catalog = get_catalog()
    writer = SectionScheduleWriter(catalog)

    response = writer.save([item("c1", section_number=2)])

    assert response.updated_count == 1
    assert response.created_count == 0
    result = response.results[0]
    assert result.success and result.updated
    assert result.section_code == "B"
    assert result.schedule == "Monday 8:00 AM - 9:30 AM"
    assert catalog.get_course("c1").sections[1].schedule == "Monday 8:00 AM - 9:30 AM"


def test_updates_existing_section_by_code_before_position():
    catalog = get_catalog()
    writer = SectionScheduleWriter(catalog)

    response = writer.save([item("c1", section_number=1, section_code="B")])

    assert response.results[0].section_id == "s2"
    assert catalog.get_course("c1").sections[0].schedule == "TBD"


def test_creates_section_when_position_is_past_existing():
    catalog = get_catalog()
    writer = SectionScheduleWriter(catalog)

    response = writer.save([item("c1", section_number=3)])

    result = response.results[0]
    assert result.success and not result.updated
    assert result.section_code == "C"
    assert response.created_count == 1

    created = catalog.get_course("c1").sections[-1]
    assert created.room == "TBD"
    assert created.max_students == 40


def test_batch_creates_unique_codes():
    catalog = get_catalog()
    writer = SectionScheduleWriter(catalog)

    response = writer.save([
        item("c2", day="Monday", section_number=1),
        item("c2", day="Tuesday", section_number=1),
        item("c2", day="Wednesday"),
    ])

    assert [r.section_code for r in response.results] == ["A", "B", "C"]
    assert response.created_count == 3
    assert [s.section_code for s in catalog.get_course("c2").sections] == ["A", "B", "C"]


def test_repeated_position_overwrites_same_section():
    catalog = get_catalog()
    writer = SectionScheduleWriter(catalog)

    writer.save([
        item("c1", day="Monday", section_number=1),
        item("c1", day="Thursday", section_number=1),
    ])

    assert catalog.get_course("c1").sections[0].schedule == "Thursday 8:00 AM - 9:30 AM"
    assert len(catalog.get_course("c1").sections) == 2


def test_unknown_course_fails_per_item_without_stopping_batch():
    catalog = get_catalog()
    writer = SectionScheduleWriter(catalog)

    response = writer.save([
        item("missing", section_number=1),
        item("missing", day="Friday"),
        item("c2", section_number=1),
    ])

    assert response.failed_count == 2
    assert response.created_count == 1
    assert [r.success for r in response.results] == [False, False, True]
    assert response.results[0].error == "Course not found"
    assert "2 failures" in response.message


def test_empty_batch():
    response = SectionScheduleWriter(get_catalog()).save([])

    assert response.results == []
    assert response.message == "Schedules saved successfully"


def test_lowercase_codes_increment_as_uppercase():
    assert next_section_code("z") == "AA"
    assert next_section_code("ab") == "AC"
    assert generate_section_code(["a", "b"]) == "C"


def test_section_code_is_normalized_and_validated():
    assert Section(id="s9", section_code=" b ").section_code == "B"

    with pytest.raises(ValidationError):
        Section(id="s10", section_code="A1")
    with pytest.raises(ValidationError):
        Section(id="s11", section_code="")


def test_item_section_code_matches_case_insensitively():
    catalog = get_catalog()

    response = SectionScheduleWriter(catalog).save([item("c1", section_code="b")])

    assert response.results[0].section_id == "s2"
    assert response.updated_count == 1
