from datetime import date

import pytest

from diary.services.parsers.cell_reader import CellReader
from diary.services.parsers.common_structs import GroupColumnMapping, SheetMetadata
from diary.services.parsers.day_walker import InDay
from diary.services.parsers.item_builder import (
    build_entry, determine_lesson_type, resolve_date, NO_TEACHER, NO_CLASSROOM,
)
from diary.services.utils.enums import LessonType


MAPPING = GroupColumnMapping(
    group='ИСПк-104-52-00', start_column=0,
    metadata=SheetMetadata(academic_year='2025-2026', semester='1 полугодие'),
)
THURSDAY = InDay('ЧЕТВЕРГ', 13, 11, 2)


@pytest.mark.parametrize('type_str, expected', [
    ('Лекция', LessonType.LECTURE),
    ('ПРАКТИКА', LessonType.PRACTICE),
    ('пр. занятие', LessonType.PRACTICE),
    ('Лабораторная работа', LessonType.LAB),
    ('лаб. раб.', LessonType.LAB),
    ('семинар', LessonType.SEMINAR),
    ('консультация', LessonType.LECTURE),
    ('', LessonType.LECTURE),
])
def test_determine_lesson_type(type_str, expected):
    assert determine_lesson_type(type_str) == expected


def test_resolve_date_by_semester():
    assert resolve_date(13, 11, '2025-2026', '1 полугодие') == date(2025, 11, 13)
    assert resolve_date(13, 11, '2025-2026', '2 полугодие') == date(2026, 11, 13)


def test_build_entry():
    reader = CellReader([['Математика', 'лекция', 'Иванов И.И.', '305']])
    entry = build_entry(reader, 0, THURSDAY, MAPPING, '8.30-10.00')

    assert entry.subject == 'Математика'
    assert entry.time == '8.30-10.00'
    assert entry.teacher == 'Иванов И.И.'
    assert entry.classroom == '305'
    assert entry.date == date(2025, 11, 13)
    assert entry.lesson_type == LessonType.LECTURE
    assert entry.group == 'ИСПк-104-52-00'
    assert entry.day_of_week == 'ЧЕТВЕРГ'
    assert entry.pair_number == 2


def test_missing_teacher_and_room_get_placeholders():
    entry = build_entry(CellReader([['Физкультура']]), 0, THURSDAY, MAPPING, '8.30-10.00')
    assert entry.teacher == NO_TEACHER
    assert entry.classroom == NO_CLASSROOM


@pytest.mark.parametrize('subject', [
    '',
    'Выходной день',
    'День самост. подгот.',
    'День самостоятельной подготовки',
    'выходной',
])
def test_placeholder_rows_are_skipped(subject):
    reader = CellReader([[subject, 'лекция', 'Иванов', '1']])
    assert build_entry(reader, 0, THURSDAY, MAPPING, '8.30-10.00') is None


def test_impossible_date_raises():
    reader = CellReader([['Математика']])
    with pytest.raises(ValueError):
        build_entry(reader, 0, InDay('СРЕДА', 31, 2, 0), MAPPING, '8.30-10.00')
