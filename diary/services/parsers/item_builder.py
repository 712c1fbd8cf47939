# diary/services/parsers/item_builder.py

from datetime import date
from typing import Optional

from .cell_reader import CellReader
from .common_structs import BLOCK_FIELDS, GroupColumnMapping, ScheduleEntry
from .day_walker import InDay

from diary.services.utils.enums import LessonType


PLACEHOLDER_SUBJECTS = (
    'День самост. подгот.',
    'Выходной день',
    'самостоятельной подготовки',
    'выходной',
)

NO_TEACHER = 'Не указан'
NO_CLASSROOM = 'Не указана'

# Порядок проверки важен: первое совпадение определяет тип
LESSON_TYPE_RULES = (
    (('лекция',), LessonType.LECTURE),
    (('практика', 'пр. занятие'), LessonType.PRACTICE),
    (('лабораторная', 'лаб.'), LessonType.LAB),
    (('семинар',), LessonType.SEMINAR),
)


def determine_lesson_type(type_str: str) -> LessonType:
    lower_type = (type_str or '').lower()
    for markers, lesson_type in LESSON_TYPE_RULES:
        if any(marker in lower_type for marker in markers):
            return lesson_type
    return LessonType.LECTURE


def is_placeholder(subject: str) -> bool:
    return any(marker in subject for marker in PLACEHOLDER_SUBJECTS)


def resolve_date(day: int, month: int, academic_year: str, semester: str) -> date:
    """
    Дата по числу и месяцу из заголовка дня.
    Первое полугодие - первый год пары 'Y1-Y2', иначе второй.
    """
    start_year, end_year = (int(y) for y in academic_year.split('-'))
    year = start_year if '1' in (semester or '') else end_year
    return date(year, month, day)


def build_entry(reader: CellReader, row: int, day: InDay, mapping: GroupColumnMapping,
                time_str: str) -> Optional[ScheduleEntry]:
    """
    Собирает пару из четырех колонок блока группы.
    Возвращает None для пустых строк и заглушек ('Выходной день' и т.п.).
    """
    subject, type_str, teacher, classroom = reader.values(row, mapping.start_column, BLOCK_FIELDS)

    if not subject or is_placeholder(subject):
        return None

    metadata = mapping.metadata
    return ScheduleEntry(
        subject=subject,
        time=time_str,
        teacher=teacher or NO_TEACHER,
        classroom=classroom or NO_CLASSROOM,
        date=resolve_date(day.day_number, day.month, metadata.academic_year, metadata.semester),
        lesson_type=determine_lesson_type(type_str),
        group=mapping.group,
        day_of_week=day.day_label,
        pair_number=day.pair_counter,
    )
