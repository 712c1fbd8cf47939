# diary/services/parsers/common_structs.py

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from diary.services.utils.enums import LessonType, FailureKind


@dataclass(frozen=True)
class MergedRegion:
    """Объединенная область листа. Границы включительно, индексы с нуля."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def contains(self, row: int, col: int) -> bool:
        return self.start_row <= row <= self.end_row and self.start_col <= col <= self.end_col


# Колонки блока группы: предмет, вид занятия, преподаватель, аудитория
BLOCK_FIELDS = 4


@dataclass(frozen=True)
class ParserLayout:
    """
    Координаты шаблона расписания колледжа.
    Все индексы с нуля: header_row=23 - это 24-я строка листа.
    block_width - шаг между блоками групп; лишние колонки блока не читаются.
    """
    header_row: int = 23
    group_start_column: int = 6
    block_width: int = 4
    metadata_first_row: int = 16
    metadata_last_row: int = 24
    metadata_start_column: int = 0
    day_column: int = 0
    data_start_row: int = 24

    def __post_init__(self):
        if self.block_width < BLOCK_FIELDS:
            raise ValueError(f"Ширина блока группы ({self.block_width}) меньше числа его колонок ({BLOCK_FIELDS})")

    @property
    def time_column(self) -> int:
        return self.day_column + 1


@dataclass
class SheetMetadata:
    """Сведения из шапки листа: учебный год, полугодие, специальность и т.д."""
    academic_year: Optional[str] = None
    semester: Optional[str] = None
    specialty: Optional[str] = None
    education_form: Optional[str] = None
    institution: Optional[str] = None


@dataclass
class GroupColumnMapping:
    group: str
    start_column: int
    metadata: SheetMetadata = field(default_factory=SheetMetadata)


@dataclass(frozen=True)
class DayMarker:
    day_name: str
    day_number: int
    month: int
    row: int


@dataclass(frozen=True)
class ScheduleEntry:
    """Одна пара целевой группы, готовая к сохранению в базу."""
    subject: str
    time: str  # Время как оно написано в файле, "8.30-10.00"
    teacher: str
    classroom: str
    date: date
    lesson_type: LessonType
    group: str
    day_of_week: str
    pair_number: int


@dataclass
class ImportResult:
    """
    Результат разбора файла. Ошибки не выбрасываются, а возвращаются здесь,
    чтобы вызывающий код мог показать пользователю список найденных групп.
    """
    success: bool
    entries: List[ScheduleEntry] = field(default_factory=list)
    error: Optional[str] = None
    groups: List[str] = field(default_factory=list)
    failure: Optional[FailureKind] = None
    conflicts: List[str] = field(default_factory=list)
