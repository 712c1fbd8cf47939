# diary/services/utils/enums.py

from enum import Enum, auto


class LessonType(Enum):
    """Тип занятия (пары) так, как его пишут в расписании."""
    LECTURE = "Лекция"
    PRACTICE = "Практика"
    LAB = "Лабораторная"
    SEMINAR = "Семинар"


class FailureKind(Enum):
    """Причина неудачного импорта расписания."""
    UNREADABLE = auto()  # Файл не удалось прочитать как таблицу
    GROUP_NOT_FOUND = auto()  # Группы нет в строке заголовка
    NO_ENTRIES = auto()  # Группа найдена, но пар не извлечено


class DeadlineType(Enum):
    """Как вычисляется дедлайн заметки."""
    DATE = "date"
    NEXT_CLASS = "next_class"
    NONE = "none"
