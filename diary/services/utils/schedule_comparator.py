# diary/services/utils/schedule_comparator.py

import logging
from datetime import date
from typing import Dict, Iterable, Tuple

from diary.services.parsers.common_structs import ScheduleEntry

log = logging.getLogger(__name__)


def _entries_as_dict(entries: Iterable[ScheduleEntry]) -> Dict[Tuple[date, int], Dict[str, str]]:
    """Плоский словарь (дата, номер пары) -> сравниваемые поля."""
    return {
        (entry.date, entry.pair_number): {
            'subject': entry.subject,
            'teacher': entry.teacher,
            'classroom': entry.classroom,
            'time': entry.time,
        }
        for entry in entries
    }


def compare_schedules(old_entries: Iterable[ScheduleEntry], new_entries: Iterable[ScheduleEntry]) -> Dict[str, list]:
    """
    Сравнивает сохраненное расписание с новым и возвращает словарь с изменениями.
    Пустой словарь - изменений нет.
    """
    old_lessons = _entries_as_dict(old_entries)
    new_lessons = _entries_as_dict(new_entries)

    old_keys = set(old_lessons.keys())
    new_keys = set(new_lessons.keys())

    changes = {
        'modified': [],
        'added': [],
        'removed': []
    }

    for key in sorted(old_keys & new_keys):
        if old_lessons[key] != new_lessons[key]:
            changes['modified'].append({
                'date': key[0],
                'pair_number': key[1],
                'old': old_lessons[key],
                'new': new_lessons[key]
            })

    for key in sorted(new_keys - old_keys):
        changes['added'].append({'date': key[0], 'pair_number': key[1], 'new': new_lessons[key]})

    for key in sorted(old_keys - new_keys):
        changes['removed'].append({'date': key[0], 'pair_number': key[1], 'old': old_lessons[key]})

    if not any(changes.values()):
        log.info("Изменений в расписании не обнаружено.")
        return {}

    log.info(
        f"Обнаружены изменения в расписании: {len(changes['modified'])} изм., {len(changes['added'])} доб., "
        f"{len(changes['removed'])} убрано.")
    return changes
