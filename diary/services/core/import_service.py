# diary/services/core/import_service.py

import logging
import sqlite3
from datetime import date
from typing import Optional

from config import Config

from diary.services.core.schedule_store import ScheduleStore
from diary.services.parsers.common_structs import ImportResult, ParserLayout
from diary.services.parsers.schedule_parser import parse_schedule
from diary.services.utils.schedule_comparator import compare_schedules


log = logging.getLogger(__name__)

USER_GROUP_KEY = 'user_group'


def layout_from_config(config=Config) -> ParserLayout:
    """Разметка шаблона из конфигурации (.env)."""
    return ParserLayout(
        header_row=config.HEADER_ROW,
        group_start_column=config.GROUP_START_COLUMN,
        block_width=config.BLOCK_WIDTH,
        metadata_first_row=config.METADATA_FIRST_ROW,
        metadata_last_row=config.METADATA_LAST_ROW,
        metadata_start_column=config.METADATA_START_COLUMN,
        day_column=config.DAY_COLUMN,
        data_start_row=config.DATA_START_ROW,
    )


def import_schedule(store: ScheduleStore, buffer: bytes, group_name: Optional[str] = None,
                    layout: Optional[ParserLayout] = None, today: Optional[date] = None) -> ImportResult:
    """
    Разбирает файл, сохраняет пары группы в базу и пишет запись в историю.
    Если группа не передана, берется сохраненная в настройках.
    """
    group_name = (group_name or '').strip() or (store.get_setting(USER_GROUP_KEY) or '').strip()
    if not group_name:
        return ImportResult(success=False, error="Группа не выбрана")

    result = parse_schedule(buffer, group_name, layout=layout or layout_from_config(), today=today)
    if not result.success:
        store.record_update(0, False, result.error)
        return result

    new_dates = {entry.date for entry in result.entries}
    previous = [entry for entry in store.entries_for(group_name) if entry.date in new_dates]
    if previous:
        changes = compare_schedules(previous, result.entries)
        if changes:
            log.warning(f"Расписание группы '{group_name}' изменилось: {changes}")

    try:
        saved = store.replace_entries(result.entries, group_name)
    except sqlite3.Error as e:
        log.error(f"Не удалось сохранить расписание группы '{group_name}': {e}", exc_info=True)
        store.record_update(0, False, str(e))
        return ImportResult(success=False, error=f"Ошибка сохранения: {e}", groups=result.groups)

    store.record_update(saved, True)
    log.info(f"Импорт для '{group_name}' завершен: {saved} пар.")
    return result
