# diary/services/parsers/schedule_parser.py

import logging
from datetime import date
from typing import List, Optional, Sequence

from .cell_reader import CellReader
from .common_structs import ImportResult, MergedRegion, ParserLayout, ScheduleEntry, GroupColumnMapping
from .day_walker import DayWalker
from .group_locator import LocatedGroups, locate_groups
from .item_builder import build_entry
from .metadata_extractor import resolve_sheet_metadata

from diary.services.utils.enums import FailureKind
from diary.services.utils.excel_reader import read_first_sheet


log = logging.getLogger(__name__)

UNREADABLE_MESSAGE = "Не удалось прочитать файл. Убедитесь, что это Excel-таблица (.xlsx)."


def _locate(reader: CellReader, layout: ParserLayout, today: Optional[date]) -> LocatedGroups:
    sheet_metadata = resolve_sheet_metadata(reader, layout, today)
    return locate_groups(reader, layout, sheet_metadata)


def _extract_entries(reader: CellReader, layout: ParserLayout, mapping: GroupColumnMapping) -> List[ScheduleEntry]:
    """Обходит строки листа и собирает пары одной группы."""
    entries: List[ScheduleEntry] = []
    walker = DayWalker(reader, layout)

    for row in range(layout.data_start_row, reader.row_count):
        day = walker.step(row)
        if day is None:
            continue

        try:
            time_str = reader.value(row, layout.time_column)
            entry = build_entry(reader, row, day, mapping, time_str)
            if entry:
                entries.append(entry)
            else:
                log.debug(f"Строка {row + 1}: пара {day.pair_counter} пропущена (пусто или выходной).")
        except Exception as e:
            marker = walker.current_marker
            log.error(f"Строка {row + 1} (день '{marker.day_name}' из строки {marker.row + 1}): "
                      f"ошибка разбора для группы '{mapping.group}': {e}. Строка пропущена.", exc_info=True)
        finally:
            walker.advance()

    return entries


def parse_grid(grid: Sequence[Sequence[str]], merged_regions: Sequence[MergedRegion], group_name: str,
               layout: Optional[ParserLayout] = None, today: Optional[date] = None) -> ImportResult:
    """
    Главная функция парсера. Разбирает уже прочитанный лист и возвращает пары
    указанной группы. Ошибки возвращаются в ImportResult, а не выбрасываются.
    """
    layout = layout or ParserLayout()
    reader = CellReader(grid, merged_regions)

    log.info(f"Запуск парсера расписания для группы '{group_name}'...")
    located = _locate(reader, layout, today)
    all_groups = located.names

    mapping = located.find(group_name)
    if mapping is None:
        log.warning(f"Группа '{group_name}' не найдена. Доступные группы: {', '.join(all_groups) or '—'}")
        return ImportResult(
            success=False,
            error=f"Группа \"{group_name}\" не найдена в файле. Доступные группы: {', '.join(all_groups)}",
            groups=all_groups,
            failure=FailureKind.GROUP_NOT_FOUND,
            conflicts=located.conflicts,
        )

    log.info(f"Группа '{group_name}' начинается с колонки {mapping.start_column}")
    entries = _extract_entries(reader, layout, mapping)

    if not entries:
        log.warning(f"Для группы '{group_name}' не найдено ни одной пары.")
        return ImportResult(
            success=False,
            error=f"Группа \"{group_name}\" найдена, но пар не извлечено. Проверьте структуру файла.",
            groups=all_groups,
            failure=FailureKind.NO_ENTRIES,
            conflicts=located.conflicts,
        )

    log.info(f"Парсер расписания завершил работу: {len(entries)} пар для '{group_name}'.")
    return ImportResult(success=True, entries=entries, groups=all_groups, conflicts=located.conflicts)


def parse_schedule(buffer: bytes, group_name: str, merged_regions: Optional[Sequence[MergedRegion]] = None,
                   layout: Optional[ParserLayout] = None, today: Optional[date] = None) -> ImportResult:
    """
    Разбирает первый лист Excel-файла из памяти.
    Если merged_regions не переданы, берутся объединения, сохраненные в самой книге.
    """
    sheet = read_first_sheet(buffer, with_merged_regions=merged_regions is None)
    if sheet is None:
        return ImportResult(success=False, error=UNREADABLE_MESSAGE, failure=FailureKind.UNREADABLE)

    regions = sheet.merged_regions if merged_regions is None else list(merged_regions)
    return parse_grid(sheet.grid, regions, group_name, layout, today)


def list_groups(buffer: bytes, layout: Optional[ParserLayout] = None) -> ImportResult:
    """Возвращает все группы из файла без разбора пар (для выбора группы пользователем)."""
    sheet = read_first_sheet(buffer)
    if sheet is None:
        return ImportResult(success=False, error=UNREADABLE_MESSAGE, failure=FailureKind.UNREADABLE)

    layout = layout or ParserLayout()
    located = _locate(CellReader(sheet.grid, sheet.merged_regions), layout, None)
    return ImportResult(success=True, groups=located.names, conflicts=located.conflicts)
