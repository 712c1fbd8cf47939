# diary/services/utils/excel_reader.py

import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd
from openpyxl import load_workbook

from diary.services.parsers.common_structs import MergedRegion
from .data_validator import normalize_cell

log = logging.getLogger(__name__)


@dataclass
class SheetData:
    """Первый лист книги: сетка строковых значений и объединенные области."""
    grid: List[List[str]]
    merged_regions: List[MergedRegion] = field(default_factory=list)


def read_grid(buffer: bytes) -> List[List[str]]:
    """Читает первый лист в список строк. Пустые строки сохраняются, чтобы не сбить индексы."""
    df = pd.read_excel(io.BytesIO(buffer), sheet_name=0, header=None, engine='calamine')
    df = df.fillna('')
    return [[normalize_cell(value) for value in row] for row in df.values.tolist()]


def read_merged_regions(buffer: bytes) -> List[MergedRegion]:
    """
    Объединенные ячейки первого листа (индексы с нуля).
    pandas их не отдает, поэтому книга открывается через openpyxl.
    """
    try:
        wb = load_workbook(io.BytesIO(buffer))
    except Exception as e:
        log.warning(f"Не удалось прочитать объединенные ячейки через openpyxl: {e}. Продолжаем без них.")
        return []

    try:
        sheet = wb.worksheets[0]
        return [
            MergedRegion(start_row=rng.min_row - 1, start_col=rng.min_col - 1,
                         end_row=rng.max_row - 1, end_col=rng.max_col - 1)
            for rng in sheet.merged_cells.ranges
        ]
    finally:
        wb.close()


def read_first_sheet(buffer: bytes, with_merged_regions: bool = True) -> Optional[SheetData]:
    """
    Безопасно читает первый лист Excel-файла из памяти.
    Возвращает None в случае ошибки.
    """
    if not buffer:
        log.error("Передан пустой буфер вместо Excel-файла.")
        return None

    try:
        log.info(f"Чтение Excel-файла из памяти ({len(buffer)} байт)")
        grid = read_grid(buffer)
    except Exception as e:
        log.error(f"Не удалось открыть Excel-файл. Ошибка: {e}")
        return None

    merged_regions = read_merged_regions(buffer) if with_merged_regions else []
    log.info(f"Прочитано строк: {len(grid)}, объединенных областей: {len(merged_regions)}")
    return SheetData(grid=grid, merged_regions=merged_regions)
