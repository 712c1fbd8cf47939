# diary/services/parsers/metadata_extractor.py

import logging
import re
from datetime import date
from typing import Optional

from .cell_reader import CellReader
from .common_structs import ParserLayout, SheetMetadata


log = logging.getLogger(__name__)


SEMESTER_PATTERN = re.compile(
    r'На\s+(\d)\s+(полугодие|семестр)\s+(\d{4})\s*-\s*(\d{4})\s+учебного\s+года', re.IGNORECASE)
ACADEMIC_YEAR_PATTERN = re.compile(r'(\d{4})\s*-\s*(\d{4})\s+учебный\s+год', re.IGNORECASE)
SPECIALTY_CODE_PATTERN = re.compile(r'\b\d{2}\.\d{2}\.\d{2}\b')

EDUCATION_FORM_LABEL = 'Форма обучения'
INSTITUTION_LABELS = ('Колледж', 'Университет')


def _match_cell(text: str, metadata: SheetMetadata) -> None:
    """Проверяет одну ячейку шапки и дописывает найденное в metadata (первое найденное побеждает)."""
    if metadata.academic_year is None:
        semester_match = SEMESTER_PATTERN.search(text)
        if semester_match:
            number, word, start_year, end_year = semester_match.groups()
            metadata.semester = f"{number} {word.lower()}"
            metadata.academic_year = f"{start_year}-{end_year}"
        else:
            year_match = ACADEMIC_YEAR_PATTERN.search(text)
            if year_match:
                metadata.academic_year = f"{year_match.group(1)}-{year_match.group(2)}"
                metadata.semester = "1 полугодие"

    if metadata.education_form is None and EDUCATION_FORM_LABEL in text:
        rest = text.split(EDUCATION_FORM_LABEL, 1)[1].strip(' :-\n')
        metadata.education_form = rest or text

    if metadata.institution is None and any(label in text for label in INSTITUTION_LABELS):
        metadata.institution = text

    if metadata.specialty is None and SPECIALTY_CODE_PATTERN.search(text):
        metadata.specialty = text


def default_academic_period(today: Optional[date] = None) -> SheetMetadata:
    """
    Учебный год и полугодие по текущей дате, если в файле их нет.
    С сентября - первое полугодие.
    """
    today = today or date.today()
    semester = "1 полугодие" if today.month >= 9 else "2 полугодие"
    return SheetMetadata(academic_year=f"{today.year}-{today.year + 1}", semester=semester)


def extract_metadata(reader: CellReader, layout: ParserLayout, start_col: Optional[int] = None,
                     end_col: Optional[int] = None) -> SheetMetadata:
    """
    Сканирует строки шапки (17-25 в шаблоне) в окне колонок [start_col, end_col).
    Без окна - все колонки от metadata_start_column. Значения по умолчанию не подставляются.
    """
    metadata = SheetMetadata()
    first_col = layout.metadata_start_column if start_col is None else start_col

    for row in range(layout.metadata_first_row, layout.metadata_last_row + 1):
        last_col = reader.row_width(row) if end_col is None else end_col
        for col in range(first_col, last_col):
            text = reader.raw_value(row, col)
            if text:
                _match_cell(text, metadata)

    return metadata


def merge_metadata(primary: SheetMetadata, fallback: SheetMetadata) -> SheetMetadata:
    """Поля primary, недостающие берутся из fallback."""
    return SheetMetadata(
        academic_year=primary.academic_year or fallback.academic_year,
        semester=primary.semester if primary.academic_year else fallback.semester,
        specialty=primary.specialty or fallback.specialty,
        education_form=primary.education_form or fallback.education_form,
        institution=primary.institution or fallback.institution,
    )


def resolve_sheet_metadata(reader: CellReader, layout: ParserLayout, today: Optional[date] = None) -> SheetMetadata:
    """Метаданные всего листа с подстановкой учебного года по текущей дате."""
    metadata = extract_metadata(reader, layout)
    if metadata.academic_year is None:
        fallback = default_academic_period(today)
        log.warning(f"Учебный год в шапке не найден. Используется {fallback.academic_year}, {fallback.semester}.")
        metadata = merge_metadata(metadata, fallback)
    return metadata
