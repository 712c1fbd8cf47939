# diary/services/parsers/group_locator.py

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .cell_reader import CellReader
from .common_structs import GroupColumnMapping, ParserLayout, SheetMetadata
from .metadata_extractor import extract_metadata, merge_metadata

from diary.services.utils.data_validator import extract_group_name


log = logging.getLogger(__name__)


@dataclass
class LocatedGroups:
    mappings: List[GroupColumnMapping] = field(default_factory=list)
    # Группы, встретившиеся в заголовке больше одного раза в разных колонках
    conflicts: List[str] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [m.group for m in self.mappings]

    def find(self, group_name: str) -> Optional[GroupColumnMapping]:
        return next((m for m in self.mappings if m.group == group_name), None)


def _groups_in_cell(text: str) -> List[str]:
    """Одна ячейка заголовка может содержать несколько групп, по одной на строку."""
    names = []
    for line in text.splitlines():
        name = extract_group_name(line)
        if name and name not in names:
            names.append(name)
    return names


def locate_groups(reader: CellReader, layout: ParserLayout,
                  sheet_metadata: Optional[SheetMetadata] = None) -> LocatedGroups:
    """
    Находит все группы в строке заголовка и начальную колонку их блока
    (предмет, вид занятия, преподаватель, аудитория).
    """
    result = LocatedGroups()
    seen: Dict[str, int] = {}
    sheet_metadata = sheet_metadata or SheetMetadata()

    row = layout.header_row
    width = reader.row_width(row)
    col = layout.group_start_column

    while col < width:
        text = reader.value(row, col)
        names = _groups_in_cell(text) if text else []
        if not names:
            col += 1
            continue

        block_metadata = extract_metadata(reader, layout, start_col=col, end_col=col + layout.block_width)
        metadata = merge_metadata(block_metadata, sheet_metadata)

        for name in names:
            if name in seen:
                if seen[name] != col:
                    log.warning(f"Группа '{name}' встречается в колонках {seen[name]} и {col}. "
                                f"Используется первая колонка.")
                    if name not in result.conflicts:
                        result.conflicts.append(name)
                continue
            seen[name] = col
            result.mappings.append(GroupColumnMapping(group=name, start_column=col, metadata=metadata))
            log.debug(f"Группа '{name}' найдена в колонке {col}")

        col += layout.block_width

    log.info(f"В строке заголовка найдено групп: {len(result.mappings)}")
    return result
