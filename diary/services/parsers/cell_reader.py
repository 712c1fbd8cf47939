# diary/services/parsers/cell_reader.py

from typing import Dict, List, Sequence, Tuple

from .common_structs import MergedRegion


class CellReader:
    """
    Доступ к ячейкам листа с учетом объединенных областей.
    Значение объединенной ячейки видно из любой клетки, которую она покрывает.
    """

    def __init__(self, grid: Sequence[Sequence[str]], merged_regions: Sequence[MergedRegion] = ()):
        self._grid = grid
        # Клетка -> якорь (левый верхний угол) ее области
        self._anchors: Dict[Tuple[int, int], Tuple[int, int]] = {}
        for region in merged_regions or ():
            for row in range(region.start_row, region.end_row + 1):
                for col in range(region.start_col, region.end_col + 1):
                    self._anchors.setdefault((row, col), (region.start_row, region.start_col))

    @property
    def row_count(self) -> int:
        return len(self._grid)

    def row_width(self, row: int) -> int:
        if 0 <= row < len(self._grid):
            return len(self._grid[row])
        return 0

    def raw_value(self, row: int, col: int) -> str:
        """Значение, записанное в самой клетке, без учета объединения."""
        if row < 0 or col < 0 or row >= len(self._grid):
            return ''
        cells = self._grid[row]
        if col >= len(cells):
            return ''
        value = cells[col]
        return '' if value is None else str(value).strip()

    def value(self, row: int, col: int) -> str:
        anchor_row, anchor_col = self._anchors.get((row, col), (row, col))
        return self.raw_value(anchor_row, anchor_col)

    def values(self, row: int, start_col: int, count: int) -> List[str]:
        return [self.value(row, col) for col in range(start_col, start_col + count)]
