# diary/services/parsers/day_walker.py

from dataclasses import dataclass, replace
from typing import Optional, Union

from .cell_reader import CellReader
from .common_structs import DayMarker, ParserLayout

from diary.services.utils.data_validator import parse_day_header, is_time_range


SATURDAY = 'СУББОТА'
MAX_PAIRS_SATURDAY = 6
MAX_PAIRS = 7


@dataclass(frozen=True)
class NoCurrentDay:
    pass


@dataclass(frozen=True)
class InDay:
    day_label: str
    day_number: int
    month: int
    pair_counter: int = 0

    @property
    def max_pairs(self) -> int:
        return MAX_PAIRS_SATURDAY if self.day_label == SATURDAY else MAX_PAIRS


WalkerState = Union[NoCurrentDay, InDay]


class DayWalker:
    """
    Проходит строки листа сверху вниз и следит за текущим днем.

    Заголовок дня ('ЧЕТВЕРГ 13.11') всегда начинает новый день со счетчиком 0.
    Строка с временем ('8.30-10.00') внутри дня - кандидат на пару; после ее
    обработки вызывается advance(). Достигнув предела пар (6 в субботу, 7 в
    остальные дни), обходчик забывает день до следующего заголовка.
    """

    def __init__(self, reader: CellReader, layout: ParserLayout):
        self._reader = reader
        self._layout = layout
        self.state: WalkerState = NoCurrentDay()
        self.current_marker: Optional[DayMarker] = None

    def match_day(self, row: int) -> Optional[DayMarker]:
        # Берем значение самой клетки: объединенный по вертикали день не должен
        # превращать каждую строку пары в новый заголовок.
        parsed = parse_day_header(self._reader.raw_value(row, self._layout.day_column))
        if not parsed:
            return None
        day_name, day, month = parsed
        return DayMarker(day_name=day_name, day_number=day, month=month, row=row)

    def step(self, row: int) -> Optional[InDay]:
        """
        Обрабатывает строку. Возвращает состояние дня, если строка - кандидат на пару,
        иначе None.
        """
        marker = self.match_day(row)
        if marker:
            self.current_marker = marker
            self.state = InDay(marker.day_name, marker.day_number, marker.month, 0)
            return None

        if not isinstance(self.state, InDay):
            return None

        if not is_time_range(self._reader.value(row, self._layout.time_column)):
            return None

        return self.state

    def advance(self) -> None:
        """Увеличивает счетчик пар после обработки строки-кандидата."""
        if not isinstance(self.state, InDay):
            return
        next_state = replace(self.state, pair_counter=self.state.pair_counter + 1)
        if next_state.pair_counter >= next_state.max_pairs:
            self.state = NoCurrentDay()
            self.current_marker = None
        else:
            self.state = next_state
