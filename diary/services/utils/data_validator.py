# diary/services/utils/data_validator.py

import math
import re
from typing import Optional, Tuple


DAYS_OF_WEEK = ['ПОНЕДЕЛЬНИК', 'ВТОРНИК', 'СРЕДА', 'ЧЕТВЕРГ', 'ПЯТНИЦА', 'СУББОТА']

DAY_HEADER_PATTERN = re.compile(r'^\s*(' + '|'.join(DAYS_OF_WEEK) + r')\s+(\d{1,2})\.(\d{1,2})')
TIME_RANGE_PATTERN = re.compile(r'^\s*\d{1,2}\.\d{2}\s*-\s*\d{1,2}\.\d{2}')

GROUP_LABEL_PATTERN = re.compile(r'Группа\s+([^\s,;]+)', re.IGNORECASE)
GROUP_CODE_PATTERN = re.compile(r'[А-ЯЁ]{2,}к?-\d{3}-\d{2}-\d{2}')


def normalize_cell(value) -> str:
    """
    Приводит значение ячейки к строке.
    None и NaN становятся пустой строкой, целые float ('305.0') - целым числом.
    """
    if value is None:
        return ''
    if isinstance(value, float):
        if math.isnan(value):
            return ''
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text[:-2] if re.fullmatch(r'\d+\.0', text) else text


def parse_day_header(text: str) -> Optional[Tuple[str, int, int]]:
    """Разбирает заголовок дня вида 'ЧЕТВЕРГ   13.11' в (день, число, месяц)."""
    match = DAY_HEADER_PATTERN.match(str(text).upper())
    if not match:
        return None
    day_name, day, month = match.groups()
    return day_name, int(day), int(month)


def is_time_range(text: str) -> bool:
    return bool(TIME_RANGE_PATTERN.match(str(text)))


def extract_group_name(line: str) -> Optional[str]:
    """
    Ищет имя группы в одной строке ячейки заголовка.
    Сначала 'Группа XXX', затем прямой код группы (например 'ИСПк-104-52-00').
    """
    line = str(line).strip()
    if not line:
        return None

    label_match = GROUP_LABEL_PATTERN.search(line)
    if label_match:
        return label_match.group(1).strip()

    code_match = GROUP_CODE_PATTERN.search(line)
    if code_match:
        return code_match.group(0)

    return None
