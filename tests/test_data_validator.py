import math

import pytest

from diary.services.utils.data_validator import (
    normalize_cell, parse_day_header, is_time_range, extract_group_name,
)


@pytest.mark.parametrize('value, expected', [
    (None, ''),
    (math.nan, ''),
    (305.0, '305'),
    (12.5, '12.5'),
    ('  Математика ', 'Математика'),
    ('210.0', '210'),
    (7, '7'),
])
def test_normalize_cell(value, expected):
    assert normalize_cell(value) == expected


def test_parse_day_header():
    assert parse_day_header('ЧЕТВЕРГ   13.11') == ('ЧЕТВЕРГ', 13, 11)
    assert parse_day_header('суббота 1.09') == ('СУББОТА', 1, 9)
    assert parse_day_header('ЧЕТВЕРГ') is None
    assert parse_day_header('8.30-10.00') is None


def test_is_time_range():
    assert is_time_range('8.30-10.00')
    assert is_time_range('13.50 - 15.20')
    assert not is_time_range('8:30-10:00')
    assert not is_time_range('')


@pytest.mark.parametrize('line, expected', [
    ('Группа ИСПк-104-52-00', 'ИСПк-104-52-00'),
    ('группа ДО-11', 'ДО-11'),
    ('Студенты ИСПк-104-52-00, 1 курс', 'ИСПк-104-52-00'),
    ('ДОк-202-52-00', 'ДОк-202-52-00'),
    ('Время', None),
    ('', None),
])
def test_extract_group_name(line, expected):
    assert extract_group_name(line) == expected
