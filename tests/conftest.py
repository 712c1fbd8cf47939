import io
from datetime import date

import pytest
from openpyxl import Workbook

from diary import create_app
from diary.services.core.notes_store import NotesStore
from diary.services.core.schedule_store import ScheduleStore, open_database
from diary.services.parsers.common_structs import ParserLayout


GROUP_ISP = 'ИСПк-104-52-00'
GROUP_ISP_ALIAS = 'ИСПк-105-52-00'
GROUP_DO = 'ДОк-202-52-00'

TODAY = date(2025, 10, 20)


def empty_grid(rows: int = 45, cols: int = 16):
    return [[''] * cols for _ in range(rows)]


def put_lesson(grid, row, col, subject='', lesson_type='', teacher='', room=''):
    grid[row][col:col + 4] = [subject, lesson_type, teacher, room]


def build_sample_grid():
    """
    Лист в разметке колледжа: шапка в строках 17-25, группы в 24-й строке,
    ИСПк-104/105 делят блок с колонки 6, ДОк-202 - блок с колонки 10.
    """
    grid = empty_grid()
    grid[0][0] = 'Расписание учебных занятий'
    grid[16][0] = 'Колледж ВятГУ'
    grid[18][0] = 'На 1 полугодие 2025-2026 учебного года'
    grid[19][6] = '09.02.07 Информационные системы и программирование'
    grid[19][10] = '44.02.01 Дошкольное образование'
    grid[20][0] = 'Форма обучения: очная'
    grid[23][6] = f'Группа {GROUP_ISP}\nГруппа {GROUP_ISP_ALIAS}'
    grid[23][10] = f'Группа {GROUP_DO}'

    grid[25][0] = 'ЧЕТВЕРГ   13.11'
    grid[26][1] = '8.30-10.00'
    put_lesson(grid, 26, 6, 'Математика', 'лекция', 'Иванов И.И.', '305')
    put_lesson(grid, 26, 10, 'Педагогика', 'практика', 'Петрова А.А.', '210')
    grid[27][1] = '10.10-11.40'
    put_lesson(grid, 27, 6, 'Выходной день')
    put_lesson(grid, 27, 10, 'Психология', 'семинар')
    grid[28][1] = '12.10-13.40'
    put_lesson(grid, 28, 6, 'Программирование', 'лаб. работа', 'Сидоров С.С.', '101')

    grid[30][0] = 'ПЯТНИЦА 14.11'
    grid[31][1] = '8.30-10.00'
    put_lesson(grid, 31, 6, 'Физкультура', 'пр. занятие')
    return grid


def grid_to_xlsx(grid, merged_ranges=()) -> bytes:
    wb = Workbook()
    ws = wb.active
    for r, row in enumerate(grid, start=1):
        for c, value in enumerate(row, start=1):
            if value != '':
                ws.cell(row=r, column=c, value=value)
    for cell_range in merged_ranges:
        ws.merge_cells(cell_range)

    stream = io.BytesIO()
    wb.save(stream)
    return stream.getvalue()


@pytest.fixture
def layout():
    return ParserLayout()


@pytest.fixture
def sample_grid():
    return build_sample_grid()


@pytest.fixture
def sample_xlsx():
    return grid_to_xlsx(build_sample_grid())


@pytest.fixture
def store():
    conn = open_database(':memory:')
    schedule_store = ScheduleStore(conn)
    schedule_store.init_schema()
    yield schedule_store
    conn.close()


@pytest.fixture
def notes(store):
    notes_store = NotesStore(store.conn, store)
    notes_store.init_schema()
    return notes_store


@pytest.fixture
def app(tmp_path):
    return create_app({'TESTING': True, 'DATABASE_PATH': str(tmp_path / 'diary.db')})


@pytest.fixture
def client(app):
    return app.test_client()
