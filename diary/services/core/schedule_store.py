# diary/services/core/schedule_store.py

import logging
import os
import sqlite3
from datetime import date, datetime
from typing import Iterable, List, Optional

from diary.services.parsers.common_structs import ScheduleEntry
from diary.services.utils.enums import LessonType


log = logging.getLogger(__name__)


def open_database(path: str) -> sqlite3.Connection:
    """Открывает базу дневника. Для ':memory:' директория не создается."""
    if path != ':memory:':
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


class ScheduleStore:
    """
    Хранилище расписания, настроек и истории импорта.
    Соединение передается снаружи; закрывает его тот, кто открыл.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def init_schema(self) -> None:
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS schedule (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                subject TEXT NOT NULL,
                time TEXT NOT NULL,
                teacher TEXT NOT NULL,
                classroom TEXT NOT NULL,
                date TEXT NOT NULL,
                type TEXT NOT NULL,
                student_group TEXT NOT NULL,
                day_of_week TEXT NOT NULL,
                pair_number INTEGER NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_group_date ON schedule (student_group, date);

            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS update_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                new_items_count INTEGER NOT NULL,
                success INTEGER NOT NULL,
                error_message TEXT
            );
        """)
        self.conn.commit()

    # --- Расписание ---

    def replace_entries(self, entries: Iterable[ScheduleEntry], group: str) -> int:
        """
        Заменяет расписание группы на все даты, встречающиеся в entries.
        Удаление и вставка идут одной транзакцией.
        """
        entries = list(entries)
        dates = sorted({entry.date.isoformat() for entry in entries})

        with self.conn:
            for day in dates:
                self.conn.execute('DELETE FROM schedule WHERE date = ? AND student_group = ?', (day, group))
            self.conn.executemany(
                """INSERT INTO schedule (subject, time, teacher, classroom, date, type, student_group,
                                         day_of_week, pair_number)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                [(e.subject, e.time, e.teacher, e.classroom, e.date.isoformat(), e.lesson_type.value, group,
                  e.day_of_week, e.pair_number) for e in entries]
            )

        log.info(f"Сохранено {len(entries)} пар группы '{group}' на даты: {', '.join(dates)}")
        return len(entries)

    def entries_for(self, group: str, day: Optional[date] = None) -> List[ScheduleEntry]:
        query = 'SELECT * FROM schedule WHERE student_group = ?'
        params = [group]
        if day is not None:
            query += ' AND date = ?'
            params.append(day.isoformat())
        query += ' ORDER BY date, pair_number'

        return [self._row_to_entry(row) for row in self.conn.execute(query, params)]

    def groups(self) -> List[str]:
        rows = self.conn.execute('SELECT DISTINCT student_group FROM schedule ORDER BY student_group')
        return [row['student_group'] for row in rows]

    def upcoming_subjects(self, today: date) -> List[str]:
        rows = self.conn.execute(
            'SELECT DISTINCT subject FROM schedule WHERE date >= ? ORDER BY subject', (today.isoformat(),))
        return [row['subject'] for row in rows]

    def next_class_date(self, subject: str, today: date) -> Optional[date]:
        """Дата ближайшего не лекционного занятия по предмету (для дедлайна 'к следующей паре')."""
        row = self.conn.execute(
            'SELECT date FROM schedule WHERE subject = ? AND date >= ? AND type != ? ORDER BY date LIMIT 1',
            (subject, today.isoformat(), LessonType.LECTURE.value)
        ).fetchone()
        return date.fromisoformat(row['date']) if row else None

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> ScheduleEntry:
        return ScheduleEntry(
            subject=row['subject'],
            time=row['time'],
            teacher=row['teacher'],
            classroom=row['classroom'],
            date=date.fromisoformat(row['date']),
            lesson_type=LessonType(row['type']),
            group=row['student_group'],
            day_of_week=row['day_of_week'],
            pair_number=row['pair_number'],
        )

    # --- Настройки ---

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        row = self.conn.execute('SELECT value FROM settings WHERE key = ?', (key,)).fetchone()
        return row['value'] if row else default

    def set_setting(self, key: str, value: str) -> None:
        with self.conn:
            self.conn.execute('INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)', (key, value))

    # --- История импорта ---

    def record_update(self, new_items_count: int, success: bool, error_message: Optional[str] = None) -> None:
        with self.conn:
            self.conn.execute(
                'INSERT INTO update_history (timestamp, new_items_count, success, error_message) VALUES (?, ?, ?, ?)',
                (datetime.now().isoformat(timespec='seconds'), new_items_count, int(success), error_message)
            )

    def update_history(self, limit: int = 20) -> List[dict]:
        rows = self.conn.execute('SELECT * FROM update_history ORDER BY id DESC LIMIT ?', (limit,))
        return [
            {
                'timestamp': row['timestamp'],
                'new_items_count': row['new_items_count'],
                'success': bool(row['success']),
                'error_message': row['error_message'],
            }
            for row in rows
        ]
