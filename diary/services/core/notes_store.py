# diary/services/core/notes_store.py

import logging
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from diary.services.utils.enums import DeadlineType
from .schedule_store import ScheduleStore


log = logging.getLogger(__name__)


@dataclass
class Note:
    id: str
    title: str
    content: str
    subject: str
    deadline_type: DeadlineType
    created_at: str
    deadline: Optional[date] = None
    important: bool = False
    completed: bool = False
    next_class_date: Optional[date] = None


def _to_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


class NotesStore:
    """Заметки и дедлайны по предметам."""

    def __init__(self, conn: sqlite3.Connection, schedule: ScheduleStore):
        self.conn = conn
        self.schedule = schedule

    def init_schema(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS notes (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                subject TEXT NOT NULL,
                deadline TEXT,
                deadline_type TEXT NOT NULL,
                created_at TEXT NOT NULL,
                important INTEGER NOT NULL DEFAULT 0,
                completed INTEGER NOT NULL DEFAULT 0,
                next_class_date TEXT
            )
        """)
        self.conn.commit()

    def add_note(self, title: str, content: str, subject: str,
                 deadline_type: DeadlineType = DeadlineType.NONE, deadline: Optional[date] = None,
                 today: Optional[date] = None) -> Note:
        """
        Создает заметку. Для NEXT_CLASS дедлайном становится ближайшее
        практическое занятие по предмету; если его нет - дедлайна нет.
        """
        title, content, subject = title.strip(), content.strip(), subject.strip()
        if not title or not content or not subject:
            raise ValueError("Заголовок, текст и предмет заметки обязательны")

        next_class = None
        if deadline_type == DeadlineType.NEXT_CLASS:
            next_class = self.schedule.next_class_date(subject, today or date.today())
            deadline = next_class
            if next_class is None:
                log.info(f"Для предмета '{subject}' нет предстоящих практических занятий. Дедлайн не задан.")
        elif deadline_type == DeadlineType.NONE:
            deadline = None
        elif deadline is None:
            raise ValueError("Для дедлайна по дате нужна дата")

        note = Note(
            id=uuid.uuid4().hex,
            title=title,
            content=content,
            subject=subject,
            deadline_type=deadline_type,
            created_at=datetime.now().isoformat(timespec='seconds'),
            deadline=deadline,
            next_class_date=next_class,
        )

        with self.conn:
            self.conn.execute(
                """INSERT INTO notes (id, title, content, subject, deadline, deadline_type, created_at,
                                      important, completed, next_class_date)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (note.id, note.title, note.content, note.subject,
                 note.deadline.isoformat() if note.deadline else None, note.deadline_type.value,
                 note.created_at, 0, 0, note.next_class_date.isoformat() if note.next_class_date else None)
            )
        log.info(f"Добавлена заметка '{note.title}' по предмету '{note.subject}'")
        return note

    def upcoming_subjects(self, today: Optional[date] = None) -> List[str]:
        """Предметы, по которым еще будут пары. Из них выбирают предмет заметки."""
        return self.schedule.upcoming_subjects(today or date.today())

    def get_note(self, note_id: str) -> Optional[Note]:
        row = self.conn.execute('SELECT * FROM notes WHERE id = ?', (note_id,)).fetchone()
        return self._row_to_note(row) if row else None

    def list_notes(self) -> List[Note]:
        rows = self.conn.execute('SELECT * FROM notes ORDER BY created_at DESC, rowid DESC')
        return [self._row_to_note(row) for row in rows]

    def toggle_important(self, note_id: str) -> Optional[Note]:
        return self._toggle(note_id, 'important')

    def toggle_completed(self, note_id: str) -> Optional[Note]:
        return self._toggle(note_id, 'completed')

    def delete_note(self, note_id: str) -> bool:
        with self.conn:
            cursor = self.conn.execute('DELETE FROM notes WHERE id = ?', (note_id,))
        return cursor.rowcount > 0

    def _toggle(self, note_id: str, column: str) -> Optional[Note]:
        # column - только из фиксированного набора выше
        with self.conn:
            self.conn.execute(f'UPDATE notes SET {column} = 1 - {column} WHERE id = ?', (note_id,))
        return self.get_note(note_id)

    @staticmethod
    def _row_to_note(row: sqlite3.Row) -> Note:
        return Note(
            id=row['id'],
            title=row['title'],
            content=row['content'],
            subject=row['subject'],
            deadline_type=DeadlineType(row['deadline_type']),
            created_at=row['created_at'],
            deadline=_to_date(row['deadline']),
            important=bool(row['important']),
            completed=bool(row['completed']),
            next_class_date=_to_date(row['next_class_date']),
        )
