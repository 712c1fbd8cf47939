# diary/db.py

from flask import current_app, g

from .services.core.notes_store import NotesStore
from .services.core.schedule_store import ScheduleStore, open_database


def get_store() -> ScheduleStore:
    """Хранилище расписания текущего контекста приложения."""
    if 'store' not in g:
        conn = open_database(current_app.config['DATABASE_PATH'])
        g.store = ScheduleStore(conn)
        g.store.init_schema()
    return g.store


def get_notes() -> NotesStore:
    if 'notes' not in g:
        store = get_store()
        g.notes = NotesStore(store.conn, store)
        g.notes.init_schema()
    return g.notes


def close_db(e=None):
    g.pop('notes', None)
    store = g.pop('store', None)
    if store is not None:
        store.conn.close()


def init_app(app):
    app.teardown_appcontext(close_db)
