from datetime import date

import pytest

from diary.services.parsers.common_structs import ScheduleEntry
from diary.services.utils.enums import DeadlineType, LessonType


def test_add_and_list(notes):
    first = notes.add_note('Реферат', 'Тема 1', 'История')
    second = notes.add_note('Задачи', '№1-5', 'Математика', DeadlineType.DATE, date(2025, 12, 1))

    listed = notes.list_notes()
    assert [n.id for n in listed] == [second.id, first.id]
    assert listed[0].deadline == date(2025, 12, 1)
    assert listed[1].deadline is None


def test_next_class_deadline(notes, store):
    store.replace_entries([ScheduleEntry(
        subject='Программирование', time='8.30-10.00', teacher='Сидоров С.С.', classroom='101',
        date=date(2025, 11, 20), lesson_type=LessonType.LAB, group='ИСПк-104-52-00',
        day_of_week='ЧЕТВЕРГ', pair_number=0,
    )], 'ИСПк-104-52-00')

    note = notes.add_note('Лабораторная №3', 'Отчет', 'Программирование', DeadlineType.NEXT_CLASS,
                          today=date(2025, 11, 13))
    assert note.deadline == date(2025, 11, 20)
    assert notes.get_note(note.id).next_class_date == date(2025, 11, 20)


def test_next_class_without_schedule_has_no_deadline(notes):
    note = notes.add_note('Доклад', 'Текст', 'Философия', DeadlineType.NEXT_CLASS, today=date(2025, 11, 13))
    assert note.deadline is None


def test_toggles_and_delete(notes):
    note = notes.add_note('Реферат', 'Тема 1', 'История')

    assert notes.toggle_important(note.id).important
    assert not notes.toggle_important(note.id).important
    assert notes.toggle_completed(note.id).completed

    assert notes.delete_note(note.id)
    assert not notes.delete_note(note.id)
    assert notes.toggle_completed(note.id) is None


@pytest.mark.parametrize('title, content, subject', [('', 'x', 'y'), ('x', ' ', 'y'), ('x', 'y', '')])
def test_required_fields(notes, title, content, subject):
    with pytest.raises(ValueError):
        notes.add_note(title, content, subject)


def test_date_deadline_requires_date(notes):
    with pytest.raises(ValueError):
        notes.add_note('Реферат', 'Тема', 'История', DeadlineType.DATE)


def test_upcoming_subjects_for_picker(notes, store):
    store.replace_entries([
        ScheduleEntry('Математика', '8.30-10.00', 'Иванов', '305', date(2025, 11, 10), LessonType.LECTURE,
                      'ИСПк-104-52-00', 'ПОНЕДЕЛЬНИК', 0),
        ScheduleEntry('История', '8.30-10.00', 'Петров', '210', date(2025, 11, 14), LessonType.SEMINAR,
                      'ИСПк-104-52-00', 'ПЯТНИЦА', 0),
    ], 'ИСПк-104-52-00')
    assert notes.upcoming_subjects(date(2025, 11, 12)) == ['История']
