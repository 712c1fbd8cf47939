from datetime import date

from bot.bot_service import format_import_result
from diary.services.parsers.common_structs import ImportResult, ScheduleEntry
from diary.services.utils.enums import FailureKind, LessonType


def test_success_message():
    entries = [ScheduleEntry('Математика', '8.30-10.00', 'Иванов', '305', day, LessonType.LECTURE,
                             'ИСПк-104-52-00', 'ЧЕТВЕРГ', 0)
               for day in (date(2025, 11, 13), date(2025, 11, 15))]
    text = format_import_result(ImportResult(success=True, entries=entries), 'ИСПк-104-52-00')
    assert 'Пар: 2' in text
    assert '13.11 - 15.11' in text


def test_group_not_found_suggests_groups():
    result = ImportResult(success=False, error='...', groups=['ДОк-202-52-00', 'ИСПк-104-52-00'],
                          failure=FailureKind.GROUP_NOT_FOUND)
    text = format_import_result(result, 'ИСП')
    assert 'не найдена' in text
    assert 'ДОк-202-52-00' in text and 'ИСПк-104-52-00' in text


def test_no_entries_message():
    result = ImportResult(success=False, failure=FailureKind.NO_ENTRIES)
    assert 'структуру файла' in format_import_result(result, 'ИСПк-104-52-00')


def test_unreadable_message():
    result = ImportResult(success=False, error='Не удалось прочитать файл.', failure=FailureKind.UNREADABLE)
    assert 'Не удалось прочитать файл.' in format_import_result(result, 'ИСПк-104-52-00')


def test_user_text_is_html_escaped():
    result = ImportResult(success=False, error='Группа "A<b & c>" не найдена', groups=['<i>'],
                          failure=FailureKind.GROUP_NOT_FOUND)
    text = format_import_result(result, 'A<b & c>')
    assert '<b>A&lt;b &amp; c&gt;</b>' in text
    assert '<code>&lt;i&gt;</code>' in text

    no_entries = format_import_result(ImportResult(success=False, failure=FailureKind.NO_ENTRIES), 'ИСП<1>')
    assert '<b>ИСП&lt;1&gt;</b>' in no_entries


def test_error_text_is_escaped():
    result = ImportResult(success=False, error='Группа "<x>" не найдена', failure=FailureKind.UNREADABLE)
    assert format_import_result(result, '<x>') == '❌ Группа &quot;&lt;x&gt;&quot; не найдена'
