# diary/api_routes.py

import logging
from datetime import date
from typing import Optional, Tuple

from flask import Blueprint, jsonify, request

from .db import get_store, get_notes
from .utils import make_json_serializable
from .services.clients.file_downloader import download_schedule_file, DownloadError
from .services.core.import_service import import_schedule, layout_from_config, USER_GROUP_KEY
from .services.parsers.schedule_parser import list_groups
from .services.utils.enums import DeadlineType, FailureKind


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)


FAILURE_STATUS = {
    FailureKind.GROUP_NOT_FOUND: 404,
    FailureKind.NO_ENTRIES: 422,
    FailureKind.UNREADABLE: 422,
}


def _request_params() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


def _load_buffer() -> Tuple[Optional[bytes], Optional[tuple]]:
    """Файл из multipart-поля 'file' или по ссылке 'url'. Возвращает (буфер, ответ-ошибку)."""
    uploaded = request.files.get('file')
    if uploaded:
        return uploaded.read(), None

    url = _request_params().get('url')
    if not url:
        return None, (jsonify({"error": "Нужен файл (поле 'file') или ссылка (поле 'url')"}), 400)

    try:
        return download_schedule_file(url), None
    except DownloadError as e:
        return None, (jsonify({"error": str(e)}), 502)


def _date_arg() -> Tuple[Optional[date], Optional[tuple]]:
    day_str = request.args.get('date')
    if not day_str:
        return None, None
    try:
        return date.fromisoformat(day_str), None
    except ValueError:
        return None, (jsonify({"error": f"Некорректная дата: {day_str}"}), 400)


def _result_response(result):
    status = 200 if result.success else FAILURE_STATUS.get(result.failure, 400)
    return jsonify(make_json_serializable(result)), status


@bp.route('/groups', methods=['POST'])
def get_groups():
    """Список групп в присланном файле."""
    buffer, error = _load_buffer()
    if error:
        return error

    result = list_groups(buffer, layout_from_config())
    log.info(f"API: найдено групп в файле: {len(result.groups)}")
    return _result_response(result)


@bp.route('/import', methods=['POST'])
def import_file():
    """Импортирует расписание группы из файла и сохраняет его."""
    buffer, error = _load_buffer()
    if error:
        return error

    group = _request_params().get('group')
    result = import_schedule(get_store(), buffer, group)
    log.info(f"API: импорт для группы '{group}' - success={result.success}, пар: {len(result.entries)}")
    return _result_response(result)


@bp.route('/groups', methods=['GET'])
def get_stored_groups():
    """Группы, расписание которых уже сохранено в базе."""
    return jsonify({"groups": get_store().groups()})


@bp.route('/schedule/<group>')
def get_schedule(group):
    """Сохраненное расписание группы, можно ограничить одной датой (?date=YYYY-MM-DD)."""
    day, error = _date_arg()
    if error:
        return error

    entries = get_store().entries_for(group, day)
    return jsonify(make_json_serializable(entries))


@bp.route('/subjects')
def get_subjects():
    """Предметы с предстоящими парами (с сегодняшнего дня или с ?date=YYYY-MM-DD)."""
    day, error = _date_arg()
    if error:
        return error

    return jsonify({"subjects": get_notes().upcoming_subjects(day)})


@bp.route('/settings/group', methods=['GET'])
def get_user_group():
    return jsonify({"group": get_store().get_setting(USER_GROUP_KEY)})


@bp.route('/settings/group', methods=['PUT'])
def set_user_group():
    group = (_request_params().get('group') or '').strip()
    if not group:
        return jsonify({"error": "Не указана группа"}), 400

    get_store().set_setting(USER_GROUP_KEY, group)
    log.info(f"API: выбрана группа '{group}'")
    return jsonify({"group": group})


@bp.route('/history')
def get_history():
    return jsonify(get_store().update_history())


# --- Заметки ---

@bp.route('/notes', methods=['GET'])
def list_notes():
    return jsonify(make_json_serializable(get_notes().list_notes()))


@bp.route('/notes', methods=['POST'])
def add_note():
    params = _request_params()
    try:
        deadline_type = DeadlineType(params.get('deadline_type', DeadlineType.NONE.value))
        deadline = date.fromisoformat(params['deadline']) if params.get('deadline') else None
        note = get_notes().add_note(
            title=params.get('title', ''),
            content=params.get('content', ''),
            subject=params.get('subject', ''),
            deadline_type=deadline_type,
            deadline=deadline,
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(make_json_serializable(note)), 201


@bp.route('/notes/<note_id>/important', methods=['POST'])
def toggle_important(note_id):
    note = get_notes().toggle_important(note_id)
    if note is None:
        return jsonify({"error": "Заметка не найдена"}), 404
    return jsonify(make_json_serializable(note))


@bp.route('/notes/<note_id>/completed', methods=['POST'])
def toggle_completed(note_id):
    note = get_notes().toggle_completed(note_id)
    if note is None:
        return jsonify({"error": "Заметка не найдена"}), 404
    return jsonify(make_json_serializable(note))


@bp.route('/notes/<note_id>', methods=['DELETE'])
def delete_note(note_id):
    if not get_notes().delete_note(note_id):
        return jsonify({"error": "Заметка не найдена"}), 404
    return '', 204
