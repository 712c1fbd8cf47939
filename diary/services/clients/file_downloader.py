# diary/services/clients/file_downloader.py

import logging
from typing import Optional

import requests

from config import Config


log = logging.getLogger(__name__)


class DownloadError(Exception):
    """Файл расписания не удалось скачать."""


def download_schedule_file(url: str, timeout: Optional[int] = None) -> bytes:
    """Скачивает файл расписания целиком в память."""
    timeout = timeout or Config.DOWNLOAD_TIMEOUT
    log.info(f"Скачивание файла расписания: {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        log.error(f"Не удалось скачать файл '{url}': {e}")
        raise DownloadError(f"Не удалось скачать файл: {e}") from e

    content = response.content
    if not content:
        log.error(f"Сервер вернул пустой файл: {url}")
        raise DownloadError("Сервер вернул пустой файл")

    log.info(f"Скачано {len(content)} байт")
    return content
