import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # Локальная база дневника (расписание, настройки, заметки)
    DATABASE_PATH = os.getenv('DATABASE_PATH', os.path.join(BASE_DIR, 'data', 'student_diary.db'))

    # --- Telegram Bot Configuration ---
    TELEGRAM_BOT_TOKEN = os.getenv('TELEGRAM_BOT_TOKEN')

    DOWNLOAD_TIMEOUT = int(os.getenv('DOWNLOAD_TIMEOUT', 30))
    # Ограничение размера загружаемого файла (Flask отдает 413, если больше)
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_UPLOAD_SIZE', 10 * 1024 * 1024))

    # --- Разметка шаблона Excel-расписания (индексы с нуля) ---
    # Строка 24 листа - заголовок с группами
    HEADER_ROW = int(os.getenv('HEADER_ROW', 23))
    GROUP_START_COLUMN = int(os.getenv('GROUP_START_COLUMN', 6))
    BLOCK_WIDTH = int(os.getenv('BLOCK_WIDTH', 4))
    # Строки 17-25 - шапка с учебным годом, специальностью и т.п.
    METADATA_FIRST_ROW = int(os.getenv('METADATA_FIRST_ROW', 16))
    METADATA_LAST_ROW = int(os.getenv('METADATA_LAST_ROW', 24))
    METADATA_START_COLUMN = int(os.getenv('METADATA_START_COLUMN', 0))
    DAY_COLUMN = int(os.getenv('DAY_COLUMN', 0))
    DATA_START_ROW = int(os.getenv('DATA_START_ROW', 24))
