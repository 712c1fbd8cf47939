import html
import logging
from aiogram import Bot, Dispatcher, F
from aiogram.filters import CommandStart, Command, CommandObject
from aiogram.types import Message, BotCommand

from config import Config

from diary.services.core.import_service import import_schedule, USER_GROUP_KEY
from diary.services.core.schedule_store import ScheduleStore, open_database
from diary.services.utils.enums import FailureKind

log = logging.getLogger(__name__)

dp = Dispatcher()

MAX_LISTED_GROUPS = 30


# --- ХЕЛПЕРЫ ---

def format_import_result(result, group_name: str) -> str:
    """Текст ответа пользователю по результату импорта (HTML, пользовательский текст экранирован)."""
    group = html.escape(group_name)
    if result.success:
        days = sorted({entry.date for entry in result.entries})
        period = f"{days[0]:%d.%m} - {days[-1]:%d.%m}" if days else "—"
        return (f"✅ Расписание группы <b>{group}</b> обновлено.\n"
                f"Пар: {len(result.entries)}, период: {period}")

    if result.failure == FailureKind.GROUP_NOT_FOUND:
        groups = result.groups[:MAX_LISTED_GROUPS]
        listed = "\n".join(f"• <code>{html.escape(g)}</code>" for g in groups) or "—"
        return (f"❌ Группа <b>{group}</b> не найдена в файле.\n"
                f"Может быть, одна из этих?\n{listed}")

    if result.failure == FailureKind.NO_ENTRIES:
        return (f"⚠️ Группа <b>{group}</b> есть в файле, но пар не найдено. "
                f"Проверьте структуру файла.")

    return f"❌ {html.escape(result.error or 'Не удалось импортировать файл.')}"


# --- ОБРАБОТЧИКИ КОМАНД ---

@dp.message(CommandStart())
async def command_start_handler(message: Message, store: ScheduleStore):
    group = store.get_setting(USER_GROUP_KEY)
    text = f"👋 Привет, {html.escape(message.from_user.first_name)}!\n"
    if group:
        text += f"Текущая группа: <b>{html.escape(group)}</b>.\n"
    else:
        text += "Сначала выберите группу: /group ИСПк-104-52-00\n"
    text += "Пришлите файл расписания (.xlsx), и я загружу пары вашей группы."
    await message.answer(text, parse_mode="HTML")


@dp.message(Command("group"))
async def command_group_handler(message: Message, command: CommandObject, store: ScheduleStore):
    group = (command.args or '').strip()
    if not group:
        current = store.get_setting(USER_GROUP_KEY) or "не выбрана"
        await message.answer(f"Текущая группа: {current}.\nЧтобы сменить: /group <название>")
        return

    store.set_setting(USER_GROUP_KEY, group)
    log.info(f"Пользователь {message.from_user.id} выбрал группу '{group}'")
    await message.answer(f"✅ Группа <b>{html.escape(group)}</b> сохранена.", parse_mode="HTML")


@dp.message(F.document)
async def document_handler(message: Message, bot: Bot, store: ScheduleStore):
    """Импорт присланного файла. В подписи можно указать группу."""
    document = message.document
    if not (document.file_name or '').lower().endswith('.xlsx'):
        await message.answer("ℹ️ Нужен файл Excel в формате .xlsx.")
        return

    group = (message.caption or '').strip() or store.get_setting(USER_GROUP_KEY)
    if not group:
        await message.answer("Сначала выберите группу командой /group или укажите ее в подписи к файлу.")
        return

    log.info(f"Получен файл '{document.file_name}' от {message.from_user.id} для группы '{group}'")
    file_data = await bot.download(document)
    result = import_schedule(store, file_data.read(), group)
    await message.answer(format_import_result(result, group), parse_mode="HTML")


# --- ФУНКЦИЯ ЗАПУСКА БОТА ---

async def set_main_menu(bot: Bot):
    """Устанавливает команды, которые будут видны в кнопке 'Меню'."""
    main_menu_commands = [
        BotCommand(command="/start", description="👋 Перезапустить бота"),
        BotCommand(command="/group", description="🎓 Выбрать группу"),
    ]
    await bot.set_my_commands(main_menu_commands)


async def main() -> None:
    """Точка входа для запуска бота."""
    logging.info("Запуск Telegram-бота...")
    bot = Bot(token=Config.TELEGRAM_BOT_TOKEN)
    conn = open_database(Config.DATABASE_PATH)
    store = ScheduleStore(conn)
    store.init_schema()

    try:
        await set_main_menu(bot)
        await bot.delete_webhook(drop_pending_updates=True)
        await dp.start_polling(bot, store=store)
    finally:
        conn.close()
        await bot.session.close()
