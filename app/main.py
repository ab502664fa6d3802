# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/7 05:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Bot entrypoint
"""
import json
import sys

from loguru import logger
from telegram import Update, BotCommandScopeAllPrivateChats, BotCommandScopeAllGroupChats
from telegram.ext import Application, CommandHandler, MessageHandler, TypeHandler, filters

from agent import TranslationAgent
from settings import settings, LOG_DIR
from transbot.handlers import GroupConfigCommands, TranslationHandlers
from transbot.prompts import BOT_COMMANDS
from transbot.session import SessionBinder
from transbot.store import ConfigurationError, GroupConfigStore, create_store
from transbot.task_manager import non_blocking_handler, wait_for_all_tasks
from utils import init_log

init_log(
    runtime=LOG_DIR.joinpath("runtime.log"),
    error=LOG_DIR.joinpath("error.log"),
    serialize=LOG_DIR.joinpath("serialize.log"),
)


async def setup_bot_commands(application: Application) -> None:
    """Register the command menu for private and group chats"""
    try:
        await application.bot.set_my_commands(BOT_COMMANDS, scope=BotCommandScopeAllPrivateChats())
        await application.bot.set_my_commands(BOT_COMMANDS, scope=BotCommandScopeAllGroupChats())
        logger.success(f"Bot commands registered: {[f'/{cmd.command}' for cmd in BOT_COMMANDS]}")
    except Exception as e:
        logger.error(f"Failed to register bot commands: {e}")


async def on_error(update: object, context) -> None:
    logger.opt(exception=context.error).error(f"Unhandled error while processing {update}")


def register_handlers(
    application: Application, store: GroupConfigStore, agent: TranslationAgent
) -> SessionBinder:
    binder = SessionBinder(store)
    commands = GroupConfigCommands(binder)
    translation = TranslationHandlers(binder, agent)

    # Binder runs first for every update and shares the context with later groups
    application.add_handler(TypeHandler(Update, binder.bind), group=-1)

    application.add_handler(CommandHandler("help", commands.help))
    application.add_handler(CommandHandler("start", commands.start))
    application.add_handler(CommandHandler("setlanguages", commands.set_languages))
    application.add_handler(CommandHandler("showconfig", commands.show_config))
    application.add_handler(CommandHandler("enable", commands.enable))
    application.add_handler(CommandHandler("disable", commands.disable))
    application.add_handler(CommandHandler("setstyle", commands.set_style))
    application.add_handler(CommandHandler("togglereplyvoice", commands.toggle_reply_voice))

    # Unknown commands fall through here and are translated only when translate_commands is on
    application.add_handler(MessageHandler(filters.TEXT, translation.handle_text))
    application.add_handler(
        MessageHandler(
            filters.VOICE, non_blocking_handler("handle_voice")(translation.handle_voice)
        )
    )

    application.add_error_handler(on_error)
    return binder


def main() -> None:
    """Start the bot."""
    sp = settings.model_dump(mode="json")
    logger.success(f"Loading settings: {json.dumps(sp, indent=2, ensure_ascii=False)}")

    try:
        store = create_store()
    except ConfigurationError as e:
        logger.critical(f"Refusing to start: {e}")
        sys.exit(1)

    agent = TranslationAgent()
    application = settings.get_default_application()
    register_handlers(application, store, agent)

    async def post_shutdown(_: Application) -> None:
        await wait_for_all_tasks()
        await agent.aclose()
        await store.close()
        logger.info("Store and agent connections closed")

    application.post_init = setup_bot_commands
    application.post_shutdown = post_shutdown

    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
