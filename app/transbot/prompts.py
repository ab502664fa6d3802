# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/9 17:38
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Reply templates
"""
from telegram import BotCommand

BOT_COMMANDS = [
    BotCommand("start", "Start the bot / Show initial info"),
    BotCommand("setlanguages", "Set primary/secondary langs (e.g., en vi)"),
    BotCommand("showconfig", "Show current group config"),
    BotCommand("enable", "Enable translation in this group"),
    BotCommand("disable", "Disable translation in this group"),
    BotCommand("setstyle", "Set reply style (reply, thread, inline)"),
    BotCommand("togglereplyvoice", "Toggle replying with translated voice message"),
    BotCommand("help", "Show available commands and usage"),
]

HELP_TPL = """
Available commands:
/start - Start the bot / Show initial info
/setlanguages <primary> <secondary> - Set languages (e.g., /setlanguages en vi)
/showconfig - Show current group config
/enable - Enable translation in this group
/disable - Disable translation in this group
/setstyle <style> - Set reply style (reply, thread, inline)
/togglereplyvoice - Toggle replying with translated voice message
/help - Show this help message
"""

PRIVATE_WELCOME_TPL = (
    "Welcome! I am a translation bot. "
    "Add me to a group to help translate messages between languages."
)

GROUP_WELCOME_TPL = (
    "Translation Bot Activated! Current language pair: {language_pair}\n"
    "Use /showconfig to see current settings."
)

SHOW_CONFIG_TPL = """
Group Configuration:
- Enabled: {enabled}
- Languages: {language_pair}
- Reply Style: {reply_style}
- Reply With Voice: {reply_with_voice}
- Translate Commands: {translate_commands}
"""

SET_LANGUAGES_USAGE = (
    "Usage: /setlanguages <primary_lang_code> <secondary_lang_code>\n"
    "Example: /setlanguages en vi"
)

GROUP_ONLY = "Command only available in groups."

COMMAND_FAILED = "Sorry, there was an error processing your command. Please try again."

VOICE_FAILED = "Sorry, I couldn't process that voice message."

VOICE_REPLY_FAILED = "[Failed to generate voice reply]"

LOW_CONFIDENCE = "[Translation failed or confidence too low]"
