from typing import Optional
import structlog

from telegram import Update
from telegram.constants import ChatAction, ParseMode
from telegram.error import BadRequest, TelegramError
from telegram.ext import (
    Application, CommandHandler, ContextTypes, MessageHandler, filters
)

from lola.application.commands import COMMAND_ALIASES, split_message
from lola.application.conversation import ConversationService
from lola.application.runtime import AgentRuntime

logger = structlog.get_logger(__name__)


class TelegramBotHandler:
    """Telegram surface: one session per chat id"""

    def __init__(self, token: str, runtime: AgentRuntime):
        self.runtime = runtime
        self.conversations = ConversationService(runtime)
        self.application: Application = (
            Application.builder()
            .token(token)
            # Different chats run in parallel; same-chat jobs queue on the session lock
            .concurrent_updates(True)
            .post_init(self._post_init)
            .post_shutdown(self._post_shutdown)
            .build()
        )
        self.bot = self.application.bot
        self._setup_handlers()

    def _setup_handlers(self):
        commands = sorted({alias.lstrip("/") for alias in COMMAND_ALIASES})
        # Edited messages never start a job; only new messages are handled
        new_messages = filters.UpdateType.MESSAGE
        self.application.add_handler(CommandHandler(commands, self._on_message, filters=new_messages))
        self.application.add_handler(MessageHandler(new_messages & filters.TEXT & ~filters.COMMAND, self._on_message))
        self.application.add_handler(
            MessageHandler(new_messages & ~filters.TEXT, self._on_message)
        )
        self.application.add_error_handler(self._on_error)

        logger.info("Telegram bot handlers set up", commands=commands)

    async def _on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        message = update.effective_message
        chat = update.effective_chat
        if message is None or chat is None:
            return

        chat_id = chat.id

        async def reply(text: str):
            await self.send_text(chat_id, text)

        async def show_typing():
            try:
                await self.bot.send_chat_action(chat_id, ChatAction.TYPING)
            except TelegramError as e:
                logger.warning("Typing indicator failed", chat_id=chat_id, error=str(e))

        await self.conversations.handle_message(chat_id, message.text, reply, on_job_start=show_typing)

    async def send_text(self, chat_id: int, text: str):
        """Send a possibly long answer as ordered chunks; failures are logged only"""

        for chunk in split_message(text):
            await self._send_chunk(chat_id, chunk)

    async def _send_chunk(self, chat_id: int, chunk: str):
        try:
            await self.bot.send_message(chat_id, chunk, parse_mode=ParseMode.MARKDOWN)
            return
        except BadRequest as e:
            # Usually unbalanced Markdown in model output
            logger.debug("Markdown send rejected, retrying as plain text", chat_id=chat_id, error=str(e))
        except TelegramError as e:
            logger.error("Failed to send message", chat_id=chat_id, error=str(e))
            return

        try:
            await self.bot.send_message(chat_id, chunk)
        except TelegramError as e:
            logger.error("Failed to send message", chat_id=chat_id, error=str(e))

    async def _on_error(self, update: Optional[object], context: ContextTypes.DEFAULT_TYPE):
        logger.error("Telegram error", error=str(context.error), exc_info=context.error)

    async def _post_init(self, application: Application):
        me = await application.bot.get_me()
        logger.info("Telegram bot started", username=me.username)
        print(f"\n🤖 Telegram bot is running: @{me.username}")
        print("You can now chat with the agent on Telegram!\n")

    async def _post_shutdown(self, application: Application):
        await self.runtime.aclose()
        logger.info("Telegram bot stopped")

    def run(self):
        """Poll until interrupted; SIGINT/SIGTERM trigger a clean shutdown"""
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)
