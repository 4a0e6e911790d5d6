from typing import FrozenSet, List, Optional

from lola.domain.session.session_registry import Session
from lola.infrastructure.observability.logging import agent_logger

TELEGRAM_MESSAGE_LIMIT = 4096
CHUNK_SIZE = 4000
CONTINUED_SUFFIX = "\n\n_(continued...)_"

CLEARED_MESSAGE = "✓ Conversation history cleared."
EMPTY_TASK_MESSAGE = "Please send me a text message with your task."
QUEUED_MESSAGE = "⏳ Still working on your previous task. This one is queued and will start when it finishes."

WELCOME_TEXT = (
    "🤖 *LoLa Agent Bot*\n\n"
    "I'm a web-capable agent that can browse the internet and interact with websites.\n\n"
    "*Commands:*\n"
    "/start - Show this message\n"
    "/clear - Clear conversation history\n"
    "/memory - Show memory stats\n"
    "/help - Show help\n\n"
    "Just send me a task and I'll do it!"
)

HELP_TEXT = (
    "*Available Commands:*\n\n"
    "/start - Welcome message\n"
    "/clear - Clear your conversation history\n"
    "/memory - Show how many messages are stored\n"
    "/help - Show this help\n\n"
    "*Examples:*\n"
    '• "Go to example.com and find the contact page"\n'
    '• "Search for Python asyncio tutorials on Google"\n'
    '• "Take a screenshot of the current page"'
)

COMMAND_ALIASES = {
    "/clear": "clear",
    "/reset": "clear",
    "/memory": "memory",
    "/stats": "memory",
    "/start": "start",
    "/help": "help",
}

CLI_COMMANDS: FrozenSet[str] = frozenset({"clear", "memory"})
CHAT_COMMANDS: FrozenSet[str] = frozenset({"clear", "memory", "start", "help"})


def parse_command(text: str, allowed: FrozenSet[str] = CHAT_COMMANDS) -> Optional[str]:
    """Canonical command name for ``text``, or None if it is a task"""

    stripped = text.strip()
    if not stripped.startswith("/"):
        return None

    # Telegram group chats send "/clear@BotName"
    token = stripped.split()[0].split("@")[0].lower()
    command = COMMAND_ALIASES.get(token)
    if command in allowed:
        return command
    return None


async def clear_history(session: Session) -> str:
    # Waits for a running job so its delta append cannot land after the clear
    async with session.job_lock:
        session.memory.clear()
    agent_logger.log_session_event(str(session.identity), "memory_cleared")
    return CLEARED_MESSAGE


async def memory_stats(session: Session) -> str:
    return f"Memory: {session.memory.count()} messages stored"


async def handle_command(command: str, session: Session) -> str:
    """Execute a parsed command and return the reply text"""

    if command == "clear":
        return await clear_history(session)
    if command == "memory":
        return await memory_stats(session)
    if command == "start":
        return WELCOME_TEXT
    if command == "help":
        return HELP_TEXT
    raise ValueError(f"Unknown command: {command}")


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT, chunk_size: int = CHUNK_SIZE) -> List[str]:
    """Split an outbound message into ordered chunks that fit the platform limit"""

    if len(text) <= limit:
        return [text]

    pieces = [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]
    return [
        piece + (CONTINUED_SUFFIX if index < len(pieces) - 1 else "")
        for index, piece in enumerate(pieces)
    ]
