import logging
from dataclasses import dataclass
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class Message:
    level: str
    text: str


class MessageChannel:
    """Caller-visible notifications, the place where recoverable failures surface."""

    def __init__(self, listener: Optional[Callable[[Message], None]] = None):
        self._messages: List[Message] = []
        self._listener = listener

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def clear(self) -> None:
        self._messages.clear()

    def notify(self, level: str, text: str) -> Message:
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown message level: {level}")
        message = Message(level, text)
        self._messages.append(message)
        logger.log(_LOG_LEVELS[level], text)
        if self._listener:
            self._listener(message)
        return message

    def info(self, text: str) -> Message:
        return self.notify("info", text)

    def success(self, text: str) -> Message:
        return self.notify("success", text)

    def warning(self, text: str) -> Message:
        return self.notify("warning", text)

    def error(self, text: str) -> Message:
        return self.notify("error", text)
