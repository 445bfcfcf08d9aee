from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from invoice_swift.api_client import ApiClient
from invoice_swift.errors import ApiConnectionError, ApiError

logger = logging.getLogger(__name__)


WELCOME_MESSAGE = (
    "Hello! I'm your business assistant. Ask me about sales, customers, "
    "inventory or invoices."
)
SERVER_ERROR_REPLY = "Sorry, I encountered an error processing your request. Please try again."
CONNECTION_ERROR_REPLY = (
    "Sorry, I couldn't connect to the server. Please check your connection and try again."
)

QUICK_QUESTIONS = (
    "What's my total sales?",
    "How many customers do I have?",
    "Show me low stock items",
    "Show me recent invoices",
    "What's my financial summary?",
)


@dataclass
class ChatMessage:
    sender: str
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


class ChatConversation:
    """Relays questions to the backend assistant and keeps the transcript.

    Answering is the backend's job; failures become an apology message in
    the transcript instead of an exception.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self.messages: list[ChatMessage] = [ChatMessage("bot", WELCOME_MESSAGE)]

    def ask(self, query: str) -> ChatMessage:
        text = (query or "").strip()
        if not text:
            raise ValueError("Query must not be empty")
        self.messages.append(ChatMessage("user", text))

        try:
            data = self._client.chatbot.action("query", {"query": text})
            reply = data.get("response") if isinstance(data, dict) else None
            content = str(reply) if reply else SERVER_ERROR_REPLY
        except ApiError as exc:
            logger.warning("chatbot.query.failed", extra={"status_code": exc.status_code})
            content = SERVER_ERROR_REPLY
        except ApiConnectionError:
            logger.warning("chatbot.query.unreachable")
            content = CONNECTION_ERROR_REPLY

        answer = ChatMessage("bot", content)
        self.messages.append(answer)
        return answer
