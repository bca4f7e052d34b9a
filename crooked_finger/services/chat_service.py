"""
Assistant chat: message history plus pattern-field extraction from replies.
"""

from __future__ import annotations

from crooked_finger.domains.extraction.response_extractor import extract
from crooked_finger.domains.models import ChatMessage, Conversation, MessageType, PatternDraft
from crooked_finger.infrastructure.graphql import operations
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.errors import GraphQLClientError
from crooked_finger.infrastructure.graphql.responses import ChatWithAssistantData
from crooked_finger.utils.logger import get_logger

logger = get_logger()

ASSISTANT_CONTEXT = "crochet_pattern_assistant"


class ChatService:
    def __init__(self, client: GraphQLClient, context: str = ASSISTANT_CONTEXT) -> None:
        self._client = client
        self._context = context
        self.messages: list[ChatMessage] = []
        self.error_message: str | None = None

    def send_message(self, text: str) -> ChatMessage:
        """
        Send `text` to the assistant and append both sides to the history.

        Client failures do not raise: the reply is an apology message carrying
        the error and `error_message` is set.
        """
        self.messages.append(ChatMessage(type=MessageType.USER, content=text))
        self.error_message = None

        try:
            data = self._client.execute(
                operations.CHAT_WITH_ASSISTANT_ENHANCED,
                {"message": text, "context": self._context},
                ChatWithAssistantData,
            )
        except GraphQLClientError as e:
            logger.warning("Assistant chat failed (%s): %s", e.kind.value, e)
            self.error_message = str(e)
            reply = ChatMessage(
                type=MessageType.ASSISTANT,
                content=f"Sorry, I'm having trouble responding right now. Please try again. ({e})",
            )
            self.messages.append(reply)
            return reply

        response = data.chat_with_assistant_enhanced
        reply = ChatMessage(
            type=MessageType.ASSISTANT,
            content=response.message,
            is_pattern=response.has_pattern,
            diagram_svg=response.diagram_svg,
            diagram_png=response.diagram_png,
        )
        self.messages.append(reply)
        return reply

    def clear_messages(self) -> None:
        self.messages = []
        self.error_message = None

    def load_conversation(self, conversation: Conversation) -> None:
        self.messages = list(conversation.messages)

    @staticmethod
    def extract_pattern_fields(message: ChatMessage) -> dict[str, str]:
        """Structured fields found in an assistant reply ({} when none)."""
        return extract(message.content)

    def fill_draft(self, draft: PatternDraft, message: ChatMessage) -> list[str]:
        """Update `draft` from `message`; untouched fields keep their values."""
        changed = draft.apply(self.extract_pattern_fields(message))
        logger.debug("Draft fields updated from reply: %s", changed)
        return changed
