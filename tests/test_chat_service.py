"""
Tests for ChatService: message history, failure replies, field extraction.
"""

from __future__ import annotations

from unittest.mock import patch

import requests

from conftest import make_response
from crooked_finger.domains.models import ChatMessage, Conversation, MessageType, PatternDraft
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.services.chat_service import ASSISTANT_CONTEXT, ChatService

POST = "crooked_finger.infrastructure.graphql.client.requests.post"

REPLY = (
    "Here's a simple one!\n\n"
    "**NAME:** Granny Square\n"
    "**NOTATION:** ch4, join; 3 dc clusters\n"
    "**DIFFICULTY:** beginner\n"
)


def _chat_body(message: str = REPLY, has_pattern: bool = True) -> dict:
    return {
        "data": {
            "chatWithAssistantEnhanced": {
                "message": message,
                "diagramSvg": "<svg/>",
                "diagramPng": None,
                "hasPattern": has_pattern,
            }
        }
    }


def test_send_message_appends_both_sides(client: GraphQLClient) -> None:
    """Test a chat reply appends the user and assistant turns."""
    chat = ChatService(client)
    with patch(POST, return_value=make_response(200, _chat_body())) as mock_post:
        reply = chat.send_message("Give me a granny square")

    assert [m.type for m in chat.messages] == [MessageType.USER, MessageType.ASSISTANT]
    assert reply.is_pattern
    assert reply.diagram_svg == "<svg/>"
    assert chat.error_message is None
    assert mock_post.call_args.kwargs["json"]["variables"] == {
        "message": "Give me a granny square",
        "context": ASSISTANT_CONTEXT,
    }


def test_failure_appends_apology(client: GraphQLClient) -> None:
    """Test a failed send appends an apology instead of raising."""
    chat = ChatService(client)
    with patch(POST, side_effect=requests.ConnectionError("offline")):
        reply = chat.send_message("hello")

    assert reply.type is MessageType.ASSISTANT
    assert reply.content.startswith("Sorry, I'm having trouble responding right now.")
    assert chat.error_message
    assert len(chat.messages) == 2


def test_extract_fields_from_reply() -> None:
    """Test pattern fields are pulled out of an assistant reply."""
    message = ChatMessage(type=MessageType.ASSISTANT, content=REPLY)
    assert ChatService.extract_pattern_fields(message) == {
        "name": "Granny Square",
        "notation": "ch4, join; 3 dc clusters",
        "difficulty": "beginner",
    }


def test_fill_draft_keeps_unmatched_fields(client: GraphQLClient) -> None:
    """Test filling a draft leaves fields the reply does not mention."""
    chat = ChatService(client)
    draft = PatternDraft(materials="cotton", estimated_time="1 hour")
    changed = chat.fill_draft(draft, ChatMessage(type=MessageType.ASSISTANT, content=REPLY))
    assert set(changed) == {"name", "notation", "difficulty"}
    assert draft.materials == "cotton"
    assert draft.estimated_time == "1 hour"


def test_clear_and_load(client: GraphQLClient) -> None:
    """Test clearing the chat and loading a saved conversation."""
    chat = ChatService(client)
    conversation = Conversation(
        title="Hats",
        messages=[ChatMessage(type=MessageType.USER, content="beanie?")],
    )
    chat.load_conversation(conversation)
    assert chat.messages[0].content == "beanie?"
    assert conversation.last_message is not None

    chat.clear_messages()
    assert chat.messages == []
    assert len(conversation.messages) == 1
