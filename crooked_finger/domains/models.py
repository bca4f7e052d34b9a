"""
Domain models shared by the services layer.

These are the app-side shapes; wire payloads live in
`crooked_finger.infrastructure.graphql.responses`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class PatternDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class MessageType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def map_difficulty(level: str | None) -> PatternDifficulty | None:
    """Backend difficulty string to enum; unknown or missing -> None."""
    if not level:
        return None
    try:
        return PatternDifficulty(level.strip().lower())
    except ValueError:
        return None


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(raw: str | None) -> datetime:
    """ISO-8601 from the backend; falls back to now when missing or malformed."""
    if not raw:
        return _now()
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return _now()


@dataclass
class Pattern:
    name: str
    notation: str
    id: str = field(default_factory=_new_id)
    description: str | None = None
    difficulty: PatternDifficulty | None = PatternDifficulty.BEGINNER
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    instructions: str | None = None
    materials: str | None = None
    estimated_time: str | None = None
    video_id: str | None = None
    thumbnail_url: str | None = None
    # Transport form (base64 strings); decode through ImageCodec to render.
    images: list[str] = field(default_factory=list)
    is_favorite: bool = False
    views: int = 0
    downloads: int = 0
    created_at: datetime = field(default_factory=_now)
    backend_id: int | None = None


@dataclass
class Project:
    name: str
    pattern: str
    id: str = field(default_factory=_new_id)
    description: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    difficulty: PatternDifficulty = PatternDifficulty.BEGINNER
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    notes: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    is_favorite: bool = False
    backend_id: int | None = None


@dataclass
class ChatMessage:
    type: MessageType
    content: str
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)
    is_pattern: bool = False
    diagram_svg: str | None = None
    diagram_png: str | None = None


@dataclass
class Conversation:
    title: str
    messages: list[ChatMessage] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def last_message(self) -> ChatMessage | None:
        return self.messages[-1] if self.messages else None


# Extracted field name -> PatternDraft attribute.
_DRAFT_FIELDS = {
    "name": "name",
    "notation": "notation",
    "instructions": "instructions",
    "difficulty": "difficulty",
    "materials": "materials",
    "time": "estimated_time",
}


@dataclass
class PatternDraft:
    """Editable form state for a pattern being saved from a chat reply."""

    name: str = ""
    notation: str = ""
    instructions: str = ""
    difficulty: str = ""
    materials: str = ""
    estimated_time: str = ""

    def apply(self, extracted: dict[str, str]) -> list[str]:
        """
        Copy extracted values onto the draft.

        Only fields present in `extracted` are touched, so a miss never wipes
        a value the user already has. Returns the attributes that changed.
        """
        changed: list[str] = []
        for key, attr in _DRAFT_FIELDS.items():
            value = extracted.get(key)
            if value and getattr(self, attr) != value:
                setattr(self, attr, value)
                changed.append(attr)
        return changed

    def to_input(self) -> dict[str, Any]:
        """Fields for a createProject input."""
        difficulty = map_difficulty(self.difficulty)
        return {
            "name": self.name,
            "patternText": self.notation,
            "translatedText": self.instructions or None,
            "difficultyLevel": difficulty.value if difficulty else None,
            "estimatedTime": self.estimated_time or None,
            "yarnWeight": self.materials or None,
        }
