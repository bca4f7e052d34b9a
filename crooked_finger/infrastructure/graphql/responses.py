"""
Typed success payloads for each operation.

Every class exposes `from_dict`, which raises KeyError/TypeError/ValueError on a
shape mismatch; the client turns those into DecodeError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_MISSING = object()


def _get(d: dict[str, Any], key: str, kind: type | tuple[type, ...], optional: bool = False) -> Any:
    if not isinstance(d, dict):
        raise TypeError(f"Expected object while reading '{key}', got {type(d).__name__}")
    value = d.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise KeyError(key)
    kinds = kind if isinstance(kind, tuple) else (kind,)
    # bool is an int subclass; never accept it where a number is expected.
    if isinstance(value, bool) and bool not in kinds:
        raise TypeError(f"Field '{key}' expected {kind}, got bool")
    if not isinstance(value, kind):
        raise TypeError(f"Field '{key}' expected {kind}, got {type(value).__name__}")
    return value


def _obj(d: dict[str, Any], key: str) -> dict[str, Any]:
    return _get(d, key, dict)


# --- Auth ---

@dataclass(frozen=True)
class User:
    id: int | str
    email: str
    created_at: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "User":
        return cls(
            id=_get(d, "id", (int, str)),
            email=_get(d, "email", str),
            created_at=_get(d, "createdAt", str, optional=True),
        )


@dataclass(frozen=True)
class AuthPayload:
    user: User
    access_token: str
    token_type: str = "bearer"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "AuthPayload":
        return cls(
            user=User.from_dict(_obj(d, "user")),
            access_token=_get(d, "accessToken", str),
            token_type=_get(d, "tokenType", str, optional=True) or "bearer",
        )


@dataclass(frozen=True)
class LoginData:
    login: AuthPayload

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "LoginData":
        return cls(login=AuthPayload.from_dict(_obj(d, "login")))


@dataclass(frozen=True)
class RegisterData:
    register: AuthPayload

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "RegisterData":
        return cls(register=AuthPayload.from_dict(_obj(d, "register")))


# --- Assistant ---

@dataclass(frozen=True)
class ChatResponse:
    message: str
    has_pattern: bool
    diagram_svg: str | None = None
    diagram_png: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ChatResponse":
        return cls(
            message=_get(d, "message", str),
            has_pattern=_get(d, "hasPattern", bool),
            diagram_svg=_get(d, "diagramSvg", str, optional=True),
            diagram_png=_get(d, "diagramPng", str, optional=True),
        )


@dataclass(frozen=True)
class ChatWithAssistantData:
    chat_with_assistant_enhanced: ChatResponse

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ChatWithAssistantData":
        return cls(chat_with_assistant_enhanced=ChatResponse.from_dict(_obj(d, "chatWithAssistantEnhanced")))


@dataclass(frozen=True)
class YouTubeTranscriptResponse:
    success: bool
    video_id: str | None = None
    transcript: str | None = None
    word_count: int | None = None
    language: str | None = None
    thumbnail_url: str | None = None
    thumbnail_url_hq: str | None = None
    error: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "YouTubeTranscriptResponse":
        return cls(
            success=_get(d, "success", bool),
            video_id=_get(d, "videoId", str, optional=True),
            transcript=_get(d, "transcript", str, optional=True),
            word_count=_get(d, "wordCount", int, optional=True),
            language=_get(d, "language", str, optional=True),
            thumbnail_url=_get(d, "thumbnailUrl", str, optional=True),
            thumbnail_url_hq=_get(d, "thumbnailUrlHq", str, optional=True),
            error=_get(d, "error", str, optional=True),
        )


@dataclass(frozen=True)
class FetchYoutubeTranscriptData:
    fetch_youtube_transcript: YouTubeTranscriptResponse

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "FetchYoutubeTranscriptData":
        return cls(fetch_youtube_transcript=YouTubeTranscriptResponse.from_dict(_obj(d, "fetchYoutubeTranscript")))


@dataclass(frozen=True)
class ExtractedPatternResponse:
    success: bool
    pattern_name: str | None = None
    pattern_notation: str | None = None
    pattern_instructions: str | None = None
    difficulty_level: str | None = None
    materials: str | None = None
    estimated_time: str | None = None
    video_id: str | None = None
    thumbnail_url: str | None = None
    error: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ExtractedPatternResponse":
        return cls(
            success=_get(d, "success", bool),
            pattern_name=_get(d, "patternName", str, optional=True),
            pattern_notation=_get(d, "patternNotation", str, optional=True),
            pattern_instructions=_get(d, "patternInstructions", str, optional=True),
            difficulty_level=_get(d, "difficultyLevel", str, optional=True),
            materials=_get(d, "materials", str, optional=True),
            estimated_time=_get(d, "estimatedTime", str, optional=True),
            video_id=_get(d, "videoId", str, optional=True),
            thumbnail_url=_get(d, "thumbnailUrl", str, optional=True),
            error=_get(d, "error", str, optional=True),
        )


@dataclass(frozen=True)
class ExtractPatternData:
    extract_pattern_from_transcript: ExtractedPatternResponse

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ExtractPatternData":
        return cls(
            extract_pattern_from_transcript=ExtractedPatternResponse.from_dict(
                _obj(d, "extractPatternFromTranscript")
            )
        )


# --- Projects ---

@dataclass(frozen=True)
class ProjectResponse:
    id: int
    name: str
    is_completed: bool = False
    pattern_text: str | None = None
    translated_text: str | None = None
    difficulty_level: str | None = None
    estimated_time: str | None = None
    yarn_weight: str | None = None
    hook_size: str | None = None
    notes: str | None = None
    image_data: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ProjectResponse":
        return cls(
            id=_get(d, "id", int),
            name=_get(d, "name", str),
            is_completed=bool(_get(d, "isCompleted", bool, optional=True)),
            pattern_text=_get(d, "patternText", str, optional=True),
            translated_text=_get(d, "translatedText", str, optional=True),
            difficulty_level=_get(d, "difficultyLevel", str, optional=True),
            estimated_time=_get(d, "estimatedTime", str, optional=True),
            yarn_weight=_get(d, "yarnWeight", str, optional=True),
            hook_size=_get(d, "hookSize", str, optional=True),
            notes=_get(d, "notes", str, optional=True),
            image_data=_get(d, "imageData", str, optional=True),
            created_at=_get(d, "createdAt", str, optional=True),
            updated_at=_get(d, "updatedAt", str, optional=True),
        )


@dataclass(frozen=True)
class GetProjectsData:
    projects: list[ProjectResponse]

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "GetProjectsData":
        return cls(projects=[ProjectResponse.from_dict(p) for p in _get(d, "projects", list)])


@dataclass(frozen=True)
class GetProjectData:
    project: ProjectResponse

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "GetProjectData":
        return cls(project=ProjectResponse.from_dict(_obj(d, "project")))


@dataclass(frozen=True)
class CreateProjectData:
    create_project: ProjectResponse

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "CreateProjectData":
        return cls(create_project=ProjectResponse.from_dict(_obj(d, "createProject")))


@dataclass(frozen=True)
class UpdateProjectData:
    update_project: ProjectResponse

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "UpdateProjectData":
        return cls(update_project=ProjectResponse.from_dict(_obj(d, "updateProject")))


@dataclass(frozen=True)
class DeleteProjectData:
    delete_project: bool

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "DeleteProjectData":
        return cls(delete_project=_get(d, "deleteProject", bool))


# --- Usage ---

_PRIORITY_LABELS = {1: "Premium", 2: "Fast", 3: "Standard", 4: "Efficient"}


@dataclass(frozen=True)
class ModelUsageStats:
    model_name: str
    current_usage: int
    daily_limit: int
    remaining: int
    percentage_used: float
    priority: int
    use_case: str
    total_input_characters: int = 0
    total_output_characters: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ModelUsageStats":
        return cls(
            model_name=_get(d, "modelName", str),
            current_usage=_get(d, "currentUsage", int),
            daily_limit=_get(d, "dailyLimit", int),
            remaining=_get(d, "remaining", int),
            percentage_used=float(_get(d, "percentageUsed", (int, float))),
            priority=_get(d, "priority", int),
            use_case=_get(d, "useCase", str),
            total_input_characters=_get(d, "totalInputCharacters", int, optional=True) or 0,
            total_output_characters=_get(d, "totalOutputCharacters", int, optional=True) or 0,
            total_input_tokens=_get(d, "totalInputTokens", int, optional=True) or 0,
            total_output_tokens=_get(d, "totalOutputTokens", int, optional=True) or 0,
        )

    @property
    def display_name(self) -> str:
        """'gemini-2.5-flash-lite' -> '2.5 Flash Lite'."""
        words = self.model_name.replace("gemini-", "").replace("-", " ").split()
        return " ".join(w[:1].upper() + w[1:] for w in words)

    @property
    def priority_label(self) -> str:
        return _PRIORITY_LABELS.get(self.priority, "Unknown")


@dataclass(frozen=True)
class AIUsageDashboard:
    total_requests_today: int
    total_remaining: int
    models: list[ModelUsageStats]

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "AIUsageDashboard":
        return cls(
            total_requests_today=_get(d, "totalRequestsToday", int),
            total_remaining=_get(d, "totalRemaining", int),
            models=[ModelUsageStats.from_dict(m) for m in _get(d, "models", list)],
        )


@dataclass(frozen=True)
class AIUsageDashboardData:
    ai_usage_dashboard: AIUsageDashboard

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "AIUsageDashboardData":
        return cls(ai_usage_dashboard=AIUsageDashboard.from_dict(_obj(d, "aiUsageDashboard")))
