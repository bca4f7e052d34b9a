"""
Projects and the pattern library.

Both are backed by the same `projects` collection on the server: a pattern is
a project that is not completed and has no notes. Images travel in the
`imageData` field as a JSON array of base64 strings.
"""

from __future__ import annotations

from typing import Any, Iterable

from PIL import Image

from crooked_finger.domains.models import (
    Pattern,
    PatternDifficulty,
    Project,
    ProjectStatus,
    map_difficulty,
    parse_timestamp,
)
from crooked_finger.infrastructure.graphql import operations
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.errors import GraphQLClientError
from crooked_finger.infrastructure.graphql.responses import (
    CreateProjectData,
    DeleteProjectData,
    GetProjectData,
    GetProjectsData,
    ProjectResponse,
    UpdateProjectData,
)
from crooked_finger.infrastructure.media.image_codec import (
    ImageCodec,
    decode_image_list,
    encode_image_list,
)
from crooked_finger.services.auth_service import AuthService
from crooked_finger.utils.logger import get_logger

logger = get_logger()


def project_from_response(resp: ProjectResponse) -> Project:
    return Project(
        name=resp.name,
        description=resp.notes or "",
        pattern=resp.pattern_text or "",
        status=ProjectStatus.COMPLETED if resp.is_completed else ProjectStatus.IN_PROGRESS,
        difficulty=map_difficulty(resp.difficulty_level) or PatternDifficulty.BEGINNER,
        images=decode_image_list(resp.image_data),
        notes=resp.notes,
        created_at=parse_timestamp(resp.created_at),
        updated_at=parse_timestamp(resp.updated_at or resp.created_at),
        backend_id=resp.id,
    )


def pattern_from_response(resp: ProjectResponse) -> Pattern:
    materials = None
    if resp.yarn_weight is not None:
        materials = f"Yarn: {resp.yarn_weight}, Hook: {resp.hook_size or ''}"
    return Pattern(
        name=resp.name,
        notation=resp.pattern_text or "",
        difficulty=map_difficulty(resp.difficulty_level),
        instructions=resp.translated_text,
        materials=materials,
        estimated_time=resp.estimated_time,
        images=decode_image_list(resp.image_data),
        created_at=parse_timestamp(resp.created_at),
        backend_id=resp.id,
    )


def is_pattern_template(resp: ProjectResponse) -> bool:
    """Saved reference patterns: not completed and without notes."""
    return not resp.is_completed and not resp.notes


class ProjectService:
    def __init__(
        self,
        client: GraphQLClient,
        codec: ImageCodec,
        auth: AuthService | None = None,
    ) -> None:
        self._client = client
        self._codec = codec
        self._auth = auth
        self.projects: list[Project] = []
        self.patterns: list[Pattern] = []
        self.error_message: str | None = None

    def _fail(self, action: str, e: GraphQLClientError) -> None:
        self.error_message = f"Failed to {action}: {e}"
        logger.warning("Failed to %s (%s): %s", action, e.kind.value, e)

    def _fetch_all(self) -> list[ProjectResponse]:
        data: GetProjectsData = self._client.execute(operations.GET_PROJECTS, None, GetProjectsData)
        return data.projects

    # --- Projects ---

    def fetch_projects(self) -> list[Project]:
        self.error_message = None
        try:
            responses = self._fetch_all()
        except GraphQLClientError as e:
            self._fail("load projects", e)
            return self.projects
        self.projects = [project_from_response(r) for r in responses]
        return self.projects

    def get_project(self, project_id: int) -> Project | None:
        self.error_message = None
        try:
            data = self._client.execute(operations.GET_PROJECT, {"projectId": project_id}, GetProjectData)
        except GraphQLClientError as e:
            self._fail("load project", e)
            return None
        return project_from_response(data.project)

    def create_project(
        self,
        name: str,
        pattern: str,
        difficulty: PatternDifficulty | None = None,
        notes: str | None = None,
    ) -> Project | None:
        self.error_message = None
        if self._auth is not None and not self._auth.is_authenticated:
            self.error_message = "Not authenticated. Please login first."
            logger.warning("create_project called without an auth token")
            return None

        project_input: dict[str, Any] = {
            "name": name,
            "patternText": pattern,
            "difficultyLevel": difficulty.value if difficulty else None,
            "estimatedTime": None,
            "yarnWeight": None,
            "hookSize": None,
            "notes": notes,
        }
        try:
            data = self._client.execute(operations.CREATE_PROJECT, {"input": project_input}, CreateProjectData)
        except GraphQLClientError as e:
            self._fail("create project", e)
            return None

        project = project_from_response(data.create_project)
        project.status = ProjectStatus.PLANNING
        self.projects.insert(0, project)
        return project

    def update_project(
        self,
        project_id: int,
        name: str | None = None,
        pattern: str | None = None,
        difficulty: PatternDifficulty | None = None,
        notes: str | None = None,
        is_completed: bool | None = None,
    ) -> Project | None:
        """Send only the fields that were given."""
        self.error_message = None
        update: dict[str, Any] = {}
        if name is not None:
            update["name"] = name
        if pattern is not None:
            update["patternText"] = pattern
        if difficulty is not None:
            update["difficultyLevel"] = difficulty.value
        if notes is not None:
            update["notes"] = notes
        if is_completed is not None:
            update["isCompleted"] = is_completed

        try:
            data = self._client.execute(
                operations.UPDATE_PROJECT,
                {"projectId": project_id, "input": update},
                UpdateProjectData,
            )
        except GraphQLClientError as e:
            self._fail("update project", e)
            return None

        updated = project_from_response(data.update_project)
        for i, existing in enumerate(self.projects):
            if existing.backend_id == project_id:
                updated.id = existing.id
                updated.is_favorite = existing.is_favorite
                if not data.update_project.is_completed:
                    updated.status = existing.status
                self.projects[i] = updated
                break
        return updated

    def delete_project(self, project_id: int) -> bool:
        self.error_message = None
        try:
            data = self._client.execute(operations.DELETE_PROJECT, {"projectId": project_id}, DeleteProjectData)
        except GraphQLClientError as e:
            self._fail("delete project", e)
            return False
        if not data.delete_project:
            self.error_message = "Failed to delete project"
            return False
        self.projects = [p for p in self.projects if p.backend_id != project_id]
        self.patterns = [p for p in self.patterns if p.backend_id != project_id]
        return True

    def project_images(self, project: Project | Pattern) -> list[Image.Image]:
        """Decoded images for rendering; undecodable entries are skipped."""
        return self._codec.decode_all(encode_image_list(project.images))

    # --- Pattern library ---

    def fetch_patterns(self) -> list[Pattern]:
        self.error_message = None
        try:
            responses = self._fetch_all()
        except GraphQLClientError as e:
            self._fail("load patterns", e)
            return self.patterns
        self.patterns = [pattern_from_response(r) for r in responses if is_pattern_template(r)]
        return self.patterns

    def save_pattern(
        self,
        name: str,
        notation: str,
        instructions: str | None = None,
        difficulty: PatternDifficulty | None = None,
        materials: str | None = None,
        estimated_time: str | None = None,
        images: Iterable[Image.Image] | None = None,
        encoded_images: list[str] | None = None,
    ) -> Pattern | None:
        """
        Create a pattern entry.

        `images` are compressed through the codec; `encoded_images` are already
        in transport form and are sent as-is. Either ends up in `imageData`.
        """
        self.error_message = None
        transport: list[str] = list(encoded_images or [])
        if images is not None:
            transport.extend(decode_image_list(self._codec.encode_all(images)))
        image_data = encode_image_list(transport) if transport else None

        pattern_input: dict[str, Any] = {
            "name": name,
            "patternText": notation,
            "translatedText": instructions,
            "difficultyLevel": difficulty.value if difficulty else None,
            "estimatedTime": estimated_time,
            "yarnWeight": materials,
            "hookSize": None,
            "notes": None,
            "imageData": image_data,
        }
        logger.info(
            "Saving pattern %r (notation %d chars, %d image(s))", name, len(notation), len(transport)
        )
        try:
            data = self._client.execute(operations.CREATE_PROJECT, {"input": pattern_input}, CreateProjectData)
        except GraphQLClientError as e:
            self._fail("save pattern", e)
            return None

        pattern = pattern_from_response(data.create_project)
        # Keep the caller's materials text; the backend only stores yarn weight.
        pattern.materials = materials
        self.patterns.insert(0, pattern)
        return pattern

    def update_pattern(
        self,
        pattern_id: int,
        pattern_text: str | None = None,
        translated_text: str | None = None,
        images: Iterable[Image.Image] | None = None,
    ) -> Pattern | None:
        """
        Update a library pattern, sending only the fields that were given.

        `images` replaces the stored set; pass an empty list to clear it. The
        local entry is rebuilt from the server copy but keeps its local id,
        favorite flag and creation time.
        """
        self.error_message = None
        update: dict[str, Any] = {}
        if pattern_text is not None:
            update["patternText"] = pattern_text
        if translated_text is not None:
            update["translatedText"] = translated_text
        if images is not None:
            update["imageData"] = self._codec.encode_all(images)

        try:
            data = self._client.execute(
                operations.UPDATE_PROJECT,
                {"projectId": pattern_id, "input": update},
                UpdateProjectData,
            )
        except GraphQLClientError as e:
            self._fail("update pattern", e)
            return None

        updated = pattern_from_response(data.update_project)
        for i, existing in enumerate(self.patterns):
            if existing.backend_id == pattern_id:
                updated.id = existing.id
                updated.is_favorite = existing.is_favorite
                updated.created_at = existing.created_at
                self.patterns[i] = updated
                break
        return updated

    def create_project_from_pattern(self, pattern: Pattern, project_name: str | None = None) -> Project | None:
        self.error_message = None
        project_input: dict[str, Any] = {
            "name": project_name or f"{pattern.name} - My Project",
            "patternText": pattern.notation,
            "translatedText": pattern.instructions,
            "difficultyLevel": pattern.difficulty.value if pattern.difficulty else None,
            "estimatedTime": pattern.estimated_time,
            "notes": f"Created from pattern: {pattern.name}",
            "imageData": encode_image_list(pattern.images) if pattern.images else None,
        }
        try:
            data = self._client.execute(operations.CREATE_PROJECT, {"input": project_input}, CreateProjectData)
        except GraphQLClientError as e:
            self._fail("create project from pattern", e)
            return None
        project = project_from_response(data.create_project)
        self.projects.insert(0, project)
        return project
