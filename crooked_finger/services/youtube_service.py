"""
YouTube transcript import: fetch a transcript, extract a pattern from it and
save the result (with the video thumbnail) to the pattern library.
"""

from __future__ import annotations

from typing import Iterable

import requests

from crooked_finger.domains.extraction.notation import split_notation_and_instructions
from crooked_finger.domains.models import Pattern, map_difficulty
from crooked_finger.infrastructure.graphql import operations
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.errors import GraphQLClientError
from crooked_finger.infrastructure.graphql.responses import (
    ExtractedPatternResponse,
    ExtractPatternData,
    FetchYoutubeTranscriptData,
    YouTubeTranscriptResponse,
)
from crooked_finger.infrastructure.media.image_codec import ImageCodec
from crooked_finger.services.project_service import ProjectService
from crooked_finger.utils.config import request_timeout_seconds
from crooked_finger.utils.logger import get_logger

logger = get_logger()

DEFAULT_PATTERN_NAME = "YouTube Pattern"


class YouTubeService:
    def __init__(self, client: GraphQLClient, codec: ImageCodec, timeout: float | None = None) -> None:
        self._client = client
        self._codec = codec
        self._timeout = timeout if timeout is not None else request_timeout_seconds()
        self.transcript_result: YouTubeTranscriptResponse | None = None
        self.extracted_pattern: ExtractedPatternResponse | None = None
        self.error_message: str | None = None

    def fetch_transcript(
        self,
        video_url: str,
        languages: Iterable[str] = ("en",),
    ) -> YouTubeTranscriptResponse | None:
        if not video_url or not video_url.strip():
            self.error_message = "Please enter a YouTube URL"
            return None

        self.error_message = None
        self.transcript_result = None
        self.extracted_pattern = None

        logger.info("Fetching YouTube transcript for %s", video_url)
        try:
            data = self._client.execute(
                operations.FETCH_YOUTUBE_TRANSCRIPT,
                {"videoUrl": video_url, "languages": list(languages)},
                FetchYoutubeTranscriptData,
            )
        except GraphQLClientError as e:
            self.error_message = f"Network error: {e}"
            logger.warning("Transcript fetch failed (%s): %s", e.kind.value, e)
            return None

        result = data.fetch_youtube_transcript
        if not result.success:
            self.error_message = result.error or "Failed to fetch transcript"
            logger.warning("Transcript service returned an error: %s", self.error_message)
            return None

        logger.info("Transcript fetched: video %s, %s words", result.video_id, result.word_count)
        self.transcript_result = result
        return result

    def extract_pattern(self) -> ExtractedPatternResponse | None:
        if self.transcript_result is None or not self.transcript_result.transcript:
            self.error_message = "Please fetch a transcript first"
            return None

        self.error_message = None
        self.extracted_pattern = None
        try:
            data = self._client.execute(
                operations.EXTRACT_PATTERN_FROM_TRANSCRIPT,
                {
                    "transcript": self.transcript_result.transcript,
                    "videoId": self.transcript_result.video_id,
                    "thumbnailUrl": self.transcript_result.thumbnail_url,
                },
                ExtractPatternData,
            )
        except GraphQLClientError as e:
            self.error_message = f"Network error: {e}"
            logger.warning("Pattern extraction failed (%s): %s", e.kind.value, e)
            return None

        result = data.extract_pattern_from_transcript
        if not result.success:
            self.error_message = result.error or "Failed to extract pattern"
            return None

        self.extracted_pattern = result
        return result

    def download_thumbnail(self, url: str) -> str | None:
        """Fetch a thumbnail and return it in transport form, or None."""
        try:
            response = requests.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Error downloading thumbnail %s: %s", url, e)
            return None
        return self._codec.encode_bytes(response.content)

    def save_pattern_to_library(self, projects: ProjectService) -> Pattern | None:
        """
        Save the extracted pattern through `projects`.

        The thumbnail is best-effort: a failed download still saves the
        pattern, just without an image.
        """
        pattern = self.extracted_pattern
        if pattern is None:
            return None

        encoded: list[str] = []
        thumbnail_url = self.transcript_result.thumbnail_url if self.transcript_result else None
        if thumbnail_url:
            thumbnail = self.download_thumbnail(thumbnail_url)
            if thumbnail is not None:
                encoded.append(thumbnail)
        else:
            logger.info("No thumbnail URL available for this video")

        notation, instructions = split_notation_and_instructions(
            pattern.pattern_notation, pattern.pattern_instructions
        )
        saved = projects.save_pattern(
            name=pattern.pattern_name or DEFAULT_PATTERN_NAME,
            notation=notation,
            instructions=instructions,
            difficulty=map_difficulty(pattern.difficulty_level),
            materials=pattern.materials,
            estimated_time=pattern.estimated_time,
            encoded_images=encoded,
        )
        if saved is None:
            self.error_message = projects.error_message
        return saved

    def reset(self) -> None:
        self.transcript_result = None
        self.extracted_pattern = None
        self.error_message = None
