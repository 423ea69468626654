"""Text generation and image text extraction through an LLM provider."""

import asyncio
import base64
import binascii
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Protocol

from noats_planner.domain.errors import InvalidInputError, UpstreamUnavailableError
from noats_planner.domain.requests import UploadedFile
from noats_planner.services.prompts import PromptPair, build_image_text_prompt

_logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    """Interface for the upstream model provider."""

    async def generate(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool,
    ) -> str | None:
        """Return the model's raw text reply."""

    async def extract_text(
        self,
        *,
        model: str,
        prompt: str,
        image_data_urls: list[str],
    ) -> str | None:
        """Return plain text read from the given images."""


@dataclass
class GenerationService:
    """Service that calls the provider with a timeout and maps failures."""

    client: GenerationClient
    text_model: str
    vision_model: str
    timeout_seconds: float = 60.0

    async def generate(self, prompts: PromptPair, *, json_mode: bool = True) -> str:
        """Run the main generation call and return non-empty raw text."""
        text = await self._call(
            self.client.generate(
                model=self.text_model,
                system_prompt=prompts.system,
                user_prompt=prompts.user,
                json_mode=json_mode,
            ),
            action="generate",
        )
        if not text or not text.strip():
            _logger.error("Model returned no content (model=%s)", self.text_model)
            raise UpstreamUnavailableError
        return text

    async def extract_text_from_images(
        self, data_urls: Sequence[str]
    ) -> str | None:
        """Read recipe text from image data URLs; skipped when there are none."""
        if not data_urls:
            return None
        text = await self._call(
            self.client.extract_text(
                model=self.vision_model,
                prompt=build_image_text_prompt(),
                image_data_urls=list(data_urls),
            ),
            action="extract_text",
        )
        if text is None:
            return None
        return text.strip() or None

    async def _call(self, call: Awaitable[str | None], *, action: str) -> str | None:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except TimeoutError as exc:
            _logger.error(
                "Model %s timed out after %ss", action, self.timeout_seconds
            )
            raise UpstreamUnavailableError from exc
        except Exception as exc:
            _logger.exception("Model %s failed", action)
            raise UpstreamUnavailableError from exc


def to_data_url(upload: UploadedFile) -> str:
    """Convert an uploaded image to a base64 data URL."""
    if upload.data.startswith("data:"):
        _, _, payload = upload.data.partition(",")
        _decode(upload, payload)
        return upload.data
    image_bytes = _decode(upload, upload.data)
    mime_type = upload.mime_type or detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _decode(upload: UploadedFile, payload: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        name = upload.filename or "image"
        raise InvalidInputError(
            f"We couldn't read {name}. Please upload it again."
        ) from exc


def detect_mime_type(file_bytes: bytes, default: str = "image/jpeg") -> str:
    """Infer a basic MIME type from file signatures."""
    if file_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if file_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if file_bytes[:4] == b"RIFF" and file_bytes[8:12] == b"WEBP":
        return "image/webp"
    if file_bytes.startswith(b"%PDF"):
        return "application/pdf"
    return default
