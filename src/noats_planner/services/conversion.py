"""Convert shopper recipes into lower-carb versions."""

import base64
import logging
from dataclasses import dataclass, replace

from noats_planner.adapters.recipe_page_client import RecipePageClient
from noats_planner.domain.errors import InvalidInputError, UnsupportedInputError
from noats_planner.domain.requests import ConversionInput, UploadedFile
from noats_planner.domain.results import ConversionResult
from noats_planner.services.generation import (
    GenerationService,
    detect_mime_type,
    to_data_url,
)
from noats_planner.services.prompts import build_conversion_prompts
from noats_planner.services.sanitizer import sanitize_conversion_response

_logger = logging.getLogger(__name__)


@dataclass
class ConversionService:
    """Collect recipe text from every input, then run the conversion call."""

    generation: GenerationService
    page_client: RecipePageClient
    max_images: int = 4

    async def convert(self, conversion_input: ConversionInput) -> ConversionResult:
        """Validate inputs, gather recipe text, and convert it."""
        text = (conversion_input.recipe_text or "").strip()
        url = (conversion_input.recipe_url or "").strip()
        images, documents = _split_files(conversion_input.files)

        if not text and not url and not conversion_input.files:
            raise InvalidInputError(
                "Please paste a recipe, upload a photo of it, or share a recipe link."
            )
        if not text and not url and not images:
            raise UnsupportedInputError(
                "We can't read PDF or document uploads yet. Please paste the "
                "recipe text or upload a photo of the recipe instead."
            )
        if len(images) > self.max_images:
            raise InvalidInputError(
                f"Please upload at most {self.max_images} images per recipe."
            )
        image_urls = [to_data_url(image) for image in images]
        if documents:
            _logger.info("Ignoring %s non-image upload(s)", len(documents))

        sections = [text] if text else []
        if url:
            page_text = await self._fetch_page(url)
            if page_text:
                sections.append(f"Recipe from {url}:\n{page_text}")
        extracted = await self.generation.extract_text_from_images(image_urls)
        if extracted:
            sections.append(extracted)

        recipe_text = "\n\n".join(sections)
        if not recipe_text:
            raise InvalidInputError(
                "We couldn't find any recipe text in what you sent. "
                "Please paste the recipe text instead."
            )

        prompts = build_conversion_prompts(
            replace(conversion_input, recipe_text=recipe_text)
        )
        raw_text = await self.generation.generate(prompts, json_mode=True)
        return sanitize_conversion_response(raw_text)

    async def _fetch_page(self, url: str) -> str:
        try:
            return await self.page_client.fetch_text(url)
        except Exception:
            _logger.warning("Failed to fetch recipe page %s", url, exc_info=True)
            return ""


def _split_files(
    files: list[UploadedFile],
) -> tuple[list[UploadedFile], list[UploadedFile]]:
    """Split uploads into images and everything else."""
    images: list[UploadedFile] = []
    documents: list[UploadedFile] = []
    for upload in files:
        if _mime_type(upload).startswith("image/"):
            images.append(upload)
        else:
            documents.append(upload)
    return images, documents


def _mime_type(upload: UploadedFile) -> str:
    if upload.mime_type:
        return upload.mime_type.lower()
    if upload.data.startswith("data:"):
        return upload.data[5:].split(";", 1)[0].lower()
    if upload.filename and upload.filename.lower().endswith(".pdf"):
        return "application/pdf"
    head = upload.data[:24]
    try:
        return detect_mime_type(
            base64.b64decode(head + "=" * (-len(head) % 4)),
            default="application/octet-stream",
        )
    except ValueError:
        return "application/octet-stream"
