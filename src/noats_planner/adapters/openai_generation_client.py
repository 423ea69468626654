"""OpenAI Responses API client for generation and image text extraction."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from noats_planner.services.generation import GenerationClient


@dataclass
class OpenAIGenerationClient(GenerationClient):
    """Generation client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    store: bool = False

    @classmethod
    def create(cls, api_key: str, store: bool = False) -> "OpenAIGenerationClient":
        """Create an OpenAI client that never retries on its own."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0), store=store)

    async def generate(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool,
    ) -> str | None:
        """Call OpenAI Responses API with system and user messages."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "store": self.store,
        }
        if json_mode:
            request_payload["text"] = {"format": {"type": "json_object"}}

        response = await self.client.responses.create(**request_payload)
        return response.output_text or None

    async def extract_text(
        self,
        *,
        model: str,
        prompt: str,
        image_data_urls: list[str],
    ) -> str | None:
        """Call OpenAI Responses API with image inputs, expecting plain text."""
        content: list[dict[str, str]] = [{"type": "input_text", "text": prompt}]
        content.extend(
            {"type": "input_image", "image_url": data_url}
            for data_url in image_data_urls
        )
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": content}],
            store=self.store,
        )
        return response.output_text or None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
