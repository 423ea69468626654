"""Fetch visible text from recipe web pages."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from bs4 import BeautifulSoup

MAX_PAGE_CHARS = 20_000


class RecipePageClient(Protocol):
    """Interface for downloading recipe pages as text."""

    async def fetch_text(self, url: str) -> str:
        """Return the readable text of a web page."""


@dataclass
class HttpxRecipePageClient(RecipePageClient):
    """Recipe page client using httpx and BeautifulSoup."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxRecipePageClient":
        """Create a page client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def fetch_text(self, url: str) -> str:
        """Download a page and strip markup, scripts, and styles."""
        response = await self.http_client.get(url, timeout=15)
        response.raise_for_status()
        return html_to_text(response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def html_to_text(html: str) -> str:
    """Return non-empty visible text lines, capped in length."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.extract()
    lines = [line for line in soup.get_text("\n", strip=True).splitlines() if line]
    return "\n".join(lines)[:MAX_PAGE_CHARS]
