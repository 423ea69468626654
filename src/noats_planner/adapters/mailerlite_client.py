"""MailerLite subscribers API client."""

from dataclasses import dataclass

import httpx

from noats_planner.services.sync import EmailClient

MAILERLITE_SUBSCRIBERS_URL = "https://connect.mailerlite.com/api/subscribers"


@dataclass
class HttpxMailerLiteClient(EmailClient):
    """MailerLite client implemented with httpx."""

    api_key: str
    group_id: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, group_id: str) -> "HttpxMailerLiteClient":
        """Create a MailerLite client with a managed httpx session."""
        return cls(api_key=api_key, group_id=group_id, http_client=httpx.AsyncClient())

    async def upsert_subscriber(self, email: str, fields: dict[str, str]) -> None:
        """Create or update a subscriber in the configured group."""
        response = await self.http_client.post(
            MAILERLITE_SUBSCRIBERS_URL,
            json={"email": email, "groups": [self.group_id], "fields": fields},
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
