"""Shopify Admin REST API client."""

from dataclasses import dataclass

import httpx

from noats_planner.services.sync import CrmClient


@dataclass
class HttpxShopifyClient(CrmClient):
    """Shopify client implemented with httpx."""

    store: str
    access_token: str
    http_client: httpx.AsyncClient
    api_version: str = "2024-10"

    @classmethod
    def create(
        cls, store: str, access_token: str, api_version: str = "2024-10"
    ) -> "HttpxShopifyClient":
        """Create a Shopify client with a managed httpx session."""
        return cls(
            store=store,
            access_token=access_token,
            http_client=httpx.AsyncClient(),
            api_version=api_version,
        )

    @property
    def base_url(self) -> str:
        return f"https://{self.store}.myshopify.com/admin/api/{self.api_version}"

    def _headers(self) -> dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    async def find_customer(self, email: str) -> dict[str, object] | None:
        """Search customers by email and return the first match."""
        response = await self.http_client.get(
            f"{self.base_url}/customers/search.json",
            params={"query": f"email:{email}"},
            headers=self._headers(),
            timeout=10,
        )
        response.raise_for_status()
        customers = response.json().get("customers") or []
        return customers[0] if customers else None

    async def create_customer(self, email: str, tags: str) -> dict[str, object] | None:
        """Create a tagged customer."""
        response = await self.http_client.post(
            f"{self.base_url}/customers.json",
            json={"customer": {"email": email, "tags": tags}},
            headers=self._headers(),
            timeout=10,
        )
        response.raise_for_status()
        return response.json().get("customer")

    async def create_plan_record(self, fields: list[dict[str, str]]) -> str | None:
        """Create an ai_plan metaobject instance."""
        response = await self.http_client.post(
            f"{self.base_url}/metaobjects/ai_plan.json",
            json={"metaobject": {"type": "ai_plan", "fields": fields}},
            headers=self._headers(),
            timeout=10,
        )
        response.raise_for_status()
        metaobject = response.json().get("metaobject") or {}
        record_id = metaobject.get("id")
        return str(record_id) if record_id else None

    async def attach_plan(
        self, customer_id: object, tags: str, plan_record_id: str
    ) -> None:
        """Attach the metaobject to the customer via the ai.plan metafield."""
        response = await self.http_client.put(
            f"{self.base_url}/customers/{customer_id}.json",
            json={
                "customer": {
                    "id": customer_id,
                    "tags": tags,
                    "metafields": [
                        {
                            "namespace": "ai",
                            "key": "plan",
                            "type": "metaobject_reference",
                            "value": plan_record_id,
                        }
                    ],
                }
            },
            headers=self._headers(),
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
