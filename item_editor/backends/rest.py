"""REST backend for registries exposing an ``/rest/items`` API."""

from typing import Any

import httpx
import structlog

from item_editor import functions
from item_editor.backend import Backend
from item_editor.errors import LoadError, WriteError
from item_editor.models import AggregationFunction, Item

logger = structlog.get_logger()


class RestBackend(Backend):
    """Backend talking to a home-automation server over HTTP."""

    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize REST backend.

        Args:
            url: Base URL of the server, without the ``/rest`` suffix
            token: Optional API token sent as a bearer token
            timeout: Request timeout in seconds
            client: Preconfigured HTTP client, mainly for tests
        """
        if not url:
            raise ValueError("REST url required")
        self.url = url.rstrip("/")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = client or httpx.Client(base_url=self.url, headers=headers, timeout=timeout)
        logger.debug("REST backend initialized", url=self.url)

    def _json_to_item(self, data: dict[str, Any]) -> Item:
        """Convert an item JSON object into an Item."""
        function = None
        raw_function = data.get("function")
        if raw_function and raw_function.get("name"):
            function = functions.encode(
                AggregationFunction(kind=raw_function["name"], params=tuple(raw_function.get("params") or ()))
            )

        return Item(
            name=data["name"],
            type=data.get("type", ""),
            group_type=data.get("groupType") or None,
            category=data.get("category") or None,
            label=data.get("label") or "",
            tags=data.get("tags") or [],
            group_names=data.get("groupNames") or [],
            function=function,
        )

    def _item_to_json(self, item: Item) -> dict[str, Any]:
        """Convert an Item into the JSON object the server expects."""
        data: dict[str, Any] = {
            "type": item.type,
            "name": item.name,
            "label": item.label,
            "category": item.category,
            "tags": item.tags,
            "groupNames": item.group_names,
        }
        if item.group_type:
            data["groupType"] = item.group_type
        function = functions.decode(item.function)
        if function:
            data["function"] = {"name": function.kind}
            if function.params:
                data["function"]["params"] = list(function.params)
        return data

    def list_items(self, recursive: bool = False) -> list[Item]:
        """List items from ``GET /rest/items``."""
        logger.info("Listing items", url=self.url, recursive=recursive)
        try:
            response = self.client.get("/rest/items", params={"recursive": str(recursive).lower()})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to list items", url=self.url, error=str(e))
            raise LoadError(f"Failed to list items from {self.url}: {e}") from e

        items = [self._json_to_item(entry) for entry in payload]
        logger.debug("Items listed", count=len(items))
        return items

    def create(self, name: str, item: Item) -> Item:
        """Create or replace an item with ``PUT /rest/items/{name}``."""
        logger.info("Writing item", name=name)
        try:
            response = self.client.put(f"/rest/items/{name}", json=self._item_to_json(item))
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to write item", name=name, error=str(e))
            raise WriteError(f"Failed to write item {name}: {e}") from e

        if response.content:
            try:
                return self._json_to_item(response.json())
            except (ValueError, KeyError):
                logger.debug("Ignoring unparseable write response", name=name)
        return item

    def remove(self, name: str) -> None:
        """Remove an item with ``DELETE /rest/items/{name}``."""
        logger.info("Removing item", name=name)
        try:
            response = self.client.delete(f"/rest/items/{name}")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to remove item", name=name, error=str(e))
            raise WriteError(f"Failed to remove item {name}: {e}") from e
