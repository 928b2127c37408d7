"""
Minimal async client for the Highrise XML API.
"""

from typing import Any, Dict, List, Optional
from xml.etree import ElementTree

import httpx

from src.crm.errors import FetchError
from src.util.date_utils import parse_datetime
from src.util.logging import get_logger

logger = get_logger(__name__)


def camelize(tag: str) -> str:
    """Convert an XML element name such as `author-id` to `authorId`."""
    head, *rest = tag.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def decode_element(element: ElementTree.Element) -> Any:
    """
    Decode a Highrise XML element into plain Python values.

    Typed leaves (integer, boolean, datetime, float) are converted,
    `type="array"` becomes a list, `nil="true"` becomes None and elements
    with children become dicts keyed by camel-cased tag names.
    """
    if element.get("nil") == "true":
        return None

    kind = element.get("type")
    if kind == "array":
        return [decode_element(child) for child in element]

    children = list(element)
    if children:
        return {camelize(child.tag): decode_element(child) for child in children}

    text = element.text or ""
    if kind in ("integer", "datetime", "float", "decimal") and not text.strip():
        return None
    if kind == "integer":
        return int(text)
    if kind in ("float", "decimal"):
        return float(text)
    if kind == "boolean":
        return text.strip().lower() == "true"
    if kind == "datetime":
        return parse_datetime(text)
    return text


def decode_xml(content: bytes) -> Any:
    """Parse an XML document and decode its root element."""
    if not content.strip():
        return None
    return decode_element(ElementTree.fromstring(content))


class HighriseClient:
    """
    Async GET-only client for a Highrise account.

    Authenticates with the API token as the basic-auth user name. A new
    connection pool is opened per request so the client can be shared by
    concurrent tasks without lifecycle management.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        page_size: int = 25,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.token = token
        self.timeout = timeout
        self.page_size = page_size
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.token, "X"),
            timeout=self.timeout,
            headers={"Accept": "application/xml"},
            transport=self.transport,
        )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a resource and decode the XML response.

        Args:
            path: Resource path relative to the account URL, e.g. `users/1.xml`
            params: Optional query string parameters

        Returns:
            A dict for a single entity, a list of dicts for a collection

        Raises:
            FetchError: On transport failure, timeout, non-2xx or invalid XML
        """
        try:
            async with self._client() as client:
                response = await client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"GET {path} failed: {type(e).__name__} - {e}")
            raise FetchError(f"GET {path} failed: {e}") from e

        if response.is_error:
            logger.error(
                f"GET {path} returned HTTP {response.status_code}: {response.text[:200]}"
            )
            raise FetchError(
                f"GET {path} returned an error",
                status=response.status_code,
                body=response.text,
            )

        try:
            return decode_xml(response.content)
        except (ElementTree.ParseError, ValueError) as e:
            raise FetchError(
                f"GET {path} returned invalid XML: {e}",
                status=response.status_code,
                body=response.text,
            ) from e

    async def get_all(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        GET every page of a collection, following the `n` offset parameter.

        Stops at the first page shorter than `page_size`. A `page_size` of
        zero or less fetches a single page.
        """
        results: List[Dict[str, Any]] = []
        offset = 0

        while True:
            page_params = dict(params or {})
            if offset:
                page_params["n"] = offset

            page = await self.get(path, page_params)
            if page is None:
                page = []
            if not isinstance(page, list):
                raise FetchError(f"GET {path} did not return a collection")

            results.extend(page)
            logger.debug(f"GET {path}: page at offset {offset} had {len(page)} items")

            if self.page_size <= 0 or len(page) < self.page_size:
                break
            offset += len(page)

        return results
