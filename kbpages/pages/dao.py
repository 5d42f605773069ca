"""Data access for the SharePoint REST API (the remote list store)."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from kbpages.core import config
from kbpages.core.exceptions import GatewayError, MalformedResponseError
from kbpages.query.schemas import QueryDocument

logger = logging.getLogger(__name__)

VERBOSE_HEADERS = {
    "Accept": "application/json;odata=verbose",
    "Content-Type": "application/json;odata=verbose",
    "odata-version": "",
}


def _odata_literal(text: str) -> str:
    """Quote a string for use inside an OData function call, e.g. getByTitle('...')."""
    return "'" + text.replace("'", "''") + "'"


def _unwrap_verbose(payload: Any, url: str) -> Any:
    if not isinstance(payload, dict) or "d" not in payload:
        raise MalformedResponseError(f"Response from {url} has no 'd' envelope", url=url)
    return payload["d"]


def _results(container: Any, url: str) -> List[Any]:
    """Collection from a verbose {"results": [...]} wrapper or a bare list."""
    if isinstance(container, dict):
        container = container.get("results")
    if not isinstance(container, list):
        raise MalformedResponseError(f"Response from {url} has no result collection", url=url)
    return container


class SharePointGateway:
    """
    Thin async wrapper over the SharePoint REST endpoints this service uses.

    Every transport problem surfaces as GatewayError and every unexpected
    payload as MalformedResponseError; nothing is retried or cached here.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        site_url: Optional[str] = None,
        list_title: Optional[str] = None,
    ):
        self.client = client
        self.site_url = (site_url or config.SHAREPOINT_SITE_URL).rstrip("/")
        self.list_title = list_title or config.PAGES_LIST_TITLE

    def list_url(self, list_title: Optional[str] = None) -> str:
        title = list_title or self.list_title
        return f"{self.site_url}/_api/web/lists/getByTitle({_odata_literal(title)})"

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise GatewayError(f"{method} {url} returned HTTP {status}", status_code=status, url=url) from e
        except httpx.HTTPError as e:
            raise GatewayError(f"{method} {url} failed: {e}", url=url) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{method} {url} did not return JSON", status_code=response.status_code, url=url
            ) from e

    # ===== STRUCTURED QUERY =====

    async def get_items(self, document: QueryDocument) -> List[Dict[str, Any]]:
        """Run a compiled CAML query against the pages list and return the raw items."""
        url = f"{self.list_url()}/GetItems"
        payload = await self._request(
            "POST",
            url,
            params=document.to_query_params(),
            json=document.to_request_body(),
            headers=VERBOSE_HEADERS,
        )
        return _results(_unwrap_verbose(payload, url), url)

    # ===== AGGREGATION =====

    async def get_filter_data(self, list_id: str, column_name: str) -> List[Dict[str, Any]]:
        """Server-computed distinct values for a column, as [{"Key": ..., "Value": ...}]."""
        url = f"{self.site_url}/_layouts/15/RenderListFilterData.aspx"
        payload = await self._request(
            "GET",
            url,
            params={"FieldInternalName": column_name, "ListId": list_id},
            headers={"Accept": "application/json"},
        )
        filter_data = payload.get("filterData") if isinstance(payload, dict) else None
        if not isinstance(filter_data, list):
            raise MalformedResponseError(f"Response from {url} has no filterData", url=url)
        return filter_data

    # ===== METADATA =====

    async def get_view_field_names(self, view_id: str) -> List[str]:
        """Internal names of the fields shown in a view, in view order."""
        url = f"{self.list_url()}/views/getById({_odata_literal(view_id)})/fields"
        payload = await self._request("GET", url, headers=VERBOSE_HEADERS)
        data = _unwrap_verbose(payload, url)
        items = data.get("Items") if isinstance(data, dict) else None
        return [str(name) for name in _results(items, url)]

    async def get_field(self, internal_name: str) -> Dict[str, Any]:
        url = f"{self.list_url()}/fields/getByInternalNameOrTitle({_odata_literal(internal_name)})"
        payload = await self._request("GET", url, headers=VERBOSE_HEADERS)
        field = _unwrap_verbose(payload, url)
        if not isinstance(field, dict):
            raise MalformedResponseError(f"Response from {url} is not a field", url=url)
        return field

    # ===== LISTS AND ITEMS =====

    async def get_list_details(self, list_title: str) -> Dict[str, Any]:
        url = self.list_url(list_title)
        payload = await self._request("GET", url, headers=VERBOSE_HEADERS)
        return _unwrap_verbose(payload, url)

    async def create_list_item(self, list_title: str, item_data: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.list_url(list_title)}/items"
        payload = await self._request("POST", url, json=item_data, headers=VERBOSE_HEADERS)
        return _unwrap_verbose(payload, url)

    async def get_by_url(self, url: str) -> Any:
        """Raw GET for ad hoc reads; the payload is returned as parsed JSON, unchecked."""
        return await self._request("GET", url, headers={"Accept": "application/json;odata=verbose"})
