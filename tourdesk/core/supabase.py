from __future__ import annotations

from threading import Lock
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from tourdesk.core.config import get_settings


Filters = List[Tuple[str, str]]


def eq(column: str, value: Any) -> Tuple[str, str]:
    return column, f"eq.{value}"


def in_list(column: str, values: Iterable[Any]) -> Tuple[str, str]:
    return column, f"in.({','.join(str(value) for value in values)})"


def total_from_content_range(content_range: Optional[str]) -> Optional[int]:
    """Total row count from a PostgREST ``Content-Range`` such as ``0-24/311``."""
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[-1].strip()
    return int(total) if total.isdigit() else None


class SupabaseClient:
    """Thin PostgREST client shared by every repository."""

    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.supabase_url.rstrip("/") + "/rest/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("Supabase API key is required")
        self._client = self._get_shared_client(settings.supabase_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client

    def _headers(self, prefer: Optional[str] = None, json_body: bool = False) -> Dict[str, str]:
        headers = {"apikey": self.api_key, "Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _url(self, table: str, params: Filters) -> str:
        url = f"{self.base_url}/{table}"
        return f"{url}?{urlencode(params, doseq=True)}" if params else url

    @staticmethod
    def _rows(response: httpx.Response) -> List[Dict[str, Any]]:
        response.raise_for_status()
        if not response.content:
            return []
        data = response.json()
        if isinstance(data, dict):
            return [data]
        return data if isinstance(data, list) else []

    def select(
        self,
        table: str,
        select: str,
        filters: Optional[Filters] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
        count: bool | str = False,
    ) -> Tuple[List[Dict[str, Any]], Optional[int]]:
        params: Filters = [("select", select), *(filters or [])]
        for key, value in (("limit", limit), ("offset", offset), ("order", order)):
            if value is not None:
                params.append((key, str(value)))

        prefer = None
        if count:
            prefer = "count=exact" if count is True else f"count={count}"
        response = self._client.get(self._url(table, params), headers=self._headers(prefer))
        rows = self._rows(response)
        total = total_from_content_range(response.headers.get("content-range")) if count else None
        return rows, total

    def count(self, table: str, filters: Optional[Filters] = None) -> int:
        _, total = self.select(table=table, select="id", filters=filters, limit=1, count=True)
        return total or 0

    def insert(
        self,
        table: str,
        payload: Dict[str, Any] | List[Dict[str, Any]],
        select: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: Filters = [("select", select)] if select else []
        response = self._client.post(
            self._url(table, params),
            headers=self._headers("return=representation", json_body=True),
            json=payload,
        )
        return self._rows(response)

    def update(
        self,
        table: str,
        payload: Dict[str, Any],
        filters: Filters,
        select: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: Filters = ([("select", select)] if select else []) + list(filters)
        response = self._client.patch(
            self._url(table, params),
            headers=self._headers("return=representation", json_body=True),
            json=payload,
        )
        return self._rows(response)

    def delete(self, table: str, filters: Filters) -> List[Dict[str, Any]]:
        # PostgREST refuses an unfiltered DELETE.
        if not filters:
            raise ValueError("Refusing to delete without filters")
        response = self._client.delete(
            self._url(table, list(filters)), headers=self._headers("return=representation")
        )
        return self._rows(response)
