"""Generic table-query client for a Supabase (PostgREST) backend.

Wraps httpx with a small fluent builder covering the operations the dashboard
needs: select, order, limit, single, update and eq filters. Read requests
retry transport failures with tenacity; writes are sent once.
"""

from typing import Any

import httpx
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.core.config import Settings

SINGLE_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"
NO_ROWS_CODE = "PGRST116"


class StoreError(Exception):
    """A call to the external store failed."""

    def __init__(self, message: str, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class EmptyResultError(StoreError):
    """A single-row read returned no row."""


class MalformedRecordError(StoreError):
    """A record returned by the store failed validation."""


class TableQuery:
    """Builder for one request against a table or view.

    Mirrors the shape of the Supabase client API:

        store.table("user_queries").select("*").order("createdat", descending=True).limit(100)
        store.table("user_queries").update({"iscleared": True}).eq("id", query_id)
    """

    def __init__(self, store: "SupabaseStore", table: str) -> None:
        self._store = store
        self.table = table
        self.method = "GET"
        self.params: dict[str, str] = {}
        self.headers: dict[str, str] = {}
        self.body: dict[str, Any] | None = None
        self.is_single = False

    def select(self, columns: str = "*") -> "TableQuery":
        self.method = "GET"
        self.params["select"] = columns
        return self

    def order(self, column: str, descending: bool = False) -> "TableQuery":
        direction = "desc" if descending else "asc"
        existing = self.params.get("order")
        clause = f"{column}.{direction}"
        self.params["order"] = f"{existing},{clause}" if existing else clause
        return self

    def limit(self, count: int) -> "TableQuery":
        if count <= 0:
            raise ValueError("Limit must be positive")
        self.params["limit"] = str(count)
        return self

    def single(self) -> "TableQuery":
        """Expect exactly one row; the result is that row alone."""
        self.is_single = True
        self.headers["Accept"] = SINGLE_OBJECT_MEDIA_TYPE
        return self

    def update(self, values: dict[str, Any]) -> "TableQuery":
        self.method = "PATCH"
        self.body = values
        self.headers["Prefer"] = "return=minimal"
        return self

    def eq(self, column: str, value: str) -> "TableQuery":
        self.params[column] = f"eq.{value}"
        return self

    def execute(self) -> list[dict[str, Any]]:
        """Send the request.

        Returns:
            Rows returned by the store. A single-row read yields a one-element
            list; an update with minimal return yields an empty list.

        Raises:
            EmptyResultError: If a single-row read found no row
            StoreError: On transport failure or a non-success status
        """
        return self._store.execute(self)

    def __repr__(self) -> str:
        return f"TableQuery({self.method} {self.table} {self.params})"


class SupabaseStore:
    """HTTP connection to the PostgREST endpoint of a Supabase project.

    Constructed explicitly and passed to its consumers; a custom
    `httpx.Client` can be injected (tests use `httpx.MockTransport`).
    """

    def __init__(
        self,
        rest_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not rest_url:
            raise ValueError("A store URL is required")
        if not api_key:
            raise ValueError("A store access key is required")
        self.rest_url = rest_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._auth_headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        }
        logger.info(f"SupabaseStore initialized at {self.rest_url}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        return cls(
            settings.rest_url,
            settings.supabase_key.get_secret_value(),
            timeout=settings.request_timeout,
        )

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    def execute(self, query: TableQuery) -> list[dict[str, Any]]:
        try:
            if query.method == "GET":
                response = self._send_read(query)
            else:
                response = self._send(query)
        except httpx.HTTPError as e:
            logger.error(f"{query!r} failed: {e}")
            raise StoreError(f"{query.method} {query.table} failed: {e}") from e
        try:
            return self._parse(query, response)
        except ValueError as e:
            raise MalformedRecordError(f"Invalid JSON from {query.table}: {e}") from e

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )  # type: ignore[misc]
    def _send_read(self, query: TableQuery) -> httpx.Response:
        return self._client.request(
            "GET",
            f"{self.rest_url}/{query.table}",
            params=query.params,
            headers={**self._auth_headers, **query.headers},
        )

    def _send(self, query: TableQuery) -> httpx.Response:
        return self._client.request(
            query.method,
            f"{self.rest_url}/{query.table}",
            params=query.params,
            headers={**self._auth_headers, **query.headers},
            json=query.body,
        )

    def _parse(self, query: TableQuery, response: httpx.Response) -> list[dict[str, Any]]:
        logger.debug(f"{query!r} -> HTTP {response.status_code}")
        if response.is_success:
            if response.status_code == 204 or not response.content:
                return []
            payload = response.json()
            if isinstance(payload, dict):
                return [payload]
            if isinstance(payload, list):
                return payload
            raise MalformedRecordError(
                f"Unexpected payload from {query.table}: {type(payload).__name__}",
                status=response.status_code,
            )

        message, code = _error_details(response)
        if query.is_single and (response.status_code == 406 or code == NO_ROWS_CODE):
            raise EmptyResultError(
                f"No row returned from {query.table}", code=code, status=response.status_code
            )
        raise StoreError(
            f"{query.method} {query.table} failed ({response.status_code}): {message}",
            code=code,
            status=response.status_code,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SupabaseStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _error_details(response: httpx.Response) -> tuple[str, str | None]:
    """Extract PostgREST's error message and code, if the body carries them."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase, None
    if isinstance(payload, dict):
        return str(payload.get("message") or payload), payload.get("code")
    return str(payload), None
