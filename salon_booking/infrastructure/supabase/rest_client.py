from __future__ import annotations

import logging
from typing import Any

import httpx

from salon_booking.application.exceptions import BackendError


class SupabaseRestClient:
    """Thin CRUD client over Supabase's PostgREST and auth endpoints.

    Filters are PostgREST operators keyed by column, e.g. {"category_id": "eq.42"};
    order is a list of (column, ascending) pairs.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("SUPABASE_ANON_KEY is required for the Supabase backend")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: list[tuple[str, bool]] | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = ",".join(
                f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in order
            )
        response = self._request("GET", self._table_url(table), params=params)
        return self._rows(response, table)

    def insert(self, table: str, rows: dict[str, Any] | list[dict[str, Any]]) -> list[dict[str, Any]]:
        response = self._request(
            "POST",
            self._table_url(table),
            json=rows,
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response, table)

    def update(self, table: str, values: dict[str, Any], filters: dict[str, str]) -> list[dict[str, Any]]:
        if not filters:
            raise ValueError("update without filters would touch every row")
        response = self._request(
            "PATCH",
            self._table_url(table),
            params=filters,
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response, table)

    def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Return the auth user for a session token, or None when the token is not valid."""
        url = f"{self._base_url}/auth/v1/user"
        try:
            response = self._client.get(url, headers=self._headers(bearer=access_token))
        except httpx.HTTPError as e:
            self._logger.error("Supabase auth request failed", extra={"error": str(e)})
            raise BackendError(f"auth request failed: {e}") from e

        if response.status_code in (401, 403):
            return None
        self._raise_for_status(response, "auth/v1/user")
        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                "Supabase auth response is not JSON",
                extra={"status": response.status_code, "error": str(e)},
            )
            raise BackendError("auth/v1/user: response is not JSON", status_code=response.status_code) from e
        return data if isinstance(data, dict) else None

    def _request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged = self._headers()
        merged.update(headers or {})
        try:
            response = self._client.request(method, url, params=params, json=json, headers=merged)
        except httpx.HTTPError as e:
            self._logger.error("Supabase request failed", extra={"method": method, "url": url, "error": str(e)})
            raise BackendError(f"{method} {url} failed: {e}") from e
        self._raise_for_status(response, url)
        return response

    def _raise_for_status(self, response: httpx.Response, target: str) -> None:
        if response.status_code < 400:
            return
        try:
            error_json = response.json()
        except ValueError:
            error_json = None
        if isinstance(error_json, dict):
            error_message = error_json.get("message") or error_json.get("msg") or response.text
            error_code = error_json.get("code")
        else:
            error_message = response.text
            error_code = None

        self._logger.error(
            "Supabase request rejected",
            extra={
                "status": response.status_code,
                "error_code": error_code,
                "error_message": error_message,
                "target": target,
            },
        )
        raise BackendError(
            f"{target}: {error_message}",
            status_code=response.status_code,
            details=error_json,
        )

    def _rows(self, response: httpx.Response, table: str) -> list[dict[str, Any]]:
        if not response.content:
            return []
        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(f"{table}: response is not JSON", status_code=response.status_code) from e
        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise BackendError(f"{table}: unexpected response payload", status_code=response.status_code)
        return data

    def _table_url(self, table: str) -> str:
        return f"{self._base_url}/rest/v1/{table}"

    def _headers(self, bearer: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {bearer or self._api_key}",
            "Content-Type": "application/json",
        }
