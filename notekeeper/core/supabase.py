"""
Supabase HTTP Client.

Async httpx client for the Supabase REST (PostgREST) and auth (GoTrue)
endpoints. Every request carries the project anon key; requests made on
behalf of a user also carry that user's bearer token so row-level security
applies.
"""

from typing import Any

import httpx

from notekeeper.core.config import get_supabase_config
from notekeeper.core.exceptions import ConfigurationError
from notekeeper.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

REST_PREFIX = "/rest/v1"
AUTH_PREFIX = "/auth/v1"


def error_message(response: httpx.Response) -> str:
    """
    Extract a human-readable message from a Supabase error response.

    PostgREST reports {"message", "code", "details", "hint"}; GoTrue uses
    "msg", "error_description" or "error" depending on the endpoint.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    return response.text or f"HTTP {response.status_code}"


class SupabaseClient:
    """
    HTTP client for a Supabase project.

    Features:
    - Base URL, anon key and timeout from configuration
    - apikey / Authorization headers on every request
    - Structured logging of requests/responses

    Usage:
        async with SupabaseClient() as client:
            response = await client.rest("GET", "appnotes", token, params={"select": "*"})
    """

    def __init__(
        self,
        base_url: str | None = None,
        anon_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the Supabase client.

        Args:
            base_url: Project URL. If None, reads from config/settings/supabase.yaml.
            anon_key: Project anon key. If None, reads SUPABASE_ANON_KEY from config/.env.
            timeout: Request timeout in seconds. If None, reads from supabase.yaml.
            transport: Optional httpx transport (used to stub the backend).
        """
        if base_url is None or anon_key is None:
            try:
                config_url, config_key, config_timeout = get_supabase_config()
            except Exception as e:
                raise ConfigurationError(
                    "Could not determine Supabase URL and anon key from config"
                ) from e
            base_url = base_url or config_url
            anon_key = anon_key or config_key
            if timeout is None:
                timeout = config_timeout

        if not base_url or not anon_key:
            raise ConfigurationError("Supabase URL and anon key are required")

        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout if timeout is not None else 10.0
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SupabaseClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"apikey": self.anon_key},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def _auth_headers(self, access_token: str | None) -> dict[str, str]:
        # Without a user token PostgREST evaluates policies as the anon role.
        return {"Authorization": f"Bearer {access_token or self.anon_key}"}

    async def request(
        self,
        method: str,
        path: str,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the project.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path below the project URL (e.g., /rest/v1/appnotes)
            access_token: User JWT; the anon key is used when absent
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()
        headers = {**self._auth_headers(access_token), **kwargs.pop("headers", {})}

        log_with_source(logger, "http", "debug", "Supabase request", method=method, path=path)

        try:
            response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "http",
                "error",
                "Supabase request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            "http",
            "debug",
            "Supabase response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def rest(
        self,
        method: str,
        table: str,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a PostgREST request against a table."""
        return await self.request(method, f"{REST_PREFIX}/{table}", access_token, **kwargs)

    async def auth(
        self,
        method: str,
        endpoint: str,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a GoTrue request (token, user, logout)."""
        return await self.request(method, f"{AUTH_PREFIX}/{endpoint}", access_token, **kwargs)
