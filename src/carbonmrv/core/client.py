"""Backend REST client - thin wrapper over the managed Postgres REST API."""

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from carbonmrv.core.config import settings

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10


# =============================================================================
# Exceptions
# =============================================================================


class RetryableError(Exception):
    """Transient error that should be retried (timeouts, connection errors, 5xx)."""

    pass


class BackendAPIError(Exception):
    """Non-retryable error from the backend API."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class BackendNotConfiguredError(RuntimeError):
    """Raised when no backend URL or API key has been configured."""

    pass


# =============================================================================
# Filter Helpers
# =============================================================================


def eq(value) -> str:
    """PostgREST equality filter."""
    return f"eq.{value}"


def in_(values) -> str:
    """PostgREST membership filter."""
    return f"in.({','.join(str(v) for v in values)})"


def _base_url() -> str:
    if not settings.backend_url:
        raise BackendNotConfiguredError(
            "No backend configured. Set BACKEND_URL and BACKEND_ANON_KEY "
            "in the environment or the project .env file."
        )
    return settings.backend_url.rstrip("/") + REST_PATH


def _headers(prefer: str | None = None) -> dict[str, str]:
    key = settings.backend_service_key or settings.backend_anon_key
    if not key:
        raise BackendNotConfiguredError("No backend API key configured (BACKEND_ANON_KEY)")
    headers = {
        "apikey": key,
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
    }
    if prefer:
        headers["Prefer"] = prefer
    return headers


# =============================================================================
# Client Functions
# =============================================================================


async def rest_request(
    method: str,
    table: str,
    params: dict | None = None,
    json: dict | list | None = None,
    prefer: str | None = None,
) -> list[dict]:
    """Execute a single REST request against a backend table.

    This is the low-level function that makes a single request without retry.
    For most use cases, prefer `rest_with_retry()` which handles transient errors.

    Args:
        method: HTTP method (GET, POST, PATCH, DELETE)
        table: Table name, e.g. "submissions"
        params: Query parameters (select, filters, order)
        json: Request body for inserts/updates
        prefer: Optional Prefer header, e.g. "return=representation"

    Returns:
        List of rows returned by the API (empty if none)

    Raises:
        BackendNotConfiguredError: If no backend URL/key is set
        httpx.HTTPStatusError: If the HTTP request fails
    """
    url = f"{_base_url()}/{table}"

    async with httpx.AsyncClient() as client:
        response = await client.request(
            method,
            url,
            headers=_headers(prefer),
            params=params,
            json=json,
            timeout=settings.request_timeout,
        )
        response.raise_for_status()

        if not response.content:
            return []
        result = response.json()
        return result if isinstance(result, list) else [result]


@retry(
    retry=retry_if_exception_type(RetryableError),
    stop=stop_after_attempt(MAX_RETRIES),
    wait=wait_exponential_jitter(initial=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS, jitter=2),
    reraise=True,
)
async def rest_with_retry(
    method: str,
    table: str,
    params: dict | None = None,
    json: dict | list | None = None,
    prefer: str | None = None,
) -> list[dict]:
    """Execute a REST request with automatic retry on transient errors.

    Retries on:
    - Timeouts
    - Connection errors
    - HTTP 5xx errors

    After MAX_RETRIES failures the last RetryableError is re-raised.

    Raises:
        BackendAPIError: On client errors (4xx)
        RetryableError: If all retries fail
    """
    try:
        return await rest_request(method, table, params=params, json=json, prefer=prefer)
    except httpx.TimeoutException as e:
        logger.warning("Backend request to %s timed out, retrying", table)
        raise RetryableError(f"Request timed out: {e}") from e
    except httpx.ConnectError as e:
        logger.warning("Backend connection failed for %s, retrying", table)
        raise RetryableError(f"Connection failed: {e}") from e
    except httpx.HTTPStatusError as e:
        body = e.response.text
        if e.response.status_code >= 500:
            raise RetryableError(f"HTTP {e.response.status_code}: {body}") from e
        raise BackendAPIError(f"HTTP {e.response.status_code}: {body}", e.response.status_code) from e


async def select(
    table: str,
    columns: str = "*",
    filters: dict | None = None,
    order: str | None = None,
) -> list[dict]:
    """Select rows, e.g. `select("farms", filters={"farmer_id": eq(fid)})`."""
    params = {"select": columns}
    if filters:
        params.update(filters)
    if order:
        params["order"] = order
    return await rest_with_retry("GET", table, params=params)


async def insert(table: str, rows: dict | list[dict]) -> list[dict]:
    """Insert one or more rows and return them as stored."""
    return await rest_with_retry("POST", table, json=rows, prefer="return=representation")


async def update(table: str, values: dict, filters: dict) -> list[dict]:
    """Update rows matching filters and return them as stored."""
    if not filters:
        raise ValueError("Refusing to update without filters")
    return await rest_with_retry("PATCH", table, params=filters, json=values, prefer="return=representation")


async def delete(table: str, filters: dict) -> None:
    """Delete rows matching filters."""
    if not filters:
        raise ValueError("Refusing to delete without filters")
    await rest_with_retry("DELETE", table, params=filters)
