"""Canto REST API controller (internal use only)."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import requests
from google.auth import exceptions as ga_exceptions

from cantofal.auth import CantoConfig, OAuthClient
from cantofal.errors import (
    ApiError,
    AuthorizationFailedError,
    CantoFalError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    RateLimitError,
    RemoteUnavailableError,
    map_http_error,
)

from .params import MAX_PAGE_SIZE, SORT_BY_NAME, SORT_DIRECTION_ASC, TREE_ALL_LAYERS

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DOWNLOAD_CHUNK_SIZE: int = 64 * 1024


class _LocalWriteError(Exception):
    """A local disk failure during a download; never retried or remapped."""


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class CantoController:
    """
    Canto API controller (internal only).

    Notes:
        - The HTTP session is NOT exposed.
        - All payloads are returned as plain dicts; mapping to models happens
          in the repository.
    """

    def __init__(self, config: CantoConfig) -> None:
        self._config = config
        self._retry_policy = _RetryPolicy()
        self._session = OAuthClient(config).build_session(ensure_valid=True)

    @classmethod
    def from_session(cls, session: Any, config: CantoConfig) -> "CantoController":
        """Create controller from a pre-built session (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = config
        obj._retry_policy = _RetryPolicy()
        obj._session = session
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get_asset(self, scheme: str, remote_id: str) -> dict[str, Any]:
        return self._get_json(f"/{scheme}/{remote_id}")

    def get_folder_info(self, scheme: str, remote_id: str) -> dict[str, Any]:
        return self._get_json(f"/info/{scheme}/{remote_id}")

    def get_tree(
        self,
        sort_by: str = SORT_BY_NAME,
        sort_direction: str = SORT_DIRECTION_ASC,
    ) -> list[dict[str, Any]]:
        data = self._get_json(
            "/tree",
            params={
                "sortBy": sort_by,
                "sortDirection": sort_direction,
                "layer": TREE_ALL_LAYERS,
            },
            allow_empty=True,
        )
        results = data.get("results") or []
        return [r for r in results if isinstance(r, dict)]

    def list_album(
        self,
        album_id: str,
        *,
        start: int = 0,
        limit: int = MAX_PAGE_SIZE,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        List one page of album content.

        Returns:
            The raw payload: ``results`` (assets) and ``found`` (total count).
        """
        if limit <= 0 or limit > MAX_PAGE_SIZE:
            raise InvalidArgumentError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}",
                details={"limit": limit},
            )
        params: dict[str, Any] = {"start": max(0, start), "limit": limit}
        if sort_by:
            params["sortBy"] = sort_by
        if sort_direction:
            params["sortDirection"] = sort_direction
        return self._get_json(f"/album/{album_id}", params=params, allow_empty=True)

    def search(self, params: dict[str, Any]) -> dict[str, Any]:
        return self._get_json("/search", params=params, allow_empty=True)

    def fetch(self, url: str) -> bytes:
        """Return the body of an absolute URL, fetched with the app's token."""
        response = self._execute(lambda: self._request("GET", url))
        return response.content

    def download(self, url: str, local_path: str) -> None:
        """Stream an absolute URL into `local_path` (overwriting it)."""
        parent_dir = os.path.dirname(local_path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)

        def _do() -> None:
            with self._request("GET", url, stream=True) as response:
                f.seek(0)
                f.truncate()
                for chunk in response.iter_content(chunk_size=_DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    try:
                        f.write(chunk)
                    except OSError as exc:
                        raise _LocalWriteError() from exc

        with open(local_path, "wb") as f:
            try:
                self._execute(_do)
            except _LocalWriteError as exc:
                raise exc.__cause__ from None

    # ----------------------------
    # Internals
    # ----------------------------
    def _url(self, path: str) -> str:
        return f"{self._config.api_base_url}{path}"

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        kwargs.setdefault("timeout", self._config.timeout)
        logger.debug(f"{method} {url}")
        response = self._session.request(method, url, **kwargs)
        try:
            response.raise_for_status()
        except requests.HTTPError:
            response.close()
            raise
        return response

    def _get_json(
        self,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        allow_empty: bool = False,
    ) -> dict[str, Any]:
        url = self._url(path)
        response = self._execute(lambda: self._request("GET", url, params=params))

        # Canto answers unknown ids with 200 and an empty body.
        if not response.content:
            data: Any = None
        else:
            try:
                data = response.json()
            except ValueError as exc:
                raise ApiError(
                    "Canto returned a non-JSON response",
                    details={"url": url},
                    cause=exc,
                ) from exc

        if not data:
            if allow_empty:
                return {}
            raise NotFoundError("Canto resource not found", details={"url": url})
        if not isinstance(data, dict):
            raise ApiError("Unexpected Canto response shape", details={"url": url})
        return data

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.debug(f"Retrying Canto request in {delay}s after: {mapped}")
                    time.sleep(delay)
                    delay *= 2
                    continue
                if mapped is exc:
                    raise
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        return isinstance(exc, (RateLimitError, RemoteUnavailableError))

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, (CantoFalError, _LocalWriteError)):
            return exc

        if isinstance(exc, requests.HTTPError) and exc.response is not None:
            info = _http_error_to_info(exc.response)
            return map_http_error(info, cause=exc)

        if isinstance(exc, ga_exceptions.RefreshError):
            return AuthorizationFailedError("Canto token refresh failed", cause=exc)

        if isinstance(exc, (requests.ConnectionError, requests.Timeout, OSError, TimeoutError)):
            return RemoteUnavailableError("Network error", cause=exc)

        return ApiError("Canto API error", cause=exc)


def _http_error_to_info(response: Any) -> HttpErrorInfo:
    status_code = getattr(response, "status_code", None)
    reason = getattr(response, "reason", None)

    message = None
    details: dict[str, Any] = {}
    url = getattr(response, "url", None)
    if isinstance(url, str):
        details["url"] = url

    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        value = payload.get("message") or payload.get("error")
        if isinstance(value, str) and value:
            message = value

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
