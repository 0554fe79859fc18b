"""Shared httpx plumbing for collaborator adapters.

Each adapter posts JSON to one collaborator and turns every failure mode
(transport error, non-2xx answer, unparseable body) into the typed error
the caller expects. No retries: the first failure surfaces.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.domain.exceptions import AssessmentServiceError
from src.infrastructure.observability.logging import get_logger_for_adapter

ErrorFactory = Callable[[str, Optional[int]], AssessmentServiceError]
ContractT = TypeVar("ContractT", bound=BaseModel)


class HttpAdapter:
    """Base for JSON-over-HTTP collaborator adapters.

    Args:
        base_url: Collaborator root, including any context path.
        client: Shared AsyncClient. When omitted the adapter creates and
            owns one, closed by aclose().
        timeout_seconds: Timeout for an owned client.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._log = get_logger_for_adapter(self.__class__.__name__)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(
        self,
        path: str,
        body: Mapping[str, Any],
        error: ErrorFactory,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        log = self._log.bind(url=url)
        try:
            response = await self._client.post(url, json=dict(body), params=params)
        except httpx.HTTPError as exc:
            log.error("http_request_failed", error=str(exc))
            raise error(f"transport failure calling {path}: {exc}", None) from exc

        if response.is_error:
            log.error("http_request_rejected", status_code=response.status_code)
            raise error(
                f"{path} answered {response.status_code}: {response.text[:200]}",
                response.status_code,
            )

        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            raise error(f"{path} returned a non-JSON body", response.status_code) from exc
        log.debug("http_request_completed", status_code=response.status_code)
        return payload if isinstance(payload, dict) else {}

    @staticmethod
    def _parse(
        contract: type[ContractT],
        payload: Mapping[str, Any],
        error: ErrorFactory,
    ) -> ContractT:
        try:
            return contract.model_validate(payload)
        except PydanticValidationError as exc:
            raise error(f"unexpected {contract.__name__} payload: {exc}", None) from exc
