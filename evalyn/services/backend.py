"""
Client for the remote analysis service.

The service accepts raw video bytes and later serves the analysis record:

    POST {base_url}/analyze          body: video bytes  -> {"videoId", "status"}
    GET  {base_url}/results/{id}     -> record | null | [] | [record]  (404 = absent)

Transport failures and non-2xx responses raise RemoteCallError; bodies that
do not decode raise MalformedPayloadError.
"""
from typing import Optional, Protocol
from urllib.parse import quote
import logging

import httpx
from pydantic import BaseModel, ValidationError

from evalyn.constants import ANALYZE_PATH, RESULTS_PATH
from evalyn.models.analysis import AnalysisRecord, AnalyzeResponse
from evalyn.utils.api_helpers import MalformedPayloadError, RemoteCallError, unwrap_optional

logger = logging.getLogger(__name__)


class AnalysisBackend(Protocol):
    """Remote operations the flows depend on."""

    async def analyze_video(self, data: bytes) -> AnalyzeResponse:
        ...

    async def get_analysis_result(self, video_id: str) -> Optional[AnalysisRecord]:
        ...


def _decode(model: type[BaseModel], payload):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise MalformedPayloadError(f"Unexpected {model.__name__} payload: {e.error_count()} error(s)") from e


def _json_body(response: httpx.Response):
    try:
        return response.json()
    except ValueError as e:
        raise MalformedPayloadError(f"Response is not valid JSON: {e}") from e


class HttpAnalysisBackend:
    """
    httpx implementation of AnalysisBackend.

    Args:
        base_url: Root URL of the analysis service
        timeout: httpx timeout in seconds (None disables it)
        client: Pre-built client, mainly for tests (MockTransport)
    """

    def __init__(self,
                 base_url: str,
                 timeout: Optional[float] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise RemoteCallError(str(e) or type(e).__name__) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        detail = response.text.strip() or response.reason_phrase
        raise RemoteCallError(f"HTTP {response.status_code}: {detail}")

    async def analyze_video(self, data: bytes) -> AnalyzeResponse:
        logger.info(f"Uploading {len(data)} bytes for analysis")
        response = await self._request(
            "POST",
            ANALYZE_PATH,
            content=data,
            headers={"Content-Type": "application/octet-stream"},
        )
        self._raise_for_status(response)
        return _decode(AnalyzeResponse, _json_body(response))

    async def get_analysis_result(self, video_id: str) -> Optional[AnalysisRecord]:
        url = RESULTS_PATH.format(video_id=quote(video_id, safe=""))
        response = await self._request("GET", url)

        if response.status_code == 404:
            return None
        self._raise_for_status(response)

        payload = unwrap_optional(_json_body(response))
        if payload is None:
            return None
        return _decode(AnalysisRecord, payload)

    async def aclose(self) -> None:
        await self._client.aclose()
