import asyncio
import json
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

import aiohttp
from aiohttp import ClientTimeout
from pydantic import BaseModel

from .errors import HttpStatusError, MalformedBodyError, RequestFailedError
from ..logging import BaseLogger


class HttpClientConfig(BaseModel):
    timeout: int = 30
    verify_ssl: bool = True
    headers: Dict[str, str] = {}  # Sent with every request, overridable per request


class HttpRequestSpec(BaseModel):
    """Specification for an HTTP request."""
    url: str
    method: str = "GET"
    query: Dict[str, Any] = {}
    headers: Dict[str, str] = {}
    body: Optional[Any] = None


class HttpResponse(BaseModel):
    status: int
    body: Any = None


class HttpClient(ABC):
    """Contract for the HTTP collaborator used by data sources."""

    @abstractmethod
    async def request(self, request_spec: HttpRequestSpec) -> HttpResponse:
        """
        Execute a request and decode its JSON body.

        Raises:
            FetchError: On network failure, a non-2xx status or a malformed body
        """
        pass

    async def close(self) -> None:
        pass


class AioSessionCache:
    def __init__(self):
        self.client_session: Optional[aiohttp.ClientSession] = None

    async def get_session(self, timeout: int) -> aiohttp.ClientSession:
        if self.client_session is None or self.client_session.closed:
            self.client_session = aiohttp.ClientSession(timeout=ClientTimeout(total=timeout))
        return self.client_session

    async def close(self):
        if self.client_session:
            await self.client_session.close()
            self.client_session = None


class AiohttpClient(HttpClient):
    """aiohttp implementation of the HTTP collaborator.

    Makes exactly one attempt per request; callers decide what to do on failure.
    """

    def __init__(
        self,
        config: HttpClientConfig,
        logger: BaseLogger,
        session_cache: Optional[AioSessionCache] = None
    ):
        self.config = config
        self.logger = logger
        self.session_cache = session_cache or AioSessionCache()

    def _build_headers(self, request_spec: HttpRequestSpec) -> Dict[str, str]:
        return {**self.config.headers, **request_spec.headers}

    def _build_query(self, request_spec: HttpRequestSpec) -> Dict[str, str]:
        # aiohttp only accepts str/int/float query values
        query = {}
        for key, value in request_spec.query.items():
            if isinstance(value, bool):
                query[key] = "true" if value else "false"
            elif isinstance(value, (dict, list)):
                query[key] = json.dumps(value)
            else:
                query[key] = str(value)
        return query

    async def request(self, request_spec: HttpRequestSpec) -> HttpResponse:
        client = await self.session_cache.get_session(timeout=self.config.timeout)
        method = request_spec.method.upper()
        self.logger.log_debug(f"{method} {request_spec.url}")

        try:
            response = await client.request(
                method=method,
                url=request_spec.url,
                params=self._build_query(request_spec) or None,
                json=request_spec.body,
                headers=self._build_headers(request_spec),
                ssl=self.config.verify_ssl
            )
            await response.read()
        except aiohttp.InvalidURL as err:
            raise RequestFailedError(f"Invalid URL: {str(err)}") from err
        except aiohttp.ClientError as err:
            raise RequestFailedError(f"Client error: {str(err)}") from err
        except asyncio.TimeoutError as err:
            raise RequestFailedError(f"Request timed out after {self.config.timeout} seconds") from err

        self.logger.log_status(response.status)
        if not 200 <= response.status < 300:
            raise HttpStatusError(response.status, response.reason)

        text = await response.text()
        if not text.strip():
            return HttpResponse(status=response.status, body=None)
        try:
            body = json.loads(text)
        except json.JSONDecodeError as err:
            raise MalformedBodyError(f"Response body is not valid JSON: {str(err)}") from err

        return HttpResponse(status=response.status, body=body)

    async def close(self) -> None:
        await self.session_cache.close()
