# github-mcp/github_mcp/core/transport.py

"""
HTTP Transport Module

Sends requests to the GitHub REST API over httpx and reports the result as a
value: either the HTTP response or a transport failure. Nothing is raised.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from .config import DEFAULT_API_URL, DEFAULT_USER_AGENT, ServerConfig

logger = logging.getLogger(__name__)

GITHUB_MEDIA_TYPE = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class HttpResponse:
    """Status and raw body of a completed exchange"""
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TransportFailure:
    """The exchange did not complete (DNS, connection reset, protocol error)"""
    message: str


TransportResult = Union[HttpResponse, TransportFailure]


def build_async_client(user_agent: str = DEFAULT_USER_AGENT) -> httpx.AsyncClient:
    """Create an AsyncClient with the headers every GitHub request needs."""
    return httpx.AsyncClient(headers={"User-Agent": user_agent})


def describe_exception(error: BaseException) -> str:
    """Message text of an exception, or its type name when the message is empty"""
    return str(error) or type(error).__name__


class GitHubTransport:
    """Issues single, unretried requests against the GitHub API"""

    def __init__(self, api_url: str = DEFAULT_API_URL,
                 user_agent: str = DEFAULT_USER_AGENT,
                 client: Optional[httpx.AsyncClient] = None):
        self.api_url = api_url.rstrip("/")
        self.user_agent = user_agent
        self.client = client

    @classmethod
    def from_config(cls, config: ServerConfig,
                    client: Optional[httpx.AsyncClient] = None) -> "GitHubTransport":
        return cls(api_url=config.api_url, user_agent=config.user_agent, client=client)

    def _headers(self, token: str) -> Dict[str, str]:
        return {
            "Accept": GITHUB_MEDIA_TYPE,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

    async def post_json(self, path: str, payload: Dict[str, Any], token: str) -> TransportResult:
        """POST a JSON body and return the response or the failure"""
        url = f"{self.api_url}{path}"
        headers = self._headers(token)

        try:
            if self.client is not None:
                response = await self.client.post(url, json=payload, headers=headers)
            else:
                async with build_async_client(self.user_agent) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("POST %s failed: %r", url, e)
            return TransportFailure(describe_exception(e))

        logger.debug("POST %s -> %s", url, response.status_code)
        return HttpResponse(status_code=response.status_code, text=response.text)
