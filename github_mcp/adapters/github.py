# github-mcp/github_mcp/adapters/github.py

"""
GitHub Adapter

Exposes repository creation on the GitHub REST API as an MCP tool.
"""

import json
import logging
from typing import Annotated, Callable, Dict, Optional, Tuple, Union

from github import Auth, Github, GithubException
from pydantic import Field

from ..core.config import ServerConfig
from ..core.models import (
    CreationOutcome,
    CreationRequest,
    Failure,
    FailureKind,
    RepositoryRef,
    Success,
)
from ..core.serialize import OutcomeSerializer
from ..core.transport import GitHubTransport, TransportFailure, describe_exception

logger = logging.getLogger(__name__)

CREATE_REPOSITORY_PATH = "/user/repos"

MISSING_TOKEN_MESSAGE = (
    "GitHub Personal Access Token is not configured. "
    "Please set the GITHUB_PERSONAL_ACCESS_TOKEN environment variable."
)


def parse_repository(body: str) -> Union[RepositoryRef, TransportFailure]:
    """Project a successful response body onto RepositoryRef"""
    try:
        data = json.loads(body)
    except ValueError as e:
        return TransportFailure(f"Malformed response body: {e}")

    if not isinstance(data, dict):
        return TransportFailure("Malformed response body: expected a JSON object")

    html_url = data.get("html_url")
    if not isinstance(html_url, str) or not html_url:
        return TransportFailure("Malformed response body: missing html_url")

    return RepositoryRef(html_url=html_url)


class RepositoryCreationHandler:
    """Creates one repository per call under the authenticated account.

    Stateless: the only shared inputs are the frozen config and the transport,
    so concurrent calls need no coordination. Every path ends in a Success or
    Failure; nothing is raised to the caller.
    """

    def __init__(self, config: ServerConfig, transport: Optional[GitHubTransport] = None):
        self.config = config
        self.transport = transport or GitHubTransport.from_config(config)

    async def handle(self, request: CreationRequest) -> CreationOutcome:
        token = self.config.token
        if not token:
            logger.warning("Refusing to create %r: no GitHub token configured", request.name)
            return Failure(MISSING_TOKEN_MESSAGE, FailureKind.CONFIGURATION)

        logger.info("Creating repository %r (private=%s)", request.name, request.private)

        try:
            result = await self.transport.post_json(CREATE_REPOSITORY_PATH, request.to_payload(), token)

            if isinstance(result, TransportFailure):
                logger.warning("Transport error creating %r: %s", request.name, result.message)
                return Failure(result.message, FailureKind.TRANSPORT)

            if not result.ok:
                logger.warning("GitHub rejected %r with status %s", request.name, result.status_code)
                return Failure(result.text, FailureKind.UPSTREAM)

            ref = parse_repository(result.text)
            if isinstance(ref, TransportFailure):
                logger.warning("Unreadable response creating %r: %s", request.name, ref.message)
                return Failure(ref.message, FailureKind.TRANSPORT)

        except Exception as e:
            logger.exception("Unexpected error creating %r", request.name)
            return Failure(describe_exception(e), FailureKind.TRANSPORT)

        logger.info("Created repository %s", ref.html_url)
        return Success(ref.html_url)


class GitHubAdapter:
    """GitHub adapter for MCP"""

    TOOL_DESCRIPTIONS = {
        "create-repository": "Create a new GitHub repository",
    }

    def __init__(self, config: ServerConfig = None,
                 transport: Optional[GitHubTransport] = None):
        self.config = config or ServerConfig.from_sources()
        self.handler = RepositoryCreationHandler(self.config, transport)
        self.serializer = OutcomeSerializer()

    def create_tool_implementations(self) -> Dict[str, Callable]:
        """Create actual tool implementations"""
        handler = self.handler
        serializer = self.serializer

        async def create_repository(
            name: Annotated[str, Field(min_length=1, description="Repository name")],
            description: Annotated[Optional[str], Field(description="Repository description")] = None,
            private: Annotated[Optional[bool], Field(description="Whether the repository should be private")] = None,
        ) -> str:
            """Create a new GitHub repository"""
            request = CreationRequest.from_arguments(name, description, private)
            outcome = await handler.handle(request)
            return serializer.to_text(outcome)

        return {"create-repository": create_repository}

    def describe_tool(self, tool_name: str) -> str:
        return self.TOOL_DESCRIPTIONS.get(tool_name, tool_name)


def verify_token(config: ServerConfig) -> Tuple[bool, str]:
    """
    Check that the configured token authenticates against GitHub.

    Returns:
        (ok, message) where message names the login or the problem
    """
    if not config.has_token:
        return False, MISSING_TOKEN_MESSAGE

    try:
        gh = Github(auth=Auth.Token(config.token), base_url=config.api_url)
        login = gh.get_user().login
    except GithubException as e:
        message = e.data.get("message") if isinstance(e.data, dict) else None
        return False, f"GitHub rejected the token ({e.status}): {message or e}"
    except Exception as e:
        return False, f"Could not reach GitHub: {describe_exception(e)}"

    return True, f"Token authenticates as {login}"
