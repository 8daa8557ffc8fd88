# github-mcp/github_mcp/core/config.py

"""
Server Configuration

Immutable settings resolved once at startup from YAML and the environment,
then handed to the server, the adapter and the creation handler.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_SERVER_NAME = "github-mcp"
DEFAULT_USER_AGENT = "github-mcp/1.0.0"

# Checked in order; the first non-empty value wins
TOKEN_ENV_VARS = ("GITHUB_PERSONAL_ACCESS_TOKEN", "GITHUB_TOKEN")


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the GitHub MCP server"""
    token: Optional[str] = field(default=None, repr=False)
    api_url: str = DEFAULT_API_URL
    server_name: str = DEFAULT_SERVER_NAME
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_sources(cls, config: Dict[str, Any] = None,
                     environ: Mapping[str, str] = None) -> "ServerConfig":
        """
        Merge a YAML config dict with environment variables.

        Args:
            config: Parsed YAML config (may be empty)
            environ: Environment mapping, defaults to os.environ

        Returns:
            A frozen ServerConfig
        """
        config = config or {}
        environ = os.environ if environ is None else environ

        token = config.get("token") or None
        if not token:
            for var in TOKEN_ENV_VARS:
                if environ.get(var):
                    token = environ[var]
                    break

        return cls(
            token=token,
            api_url=(config.get("api_url") or environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            server_name=config.get("server_name") or DEFAULT_SERVER_NAME,
            user_agent=config.get("user_agent") or DEFAULT_USER_AGENT,
            log_level=str(config.get("log_level") or "INFO").upper(),
        )
