# github-mcp/github_mcp/core/models.py

"""
Request and Outcome Models

Value types passed between the MCP tool, the creation handler and the transport.
"""

from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class FailureKind(Enum):
    """Why a repository creation did not succeed"""
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class CreationRequest:
    """A validated call to create a repository for the authenticated user"""
    name: str
    description: str = ""
    private: bool = False

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Repository name must be a non-empty string")

    @classmethod
    def from_arguments(cls, name: str, description: Optional[str] = None,
                       private: Optional[bool] = None) -> "CreationRequest":
        """Build a request from raw tool arguments, applying defaults"""
        return cls(
            name=name,
            description=description or "",
            private=bool(private) if private is not None else False,
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for POST /user/repos"""
        return {
            "name": self.name,
            "description": self.description,
            "private": self.private,
            # Always initialize with a README so the returned URL is usable
            "auto_init": True,
        }


@dataclass(frozen=True)
class Success:
    """Repository was created; locator is its html_url"""
    locator: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Repository was not created; diagnostic is passed through as-is"""
    diagnostic: str
    kind: FailureKind = field(default=FailureKind.TRANSPORT, compare=False)

    @property
    def ok(self) -> bool:
        return False


CreationOutcome = Union[Success, Failure]


@dataclass(frozen=True)
class RepositoryRef:
    """The only part of the upstream repository JSON we rely on"""
    html_url: str
