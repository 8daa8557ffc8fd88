# github-mcp/github_mcp/core/serialize.py

"""
Outcome Serialization Module

Turns creation outcomes into the text relayed to the calling agent, and into
structured records for the command line.
"""

from typing import Any, Dict
from datetime import datetime, timezone

from .models import CreationOutcome, FailureKind, Success


class OutcomeSerializer:
    """Serializes creation outcomes for MCP and CLI output"""

    SUCCESS_PREFIX = "Successfully created repository: "
    UPSTREAM_PREFIX = "Failed to create repository: "
    TRANSPORT_PREFIX = "Error creating repository: "

    def to_text(self, outcome: CreationOutcome) -> str:
        """Human-readable message for the agent"""
        if isinstance(outcome, Success):
            return f"{self.SUCCESS_PREFIX}{outcome.locator}"

        # Configuration diagnostics are already complete sentences
        if outcome.kind is FailureKind.CONFIGURATION:
            return outcome.diagnostic
        if outcome.kind is FailureKind.UPSTREAM:
            return f"{self.UPSTREAM_PREFIX}{outcome.diagnostic}"
        return f"{self.TRANSPORT_PREFIX}{outcome.diagnostic}"

    def to_dict(self, outcome: CreationOutcome) -> Dict[str, Any]:
        """Structured record of an outcome"""
        metadata = {"serialized_at": datetime.now(timezone.utc).isoformat()}

        if isinstance(outcome, Success):
            return {
                "status": "success",
                "locator": outcome.locator,
                "metadata": metadata,
            }

        return {
            "status": "error",
            "error": {
                "kind": outcome.kind.value,
                "message": outcome.diagnostic,
            },
            "metadata": metadata,
        }
