# github-mcp/github_mcp/cli.py

"""
CLI Module for GitHub MCP

Provides the command-line interface for launching the MCP server and for
checking or exercising the repository creation tool by hand.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from .adapters.github import GitHubAdapter, verify_token
from .core.config import ServerConfig
from .core.models import CreationRequest

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO"):
    """Send log records to stderr; stdout carries the MCP stdio protocol"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


class GitHubMCPServer:
    """MCP server exposing the GitHub adapter's tools"""

    def __init__(self, config: ServerConfig = None, adapter: GitHubAdapter = None):
        self.config = config or ServerConfig.from_sources()
        self.adapter = adapter or GitHubAdapter(self.config)
        self.mcp = FastMCP(self.config.server_name)
        self.registered: List[str] = []

    def register_tools(self):
        """Register MCP tools from the adapter"""
        if self.registered:
            return

        implementations = self.adapter.create_tool_implementations()
        for tool_name, implementation in implementations.items():
            self.mcp.tool(
                name=tool_name,
                description=self.adapter.describe_tool(tool_name)
            )(implementation)
            self.registered.append(tool_name)

        logger.info("Registered %d tool(s) for %s: %s",
                    len(self.registered), self.config.server_name, ", ".join(self.registered))
        if not self.config.has_token:
            logger.warning("No GitHub token configured; create-repository will report it on every call")

    async def list_tools(self) -> List[Dict[str, Any]]:
        """Describe registered tools the way an MCP client sees them"""
        self.register_tools()
        tools = await self.mcp.list_tools()
        return [
            {"name": t.name, "description": t.description, "inputSchema": t.inputSchema}
            for t in tools
        ]

    def run(self):
        """Run the MCP server over stdio"""
        self.register_tools()
        logger.info("%s running on stdio", self.config.server_name)
        self.mcp.run(transport="stdio")


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file"""
    if not os.path.exists(config_path):
        return {}

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Error loading config from %s: %s", config_path, e)
        return {}

    if not isinstance(data, dict):
        logger.error("Ignoring config %s: top level must be a mapping", config_path)
        return {}
    return data


def find_config_file(name: str = "github") -> Optional[str]:
    """Find configuration file for the server"""
    # Look in configs directory
    config_dir = Path(__file__).parent.parent / "configs"
    config_file = config_dir / f"{name}.yaml"

    if config_file.exists():
        return str(config_file)

    # Look in current directory
    local_config = Path(f"{name}.yaml")
    if local_config.exists():
        return str(local_config)

    return None


def resolve_config(config_path: Optional[str] = None) -> ServerConfig:
    """Build the server config from an explicit or discovered YAML file plus the environment"""
    config_file = config_path or find_config_file()
    raw = load_config(config_file) if config_file else {}
    if config_file:
        logger.debug("Using config: %s", config_file)
    return ServerConfig.from_sources(raw)


def serve(config_path: Optional[str] = None, validate: bool = False, log_level: Optional[str] = None):
    """Resolve config, optionally validate the token, and run the server"""
    config = resolve_config(config_path)
    configure_logging(log_level or config.log_level)

    if validate:
        ok, message = verify_token(config)
        if not ok:
            logger.error("Validation failed: %s", message)
            sys.exit(1)
        logger.info(message)

    GitHubMCPServer(config).run()


def _cmd_list(args) -> int:
    config = resolve_config(args.config)
    tools = asyncio.run(GitHubMCPServer(config).list_tools())
    print(json.dumps(tools, indent=2))
    return 0


def _cmd_validate(args) -> int:
    config = resolve_config(args.config)
    print(f"Validating GitHub setup against {config.api_url}...")
    ok, message = verify_token(config)
    if ok:
        print(f"✅ {message}")
        return 0
    print(f"❌ {message}", file=sys.stderr)
    return 1


def _cmd_create(args) -> int:
    config = resolve_config(args.config)
    adapter = GitHubAdapter(config)
    try:
        request = CreationRequest.from_arguments(args.name, args.description, args.private)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    outcome = asyncio.run(adapter.handler.handle(request))

    if args.json:
        print(json.dumps(adapter.serializer.to_dict(outcome), indent=2))
    else:
        print(adapter.serializer.to_text(outcome))
    return 0 if outcome.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-mcp",
        description="GitHub MCP - create GitHub repositories from MCP agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s up                                # Serve the create-repository tool on stdio
  %(prog)s up --validate                     # Check the token before serving
  %(prog)s list                              # Show registered tools and schemas
  %(prog)s create demo --private             # Create a repository directly
        """
    )
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    up_parser = subparsers.add_parser("up", help="Launch MCP server")
    up_parser.add_argument("--config", help="Path to configuration file")
    up_parser.add_argument("--validate", action="store_true",
                           help="Validate the GitHub token before starting")

    list_parser = subparsers.add_parser("list", help="List registered tools")
    list_parser.add_argument("--config", help="Path to configuration file")

    validate_parser = subparsers.add_parser("validate", help="Validate GitHub token")
    validate_parser.add_argument("--config", help="Path to configuration file")

    create_parser = subparsers.add_parser("create", help="Create a repository once and exit")
    create_parser.add_argument("name", help="Repository name")
    create_parser.add_argument("--description", default=None, help="Repository description")
    create_parser.add_argument("--private", action="store_true", help="Make the repository private")
    create_parser.add_argument("--json", action="store_true", help="Print a JSON record instead of text")
    create_parser.add_argument("--config", help="Path to configuration file")

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point"""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.command == "up":
        try:
            serve(args.config, validate=args.validate, log_level=args.log_level)
        except KeyboardInterrupt:
            logger.info("Server stopped by user")
        except Exception as e:
            print(f"❌ Error starting server: {e}", file=sys.stderr)
            sys.exit(1)
        return

    configure_logging(args.log_level or "WARNING")

    commands = {
        "list": _cmd_list,
        "validate": _cmd_validate,
        "create": _cmd_create,
    }
    status = commands[args.command](args)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
