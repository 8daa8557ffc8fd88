#!/usr/bin/env python3
"""
GitHub MCP Server

A simple entry point for running the GitHub MCP server over stdio.
This can be used directly with MCP investigator or other MCP clients.

Usage:
    python mcp_server.py [--config CONFIG_FILE] [--debug]

Environment variables:
    GITHUB_PERSONAL_ACCESS_TOKEN: token used to create repositories
    GITHUB_TOKEN: fallback when GITHUB_PERSONAL_ACCESS_TOKEN is unset
    GITHUB_API_URL: API base URL (defaults to https://api.github.com)
"""

import sys
import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

# Add the current directory to Python path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent))

from github_mcp.cli import serve


def main():
    """Main entry point for MCP server"""
    parser = argparse.ArgumentParser(
        description="GitHub MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python mcp_server.py
  python mcp_server.py --config configs/github.yaml --debug
  GITHUB_PERSONAL_ACCESS_TOKEN=ghp_xxx python mcp_server.py
        """
    )

    parser.add_argument(
        "--config",
        help="Path to configuration file (auto-detected if not provided)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    args = parser.parse_args()
    load_dotenv()

    try:
        serve(args.config, log_level="DEBUG" if args.debug else None)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"❌ Error starting server: {e}", file=sys.stderr)
        if args.debug:
            logging.getLogger(__name__).exception("Server failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
