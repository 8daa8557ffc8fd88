# github-mcp/tests/test_cli.py

"""
Server Registration and CLI Tests

Drives the FastMCP server through an in-memory MCP client session and checks
the command-line entry points without touching the network.
"""

import json
from unittest.mock import Mock, patch

import httpx
import pytest
from github import GithubException
from mcp.shared.memory import create_connected_server_and_client_session

from github_mcp.adapters.github import GitHubAdapter, verify_token
from github_mcp.cli import GitHubMCPServer, main
from github_mcp.core.config import ServerConfig
from github_mcp.core.transport import GitHubTransport

TOKEN_VARS = ("GITHUB_PERSONAL_ACCESS_TOKEN", "GITHUB_TOKEN")


def make_server(responder, token="ghp_test"):
    config = ServerConfig(token=token, api_url="https://api.example.test")
    client = httpx.AsyncClient(transport=httpx.MockTransport(responder))
    adapter = GitHubAdapter(config, GitHubTransport.from_config(config, client=client))
    server = GitHubMCPServer(config, adapter)
    server.register_tools()
    return server


def text_of(result):
    return "".join(c.text for c in result.content if getattr(c, "type", None) == "text")


class TestToolRegistration:
    """The tool as an MCP client sees it"""

    @pytest.mark.asyncio
    async def test_lists_create_repository_schema(self):
        server = make_server(lambda request: httpx.Response(500))

        tools = await server.list_tools()

        assert [t["name"] for t in tools] == ["create-repository"]
        tool = tools[0]
        assert tool["description"] == "Create a new GitHub repository"
        schema = tool["inputSchema"]
        assert set(schema["properties"]) == {"name", "description", "private"}
        assert schema["required"] == ["name"]

    def test_register_tools_is_idempotent(self):
        server = make_server(lambda request: httpx.Response(500))
        server.register_tools()
        assert server.registered == ["create-repository"]

    @pytest.mark.asyncio
    async def test_call_tool_success(self):
        server = make_server(
            lambda request: httpx.Response(201, json={"html_url": "https://example.test/user/demo"})
        )

        async with create_connected_server_and_client_session(server.mcp._mcp_server) as session:
            result = await session.call_tool("create-repository", {"name": "demo"})

        assert not result.isError
        assert text_of(result) == "Successfully created repository: https://example.test/user/demo"

    @pytest.mark.asyncio
    async def test_call_tool_upstream_failure(self):
        server = make_server(lambda request: httpx.Response(422, text="name already exists"))

        async with create_connected_server_and_client_session(server.mcp._mcp_server) as session:
            result = await session.call_tool("create-repository", {"name": "demo", "private": True})

        assert not result.isError
        assert text_of(result) == "Failed to create repository: name already exists"

    @pytest.mark.asyncio
    async def test_call_tool_without_token_fails_soft(self):
        calls = []

        def responder(request):
            calls.append(request)
            return httpx.Response(201, json={"html_url": "https://example.test/user/demo"})

        server = make_server(responder, token=None)

        async with create_connected_server_and_client_session(server.mcp._mcp_server) as session:
            result = await session.call_tool("create-repository", {"name": "demo"})

        assert not result.isError
        assert "not configured" in text_of(result)
        assert calls == []

    @pytest.mark.asyncio
    async def test_empty_name_rejected_by_schema(self):
        calls = []
        server = make_server(lambda request: calls.append(request) or httpx.Response(500))

        async with create_connected_server_and_client_session(server.mcp._mcp_server) as session:
            result = await session.call_tool("create-repository", {"name": ""})

        assert result.isError
        assert calls == []


class TestVerifyToken:
    """Token validation through PyGithub"""

    def test_missing_token(self):
        ok, message = verify_token(ServerConfig(token=None))
        assert ok is False
        assert "not configured" in message

    @patch("github_mcp.adapters.github.Github")
    def test_valid_token(self, mock_github):
        mock_github.return_value.get_user.return_value = Mock(login="octocat")

        ok, message = verify_token(ServerConfig(token="ghp_test"))

        assert ok is True
        assert "octocat" in message
        assert mock_github.call_args.kwargs["base_url"] == "https://api.github.com"

    @patch("github_mcp.adapters.github.Github")
    def test_rejected_token(self, mock_github):
        mock_github.return_value.get_user.side_effect = GithubException(
            401, {"message": "Bad credentials"}, None
        )

        ok, message = verify_token(ServerConfig(token="ghp_bad"))

        assert ok is False
        assert "401" in message
        assert "Bad credentials" in message


class TestCommandLine:
    """argparse entry points"""

    @pytest.fixture(autouse=True)
    def no_token(self, monkeypatch):
        for var in TOKEN_VARS:
            monkeypatch.setenv(var, "")

    def test_list_prints_tools(self, capsys):
        main(["list"])

        tools = json.loads(capsys.readouterr().out)
        assert tools[0]["name"] == "create-repository"

    def test_create_without_token_exits_nonzero(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["create", "demo"])

        assert exc.value.code == 1
        assert "not configured" in capsys.readouterr().out

    def test_create_json_record(self, capsys):
        with pytest.raises(SystemExit):
            main(["create", "demo", "--json"])

        record = json.loads(capsys.readouterr().out)
        assert record["status"] == "error"
        assert record["error"]["kind"] == "configuration"

    def test_validate_without_token(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["validate"])

        assert exc.value.code == 1
        assert "not configured" in capsys.readouterr().err

    @patch("github_mcp.cli.verify_token", return_value=(True, "Token authenticates as octocat"))
    def test_validate_success(self, _verify, capsys):
        main(["validate"])
        assert "octocat" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        main([])
        assert "usage" in capsys.readouterr().out.lower()

    def test_create_empty_name_reports_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["create", ""])

        assert exc.value.code == 1
        assert "non-empty" in capsys.readouterr().err

    def test_create_success_json(self, monkeypatch, capsys):
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "ghp_test")
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(201, json={"html_url": "https://example.test/user/demo"})
        ))
        transport = GitHubTransport("https://api.example.test", client=client)

        with patch.object(GitHubTransport, "from_config", return_value=transport):
            main(["create", "demo", "--json"])

        record = json.loads(capsys.readouterr().out)
        assert record["status"] == "success"
        assert record["locator"] == "https://example.test/user/demo"

    def test_create_upstream_failure_text(self, monkeypatch, capsys):
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "ghp_test")
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(422, text="name already exists")
        ))
        transport = GitHubTransport("https://api.example.test", client=client)

        with patch.object(GitHubTransport, "from_config", return_value=transport):
            with pytest.raises(SystemExit) as exc:
                main(["create", "demo", "--private"])

        assert exc.value.code == 1
        assert capsys.readouterr().out.strip() == "Failed to create repository: name already exists"

    @patch("github_mcp.cli.serve", side_effect=RuntimeError("stdio unavailable"))
    def test_up_startup_error_exits_nonzero(self, _serve, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["up"])

        assert exc.value.code == 1
        assert "Error starting server: stdio unavailable" in capsys.readouterr().err
