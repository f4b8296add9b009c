"""
Tests for MCP tool registration and the command-line entry point.
"""

import asyncio
import json

from pygments import lex
from pygments.token import Name, Operator, Punctuation

from smart_shell import main as cli
from smart_shell.config import ConfigPaths
from smart_shell.highlighting import CommandLexer
from smart_shell.proxy import CommandProxy
from smart_shell.server import create_server

from conftest import FakeRunner

TOOL_NAMES = {
    "executeCommand",
    "getProjectCommands",
    "setProjectCommand",
    "removeProjectCommand",
    "translateCommand",
}


def _proxy(tmp_path, os_name="windows"):
    return CommandProxy(ConfigPaths(tmp_path, tmp_path / "cfg"), os_name, runner=FakeRunner())


def _text(result):
    """Pull the JSON text out of a call_tool result (content list or (content, structured))."""
    if isinstance(result, tuple):
        result = result[0]
    return json.loads(result[0].text)


# ---------------------------------------------------------------------------
# MCP tools
# ---------------------------------------------------------------------------

def test_tools_registered(tmp_path):
    tools = asyncio.run(create_server(_proxy(tmp_path)).list_tools())
    assert {tool.name for tool in tools} == TOOL_NAMES

    execute = next(tool for tool in tools if tool.name == "executeCommand")
    assert set(execute.inputSchema["properties"]) == {"projectName", "commandKey", "args"}
    assert set(execute.inputSchema["required"]) == {"projectName", "commandKey"}


def test_translate_tool(tmp_path):
    (tmp_path / "command-map.json").write_text(
        json.dumps({"base": {"ls": {"windows": "dir"}}}), encoding="utf-8")
    server = create_server(_proxy(tmp_path))

    result = asyncio.run(server.call_tool("translateCommand", {"rawCommand": "ls -la | more"}))
    assert _text(result) == {"os": "windows", "original": "ls -la | more", "translated": "dir -la | more"}


def test_execute_tool_not_found(tmp_path):
    server = create_server(_proxy(tmp_path))
    result = asyncio.run(server.call_tool(
        "executeCommand", {"projectName": "web", "commandKey": "nope"}))
    assert _text(result)["errorCode"] == "COMMAND_NOT_FOUND"


# ---------------------------------------------------------------------------
# Highlighting
# ---------------------------------------------------------------------------

def test_lexer_marks_flags_and_separators():
    tokens = [(tt, value) for tt, value in lex("rmdir /s /q out && dir -la ; ls | more", CommandLexer())]
    assert (Name.Tag, "/s") in tokens
    assert (Name.Tag, "-la") in tokens
    assert (Operator, "&&") in tokens
    assert (Operator, "|") in tokens
    assert (Punctuation, ";") in tokens


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_cli_translate(tmp_path, monkeypatch):
    printed = []
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    monkeypatch.setattr("smart_shell.highlighting.print_translation",
                        lambda *args: printed.append(args))
    (tmp_path / "command-map.json").write_text(
        json.dumps({"base": {"rm -rf": {"windows": "rmdir /s /q"}}}), encoding="utf-8")

    code = cli.main(["--config-dir", str(tmp_path), "--cwd", str(tmp_path),
                     "--settings", str(tmp_path / "settings.json"),
                     "translate", "rm -rf dist", "--os", "windows"])

    assert code == 0
    assert printed == [("windows", "rm -rf dist", "rmdir /s /q dist")]


def test_cli_strict_config_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    (tmp_path / "command-map.json").write_text("nope", encoding="utf-8")

    code = cli.main(["--config-dir", str(tmp_path), "--cwd", str(tmp_path),
                     "--settings", str(tmp_path / "settings.json"), "--strict-config",
                     "translate", "ls"])

    assert code == 1
    assert "invalid JSON" in capsys.readouterr().err


def test_cli_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.command is None
    assert args.strict_config is None
    assert args.settings is None
