"""
smart-shell MCP server.

Exposes the command proxy as five MCP tools over stdio. Every tool returns
its payload as pretty-printed JSON text; errors are payloads too.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from smart_shell import __version__
from smart_shell.log import get_logger
from smart_shell.proxy import CommandProxy

logger = get_logger(__name__)

SERVER_NAME = "smart-shell"


def _dump(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def register_proxy_tools(mcp: Any, proxy: CommandProxy) -> None:
    """Register the command proxy tools on *mcp*."""

    @mcp.tool(
        name="executeCommand",
        description="Executes a command after applying project overrides and OS translation",
    )
    async def execute_command(projectName: str, commandKey: str,
                              args: Optional[List[str]] = None) -> str:
        """
        Execute a project-aware command.

        projectName selects overrides, commandKey is the logical key
        (install, run, test...), args are extra CLI args to append.
        """
        # Blocking file and process I/O runs off the event loop
        result = await asyncio.to_thread(proxy.execute_command, projectName, commandKey, args)
        return _dump(result)

    @mcp.tool(name="getProjectCommands", description="Return merged command mappings for a project")
    async def get_project_commands(projectName: str) -> str:
        return _dump(await asyncio.to_thread(proxy.get_project_commands, projectName))

    @mcp.tool(name="setProjectCommand", description="Add or update a project-specific command override")
    async def set_project_command(projectName: str, key: str, value: str) -> str:
        return _dump(await asyncio.to_thread(proxy.set_project_command, projectName, key, value))

    @mcp.tool(name="removeProjectCommand", description="Delete a command override for a project")
    async def remove_project_command(projectName: str, key: str) -> str:
        return _dump(await asyncio.to_thread(proxy.remove_project_command, projectName, key))

    @mcp.tool(
        name="translateCommand",
        description="Show how a generic command would be adapted for the current OS",
    )
    async def translate_command(rawCommand: str) -> str:
        return _dump(await asyncio.to_thread(proxy.translate_command, rawCommand))


def create_server(proxy: CommandProxy) -> FastMCP:
    """Build a FastMCP server with all smart-shell tools registered."""
    mcp = FastMCP(SERVER_NAME)
    register_proxy_tools(mcp, proxy)
    return mcp


def serve(proxy: CommandProxy) -> None:
    """Run the server on stdio until the client disconnects."""
    logger.info("smart-shell %s starting (os=%s, cwd=%s)", __version__, proxy.os_name, proxy.cwd)
    create_server(proxy).run()
