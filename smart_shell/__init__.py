"""
smart-shell - a project-aware, OS-translating command proxy for agents.

Exposed as an MCP server, it lets an agent:
- Run logical commands (install, run, test) per project
- Override commands per project, falling back to shared defaults
- Have Unix-style commands adapted for the host OS
- Get a suggested alternative (bun, yarn, pnpm, poetry, pipenv) on failure
"""

__version__ = "0.1.0"

from smart_shell.proxy import CommandProxy
from smart_shell.cross_platform import translate_command, translate_segment
from smart_shell.segments import split_segments

__all__ = ["CommandProxy", "translate_command", "translate_segment", "split_segments"]
