"""
Fallback suggestions for failed commands.

When a resolved command exits non-zero, the suggestion engine looks at the
command and the project's detected flavor and proposes an alternative for
the calling agent to try, e.g. ``bun install`` instead of ``npm install``
in a bun project. Suggestions are advisory text and are never executed.

Rewrites work on the segment sequence from :mod:`smart_shell.segments`
and only ever replace the program token of a segment, so ``pnpm install``
is not mistaken for an npm call and ``echo npm`` is left alone. Leading
``VAR=value`` assignments and a ``cross-env`` wrapper are skipped when
looking for the program.
"""

import re
from typing import Callable, List, Optional, Tuple

from smart_shell.cross_platform import split_head
from smart_shell.flavor_detector import ProjectFlavor
from smart_shell.segments import Fragment, Segment, join_segments, split_segments

_PIP_WORD = re.compile(r"\bpip\b")

# (env prefix, program, rest)
_COMMAND_RE = re.compile(
    r"^((?:(?:[A-Za-z_][A-Za-z0-9_]*=\S*|cross-env)\s+)*)(\S+)(.*)$",
    re.DOTALL,
)


def _split_command(text: str) -> Optional[Tuple[str, str, str]]:
    m = _COMMAND_RE.match(text)
    if not m:
        return None
    return m.group(1), m.group(2), m.group(3)


def _program(text: str) -> str:
    parts = _split_command(text)
    return parts[1].lower() if parts else ""


def _invokes(segments: List[Segment], program: str) -> bool:
    """True if any segment runs *program*."""
    return any(
        isinstance(seg, Fragment) and _program(seg.text) == program
        for seg in segments
    )


def _rewrite(segments: List[Segment], rewrite: Callable[[str, str], Optional[str]]) -> str:
    """
    Apply *rewrite(program, rest)* to every fragment; None keeps the fragment.
    """
    out: List[Segment] = []
    for seg in segments:
        if isinstance(seg, Fragment):
            parts = _split_command(seg.text)
            if parts:
                prefix, program, rest = parts
                replaced = rewrite(program, rest)
                if replaced is not None:
                    seg = Fragment(f"{prefix}{replaced}".strip())
        out.append(seg)
    return join_segments(out)


def _npm_to(program: str) -> Callable[[str, str], Optional[str]]:
    """``npm <anything>`` -> ``<program> <anything>``."""
    def rewrite(head: str, tail: str) -> Optional[str]:
        if head.lower() != "npm":
            return None
        return f"{program}{tail}"
    return rewrite


def _npm_run_to(replacement: str) -> Callable[[str, str], Optional[str]]:
    """``npm run <script>`` -> ``<replacement> <script>``."""
    def rewrite(head: str, tail: str) -> Optional[str]:
        if head.lower() != "npm":
            return None
        sub = split_head(tail.lstrip())
        if sub is None or sub[0].lower() != "run":
            return None
        return f"{replacement}{sub[1]}"
    return rewrite


def suggest(command: str, stderr: str, flavor: ProjectFlavor,
            key: Optional[str] = None) -> Optional[str]:
    """
    Propose an alternative to a failed *command*, or None.

    Args:
        command: The command as resolved, before OS translation
        stderr: Output of the failed run (currently unused by the rules)
        flavor: Flavors detected in the working directory
        key: The logical command key that was requested, if any

    Rules are tried in order and the first one that applies wins:

    1. npm commands: bun, then yarn, then pnpm. For yarn and pnpm only
       ``npm run`` is rewritten; a command without one comes back as is.
    2. pip commands: poetry, then pipenv.
    """
    segments = split_segments(command)

    if _invokes(segments, "npm") and (flavor.bun or flavor.yarn or flavor.pnpm):
        if flavor.bun:
            if key == "install":
                return "bun install"
            if key == "run":
                return "bun run dev"
            return _rewrite(segments, _npm_to("bun"))
        if flavor.yarn:
            if key == "install":
                return "yarn install"
            return _rewrite(segments, _npm_run_to("yarn"))
        if key == "install":
            return "pnpm install"
        return _rewrite(segments, _npm_run_to("pnpm run"))

    if _PIP_WORD.search(command.lower()):
        if flavor.poetry:
            return "poetry install"
        if flavor.pipenv:
            return "pipenv install"

    return None
