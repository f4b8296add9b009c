"""
Cross-platform command translation for smart-shell.

Rewrites the textual form of a shell command for the host OS using a
table-driven mapping (see :class:`~smart_shell.tables.TranslationTable`):

  ls -la            ->  dir -la              (windows)
  rm -rf build      ->  rmdir /s /q build    (windows, reserved "rm -rf" key)
  cat a && ls | x   ->  type a && dir | x    (each segment translated alone)

Only the head token of each segment is rewritten. Flags and arguments are
kept as written, so ``ls -la`` becomes ``dir -la`` even though ``-la``
means nothing to ``dir``; the one exception is the recursive-delete idiom,
whose ``-rf`` flag is dropped.
"""

import platform
import re
from typing import Iterable, Optional, Tuple

from smart_shell.segments import Fragment, join_segments, split_segments
from smart_shell.tables import OS_NAMES, RECURSIVE_DELETE_KEY, TranslationTable


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def get_os(system: Optional[str] = None) -> str:
    """
    Map ``platform.system()`` (or *system*) to ``windows``, ``darwin`` or
    ``linux``. Anything unrecognised is treated as linux.
    """
    name = (system if system is not None else platform.system()).lower()
    if name in ("windows", "win32"):
        return "windows"
    if name == "darwin":
        return "darwin"
    return "linux"


def normalize_os(name: str) -> str:
    """Validate an explicit OS identifier."""
    lower = name.strip().lower()
    if lower not in OS_NAMES:
        raise ValueError(f"Unknown OS {name!r}, expected one of {', '.join(OS_NAMES)}")
    return lower


_HEAD_RE = re.compile(r"^(\S+)(.*)$", re.DOTALL)


def split_head(segment: str) -> Optional[Tuple[str, str]]:
    """
    Split *segment* into ``(head, tail)``.

    The head is the first run of non-whitespace; the tail is everything
    after it, leading whitespace included. Returns None when the segment
    does not start with a non-whitespace character.
    """
    m = _HEAD_RE.match(segment)
    if not m:
        return None
    return m.group(1), m.group(2)


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------

RECURSIVE_DELETE_HEAD = "rm"
RECURSIVE_FORCE_FLAG = "-rf"
_FORCE_FLAG_RE = re.compile(r"^-rf\s*")


def translate_segment(segment: str, target_os: str, table: TranslationTable) -> str:
    """
    Translate a single command segment (no separators) for *target_os*.

    Parameters
    ----------
    segment : str
        One command, e.g. ``"ls -la src"``.
    target_os : str
        ``windows``, ``linux`` or ``darwin``.
    table : TranslationTable
        The loaded translation table.

    Returns
    -------
    str
        The segment with its head replaced, trimmed. Unmapped heads pass
        through unchanged.
    """
    parts = split_head(segment)
    if parts is None:
        return segment
    head, tail = parts

    entry = table.lookup(head)
    if entry is not None:
        return f"{entry.get(target_os) or head}{tail}".strip()

    # "rm -rf <path>": the flag has no meaning on the target, drop it
    if head.lower() == RECURSIVE_DELETE_HEAD and tail.strip().startswith(RECURSIVE_FORCE_FLAG):
        mapped = table.replacement(RECURSIVE_DELETE_KEY, target_os)
        if mapped:
            rest = _FORCE_FLAG_RE.sub("", tail.strip(), count=1)
            return f"{mapped} {rest}".strip()

    return f"{head}{tail}".strip()


def translate_command(command: str, target_os: str, table: TranslationTable) -> str:
    """
    Translate a full command line by translating each segment independently.

    Separators (``&&``, ``||``, ``|``, ``;``) pass through untouched and
    every token is joined back with single spaces.
    """
    translated = []
    for seg in split_segments(command):
        if isinstance(seg, Fragment):
            translated.append(Fragment(translate_segment(seg.text, target_os, table)))
        else:
            translated.append(seg)
    return join_segments(translated)


# ---------------------------------------------------------------------------
# Argument quoting
# ---------------------------------------------------------------------------

_SAFE_ARG_RE = re.compile(r"[A-Za-z0-9_./-]+")


def quote_arg(arg: str) -> str:
    """
    Quote one extra argument for appending to a command line.

    Bare tokens made only of letters, digits and ``_ . / -`` pass through;
    anything else is wrapped in double quotes with inner quotes escaped.
    """
    if arg is None:
        return ""
    if _SAFE_ARG_RE.fullmatch(arg):
        return arg
    escaped = arg.replace('"', '\\"')
    return f'"{escaped}"'


def build_command_line(command: str, args: Optional[Iterable[str]] = None) -> str:
    """Append quoted *args* to *command*, skipping empty pieces."""
    pieces = [command] + [quote_arg(a) for a in (args or [])]
    return " ".join(p for p in pieces if p)
