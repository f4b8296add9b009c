"""
Segment splitting for compound shell commands.

Breaks a raw command line such as ``npm ci && npm test | tee log`` into an
ordered list of command fragments and the separators between them, so each
fragment can be translated on its own and the line put back together.
"""

from dataclasses import dataclass
from typing import List, Union


# Two-character separators must be checked before the single ones so that
# ``&&`` is never read as two ``&`` and ``||`` never as two pipes.
TWO_CHAR_SEPARATORS = ("&&", "||")
ONE_CHAR_SEPARATORS = ("|", ";")
SEPARATORS = frozenset(TWO_CHAR_SEPARATORS + ONE_CHAR_SEPARATORS)


@dataclass(frozen=True)
class Fragment:
    """A single command between separators (already trimmed, never empty)."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Separator:
    """One of ``&&``, ``||``, ``|`` or ``;``."""

    token: str

    def __str__(self) -> str:
        return self.token


Segment = Union[Fragment, Separator]


def split_segments(raw: str) -> List[Segment]:
    """
    Split *raw* into fragments and separators, preserving order.

    Fragments that are empty after trimming are dropped, separators never
    are: ``"a;;b"`` gives ``[a, ;, ;, b]`` and a leading or trailing
    separator stays in the list. Blank input yields ``[]``.
    """
    segments: List[Segment] = []
    buf: List[str] = []

    def flush():
        text = "".join(buf).strip()
        if text:
            segments.append(Fragment(text))
        buf.clear()

    i = 0
    while i < len(raw):
        two = raw[i:i + 2]
        if two in TWO_CHAR_SEPARATORS:
            flush()
            segments.append(Separator(two))
            i += 2
            continue
        ch = raw[i]
        if ch in ONE_CHAR_SEPARATORS:
            flush()
            segments.append(Separator(ch))
            i += 1
            continue
        buf.append(ch)
        i += 1

    flush()
    return segments


def join_segments(segments: List[Segment]) -> str:
    """Reassemble segments with single spaces between every token."""
    return " ".join(str(seg) for seg in segments)
