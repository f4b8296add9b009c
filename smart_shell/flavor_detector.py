"""
Package-manager flavor detection for smart-shell.

Scans the working directory for lockfiles and manifest markers that show
which package/runtime managers a project uses (bun, yarn, pnpm, poetry,
pipenv). The result feeds the suggestion engine when a command fails.
"""

import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ProjectFlavor:
    """Which ecosystems were fingerprinted. Flags are independent."""

    bun: bool = False
    yarn: bool = False
    pnpm: bool = False
    poetry: bool = False
    pipenv: bool = False

    def has_any(self) -> bool:
        return any(asdict(self).values())

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


# ------------------------------------------------------------------
# Probe helpers
# ------------------------------------------------------------------

def _exists(cwd: Path, name: str) -> bool:
    try:
        return (cwd / name).exists()
    except OSError:
        return False


def _read_text(path: Path) -> str:
    """Read a text file, returning "" on any failure."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


_BUN_PACKAGE_MANAGER = re.compile(r'"packageManager"\s*:\s*"bun@', re.IGNORECASE)
_POETRY_SECTION = re.compile(r"\[tool\.poetry\]", re.IGNORECASE)


# ------------------------------------------------------------------
# Detectors
# ------------------------------------------------------------------

_DETECTORS: List[Tuple[str, Callable[[Path], bool]]] = []   # populated below


def _register(flavor: str):
    """Decorator that adds a detector for *flavor* to the registry."""
    def decorator(fn):
        _DETECTORS.append((flavor, fn))
        return fn
    return decorator


@_register("bun")
def _detect_bun(cwd: Path) -> bool:
    if _exists(cwd, "bun.lockb") or _exists(cwd, "bun.lock"):
        return True
    return bool(_BUN_PACKAGE_MANAGER.search(_read_text(cwd / "package.json")))


@_register("yarn")
def _detect_yarn(cwd: Path) -> bool:
    return _exists(cwd, "yarn.lock")


@_register("pnpm")
def _detect_pnpm(cwd: Path) -> bool:
    return _exists(cwd, "pnpm-lock.yaml")


@_register("poetry")
def _detect_poetry(cwd: Path) -> bool:
    if _exists(cwd, "poetry.lock"):
        return True
    return bool(_POETRY_SECTION.search(_read_text(cwd / "pyproject.toml")))


@_register("pipenv")
def _detect_pipenv(cwd: Path) -> bool:
    return _exists(cwd, "Pipfile")


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def detect(cwd: Optional[Path] = None) -> ProjectFlavor:
    """Probe *cwd* (default: the process working directory) for every flavor."""
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    return ProjectFlavor(**{flavor: detector(cwd) for flavor, detector in _DETECTORS})
