"""
JSON file storage backend.
"""

import json
from pathlib import Path
from typing import Any, Optional

from smart_shell.errors import ConfigError
from smart_shell.storage import StorageBackend


class JSONStorage(StorageBackend):
    """Stores each document as a pretty-printed JSON file."""

    def read(self, path: Path) -> Optional[Any]:
        """Read and decode *path*, or None if the file does not exist."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"cannot read file: {e}", path) from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON: {e}", path) from e

    def write(self, path: Path, data: Any) -> None:
        """Write *data* to *path*, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
