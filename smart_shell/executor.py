"""
Shell command execution for smart-shell.
Runs one command string through the system shell and captures its output.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from smart_shell.log import get_logger

logger = get_logger(__name__)

# Exit status shells use for "command not found"
SPAWN_FAILURE_EXIT_CODE = 127


@dataclass
class ExecutionResult:
    """Output of one finished command."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exitCode": self.exit_code,
        }


Runner = Callable[[str, Optional[Path]], ExecutionResult]


def run_shell(command: str, cwd: Optional[Path] = None) -> ExecutionResult:
    """
    Execute *command* through the system shell and wait for it to exit.

    There is no timeout: the call returns once the process has exited and
    both output streams have been read in full. A failure to spawn the
    shell itself is reported as exit code 127 with the error in stderr.
    """
    logger.info("Running: %s", command)
    try:
        proc = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        logger.error("Could not start %r: %s", command, e)
        return ExecutionResult(
            stdout="",
            stderr=f"Execution error: {e}",
            exit_code=SPAWN_FAILURE_EXIT_CODE,
        )

    logger.info("Exit code: %s", proc.returncode)
    return ExecutionResult(
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        exit_code=proc.returncode,
    )
