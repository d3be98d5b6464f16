"""Install dependencies and compile a generated project with npm."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from lightning_mcp.exceptions import BuildError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 600.0

_STEPS: list[tuple[str, list[str]]] = [
    ("Dependency installation", ["npm", "install"]),
    ("Build", ["npm", "run", "build"]),
]


def install_and_build(output_dir: str | Path, timeout: float = DEFAULT_TIMEOUT) -> None:
    """Run ``npm install`` and then ``npm run build`` inside *output_dir*.

    Args:
        output_dir: The generated project directory.
        timeout: Seconds allowed for each step.

    Raises:
        BuildError: If ``npm`` is not installed, a step times out, or a step
            exits non-zero. The build is not attempted after a failed
            install.
    """
    cwd = Path(output_dir)
    for label, command in _STEPS:
        logger.info("Running %s in %s", " ".join(command), cwd)
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as exc:
            raise BuildError(
                "npm not found. Install Node.js (https://nodejs.org) and retry, "
                "or pass --no-install"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise BuildError(f"{label} timed out after {timeout:g} seconds") from exc

        if result.returncode != 0:
            # last lines of npm's output are the useful part
            tail = (result.stderr or result.stdout or "").splitlines()[-20:]
            detail = "\n".join(f"  {line}" for line in tail)
            message = f"{label} failed with exit code {result.returncode}"
            raise BuildError(f"{message}\n{detail}" if detail else message)

        logger.info("%s completed successfully", label)
