"""Writing the rule document and handing it to make."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class RuleDestinationError(Exception):
    """Raised when the rule document cannot be written."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        super().__init__(f"cannot write rules to {path}: {cause}")
        self.__cause__ = cause


def write_rules(text: str, path: Path) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise RuleDestinationError(path, e) from e
    logger.debug("Wrote %d bytes of rules to %s", len(text), path)
    return path


def remove_rules(path: Path) -> None:
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove %s: %s", path, e)


def run_executor(
    rules_path: Path,
    targets: Sequence[str],
    executor: str = "make",
    cwd: Path | None = None,
) -> int:
    """Run the executor on *rules_path* and return its exit status."""
    cmd = [*shlex.split(executor), "-f", str(rules_path), *targets]
    logger.info("Running %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, cwd=cwd)
    except FileNotFoundError:
        logger.error("Executor not found: %s", cmd[0])
        return 127
    return result.returncode
