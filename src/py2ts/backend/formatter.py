"""
Block formatting.

Generated blocks are handed to a formatter one at a time. A formatter failure
only costs that block its formatting: the block keeps its generated text and
the other blocks are unaffected.
"""

from abc import ABC, abstractmethod
import logging
import subprocess
from typing import List, Optional, Sequence

from ..shared.errors import FormatterError
from ..utils.config import (
    PRETTIER_ARGUMENTS, PRETTIER_COMMAND, PRETTIER_STDIN_FILEPATH, PRETTIER_TIMEOUT,
)

logger = logging.getLogger(__name__)


class Formatter(ABC):
    """Text -> text; raises FormatterError (or anything else) on failure."""

    @abstractmethod
    def format(self, text: str) -> str:
        pass


class PrettierFormatter(Formatter):
    """
    Runs prettier as a subprocess, reading the block on stdin.

    The command defaults to PY2TS_PRETTIER (or `npx --no-install prettier`).
    """

    def __init__(self, command: Optional[Sequence[str]] = None, timeout: Optional[float] = None):
        self.command = list(command) if command is not None else list(PRETTIER_COMMAND)
        self.timeout = PRETTIER_TIMEOUT if timeout is None else timeout

    def arguments(self) -> List[str]:
        return [*self.command, "--stdin-filepath", PRETTIER_STDIN_FILEPATH, *PRETTIER_ARGUMENTS]

    def format(self, text: str) -> str:
        try:
            completed = subprocess.run(
                self.arguments(),
                input=text,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise FormatterError(f"formatter not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise FormatterError(f"formatter timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip().splitlines()
            raise FormatterError(f"formatter failed: {detail[0] if detail else e.returncode}") from e
        return completed.stdout


def format_blocks(blocks: List[str], formatter: Formatter) -> List[str]:
    """Format each block independently; a failing block keeps its text."""
    result: List[str] = []
    for number, block in enumerate(blocks, start=1):
        try:
            result.append(formatter.format(block))
        except Exception as e:
            logger.warning("block %d of %d left unformatted: %s", number, len(blocks), e)
            result.append(block)
    return result
