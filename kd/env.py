"""
Environment file loading for kd.

Reads KEY=VALUE files into an ordered list of container environment variables.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class EnvFileError(OSError):
    """Raised when a configured environment file cannot be read."""


@dataclass(frozen=True)
class EnvVar:
    """A single container environment variable."""

    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


def parse_env(content: str) -> Tuple[EnvVar, ...]:
    """
    Parse KEY=VALUE lines.

    Each line is split on its first "=". Lines without "=" and entries with a
    blank key are skipped. Keys and values are stripped of surrounding
    whitespace. Duplicate keys are kept in order.

    Args:
        content: Raw file content

    Returns:
        Environment variables in line order
    """
    env_vars = []
    for line in content.split("\n"):
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        env_vars.append(EnvVar(name=key, value=value.strip()))
    return tuple(env_vars)


def load_env(source: Optional[str]) -> Tuple[EnvVar, ...]:
    """
    Load environment variables from a KEY=VALUE file.

    Args:
        source: Path to the env file, or None/"" for no variables

    Returns:
        Environment variables in file order (empty when source is unset)

    Raises:
        EnvFileError: If the file cannot be read
    """
    if not source:
        return ()

    path = Path(source)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileError(f"Cannot read env file {source}: {e}") from e

    if not content:
        logger.debug("Env file %s is empty", source)
        return ()

    env_vars = parse_env(content)
    logger.debug("Loaded %d environment variables from %s", len(env_vars), source)
    return env_vars
