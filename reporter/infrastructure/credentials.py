"""GitHub token resolution: flag, environment, then token file."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from reporter.domain.errors import MissingCredential

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GITHUB_TOKEN"
TOKEN_FILE = Path(".config") / "reporter" / "github_token.txt"


def token_file_path(home: Optional[str] = None) -> Path:
    """Location of the token file under the user's home directory."""
    if not home:
        home = os.getenv("HOME") or str(Path.home())
    return Path(home) / TOKEN_FILE


def resolve_token(
    flag_value: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[str] = None,
) -> str:
    """
    Resolve the GitHub API token.

    Args:
        flag_value: Value of the --token flag
        environ: Environment mapping. If None, uses os.environ.
        home: Home directory. If None, uses HOME from `environ`.

    Returns:
        Token string

    Raises:
        MissingCredential: If no source provides a non-empty token
    """
    if flag_value:
        logger.debug("Using GitHub token from --token flag")
        return flag_value

    if environ is None:
        environ = os.environ

    token = environ.get(TOKEN_ENV_VAR, "")
    if token:
        logger.debug(f"Using GitHub token from {TOKEN_ENV_VAR}")
        return token

    path = token_file_path(home or environ.get("HOME"))
    try:
        token = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.debug(f"Cannot read token file {path}: {e}")
        token = ""

    if not token:
        raise MissingCredential(str(path))

    logger.debug(f"Using GitHub token from {path}")
    return token
