"""Loading of environment files into the process environment.

Files are consulted in priority order:

1. `.env.<env>.local`
2. `.env.local` (not for the "test" environment)
3. `.env.<env>`
4. `.env`

The first file that defines a variable wins, and variables already present in
the process environment are never overwritten.
"""

from pathlib import Path

from dotenv import load_dotenv
from dotenv.parser import parse_stream

import constants
from configuration.errors import EnvLoadError
from log import get_logger

logger = get_logger(__name__)


def env_file_candidates(env: str, app_base_dir: str | Path) -> list[Path]:
    """
    List the environment files to consult, highest priority first.

    Parameters:
        env: Name of the environment (e.g. "dev", "prod", "test").
        app_base_dir: Directory holding the environment files.

    Returns:
        list[Path]: Candidate file paths; they need not exist.
    """
    base_dir = Path(app_base_dir)
    env_file = f"{constants.ENV_FILE_NAME}.{env}"
    candidates = [base_dir / f"{env_file}{constants.LOCAL_ENV_SUFFIX}"]
    if env != constants.TEST_ENVIRONMENT:
        candidates.append(
            base_dir / f"{constants.ENV_FILE_NAME}{constants.LOCAL_ENV_SUFFIX}"
        )
    candidates.append(base_dir / env_file)
    candidates.append(base_dir / constants.ENV_FILE_NAME)
    return candidates


def _check_env_file(path: Path) -> None:
    """
    Make sure every statement of an environment file can be parsed.

    Parameters:
        path: The environment file to check.

    Raises:
        EnvLoadError: If the file cannot be read or has an invalid statement.
    """
    try:
        with open(path, "r", encoding="utf-8") as stream:
            for binding in parse_stream(stream):
                if binding.error:
                    raise EnvLoadError(
                        path,
                        "could not parse statement starting at line "
                        f"{binding.original.line}",
                    )
    except (OSError, UnicodeDecodeError) as e:
        raise EnvLoadError(path, e) from e


def load_env_vars(env: str, app_base_dir: str | Path) -> list[Path]:
    """
    Load the environment files and set their entries as process env vars.

    Missing files are skipped; any other path with a candidate name, such as
    a directory, is an error. Entries never overwrite variables that are
    already set, whether they came from a higher priority file or from the
    process environment itself.

    Parameters:
        env: Name of the environment (e.g. "dev", "prod", "test").
        app_base_dir: Directory holding the environment files.

    Returns:
        list[Path]: The files that were loaded, in load order.

    Raises:
        EnvLoadError: If an existing candidate cannot be read or parsed.
    """
    loaded: list[Path] = []
    for candidate in env_file_candidates(env, app_base_dir):
        if not candidate.exists():
            continue
        _check_env_file(candidate)
        load_dotenv(candidate, override=False, encoding="utf-8")
        logger.debug("Loaded environment file %s", candidate)
        loaded.append(candidate)
    return loaded
