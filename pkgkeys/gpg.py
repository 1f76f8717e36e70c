# gpg:
#   the two questions we ask the trust-store agent: "do you have key K?"
#   and "fetch K1..Kn from the keyserver". Only exit status is consumed.

import logging
import subprocess

from pkgkeys.config import Config
from pkgkeys.errors import AgentUnavailableError, KeyImportError

logger = logging.getLogger(__name__)


def _run(args: list[str], config: Config) -> subprocess.CompletedProcess:
    logger.debug("running: %s", " ".join(args))
    try:
        return subprocess.run(
            args, check=False, capture_output=True, timeout=config.timeout
        )
    except subprocess.TimeoutExpired as exc:
        raise AgentUnavailableError(
            f"{args[0]} did not finish within {config.timeout:g}s"
        ) from exc
    except OSError as exc:
        raise AgentUnavailableError(f"unable to run {args[0]}: {exc}") from exc


def has_key(key: str, config: Config) -> bool:
    """
    Returns whether `key` is already in the keyring.

    A non-zero exit from `--list-keys` means "not present"; failing to
    run gpg at all raises instead. gpg does not tell a missing key apart
    from other errors (an unusable --homedir, say) by exit status, so
    those read as "not present" too and surface when importing.

    `key` always follows `--`, so a key ID shaped like an option is
    looked up as a key, never run as a flag.
    """
    result = _run(config.gpg_args("--list-keys", "--", key), config)
    present = result.returncode == 0
    logger.debug("%s: %s", key, "present" if present else "missing")
    return present


def import_keys(keys: list[str], config: Config) -> None:
    if not keys:
        return

    args = []
    if config.keyserver:
        args += ["--keyserver", config.keyserver]
    args += ["--recv-keys", "--", *keys]

    logger.info("importing %d key(s) with %s", len(keys), config.gpg_bin)
    result = _run(config.gpg_args(*args), config)
    if result.returncode != 0:
        stderr = result.stderr.decode(errors="ignore")
        logger.warning("gpg --recv-keys exited %d", result.returncode)
        raise KeyImportError(keys, stderr)
