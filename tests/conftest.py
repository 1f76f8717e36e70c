import stat
import sys
from pathlib import Path

import pytest

from pkgkeys.config import Config

# A stand-in for gpg that keeps its "keyring" as a text file of key IDs
# under --homedir. Any key shaped like a key ID or fingerprint can be
# received; anything else fails the whole --recv-keys call, after the
# good ones have been imported, the way gpg does.
_FAKE_GPG = r"""#!@PYTHON@
import re
import sys
from pathlib import Path

args = sys.argv[1:]


def operands(command):
    rest = args[args.index(command) + 1:]
    return rest[1:] if rest[:1] == ["--"] else rest


home = Path(args[args.index("--homedir") + 1])
home.mkdir(parents=True, exist_ok=True)
ring = home / "pubring.txt"
with open(home / "calls.log", "a") as log:
    log.write(" ".join(args) + "\n")

have = set(ring.read_text().split()) if ring.exists() else set()

if "--list-keys" in args:
    keys = operands("--list-keys")
    sys.exit(0 if all(k.upper() in have for k in keys) else 2)

if "--recv-keys" in args:
    keys = operands("--recv-keys")
    bad = [k for k in keys if not re.fullmatch(r"[0-9A-Fa-f]{8}|[0-9A-Fa-f]{16}|[0-9A-Fa-f]{40}", k)]
    with open(ring, "a") as f:
        for k in keys:
            if k not in bad:
                f.write(k.upper() + "\n")
    for k in bad:
        print(f"gpg: key \"{k}\" not found: Not found", file=sys.stderr)
    sys.exit(2 if bad else 0)

sys.exit(2)
"""


@pytest.fixture
def keyring(tmp_path) -> Path:
    path = tmp_path / "keyring"
    path.mkdir()
    return path


@pytest.fixture
def fake_gpg(tmp_path) -> Path:
    path = tmp_path / "gpg"
    path.write_text(_FAKE_GPG.replace("@PYTHON@", sys.executable))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def config(fake_gpg, keyring) -> Config:
    return Config(gpg_bin=str(fake_gpg), gpg_flags=f"--homedir {keyring}", timeout=30)


@pytest.fixture
def trust(keyring):
    """
    Puts the given keys straight into the fake keyring.
    """

    def _trust(*keys: str) -> None:
        with open(keyring / "pubring.txt", "a") as f:
            for key in keys:
                f.write(key.upper() + "\n")

    return _trust


@pytest.fixture
def gpg_calls(keyring):
    """
    Returns the argv (minus the binary) of every fake gpg call so far.
    """

    def _calls(command: str | None = None) -> list[str]:
        log = keyring / "calls.log"
        lines = log.read_text().splitlines() if log.exists() else []
        if command is not None:
            lines = [line for line in lines if command in line.split()]
        return lines

    return _calls
