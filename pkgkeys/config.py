# config:
#   where the trust-store agent lives and how to talk to it.

import os
import shlex
import shutil
from dataclasses import dataclass, field

_DEFAULT_TIMEOUT = 120.0
_DEFAULT_AUR_URL = "https://aur.archlinux.org"


def _default_gpg() -> str:
    return shutil.which("gpg") or "gpg"


@dataclass(frozen=True)
class Config:
    gpg_bin: str = field(default_factory=_default_gpg)
    # e.g. "--homedir /tmp/keyring"; split shell-style before use.
    gpg_flags: str = ""
    keyserver: str | None = None
    timeout: float = _DEFAULT_TIMEOUT
    aur_url: str = _DEFAULT_AUR_URL

    @classmethod
    def from_env(cls) -> "Config":
        timeout = os.getenv("PKGKEYS_GPG_TIMEOUT")
        try:
            timeout = float(timeout) if timeout else _DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(f"PKGKEYS_GPG_TIMEOUT is not a number: {timeout!r}") from None

        return cls(
            gpg_bin=os.getenv("PKGKEYS_GPG", _default_gpg()),
            gpg_flags=os.getenv("PKGKEYS_GPG_FLAGS", ""),
            keyserver=os.getenv("PKGKEYS_KEYSERVER") or None,
            timeout=timeout,
            aur_url=os.getenv("PKGKEYS_AUR_URL", _DEFAULT_AUR_URL).rstrip("/"),
        )

    def gpg_args(self, *args: str) -> list[str]:
        """
        Returns the full argv for a gpg invocation: binary, configured
        flags, then `args`.
        """
        return [self.gpg_bin, *shlex.split(self.gpg_flags), *args]
