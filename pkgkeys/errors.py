# errors:
#   every failure the key check can end in. All of them are terminal
#   to `check_pgp_keys`; nothing here is retried.


class PGPKeyError(Exception):
    pass


class MissingMetadataError(PGPKeyError, KeyError):
    """
    A requested package base has no build metadata registered.
    """

    def __init__(self, pkgbase: str):
        super().__init__(pkgbase)
        self.pkgbase = pkgbase

    def __str__(self) -> str:
        return f"no build metadata for package base: {self.pkgbase}"


class NoKeysError(PGPKeyError):
    pass


class AgentUnavailableError(PGPKeyError):
    pass


class KeyImportError(PGPKeyError):
    def __init__(self, keys: list[str], stderr: str = ""):
        self.keys = list(keys)
        self.stderr = stderr
        msg = f"problem importing keys: {', '.join(self.keys)}"
        if stderr:
            msg = f"{msg}\n{stderr.strip()}"
        super().__init__(msg)


class ImportDeclinedError(PGPKeyError):
    pass


class AURError(PGPKeyError):
    pass
