# pkgkeys:
#   check the PGP keys a set of package builds requires against the
#   local keyring, and offer to import the missing ones.

from pkgkeys.config import Config
from pkgkeys.errors import (
    AgentUnavailableError,
    AURError,
    ImportDeclinedError,
    KeyImportError,
    MissingMetadataError,
    NoKeysError,
    PGPKeyError,
)
from pkgkeys.gpg import has_key, import_keys
from pkgkeys.keys import (
    ARROW,
    check_pgp_keys,
    format_keys_to_import,
    format_pkgbase,
    missing_keys,
    required_keys,
)
from pkgkeys.models import BuildMetadata, KeySet, Package

__all__ = [
    "ARROW",
    "AURError",
    "AgentUnavailableError",
    "BuildMetadata",
    "Config",
    "ImportDeclinedError",
    "KeyImportError",
    "KeySet",
    "MissingMetadataError",
    "NoKeysError",
    "PGPKeyError",
    "Package",
    "check_pgp_keys",
    "format_keys_to_import",
    "format_pkgbase",
    "has_key",
    "import_keys",
    "missing_keys",
    "required_keys",
]
