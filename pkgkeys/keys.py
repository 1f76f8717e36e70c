# keys:
#   work out which signing keys a set of package builds needs, which of
#   those the keyring is missing, ask about them, and import them.

import logging
from collections.abc import Callable, Iterable, Mapping

from pkgkeys import gpg
from pkgkeys.config import Config
from pkgkeys.errors import ImportDeclinedError, MissingMetadataError, NoKeysError
from pkgkeys.models import BuildMetadata, KeySet, Package

logger = logging.getLogger(__name__)

# Shared with the CLI's other prompts.
ARROW = "==>"

_HEADER = "GPG keys need importing:"


def required_keys(pkgbase: str, srcinfos: Mapping[str, BuildMetadata]) -> list[str]:
    try:
        srcinfo = srcinfos[pkgbase]
    except KeyError:
        raise MissingMetadataError(pkgbase) from None
    return list(srcinfo.validpgpkeys)


def missing_keys(
    pkgs: Iterable[Package],
    srcinfos: Mapping[str, BuildMetadata],
    config: Config,
) -> KeySet:
    """
    Returns a `KeySet` of every key the given packages declare that is
    not yet in the keyring, mapped to the package bases requiring it.

    Each base is checked once, represented by the first of its packages
    in `pkgs`; a key already known to be missing is not queried again.
    """
    missing = KeySet()
    seen_bases: set[str] = set()

    for pkg in pkgs:
        if pkg.pkgbase in seen_bases:
            continue
        seen_bases.add(pkg.pkgbase)

        for key in required_keys(pkg.pkgbase, srcinfos):
            if missing.has(key):
                if all(p.pkgbase != pkg.pkgbase for p in missing.requirers(key)):
                    missing.add(key, pkg)
                continue
            if not gpg.has_key(key, config):
                missing.add(key, pkg)

    return missing


def format_pkgbase(pkg: Package, bases: Mapping[str, list[Package]] | None) -> str:
    """
    Renders a package base, listing its split packages in recipe order
    when it has any, e.g. `linux-ck (linux-ck-headers linux-ck)`.
    """
    members = (bases or {}).get(pkg.pkgbase)
    if not members:
        return pkg.pkgbase
    if len(members) == 1 and members[0].name == pkg.pkgbase:
        return pkg.pkgbase
    return f"{pkg.pkgbase} ({' '.join(m.name for m in members)})"


def format_keys_to_import(
    keys: Mapping[str, list[Package]], bases: Mapping[str, list[Package]] | None
) -> str:
    if not keys:
        raise NoKeysError(f"{ARROW} Error: No keys to import")

    lines = [_HEADER]
    for key, pkgs in keys.items():
        required_by = " ".join(format_pkgbase(pkg, bases) for pkg in pkgs)
        lines.append(f"\t{key}, required by: {required_by}")
    lines.append(f"{ARROW} Import?")
    return "\n".join(lines)


def check_pgp_keys(
    pkgs: Iterable[Package],
    bases: Mapping[str, list[Package]] | None,
    srcinfos: Mapping[str, BuildMetadata],
    config: Config | None = None,
    *,
    confirm: Callable[[str], bool],
) -> None:
    """
    Makes sure every key the given packages declare is in the keyring,
    importing the missing ones once `confirm` agrees to the prompt.

    Nothing is imported unless `confirm` returns true; a false answer
    raises `ImportDeclinedError`.
    """
    if config is None:
        config = Config.from_env()

    missing = missing_keys(pkgs, srcinfos, config)
    if not missing:
        logger.debug("all required keys present")
        return

    question = format_keys_to_import(missing, bases)
    if not confirm(question):
        raise ImportDeclinedError(
            f"declined to import: {', '.join(missing.to_list())}"
        )

    gpg.import_keys(missing.to_list(), config)
