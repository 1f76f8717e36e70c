# aur:
#   just enough of the AUR to feed the key check: resolve package names
#   to their bases, and pull each base's declared validpgpkeys out of
#   its .SRCINFO.

import logging
from typing import Any

import requests

from pkgkeys.config import Config
from pkgkeys.errors import AURError
from pkgkeys.models import BuildMetadata, Package

logger = logging.getLogger(__name__)

_RPC_PATH = "/rpc/v5/info"
_SRCINFO_PATH = "/cgit/aur.git/plain/.SRCINFO"
_HTTP_TIMEOUT = 30


def _get(session: requests.Session, url: str, **kwargs: Any) -> requests.Response:
    logger.debug("GET %s", url)
    try:
        return session.get(url, timeout=_HTTP_TIMEOUT, **kwargs)
    except requests.RequestException as exc:
        raise AURError(f"{url}: {exc}") from exc


def fetch_info(
    names: list[str], config: Config, session: requests.Session | None = None
) -> list[Package]:
    """
    Looks up `names` on the AUR, returning a `Package` for each one it
    knows about, in the order given.
    """
    session = session or requests.Session()
    url = f"{config.aur_url}{_RPC_PATH}"
    resp = _get(session, url, params={"arg[]": names})
    if not resp.ok:
        raise AURError(f"{url}: HTTP {resp.status_code}")

    try:
        body = resp.json()
    except requests.JSONDecodeError as exc:
        raise AURError(f"{url}: reply is not JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise AURError(f"{url}: unexpected reply: {body!r}")
    if body.get("type") == "error":
        raise AURError(f"{url}: {body.get('error', 'unknown error')}")

    try:
        by_name = {
            r["Name"]: Package(r["Name"], r["PackageBase"]) for r in body["results"]
        }
    except (KeyError, TypeError) as exc:
        raise AURError(f"{url}: malformed reply: {exc!r}") from exc

    pkgs = []
    for name in names:
        if name not in by_name:
            logger.warning("%s: not found on the AUR", name)
            continue
        pkgs.append(by_name[name])
    return pkgs


def parse_srcinfo(text: str) -> BuildMetadata:
    pkgbase = None
    keys = []
    for line in text.splitlines():
        field, sep, value = line.strip().partition("=")
        if not sep:
            continue
        match field.strip():
            case "pkgbase":
                pkgbase = value.strip()
            case "validpgpkeys":
                keys.append(value.strip())

    if pkgbase is None:
        raise AURError("malformed .SRCINFO: no pkgbase")
    return BuildMetadata(pkgbase=pkgbase, validpgpkeys=keys)


def fetch_srcinfo(
    pkgbase: str, config: Config, session: requests.Session | None = None
) -> BuildMetadata:
    session = session or requests.Session()
    url = f"{config.aur_url}{_SRCINFO_PATH}"
    resp = _get(session, url, params={"h": pkgbase})
    if not resp.ok:
        if resp.status_code == 404:
            raise AURError(f"{pkgbase}: no .SRCINFO on the AUR")
        raise AURError(f"{url}: HTTP {resp.status_code}")
    return parse_srcinfo(resp.text)


def group_by_base(pkgs: list[Package]) -> dict[str, list[Package]]:
    bases: dict[str, list[Package]] = {}
    for pkg in pkgs:
        members = bases.setdefault(pkg.pkgbase, [])
        if pkg not in members:
            members.append(pkg)
    return bases
