# check-pgp-keys:
#   take a list of AUR package names, and make sure the local keyring
#   has every PGP key their builds declare in validpgpkeys.

import argparse
import logging
import sys
from dataclasses import replace

import requests

from pkgkeys import aur
from pkgkeys.config import Config
from pkgkeys.errors import PGPKeyError
from pkgkeys.keys import check_pgp_keys


def ask(question: str) -> bool:
    print(question, end=" [Y/n] ", file=sys.stderr, flush=True)
    try:
        answer = input().strip().lower()
    except EOFError:
        return False
    return answer in ("", "y", "yes")


def always(question: str) -> bool:
    return True


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-pgp-keys",
        description="Import the PGP keys AUR packages need to build.",
    )
    parser.add_argument("packages", nargs="+", metavar="PKG")
    parser.add_argument("--gpg-flags", help="extra flags passed to every gpg call")
    parser.add_argument("--keyserver", help="keyserver to import keys from")
    parser.add_argument(
        "--noconfirm", action="store_true", help="import without asking"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = Config.from_env()
    if args.gpg_flags is not None:
        config = replace(config, gpg_flags=args.gpg_flags)
    if args.keyserver is not None:
        config = replace(config, keyserver=args.keyserver)

    session = requests.Session()
    try:
        pkgs = aur.fetch_info(args.packages, config, session=session)
        bases = aur.group_by_base(pkgs)
        srcinfos = {}
        for base in bases:
            print(f"fetching .SRCINFO: {base}", file=sys.stderr)
            srcinfos[base] = aur.fetch_srcinfo(base, config, session=session)

        check_pgp_keys(
            pkgs,
            bases,
            srcinfos,
            config=config,
            confirm=always if args.noconfirm else ask,
        )
    except PGPKeyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
