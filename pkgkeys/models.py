# models:
#   packages, their build metadata, and the key ID -> packages map
#   the whole check revolves around.

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Package:
    name: str
    pkgbase: str

    @classmethod
    def single(cls, name: str) -> "Package":
        return cls(name=name, pkgbase=name)


@dataclass
class BuildMetadata:
    pkgbase: str
    validpgpkeys: list[str] = field(default_factory=list)


class KeySet(dict[str, list[Package]]):
    """
    Map of key ID -> packages requiring that key.

    Key IDs compare case-insensitively; a key is filed under the spelling
    it was first added with.
    """

    def _lookup(self, key: str) -> str | None:
        if key in self:
            return key
        upper = key.upper()
        return next((k for k in self if k.upper() == upper), None)

    def has(self, key: str) -> bool:
        return self._lookup(key) is not None

    def add(self, key: str, pkg: Package) -> None:
        existing = self._lookup(key)
        if existing is None:
            self[key] = [pkg]
        else:
            self[existing].append(pkg)

    def requirers(self, key: str) -> list[Package]:
        existing = self._lookup(key)
        return self[existing] if existing is not None else []

    def to_list(self) -> list[str]:
        return list(self.keys())
