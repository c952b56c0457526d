"""Member roster keyed by validated member names"""
from typing import Dict, Iterable, List, Optional
from ratify.errors import NotFound
from ratify.models.members import Member


class Roster:
    """Case-insensitive lookup from an incoming name to the canonical member name"""

    def __init__(self, names: Iterable[str] = ()):
        self._by_key: Dict[str, str] = {}
        for name in names:
            self._by_key.setdefault(self.key(name), name)

    @classmethod
    def from_members(cls, members: Iterable[Member]) -> "Roster":
        return cls(m.name for m in members)

    @staticmethod
    def key(name: str) -> str:
        return name.strip().casefold()

    @property
    def names(self) -> List[str]:
        return list(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, name: str) -> bool:
        return self.key(name) in self._by_key

    def canonical(self, name: str) -> Optional[str]:
        return self._by_key.get(self.key(name))

    def require(self, name: str) -> str:
        """Canonical name for a member, or NotFound"""
        canonical = self.canonical(name)
        if canonical is None:
            raise NotFound(f"Unknown member: {name}")
        return canonical

    def unknown_keys(self, votes: Iterable[str]) -> List[str]:
        """Vote keys that are not exactly a current member name"""
        current = set(self._by_key.values())
        return [k for k in votes if k not in current]
