"""
Employee Directory

Resolves names found on job records to the display names of known
employees and splits everyone on a set of jobs into active and former staff.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .identity import EmployeeIdentity, sanitize
from .models import JobRecord


@dataclass
class Roster:
    """Names on a set of jobs, split by directory membership."""

    active: list[str] = field(default_factory=list)
    former: list[str] = field(default_factory=list)


class EmployeeDirectory:
    """Lookup of known employees by sanitized name."""

    def __init__(self, identities: Iterable[EmployeeIdentity] = ()):
        self._identities = tuple(identities)
        self._index: dict[str, EmployeeIdentity] = {}
        for identity in self._identities:
            for key in identity.keys:
                # First entry wins when two employees share a spelling
                self._index.setdefault(key, identity)

    def __len__(self) -> int:
        return len(self._identities)

    @classmethod
    def from_list(cls, entries: Iterable) -> "EmployeeDirectory":
        """Build from identities or their stored dict form."""
        identities = [
            entry if isinstance(entry, EmployeeIdentity) else EmployeeIdentity.from_dict(entry)
            for entry in entries or []
        ]
        return cls(identities)

    def find(self, name: str | None) -> EmployeeIdentity | None:
        return self._index.get(sanitize(name))

    def resolve(self, name: str) -> str:
        """Display name for a logged name, or the logged name itself.

        Unmatched names stay under their raw spelling so former or unlinked
        employees remain visible rather than merging into someone else.
        """
        identity = self.find(name)
        return identity.display_name if identity else name

    def roster(self, jobs: Iterable[JobRecord]) -> Roster:
        """Everyone named on `jobs`, split into active and former employees."""
        names = []
        for job in jobs:
            if job.leader:
                names.append(job.leader.strip())
            names.extend(entry.name.strip() for entry in job.worker_log)

        active: dict[str, str] = {}
        former: dict[str, str] = {}
        for name in names:
            if not name:
                continue
            identity = self.find(name)
            if identity:
                active.setdefault(identity.display_name, identity.sort_key.lower())
            else:
                former.setdefault(name, name.lower())

        return Roster(
            active=sorted(active, key=lambda n: (active[n], n)),
            former=sorted(former, key=lambda n: (former[n], n)),
        )
