"""
Employee Identity

Name normalization shared by every stage that matches people across
leader fields, worker logs, override keys and the employee directory.
"""

import re
from dataclasses import dataclass

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def sanitize(value) -> str:
    """Lowercase and strip every non-alphanumeric character.

    Payout history is keyed on this exact rule, so it must not change.
    """
    return _NON_ALPHANUMERIC.sub("", str(value or "").lower())


@dataclass(frozen=True)
class EmployeeIdentity:
    """A known employee and the spellings that refer to them."""

    display_name: str
    aliases: tuple[str, ...] = ()
    sort_key: str = ""

    @property
    def keys(self) -> frozenset[str]:
        candidates = (self.display_name,) + self.aliases
        return frozenset(key for key in (sanitize(c) for c in candidates) if key)

    def matches(self, name: str) -> bool:
        key = sanitize(name)
        return bool(key) and key in self.keys

    @classmethod
    def from_dict(cls, data: dict) -> "EmployeeIdentity":
        first = str(data.get("firstName") or "").strip()
        last = str(data.get("lastName") or "").strip()
        display = (
            data.get("displayName")
            or data.get("fullName")
            or data.get("name")
            or f"{first} {last}".strip()
        )
        display = str(display).strip()

        # Directory entries may carry one match key or several
        match_key = data.get("matchKey") or []
        if isinstance(match_key, str):
            match_key = [match_key]
        aliases = [str(k) for k in match_key]
        if first or last:
            aliases.append(last + first)

        return cls(
            display_name=display,
            aliases=tuple(aliases),
            sort_key=last or display,
        )
