"""
objcache - Group Policy

Two additive sets of group names:
- global groups: keys shared by every tenant (tenant id left out of the key)
- non-persistent groups: never sent to the backend, request memo table only

Groups are only ever added for the lifetime of the process.
"""

from collections.abc import Iterable


def _as_names(groups: str | Iterable[str]) -> list[str]:
    if isinstance(groups, str):
        return [groups]
    return list(groups)


class GroupPolicy:
    """Set-membership checks for global and non-persistent groups."""

    def __init__(
        self,
        global_groups: Iterable[str] = (),
        nonpersistent_groups: Iterable[str] = (),
    ):
        # dicts keep first-seen order for reporting
        self._global: dict[str, None] = {}
        self._nonpersistent: dict[str, None] = {}
        self.add_global_groups(global_groups)
        self.add_nonpersistent_groups(nonpersistent_groups)

    @property
    def global_groups(self) -> list[str]:
        return list(self._global)

    @property
    def nonpersistent_groups(self) -> list[str]:
        return list(self._nonpersistent)

    def is_global(self, group: str) -> bool:
        return group in self._global

    def is_nonpersistent(self, group: str) -> bool:
        return group in self._nonpersistent

    def add_global_groups(self, groups: str | Iterable[str]) -> None:
        """Add one group name or a collection of names; duplicates are ignored."""
        for name in _as_names(groups):
            self._global.setdefault(name, None)

    def add_nonpersistent_groups(self, groups: str | Iterable[str]) -> None:
        """Add one group name or a collection of names; duplicates are ignored."""
        for name in _as_names(groups):
            self._nonpersistent.setdefault(name, None)
