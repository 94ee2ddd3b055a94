"""Set of project versions keyed by project name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .version import Version

__all__ = ["Projects", "ProjectNotFoundError"]


class ProjectNotFoundError(KeyError):
    def __init__(self, name: str, known: Iterable[str]) -> None:
        super().__init__(name)
        self.name = name
        self.known = tuple(known)

    def __str__(self) -> str:
        return f"project [{self.name}] not found; known projects: {', '.join(self.known)}"


class Projects:
    """Read-only snapshot of project versions, at most one per project name.

    Adding the same name twice keeps the last version given.
    """

    __slots__ = ("_by_name",)

    def __init__(self, versions: Iterable[Version] = ()) -> None:
        by_name: dict[str, Version] = {}
        for v in versions:
            by_name[v.project_name] = v
        self._by_name = by_name

    @classmethod
    def of(cls, *versions: Version) -> Projects:
        return cls(versions)

    def __iter__(self) -> Iterator[Version]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Version):
            return self._by_name.get(item.project_name) == item
        return item in self._by_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Projects):
            return NotImplemented
        return self._by_name == other._by_name

    def __hash__(self) -> int:
        return hash(frozenset(self._by_name.items()))

    def __repr__(self) -> str:
        return f"Projects({', '.join(str(v) for v in self)})"

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def contains_project(self, name: str) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Version | None:
        return self._by_name.get(name)

    def for_name(self, name: str) -> Version:
        """Version of ``name``.

        Raises:
            ProjectNotFoundError: If the set has no such project.
        """
        found = self._by_name.get(name)
        if found is None:
            raise ProjectNotFoundError(name, self._by_name)
        return found

    def with_overrides(self, overrides: Iterable[Version]) -> Projects:
        """New set where ``overrides`` replace or extend these versions."""
        return Projects([*self, *overrides])

    def without(self, name: str) -> Projects:
        return Projects(v for v in self if v.project_name != name)


EMPTY_PROJECTS = Projects()
