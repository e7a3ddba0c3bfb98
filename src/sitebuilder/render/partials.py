"""
Discovery of include-only partial templates.

Partials are addressed by a ``PartialId``: the file's path relative to the
partials directory, with POSIX separators and the template suffix removed
(``partials/nav/menu.tmpl`` is ``nav/menu``). The catalog is computed once per
build from the directory listing, so every reference can be checked before any
page is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, NewType, Tuple

PartialId = NewType("PartialId", str)


class UnknownPartial(LookupError):
    """Raised when a template references a partial that is not in the catalog."""

    def __init__(self, name: str, known: Tuple[str, ...]) -> None:
        self.name = name
        self.known = known
        listing = ", ".join(known) if known else "none"
        super().__init__(f"Unknown partial {name!r} (available partials: {listing})")


@dataclass
class PartialCatalog:
    root: Path
    suffix: str
    entries: Dict[PartialId, Path] = field(default_factory=dict)

    @classmethod
    def discover(cls, partials_dir: Path, suffix: str) -> "PartialCatalog":
        """
        List every template under partials_dir (recursively).

        A missing directory yields an empty catalog.
        """
        root = Path(partials_dir)
        entries: Dict[PartialId, Path] = {}
        if root.is_dir():
            for path in sorted(root.rglob(f"*{suffix}")):
                if not path.is_file():
                    continue
                relative = path.relative_to(root).as_posix()
                entries[PartialId(relative[: -len(suffix)])] = path
        return cls(root=root, suffix=suffix, entries=entries)

    @property
    def ids(self) -> Tuple[PartialId, ...]:
        return tuple(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[PartialId]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def resolve(self, name: str) -> Path:
        try:
            return self.entries[PartialId(name)]
        except KeyError:
            raise UnknownPartial(name, self.ids) from None
