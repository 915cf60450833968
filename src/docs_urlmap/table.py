from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator

from .urls import is_documentation_base_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentationLinkEntry:
    namespace_prefix: str
    base_url: str


class DocumentationLinkTable(Mapping[str, str]):
    """Immutable table of namespace prefix -> documentation base URL.

    Entries keep declaration order. Lookup is an exact, case-sensitive match
    on the prefix; an unknown prefix resolves to None.
    """

    def __init__(self, entries: Iterable[DocumentationLinkEntry]) -> None:
        kept: list[DocumentationLinkEntry] = []
        by_prefix: dict[str, str] = {}
        for entry in entries:
            prefix = entry.namespace_prefix
            if not isinstance(prefix, str) or not prefix:
                raise ValueError(f"Empty namespace prefix in entry: {entry!r}")
            if prefix in by_prefix:
                raise ValueError(f"Duplicate namespace prefix: {prefix!r}")
            if not is_documentation_base_url(entry.base_url):
                raise ValueError(
                    f"Invalid base URL for {prefix!r}: {entry.base_url!r} "
                    "(expected an absolute http(s) URL ending in '/')"
                )
            by_prefix[prefix] = entry.base_url
            kept.append(entry)

        self._entries: tuple[DocumentationLinkEntry, ...] = tuple(kept)
        self._by_prefix: Mapping[str, str] = MappingProxyType(by_prefix)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> DocumentationLinkTable:
        return cls(
            DocumentationLinkEntry(namespace_prefix=prefix, base_url=url)
            for prefix, url in pairs
        )

    @property
    def entries(self) -> tuple[DocumentationLinkEntry, ...]:
        return self._entries

    def prefixes(self) -> tuple[str, ...]:
        return tuple(e.namespace_prefix for e in self._entries)

    def resolve(self, prefix: str) -> str | None:
        base_url = self._by_prefix.get(prefix) if isinstance(prefix, str) else None
        if base_url is None:
            logger.debug("No documentation base URL for prefix %r", prefix)
        return base_url

    def as_dict(self) -> dict[str, str]:
        return dict(self._by_prefix)

    def __getitem__(self, prefix: str) -> str:
        return self._by_prefix[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self.prefixes())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._entries)!r})"


DOC_LINKS = DocumentationLinkTable.from_pairs(
    [
        ("GLib", "https://docs.gtk.org/glib/"),
        ("GObject", "https://docs.gtk.org/gobject/"),
        ("Gio", "https://docs.gtk.org/gio/"),
        ("Gtk", "https://docs.gtk.org/gtk4/"),
        ("Adw", "https://gnome.pages.gitlab.gnome.org/libadwaita/doc/"),
    ]
)


def resolve(prefix: str) -> str | None:
    return DOC_LINKS.resolve(prefix)
