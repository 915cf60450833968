from __future__ import annotations

import pytest

from docs_urlmap import DOC_LINKS, resolve
from docs_urlmap.table import DocumentationLinkEntry, DocumentationLinkTable

EXPECTED = [
    ("GLib", "https://docs.gtk.org/glib/"),
    ("GObject", "https://docs.gtk.org/gobject/"),
    ("Gio", "https://docs.gtk.org/gio/"),
    ("Gtk", "https://docs.gtk.org/gtk4/"),
    ("Adw", "https://gnome.pages.gitlab.gnome.org/libadwaita/doc/"),
]


@pytest.mark.parametrize("prefix,base_url", EXPECTED)
def test_default_entries_resolve_to_literal_urls(prefix: str, base_url: str) -> None:
    assert resolve(prefix) == base_url
    assert DOC_LINKS.resolve(prefix) == base_url


def test_default_table_shape() -> None:
    assert len(DOC_LINKS) == 5
    assert [(e.namespace_prefix, e.base_url) for e in DOC_LINKS.entries] == EXPECTED
    assert list(DOC_LINKS) == [p for p, _ in EXPECTED]
    assert len(set(DOC_LINKS.prefixes())) == len(DOC_LINKS)


def test_unknown_and_empty_prefix_resolve_to_none() -> None:
    assert resolve("NotAKnownPrefix") is None
    assert resolve("") is None


def test_lookup_is_case_sensitive() -> None:
    assert resolve("glib") is None
    assert resolve("GLib") == "https://docs.gtk.org/glib/"
    assert "gtk" not in DOC_LINKS
    assert "Gtk" in DOC_LINKS


def test_mapping_protocol() -> None:
    assert DOC_LINKS["Gio"] == "https://docs.gtk.org/gio/"
    assert DOC_LINKS.get("Nope") is None
    with pytest.raises(KeyError):
        DOC_LINKS["Nope"]
    assert DOC_LINKS.as_dict() == dict(EXPECTED)


def test_as_dict_is_a_copy() -> None:
    copy = DOC_LINKS.as_dict()
    copy["GLib"] = "https://example.org/"
    copy["Extra"] = "https://example.org/"
    assert resolve("GLib") == "https://docs.gtk.org/glib/"
    assert resolve("Extra") is None


def test_table_cannot_be_assigned_to() -> None:
    with pytest.raises(TypeError):
        DOC_LINKS["GLib"] = "https://example.org/"  # type: ignore[index]


def test_entries_are_frozen() -> None:
    entry = DOC_LINKS.entries[0]
    with pytest.raises(AttributeError):
        entry.base_url = "https://example.org/"  # type: ignore[misc]


def test_rejects_duplicate_prefix() -> None:
    with pytest.raises(ValueError, match="Duplicate"):
        DocumentationLinkTable.from_pairs(
            [("GLib", "https://a.example/"), ("GLib", "https://b.example/")]
        )


def test_rejects_empty_prefix() -> None:
    with pytest.raises(ValueError, match="Empty"):
        DocumentationLinkTable([DocumentationLinkEntry("", "https://a.example/")])


@pytest.mark.parametrize(
    "base_url",
    [
        "https://docs.gtk.org/glib",
        "docs.gtk.org/glib/",
        "/glib/",
        "ftp://docs.gtk.org/glib/",
        "https://docs.gtk.org/glib/?q=1",
        "",
    ],
)
def test_rejects_invalid_base_url(base_url: str) -> None:
    with pytest.raises(ValueError, match="Invalid base URL"):
        DocumentationLinkTable.from_pairs([("GLib", base_url)])


def test_empty_table_resolves_nothing() -> None:
    table = DocumentationLinkTable([])
    assert len(table) == 0
    assert table.resolve("GLib") is None
