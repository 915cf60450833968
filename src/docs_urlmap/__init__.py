"""docs-urlmap: external documentation links for GNOME namespaces.

The package holds the table a documentation generator consults when a
cross-reference points into another library (``GLib``, ``Gtk``, ``Adw``...),
plus helpers to build page links from it and to read or write the
``urlmap.js`` file gi-docgen loads.

Lookups are exact and case-sensitive. An unknown namespace resolves to None
so callers can leave the reference unlinked.
"""

from __future__ import annotations

from .references import DocReference, link_for, link_for_reference, parse_reference
from .table import DOC_LINKS, DocumentationLinkEntry, DocumentationLinkTable, resolve
from .urlmap_js import parse_urlmap_js, read_urlmap, render_urlmap_js, write_urlmap

__all__ = [
    "DOC_LINKS",
    "DocReference",
    "DocumentationLinkEntry",
    "DocumentationLinkTable",
    "__version__",
    "link_for",
    "link_for_reference",
    "parse_reference",
    "parse_urlmap_js",
    "read_urlmap",
    "render_urlmap_js",
    "resolve",
    "write_urlmap",
]

__version__ = "0.1.0"
