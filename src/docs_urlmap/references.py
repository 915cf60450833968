"""gi-docgen cross-reference links.

A reference such as ``method@Gtk.Widget.show`` names a namespace (``Gtk``)
and a page inside that namespace's documentation
(``method.Widget.show.html``). The namespace is resolved against a
:class:`~docs_urlmap.table.DocumentationLinkTable`; references into
namespaces the table does not know produce no link.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Final

from .table import DOC_LINKS, DocumentationLinkTable
from .urls import join_doc_url

logger = logging.getLogger(__name__)

# Kinds whose target is a top-level symbol: kind@Namespace.Name
_TYPE_KINDS: Final[frozenset[str]] = frozenset(
    {"alias", "callback", "class", "const", "enum", "error", "flags", "iface", "struct"}
)
# Kinds whose target lives on a type: kind@Namespace.Type.name
_MEMBER_KINDS: Final[frozenset[str]] = frozenset({"ctor", "method", "vfunc"})

REFERENCE_KINDS: Final[frozenset[str]] = _TYPE_KINDS | _MEMBER_KINDS | {
    "func",
    "property",
    "signal",
}

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
_REFERENCE_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<kind>[a-z]+)@(?P<namespace>{_IDENT})\.(?P<rest>.+)$"
)
_DOTTED_RE: Final[re.Pattern[str]] = re.compile(rf"^{_IDENT}(?:\.{_IDENT})?$")
_PROPERTY_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<type>{_IDENT}):(?P<name>[A-Za-z][A-Za-z0-9_-]*)$"
)
_SIGNAL_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<type>{_IDENT})::(?P<name>[A-Za-z][A-Za-z0-9_-]*)$"
)


@dataclass(frozen=True)
class DocReference:
    kind: str
    namespace: str
    type_name: str | None
    member: str | None

    @property
    def page(self) -> str:
        if self.kind == "func" and self.type_name is not None:
            return f"type_func.{self.type_name}.{self.member}.html"
        parts = [self.kind]
        if self.type_name is not None:
            parts.append(self.type_name)
        if self.member is not None:
            parts.append(self.member)
        return ".".join(parts) + ".html"


def parse_reference(text: str) -> DocReference:
    m = _REFERENCE_RE.match(text.strip()) if isinstance(text, str) else None
    if not m:
        raise ValueError(f"Not a documentation reference: {text!r}")

    kind = m.group("kind")
    namespace = m.group("namespace")
    rest = m.group("rest")
    if kind not in REFERENCE_KINDS:
        raise ValueError(f"Unknown reference kind {kind!r} in {text!r}")

    if kind == "property":
        pm = _PROPERTY_RE.match(rest)
        if not pm:
            raise ValueError(f"Expected Type:property in {text!r}")
        return DocReference(kind, namespace, pm.group("type"), pm.group("name"))

    if kind == "signal":
        sm = _SIGNAL_RE.match(rest)
        if not sm:
            raise ValueError(f"Expected Type::signal in {text!r}")
        return DocReference(kind, namespace, sm.group("type"), sm.group("name"))

    if not _DOTTED_RE.match(rest):
        raise ValueError(f"Malformed symbol {rest!r} in {text!r}")
    pieces = rest.split(".")

    if kind in _TYPE_KINDS:
        if len(pieces) != 1:
            raise ValueError(f"{kind}@ takes a single symbol name: {text!r}")
        return DocReference(kind, namespace, pieces[0], None)

    if kind in _MEMBER_KINDS:
        if len(pieces) != 2:
            raise ValueError(f"{kind}@ takes Type.name: {text!r}")
        return DocReference(kind, namespace, pieces[0], pieces[1])

    # func@Namespace.name or func@Namespace.Type.name
    if len(pieces) == 1:
        return DocReference(kind, namespace, None, pieces[0])
    return DocReference(kind, namespace, pieces[0], pieces[1])


def link_for(
    prefix: str,
    page: str,
    *,
    table: DocumentationLinkTable = DOC_LINKS,
) -> str | None:
    base_url = table.resolve(prefix)
    if base_url is None:
        return None
    return join_doc_url(base_url, page)


def link_for_reference(
    text: str,
    *,
    table: DocumentationLinkTable = DOC_LINKS,
) -> str | None:
    ref = parse_reference(text)
    url = link_for(ref.namespace, ref.page, table=table)
    if url is None:
        logger.debug("Skipping link for %s: unknown namespace", text)
    return url
