"""In-memory model of a Tikibase: lines, sections, documents and directories."""

from tikibase.database.directory import Directory, EntryType, Resource
from tikibase.database.doc_links import DocLinks
from tikibase.database.document import Document
from tikibase.database.line import Line, Reference, ReferenceKind
from tikibase.database.section import Section
from tikibase.database.tikibase import Tikibase

__all__ = [
    "DocLinks",
    "Directory",
    "Document",
    "EntryType",
    "Line",
    "Reference",
    "ReferenceKind",
    "Resource",
    "Section",
    "Tikibase",
]
