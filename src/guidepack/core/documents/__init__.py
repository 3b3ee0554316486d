"""
guidepack document catalog.

1. DocumentRegistry (registry.py): id -> Document lookup
2. BundleResolver (resolver.py): profile / id list -> deduplicated Bundle
3. Composer (composer.py): Bundle -> one text blob, all-or-nothing
4. load_catalog (catalog.py): build registry + resolver from YAML catalogs
"""
from __future__ import annotations

from .models import Bundle, Category, ComposedOutput, Document, Profile
from .registry import DocumentListing, DocumentRegistry
from .resolver import BundleResolver
from .storage import DocumentStorage, FileStorage
from .composer import DEFAULT_SEPARATOR, Composer, render_header, write_output
from .catalog import Catalog, catalog_dirs, load_catalog
from .check import CheckReport, LineCountDrift, check_catalog, count_lines

__all__ = [
    # Models
    "Bundle",
    "Category",
    "ComposedOutput",
    "Document",
    "Profile",
    # Registry / resolver
    "DocumentListing",
    "DocumentRegistry",
    "BundleResolver",
    # Composition
    "DocumentStorage",
    "FileStorage",
    "Composer",
    "DEFAULT_SEPARATOR",
    "render_header",
    "write_output",
    # Catalog
    "Catalog",
    "catalog_dirs",
    "load_catalog",
    "CheckReport",
    "LineCountDrift",
    "check_catalog",
    "count_lines",
]
