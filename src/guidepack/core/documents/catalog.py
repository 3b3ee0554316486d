"""
Catalog loading.

A catalog directory holds up to two YAML files:

- ``documents.yml``: ``documents: [{id, path, lines, category, title?, description?}]``
- ``profiles.yml``: ``profiles: {name: {documents: [...], extends: [...], description?}}``

Sources are read in order: the bundled catalog (unless
``catalog.include_bundled`` is false), the project catalog
(``<project_config_dir>/catalog``), then every directory in
``catalog.paths``. Document ids must be unique across all sources; a later
profile replaces an earlier one of the same name.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from guidepack.core.config import ConfigManager
from guidepack.core.exceptions import CatalogError
from guidepack.core.utils.io import read_yaml
from guidepack.data import get_data_path, read_json

from .models import Profile
from .registry import DocumentRegistry
from .resolver import BundleResolver

logger = logging.getLogger(__name__)

DOCUMENTS_FILE = "documents"
PROFILES_FILE = "profiles"


@dataclass
class Catalog:
    """Loaded registry + resolver, and the directories they came from."""

    registry: DocumentRegistry
    resolver: BundleResolver
    sources: List[Path] = field(default_factory=list)


def _catalog_file(directory: Path, stem: str) -> Optional[Path]:
    for ext in (".yml", ".yaml"):
        candidate = directory / f"{stem}{ext}"
        if candidate.exists():
            return candidate
    return None


def _load_validated(path: Path, schema_name: str) -> Dict[str, Any]:
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
    try:
        jsonschema.validate(instance=data, schema=read_json("schemas", schema_name))
    except jsonschema.ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise CatalogError(
            f"Invalid catalog file {path} at {where}: {exc.message}",
            context={"path": str(path), "location": where},
        ) from exc
    return data


def _parse_profiles(data: Dict[str, Any]) -> Dict[str, Profile]:
    profiles: Dict[str, Profile] = {}
    for name, entry in (data.get("profiles") or {}).items():
        entry = entry or {}
        profiles[str(name)] = Profile(
            name=str(name),
            documents=tuple(str(d) for d in entry.get("documents") or ()),
            extends=tuple(str(p) for p in entry.get("extends") or ()),
            description=entry.get("description"),
        )
    return profiles


def catalog_dirs(mgr: ConfigManager) -> List[Path]:
    """Return catalog directories in load order.

    Raises:
        CatalogError: If a directory listed in ``catalog.paths`` does not exist
    """
    section = mgr.section("catalog")
    dirs: List[Path] = []
    if section.get("include_bundled", True):
        dirs.append(get_data_path("catalog"))

    project_catalog = mgr.project_dir / "catalog"
    if project_catalog.is_dir():
        dirs.append(project_catalog)

    for raw in section.get("paths") or []:
        extra = Path(str(raw)).expanduser()
        if not extra.is_absolute():
            extra = mgr.repo_root / extra
        if not extra.is_dir():
            raise CatalogError(f"Catalog directory not found: {extra}", context={"path": str(extra)})
        dirs.append(extra)
    return dirs


def load_catalog(config: Optional[ConfigManager] = None, *, repo_root: Optional[Path] = None) -> Catalog:
    """Build the registry and resolver from every configured catalog source.

    Raises:
        CatalogError: For malformed catalog files or missing extra directories
        DuplicateIdError: If a document id is declared twice
    """
    mgr = config or ConfigManager(repo_root=repo_root)
    registry = DocumentRegistry()
    profiles: Dict[str, Profile] = {}
    dirs = catalog_dirs(mgr)

    for directory in dirs:
        docs_path = _catalog_file(directory, DOCUMENTS_FILE)
        if docs_path is not None:
            data = _load_validated(docs_path, "documents.schema.json")
            registry.load_documents(data.get("documents") or [], base_dir=directory, source=str(docs_path))

        profiles_path = _catalog_file(directory, PROFILES_FILE)
        if profiles_path is not None:
            loaded = _parse_profiles(_load_validated(profiles_path, "profiles.schema.json"))
            for name in loaded:
                if name in profiles:
                    logger.debug("Profile %s overridden by %s", name, profiles_path)
            profiles.update(loaded)

    logger.debug("Catalog loaded: %d documents, %d profiles from %d sources", len(registry), len(profiles), len(dirs))
    return Catalog(registry=registry, resolver=BundleResolver(registry, profiles), sources=dirs)


__all__ = ["Catalog", "catalog_dirs", "load_catalog"]
