"""
guidepack configuration management (YAML only).

Precedence (in increasing order):
  1) Bundled defaults (``guidepack/data/config/defaults.yaml``)
  2) Project overlays (``<project_config_dir>/config/*.yml`` and ``*.yaml``)
  3) Environment overrides (``GUIDEPACK_<section>__<key>``)

Environment overrides:
- Path separator: double underscore ``__`` (e.g.
  ``GUIDEPACK_compose__strip_trailing_newlines=false``). Variables without a
  ``__`` (such as ``GUIDEPACK_PROJECT_ROOT``) are not config overrides.
- Case handling: case-insensitive lookup against existing keys; the original
  case is kept when a new key is created.
- Type coercion: bool/int/float/JSON-like strings are coerced.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema
import yaml

from .exceptions import CatalogError
from .utils.io import iter_yaml_files
from .utils.paths import get_project_config_dir, resolve_project_root

logger = logging.getLogger(__name__)

ENV_PREFIX = "GUIDEPACK_"


class ConfigManager:
    """Load, merge, and validate guidepack configuration.

    Typical usage:

    ```python
    from guidepack.core.config import ConfigManager
    mgr = ConfigManager()
    cfg = mgr.load_config(validate=True)
    ```

    Attributes:
        repo_root: Project root used to resolve config files.
        core_config_dir: Bundled config directory (``guidepack/data/config``).
        project_dir: Project configuration directory (``<root>/.guidepack``).
        project_config_dir: Project overlay directory
            (``<root>/.guidepack/config``), where ``*.yml``/``*.yaml`` files are loaded.
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        from guidepack.data import get_data_path

        self.repo_root = Path(repo_root) if repo_root is not None else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.core_defaults_path = self.core_config_dir / "defaults.yaml"
        self.schemas_dir = self.core_config_dir / "schemas"
        self.project_dir = get_project_config_dir(self.repo_root)
        self.project_config_dir = self.project_dir / "config"
        self._cache: Optional[Dict[str, Any]] = None

    # ---------- Merge helpers ----------
    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge ``override`` into ``base`` returning a copy.

        Dicts are merged recursively; lists follow :meth:`_merge_arrays`;
        anything else in ``override`` replaces the base value.
        """
        result: Dict[str, Any] = dict(base)
        for key, value in (override or {}).items():
            if key in result:
                if isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = self.deep_merge(result[key], value)
                elif isinstance(result[key], list) and isinstance(value, list):
                    result[key] = self._merge_arrays(result[key], value)
                else:
                    result[key] = value
            else:
                result[key] = value
        return result

    def _merge_arrays(self, base: List[Any], override: List[Any]) -> List[Any]:
        """Merge two lists.

        - First override element ``"+"``: append the rest to base
        - First override element ``"="``: replace base with the rest
        - Otherwise: replace the entire list
        """
        if not override:
            return base
        first = override[0]
        if isinstance(first, str):
            if first == "+":
                return [*base, *override[1:]]
            if first == "=":
                return list(override[1:])
        return list(override)

    # ---------- IO helpers ----------
    def load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load a YAML mapping; a missing or empty file yields ``{}``.

        Raises:
            CatalogError: If the file holds invalid YAML or a non-mapping.
        """
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise CatalogError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CatalogError(
                f"Config file must contain a mapping: {path}",
                context={"path": str(path)},
            )
        return data

    # ---------- Validation ----------
    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config.schema.json") -> None:
        """Validate configuration against a bundled JSON schema.

        Raises:
            CatalogError: If validation fails.
        """
        schema_path = self.schemas_dir / schema_name
        if not schema_path.exists():
            logger.warning("Schema %s not found at %s; skipping validation", schema_name, schema_path)
            return
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            where = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise CatalogError(
                f"Invalid configuration at {where}: {exc.message}",
                context={"path": where},
            ) from exc

    # ---------- Type coercion helpers ----------
    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        """Coerce string to bool/int/float/JSON when appropriate.

        Falls back to the original string. Unlike the typed casts the string
        is not stripped, so a separator such as ``"\\n\\n"`` survives.
        """
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, int, object]]:
        """Parse the tail of a ``GUIDEPACK_*`` key into path components.

        Numeric segments become integer list indices; ``APPEND`` becomes
        :pyattr:`ARRAY_APPEND_MARKER`. Other segments keep their case.

        Returns an empty list when the key is not an override, or when it is
        malformed and ``strict`` is False.
        """
        if "__" not in raw:
            return []
        processed: List[Union[str, int, object]] = []
        for seg in raw.split("__"):
            if seg == "":
                if strict:
                    raise CatalogError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'",
                        context={"key": ENV_PREFIX + raw},
                    )
                return []
            if seg.isdigit():
                processed.append(int(seg))
            elif seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg)
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, int, object]], Any, str]]:
        """Yield parsed environment overrides as (path, value, raw_key)."""
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int, object]], value: Any) -> None:
        """Set a nested value into ``root`` creating containers as needed.

        Raises:
            CatalogError: When the path attempts an invalid operation (e.g.
                an index into a non-list container).
        """
        if not path:
            return

        def _path_str(p: List[Union[str, int, object]]) -> str:
            return "__".join("APPEND" if seg is self.ARRAY_APPEND_MARKER else str(seg) for seg in p)

        def _fail(msg: str) -> CatalogError:
            return CatalogError(f"{msg} (path='{_path_str(path)}')", context={"key": _path_str(path)})

        cur: Any = root
        for i, part in enumerate(path[:-1]):
            nxt = path[i + 1]
            if isinstance(part, int) or part is self.ARRAY_APPEND_MARKER:
                raise _fail("List index/APPEND may only appear at the leaf")
            if not isinstance(cur, dict):
                raise _fail(f"Path traverses non-dict container ({type(cur).__name__})")
            candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = candidates.get(str(part).lower(), part)
            if key not in cur:
                cur[key] = [] if (isinstance(nxt, int) or nxt is self.ARRAY_APPEND_MARKER) else {}
            cur = cur[key]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise _fail(f"APPEND requires a list, got {type(cur).__name__}")
            cur.append(value)
        elif isinstance(leaf, int):
            if not isinstance(cur, list):
                raise _fail(f"Index assignment requires a list, got {type(cur).__name__}")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
        else:
            if not isinstance(cur, dict):
                raise _fail(f"Key assignment requires a mapping, got {type(cur).__name__}")
            candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            cur[candidates.get(str(leaf).lower(), leaf)] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        """Apply ``GUIDEPACK_*`` overrides in-place to ``cfg``."""
        for path, typed_value, raw in self._iter_env_overrides(strict=strict):
            try:
                self._set_nested(cfg, path, typed_value)
            except CatalogError:
                if strict:
                    raise
                logger.warning("Ignoring invalid environment override %s%s", ENV_PREFIX, raw)

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration with correct precedence and optional validation.

        Precedence (lowest → highest): defaults → project → env.

        Args:
            validate: When ``True`` (default), validate the merged config
                against the bundled schema and treat malformed env keys as
                errors.
        """
        cfg: Dict[str, Any] = self.load_yaml(self.core_defaults_path)

        if self.project_config_dir.exists():
            for path in iter_yaml_files(self.project_config_dir):
                logger.debug("Merging project config overlay %s", path)
                cfg = self.deep_merge(cfg, self.load_yaml(path))

        self.apply_env_overrides(cfg, strict=validate)

        if validate:
            self.validate_schema(cfg)

        self._cache = cfg
        return cfg

    # ---------- Accessors ----------
    def get_all(self) -> Dict[str, Any]:
        """Return the merged configuration (loaded once per manager)."""
        if self._cache is None:
            return self.load_config(validate=True)
        return self._cache

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-notation key (e.g. ``compose.separator``)."""
        cur: Any = self.get_all()
        for part in [p for p in key.split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur

    def section(self, name: str) -> Dict[str, Any]:
        """Return a top-level section, or ``{}`` when missing or not a mapping."""
        value = self.get_all().get(name) or {}
        return value if isinstance(value, dict) else {}


__all__ = ["ConfigManager", "ENV_PREFIX"]
