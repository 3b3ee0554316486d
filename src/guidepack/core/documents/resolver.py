"""
Bundle Resolver.

Turns a profile name or an explicit id list into a Bundle:

- Profiles listed in ``extends`` are expanded first, depth-first, in the
  declared order; then the profile's own documents follow.
- Duplicates are removed with first occurrence winning, so the result keeps
  the declared order.
- Every id must be registered; an unknown id is an error, never dropped.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from guidepack.core.exceptions import NotFoundError, ProfileCycleError, UnknownProfileError

from .models import Bundle, Profile
from .registry import DocumentRegistry

logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    out: List[str] = []
    for doc_id in ids:
        if doc_id not in seen:
            seen.add(doc_id)
            out.append(doc_id)
    return out


class BundleResolver:
    """Resolve profiles and id lists against a :class:`DocumentRegistry`."""

    def __init__(self, registry: DocumentRegistry, profiles: Optional[Mapping[str, Profile]] = None) -> None:
        self.registry = registry
        self._profiles: Dict[str, Profile] = dict(profiles or {})

    def profiles(self) -> List[str]:
        """Profile names in definition order."""
        return list(self._profiles)

    def get_profile(self, name: str) -> Profile:
        try:
            return self._profiles[name]
        except KeyError:
            raise UnknownProfileError(name, available=self._profiles.keys()) from None

    def expand_profile(self, name: str) -> List[str]:
        """Return the profile's document ids with ``extends`` expanded.

        The result may contain duplicates; :meth:`resolve_profile` removes
        them.

        Raises:
            UnknownProfileError: If ``name`` or an extended profile is undefined
            ProfileCycleError: If profiles extend each other in a loop
        """
        return self._expand(name, [])

    def _expand(self, name: str, stack: List[str]) -> List[str]:
        if name in stack:
            raise ProfileCycleError([*stack[stack.index(name):], name])
        profile = self.get_profile(name)
        stack.append(name)
        ids: List[str] = []
        for parent in profile.extends:
            ids.extend(self._expand(parent, stack))
        stack.pop()
        ids.extend(profile.documents)
        return ids

    def resolve_profile(self, name: str) -> Bundle:
        """Resolve a profile into a Bundle.

        Raises:
            UnknownProfileError: If the profile is not defined
            NotFoundError: If the profile references an unregistered document
            ProfileCycleError: If profile inheritance loops
        """
        ids = self.expand_profile(name)
        bundle = self._build(ids, profile=name)
        logger.debug(
            "Resolved profile %s: %d declared ids -> %d documents (%d lines)",
            name,
            len(ids),
            len(bundle),
            bundle.total_lines,
        )
        return bundle

    def resolve_ids(self, ids: Sequence[str]) -> Bundle:
        """Resolve an explicit id list into a Bundle.

        Raises:
            NotFoundError: Naming the first unregistered id; every missing id
                is listed in ``error.missing``
            TypeError: If ``ids`` is a single string rather than a sequence
        """
        if isinstance(ids, str):
            raise TypeError("resolve_ids expects a sequence of ids, not a string")
        return self._build(list(ids), profile=None)

    def _build(self, ids: List[str], *, profile: Optional[str]) -> Bundle:
        ordered = _dedupe(ids)
        missing = [doc_id for doc_id in ordered if doc_id not in self.registry]
        if missing:
            raise NotFoundError(missing[0], missing=missing)
        return Bundle(tuple(self.registry.get(doc_id) for doc_id in ordered), profile=profile)

    @staticmethod
    def total_lines(bundle: Bundle) -> int:
        """Sum of declared line counts across the bundle."""
        return bundle.total_lines


__all__ = ["BundleResolver"]
