from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional


class GuidepackError(Exception):
    """Base exception for guidepack."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class CatalogError(GuidepackError, ValueError):
    """Raised when a catalog or configuration file is malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GuidepackError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DuplicateIdError(CatalogError):
    """Raised when a document id is registered twice."""

    def __init__(self, doc_id: str, *, source: Optional[str] = None) -> None:
        ctx: Dict[str, Any] = {"id": doc_id}
        if source:
            ctx["source"] = source
        msg = f"Document '{doc_id}' is already registered"
        if source:
            msg += f" (duplicate in {source})"
        super().__init__(msg, context=ctx)
        self.doc_id = doc_id


class NotFoundError(GuidepackError, LookupError):
    """Raised when a document id is not registered."""

    def __init__(self, doc_id: str, *, missing: Iterable[str] | None = None) -> None:
        missing_ids = list(missing) if missing is not None else [doc_id]
        msg = f"Document not found: {doc_id}"
        if len(missing_ids) > 1:
            msg = f"Documents not found: {', '.join(missing_ids)}"
        GuidepackError.__init__(self, msg, context={"id": doc_id, "missing": missing_ids})
        LookupError.__init__(self, msg)
        self.doc_id = doc_id
        self.missing = missing_ids


class UnknownProfileError(GuidepackError, LookupError):
    """Raised when a profile name is not defined."""

    def __init__(self, name: str, *, available: Iterable[str] | None = None) -> None:
        ctx: Dict[str, Any] = {"profile": name}
        msg = f"Unknown profile: {name}"
        if available is not None:
            names = sorted(available)
            ctx["available"] = names
            if names:
                msg += f" (available: {', '.join(names)})"
        GuidepackError.__init__(self, msg, context=ctx)
        LookupError.__init__(self, msg)
        self.name = name


class ProfileCycleError(CatalogError):
    """Raised when profiles extend each other in a loop."""

    def __init__(self, cycle: Iterable[str]) -> None:
        chain = list(cycle)
        super().__init__(
            f"Profile inheritance cycle: {' -> '.join(chain)}",
            context={"cycle": chain},
        )
        self.cycle = chain


class ReadError(GuidepackError, OSError):
    """Raised when a document's content cannot be read."""

    def __init__(self, message: str = "", *, path: Any = None, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        if path is not None:
            ctx["path"] = str(path)
        GuidepackError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)
        self.path = path

    def __str__(self) -> str:
        # OSError.__str__ would render the errno tuple form.
        return self.args[0] if self.args else ""


__all__ = [
    "GuidepackError",
    "CatalogError",
    "DuplicateIdError",
    "NotFoundError",
    "UnknownProfileError",
    "ProfileCycleError",
    "ReadError",
]
