from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class DepfetchError(Exception):
    """Base exception for depfetch."""

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


class ConfigError(DepfetchError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DepfetchError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ManifestError(DepfetchError, ValueError):
    """Raised when a repository manifest exists but cannot be read or is invalid."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        issues: Optional[list[str]] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        if issues:
            ctx["issues"] = list(issues)
        DepfetchError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.path = path
        self.issues = list(issues or [])


class DependencyConflictError(DepfetchError):
    """Raised when one dependency name is requested with two different url/revision pairs."""

    def __init__(self, existing: Any, requested: Any) -> None:
        message = (
            f"dependency mismatch for '{requested.name}': "
            f"{requested.url}#{requested.revision} conflicts with "
            f"{existing.url}#{existing.revision}"
        )
        super().__init__(
            message,
            context={
                "name": requested.name,
                "existing": {"url": existing.url, "revision": existing.revision},
                "requested": {"url": requested.url, "revision": requested.revision},
            },
        )
        self.existing = existing
        self.requested = requested


class WorkspaceError(DepfetchError, NotADirectoryError):
    """Raised when the workspace path exists but is not a directory."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DepfetchError.__init__(self, message, context=context)
        NotADirectoryError.__init__(self, message)


class FetchError(DepfetchError, RuntimeError):
    """Raised when a clone, checkout or pull cannot be completed."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        output: str = "",
        returncode: Optional[int] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["operation"] = operation
        if returncode is not None:
            ctx["returncode"] = returncode
        if output:
            ctx["output"] = output
        DepfetchError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.operation = operation
        self.output = output
        self.returncode = returncode


__all__ = [
    "DepfetchError",
    "ConfigError",
    "ManifestError",
    "DependencyConflictError",
    "WorkspaceError",
    "FetchError",
]
