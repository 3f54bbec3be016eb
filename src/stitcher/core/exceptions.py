from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence


class StitcherError(Exception):
    """Base exception for html-stitcher."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
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


class PartialError(StitcherError):
    """Base class for errors raised while rendering a partial tree.

    Carries the offending source file and tag name so a human can locate
    the problem.
    """

    def __init__(
        self,
        message: str,
        *,
        file: Optional[str] = None,
        tag: Optional[str] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if file:
            ctx["file"] = file
        if tag:
            ctx["tag"] = tag
        super().__init__(message, context=ctx)

    @property
    def file(self) -> Optional[str]:
        return self.context.get("file")

    @property
    def tag(self) -> Optional[str]:
        return self.context.get("tag")


class MalformedPartialError(PartialError):
    """Raised when a partial open tag has no matching close tag."""


class NestedPartialError(PartialError):
    """Raised when a partial occurrence starts inside another one's span."""

    def __init__(
        self,
        message: str,
        *,
        outer: str,
        inner: str,
        file: Optional[str] = None,
    ) -> None:
        super().__init__(message, file=file, tag=outer, context={"inner": inner})

    @property
    def inner(self) -> str:
        return self.context["inner"]


class UnresolvedPartialError(PartialError):
    """Raised when an occurrence names a partial with no candidate file."""


class CyclicInclusionError(PartialError):
    """Raised when a partial (directly or indirectly) includes itself."""

    def __init__(self, message: str, *, chain: Sequence[str], tag: Optional[str] = None) -> None:
        super().__init__(
            message,
            file=chain[-2] if len(chain) > 1 else None,
            tag=tag,
            context={"chain": list(chain)},
        )

    @property
    def chain(self) -> list[str]:
        return list(self.context["chain"])


class IncludeDepthError(PartialError):
    """Raised when partial nesting exceeds the configured maximum depth."""


class RenderError(StitcherError):
    """Raised by the builder when rendering a root file fails."""

    def __init__(self, root: str, cause: BaseException) -> None:
        ctx = dict(getattr(cause, "context", None) or {})
        ctx["root"] = root
        ctx.setdefault("cause", cause.__class__.__name__)
        super().__init__(f"{root} - {cause}", context=ctx)
        self.cause = cause


class InputPathError(StitcherError, ValueError):
    """Raised when the input or output paths given to a build are unusable."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StitcherError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(StitcherError):
    """Raised when configuration cannot be loaded or fails validation."""


__all__ = [
    "StitcherError",
    "PartialError",
    "MalformedPartialError",
    "NestedPartialError",
    "UnresolvedPartialError",
    "CyclicInclusionError",
    "IncludeDepthError",
    "RenderError",
    "InputPathError",
    "ConfigError",
]
