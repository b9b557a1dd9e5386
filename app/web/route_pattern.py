from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote

_PARAMETER_RE = re.compile(r"\{(?P<name>[A-Za-z_]\w*)(?:=(?P<default>[^{}?]*))?(?P<optional>\?)?\}")


@dataclass(frozen=True)
class RouteSegment:
    name: Optional[str] = None
    literal: Optional[str] = None
    default: Optional[str] = None
    optional: bool = False

    @property
    def is_parameter(self) -> bool:
        return self.name is not None

    @property
    def can_be_omitted(self) -> bool:
        return self.is_parameter and (self.optional or self.default is not None)


class RoutePattern:
    """A conventional route template such as ``{controller=Home}/{action=Index}/{id?}``.

    Segments are either literals (matched case-insensitively) or parameters. A
    parameter may carry a default (``{action=Index}``) or be optional
    (``{id?}``); once a segment can be omitted, every following segment must be
    omittable too.
    """

    def __init__(self, template: str, segments: list[RouteSegment]) -> None:
        self.template = template
        self.segments = segments

    def __repr__(self) -> str:
        return f"RoutePattern({self.template!r})"

    @staticmethod
    def parse(template: str) -> "RoutePattern":
        stripped = template.strip().strip("/")
        if not stripped:
            return RoutePattern(template, [])

        segments: list[RouteSegment] = []
        seen: set[str] = set()
        for raw in stripped.split("/"):
            if not raw:
                raise ValueError(f"Empty segment in route template: {template!r}")

            if "{" not in raw and "}" not in raw:
                segments.append(RouteSegment(literal=raw))
                continue

            match = _PARAMETER_RE.fullmatch(raw)
            if match is None:
                raise ValueError(f"Invalid route segment {raw!r} in template {template!r}")

            name = match.group("name")
            key = name.lower()
            if key in seen:
                raise ValueError(f"Duplicate route parameter {name!r} in template {template!r}")
            seen.add(key)

            default = match.group("default")
            optional = match.group("optional") is not None
            if default is not None and optional:
                raise ValueError(f"Route parameter {name!r} cannot have a default and be optional")
            segments.append(RouteSegment(name=name, default=default, optional=optional))

        omittable_seen = False
        for seg in segments:
            if seg.can_be_omitted:
                omittable_seen = True
            elif omittable_seen:
                raise ValueError(
                    f"Segment {seg.name or seg.literal!r} in {template!r} follows an optional segment and must "
                    "be optional or have a default"
                )

        return RoutePattern(template, segments)

    def match(self, path: str) -> Optional[dict[str, Optional[str]]]:
        """Match a URL path; returns route values (defaults applied) or None."""

        stripped = path.strip("/")
        parts = stripped.split("/") if stripped else []
        if len(parts) > len(self.segments) or any(not p for p in parts):
            return None

        values: dict[str, Optional[str]] = {}
        for index, seg in enumerate(self.segments):
            if index < len(parts):
                part = unquote(parts[index])
                if seg.is_parameter:
                    values[seg.name] = part  # type: ignore[index]
                elif part.lower() != (seg.literal or "").lower():
                    return None
                continue

            if not seg.can_be_omitted:
                return None
            values[seg.name] = seg.default  # type: ignore[index]

        return values
