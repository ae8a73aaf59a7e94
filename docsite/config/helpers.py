"""Utility helpers shared by the docsite configuration loader."""

from __future__ import annotations

import typing as typ

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_base_path(value: object | None) -> str:
    """Return ``value`` as ``""`` or a ``/prefix`` without a trailing slash."""
    text = _optional_str(value)
    if not text:
        return ""
    stripped = text.strip("/")
    if not stripped:
        return ""
    return f"/{stripped}"


def _normalize_extensions(value: object | None, default: tuple[str, ...]) -> tuple[str, ...]:
    """Normalize extension lists into lowercase, dot-prefixed strings."""
    match value:
        case None:
            return default
        case str():
            items: list[object] = value.split()
        case list() | tuple():
            items = list(value)
        case _:
            msg = "Extension lists must be a string or a list of strings."
            raise SiteConfigError(msg)
    normalized: list[str] = []
    for item in items:
        text = str(item).strip().lower()
        if not text:
            continue
        normalized.append(text if text.startswith(".") else f".{text}")
    return tuple(normalized)


def _normalize_names(value: object | None) -> tuple[str, ...]:
    """Normalize a string or list of strings into a tuple of non-empty names."""
    if isinstance(value, str):
        return tuple(segment for segment in value.split() if segment)
    if isinstance(value, list | tuple):
        names: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                names.append(text)
        return tuple(names)
    return ()


def _require_mapping(value: object, section: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Section '{section}' must be a mapping."
        raise SiteConfigError(msg)
    return value


__all__ = [
    "_normalize_base_path",
    "_normalize_extensions",
    "_normalize_names",
    "_optional_str",
    "_require_mapping",
]
