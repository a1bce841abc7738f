"""
Identifier and path helpers.

Turns arbitrary asset names (mesh names, clip names, file names) into
identifiers that are safe to drop into generated template and script code.
"""

from __future__ import annotations

import re

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_SLASHES = re.compile(r"/{2,}")

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _clean(name: str) -> str:
    sanitized = _INVALID_CHARS.sub("_", name)
    sanitized = sanitized.strip("_")
    # Leading digit check runs after trimming so "_3D" stays a valid identifier
    if sanitized[:1].isdigit():
        sanitized = "_" + sanitized
    return sanitized


def sanitize(raw_name: str | None, fallback: str = "Component", ordinal: int | None = None) -> str:
    """
    Sanitize an asset name into a source identifier.

    Every character outside [A-Za-z0-9] becomes "_", surrounding underscores
    are trimmed and a leading digit gets a "_" prefix.

    Args:
        raw_name: Name as found in the model (may be empty or None)
        fallback: Base used when nothing valid survives ("Mesh", "Animation")
        ordinal: Appended to the fallback as "_<ordinal>" when given, so
            several fallbacks in one traversal stay distinct

    Returns:
        A non-empty string matching [A-Za-z_][A-Za-z0-9_]*
    """
    sanitized = _clean(raw_name or "")
    if sanitized:
        return sanitized

    base = _clean(fallback) or "Component"
    if ordinal is None:
        return base
    return f"{base}_{ordinal}"


def is_identifier(name: str) -> bool:
    return bool(IDENTIFIER.match(name))


def component_name(file_name: str) -> str:
    """
    Derive a PascalCase component name from a model file name.

    "assets/robot-arm.v2.glb" -> "Robotarm"
    """
    base = file_name.replace("\\", "/").split("/")[-1].split(".")[0]
    name = _NON_ALNUM.sub("", base[:1].upper() + base[1:])
    if not name:
        return "Model"
    if name[0].isdigit():
        return "_" + name
    return name


def model_reference_path(file_name: str, path_prefix: str = "") -> str:
    """Absolute public path the generated component loads the model from."""
    parts = [part.strip("/") for part in (path_prefix, file_name) if part and part.strip("/")]
    return _SLASHES.sub("/", "/" + "/".join(parts))
