"""Helpers for reading MSBuild project files as plain XML."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.split("}", 1)[1] if "}" in tag else tag


def load_project(project_path: str | Path) -> ET.Element:
    """Parse a project file and return its root element.

    Raises ``ET.ParseError`` for malformed XML and ``OSError`` when the file
    cannot be read.
    """
    content = Path(project_path).read_text(encoding="utf-8-sig", errors="replace")
    return ET.fromstring(content)


def iter_elements(root: ET.Element, name: str):
    """Yield every element named *name*, with or without the MSBuild namespace."""
    for element in root.iter():
        if isinstance(element.tag, str) and local_name(element.tag) == name:
            yield element


def child_text(element: ET.Element, name: str) -> str | None:
    for child in element:
        if local_name(child.tag) == name and child.text and child.text.strip():
            return child.text.strip()
    return None


def item_version(element: ET.Element) -> str | None:
    """Version of a ``PackageReference``/``PackageVersion`` item, attribute or child."""
    for key in ("Version", "VersionOverride"):
        value = element.get(key)
        if value and value.strip():
            return value.strip()
        value = child_text(element, key)
        if value:
            return value
    return None
