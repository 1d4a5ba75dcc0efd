"""Deterministic zip archives.

Two builds of the same inputs produce byte-identical archives:
- entries are written in sorted order,
- every entry carries the same timestamp (1980-01-01, the zip epoch),
- permissions are normalized to 0644,
- the manifest, when present, is always the first entry.

Layout of a manifest follows the jar convention: ``Name: value`` lines,
wrapped at 72 bytes with single-space continuation lines.
"""

from __future__ import annotations

import logging
import os
import zipfile
from collections.abc import Iterable, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_PATH = "META-INF/MANIFEST.MF"
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_MAX_LINE_BYTES = 72


def _wrap_manifest_line(line: str) -> list[str]:
    parts: list[str] = []
    current, size = "", 0
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > _MAX_LINE_BYTES:
            parts.append(current)
            current, size = " ", 1
        current += char
        size += width
    parts.append(current)
    return parts


def render_manifest(attributes: Mapping[str, str]) -> bytes:
    """Render manifest attributes (insertion order kept) as jar manifest bytes."""
    lines = ["Manifest-Version: 1.0"]
    for name, value in attributes.items():
        lines.extend(_wrap_manifest_line(f"{name}: {value}"))
    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")


def parse_manifest(data: bytes) -> dict[str, str]:
    """Parse the main section of a jar manifest."""
    attributes: dict[str, str] = {}
    last: str | None = None
    for raw in data.decode("utf-8").splitlines():
        if not raw:
            break
        if raw.startswith(" ") and last is not None:
            attributes[last] += raw[1:]
            continue
        name, _, value = raw.partition(": ")
        attributes[name] = value
        last = name
    return attributes


def collect_tree(root: Path, prefix: str = "") -> dict[str, Path]:
    """Map archive names to files under *root*. A missing root yields nothing."""
    root = Path(root)
    if not root.is_dir():
        return {}
    prefix = prefix.strip("/")
    entries: dict[str, Path] = {}
    for path in sorted(root.rglob("*")):
        if path.is_file():
            rel = path.relative_to(root).as_posix()
            entries[f"{prefix}/{rel}" if prefix else rel] = path
    return entries


def collect_trees(roots: Iterable[Path], prefix: str = "") -> dict[str, Path]:
    """Merge several roots; the first root providing a name wins."""
    merged: dict[str, Path] = {}
    for root in roots:
        for name, path in collect_tree(root, prefix).items():
            if name in merged:
                logger.warning("Duplicate archive entry %s from %s ignored", name, path)
                continue
            merged[name] = path
    return merged


def _write_entry(archive: zipfile.ZipFile, name: str, data: bytes) -> None:
    info = zipfile.ZipInfo(name, date_time=FIXED_DATE_TIME)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    archive.writestr(info, data)


def write_archive(
    dest: Path,
    entries: Mapping[str, Path | bytes],
    manifest: Mapping[str, str] | None = None,
) -> Path:
    """Write a deterministic zip archive to *dest* and return *dest*.

    *entries* maps archive names to files on disk or to raw bytes. The
    archive is written to a sibling ``.tmp`` file and moved into place only
    once complete; on failure *dest* is left untouched.
    """
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = dest.with_name(f"{dest.name}.tmp")
    try:
        with zipfile.ZipFile(tmp_path, "w") as archive:
            if manifest is not None:
                _write_entry(archive, MANIFEST_PATH, render_manifest(manifest))
            for name in sorted(entries):
                if name == MANIFEST_PATH and manifest is not None:
                    continue
                content = entries[name]
                data = content if isinstance(content, bytes) else Path(content).read_bytes()
                _write_entry(archive, name, data)
        os.replace(tmp_path, dest)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s (%d entries)", dest, len(entries))
    return dest
