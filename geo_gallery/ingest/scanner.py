from __future__ import annotations

from pathlib import Path

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".heic", ".gif"}


def is_supported_image(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def scan_uris(root: str | Path) -> list[str]:
    """Return sorted file:// URIs for every supported image under root.

    A file path yields its own URI (when supported); a directory is recursed.
    """
    root_path = Path(root).expanduser()
    if root_path.is_file():
        return [root_path.resolve().as_uri()] if is_supported_image(root_path) else []
    uris: list[str] = []
    for path in sorted(root_path.rglob("*")):
        if not path.is_file() or not is_supported_image(path):
            continue
        uris.append(path.resolve().as_uri())
    return uris


def to_uri(target: str) -> list[str]:
    """Map a CLI argument to URIs: local paths are scanned, anything else passes through."""
    path = Path(target).expanduser()
    if path.exists():
        return scan_uris(path)
    return [target]
