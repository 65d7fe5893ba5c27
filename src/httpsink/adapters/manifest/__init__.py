"""Loading of HttpRequest manifests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .schema import HttpRequestManifest
from .translator import render_status, translate_manifest

if TYPE_CHECKING:
    from pathlib import Path

    from httpsink.domain.model import HttpRequest


class ManifestError(ValueError):
    """Raised when a manifest cannot be read or does not describe an HttpRequest."""


def parse_manifest(payload: object) -> HttpRequest:
    try:
        manifest = HttpRequestManifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(f"Invalid HttpRequest manifest: {exc}") from exc
    return translate_manifest(manifest)


def load_manifest(path: Path) -> HttpRequest:
    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    return parse_manifest(payload)


__all__ = [
    "HttpRequestManifest",
    "ManifestError",
    "load_manifest",
    "parse_manifest",
    "render_status",
    "translate_manifest",
]
