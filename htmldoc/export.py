"""JSON export of parsed documents."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel

from .config import PARSER_VERSION, SCHEMA_VERSION
from .model.nodes import Document


class DocumentExport(BaseModel):
    """A parsed document with versioning and content hashes."""

    schema_version: int = SCHEMA_VERSION
    parser_version: str = PARSER_VERSION
    source_sha256: str
    markdown_sha256: str
    tokens: int
    document: Document


def compute_sha256(content: bytes | str) -> str:
    """Compute SHA256 hash of content.

    Args:
        content: Bytes or string to hash

    Returns:
        Hex-encoded SHA256 hash
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def create_export(document: Document) -> DocumentExport:
    """Create the export envelope for a parsed document."""
    from .render.tokens import count_tokens

    markdown = document.to_markdown()
    return DocumentExport(
        source_sha256=compute_sha256(document.source),
        markdown_sha256=compute_sha256(markdown),
        tokens=count_tokens(markdown),
        document=document,
    )


def export_json(export: DocumentExport) -> str:
    """Serialize an export deterministically (sorted keys, trailing newline)."""
    payload = export.model_dump(mode="json")
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_export(export: DocumentExport, path: Path) -> Path:
    """Write an export to a JSON file.

    Args:
        export: Export envelope
        path: Destination file

    Returns:
        Path to the written file
    """
    path.write_text(export_json(export), encoding="utf-8")
    return path
