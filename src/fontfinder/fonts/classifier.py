"""
Font File Classifier
====================

Decides whether a path is a font file from its extension or, for files
without one, from the signature at the start of the file.
"""

import logging
from pathlib import Path

from .models import FontKind

logger = logging.getLogger(__name__)

FONT_EXTENSIONS: dict[str, FontKind] = {
    ".ttf": FontKind.TTF,
    ".otf": FontKind.OTF,
    ".ttc": FontKind.TTC,
    ".dfont": FontKind.DFONT,
}

# sfnt version tags / collection header
FONT_SIGNATURES: dict[bytes, FontKind] = {
    b"ttcf": FontKind.TTC,
    b"OTTO": FontKind.OTF,
    b"\x00\x01\x00\x00": FontKind.TTF,
    b"true": FontKind.TTF,
}

SIGNATURE_SIZE = 4


def sniff_font_kind(path: str | Path) -> FontKind | None:
    """Classify a file by its leading bytes.

    Returns None when the file is unreadable or carries no font signature.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(SIGNATURE_SIZE)
    except OSError as e:
        logger.debug(f"Cannot read {path} for sniffing: {e}")
        return None

    return FONT_SIGNATURES.get(head)


def classify(path: str | Path) -> FontKind | None:
    """Classify a candidate font file.

    Files with a known extension are classified by suffix alone
    (case-insensitive), extension-less files by their signature. Any other
    file is not a font.
    """
    suffix = Path(path).suffix.lower()
    if suffix:
        return FONT_EXTENSIONS.get(suffix)
    # TypeKit on Windows stores fonts without an extension
    return sniff_font_kind(path)


def is_parseable(path: str | Path) -> bool:
    """Whether the file is a font the name table parsers can read."""
    kind = classify(path)
    return kind is not None and kind.parseable
