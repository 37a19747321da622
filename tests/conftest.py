"""
Pytest configuration and fixtures for font finder tests.
"""

import tempfile
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont

from fontfinder.fonts.models import FamilyEntry, FontNameRecord


def _square_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_font(
    path,
    family,
    style="Regular",
    ps_name=None,
    typographic_family=None,
    typographic_subfamily=None,
):
    """Write a minimal TrueType font with the given names to ``path``.

    Name values may be plain strings or ``{language_tag: value}`` dicts for
    localized records.
    """
    glyph = _square_glyph()
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})
    fb.setupGlyf({".notdef": glyph, "A": glyph})
    fb.setupHorizontalMetrics({".notdef": (600, 100), "A": (600, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)

    name_strings = {
        "familyName": family,
        "styleName": style,
        "psName": ps_name or f"{family}-{style}".replace(" ", ""),
    }
    if typographic_family:
        name_strings["typographicFamily"] = typographic_family
    if typographic_subfamily:
        name_strings["typographicSubfamily"] = typographic_subfamily
    fb.setupNameTable(name_strings, mac=False)

    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


def build_collection(path, fonts):
    """Write a TrueType collection holding the given font files."""
    collection = TTCollection()
    collection.fonts = [TTFont(str(font)) for font in fonts]
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    collection.save(str(path))
    return path


def make_record(family, sub_family="Regular", file=None, **kwargs):
    """Create a FontNameRecord with a file name derived from its names."""
    file = file or f"/fonts/{family}-{sub_family}.ttf".replace(" ", "")
    return FontNameRecord(family=family, sub_family=sub_family, file=file, **kwargs)


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def font_factory(temp_dir):
    """Build font files inside the temporary directory.

    Paths are relative to ``temp_dir``.
    """

    def factory(relative_path, family, style="Regular", **kwargs):
        return build_font(temp_dir / relative_path, family, style, **kwargs)

    return factory


@pytest.fixture
def collection_factory(temp_dir):
    """Build TrueType collections from (family, style) pairs."""

    def factory(relative_path, faces):
        sources = [
            build_font(temp_dir / "_faces" / f"face{i}.ttf", family, style)
            for i, (family, style) in enumerate(faces)
        ]
        return build_collection(temp_dir / relative_path, sources)

    return factory


@pytest.fixture
def record_factory():
    """Factory for FontNameRecord objects."""
    return make_record


@pytest.fixture
def arial_entry():
    """Family entry with two styles."""
    return FamilyEntry(
        family="Arial",
        sub_families=("Regular", "Bold"),
        files={"Regular": "/fonts/arial.ttf", "Bold": "/fonts/arialbd.ttf"},
        postscript_names={"Regular": "ArialMT", "Bold": "Arial-BoldMT"},
        alternative_families={"Regular": (), "Bold": ()},
        alternative_sub_families={"Regular": (), "Bold": ()},
    )


@pytest.fixture
def fonts_dir(font_factory, temp_dir):
    """Directory with a small set of fonts and non-font files."""
    root = temp_dir / "fonts"
    font_factory("fonts/Alpha-Regular.ttf", "Alpha", "Regular")
    font_factory("fonts/Alpha-Bold.ttf", "Alpha", "Bold")
    font_factory("fonts/nested/Beta-Regular.ttf", "Beta", "Regular")
    (root / "readme.txt").write_text("not a font")
    return root
