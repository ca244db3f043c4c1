"""
Box layout engine shared by the start-up and request banners.

Aligns a list of labeled lines on their delimiter and wraps them in a
bordered box drawn with a single glyph.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from httpbanner.core.errors import InvalidGlyph, InvalidLabel

DELIMITER = ":"
STARTUP_MARGIN = 5
REQUEST_MARGIN = 6


@dataclass(frozen=True)
class LabeledLine:
    """A single ``label: value`` row of a banner."""

    label: str
    value: Optional[str] = None

    @property
    def text(self) -> str:
        return f"{self.label} {self.value}"


def validate_glyph(glyph: str) -> str:
    if not isinstance(glyph, str) or len(glyph) != 1:
        raise InvalidGlyph(glyph)
    return glyph


def _present(lines: Iterable[LabeledLine], delimiter: str) -> List[LabeledLine]:
    """Drop lines without a value and reject labels missing the delimiter."""
    kept = [line for line in lines if line.value is not None]
    for line in kept:
        if not line.label.endswith(delimiter):
            raise InvalidLabel(line.label, delimiter)
    return kept


def label_width(lines: Iterable[LabeledLine], delimiter: str = DELIMITER) -> int:
    """
    Width of the label column, delimiter included.

    Args:
        lines: Lines to measure. Lines without a value are ignored.
        delimiter: Alignment anchor character.

    Returns:
        Largest ``label.index(delimiter) + 1`` over the lines, 0 when empty.
    """
    kept = _present(lines, delimiter)
    return max((line.label.index(delimiter) + 1 for line in kept), default=0)


def align_lines(
    lines: Iterable[LabeledLine], delimiter: str = DELIMITER
) -> List[str]:
    """
    Left-pad every rendered line so that all delimiters share one column.

    Args:
        lines: Lines to align. Lines without a value are skipped.
        delimiter: Alignment anchor character.

    Returns:
        The aligned line strings in input order.
    """
    kept = _present(lines, delimiter)
    width = label_width(kept, delimiter)
    aligned = []
    for line in kept:
        padding = width - line.label.index(delimiter)
        aligned.append(" " * padding + line.text)
    return aligned


def line_width(aligned: Iterable[str]) -> int:
    return max((len(line) for line in aligned), default=0)


def render_box(
    lines: Iterable[LabeledLine],
    glyph: str = "#",
    include_header: bool = False,
    margin: int = STARTUP_MARGIN,
    delimiter: str = DELIMITER,
) -> str:
    """
    Render labeled lines as a bordered, delimiter-aligned text block.

    Every row of the result has the same width: the longest aligned line
    plus ``margin`` plus the two border glyphs.

    Args:
        lines: Ordered ``LabeledLine`` rows. Rows whose value is None are left out.
        glyph: Single border character.
        include_header: Add a blank row inside the top and bottom borders.
        margin: Extra inner width added to the longest line.
        delimiter: Character every label must end with.

    Returns:
        The rows joined with newlines, without a trailing newline.

    Raises:
        InvalidGlyph: If ``glyph`` is not exactly one character.
        InvalidLabel: If a label does not end with ``delimiter``.
    """
    validate_glyph(glyph)
    if margin < 2:
        raise ValueError("Box margin must be at least 2")
    aligned = align_lines(list(lines), delimiter)
    inner = line_width(aligned) + margin

    border = glyph * (inner + 2)
    blank = f"{glyph}{' ' * inner}{glyph}"

    rows = [border]
    if include_header:
        rows.append(blank)
    for text in aligned:
        rows.append(f"{glyph} {text.ljust(inner - 2)} {glyph}")
    if include_header:
        rows.append(blank)
    rows.append(border)
    return "\n".join(rows)
