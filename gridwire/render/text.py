"""Adaptive text wrapping and font fitting.

Glyph widths are estimated, not measured: wide glyphs (CJK, full-width,
Hangul) count as one font-size unit, plain ASCII as 0.55 and any other narrow
character as 0.7. The estimate only has to be good enough to keep text inside
its cell.
"""

from dataclasses import dataclass

FONT_STEP = 2
MIN_FONT_SIZE = 8
LINE_HEIGHT = 1.2

WIDE_WIDTH = 1.0
ASCII_WIDTH = 0.55
NARROW_WIDTH = 0.7

# Inclusive code point ranges rendered at full width
_WIDE_RANGES = (
    (0x1100, 0x115F),  # Hangul Jamo
    (0x2E80, 0x303E),  # CJK radicals, symbols and punctuation
    (0x3041, 0x33FF),  # Kana, Bopomofo, CJK compatibility
    (0x3400, 0x4DBF),  # CJK extension A
    (0x4E00, 0x9FFF),  # CJK unified ideographs
    (0xA000, 0xA4CF),  # Yi
    (0xAC00, 0xD7A3),  # Hangul syllables
    (0xF900, 0xFAFF),  # CJK compatibility ideographs
    (0xFE30, 0xFE4F),  # CJK compatibility forms
    (0xFF00, 0xFF60),  # Full-width forms
    (0xFFE0, 0xFFE6),
    (0x20000, 0x3FFFD),  # CJK extensions B onwards
)


@dataclass(frozen=True)
class FittedText:
    """Wrapped lines and the font size they fit at."""

    lines: tuple[str, ...]
    font_size: float


def is_wide(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in _WIDE_RANGES)


def char_width(char: str, font_size: float) -> float:
    if is_wide(char):
        return font_size * WIDE_WIDTH
    if char.isascii():
        return font_size * ASCII_WIDTH
    return font_size * NARROW_WIDTH


def text_width(text: str, font_size: float) -> float:
    """Estimated pixel width of a string."""
    return sum(char_width(char, font_size) for char in text)


def tokenize_line(line: str) -> list[str]:
    """Split one hard line into wrap tokens.

    Wide glyphs are tokens on their own. Other characters accumulate into
    word runs that end after a space, so each run carries its trailing space.

    Example:
        >>> tokenize_line("Hi there世界")
        ['Hi ', 'there', '世', '界']
    """
    tokens: list[str] = []
    run = ""
    for char in line:
        if is_wide(char):
            if run:
                tokens.append(run)
                run = ""
            tokens.append(char)
        elif char == " ":
            tokens.append(run + char)
            run = ""
        else:
            run += char
    if run:
        tokens.append(run)
    return tokens


def wrap_text(text: str, max_width: float, font_size: float) -> list[str]:
    """Greedily wrap text into lines no wider than max_width.

    Hard breaks (newlines) are kept, including empty lines. A token wider
    than max_width on its own is placed alone on a line rather than split.

    Args:
        text: Text to wrap.
        max_width: Available width in pixels.
        font_size: Font size used for width estimation.

    Returns:
        Lines with trailing spaces removed.
    """
    lines: list[str] = []
    for hard_line in text.split("\n"):
        current = ""
        width = 0.0
        for token in tokenize_line(hard_line):
            token_width = text_width(token, font_size)
            if current and width + token_width > max_width:
                lines.append(current.rstrip(" "))
                current, width = token, token_width
            else:
                current += token
                width += token_width
        lines.append(current.rstrip(" "))
    return lines


def fit_text(
    text: str,
    width: float,
    height: float,
    padding: float,
    font_size: float,
) -> FittedText:
    """Find the largest font size, stepping down from font_size, that fits.

    The text is re-wrapped at every size. Once MIN_FONT_SIZE is reached it is
    used even if the text still overflows.

    Args:
        text: Text to fit.
        width: Rectangle width.
        height: Rectangle height.
        padding: Inset applied on every side.
        font_size: Starting font size.

    Returns:
        FittedText with the wrapped lines and chosen size.
    """
    available_width = max(width - 2 * padding, 0)
    available_height = max(height - 2 * padding, 0)

    size = font_size
    while True:
        lines = wrap_text(text, available_width, size)
        if len(lines) * size * LINE_HEIGHT <= available_height or size <= MIN_FONT_SIZE:
            return FittedText(lines=tuple(lines), font_size=size)
        size = max(size - FONT_STEP, MIN_FONT_SIZE)
