"""Text measurement used to reserve room for spoke labels."""

from typing import Protocol

# Sample string sized like the widest numeric label
SAMPLE_TEXT = "00000"


class TextMeasurer(Protocol):
    """Anything able to report the rendered size of a string."""

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        """Return (width, height) of text rendered at font_size."""
        ...


class EstimatedTextMetrics:
    """Approximate monospace metrics, no font backend required.

    Args:
        char_width: Advance width of one character, as a fraction of the font size.
        line_height: Height of one line, as a fraction of the font size.
    """

    def __init__(self, char_width: float = 0.6, line_height: float = 1.4):
        self.char_width = char_width
        self.line_height = line_height

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        return len(text) * font_size * self.char_width, font_size * self.line_height


def label_font_size(width: float, height: float) -> float:
    """Font size for unselected labels, scaled to the bounding box."""
    return min(width, height) / 24


def selected_label_font_size(width: float, height: float) -> float:
    """Font size for the selected label while interactive."""
    return min(width, height) / 20


def label_padding(
    names: list[str],
    font_size: float,
    measurer: TextMeasurer,
) -> tuple[float, float]:
    """Compute worst-case label footprint.

    Args:
        names: Names of every data point.
        font_size: Label font size.
        measurer: Text measurement backend.

    Returns:
        (h_pad, v_pad): widest label width, and the sample string's height.
    """
    h_pad, v_pad = measurer.measure(SAMPLE_TEXT, font_size)
    for name in names:
        width, _height = measurer.measure(name, font_size)
        if width > h_pad:
            h_pad = width
    return h_pad, v_pad
