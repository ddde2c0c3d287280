"""Alignment flags positioning the chart inside its bounding box."""

from enum import IntFlag


class Gravity(IntFlag):
    """Horizontal and vertical alignment flags."""

    NO_GRAVITY = 0
    LEFT = 0x01
    RIGHT = 0x02
    CENTER_HORIZONTAL = 0x04
    START = 0x08  # LEFT in left-to-right layouts, RIGHT otherwise
    END = 0x10
    TOP = 0x20
    BOTTOM = 0x40
    CENTER_VERTICAL = 0x80
    CENTER = CENTER_HORIZONTAL | CENTER_VERTICAL


HORIZONTAL_MASK = (
    Gravity.LEFT | Gravity.RIGHT | Gravity.CENTER_HORIZONTAL | Gravity.START | Gravity.END
)
VERTICAL_MASK = Gravity.TOP | Gravity.BOTTOM | Gravity.CENTER_VERTICAL

DEFAULT_GRAVITY = Gravity.CENTER_HORIZONTAL | Gravity.TOP


def resolve_gravity(gravity: Gravity, rtl: bool = False) -> Gravity:
    """Replace relative START/END flags with absolute LEFT/RIGHT.

    Args:
        gravity: Gravity flags, possibly containing START or END.
        rtl: Whether the host lays out right-to-left.

    Returns:
        Gravity with only absolute horizontal flags.
    """
    gravity = Gravity(gravity)
    horizontal = gravity & HORIZONTAL_MASK
    if horizontal == Gravity.START:
        horizontal = Gravity.RIGHT if rtl else Gravity.LEFT
    elif horizontal == Gravity.END:
        horizontal = Gravity.LEFT if rtl else Gravity.RIGHT
    return Gravity((gravity & ~HORIZONTAL_MASK) | horizontal)


def horizontal_component(gravity: Gravity) -> Gravity:
    return Gravity(gravity & HORIZONTAL_MASK)


def vertical_component(gravity: Gravity) -> Gravity:
    return Gravity(gravity & VERTICAL_MASK)


def parse_gravity(value: str | int | Gravity) -> Gravity:
    """Parse gravity from a config value such as ``"center_horizontal|top"``.

    Raises:
        ValueError: If a flag name is not recognised.
    """
    if isinstance(value, int):
        return Gravity(value)

    gravity = Gravity.NO_GRAVITY
    for part in str(value).split("|"):
        name = part.strip().upper()
        if not name:
            continue
        try:
            gravity |= Gravity[name]
        except KeyError:
            raise ValueError(f"Unknown gravity flag: {part.strip()!r}") from None
    return gravity
