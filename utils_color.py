import math
import re

from errors import InvalidColor

HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")

def hex_to_rgb(hex_str):
    if not isinstance(hex_str, str):
        raise InvalidColor(f"Expected a #rrggbb string, got {hex_str!r}")
    m = HEX_PATTERN.match(hex_str.strip())
    if not m:
        raise InvalidColor(f"Not a #rrggbb color: {hex_str!r}")
    h = m.group(1)
    return tuple(int(h[i:i + 2], 16) for i in (0, 2, 4))

def rgb_to_hex(r, g, b):
    for c in (r, g, b):
        if int(c) != c or not 0 <= c <= 255:
            raise InvalidColor(f"Channel out of range: {c!r}")
    return "#" + "".join(f"{int(c):02x}" for c in (r, g, b))

def round_half_up(x):
    # x.5 always goes up, unlike round() which goes to even
    return int(math.floor(x + 0.5))
