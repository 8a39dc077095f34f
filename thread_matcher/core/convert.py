"""Colour-space conversion: hex text, sRGB, linear RGB, XYZ and CIELab.

Every colour takes the same path before it is compared perceptually:

    RGBColor -> to_linear per channel -> rgb_to_xyz (D65) -> xyz_to_lab

All functions are pure; the same RGB input always yields bit-identical
XYZ/Lab output, so callers may compare results exactly.
"""

import re

from thread_matcher.core.types import LabColor, RGBColor, XYZColor

# D65 reference white, luminance scaled to 100
D65_WHITE = (95.047, 100.000, 108.883)

# CIE constants: (6/29)^3 and (29/3)^3
EPSILON = 0.008856
KAPPA = 903.3

_HEX_RE = re.compile(r'[0-9A-Fa-f]{6}')


def parse_hex(text: str) -> RGBColor | None:
    """Parse 'RRGGBB' or '#RRGGBB' (case-insensitive). Returns None if malformed."""
    value = text.strip()
    if value.startswith('#'):
        value = value[1:]
    if not _HEX_RE.fullmatch(value):
        return None
    return RGBColor(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def hex_string(color: RGBColor) -> str:
    """Six uppercase hex digits, no '#' prefix."""
    return f'{color.r:02X}{color.g:02X}{color.b:02X}'


def to_linear(channel: int) -> float:
    """Inverse sRGB companding of one 8-bit channel, result in [0, 1]."""
    v = channel / 255.0
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def rgb_to_xyz(color: RGBColor) -> XYZColor:
    r = to_linear(color.r) * 100.0
    g = to_linear(color.g) * 100.0
    b = to_linear(color.b) * 100.0
    # sRGB -> XYZ, D65
    x = r * 0.4124564 + g * 0.3575761 + b * 0.1804375
    y = r * 0.2126729 + g * 0.7151522 + b * 0.0721750
    z = r * 0.0193339 + g * 0.1191920 + b * 0.9503041
    return XYZColor(x, y, z)


def _f(t: float) -> float:
    if t > EPSILON:
        return t ** (1.0 / 3.0)
    return (KAPPA * t + 16.0) / 116.0


def xyz_to_lab(xyz: XYZColor) -> LabColor:
    xn, yn, zn = D65_WHITE
    fx = _f(xyz.x / xn)
    fy = _f(xyz.y / yn)
    fz = _f(xyz.z / zn)
    return LabColor(
        l=116.0 * fy - 16.0,
        a=500.0 * (fx - fy),
        b=200.0 * (fy - fz),
    )


def rgb_to_lab(color: RGBColor) -> LabColor:
    """Canonical RGB -> Lab path used before any perceptual distance."""
    return xyz_to_lab(rgb_to_xyz(color))
