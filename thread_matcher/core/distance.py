"""Colour-difference metrics: CIE76, CIE94 and plain RGB Euclidean.

CIE94 is order-dependent: the chroma weighting (sC, sH) comes from the
first argument only, so delta_e_94(a, b) != delta_e_94(b, a) in general.
Pass the query colour first and the reference colour second.
"""

import math

from thread_matcher.core.types import LabColor, RGBColor

# (kL, k1, k2) per CIE94 application profile
TEXTILES = (2.0, 0.048, 0.014)
GRAPHIC_ARTS = (1.0, 0.045, 0.015)


def delta_e_76(lab1: LabColor, lab2: LabColor) -> float:
    """CIE76 delta E: Euclidean distance in Lab. Symmetric."""
    dl = lab1.l - lab2.l
    da = lab1.a - lab2.a
    db = lab1.b - lab2.b
    return math.sqrt(dl * dl + da * da + db * db)


def delta_e_94(lab1: LabColor, lab2: LabColor, textiles: bool = True) -> float:
    """CIE94 delta E of lab2 relative to lab1.

    textiles=True uses kL=2, k1=0.048, k2=0.014; False uses the graphic-arts
    constants kL=1, k1=0.045, k2=0.015. kC = kH = 1 in both profiles.
    """
    kl, k1, k2 = TEXTILES if textiles else GRAPHIC_ARTS
    kc = kh = 1.0

    c1 = math.sqrt(lab1.a * lab1.a + lab1.b * lab1.b)
    c2 = math.sqrt(lab2.a * lab2.a + lab2.b * lab2.b)

    dl = lab1.l - lab2.l
    dc = c1 - c2
    da = lab1.a - lab2.a
    db = lab1.b - lab2.b

    # Round-off can push dH^2 slightly negative for near-identical hues
    dh2 = da * da + db * db - dc * dc
    dh = math.sqrt(dh2) if dh2 > 0 else 0.0

    sl = 1.0
    sc = 1.0 + k1 * c1
    sh = 1.0 + k2 * c1

    term_l = dl / (kl * sl)
    term_c = dc / (kc * sc)
    term_h = dh / (kh * sh)
    return math.sqrt(term_l * term_l + term_c * term_c + term_h * term_h)


def rgb_distance(c1: RGBColor, c2: RGBColor) -> float:
    """Euclidean distance over the raw byte channels. No perceptual weighting."""
    dr = float(c1.r) - float(c2.r)
    dg = float(c1.g) - float(c2.g)
    db = float(c1.b) - float(c2.b)
    return math.sqrt(dr * dr + dg * dg + db * db)
