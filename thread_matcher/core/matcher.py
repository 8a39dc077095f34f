"""Palette matching: nearest thread for one colour, or a batch with uniqueness.

The palette is always an explicit argument (any ordered sequence of
ReferenceColor). Identifiers must be unique within it; catalog.Palette
enforces this. A plain list with duplicate ids still works, but a
uniqueness-preferring batch treats every entry sharing a used id as taken.

Tie-break everywhere: the scan keeps the first candidate with a strictly
smaller distance, so equal distances resolve to the earliest palette entry.

Batch matching with prefer_unique=True is a greedy heuristic, not an
optimal assignment:

    1. Convert every query colour to Lab once.
    2. Score each colour by its minimum CIE76 distance to the other colours
       (infinite for a batch of one).
    3. Visit colours from most to least distinctive (stable for equal scores).
    4. Give each colour its nearest unused thread, or its nearest thread
       overall once the palette is exhausted.
    5. Return threads in the original input order.
"""

import logging
import math
from collections.abc import Sequence

from thread_matcher.core.convert import rgb_to_lab
from thread_matcher.core.distance import delta_e_76, delta_e_94, rgb_distance
from thread_matcher.core.types import DistanceMethod, LabColor, ReferenceColor, RGBColor

logger = logging.getLogger(__name__)


def _measure(color: RGBColor, lab: LabColor, reference: ReferenceColor, method: DistanceMethod) -> float:
    if method is DistanceMethod.CIE94:
        return delta_e_94(lab, reference.lab)
    if method is DistanceMethod.RGB:
        return rgb_distance(color, reference.rgb)
    return delta_e_76(lab, reference.lab)


def _nearest(
    palette: Sequence[ReferenceColor],
    color: RGBColor,
    lab: LabColor,
    method: DistanceMethod,
    used: set[str] | None = None,
) -> ReferenceColor | None:
    best: ReferenceColor | None = None
    best_distance = math.inf
    for reference in palette:
        if used is not None and reference.id in used:
            continue
        d = _measure(color, lab, reference, method)
        if d < best_distance:
            best_distance = d
            best = reference
    return best


def distance(color: RGBColor, reference: ReferenceColor, method: DistanceMethod = DistanceMethod.CIE76) -> float:
    """Distance from color to reference, computed exactly as matching does."""
    return _measure(color, rgb_to_lab(color), reference, DistanceMethod(method))


def closest_match(
    palette: Sequence[ReferenceColor],
    color: RGBColor,
    method: DistanceMethod = DistanceMethod.CIE76,
) -> ReferenceColor | None:
    """Nearest thread to color, or None for an empty palette."""
    if not palette:
        return None
    return _nearest(palette, color, rgb_to_lab(color), DistanceMethod(method))


def distinctiveness(labs: Sequence[LabColor]) -> list[float]:
    """Minimum CIE76 distance from each colour to every other colour in labs."""
    scores = []
    for i, lab in enumerate(labs):
        score = math.inf
        for j, other in enumerate(labs):
            if i != j:
                score = min(score, delta_e_76(lab, other))
        scores.append(score)
    return scores


def match_batch(
    palette: Sequence[ReferenceColor],
    colors: Sequence[RGBColor],
    prefer_unique: bool = True,
    method: DistanceMethod = DistanceMethod.CIE76,
) -> list[ReferenceColor]:
    """Match every colour to a thread, same length and order as colors.

    Returns [] when either colors or palette is empty.
    """
    if not colors or not palette:
        return []
    method = DistanceMethod(method)

    if not prefer_unique:
        return [_nearest(palette, c, rgb_to_lab(c), method) for c in colors]

    labs = [rgb_to_lab(c) for c in colors]
    scores = distinctiveness(labs)
    # sorted() is stable under reverse=True, so equal scores keep input order
    order = sorted(range(len(colors)), key=lambda i: scores[i], reverse=True)

    used: set[str] = set()
    assigned: list[ReferenceColor | None] = [None] * len(colors)
    for index in order:
        color, lab = colors[index], labs[index]
        match = _nearest(palette, color, lab, method, used)
        if match is None:
            logger.debug('Palette exhausted, reusing nearest thread for colour #%d', index)
            match = _nearest(palette, color, lab, method)
        if match is not None:
            used.add(match.id)
            assigned[index] = match

    return [m for m in assigned if m is not None]
