"""Thread catalog: palette construction, JSON loading, lookup and search.

Palette file format (JSON):

    {
      "version": "1.0",
      "lastUpdated": "2024-01-01",
      "threads": [
        {"id": "310", "name": "Black", "rgb": {"r": 0, "g": 0, "b": 0}},
        {"id": "BLANC", "name": "White", "hex": "#FCFBF8"}
      ]
    }

Lab values are computed once at load time. Thread ids must be unique.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any

from thread_matcher.core.convert import parse_hex, rgb_to_lab
from thread_matcher.core.types import ReferenceColor, RGBColor

logger = logging.getLogger(__name__)

BUILTIN_NAME = 'generic'

# Generic 40wt embroidery set: (id, name, (r, g, b))
BUILTIN_THREADS: list[tuple[str, str, tuple[int, int, int]]] = [
    # neutrals
    ('GEN-000', 'Black', (0, 0, 0)),
    ('GEN-001', 'White', (255, 255, 255)),
    ('GEN-002', 'Very Light Gray', (225, 225, 225)),
    ('GEN-003', 'Light Gray', (200, 200, 200)),
    ('GEN-004', 'Medium Gray', (160, 160, 160)),
    ('GEN-005', 'Dark Gray', (96, 96, 96)),
    # yellows / golds
    ('GEN-100', 'Lemon', (255, 247, 79)),
    ('GEN-101', 'Yellow', (255, 224, 0)),
    ('GEN-102', 'Golden Yellow', (246, 190, 0)),
    ('GEN-103', 'Gold', (218, 165, 32)),
    ('GEN-104', 'Mustard', (204, 153, 0)),
    # oranges
    ('GEN-120', 'Light Orange', (255, 190, 92)),
    ('GEN-121', 'Orange', (255, 140, 0)),
    ('GEN-122', 'Burnt Orange', (204, 102, 0)),
    # browns
    ('GEN-140', 'Light Tan', (230, 205, 170)),
    ('GEN-141', 'Tan', (210, 180, 140)),
    ('GEN-142', 'Camel', (193, 145, 80)),
    ('GEN-143', 'Bronze', (150, 100, 40)),
    ('GEN-144', 'Brown', (139, 69, 19)),
    ('GEN-145', 'Dark Brown', (101, 67, 33)),
    ('GEN-146', 'Umber', (78, 53, 36)),
    # reds
    ('GEN-200', 'Light Red', (255, 102, 102)),
    ('GEN-201', 'Red', (220, 20, 60)),
    ('GEN-202', 'Maroon', (128, 0, 0)),
    # pinks
    ('GEN-220', 'Rose', (255, 105, 180)),
    ('GEN-221', 'Light Pink', (255, 182, 193)),
    # purples
    ('GEN-240', 'Lavender', (182, 145, 225)),
    ('GEN-241', 'Purple', (128, 0, 128)),
    # blues
    ('GEN-300', 'Sky Blue', (135, 206, 235)),
    ('GEN-301', 'Azure', (80, 170, 255)),
    ('GEN-302', 'Royal Blue', (65, 105, 225)),
    ('GEN-303', 'Blue', (0, 102, 204)),
    ('GEN-304', 'Navy', (0, 0, 128)),
    # teals
    ('GEN-320', 'Turquoise', (64, 224, 208)),
    ('GEN-321', 'Teal', (0, 128, 128)),
    # greens
    ('GEN-340', 'Lime', (50, 205, 50)),
    ('GEN-341', 'Green', (0, 128, 0)),
    ('GEN-342', 'Forest', (0, 90, 0)),
    ('GEN-343', 'Olive', (107, 142, 35)),
    # creams / beiges
    ('GEN-360', 'Ivory', (255, 250, 240)),
    ('GEN-361', 'Cream', (255, 253, 208)),
    ('GEN-362', 'Beige', (245, 245, 220)),
    ('GEN-363', 'Warm Gray', (150, 120, 110)),
    ('GEN-364', 'Cool Gray', (120, 140, 160)),
]


class PaletteError(ValueError):
    """A palette could not be built or loaded."""


def make_reference(id: str, name: str, rgb: RGBColor) -> ReferenceColor:
    """Build a thread with its Lab value precomputed."""
    return ReferenceColor(id=id, name=name, rgb=rgb, lab=rgb_to_lab(rgb))


class Palette(Sequence[ReferenceColor]):
    """Immutable, ordered set of threads with unique ids."""

    def __init__(self, name: str, threads: Iterable[ReferenceColor]):
        self.name = name
        self._threads = tuple(threads)
        self._by_id: dict[str, ReferenceColor] = {}
        for thread in self._threads:
            if thread.id in self._by_id:
                raise PaletteError(f'Duplicate thread id in palette {name!r}: {thread.id}')
            self._by_id[thread.id] = thread

    def __getitem__(self, index):
        return self._threads[index]

    def __len__(self) -> int:
        return len(self._threads)

    def __iter__(self) -> Iterator[ReferenceColor]:
        return iter(self._threads)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_id
        return item in self._threads

    def __repr__(self) -> str:
        return f'Palette({self.name!r}, {len(self)} threads)'

    def get(self, thread_id: str) -> ReferenceColor | None:
        """Exact, case-sensitive lookup by id."""
        return self._by_id.get(thread_id)

    def search(self, query: str) -> list[ReferenceColor]:
        """Case-insensitive substring match on id or name, in palette order."""
        q = query.lower()
        return [t for t in self._threads if q in t.id.lower() or q in t.name.lower()]


def _parse_thread(entry: Any, position: int) -> ReferenceColor:
    if not isinstance(entry, dict):
        raise PaletteError(f'Thread #{position} is not an object')
    thread_id = entry.get('id')
    if not isinstance(thread_id, str) or not thread_id:
        raise PaletteError(f'Thread #{position} has no id')
    name = entry.get('name', '')
    if not isinstance(name, str):
        raise PaletteError(f'Thread {thread_id}: name must be a string')

    if 'rgb' in entry:
        raw = entry['rgb']
        try:
            rgb = RGBColor(raw['r'], raw['g'], raw['b'])
        except (KeyError, TypeError, ValueError) as e:
            raise PaletteError(f'Thread {thread_id}: invalid rgb {raw!r}') from e
    elif 'hex' in entry:
        parsed = parse_hex(str(entry['hex']))
        if parsed is None:
            raise PaletteError(f'Thread {thread_id}: invalid hex {entry["hex"]!r}')
        rgb = parsed
    else:
        raise PaletteError(f'Thread {thread_id}: needs "rgb" or "hex"')

    return make_reference(thread_id, name, rgb)


def palette_from_dict(data: Any, name: str = '') -> Palette:
    """Build a palette from the decoded JSON document."""
    if not isinstance(data, dict) or not isinstance(data.get('threads'), list):
        raise PaletteError('Palette document must be an object with a "threads" list')
    threads = [_parse_thread(entry, i) for i, entry in enumerate(data['threads'])]
    return Palette(data.get('name') or name, threads)


def load_palette(path: str | Path) -> Palette:
    """Load a palette JSON file from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise PaletteError(f'Cannot read palette {path}: {e}') from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PaletteError(f'Invalid JSON in palette {path}: {e}') from e

    palette = palette_from_dict(data, name=path.stem)
    logger.info('Loaded %d thread colours from %s', len(palette), path)
    return palette


def builtin_palette() -> Palette:
    """The generic thread set bundled with the package."""
    return Palette(
        BUILTIN_NAME,
        (make_reference(tid, name, RGBColor(*rgb)) for tid, name, rgb in BUILTIN_THREADS),
    )
