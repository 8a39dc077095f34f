"""Dominant colours of an image matched to threads.

Samples up to 5000 pixels, runs KMeans (n_clusters=--colors, default 8,
capped at the number of distinct sampled colours, n_init=3). The cluster
centres are matched as a batch, preferring a distinct thread per colour
unless --allow-duplicates is given.

Each row reports the share of sampled pixels in that cluster, the
stitches that share represents when every pixel is one stitch, and the
skeins those stitches need at --fabric-count (default 14).

Transparent pixels (alpha < 8) are ignored.

Example:
    thread-match image photo.png --colors 12
    thread-match image logo.png --colors 4 --method cie94 --json
"""

import numpy as np
from PIL import Image
from sklearn.cluster import KMeans

from thread_matcher.core.convert import hex_string
from thread_matcher.core.matcher import distance, match_batch
from thread_matcher.core.report import MatchReport
from thread_matcher.core.types import Command, RGBColor

command = Command(
    name='image',
    help='Extract dominant colours from an image (k-means) and match them to threads.',
)

ALPHA_THRESHOLD = 8


def _opaque_pixels(image: Image.Image) -> np.ndarray:
    arr = np.array(image.convert('RGBA'))
    pixels = arr.reshape(-1, 4)
    return pixels[pixels[:, 3] >= ALPHA_THRESHOLD][:, :3]


def extract_dominant(image: Image.Image, n_clusters: int = 8, n_samples: int = 5000) -> list[tuple[RGBColor, float]]:
    """Dominant colours with their pixel share in percent, largest share first."""
    pixels = _opaque_pixels(image)
    if len(pixels) == 0:
        return []

    if len(pixels) > n_samples:
        indices = np.random.default_rng(42).choice(len(pixels), n_samples, replace=False)
        pixels = pixels[indices]

    k = max(1, min(n_clusters, len(np.unique(pixels, axis=0))))
    km = KMeans(n_clusters=k, n_init=3, random_state=42)
    km.fit(pixels.astype(np.float64))
    centres = np.clip(np.rint(km.cluster_centers_), 0, 255).astype(int)
    counts = np.bincount(km.labels_, minlength=len(centres))
    total = counts.sum()

    results = []
    for centre, count in zip(centres, counts):
        color = RGBColor(int(centre[0]), int(centre[1]), int(centre[2]))
        results.append((color, float(count) / float(total) * 100.0))

    results.sort(key=lambda x: -x[1])
    return results


@command.run
def run(palette, report: MatchReport, args) -> None:
    path = args.values[0]
    image = Image.open(path)
    stitch_total = len(_opaque_pixels(image))

    dominant = extract_dominant(image, n_clusters=args.colors)
    if not dominant:
        report.add_error(path, 'no opaque pixels')
        return

    colors = [color for color, _pct in dominant]
    threads = match_batch(palette, colors, prefer_unique=not args.allow_duplicates, method=args.method)
    if not threads:
        report.add_error(path, 'palette is empty')
        return

    for (color, pct), thread in zip(dominant, threads):
        stitches = round(stitch_total * pct / 100.0)
        report.add_match(
            hex_string(color),
            thread,
            distance(color, thread, args.method),
            pct=round(pct, 1),
            stitches=stitches,
            skeins=round(thread.skeins_needed(stitches, args.fabric_count), 2),
        )
