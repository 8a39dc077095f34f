"""Match a set of colours to threads, preferring a distinct thread for each.

Colours are assigned greedily, most distinctive first (largest CIE76
distance to its nearest neighbour in the set). Each takes its nearest
unused thread; once the palette runs out, threads are reused.
Output keeps the input order.

With --allow-duplicates every colour simply gets its nearest thread.

Malformed hex values are reported as errors and left out of the batch.

Example:
    thread-match batch 000000 050505 FFFFFF
    thread-match batch 000000 050505 FFFFFF --allow-duplicates --json
"""

from thread_matcher.core.convert import parse_hex
from thread_matcher.core.matcher import distance, match_batch
from thread_matcher.core.report import MatchReport
from thread_matcher.core.types import Command

command = Command(
    name='batch',
    help='Match a set of colours, preferring a distinct thread for each colour.',
)


@command.run
def run(palette, report: MatchReport, args) -> None:
    sources: list[str] = []
    colors = []
    for value in args.values:
        color = parse_hex(value)
        if color is None:
            report.add_error(value, 'not a 6-digit hex colour')
            continue
        sources.append(value)
        colors.append(color)

    threads = match_batch(palette, colors, prefer_unique=not args.allow_duplicates, method=args.method)
    if colors and not threads:
        for value in sources:
            report.add_error(value, 'palette is empty')
        return

    for value, color, thread in zip(sources, colors, threads):
        report.add_match(value, thread, distance(color, thread, args.method))
