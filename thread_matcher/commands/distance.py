"""Distance from a hex colour to a named thread.

Usage: distance <colour> <thread-id> [<thread-id> ...]

Reports the distance under the selected --method, plus the other two
methods as extra columns for comparison. CIE94 is measured with the
colour as the first (reference-weighting) argument, as matching does.

Example:
    thread-match distance 646464 GEN-000
"""

from thread_matcher.core.convert import parse_hex
from thread_matcher.core.matcher import distance
from thread_matcher.core.report import MatchReport
from thread_matcher.core.types import Command, DistanceMethod

command = Command(
    name='distance',
    help='Distance from one hex colour to one or more threads, under every method.',
)


@command.run
def run(palette, report: MatchReport, args) -> None:
    value, thread_ids = args.values[0], args.values[1:]
    color = parse_hex(value)
    if color is None:
        report.add_error(value, 'not a 6-digit hex colour')
        return
    if not thread_ids:
        report.add_error(value, 'no thread id given')
        return

    for thread_id in thread_ids:
        thread = palette.get(thread_id)
        if thread is None:
            report.add_error(value, f'unknown thread id {thread_id!r}')
            continue
        others = {m.value: round(distance(color, thread, m), 4) for m in DistanceMethod if m is not args.method}
        report.add_match(value, thread, distance(color, thread, args.method), **others)
