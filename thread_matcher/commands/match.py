"""Closest thread for each hex colour, matched independently.

Each value is parsed as RRGGBB or #RRGGBB. Malformed values are reported
as errors and do not stop the others. Duplicate threads are allowed —
use 'batch' for uniqueness-preferring assignment.

Example:
    thread-match match FF5733 '#1a1a1a' --method cie94
    thread-match match FF5733 --palette dmc.json --json
"""

from thread_matcher.core.convert import parse_hex
from thread_matcher.core.matcher import closest_match, distance
from thread_matcher.core.report import MatchReport
from thread_matcher.core.types import Command

command = Command(
    name='match',
    help='Closest thread for each hex colour (independent matches, duplicates allowed).',
)


@command.run
def run(palette, report: MatchReport, args) -> None:
    for value in args.values:
        color = parse_hex(value)
        if color is None:
            report.add_error(value, 'not a 6-digit hex colour')
            continue
        thread = closest_match(palette, color, args.method)
        if thread is None:
            report.add_error(value, 'palette is empty')
            continue
        report.add_match(value, thread, distance(color, thread, args.method))
