"""List the colour distance methods.

Example:
    thread-match methods
"""

from thread_matcher.core.report import MatchReport
from thread_matcher.core.types import Command, DistanceMethod

command = Command(
    name='methods',
    help='List the colour distance methods (cielab, cie94, rgb).',
)


@command.run
def run(palette, report: MatchReport, args) -> None:
    for method in DistanceMethod:
        report.add_row({'id': method.value, 'name': method.display_name, 'description': method.description})
