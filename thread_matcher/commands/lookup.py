"""Search the palette by thread id or name (case-insensitive substring).

Example:
    thread-match lookup gray
    thread-match lookup 310 --palette dmc.json
"""

from thread_matcher.core.convert import hex_string
from thread_matcher.core.report import MatchReport
from thread_matcher.core.types import Command

command = Command(
    name='lookup',
    help='Search threads by id or name.',
)


@command.run
def run(palette, report: MatchReport, args) -> None:
    for query in args.values:
        hits = palette.search(query)
        if not hits:
            report.add_error(query, 'no matching threads')
            continue
        for thread in hits:
            report.add_row({'id': thread.id, 'name': thread.name, 'hex': hex_string(thread.rgb)})
