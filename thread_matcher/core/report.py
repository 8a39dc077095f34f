"""Report builder — text and JSON output for thread-match results.

Match rows keep the exact distance; JSON output rounds it to 4 places and
text output to 2, so threshold checks see the unrounded value.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from thread_matcher.core.convert import hex_string
from thread_matcher.core.types import DistanceMethod, ReferenceColor

# Row keys rendered in the fixed leading columns of text output
_MATCH_KEYS = ('input', 'id', 'name', 'hex', 'distance')


@dataclass
class MatchReport:
    """Accumulates rows from a command for text/JSON output."""

    palette_name: str = ''
    method: str = DistanceMethod.CIE76.value
    rows: list[dict[str, Any]] = field(default_factory=list)
    error_count: int = 0

    def add_match(
        self,
        source: str,
        thread: ReferenceColor,
        distance: float,
        **extra: Any,
    ) -> None:
        """Add a matched row for the given input value."""
        row: dict[str, Any] = {
            'input': source,
            'id': thread.id,
            'name': thread.name,
            'hex': hex_string(thread.rgb),
            'distance': distance,
        }
        row.update(extra)
        self.rows.append(row)

    def add_row(self, row: dict[str, Any]) -> None:
        """Add a free-form row (lookup results, method listings)."""
        self.rows.append(row)

    def add_error(self, source: str, message: str) -> None:
        self.rows.append({'input': source, 'error': message})
        self.error_count += 1

    @property
    def distances(self) -> list[float]:
        return [row['distance'] for row in self.rows if 'distance' in row]


def _rounded(row: dict[str, Any]) -> dict[str, Any]:
    if 'distance' not in row:
        return row
    return {**row, 'distance': round(row['distance'], 4)}


def _summary(report: MatchReport) -> dict[str, int]:
    matched = [row for row in report.rows if 'distance' in row]
    return {
        'total': len(report.rows),
        'matched': len(matched),
        'errors': report.error_count,
        'unique_threads': len({row['id'] for row in matched}),
    }


def format_text(report: MatchReport) -> str:
    """Format report as human-readable text."""
    lines = [f'thread-match: palette {report.palette_name} \u2014 method {report.method}', '']

    for row in report.rows:
        if 'error' in row:
            lines.append(f'  {row.get("input", "?"):<10} \u2717 {row["error"]}')
            continue
        if 'distance' in row:
            line = (
                f'  {row["input"]:<10} \u2192 {row["id"]:<10} {row["name"]:<20} '
                f'#{row["hex"]}  \u0394={row["distance"]:.2f}'
            )
        else:
            # lookup / methods rows have no input colour
            line = '  ' + '  '.join(str(v) for k, v in row.items() if k in _MATCH_KEYS)
        extra = [f'{k}={v}' for k, v in row.items() if k not in _MATCH_KEYS]
        if extra:
            line += '  ' + ' '.join(extra)
        lines.append(line)

    summary = _summary(report)
    if summary['matched'] or summary['errors']:
        lines.append('')
        lines.append(
            f'{summary["matched"]} matched ({summary["unique_threads"]} distinct threads)  '
            f'{summary["errors"]} errors'
        )
    return '\n'.join(lines)


def format_json(report: MatchReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'palette': report.palette_name,
        'method': report.method,
        'rows': [_rounded(row) for row in report.rows],
        'summary': _summary(report),
    }
    return json.dumps(obj, indent=2)
