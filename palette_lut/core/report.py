"""Report builder: text and JSON output for palette-lut results."""

import json
from typing import Any

from palette_lut.core.types import Report


def _rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'#{r:02x}{g:02x}{b:02x}'


def format_text(report: Report) -> str:
    """Format report as human-readable text, one table row per line."""
    lines = []
    header = f'palette-lut: {report.title}' if report.title else 'palette-lut'
    if report.rows:
        header += f' ({len(report.rows)} entries)'
    elif report.values:
        header += f' ({len(report.values)} values)'
    lines.append(header)

    if report.uid:
        lines.append(f'  uid: {report.uid}')
    if report.first_value_mapped is not None:
        lines.append(f'  first value mapped: {report.first_value_mapped}')
    if report.bits_per_entry is not None:
        lines.append(f'  bits per entry: {report.bits_per_entry}')
    for k, v in report.meta.items():
        lines.append(f'  {k}: {v}')
    lines.append('')

    first = report.first_value_mapped or 0
    width = len(str(first + max(len(report.rows), len(report.values))))
    for i, row in enumerate(report.rows):
        r, g, b = row[:3]
        lines.append(f'{first + i:>{width}}  {r:>3} {g:>3} {b:>3}  {_rgb_to_hex(r, g, b)}')
    for i, value in enumerate(report.values):
        lines.append(f'{i:>{width}}  {value}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'title': report.title}
    if report.uid:
        obj['uid'] = report.uid
    if report.first_value_mapped is not None:
        obj['first_value_mapped'] = report.first_value_mapped
    if report.bits_per_entry is not None:
        obj['bits_per_entry'] = report.bits_per_entry
    if report.meta:
        obj['meta'] = report.meta
    if report.rows:
        obj['rows'] = [list(row) for row in report.rows]
    if report.values:
        obj['values'] = report.values
    return json.dumps(obj, indent=2)
