"""Report builder — text and JSON output for ehex-tool results."""

import json
import os
from typing import Any

from ehex.core.types import Report


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        return ', '.join(f'{k}:{v}' for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ', '.join(str(v) for v in value)
    return str(value)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'ehex-tool: {os.path.basename(report.path) or report.path}'
    if report.magic:
        header += f' ({report.width}×{report.height}, {report.magic} V{report.version})'
    lines.append(header)

    for name, data in report.sections.items():
        lines.append('')
        lines.append(f'── {name}')
        for key, value in data.items():
            if key == 'histogram':
                lines.append('  histogram:')
                for bucket, count in value.items():
                    lines.append(f'    {bucket!s:>10}  {count}')
            else:
                lines.append(f'  {key}: {_format_value(value)}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'path': report.path}
    if report.magic:
        obj['format'] = report.format
        obj['magic'] = report.magic
        obj['version'] = report.version
        obj['dimensions'] = {'width': report.width, 'height': report.height}
        if report.channels is not None:
            obj['channels'] = report.channels
    obj['commands'] = report.sections
    return json.dumps(obj, indent=2, ensure_ascii=False)
