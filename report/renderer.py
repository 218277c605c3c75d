"""
Report renderer: generate HTML/Markdown/CSV/JSON views of a computed landscape.
HTML and Markdown use the Jinja2 templates in report/templates.
"""

from typing import Optional, List, Dict, Any
import os
import io
import csv
import json
from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), 'templates')

# csv tables and their column order
TABLE_COLUMNS = {
    'extensions': ['extension', 'committers30', 'commits30', 'files30', 'committers90', 'commits90', 'files90', 'committersAll', 'commitsAll', 'filesAll'],
    'projects': ['project', 'contributors', 'recentContributors', 'rookies', 'commitsThisYear'],
    'contributors': ['identity', 'commits', 'share', 'commits30', 'commits90', 'firstCommitDate', 'latestCommitDate'],
    'identities': ['days', 'identity', 'projectsCount', 'connectionsCount'],
    'edges': ['days', 'from', 'to', 'weight'],
    'indices': ['days', 'cIndex', 'pIndex'],
    'years': ['year', 'commits', 'contributors'],
}

DEFAULT_CSV_TABLE = 'extensions'


def _environment() -> Environment:
    env = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=select_autoescape(['html', 'xml', 'html.j2']))
    env.filters['percent'] = format_percentage
    return env


def format_percentage(value: Any) -> str:
    try:
        return f"{float(value):.2f}"
    except (TypeError, ValueError):
        return ''


def format_count(value: Any, empty: str = '-') -> str:
    """Render zero/missing counts as a placeholder, like the landscape tables do."""
    return str(value) if value else empty


def render_text(landscape: Dict[str, Any]) -> str:
    """Render a plain-text summary of the indices and headline counts."""
    lines = [f"Landscape on {landscape.get('today', '')}"]
    counts = landscape.get('contributorCounts') or {}
    if counts:
        lines.append(f"Contributors: {counts.get('allTime', 0)} (30 days: {counts.get('recent30', 0)}, rookies: {counts.get('rookies', 0)})")
    for w in landscape.get('windows') or []:
        lines.append(f"{w['days']} days: C-index {w['cIndex']}, P-index {w['pIndex']}, {len(w['edges'])} connections")
    return "\n".join(lines)


def _window_rows(landscape: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """Flatten a per-window list (edges, identities) into rows carrying the window days."""
    rows = []
    for w in landscape.get('windows') or []:
        for item in w.get(key) or []:
            row = {'days': w['days']}
            row.update(item)
            rows.append(row)
    return rows


def get_table_rows(landscape: Dict[str, Any], table: str) -> List[Dict[str, Any]]:
    if table in ('edges', 'identities'):
        return _window_rows(landscape, table)
    if table == 'indices':
        return [{'days': w['days'], 'cIndex': w['cIndex'], 'pIndex': w['pIndex']} for w in landscape.get('windows') or []]
    if table not in TABLE_COLUMNS:
        raise ValueError(f"Unknown table '{table}', expected one of: {', '.join(TABLE_COLUMNS)}")
    return list(landscape.get(table) or [])


def render_csv(landscape: Dict[str, Any], table: Optional[str] = None) -> str:
    """Render one landscape table as CSV with a header row."""
    table = table or DEFAULT_CSV_TABLE
    columns = TABLE_COLUMNS.get(table)
    rows = get_table_rows(landscape, table)
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns, extrasaction='ignore', lineterminator='\n')
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return output.getvalue()


def render_json(landscape: Dict[str, Any]) -> str:
    """Export the whole landscape as JSON."""
    return json.dumps(landscape or {}, indent=2, default=str)


def _context(landscape: Dict[str, Any], generated_at: Optional[str], title: Optional[str]) -> Dict[str, Any]:
    return {
        'landscape': landscape,
        'windows': landscape.get('windows') or [],
        'extensions': landscape.get('extensions') or [],
        'projects': landscape.get('projects') or [],
        'contributors': landscape.get('contributors') or [],
        'counts': landscape.get('contributorCounts') or {},
        'years': landscape.get('years') or [],
        'generated_at': generated_at,
        'title': title or 'Landscape Report',
        'format_count': format_count,
    }


def render_markdown(landscape: Dict[str, Any], generated_at: Optional[str] = None, title: Optional[str] = None) -> str:
    tmpl = _environment().get_template('landscape.md.j2')
    return tmpl.render(**_context(landscape, generated_at, title))


def render_html(landscape: Dict[str, Any], generated_at: Optional[str] = None, title: Optional[str] = None) -> str:
    tmpl = _environment().get_template('landscape.html.j2')
    return tmpl.render(**_context(landscape, generated_at, title))


def render(
    landscape: Optional[Dict[str, Any]] = None,
    fmt: str = 'text',
    table: Optional[str] = None,
    generated_at: Optional[str] = None,
    title: Optional[str] = None,
) -> str:
    """Main render function. Unknown formats fall back to plain text."""
    landscape = landscape or {}
    fmt_l = (fmt or 'text').lower()
    if fmt_l in ('md', 'markdown'):
        return render_markdown(landscape, generated_at, title)
    if fmt_l == 'csv':
        return render_csv(landscape, table)
    if fmt_l in ('html', 'htm'):
        return render_html(landscape, generated_at, title)
    if fmt_l in ('json', 'js'):
        return render_json(landscape)
    return render_text(landscape)
