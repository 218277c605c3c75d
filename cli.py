"""
CLI entry point for collab-landscape. Wires the pipeline: snapshot -> normalize -> score -> report
"""

import argparse
import json
import logging
import os
import webbrowser
from datetime import datetime, timezone
from normalize.util import load_snapshot
from scoring.metrics import compute_landscape
from scoring.utils import load_settings
from scoring.window import parse_date
from report.renderer import render, TABLE_COLUMNS

logger = logging.getLogger(__name__)

OUTPUT_EXTENSIONS = {"html": "html", "md": "md", "csv": "csv", "json": "json"}


def _load_json_file(path: str, description: str):
    """Attempt to load a JSON file and return the parsed object or None on failure.
    Errors are printed here; callers only check for None.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        print(f"Failed to read {description} {path}: {e}")
        return None


def _open_file_in_browser(path: str):
    """Open a file URL in the system default web browser."""
    webbrowser.open("file://" + os.path.abspath(path))


def _write_report_file(out_path: str, content: str, open_html: bool = False):
    """Write the rendered content to a file and optionally open HTML in the browser."""
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    # newline='' is safe for CSV on Windows and harmless for other formats
    with open(out_path, 'w', encoding='utf-8', newline='') as fh:
        fh.write(content)
    print(f"Wrote report to {out_path}")
    if open_html:
        try:
            _open_file_in_browser(out_path)
        except webbrowser.Error:
            print('Failed to open browser automatically; file saved at', out_path)


def write_output(fmt: str, rendered: str, args):
    """Write output to the requested file, or print it when no file was requested."""
    out_file = (args.out_file or '').strip()
    if not out_file:
        print(rendered)
        return
    ext = OUTPUT_EXTENSIONS.get(fmt)
    if ext and not out_file.lower().endswith(f".{ext}"):
        out_file = f"{out_file}.{ext}"
    _write_report_file(out_file, rendered, open_html=(args.open and fmt == 'html'))


def _configure_logging(verbose: bool):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def run_pipeline(args):
    """Execute snapshot -> normalize -> score -> render and return (fmt, rendered)."""
    raw = _load_json_file(args.snapshot, 'snapshot file')
    if raw is None:
        return None, None
    if not isinstance(raw, dict):
        print(f"Invalid snapshot file {args.snapshot}; expected an object with 'contributors' and 'extensions' lists.")
        return None, None

    settings = load_settings(args.config or None, overrides={'windows': args.windows})
    today = parse_date(args.today) if args.today else None
    snapshot = load_snapshot(raw)
    logger.info("Loaded %d contributor links and %d extension commits from %s", len(snapshot.links), len(snapshot.extension_commits), args.snapshot)
    landscape = compute_landscape(snapshot, settings, today)

    fmt = (args.output or "html").lower()
    rendered = render(
        landscape,
        fmt=fmt,
        table=args.table or None,
        generated_at=datetime.now(timezone.utc).isoformat(),
        title=args.title or None,
    )
    return fmt, rendered


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contributor collaboration landscape")
    parser.add_argument("--snapshot", type=str, required=True, help="Path to the JSON snapshot (contributors and extensions lists)")
    parser.add_argument("--config", type=str, default="", help="Path to landscape YAML settings (default: config/landscape.yaml)")
    parser.add_argument("--today", type=str, default="", help="Reference date (YYYY-MM-DD) used as 'now'; defaults to the current UTC date")
    parser.add_argument("--windows", type=str, default=None, help="Comma separated recency windows in days, e.g. 30,90,180 (overrides settings)")
    parser.add_argument("--output", type=str, help="Output format (html, md, csv, json, text)", default="html")
    parser.add_argument("--table", type=str, default="", help="Table to export with --output csv: " + ", ".join(TABLE_COLUMNS))
    parser.add_argument("--title", type=str, default="", help="Report title")
    parser.add_argument("--out-file", type=str, default="", help="Output file path. If omitted the report is printed")
    parser.add_argument("--open", action="store_true", help="Open the generated HTML report in the default browser")
    parser.add_argument("--verbose", action="store_true", help="Log progress information")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.today and parse_date(args.today) is None:
        parser.error(f"Invalid --today date: {args.today} (expected YYYY-MM-DD)")
    if args.table and args.table not in TABLE_COLUMNS:
        parser.error(f"Unknown --table {args.table}; expected one of: {', '.join(TABLE_COLUMNS)}")

    try:
        fmt, rendered = run_pipeline(args)
    except ValueError as exc:
        parser.exit(1, f"Invalid settings: {exc}\n")
    if rendered is None:
        parser.exit(1)
    write_output(fmt, rendered, args)


if __name__ == "__main__":
    main()
