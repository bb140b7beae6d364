from __future__ import annotations

import argparse

VERSION = "1.0.0"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="logzio-search-export",
        description="Export Logz.io search results to JSON or CSV using the scroll API",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    ap.add_argument("-t", "--api-token", help="Logz.io API token [envvar: LOGZIO_API_TOKEN]")
    ap.add_argument(
        "-r",
        "--region",
        help="Logz.io region for account, defaults to eu [envvar: LOGZIO_API_REGION]",
    )
    ap.add_argument(
        "-s",
        "--search",
        help="A simple search term. For more complex queries pipe in via stdin.",
    )
    # Repeatable field filter; empty means all fields are returned
    ap.add_argument(
        "-e",
        "--extract",
        action="append",
        default=[],
        help="Log entry field to extract in output; can repeat (default: all fields)",
    )
    ap.add_argument("--start", default="now-5m", help="A Logz.io compatible query start time")
    ap.add_argument("--end", default="now", help="A Logz.io compatible query end time")
    ap.add_argument("-f", "--format", default="json", help="Output format [json, csv]")
    ap.add_argument("-o", "--output", help="Output file to write results to (default: stdout)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print verbose output")
    return ap
