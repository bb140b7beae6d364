from __future__ import annotations

import contextlib
import json
import os
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence, TextIO

from rich.console import Console

from ..application.dto import ExportRequest, SearchRequest
from ..application.query_builder import build_query
from ..application.use_cases.export_logs import ExportLogsUseCase
from ..domain.errors import ConfigError, TransportError
from ..infrastructure.config import api_base_url, api_region, scroll_page_size
from ..infrastructure.logging import get_logger, set_verbose, use_console
from ..infrastructure.logzio.client import LogzioScrollClient
from ..infrastructure.output.destination import open_destination
from ..infrastructure.output.writers import create_writer, resolve_format
from ..infrastructure.progress import ScrollProgress
from ..infrastructure.shutdown import ShutdownHooks
from .parsers import build_parser

logger = get_logger("logzio_export.cli")


def _parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse a simple .env file (KEY=VALUE per line, '#' comments, quotes stripped)."""
    env: Dict[str, str] = {}
    if dotenv_path.exists():
        with contextlib.suppress(OSError):
            for raw in dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines():
                s = raw.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k:
                    env[k] = v
    return env


def _env_get(key: str) -> Optional[str]:
    """Get environment value from process env, falling back to .env in CWD."""
    v = os.getenv(key)
    if v is not None and v.strip():
        return v.strip()
    local = _parse_dotenv(Path(".env"))
    v2 = local.get(key)
    return v2.strip() if v2 is not None and v2.strip() else None


def _resolve_api_token(explicit: Optional[str]) -> str:
    """Resolve the API token from --api-token or LOGZIO_API_TOKEN env/.env."""
    if explicit and str(explicit).strip():
        return str(explicit).strip()
    token = _env_get("LOGZIO_API_TOKEN")
    if not token:
        raise ConfigError(
            "Logz.io API token not provided, please provide one via cli flag "
            "--api-token or envvar LOGZIO_API_TOKEN"
        )
    return token


def _read_query_input(stream: TextIO) -> str:
    """Read the raw query from a piped stream; an interactive terminal yields ''."""
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return ""
    return stream.read()


def _format_body(body: object) -> str:
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2)
    return str(body)


def _report_error(console: Console, ex: Exception) -> None:
    # A network failure already carries its body in the message
    if isinstance(ex, TransportError) and ex.status is not None and ex.body not in (None, ""):
        console.print(_format_body(ex.body), markup=False, highlight=False)
    console.print(str(ex), style="red", markup=False, highlight=False)


def run(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    console: Optional[Console] = None,
) -> int:
    """Run one export and return the process exit code (0 success, 1 fatal)."""
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    set_verbose(bool(ns.verbose))

    console = console or Console(stderr=True)
    use_console(console)
    progress = ScrollProgress(console=console)
    hooks = ShutdownHooks()
    hooks.register("progress", progress.stop)
    hooks.install()
    try:
        exported = export(ns, ap, progress, hooks, stdin=stdin, stdout=stdout)
    except (ConfigError, TransportError) as ex:
        progress.stop()
        _report_error(console, ex)
        return 1
    finally:
        hooks.run()
        hooks.uninstall()

    console.print(f"[green]SUCCESS[/green]: Exported {exported} log entries", highlight=False)
    return 0


def export(ns, ap, progress, hooks, stdin=None, stdout=None) -> int:
    """
    Wire configuration, query, destination, writer and transport, then scroll.

    Cleanups are registered on ``hooks`` as each resource is acquired so the
    writer is always closed before its destination.

    Returns:
        int: Number of exported records.
    """
    token = _resolve_api_token(ns.api_token)
    base_url = api_base_url(api_region(ns.region or _env_get("LOGZIO_API_REGION")))
    resolve_format(ns.format)

    raw_query = None
    if not ns.search:
        raw_query = _read_query_input(stdin or sys.stdin)
    try:
        query = build_query(
            SearchRequest(
                search=ns.search,
                raw_query=raw_query,
                start=ns.start,
                end=ns.end,
                extract=list(ns.extract or []),
                size=scroll_page_size(),
            )
        )
    except ConfigError:
        ap.print_help(sys.stderr)
        raise

    destination = open_destination(ns.output, stdout=stdout)
    writer = create_writer(ns.format, destination)
    hooks.register("writer", writer.close)
    hooks.register("destination", destination.close)

    backend = LogzioScrollClient(base_url, token)
    hooks.register("transport", backend.close)

    logger.info("Scrolling %s", base_url)
    result = ExportLogsUseCase(backend, writer, progress).execute(ExportRequest(query=query))
    progress.stop()
    hooks.run()
    return result.exported


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
