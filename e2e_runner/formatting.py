"""HTML formatting of failure reports."""

import html
import traceback
from datetime import datetime

from yarl import URL

from e2e_runner.models.result import RunResult

SEPARATOR = "<br><br>"

SUFFIXES_TO_STRIP = (".cloudapp.net",)


def pretty_server_name(url: str | None) -> str:
    """Return the host of ``url`` without well-known hosting suffixes."""
    if not url:
        return "unknown"

    host = URL(url).host
    if not host:
        return url

    for suffix in SUFFIXES_TO_STRIP:
        if host.endswith(suffix):
            return host.removesuffix(suffix)
    return host


def build_subject(run_number: int, runs: int) -> str:
    """Build the notification subject for a run."""
    total = str(runs) if runs else "unbounded"
    return f"Failed tests during run {run_number} out of {total}"


def format_failure_html(
    result: RunResult, *, target_url: str | None, at: datetime
) -> str:
    """Summarize a failed or timed-out test as an HTML block."""
    parts = [
        f"Test failed in {html.escape(result.test_name)} at {at:%H:%M:%S}",
        "<br><table>",
        f"<tr><td><b>Server</b><td>{html.escape(pretty_server_name(target_url))}",
        f"<tr><td><b>Target URL</b><td>{html.escape(target_url or 'unknown')}",
        f"<tr><td><b>Status</b><td>{result.status}",
        f"<tr><td><b>Duration</b><td>{result.duration:.1f} secs",
    ]

    if result.error is not None:
        error_type = f"{type(result.error).__module__}.{type(result.error).__qualname__}"
        details = "".join(traceback.format_exception(result.error))
        parts.append(f"<tr><td><b>Exception type</b><td>{html.escape(error_type)}")
        parts.append(f"</table><br><br><pre>{html.escape(details)}</pre>")
    elif result.message:
        parts.append(f"</table><br><br>{html.escape(result.message)}")
    else:
        parts.append("</table>")

    parts.append("<br>")
    return "".join(parts)
