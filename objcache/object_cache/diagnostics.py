"""
objcache - Object Cache Diagnostics

Per-call records and counters collected by an ObjectCache, and the two
renderings of them: an HTML admin report and a plain-text block that can be
embedded as a comment at the end of an HTML/XML response.
"""

import re
from dataclasses import asdict, dataclass
from html import escape
from typing import Any

LINE_BREAK = "\r\n"
LABEL_WIDTH = 20


@dataclass(frozen=True)
class DebugRecord:
    """One get() call as seen by diagnostics."""

    id: str
    group: str
    cached: bool
    internal: bool
    data_size: int
    elapsed: float

    @property
    def status(self) -> str:
        return "cached" if self.cached else "not cached"

    @property
    def source(self) -> str:
        return "internal" if self.internal else "persistent"


@dataclass
class CacheCounters:
    """Running totals updated by get()."""

    total_calls: int = 0
    hits: int = 0
    misses: int = 0
    total_time: float = 0.0


def _center(text: str, width: int) -> str:
    # Extra padding goes to the right, as str_pad(STR_PAD_BOTH) does
    if len(text) >= width:
        return text
    left = (width - len(text)) // 2
    return " " * left + text + " " * (width - len(text) - left)


class DiagnosticsReporter:
    """Read-only renderer over an ObjectCache's counters and records."""

    def __init__(
        self,
        engine_name: str,
        caching: bool,
        reject_reason: str,
        debug: bool,
        counters: CacheCounters,
        records: list[DebugRecord],
    ):
        self.engine_name = engine_name
        self.caching = caching
        self.reject_reason = reject_reason
        self.debug = debug
        self.counters = counters
        self.records = records

    def _summary(self) -> list[tuple[str, str]]:
        rows = [
            ("Engine", self.engine_name),
            ("Caching", "enabled" if self.caching else "disabled"),
        ]
        if not self.caching:
            rows.append(("Reject reason", self.reject_reason))
        rows.extend(
            [
                ("Total calls", str(self.counters.total_calls)),
                ("Cache hits", str(self.counters.hits)),
                ("Cache misses", str(self.counters.misses)),
            ]
        )
        return rows

    def render_html(self) -> str:
        """Admin stats page fragment."""
        parts = ["<h2>Summary</h2>", "<p>"]
        for label, value in self._summary():
            parts.append(f"<strong>{label}</strong>: {escape(value)}<br />")
        parts.append(f"<strong>Total time</strong>: {round(self.counters.total_time, 4)}s")
        parts.append("</p>")

        parts.append("<h2>Cache info</h2>")

        if not self.debug:
            parts.append("<p>Enable debug mode.</p>")
            return "".join(parts)

        parts.append('<table cellpadding="0" cellspacing="3" border="1">')
        parts.append(
            "<tr><td>#</td><td>Status</td><td>Source</td>"
            "<td>Data size (b)</td><td>Query time (s)</td><td>ID:Group</td></tr>"
        )
        for index, record in enumerate(self.records, start=1):
            parts.append(
                "<tr>"
                f"<td>{index}</td>"
                f"<td>{record.status}</td>"
                f"<td>{record.source}</td>"
                f"<td>{record.data_size}</td>"
                f"<td>{round(record.elapsed, 4)}</td>"
                f"<td>{escape(f'{record.id}:{record.group}')}</td>"
                "</tr>"
            )
        parts.append("</table>")

        return "".join(parts)

    def render_comment(self) -> str:
        """Plain-text block wrapped in an HTML comment."""
        lines = ["<!-- Object Cache debug info:"]
        for label, value in self._summary():
            lines.append(f"{label + ': ':<{LABEL_WIDTH}}{value}")
        lines.append(f"{'Total time: ':<{LABEL_WIDTH}}{self.counters.total_time:.4f}")

        lines.append("Object Cache info:")
        lines.append(
            " | ".join(
                [
                    f"{'#':>5}",
                    _center("Status", 15),
                    _center("Source", 15),
                    f"{'Data size (b)':>13}",
                    f"{'Query time (s)':>14}",
                    "ID:Group",
                ]
            )
        )
        for index, record in enumerate(self.records, start=1):
            # "--" would end the comment early
            label = re.sub(r"-(?=-)", "- ", f"{record.id}:{record.group}")
            lines.append(
                " | ".join(
                    [
                        f"{index:>5}",
                        _center(record.status, 15),
                        _center(record.source, 15),
                        f"{record.data_size:>13}",
                        f"{round(record.elapsed, 4):>14}",
                        label,
                    ]
                )
            )

        return LINE_BREAK.join(lines) + LINE_BREAK + "-->"

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe structured view."""
        return {
            "engine": self.engine_name,
            "caching": self.caching,
            "reject_reason": None if self.caching else self.reject_reason,
            "total_calls": self.counters.total_calls,
            "hits": self.counters.hits,
            "misses": self.counters.misses,
            "total_time": round(self.counters.total_time, 4),
            "records": [asdict(r) for r in self.records] if self.debug else [],
        }
