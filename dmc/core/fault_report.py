"""Diagnostic reports for failed DMC calls.

The transport turns every failed call into a ``FaultRecord``. When fault
tracing is enabled, ``FaultReporter`` builds a ``FaultReport`` from it and
hands the report to a renderer. Reports are plain data; the renderer decides
where they go (the default logs them).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

logger = logging.getLogger(__name__)

INDENT = "    "
_SKIPPED_VALUES = ("", "->")


@dataclass(frozen=True)
class FaultRecord:
    """Everything known about one failed remote call.

    Attributes:
        operation: Remote operation name
        code: SOAP fault code or HTTP status
        message: Fault string
        detail: Fault detail payload converted to plain data
        trace: Call stack frames as dicts (filename, lineno, name, line)
        last_sent: Last request envelope, when recorded
        last_received: Last response envelope, when recorded
    """
    operation: str
    code: Optional[str]
    message: str = ""
    detail: Any = None
    trace: List[Mapping[str, Any]] = field(default_factory=list)
    last_sent: Optional[str] = None
    last_received: Optional[str] = None


@dataclass(frozen=True)
class FaultReport:
    operation: str
    code: Optional[str]
    message: str
    detail_lines: List[str]
    trace_lines: List[str]
    exchange_lines: List[str]

    def to_text(self) -> str:
        lines = [
            "Something has gone wrong.",
            f"Operation => {self.operation}",
            f"Fault Code => {self.code}",
            f"Fault Message => {self.message}",
            "Fault Type =>",
            *self.detail_lines,
            "Fault Trace =>",
            *self.trace_lines,
        ]
        if self.exchange_lines:
            lines.append("Last Exchange =>")
            lines.extend(self.exchange_lines)
        return "\n".join(lines)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def dump_structure(value: Any, level: int = 0) -> List[str]:
    """Flatten a nested structure into indented ``key => value`` lines.

    Scalar leaves print at the current level. Mappings and sequences print
    their key and descend one level. Empty strings and ``"->"`` are skipped.

    Args:
        value: Mapping, sequence or scalar
        level: Starting indentation level

    Returns:
        Lines, without trailing newlines
    """
    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    elif value is None:
        return []
    else:
        items = [("value", value)]

    lines: List[str] = []
    pad = INDENT * level
    for key, item in items:
        if _is_scalar(item):
            if isinstance(item, str) and item in _SKIPPED_VALUES:
                continue
            lines.append(f"{pad}{key} => {item}")
        elif isinstance(item, (Mapping, list, tuple)):
            lines.append(f"{pad}{key}")
            lines.extend(dump_structure(item, level + 1))
    return lines


def build_fault_report(record: FaultRecord) -> FaultReport:
    """Build a report from a fault record. Pure function."""
    exchange: List[str] = []
    if record.last_sent:
        exchange.append(f"{INDENT}sent => {record.last_sent}")
    if record.last_received:
        exchange.append(f"{INDENT}received => {record.last_received}")
    return FaultReport(
        operation=record.operation,
        code=record.code,
        message=record.message,
        detail_lines=dump_structure(record.detail, 1),
        trace_lines=dump_structure(record.trace, 1),
        exchange_lines=exchange,
    )


def log_renderer(report: FaultReport) -> None:
    logger.warning("[dmc] %s", report.to_text())


class FaultReporter:
    """Build and render fault reports.

    Usage:
        reporter = FaultReporter(renderer=lambda report: print(report.to_text()))
        reporter.report(record)
    """

    def __init__(self, renderer: Optional[Callable[[FaultReport], None]] = None):
        self.renderer = renderer or log_renderer

    def report(self, record: FaultRecord) -> FaultReport:
        report = build_fault_report(record)
        self.renderer(report)
        return report
