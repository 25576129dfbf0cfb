"""HTML and JSON report writers for analysis results.

The ``ReportGenerator`` renders a self-contained HTML report with embedded
CSS. Every value taken from the result is HTML-escaped, and placeholders are
substituted in a single pass so text inside the analyzed plan can never be
mistaken for a template marker.

Usage::

    from permrisk.report import ReportGenerator

    gen = ReportGenerator()
    gen.write("report.html", result)
"""

from __future__ import annotations

import html as html_mod
import re
from pathlib import Path

from permrisk.core.analyzer.models import AnalysisResult
from permrisk.exceptions import ReportError
from permrisk.report.data_prep import encode_json_report, prepare_summary
from permrisk.report.styles import REPORT_CSS
from permrisk.report.template import REPORT_HTML

_PLACEHOLDER = re.compile(r"\{\{([A-Z]+)\}\}")


def _esc(value: object) -> str:
    return html_mod.escape(str(value))


def _badge(label: str) -> str:
    return f'<span class="badge badge-{_esc(label)}">{_esc(label.upper())}</span>'


def _bullets(items: tuple[str, ...], heading: str) -> str:
    if not items:
        return ""
    lis = "".join(f"<li>{_esc(i)}</li>" for i in items)
    return f'<div class="detail">{_esc(heading)}:</div><ul>{lis}</ul>'


def _empty(message: str) -> str:
    return f'<p class="empty">{_esc(message)}</p>'


def _render_summary(result: AnalysisResult) -> str:
    summary = prepare_summary(result)
    rows = [
        ("Overall Risk Score", f"{summary['score']}/100"),
        ("Risk Level", summary["level"].upper()),
        ("Detected Permissions", summary["total_permissions"]),
        ("Risk Indicators", summary["total_indicators"]),
        ("CSF Categories Mapped", summary["categories_mapped"]),
    ]
    for level, count in summary["risk_distribution"].items():
        rows.append((f"{level.capitalize()} Permissions", count))
    body = "".join(f"<tr><td>{_esc(k)}</td><td>{_esc(v)}</td></tr>" for k, v in rows)
    return f"<table><tr><th>Metric</th><th>Value</th></tr>{body}</table>"


def _render_permissions(result: AnalysisResult) -> str:
    if not result.detected_permissions:
        return _empty("No permissions detected.")
    parts = []
    for p in result.detected_permissions:
        level = p.risk_level.label
        parts.append(
            f'<div class="item {level}">'
            f'<div class="title">{_esc(p.name)}{_badge(level)}</div>'
            f'<div class="detail">Risk score {p.risk_score}/10 '
            f'&middot; {_esc(p.detected.value.replace("_", " "))}</div>'
            f"<div>{_esc(p.description)}</div></div>"
        )
    return "".join(parts)


def _render_categories(result: AnalysisResult) -> str:
    if not result.csf_mappings:
        return _empty("No framework categories mapped.")
    parts = []
    for c in result.csf_mappings:
        level = c.severity.label
        parts.append(
            f'<div class="item {level}">'
            f'<div class="title">{_esc(c.category)} - {_esc(c.main_category)}'
            f"{_badge(level)}</div>"
            f"<div>{_esc(c.name)}</div>"
            f'<div class="detail">{_esc(c.description)}</div>'
            f"{_bullets(c.controls, 'Controls')}"
            f"{_bullets(c.remediation, 'Remediation')}</div>"
        )
    return "".join(parts)


def _render_indicators(result: AnalysisResult) -> str:
    if not result.risk_indicators:
        return _empty("No risk indicators found.")
    parts = []
    for i in result.risk_indicators:
        level = i.level.label
        evidence = (
            f'<div class="detail">Evidence: &quot;{_esc(i.evidence)}&quot;</div>'
            if i.evidence else ""
        )
        parts.append(
            f'<div class="item {level}">'
            f'<div class="title">{_esc(i.indicator)}{_badge(level)}</div>'
            f"<div>{_esc(i.description)}</div>{evidence}</div>"
        )
    return "".join(parts)


def _render_recommendations(result: AnalysisResult) -> str:
    parts = []
    for r in result.recommendations:
        level = r.priority.label
        parts.append(
            f'<div class="item {level}">'
            f'<div class="title">{_esc(r.title)}{_badge(level)}</div>'
            f"<div>{_esc(r.description)}</div></div>"
        )
    return "".join(parts)


class ReportGenerator:
    """Render a self-contained HTML report from one analysis result.

    The generator is stateless except for a configurable title. It is safe
    to reuse across multiple ``render()`` calls.

    Attributes:
        title: Report title shown in the header and ``<title>`` tag.
    """

    def __init__(self, title: str = "Permission Risk Analysis Report") -> None:
        self.title = title

    def render(self, result: AnalysisResult) -> str:
        """Generate the complete HTML5 document as a string."""
        overall = result.overall_risk
        values = {
            "TITLE": _esc(self.title),
            "CSS": REPORT_CSS,
            "SCORE": str(overall.score),
            "LEVEL": _esc(overall.level.label.upper()),
            "TIMESTAMP": _esc(result.timestamp),
            "SUMMARY": _render_summary(result),
            "PERMISSIONS": _render_permissions(result),
            "CATEGORIES": _render_categories(result),
            "INDICATORS": _render_indicators(result),
            "RECOMMENDATIONS": _render_recommendations(result),
        }
        return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), REPORT_HTML)

    def write(self, output_path: str | Path, result: AnalysisResult) -> Path:
        """Render and write the HTML report to a file.

        Args:
            output_path: Destination file path (created or overwritten).
                Parent directories are created if needed.
            result: The analysis result to render.

        Returns:
            The resolved ``Path`` of the written file.

        Raises:
            ReportError: If the file cannot be written.
        """
        return _write_text(output_path, self.render(result))


def write_json_report(output_path: str | Path, result: AnalysisResult) -> Path:
    """Write the JSON report for ``result`` and return the resolved path."""
    return _write_text(output_path, encode_json_report(result) + "\n")


def _write_text(output_path: str | Path, content: str) -> Path:
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ReportError(f"Could not write report to {path}: {exc}") from exc
    return path.resolve()
