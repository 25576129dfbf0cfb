"""Report writers for permrisk analysis results.

Submodules:
    data_prep  -- Transforms AnalysisResult into JSON-safe dicts.
    template   -- HTML structure with placeholder markers.
    styles     -- Embedded CSS stylesheet.
    generator  -- HTML rendering and report file output.

Usage::

    from permrisk.report import ReportGenerator, encode_json_report

    html = ReportGenerator().render(result)
    payload = encode_json_report(result)
"""

from permrisk.report.data_prep import encode_json_report, result_to_dict
from permrisk.report.generator import ReportGenerator, write_json_report

__all__ = [
    "ReportGenerator",
    "encode_json_report",
    "result_to_dict",
    "write_json_report",
]
