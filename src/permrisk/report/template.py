"""HTML template for the risk report.

The template is a complete HTML5 document with placeholders for:
    ``{{TITLE}}``    -- escaped report title.
    ``{{CSS}}``      -- embedded stylesheet (from styles module).
    ``{{SCORE}}``, ``{{LEVEL}}``, ``{{TIMESTAMP}}`` -- header values.
    ``{{SUMMARY}}``, ``{{PERMISSIONS}}``, ``{{CATEGORIES}}``,
    ``{{INDICATORS}}``, ``{{RECOMMENDATIONS}}`` -- pre-rendered sections.

The file is self-contained: no external CDN, no scripts, no fetch calls.
"""

from __future__ import annotations

REPORT_HTML: str = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{{TITLE}}</title>
<style>
{{CSS}}
</style>
</head>
<body>

<div class="header">
  <h1>{{TITLE}}</h1>
  <div class="risk-score">{{SCORE}}/100</div>
  <h2>Risk Level: {{LEVEL}}</h2>
  <div class="timestamp">Analyzed: {{TIMESTAMP}}</div>
</div>

<div class="container">

  <div class="section">
    <h2>Summary</h2>
    {{SUMMARY}}
  </div>

  <div class="section">
    <h2>Detected Permissions</h2>
    {{PERMISSIONS}}
  </div>

  <div class="section">
    <h2>NIST CSF 2.0 Categories</h2>
    {{CATEGORIES}}
  </div>

  <div class="section">
    <h2>Risk Indicators</h2>
    {{INDICATORS}}
  </div>

  <div class="section">
    <h2>Recommendations</h2>
    {{RECOMMENDATIONS}}
  </div>

</div>

<footer>Generated by permrisk</footer>

</body>
</html>
"""
