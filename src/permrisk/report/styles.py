"""Embedded CSS styles for the HTML risk report.

All styles are self-contained -- no external stylesheets or CDN references.

Color scheme:
    - Dark header:  #212529
    - Critical:     #dc3545
    - High:         #fd7e14
    - Medium:       #ffc107
    - Low:          #28a745
"""

from __future__ import annotations

REPORT_CSS: str = """
*,*::before,*::after{box-sizing:border-box}
body{font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Arial,sans-serif;
  margin:0;background:#f8f9fa;color:#333;line-height:1.6}
.header{text-align:center;padding:24px;background:#212529;color:#fff;
  border-bottom:3px solid #495057}
.header h1{margin:0;font-size:1.6rem}
.risk-score{font-size:3em;font-weight:bold;margin:12px 0}
.timestamp{font-size:0.85rem;color:#adb5bd}
.container{max-width:1100px;margin:0 auto;padding:24px 16px}
.section{margin-bottom:24px;padding:20px;background:#fff;border:1px solid #e9ecef}
.section h2{margin-top:0;font-size:1.2rem}
.item{padding:12px 15px;margin:10px 0;border-left:4px solid #ccc;background:#f8f9fa;
  box-shadow:0 2px 4px rgba(0,0,0,0.1)}
.item .title{font-weight:600}
.item .detail{font-size:0.9rem;color:#555}
.item ul{margin:6px 0 0 18px;padding:0;font-size:0.9rem}
.critical{border-left-color:#dc3545}
.high{border-left-color:#fd7e14}
.medium{border-left-color:#ffc107}
.low{border-left-color:#28a745}
.badge{display:inline-block;padding:2px 8px;color:#fff;font-weight:bold;
  font-size:0.75em;margin-left:6px}
.badge-critical{background:#dc3545}
.badge-high{background:#fd7e14}
.badge-medium{background:#ffc107;color:#333}
.badge-low{background:#28a745}
table{width:100%;border-collapse:collapse;margin:12px 0}
th,td{border:1px solid #e2e8f0;padding:10px;text-align:left}
th{background:#495057;color:#fff;font-weight:600}
.empty{color:#6c757d;font-style:italic}
footer{text-align:center;margin:32px 0;color:#6c757d;font-size:0.85rem}
"""
