"""permrisk: Security-risk assessment for application permission requests."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
