"""permrisk exception hierarchy.

All public exceptions inherit from PermRiskError, giving callers a single
base class to catch when they want to handle any permrisk-specific failure
without swallowing unrelated errors.
"""


class PermRiskError(Exception):
    """Base exception for all permrisk errors."""


class PreconditionError(PermRiskError):
    """Raised when an analysis is requested before reference data is loaded.

    The analyzer never runs against a partial or missing permission catalog
    or framework taxonomy. This is fatal to the call and is not retried.
    """


class ReferenceDataError(PermRiskError):
    """Raised when a permission catalog or framework taxonomy cannot be loaded.

    Covers missing files, unreachable URLs, undecodable documents, and
    documents that do not match the expected structure.
    """


class ExtractionError(PermRiskError):
    """Raised when a project plan cannot be read as text.

    Covers unsupported file types, oversized inputs, and encoding issues.
    """


class ReportError(PermRiskError):
    """Raised when a JSON or HTML report cannot be written."""
