"""Reference data for risk analysis: the permission catalog and framework taxonomy.

Submodules
----------
- ``models``: RiskLevel, PermissionCatalogEntry, PermissionCatalog,
  FrameworkCategory/Subcategory, FrameworkTaxonomy, ReferenceData.
- ``loader``: Parsing, validation, and concurrent loading of both documents.
- ``http_client``: httpx wrapper used for remotely hosted documents.

All public names are re-exported here::

    from permrisk.core.reference import load_reference_data_sync, RiskLevel
"""

from permrisk.core.reference.loader import (
    load_catalog,
    load_reference_data,
    load_reference_data_sync,
    load_taxonomy,
    parse_catalog,
    parse_taxonomy,
)
from permrisk.core.reference.models import (
    FrameworkCategory,
    FrameworkSubcategory,
    FrameworkTaxonomy,
    PermissionCatalog,
    PermissionCatalogEntry,
    PermissionType,
    ReferenceData,
    RiskLevel,
    split_category_code,
)

__all__ = [
    "FrameworkCategory",
    "FrameworkSubcategory",
    "FrameworkTaxonomy",
    "PermissionCatalog",
    "PermissionCatalogEntry",
    "PermissionType",
    "ReferenceData",
    "RiskLevel",
    "load_catalog",
    "load_reference_data",
    "load_reference_data_sync",
    "load_taxonomy",
    "parse_catalog",
    "parse_taxonomy",
    "split_category_code",
]
