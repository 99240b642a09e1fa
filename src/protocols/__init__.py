"""Protocol reference data.

The catalog is loaded once per process and shared read-only:
    from src.protocols.catalog import ProtocolCatalog, load_catalog
"""

from .catalog import DEFAULT_PROTOCOLS, ProtocolCatalog, load_catalog

__all__ = [
    "DEFAULT_PROTOCOLS",
    "ProtocolCatalog",
    "load_catalog",
]
