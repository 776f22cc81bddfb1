"""
context - Capability Catalog
============================

Question this layer answers:
"What does this capability consist of?"

The catalog is the single source of element names, semantic ids
and value types. It is read-only.
"""

from .catalog import PRICE_ID_SHORTS, CapabilityCatalog, Element, is_price_element

__all__ = ["CapabilityCatalog", "Element", "PRICE_ID_SHORTS", "is_price_element"]
