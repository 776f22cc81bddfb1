"""
Capability Catalog - Grounded Context
=====================================

Authoritative capability schemas, keyed by eCl@ss IRDI.

Agents never invent element names or types.
They ask the catalog:

    schema = catalog.schema_for("0173-1#01-AAO742#002")
    price = catalog.price_element("0173-1#01-AAO742#002")

The price element is special. It is hidden from schema_for() and only
reaches a message through the proposal price override.
"""

import copy
import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import CatalogError, CatalogNotFound, PriceElementMissing
from ..protocol.value_types import ValueType


PRICE_ID_SHORTS = ("preis", "price")


def is_price_element(id_short: Optional[str]) -> bool:
    """Check if an idShort names the price element."""
    return id_short in PRICE_ID_SHORTS


@dataclass(frozen=True)
class Element:
    """
    One typed slot of a capability schema.

    Attributes:
        id_short: Display name ("bohrtiefe")
        semantic_id: Key used to address the value ("0173-1#02-AAB120#004")
        value_type: Raw valueType tag from the catalog
        value: Bound value, None while unbound
        extra: Other catalog keys (modelType, description, ...)
    """
    id_short: str
    semantic_id: str
    value_type: str = ValueType.ANY_TYPE.value
    value: Any = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def kind(self) -> ValueType:
        return ValueType.parse(self.value_type)

    @property
    def is_price(self) -> bool:
        return is_price_element(self.id_short)

    def with_value(self, value: Any) -> "Element":
        """Return a copy of this element bound to value."""
        return replace(self, value=value, extra=copy.deepcopy(self.extra))

    def to_dict(self) -> dict:
        data = {"idShort": self.id_short}
        data.update(copy.deepcopy(self.extra))
        data["semanticId"] = self.semantic_id
        data["valueType"] = self.value_type
        if self.value is not None:
            data["value"] = copy.deepcopy(self.value)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Element":
        extra = {
            key: copy.deepcopy(value)
            for key, value in data.items()
            if key not in ("idShort", "semanticId", "valueType", "value")
        }
        return cls(
            id_short=data.get("idShort"),
            semantic_id=data.get("semanticId"),
            value_type=data.get("valueType", ValueType.ANY_TYPE.value),
            value=copy.deepcopy(data.get("value")),
            extra=extra,
        )


class CapabilityCatalog:
    """
    Read-only capability catalog.

    Loaded once, never mutated. Every lookup hands out copies,
    so binding values or setting a price can't leak back into
    the catalog or into the next message.

    Example:
        catalog = CapabilityCatalog({
            "X": {"submodelElements": [
                {"idShort": "power", "semanticId": "s1", "valueType": "integer"},
                {"idShort": "price", "semanticId": "s2", "valueType": "decimal"},
            ]},
        })
        assert [e.id_short for e in catalog.schema_for("X")] == ["power"]
    """

    def __init__(
        self,
        entries: Mapping[str, Mapping[str, Any]],
        operations: Sequence[Any] = (),
    ):
        self._schemas: Dict[str, Tuple[Element, ...]] = {}
        for irdi, entry in entries.items():
            if not isinstance(entry, Mapping):
                raise CatalogError(f"Catalog entry {irdi} must be an object")
            elements = entry.get("submodelElements") or []
            if not isinstance(elements, list):
                raise CatalogError(f"submodelElements of {irdi} must be a list")
            self._schemas[irdi] = tuple(Element.from_dict(e) for e in elements)

        self._operations = copy.deepcopy(list(operations))

    @classmethod
    def from_files(
        cls,
        catalog_path: Union[str, Path],
        operations_path: Optional[Union[str, Path]] = None,
    ) -> "CapabilityCatalog":
        """Load the catalog (and optionally the operations list) from JSON files."""
        entries = _read_json(Path(catalog_path))
        if not isinstance(entries, dict):
            raise CatalogError(f"{catalog_path}: catalog must be a JSON object")

        operations: List[Any] = []
        if operations_path is not None:
            operations = _read_json(Path(operations_path))
            if not isinstance(operations, list):
                raise CatalogError(f"{operations_path}: operations must be a JSON array")

        return cls(entries, operations)

    def __contains__(self, irdi: str) -> bool:
        return irdi in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def identifiers(self) -> List[str]:
        """All known IRDIs, in catalog order."""
        return list(self._schemas)

    def operations(self) -> List[Any]:
        """Operations advertised for call-for-proposal messages."""
        return copy.deepcopy(self._operations)

    def _elements(self, irdi: str) -> Tuple[Element, ...]:
        try:
            return self._schemas[irdi]
        except KeyError:
            raise CatalogNotFound(irdi) from None

    def schema_for(self, irdi: str) -> List[Element]:
        """
        Get the negotiable elements of a capability.

        The price element is filtered out.

        Raises:
            CatalogNotFound: If the IRDI is not in the catalog
        """
        return [element for element in self._elements(irdi) if not element.is_price]

    def price_element(self, irdi: str) -> Element:
        """
        Get the unfiltered price element of a capability.

        Raises:
            CatalogNotFound: If the IRDI is not in the catalog
            PriceElementMissing: If the schema has no price element
        """
        for element in self._elements(irdi):
            if element.is_price:
                return element.with_value(element.value)
        raise PriceElementMissing(irdi)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"{path}: invalid JSON ({e})") from e
