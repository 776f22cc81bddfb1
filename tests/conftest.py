"""
Shared fixtures: a small in-memory catalog, the bundled templates,
a fixed clock and a deterministic conversation id factory.
"""

import itertools
from datetime import datetime, timezone

import pytest

from marketplace_messages import CapabilityCatalog, MessageGenerator, TemplateRegistry
from marketplace_messages.observability import GenerationTracer
from marketplace_messages.runtime.config import DATA_DIR


CATALOG_ENTRIES = {
    "X": {
        "submodelElements": [
            {"idShort": "power", "semanticId": "s1", "valueType": "integer"},
        ],
    },
    "drill": {
        "submodelElements": [
            {"idShort": "depth", "semanticId": "d1", "valueType": "positiveInteger"},
            {
                "idShort": "preis",
                "semanticId": "p1",
                "valueType": "decimal",
                "modelType": {"name": "Property"},
            },
            {"idShort": "material", "semanticId": "d2", "valueType": "string"},
            {"idShort": "cooling", "semanticId": "d3", "valueType": "boolean"},
        ],
    },
}

OPERATIONS = [{"id": "drill", "name": "Drilling"}]

DRILL_VALUES = {"d1": 30, "d2": "steel", "d3": True}

# 2024-01-01T12:00:00.5Z
FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, 500000, tzinfo=timezone.utc)
FIXED_NOW_MS = 1704110400000


@pytest.fixture
def catalog():
    return CapabilityCatalog(CATALOG_ENTRIES, OPERATIONS)


@pytest.fixture
def templates():
    return TemplateRegistry.from_directory(DATA_DIR / "templates")


@pytest.fixture
def tracer():
    return GenerationTracer()


@pytest.fixture
def generator(catalog, templates, tracer):
    counter = itertools.count(1)
    return MessageGenerator(
        catalog,
        templates,
        id_factory=lambda: f"conv-{next(counter)}",
        clock=lambda: FIXED_NOW,
        tracer=tracer,
    )
