"""
Value Evaluator
===============

Checks proposed values against a capability schema.

Fail-fast, in schema order:

    for element in schema:
        missing?  -> "Value for <idShort> (<semanticId>) is missing"
        bad type? -> "Type for <idShort> (<semanticId>) is invalid"
    -> success

The first problem wins. Diagnostics are deterministic because
schema order is declaration order.

Failures are DATA, not exceptions. The caller decides whether to
fix the values, retry or abort the conversation.
"""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Mapping, Optional

from ..context.catalog import CapabilityCatalog, Element
from ..observability.tracer import GenerationTracer, get_tracer, traceable
from ..protocol.value_types import ValueType, is_number, validate

SUCCESS = "success"


class FailureKind(Enum):
    """Why an element was rejected."""
    MISSING_VALUE = auto()
    INVALID_TYPE = auto()


@dataclass
class EvaluationResult:
    """Result of evaluating a value set."""
    ok: bool
    reason: str = ""
    failure: Optional[FailureKind] = None
    element: Optional[Element] = None

    @property
    def status(self) -> str:
        """'success' or the failure reason."""
        return SUCCESS if self.ok else self.reason

    def __bool__(self) -> bool:
        return self.ok


def is_missing(value: Any) -> bool:
    """
    Absent or empty: None, False, "", 0 and NaN.

    Containers count as present even when empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if is_number(value):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


class ValueEvaluator:
    """
    Evaluates value sets against the catalog.

    Example:
        evaluator = ValueEvaluator(catalog)
        result = evaluator.evaluate("X", {"s1": 42})
        assert result.ok
    """

    def __init__(self, catalog: CapabilityCatalog, tracer: Optional[GenerationTracer] = None):
        self.catalog = catalog
        self._tracer = tracer

    @property
    def tracer(self) -> GenerationTracer:
        return self._tracer if self._tracer is not None else get_tracer()

    def evaluate(self, irdi: str, values: Optional[Mapping[str, Any]]) -> EvaluationResult:
        """
        Evaluate values for a capability.

        Raises:
            CatalogNotFound: If the IRDI is not in the catalog
        """
        with self.tracer.langsmith_context():
            return self._evaluate(irdi, values)

    @traceable(run_type="chain", name="evaluate")
    def _evaluate(self, irdi: str, values: Optional[Mapping[str, Any]]) -> EvaluationResult:
        values = values or {}

        for element in self.catalog.schema_for(irdi):
            value = values.get(element.semantic_id)

            if element.kind is ValueType.BOOLEAN:
                # an absent flag is fine, a non-bool one is not
                if value is None:
                    continue
            elif is_missing(value):
                return EvaluationResult(
                    ok=False,
                    reason=f"Value for {element.id_short} ({element.semantic_id}) is missing",
                    failure=FailureKind.MISSING_VALUE,
                    element=element,
                )

            if not validate(element.kind, value):
                return EvaluationResult(
                    ok=False,
                    reason=f"Type for {element.id_short} ({element.semantic_id}) is invalid",
                    failure=FailureKind.INVALID_TYPE,
                    element=element,
                )

        return EvaluationResult(ok=True)
