"""
validation - Value Evaluation
=============================

Question this layer answers:
"Are these proposed values acceptable for this capability?"
"""

from .evaluator import SUCCESS, EvaluationResult, FailureKind, ValueEvaluator, is_missing

__all__ = ["EvaluationResult", "FailureKind", "SUCCESS", "ValueEvaluator", "is_missing"]
