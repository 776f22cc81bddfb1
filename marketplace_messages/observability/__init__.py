"""
observability - Tracing
=======================

Question this layer answers:
"What did we generate, and why was a payload left out?"
"""

from .tracer import (
    ConversationTrace,
    GenerationTracer,
    TraceRecord,
    get_tracer,
    set_tracer,
    trace_conversation,
)

__all__ = [
    "ConversationTrace",
    "GenerationTracer",
    "TraceRecord",
    "get_tracer",
    "set_tracer",
    "trace_conversation",
]
