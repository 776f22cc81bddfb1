"""
Observability Tracer
====================

Traces message generation for debugging and analysis.

Two outputs:
- An in-memory trace per conversation (GenerationTracer), keeping
  only the most recent max_traces conversations
- LangSmith runs for generate()/evaluate(), via @traceable, filed
  under the tracer's project_name. These are only exported when
  LangSmith tracing is switched on in the environment
  (LANGSMITH_TRACING=true + API key).
"""

import logging
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from langsmith import traceable, tracing_context

logger = logging.getLogger(__name__)

DEFAULT_MAX_TRACES = 256

__all__ = [
    "TraceRecord",
    "ConversationTrace",
    "GenerationTracer",
    "get_tracer",
    "set_tracer",
    "trace_conversation",
    "traceable",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TraceRecord:
    """A single trace record."""
    timestamp: datetime
    event_type: str
    data: Dict[str, Any]


@dataclass
class ConversationTrace:
    """Everything generated for one conversation id."""
    conversation_id: str
    started_at: datetime = field(default_factory=_utcnow)
    records: List[TraceRecord] = field(default_factory=list)

    def add_event(self, event_type: str, **data) -> None:
        """Add an event to the trace."""
        self.records.append(TraceRecord(
            timestamp=_utcnow(),
            event_type=event_type,
            data=data,
        ))

    def events(self, event_type: Optional[str] = None) -> List[TraceRecord]:
        if event_type is None:
            return list(self.records)
        return [r for r in self.records if r.event_type == event_type]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export."""
        return {
            "conversation_id": self.conversation_id,
            "started_at": self.started_at.isoformat(),
            "records": [
                {
                    "timestamp": r.timestamp.isoformat(),
                    "event_type": r.event_type,
                    "data": r.data,
                }
                for r in self.records
            ],
        }


class GenerationTracer:
    """
    Tracer for message generation.

    Events:
        message_generated: a message left the generator
        validation_failed: values were rejected, payload omitted
        price_override: a proposal got a new price

    Only the max_traces most recently touched conversations are kept.
    """

    def __init__(
        self,
        project_name: str = "marketplace-messages",
        enabled: bool = True,
        max_traces: int = DEFAULT_MAX_TRACES,
    ):
        self.project_name = project_name
        self.enabled = enabled
        self.max_traces = max_traces
        self.traces: "OrderedDict[str, ConversationTrace]" = OrderedDict()

    def record(self, conversation_id: Optional[str], event_type: str, **data) -> None:
        """Record an event. Messages without a conversation id are logged only."""
        if event_type == "validation_failed":
            logger.warning(
                "Values rejected for conversation %s: %s",
                conversation_id, data.get("reason"),
            )
        else:
            logger.debug("%s %s %s", event_type, conversation_id, data)

        if not self.enabled or conversation_id is None:
            return

        self.trace_for(conversation_id).add_event(event_type, **data)

    def trace_for(self, conversation_id: str) -> ConversationTrace:
        """Get or open the trace of a conversation, evicting the oldest if full."""
        trace = self.traces.get(conversation_id)
        if trace is None:
            trace = ConversationTrace(conversation_id=conversation_id)
            self.traces[conversation_id] = trace
            while len(self.traces) > max(self.max_traces, 0):
                self.traces.popitem(last=False)
        else:
            self.traces.move_to_end(conversation_id)
        return trace

    def langsmith_context(self):
        """LangSmith context that files @traceable runs under project_name."""
        return tracing_context(project_name=self.project_name)

    def get_trace(self, conversation_id: str) -> Optional[ConversationTrace]:
        """Get a trace by conversation id."""
        return self.traces.get(conversation_id)

    def clear(self) -> None:
        self.traces.clear()


# Global tracer instance
_global_tracer: Optional[GenerationTracer] = None


def get_tracer() -> GenerationTracer:
    """Get the global tracer instance."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = GenerationTracer()
    return _global_tracer


def set_tracer(tracer: GenerationTracer) -> None:
    """Replace the global tracer (used by the runtime config)."""
    global _global_tracer
    _global_tracer = tracer


@contextmanager
def trace_conversation(conversation_id: str):
    """
    Context manager yielding the trace of one conversation.

    Usage:
        with trace_conversation(msg.conversation_id) as trace:
            generator.generate(request)
        print(trace.to_dict())
    """
    yield get_tracer().trace_for(conversation_id)
