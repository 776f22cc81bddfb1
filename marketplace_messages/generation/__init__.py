"""
generation - Message Generation
===============================

Question this layer answers:
"What is the next message in this conversation?"
"""

from .deadline import DEFAULT_REPLY_MINUTES, reply_by
from .generator import (
    GenerationRequest,
    MessageGenerator,
    configure,
    evaluate,
    generate,
    get_default_generator,
    new_conversation_id,
    operations,
    schema_for,
)

__all__ = [
    "DEFAULT_REPLY_MINUTES",
    "GenerationRequest",
    "MessageGenerator",
    "configure",
    "evaluate",
    "generate",
    "get_default_generator",
    "new_conversation_id",
    "operations",
    "reply_by",
    "schema_for",
]
