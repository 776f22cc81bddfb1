"""
protocol - Structured Messages
==============================

Question this layer answers:
"What does a valid message look like?"

- Six message types (MessageType)
- The envelope (Message, Frame)
- One skeleton per type (TemplateRegistry)
- Element value types (ValueType, validate)

protocol does NOT:
- Know the catalog
- Start or continue conversations
"""

from .message import Frame, Message, parse_message, to_dict
from .message_types import MessageType, parse_message_type
from .templates import TemplateRegistry
from .value_types import ValueType, validate

__all__ = [
    "Frame",
    "Message",
    "MessageType",
    "TemplateRegistry",
    "ValueType",
    "parse_message",
    "parse_message_type",
    "to_dict",
    "validate",
]
