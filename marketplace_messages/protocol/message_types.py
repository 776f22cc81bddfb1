"""
Message Types for the Negotiation Protocol
==========================================

Exactly six message kinds exist. Each one has its own template.

    callForProposal ──► proposal ──► acceptProposal ──► informConfirm ──► informPayment
                                 └─► rejectProposal

Only callForProposal starts a conversation.
Every other type continues one.
"""

from enum import Enum
from typing import Any, Optional


class MessageType(str, Enum):
    """The closed set of protocol message tags."""
    CALL_FOR_PROPOSAL = "callForProposal"
    PROPOSAL = "proposal"
    ACCEPT_PROPOSAL = "acceptProposal"
    REJECT_PROPOSAL = "rejectProposal"
    INFORM_CONFIRM = "informConfirm"
    INFORM_PAYMENT = "informPayment"

    @property
    def starts_conversation(self) -> bool:
        return self is MessageType.CALL_FOR_PROPOSAL


def parse_message_type(tag: Any) -> Optional[MessageType]:
    """
    Parse a message type tag.

    Returns None for anything outside the six known tags,
    the caller decides how to report it.

    Example:
        assert parse_message_type("proposal") is MessageType.PROPOSAL
        assert parse_message_type("unknownType") is None
    """
    if isinstance(tag, MessageType):
        return tag
    try:
        return MessageType(tag)
    except ValueError:
        return None
