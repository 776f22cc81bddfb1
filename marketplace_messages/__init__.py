"""
Marketplace Messages
====================

Builds and validates negotiation messages for an automated
contract-negotiation protocol:

    callForProposal -> proposal -> acceptProposal / rejectProposal
                                -> informConfirm -> informPayment

Layers:
    protocol      - message types, envelope, templates, value types
    context       - capability catalog (eCl@ss IRDI -> schema)
    validation    - value evaluation against a schema
    generation    - message generation and reply deadlines
    observability - conversation tracing
    runtime       - configuration and CLI
"""

from .errors import (
    CatalogError,
    CatalogNotFound,
    InvalidMessage,
    MarketplaceMessagesError,
    PriceElementMissing,
    TemplateError,
)
from .context import CapabilityCatalog, Element
from .generation import (
    GenerationRequest,
    MessageGenerator,
    configure,
    evaluate,
    generate,
    operations,
    reply_by,
    schema_for,
)
from .protocol import Message, MessageType, TemplateRegistry, ValueType, parse_message, validate
from .validation import EvaluationResult, FailureKind

__version__ = "0.1.0"
__all__ = [
    "CapabilityCatalog",
    "CatalogError",
    "CatalogNotFound",
    "Element",
    "EvaluationResult",
    "FailureKind",
    "GenerationRequest",
    "InvalidMessage",
    "MarketplaceMessagesError",
    "Message",
    "MessageGenerator",
    "MessageType",
    "PriceElementMissing",
    "TemplateError",
    "TemplateRegistry",
    "ValueType",
    "configure",
    "evaluate",
    "generate",
    "operations",
    "parse_message",
    "reply_by",
    "schema_for",
    "validate",
]
