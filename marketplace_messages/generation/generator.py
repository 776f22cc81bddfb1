"""
Message Generator
=================

Builds the next outgoing protocol message.

Two paths:

    callForProposal + irdi           -> START a conversation
        new conversationId, values validated and bound to the schema

    any other type + original message -> CONTINUE a conversation
        conversationId, payload and timing copied from the prior message,
        receiver = prior sender, optional price override on proposals

Anything else gets an identity/deadline-only skeleton.
An unknown message type gets None.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union
from uuid import uuid4

from ..context.catalog import CapabilityCatalog, is_price_element
from ..observability.tracer import GenerationTracer, get_tracer, set_tracer, traceable
from ..protocol.message import Message, parse_message
from ..protocol.message_types import MessageType, parse_message_type
from ..protocol.templates import TemplateRegistry
from ..runtime.config import Config, load_config
from ..validation.evaluator import EvaluationResult, ValueEvaluator
from .deadline import DEFAULT_REPLY_MINUTES, Clock, reply_by

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_conversation_id() -> str:
    return str(uuid4())


@dataclass
class GenerationRequest:
    """
    Everything needed to generate one message.

    Attributes:
        message_type: One of the six protocol tags
        user_id: Sender identity
        irdi: Catalog identifier (call-for-proposal and price override)
        submodel_values: semanticId -> value
        reply_time: Minutes until the reply deadline
        original_message: Prior message to continue (Message or wire dict)
        price: Price override for proposals
    """
    message_type: Union[str, MessageType]
    user_id: Optional[str] = None
    irdi: Optional[str] = None
    submodel_values: Dict[str, Any] = field(default_factory=dict)
    reply_time: Optional[float] = None
    original_message: Optional[Union[Message, Dict[str, Any]]] = None
    price: Any = None
    location: Any = None
    start_timestamp: Any = None
    end_timestamp: Any = None
    creation_date: Any = None
    user_name: Optional[str] = None


class MessageGenerator:
    """
    Top-level message builder.

    Example:
        generator = MessageGenerator.from_config()
        cfp = generator.generate(
            message_type="callForProposal",
            user_id="did:peer:buyer",
            irdi="0173-1#01-AAO742#002",
            submodel_values={...},
        )
        proposal = generator.generate(
            message_type="proposal",
            user_id="did:peer:seller",
            irdi="0173-1#01-AAO742#002",
            original_message=cfp,
            price=125.5,
        )
    """

    def __init__(
        self,
        catalog: CapabilityCatalog,
        templates: TemplateRegistry,
        id_factory: Optional[IdFactory] = None,
        clock: Optional[Clock] = None,
        default_reply_minutes: float = DEFAULT_REPLY_MINUTES,
        tracer: Optional[GenerationTracer] = None,
    ):
        self.catalog = catalog
        self.templates = templates
        self.evaluator = ValueEvaluator(catalog, tracer=tracer)
        self.id_factory = id_factory or new_conversation_id
        self.clock = clock
        self.default_reply_minutes = default_reply_minutes
        self._tracer = tracer

    @classmethod
    def from_config(cls, config: Optional[Config] = None, **kwargs) -> "MessageGenerator":
        """Build a generator from configuration (defaults to the bundled data)."""
        if config is None:
            config = Config.default()

        catalog = CapabilityCatalog.from_files(
            config.catalog.path, config.catalog.operations_path
        )
        templates = TemplateRegistry.from_directory(config.templates.path)
        kwargs.setdefault("default_reply_minutes", config.messages.default_reply_minutes)
        kwargs.setdefault("tracer", GenerationTracer(
            project_name=config.tracing.project_name,
            enabled=config.tracing.enabled,
            max_traces=config.tracing.max_traces,
        ))
        return cls(catalog, templates, **kwargs)

    @property
    def tracer(self) -> GenerationTracer:
        return self._tracer if self._tracer is not None else get_tracer()

    # ============================================================
    # ENTRY POINT
    # ============================================================

    def generate(
        self,
        request: Optional[GenerationRequest] = None,
        **fields,
    ) -> Optional[Message]:
        """
        Generate a message.

        Pass a GenerationRequest, or its fields as keyword arguments.

        Returns:
            The new Message, or None if the message type is unknown

        Raises:
            CatalogNotFound: If a needed IRDI is not in the catalog
            InvalidMessage: If original_message is not a usable message
        """
        if request is None:
            request = GenerationRequest(**fields)

        with self.tracer.langsmith_context():
            return self._generate(request)

    @traceable(run_type="chain", name="generate")
    def _generate(self, request: GenerationRequest) -> Optional[Message]:
        message_type = parse_message_type(request.message_type)
        if message_type is None:
            logger.info("Unrecognized message type: %r", request.message_type)
            return None

        message = self.templates.template_for(message_type)
        message.frame.sender_id = request.user_id
        message.frame.reply_by = self._reply_by(request.reply_time)
        message.user_name = request.user_name

        if request.original_message is not None and not message_type.starts_conversation:
            self._continue_conversation(message, message_type, request)
        elif request.irdi and message_type.starts_conversation:
            self._start_conversation(message, request)

        self.tracer.record(
            message.conversation_id,
            "message_generated",
            message_type=message_type.value,
            sender=message.frame.sender_id,
            receiver=message.frame.receiver_id,
        )
        return message

    def _reply_by(self, minutes: Optional[float]) -> int:
        if minutes is None:
            minutes = self.default_reply_minutes
        return reply_by(minutes, clock=self.clock)

    # ============================================================
    # CONTINUE - copy identity and payload from the prior message
    # ============================================================

    def _continue_conversation(
        self,
        message: Message,
        message_type: MessageType,
        request: GenerationRequest,
    ) -> None:
        prior = parse_message(request.original_message)
        frame = message.frame

        frame.conversation_id = prior.frame.conversation_id
        frame.receiver_id = prior.frame.sender_id
        message.data_elements = copy.deepcopy(prior.data_elements)
        message.data_elements.setdefault("submodels", [])
        frame.location = copy.deepcopy(prior.frame.location)
        frame.start_timestamp = prior.frame.start_timestamp
        frame.end_timestamp = prior.frame.end_timestamp
        frame.creation_date = prior.frame.creation_date

        if prior.wallet_address:
            message.wallet_address = prior.wallet_address

        if (
            message_type is MessageType.PROPOSAL
            and request.price is not None
            and request.irdi
        ):
            self._override_price(message, request.irdi, request.price)

        # Fields the prior message carried beyond frame/payload/wallet
        # (sensor data, DID tokens, ...) win over what we set above.
        if prior.user_name is not None:
            message.user_name = prior.user_name
        message.extensions.update(copy.deepcopy(prior.extensions))

    def _override_price(self, message: Message, irdi: str, price: Any) -> None:
        """Replace any price element with the catalog one set to price, placed last."""
        price_element = self.catalog.price_element(irdi).with_value(price)

        if not message.submodels:
            message.submodels.append({"identification": {"id": irdi}})

        identification = message.submodels[0].setdefault("identification", {})
        elements = [
            element
            for element in identification.get("submodelElements") or []
            if not (isinstance(element, dict) and is_price_element(element.get("idShort")))
        ]
        elements.append(price_element.to_dict())
        identification["submodelElements"] = elements

        self.tracer.record(message.conversation_id, "price_override", irdi=irdi, price=price)

    # ============================================================
    # START - new conversation with validated values
    # ============================================================

    def _start_conversation(self, message: Message, request: GenerationRequest) -> None:
        frame = message.frame
        frame.conversation_id = self.id_factory()

        if request.location:
            frame.location = request.location

        if request.start_timestamp and request.end_timestamp:
            frame.start_timestamp = request.start_timestamp
            frame.end_timestamp = request.end_timestamp

        if request.creation_date:
            frame.creation_date = request.creation_date

        values = request.submodel_values or {}
        result = self.evaluator.evaluate(request.irdi, values)
        if not result.ok:
            self.tracer.record(
                frame.conversation_id,
                "validation_failed",
                irdi=request.irdi,
                reason=result.reason,
            )
            return

        elements = [
            element.with_value(values.get(element.semantic_id)).to_dict()
            for element in self.catalog.schema_for(request.irdi)
        ]
        message.data_elements["submodels"] = [{
            "identification": {
                "id": request.irdi,
                "submodelElements": elements,
            }
        }]


# ============================================================
# DEFAULT INSTANCE - bundled data, default configuration
# ============================================================

_default_generator: Optional[MessageGenerator] = None


def configure(config_path: Optional[str] = None, **kwargs) -> MessageGenerator:
    """Load configuration and install it as the default generator."""
    global _default_generator
    config = load_config(config_path)
    _default_generator = MessageGenerator.from_config(config, **kwargs)
    set_tracer(_default_generator.tracer)
    return _default_generator


def get_default_generator() -> MessageGenerator:
    """Get the default generator, building it on first use."""
    if _default_generator is None:
        return configure()
    return _default_generator


def generate(request: Optional[GenerationRequest] = None, **fields) -> Optional[Message]:
    """Generate a message with the default generator."""
    return get_default_generator().generate(request, **fields)


def evaluate(irdi: str, values: Optional[Dict[str, Any]]) -> EvaluationResult:
    """Evaluate values against the default catalog."""
    return get_default_generator().evaluator.evaluate(irdi, values)


def schema_for(irdi: str):
    """Price-free schema from the default catalog."""
    return get_default_generator().catalog.schema_for(irdi)


def operations():
    """Operations list from the default catalog."""
    return get_default_generator().catalog.operations()
