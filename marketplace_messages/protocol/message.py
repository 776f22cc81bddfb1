"""
Message Envelope for the Negotiation Protocol
=============================================

Every protocol message has the same outer shape:

    frame         = WHO, WHEN, WHERE, WHICH CONVERSATION
    dataElements  = WHAT (submodel instances bound to catalog values)
    walletAddress / userName = optional participant details
    extensions    = anything else a peer attached (sensor data, DID, ...)

Messages travel as JSON dicts with camelCase keys.
Here they are dataclasses; to_dict() / parse_message() convert.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import InvalidMessage
from .message_types import MessageType, parse_message_type


# Top-level keys with a home in the Message dataclass.
# Everything else goes into the extensions bag.
CORE_KEYS = ("frame", "dataElements", "walletAddress", "userName")


def _identity(identity_id: Optional[str] = None) -> Dict[str, Any]:
    return {"identification": {"id": identity_id}}


def _identity_id(identity: Dict[str, Any]) -> Optional[str]:
    return (identity.get("identification") or {}).get("id")


def _set_identity_id(identity: Dict[str, Any], identity_id: Optional[str]) -> None:
    identity.setdefault("identification", {})["id"] = identity_id


# ============================================================
# FRAME
# ============================================================

@dataclass
class Frame:
    """
    Envelope metadata of a message.

    sender / receiver keep their nested wire structure
    ({"identification": {"id": ...}}) so template details survive.

    Example:
        frame = Frame(type="proposal")
        frame.sender_id = "did:peer:buyer"
        assert frame.to_dict()["sender"]["identification"]["id"] == "did:peer:buyer"
    """
    type: Optional[str] = None
    sender: Dict[str, Any] = field(default_factory=_identity)
    receiver: Dict[str, Any] = field(default_factory=_identity)
    conversation_id: Optional[str] = None
    reply_by: Optional[int] = None
    location: Any = None
    start_timestamp: Any = None
    end_timestamp: Any = None
    creation_date: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # attribute name -> wire key, in wire order
    WIRE_KEYS = {
        "type": "type",
        "sender": "sender",
        "receiver": "receiver",
        "conversation_id": "conversationId",
        "reply_by": "replyBy",
        "location": "location",
        "start_timestamp": "startTimestamp",
        "end_timestamp": "endTimestamp",
        "creation_date": "creationDate",
    }

    @property
    def sender_id(self) -> Optional[str]:
        return _identity_id(self.sender)

    @sender_id.setter
    def sender_id(self, value: Optional[str]) -> None:
        _set_identity_id(self.sender, value)

    @property
    def receiver_id(self) -> Optional[str]:
        return _identity_id(self.receiver)

    @receiver_id.setter
    def receiver_id(self, value: Optional[str]) -> None:
        _set_identity_id(self.receiver, value)

    def to_dict(self) -> dict:
        """Serialize frame to its wire dictionary."""
        data = {
            wire: copy.deepcopy(getattr(self, attr))
            for attr, wire in self.WIRE_KEYS.items()
        }
        data.update(copy.deepcopy(self.extra))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Frame":
        """Deserialize a frame. Unknown frame keys are kept in extra."""
        if not isinstance(data, dict):
            raise InvalidMessage(f"Frame must be an object, got {type(data).__name__}")

        data = copy.deepcopy(data)
        values = {attr: data.pop(wire, None) for attr, wire in cls.WIRE_KEYS.items()}

        for side in ("sender", "receiver"):
            identity = values[side]
            if identity is None:
                values[side] = _identity()
            elif not isinstance(identity, dict):
                raise InvalidMessage(f"Frame {side} must be an object")

        return cls(extra=data, **values)


# ============================================================
# MESSAGE
# ============================================================

@dataclass
class Message:
    """
    A complete protocol message.

    Attributes:
        frame: Envelope metadata
        data_elements: Payload, {"submodels": [...]}
        wallet_address: Optional payment address
        user_name: Optional display name of the sender
        extensions: Extra top-level fields. On serialization these
            overwrite same-named core fields.
    """
    frame: Frame = field(default_factory=Frame)
    data_elements: Dict[str, Any] = field(default_factory=lambda: {"submodels": []})
    wallet_address: Optional[str] = None
    user_name: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def message_type(self) -> Optional[MessageType]:
        return parse_message_type(self.frame.type)

    @property
    def conversation_id(self) -> Optional[str]:
        return self.frame.conversation_id

    @property
    def submodels(self) -> List[Dict[str, Any]]:
        return self.data_elements.setdefault("submodels", [])

    def submodel_elements(self) -> List[Dict[str, Any]]:
        """Elements of the first submodel instance, or [] when there is none."""
        if not self.submodels:
            return []
        return self.submodels[0].get("identification", {}).get("submodelElements", [])

    def copy(self) -> "Message":
        """Deep copy. Nothing is shared with the original."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Serialize message to its wire dictionary."""
        data = {
            "frame": self.frame.to_dict(),
            "dataElements": copy.deepcopy(self.data_elements),
        }
        if self.wallet_address is not None:
            data["walletAddress"] = self.wallet_address
        data["userName"] = self.user_name
        data.update(copy.deepcopy(self.extensions))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """Deserialize message from its wire dictionary."""
        if not isinstance(data, dict):
            raise InvalidMessage(f"Message must be an object, got {type(data).__name__}")
        if "frame" not in data:
            raise InvalidMessage("Message has no frame")

        data_elements = copy.deepcopy(data.get("dataElements") or {})
        if not isinstance(data_elements, dict):
            raise InvalidMessage("dataElements must be an object")
        data_elements.setdefault("submodels", [])

        return cls(
            frame=Frame.from_dict(data["frame"]),
            data_elements=data_elements,
            wallet_address=data.get("walletAddress"),
            user_name=data.get("userName"),
            extensions={
                key: copy.deepcopy(value)
                for key, value in data.items()
                if key not in CORE_KEYS
            },
        )


def parse_message(data: Any) -> Message:
    """
    Accept a Message or its wire dict and return a Message.

    Raises:
        InvalidMessage: If the dict has no usable frame

    Example:
        msg = parse_message({"frame": {"type": "proposal", "conversationId": "c1"}})
        assert msg.conversation_id == "c1"
    """
    if isinstance(data, Message):
        return data
    return Message.from_dict(data)


def to_dict(message: Message) -> dict:
    """Convert a Message to its wire dictionary."""
    return message.to_dict()
