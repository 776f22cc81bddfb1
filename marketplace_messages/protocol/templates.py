"""
Template Registry
=================

One empty skeleton per message type.

Templates are blueprints: template_for() always returns a fresh
Message, so filling one in never touches the registry.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import TemplateError
from .message import Message
from .message_types import MessageType, parse_message_type


class TemplateRegistry:
    """
    Maps each of the six message types to its skeleton.

    Example:
        registry = TemplateRegistry.from_directory(path)
        cfp = registry.template_for("callForProposal")
        assert registry.template_for("unknownType") is None
    """

    def __init__(self, templates: Mapping[MessageType, Mapping[str, Any]]):
        missing = [t.value for t in MessageType if t not in templates]
        if missing:
            raise TemplateError(f"Missing templates: {', '.join(missing)}")

        self._templates: Dict[MessageType, Dict[str, Any]] = {}
        for message_type, skeleton in templates.items():
            if not isinstance(skeleton, Mapping) or "frame" not in skeleton:
                raise TemplateError(f"Template {message_type.value} has no frame")
            self._templates[message_type] = copy.deepcopy(dict(skeleton))

    @classmethod
    def from_directory(cls, path: Union[str, Path]) -> "TemplateRegistry":
        """Load <messageType>.json for every message type from a directory."""
        directory = Path(path)
        templates = {}
        for message_type in MessageType:
            file = directory / f"{message_type.value}.json"
            if not file.exists():
                raise TemplateError(f"Template not found: {file}")
            with open(file, encoding="utf-8") as f:
                try:
                    templates[message_type] = json.load(f)
                except json.JSONDecodeError as e:
                    raise TemplateError(f"{file}: invalid JSON ({e})") from e
        return cls(templates)

    def template_for(self, message_type: Union[str, MessageType]) -> Optional[Message]:
        """Fresh copy of the skeleton, or None for an unknown type."""
        parsed = parse_message_type(message_type)
        if parsed is None:
            return None
        return Message.from_dict(self._templates[parsed])
