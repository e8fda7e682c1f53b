from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from messaging.errors import InvalidArgumentError

TEXT_MESSAGE = "text"
VOICE_MESSAGE = "voice"

# Any field may be given per-gateway as a callable taking the gateway.
Resolvable = Union[Any, Callable[[Any], Any]]


def _resolve(value: Resolvable, gateway: Any) -> Any:
    if callable(value):
        return value(gateway)
    return value


class Message:
    def __init__(
        self,
        content: Resolvable = "",
        template: Resolvable = "",
        data: Resolvable = None,
        type: str = TEXT_MESSAGE,
        gateways: Optional[List[str]] = None,
    ):
        if type not in (TEXT_MESSAGE, VOICE_MESSAGE):
            raise InvalidArgumentError(f"unsupported message type: {type}")
        self.content = content
        self.template = template
        self.data = data if data is not None else {}
        self.type = type
        self.gateways = list(gateways or [])

    @classmethod
    def coerce(cls, value: Union["Message", str, Mapping[str, Any]]) -> "Message":
        if isinstance(value, Message):
            return value
        if isinstance(value, str):
            return cls(content=value)
        if isinstance(value, Mapping):
            allowed = {"content", "template", "data", "type", "gateways"}
            unknown = set(value) - allowed
            if unknown:
                raise InvalidArgumentError(f"unknown message fields: {sorted(unknown)}")
            return cls(**dict(value))
        raise InvalidArgumentError(f"unsupported message type: {type(value).__name__}")

    def get_content(self, gateway: Any = None) -> str:
        return _resolve(self.content, gateway) or ""

    def get_template(self, gateway: Any = None) -> str:
        return _resolve(self.template, gateway) or ""

    def get_data(self, gateway: Any = None) -> Dict[str, Any]:
        return dict(_resolve(self.data, gateway) or {})

    def __repr__(self) -> str:
        return f"Message(type={self.type!r}, template={self.template!r})"
