from __future__ import annotations

# Every provider implements this one capability. Transport is injected rather
# than inherited so gateways can be exercised against a fake client.

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from messaging.http_client import DEFAULT_TIMEOUT, HttpClient, HttpxClient
from messaging.message import Message
from messaging.phone_number import PhoneNumber


class SmsGateway(ABC):
    name: str = ""

    def __init__(self, http: Optional[HttpClient] = None, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.http = http or HttpxClient(timeout=timeout)

    @abstractmethod
    def send(self, to: PhoneNumber, message: Message, config: Optional[Any] = None) -> Dict[str, Any]:
        raise NotImplementedError

    def close(self) -> None:
        close = getattr(self.http, "close", None)
        if close is not None:
            close()
