from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from messaging.message import Message
from messaging.phone_number import PhoneNumber
from messaging.sms import SmsGateway
from ops.metrics import Timer
from utils.masking import dest_hint

log = logging.getLogger("smsgate.dispatcher")


class MessageDispatcher:
    """
    Sends through exactly one gateway and reports every attempt to the log.

    Errors are logged and re-raised unchanged; fallback to another provider is
    the caller's decision.
    """

    def __init__(self, gateway: SmsGateway):
        self.gateway = gateway

    def send_sms(
        self,
        to: Union[PhoneNumber, str],
        message: Union[Message, str, Dict[str, Any]],
        config: Optional[Any] = None,
    ) -> Dict[str, Any]:
        to = PhoneNumber.coerce(to)
        message = Message.coerce(message)
        channel = self.gateway.name
        t = Timer()
        log.info(
            "message_send_attempt",
            extra={"extra": {"event": "message_send_attempt", "channel": channel, "dest": dest_hint(to.number)}},
        )
        try:
            resp = self.gateway.send(to, message, config)
        except Exception as e:
            log.error(
                "message_send_exception",
                extra={
                    "extra": {
                        "event": "message_send_exception",
                        "channel": channel,
                        "dest": dest_hint(to.number),
                        "error_type": type(e).__name__,
                        "error": str(e),
                        "code": getattr(e, "code", None),
                        "latency_ms": t.ms(),
                    }
                },
                exc_info=True,
            )
            raise
        log.info(
            "message_send_result",
            extra={
                "extra": {
                    "event": "message_send_result",
                    "channel": channel,
                    "dest": dest_hint(to.number),
                    "ok": True,
                    "latency_ms": t.ms(),
                }
            },
        )
        return resp

    def close(self) -> None:
        self.gateway.close()
