from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from config.settings import settings
from messaging.baidu.gateway import BaiduConfig, BaiduGateway
from messaging.dispatcher import MessageDispatcher
from messaging.message import Message
from messaging.phone_number import PhoneNumber

log = logging.getLogger("smsgate.router.sms")
router = APIRouter()


class SendSmsRequest(BaseModel):
    to: str = Field(..., min_length=3, max_length=32)
    idd_code: Optional[str] = None
    template: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)
    content: str = ""


@lru_cache(maxsize=1)
def get_dispatcher() -> MessageDispatcher:
    gateway = BaiduGateway(config=BaiduConfig.from_settings(settings), timeout=settings.SMS_HTTP_TIMEOUT)
    return MessageDispatcher(gateway)


def close_dispatcher() -> None:
    if get_dispatcher.cache_info().currsize == 0:
        return
    dispatcher = get_dispatcher()
    get_dispatcher.cache_clear()
    dispatcher.close()
    log.info("sms_dispatcher_closed", extra={"extra": {"event": "sms_dispatcher_closed", "channel": dispatcher.gateway.name}})


@router.post("/sms/send")
def send_sms(req: SendSmsRequest, dispatcher: MessageDispatcher = Depends(get_dispatcher)):
    to = PhoneNumber(req.to, req.idd_code)
    message = Message(content=req.content, template=req.template, data=req.data)
    result = dispatcher.send_sms(to, message)
    return {"ok": True, "result": result}
