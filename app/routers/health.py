from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import APIRouter

from config.settings import settings
from messaging.baidu.gateway import BaiduConfig

router = APIRouter()


@router.get("/health")
def health():
    baidu = BaiduConfig.from_settings(settings)

    payload: Dict[str, Any] = {
        "ok": True,
        "service": "smsgate-api",
        "environment": settings.ENVIRONMENT,
        "baidu_configured": baidu.is_configured(),
        "time_unix": time.time(),
    }

    # A gateway without credentials would sign with empty keys; report it as degraded.
    if not payload["baidu_configured"]:
        payload["ok"] = False

    return payload
