from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from messaging.baidu.signer import Credentials, RequestSigner, headers_to_sign
from messaging.errors import GatewayError
from messaging.http_client import DEFAULT_TIMEOUT, HttpClient
from messaging.message import Message
from messaging.phone_number import PhoneNumber
from messaging.sms import SmsGateway
from utils.masking import dest_hint

log = logging.getLogger("smsgate.baidu")

# https://cloud.baidu.com/doc/SMS/index.html
ENDPOINT_HOST = "smsv3.bj.baidubce.com"
ENDPOINT_URI = "/api/v3/sendSms"
SUCCESS_CODE = 1000
SIGNED_HEADERS = ("host", "x-bce-date")

# contentVar keys the API expects at the top level of the request instead.
PROMOTED_FIELDS = ("custom", "userExtId")


class BaiduConfig(BaseModel):
    ak: str = ""
    sk: str = ""
    invoke_id: str = ""
    domain: Optional[str] = Field(default=None)

    @classmethod
    def from_settings(cls, s: Any) -> "BaiduConfig":
        return cls(
            ak=s.BAIDU_SMS_AK,
            sk=s.BAIDU_SMS_SK,
            invoke_id=s.BAIDU_SMS_INVOKE_ID,
            domain=s.BAIDU_SMS_DOMAIN or None,
        )

    def credentials(self) -> Credentials:
        return Credentials(access_key=self.ak, secret_key=self.sk)

    def is_configured(self) -> bool:
        return bool(self.ak and self.sk and self.invoke_id)


def bce_date(now: datetime) -> str:
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaiduGateway(SmsGateway):
    name = "baidu"

    def __init__(
        self,
        config: Optional[BaiduConfig] = None,
        http: Optional[HttpClient] = None,
        signer: Optional[RequestSigner] = None,
        clock: Callable[[], datetime] = _utcnow,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(http=http, timeout=timeout)
        self.config = config or BaiduConfig()
        self.signer = signer or RequestSigner()
        self.clock = clock

    def build_endpoint(self, config: BaiduConfig) -> str:
        return f"http://{config.domain or ENDPOINT_HOST}{ENDPOINT_URI}"

    def build_params(self, to: PhoneNumber, message: Message, config: BaiduConfig) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "signatureId": config.invoke_id,
            "mobile": to.number,
            "template": message.get_template(self),
            "contentVar": message.get_data(self),
        }
        for key in PROMOTED_FIELDS:
            # Empty values are left where they are.
            if params["contentVar"].get(key):
                params[key] = params["contentVar"].pop(key)
        return params

    def build_headers(self, config: BaiduConfig) -> Dict[str, str]:
        timestamp = bce_date(self.clock())
        headers = {
            "host": ENDPOINT_HOST,
            "content-type": "application/json",
            "x-bce-date": timestamp,
        }
        headers["Authorization"] = self.signer.sign(
            headers_to_sign(headers, SIGNED_HEADERS),
            timestamp,
            config.credentials(),
            ENDPOINT_URI,
        )
        return headers

    def send(self, to: PhoneNumber, message: Message, config: Optional[BaiduConfig] = None) -> Dict[str, Any]:
        config = config or self.config
        to = PhoneNumber.coerce(to)
        message = Message.coerce(message)

        params = self.build_params(to, message, config)
        headers = self.build_headers(config)

        result = self.http.request(
            "post",
            self.build_endpoint(config),
            headers=headers,
            json=params,
            timeout=self.timeout,
        )

        if not isinstance(result, dict):
            raise GatewayError("unexpected_response_body", None, result)

        code = result.get("code")
        try:
            ok = int(code) == SUCCESS_CODE
        except (TypeError, ValueError):
            ok = False
        if not ok:
            log.warning(
                "baidu_send_rejected",
                extra={
                    "extra": {
                        "event": "baidu_send_rejected",
                        "dest": dest_hint(to.number),
                        "template": params["template"],
                        "code": code,
                        "provider_message": result.get("message"),
                        "provider_request_id": result.get("requestId"),
                    }
                },
            )
            raise GatewayError(str(result.get("message") or ""), code, result)
        return result
