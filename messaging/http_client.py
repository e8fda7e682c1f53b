from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Protocol, Union
from xml.etree import ElementTree as ET

import httpx

from ops.metrics import Timer

log = logging.getLogger("smsgate.http")

DEFAULT_TIMEOUT = 5.0

Payload = Union[Dict[str, Any], str]


class HttpClient(Protocol):
    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Payload: ...


def _xml_to_dict(elem: ET.Element) -> Any:
    children = list(elem)
    if not children:
        return (elem.text or "").strip()
    out: Dict[str, Any] = {}
    for child in children:
        value = _xml_to_dict(child)
        if child.tag in out:
            # Repeated tags collapse into a list, in document order.
            if not isinstance(out[child.tag], list):
                out[child.tag] = [out[child.tag]]
            out[child.tag].append(value)
        else:
            out[child.tag] = value
    return out


def unwrap_response(r: httpx.Response) -> Payload:
    """
    Decode a provider response by its content type.

    JSON (and javascript) bodies become dicts, XML bodies become nested dicts of
    tag -> text. Anything else is decoded as JSON when it parses, otherwise the
    body text is returned untouched. A body that contradicts its content type
    is also returned as text.
    """
    content_type = (r.headers.get("content-type") or "").lower()
    text = r.text or ""
    if "json" in content_type or "javascript" in content_type:
        try:
            return r.json()
        except ValueError:
            return text
    if "xml" in content_type:
        try:
            root = ET.fromstring(text)
        except ET.ParseError:
            return text
        data = _xml_to_dict(root)
        return data if isinstance(data, dict) else {root.tag: data}
    try:
        return json.loads(text)
    except ValueError:
        return text


class HttpxClient:
    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT):
        self.client = client or httpx.Client()
        self.timeout = timeout

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Payload:
        t = Timer()
        r = self.client.request(
            method.upper(),
            url,
            headers=headers,
            json=json,
            timeout=timeout if timeout is not None else self.timeout,
        )
        log.debug(
            "http_request_done",
            extra={
                "extra": {
                    "event": "http_request_done",
                    "method": method.upper(),
                    "host": r.request.url.host,
                    "status_code": r.status_code,
                    "latency_ms": t.ms(),
                }
            },
        )
        r.raise_for_status()
        return unwrap_response(r)

    def close(self) -> None:
        self.client.close()
