import json

import httpx
import pytest

from messaging.baidu.gateway import BaiduConfig, BaiduGateway
from messaging.errors import GatewayError
from messaging.http_client import HttpxClient, unwrap_response
from messaging.message import Message


def make_client(handler):
    return HttpxClient(client=httpx.Client(transport=httpx.MockTransport(handler)), timeout=2.0)


def test_json_body_is_decoded_and_request_is_forwarded():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"code": 1000, "message": "ok"})

    client = make_client(handler)
    data = client.request(
        "post",
        "http://smsv3.bj.baidubce.com/api/v3/sendSms",
        headers={"Authorization": "bce-auth-v1/x"},
        json={"mobile": "138"},
    )
    assert data == {"code": 1000, "message": "ok"}
    assert seen == {"method": "POST", "auth": "bce-auth-v1/x", "body": {"mobile": "138"}}


def test_xml_body_is_decoded_to_dict():
    body = "<response><code>1000</code><message>ok</message><item>a</item><item>b</item></response>"
    r = httpx.Response(200, text=body, headers={"content-type": "application/xml"})
    assert unwrap_response(r) == {"code": "1000", "message": "ok", "item": ["a", "b"]}


def test_untyped_body_falls_back_to_json_then_text():
    assert unwrap_response(httpx.Response(200, text='{"code": 1}', headers={"content-type": "text/plain"})) == {"code": 1}
    assert unwrap_response(httpx.Response(200, text="OK", headers={"content-type": "text/plain"})) == "OK"


def test_http_status_errors_raise():
    client = make_client(lambda request: httpx.Response(503, text="down"))
    with pytest.raises(httpx.HTTPStatusError):
        client.request("post", "http://example.invalid/x", json={})


def test_connect_errors_propagate():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = make_client(handler)
    with pytest.raises(httpx.ConnectError):
        client.request("post", "http://example.invalid/x", json={})


def test_body_contradicting_content_type_is_returned_as_text():
    html = httpx.Response(200, text="<html>502 Bad Gateway</html>", headers={"content-type": "application/json"})
    assert unwrap_response(html) == "<html>502 Bad Gateway</html>"
    broken = httpx.Response(200, text="<broken", headers={"content-type": "text/xml"})
    assert unwrap_response(broken) == "<broken"


@pytest.mark.parametrize(
    "content_type,body",
    [("application/json", "<html>502 Bad Gateway</html>"), ("text/xml", "<broken")],
)
def test_undecodable_provider_body_raises_gateway_error(content_type, body):
    client = make_client(lambda request: httpx.Response(200, text=body, headers={"content-type": content_type}))
    gw = BaiduGateway(config=BaiduConfig(ak="AK123", sk="SK456", invoke_id="sig"), http=client)
    with pytest.raises(GatewayError) as ei:
        gw.send("13800000000", Message(template="t"))
    assert ei.value.raw == body
    assert ei.value.code is None


def test_close_closes_underlying_client():
    inner = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    HttpxClient(client=inner).close()
    assert inner.is_closed
