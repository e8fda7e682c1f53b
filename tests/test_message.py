import pytest

from messaging.errors import InvalidArgumentError
from messaging.message import Message, VOICE_MESSAGE


class G:
    name = "baidu"


def test_plain_values():
    m = Message(content="hi", template="T1", data={"a": 1})
    assert m.get_content() == "hi"
    assert m.get_template(G()) == "T1"
    assert m.get_data(G()) == {"a": 1}


def test_callables_receive_gateway():
    m = Message(template=lambda g: "T_" + g.name, data=lambda g: {"gw": g.name})
    assert m.get_template(G()) == "T_baidu"
    assert m.get_data(G()) == {"gw": "baidu"}


def test_get_data_returns_copy():
    m = Message(data={"a": 1})
    d = m.get_data()
    d["b"] = 2
    assert m.data == {"a": 1}


def test_coerce():
    assert Message.coerce("hello").get_content() == "hello"
    m = Message.coerce({"template": "T", "data": {"x": "1"}, "type": VOICE_MESSAGE})
    assert m.type == VOICE_MESSAGE
    existing = Message(template="T")
    assert Message.coerce(existing) is existing


def test_coerce_rejects_unknown():
    with pytest.raises(InvalidArgumentError):
        Message.coerce({"tmpl": "T"})
    with pytest.raises(InvalidArgumentError):
        Message.coerce(42)
    with pytest.raises(InvalidArgumentError):
        Message(type="fax")
