import xml.etree.ElementTree as ET

import pytest

from endpoints.wechat.context import ReplyContext
from endpoints.wechat.fans import FanStore
from endpoints.wechat.models import WechatAccount, WechatMessage


class FakeStorage:
    """in-memory stand-in for the plugin key-value storage"""
    def __init__(self):
        self.data = {}
        self.get_calls = 0
        self.exist_calls = 0

    def get(self, key):
        self.get_calls += 1
        return self.data[key]

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)

    def exist(self, key):
        self.exist_calls += 1
        return key in self.data


class FakeChat:
    def __init__(self, answer="ai answer", conversation_id="conv-1"):
        self.answer = answer
        self.conversation_id = conversation_id
        self.calls = []

    def invoke(self, **kwargs):
        self.calls.append(kwargs)
        return {"answer": self.answer, "conversation_id": self.conversation_id}


class FakeApp:
    def __init__(self, chat):
        self.chat = chat


class FakeSession:
    def __init__(self, chat=None):
        self.storage = FakeStorage()
        self.app = FakeApp(chat or FakeChat())


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def settings():
    return {
        "wechat_token": "token",
        "app_id": "wx-app",
        "app": {"app_id": "dify-app"},
    }


@pytest.fixture
def account():
    return WechatAccount(app_id="wx-app", token="token", name="demo")


@pytest.fixture
def make_message():
    def _make(msg_type="text", **kwargs):
        kwargs.setdefault("from_user", "U1")
        kwargs.setdefault("to_user", "ACC")
        kwargs.setdefault("create_time", "1700000000")
        return WechatMessage(msg_type=msg_type, **kwargs)
    return _make


@pytest.fixture
def make_context(session, account):
    def _make(message, account=account):
        return ReplyContext(message, account, FanStore(session.storage, "wx-app"))
    return _make


@pytest.fixture
def parse_reply():
    """decode a reply response into its root element"""
    def _parse(response):
        return ET.fromstring(response.get_data(as_text=True).split("\n", 1)[1])
    return _parse
