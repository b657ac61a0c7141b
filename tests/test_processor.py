from unittest.mock import patch

import pytest

from endpoints.wechat.exceptions import WechatConfigurationError
from endpoints.wechat.models import Fan
from endpoints.wechat.processor import ReplyProcessor


class EchoProcessor(ReplyProcessor):
    def process(self):
        return self.response_text(self.message.content)


def test_text_reply_swaps_identity(make_message, make_context, parse_reply):
    response = EchoProcessor(make_context(make_message(content="hello"))).process()

    root = parse_reply(response)
    assert root.tag == "xml"
    assert root.findtext("FromUserName") == "ACC"
    assert root.findtext("ToUserName") == "U1"
    assert root.findtext("MsgType") == "text"
    assert root.findtext("Content") == "hello"
    assert root.findtext("CreateTime").isdigit()
    assert response.headers["Content-Type"] == "text/html"


def test_identity_fields_come_first(make_message, make_context, parse_reply):
    root = parse_reply(EchoProcessor(make_context(make_message(content="hi"))).response_image("m1"))

    assert [child.tag for child in root][:2] == ["FromUserName", "ToUserName"]
    assert root.findtext("Image/MediaId") == "m1"


def test_payload_cannot_shadow_identity(make_message, make_context, parse_reply):
    processor = EchoProcessor(make_context(make_message()))

    root = parse_reply(processor.response({
        "FromUserName": "evil",
        "ToUserName": "evil",
        "MsgType": "text",
        "Content": "x",
    }))

    assert root.findtext("FromUserName") == "ACC"
    assert root.findtext("ToUserName") == "U1"
    assert len(root.findall("FromUserName")) == 1


def test_formatter_config_overrides_defaults(make_message, make_context):
    processor = EchoProcessor(make_context(make_message()))

    response = processor.response({"MsgType": "text", "Content": "x"},
                                  formatter_config={"root_tag": "reply", "content_type": "application/xml"})

    assert response.headers["Content-Type"] == "application/xml"
    assert "<reply>" in response.get_data(as_text=True)


def test_missing_account_raises_before_serialization(make_message, make_context):
    processor = EchoProcessor(make_context(make_message(content="hello"), account=None))

    with patch("endpoints.wechat.processor.XmlResponseFormatter") as formatter:
        with pytest.raises(WechatConfigurationError):
            processor.process()
    formatter.assert_not_called()


def test_video_reply(make_message, make_context, parse_reply):
    root = parse_reply(EchoProcessor(make_context(make_message())).response_video("m1", "t1"))

    assert root.findtext("MsgType") == "video"
    assert root.findtext("Video/MediaId") == "m1"
    assert root.findtext("Video/ThumbMediaId") == "t1"


def test_news_reply_items(make_message, make_context, parse_reply):
    articles = [
        {"title": f"t{n}", "description": "d", "picUrl": "p", "url": "u"} for n in range(2)
    ]

    root = parse_reply(EchoProcessor(make_context(make_message())).response_news(articles))

    assert root.findtext("ArticleCount") == "2"
    assert [item.findtext("Title") for item in root.findall("Articles/item")] == ["t0", "t1"]


def test_voice_and_music_replies(make_message, make_context, parse_reply):
    processor = EchoProcessor(make_context(make_message()))

    assert parse_reply(processor.response_voice("v1")).findtext("Image/MediaId") == "v1"
    music = parse_reply(processor.response_music("t", "d", "http://m", "thumb"))
    assert music.findtext("MsgType") == "music"
    assert music.findtext("Image/HQMusicUrl") == "http://m"


def test_voice_reply_without_legacy_media_keys(make_message, make_context, parse_reply):
    processor = EchoProcessor(make_context(make_message()), legacy_media_keys=False)

    assert parse_reply(processor.response_voice("v1")).findtext("Voice/MediaId") == "v1"


def test_get_fan(make_message, make_context, session):
    context = make_context(make_message())
    context.fan_store.save(Fan(open_id="U1", app_id="wx-app"))

    assert EchoProcessor(context).get_fan().open_id == "U1"
