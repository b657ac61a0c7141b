import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .context import ReplyContext
from .formatters import XmlResponseFormatter
from .models import Fan, WechatAccount, WechatMessage
from .replies import (
    ArticleLike,
    ImageReply,
    MusicReply,
    NewsReply,
    Reply,
    TextReply,
    VideoReply,
    VoiceReply,
)

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

# passive replies must be xml rooted at <xml>; wechat reads them as text/html
DEFAULT_FORMATTER_CONFIG = {
    'root_tag': 'xml',
    'content_type': 'text/html',
}
IDENTITY_FIELDS = ('FromUserName', 'ToUserName')


class ReplyProcessor(ABC):
    """
    base class of everything that answers a wechat callback

    subclasses implement process() and answer with one of the response_*
    builders, e.g. return self.response_text('hello world')
    """
    def __init__(self, context: ReplyContext, legacy_media_keys: bool = True):
        """
        params:
            context: request scoped message, account and fan lookup
            legacy_media_keys: nest voice and music payloads under 'Image'
        """
        self.context = context
        self.legacy_media_keys = legacy_media_keys

    @property
    def message(self) -> WechatMessage:
        return self.context.message

    @abstractmethod
    def process(self) -> Optional[Response]:
        """
        answer the inbound message

        return:
            xml response, or None when the message needs no reply
        """
        pass

    def get_account(self) -> WechatAccount:
        return self.context.get_account()

    def get_fan(self) -> Optional[Fan]:
        """the fan who triggered the request, None when not on record"""
        return self.context.get_fan()

    def response_text(self, content: str) -> Response:
        return self.reply(TextReply(content))

    def response_news(self, articles: Union[ArticleLike, Sequence[ArticleLike]]) -> Response:
        """
        respond with a news (article list) message

        example:
            self.response_news([
                Article('test title', 'test description', 'pic url', 'link'),
                {'title': 'second', 'description': '...', 'picUrl': '...', 'url': '...'},
            ])
        """
        return self.reply(NewsReply(articles))

    def response_image(self, media_id: str) -> Response:
        """media_id must be obtained by uploading the image to wechat first"""
        return self.reply(ImageReply(media_id))

    def response_voice(self, media_id: str) -> Response:
        return self.reply(VoiceReply(media_id))

    def response_video(self, media_id: str, thumb_media_id: str) -> Response:
        return self.reply(VideoReply(media_id, thumb_media_id))

    def response_music(self,
                       title: str,
                       description: str,
                       music_url: str,
                       thumb_media_id: str,
                       hq_music_url: Optional[str] = None) -> Response:
        """hq_music_url falls back to music_url"""
        return self.reply(MusicReply(title, description, music_url, thumb_media_id, hq_music_url))

    def reply(self, reply: Reply, formatter_config: Optional[Mapping[str, Any]] = None) -> Response:
        return self.response(reply.to_payload(self.legacy_media_keys), formatter_config)

    def response(self, data: Mapping[str, Any],
                 formatter_config: Optional[Mapping[str, Any]] = None) -> Response:
        """
        wrap reply fields in the envelope and output xml

        the envelope is FromUserName and ToUserName swapped from the inbound
        message, followed by CreateTime, which wechat requires on passive replies

        params:
            data: reply fields, MsgType first
            formatter_config: XmlResponseFormatter options overriding the defaults

        exception:
            WechatConfigurationError: when the account is not set
        """
        self.get_account()

        reply_data: Dict[str, Any] = {
            'FromUserName': self.message.to_user,
            'ToUserName': self.message.from_user,
        }
        if 'CreateTime' not in data:
            reply_data['CreateTime'] = int(time.time())
        for key, value in data.items():
            if key not in IDENTITY_FIELDS:
                reply_data[key] = value
        logger.info(f"reply data: {reply_data}")

        config = dict(DEFAULT_FORMATTER_CONFIG)
        config.update(formatter_config or {})
        return XmlResponseFormatter(**config).build_response(reply_data)
