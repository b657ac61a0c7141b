import logging
from typing import Optional

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .base import MessageHandler
from ..models import Fan
from ..replies import Article

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

DEFAULT_WELCOME_MESSAGE = "thanks for subscribing!"
DEFAULT_WELCOME_BACK_MESSAGE = "welcome back!"
CLEAR_CONTEXT_EVENT_KEY = 'CLEAR_CONTEXT'


class EventMessageHandler(MessageHandler):
    """event message handler"""

    def process(self) -> Optional[Response]:
        event_type = self.message.event
        logger.info(f"received event message, event type: {event_type}")

        if event_type == 'subscribe':
            return self._handle_subscribe_event()
        elif event_type == 'unsubscribe':
            return self._handle_unsubscribe_event()
        elif event_type == 'CLICK':
            return self._handle_click_event()
        # VIEW and the rest need no reply
        logger.debug(f"no reply for event type: {event_type}")
        return None

    def _handle_subscribe_event(self) -> Response:
        open_id = self.message.from_user
        logger.info(f"user {open_id} subscribed to the public account")

        if self.get_fan() is not None:
            return self.response_text(self.app_settings.get('welcome_back_message') or DEFAULT_WELCOME_BACK_MESSAGE)

        account = self.get_account()
        fan = Fan(open_id=open_id, app_id=account.app_id)
        self.context.fan_store.save(fan)
        self.context.remember_fan(fan)

        article = self._welcome_article()
        if article is not None:
            return self.response_news(article)
        return self.response_text(self.app_settings.get('welcome_message') or DEFAULT_WELCOME_MESSAGE)

    def _handle_unsubscribe_event(self) -> None:
        logger.info(f"user {self.message.from_user} unsubscribed from the public account")
        self.context.fan_store.delete(self.message.from_user)
        self.context.remember_fan(None)
        # wechat does not deliver replies to unsubscribed users
        return None

    def _handle_click_event(self) -> Response:
        event_key = self.message.event_key or ''
        logger.info(f"user {self.message.from_user} clicked the menu, event key: {event_key}")

        if event_key == CLEAR_CONTEXT_EVENT_KEY:
            success = self.clear_cache(self.message.from_user)
            return self.response_text(
                "conversation context has been cleared, you can start a new conversation." if success
                else "failed to clear conversation context, please try again later."
            )
        return self.response_text(f"you clicked the custom menu: {event_key}")

    def _welcome_article(self) -> Optional[Article]:
        """the welcome article, None unless title and url are configured"""
        title = self.app_settings.get('welcome_article_title')
        url = self.app_settings.get('welcome_article_url')
        if not title or not url:
            return None
        return Article(
            title=title,
            description=self.app_settings.get('welcome_article_description') or '',
            pic_url=self.app_settings.get('welcome_article_pic_url') or '',
            url=url,
        )
