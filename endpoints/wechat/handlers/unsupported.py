import logging

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .base import MessageHandler

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

UNSUPPORTED_MESSAGE = "currently only text, image, voice and link messages are supported"


class UnsupportedMessageHandler(MessageHandler):
    """unsupported message type handler"""
    def process(self) -> Response:
        logger.warning(f"unsupported message type: {self.message.msg_type}")
        return self.response_text(UNSUPPORTED_MESSAGE)
