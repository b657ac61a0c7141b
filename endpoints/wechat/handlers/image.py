import logging

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .base import MessageHandler

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)


class ImageMessageHandler(MessageHandler):
    """image message handler"""

    def process(self) -> Response:
        logger.info(f"received image message, image URL: {self.message.pic_url}")

        inputs = self._base_inputs()
        inputs["picUrl"] = self.message.pic_url
        answer = self._invoke_ai(f"[image] URL: {self.message.pic_url}", inputs=inputs)
        return self.response_text(answer)
