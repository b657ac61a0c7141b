import logging

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .base import MessageHandler

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)


class LinkMessageHandler(MessageHandler):
    """link message handler"""

    def process(self) -> Response:
        message = self.message
        logger.info(f"received link message, title: {message.title}, URL: {message.url}")

        link_text = f"[link] title: {message.title}\ndescription: {message.description or 'no description'}\nURL: {message.url}"
        inputs = self._base_inputs()
        inputs.update({
            "url": message.url,
            "title": message.title,
            "description": message.description,
        })
        return self.response_text(self._invoke_ai(link_text, inputs=inputs))
