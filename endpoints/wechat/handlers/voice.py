import logging

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .base import MessageHandler

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

NO_RECOGNITION_MESSAGE = "sorry, the voice message could not be recognized, please send text"


class VoiceMessageHandler(MessageHandler):
    """voice message handler, relies on wechat's speech recognition"""

    def process(self) -> Response:
        if not self.message.recognition:
            logger.info(f"received voice message, format: {self.message.format}, no recognition result")
            return self.response_text(NO_RECOGNITION_MESSAGE)

        logger.info(f"received voice message, voice recognition result: {self.message.recognition}")
        inputs = self._base_inputs()
        inputs["media_id"] = self.message.media_id
        inputs["recognition"] = self.message.recognition
        return self.response_text(self._invoke_ai(self.message.recognition, inputs=inputs))
