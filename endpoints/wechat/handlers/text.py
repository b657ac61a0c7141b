import logging

from werkzeug import Response
from dify_plugin.config.logger_format import plugin_logger_handler

from .base import MessageHandler

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

# clear history identifier message
CLEAR_HISTORY_MESSAGE = "/clear"


class TextMessageHandler(MessageHandler):
    """text message handler"""

    def process(self) -> Response:
        content = self.message.content or ''
        if content.strip() == CLEAR_HISTORY_MESSAGE:
            success = self.clear_cache(self.message.from_user)
            logger.info(f"清理历史记录: {'成功' if success else '失败'}")
            return self.response_text(
                "history chat records have been cleared" if success
                else "failed to clear history records, please try again later"
            )

        logger.info(f"start processing user's text message: '{content[:50]}...'")
        answer = self._invoke_ai(content, inputs=self._base_inputs())
        return self.response_text(answer)
