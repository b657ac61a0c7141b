import logging
from typing import Mapping

from werkzeug import Request, Response
from dify_plugin import Endpoint
from dify_plugin.config.logger_format import plugin_logger_handler

from endpoints.wechat.context import ReplyContext
from endpoints.wechat.exceptions import WechatConfigurationError
from endpoints.wechat.factory import MessageHandlerFactory
from endpoints.wechat.fans import FanStore
from endpoints.wechat.models import WechatAccount
from endpoints.wechat.parsers import MessageParser

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)


class WechatPost(Endpoint):
    """wechat public account message processing endpoint"""
    def _invoke(self, r: Request, values: Mapping, settings: Mapping) -> Response:
        """handle wechat request"""
        logger.debug(f"微信请求: {r.method} {r.url}")

        # 1. parse the message content
        try:
            message = MessageParser.parse_xml(r.get_data(as_text=True))
        except ValueError as e:
            logger.error(f"消息解析失败: {str(e)}")
            return Response('invalid message', status=400)

        # 2. build the request scoped reply context
        account = WechatAccount.from_settings(settings)
        fan_store = FanStore(self.session.storage, account.app_id if account else None)
        context = ReplyContext(message, account, fan_store)

        # 3. let the handler for the message type answer
        handler = MessageHandlerFactory.get_handler(message.msg_type, context, self.session, settings)
        try:
            context.get_account()
            response = handler.process()
        except WechatConfigurationError as e:
            logger.error(f"配置错误: {str(e)}")
            return Response("configuration error", status=500)
        except Exception as e:
            # an empty 200 keeps wechat from retrying the callback
            logger.error(f"处理请求异常: {e}")
            return Response("", status=200, content_type="text/html")

        if response is None:
            return Response("", status=200, content_type="text/html")
        return response
