import hashlib
import logging
from typing import Mapping

from werkzeug import Request, Response
from dify_plugin import Endpoint
from dify_plugin.config.logger_format import plugin_logger_handler

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)


def calculate_signature(token: str, timestamp: str, nonce: str) -> str:
    """sha1 of token, timestamp and nonce sorted in dictionary order"""
    temp_str = ''.join(sorted([token, timestamp, nonce]))
    return hashlib.sha1(temp_str.encode('utf-8')).hexdigest()


class WechatGet(Endpoint):
    """wechat public account server verification endpoint"""
    def _invoke(self, r: Request, values: Mapping, settings: Mapping) -> Response:
        """
        handle the wechat public account token verification request
        """
        signature = r.args.get('signature', '')
        timestamp = r.args.get('timestamp', '')
        nonce = r.args.get('nonce', '')
        echostr = r.args.get('echostr', '')

        token = settings.get('wechat_token', '')
        if not token:
            logger.error("wechat token not configured")
            return Response("wechat token not configured", status=500)

        hash_str = calculate_signature(token, timestamp, nonce)
        if hash_str == signature:
            return Response(echostr, status=200)

        logger.warning(f"verification failed: calculated signature={hash_str}, received signature={signature}")
        return Response("verification failed", status=403)
