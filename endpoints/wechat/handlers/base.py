import logging
from typing import Dict, Any, Mapping, Optional

from dify_plugin.config.logger_format import plugin_logger_handler

from ..context import ReplyContext
from ..processor import ReplyProcessor

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

DEFAULT_EMPTY_ANSWER = "AI did not give a reply"


class MessageHandler(ReplyProcessor):
    """message handler base class, answers through the dify app bound to the plugin"""
    def __init__(self, context: ReplyContext, session: Any, app_settings: Mapping[str, Any],
                 legacy_media_keys: bool = True):
        """
        params:
            context: request scoped message, account and fan lookup
            session: current session object for accessing storage and AI interface
            app_settings: plugin settings dictionary
        """
        super().__init__(context, legacy_media_keys=legacy_media_keys)
        self.session = session
        self.app_settings = app_settings

    @property
    def dify_app_id(self) -> Optional[str]:
        app = self.app_settings.get("app") or {}
        return app.get("app_id")

    def get_storage_key(self, user_id: str, app_id: str) -> str:
        """storage key of the user's conversation id"""
        return f"wechat_conv_{user_id}_{app_id}"

    def clear_cache(self, user_id: str) -> bool:
        """
        forget the stored conversation of a user

        return:
            bool: whether the cache was cleared
        """
        storage_key = self.get_storage_key(user_id, self.dify_app_id)
        logger.info(f"preparing to clear cache for user '{user_id}', storage key: '{storage_key}'")
        try:
            self.session.storage.delete(storage_key)
        except Exception as e:
            logger.error(f"failed to clear cache for user '{user_id}': {str(e)}")
            return False
        logger.info(f"successfully cleared cache for user '{user_id}'")
        return True

    def _get_conversation_id(self, user_id: str) -> Optional[str]:
        """
        get stored conversation id

        return:
            Optional[str]: conversation id, None if not found
        """
        storage_key = self.get_storage_key(user_id, self.dify_app_id)
        if not self.session.storage.exist(storage_key):
            logger.debug(f"no stored conversation id found (key: {storage_key}), will create new conversation")
            return None
        stored_data = self.session.storage.get(storage_key)
        return stored_data.decode('utf-8') if stored_data else None

    def _save_conversation_id(self, user_id: str, conversation_id: str) -> None:
        storage_key = self.get_storage_key(user_id, self.dify_app_id)
        self.session.storage.set(storage_key, conversation_id.encode('utf-8'))
        logger.info(f"saved new conversation id for user '{user_id}'")

    def _invoke_ai(self, query: str, inputs: Optional[Dict[str, Any]] = None) -> str:
        """
        ask the dify app in blocking mode, keeping one conversation per user

        params:
            query: user query text
            inputs: app input variables

        return:
            the answer text
        """
        user_id = self.message.from_user
        conversation_id = self._get_conversation_id(user_id)

        invoke_params = {
            "app_id": self.dify_app_id,
            "query": query,
            "inputs": inputs or {},
            "response_mode": "blocking",
        }
        if conversation_id:
            invoke_params["conversation_id"] = conversation_id

        logger.debug(f"invoke Dify API, parameters: {invoke_params}")
        result = self.session.app.chat.invoke(**invoke_params)

        new_conversation_id = result.get("conversation_id")
        if new_conversation_id and new_conversation_id != conversation_id:
            self._save_conversation_id(user_id, new_conversation_id)

        answer = result.get("answer") or DEFAULT_EMPTY_ANSWER
        logger.info(f"processed, response length: {len(answer)}")
        return answer

    def _base_inputs(self) -> Dict[str, Any]:
        return {
            "msgId": self.message.msg_id,
            "msgType": self.message.msg_type,
            "fromUser": self.message.from_user,
            "createTime": self.message.create_time,
        }
