import json
import logging
from typing import Any, Optional

from dify_plugin.config.logger_format import plugin_logger_handler

from .models import Fan

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)


class FanStore:
    """fan records kept in the plugin key-value storage"""
    def __init__(self, storage: Any, app_id: Optional[str]):
        """
        params:
            storage: plugin storage (session.storage) with get/set/delete/exist
            app_id: public account app id, namespaces the keys
        """
        self.storage = storage
        self.app_id = app_id

    def get_storage_key(self, open_id: str) -> str:
        return f"wechat_fan_{self.app_id}_{open_id}"

    def find_by_open_id(self, open_id: str) -> Optional[Fan]:
        """
        find the fan with the given open id

        return:
            the fan, or None when the open id is unknown
        """
        key = self.get_storage_key(open_id)
        if not self.storage.exist(key):
            logger.debug(f"no fan record found (key: {key})")
            return None
        stored_data = self.storage.get(key)
        if not stored_data:
            return None
        return Fan.from_dict(json.loads(stored_data.decode('utf-8')))

    def save(self, fan: Fan) -> None:
        key = self.get_storage_key(fan.open_id)
        self.storage.set(key, json.dumps(fan.to_dict(), ensure_ascii=False).encode('utf-8'))
        logger.info(f"saved fan record for user '{fan.open_id}'")

    def delete(self, open_id: str) -> None:
        key = self.get_storage_key(open_id)
        if self.storage.exist(key):
            self.storage.delete(key)
            logger.info(f"deleted fan record for user '{open_id}'")
