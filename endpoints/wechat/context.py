from functools import cached_property
from typing import Optional

from .exceptions import WechatConfigurationError
from .fans import FanStore
from .models import Fan, WechatAccount, WechatMessage


class ReplyContext:
    """
    request scoped state of one wechat callback

    created by the endpoint for every inbound message and dropped with the
    response, so the cached fan never outlives the request
    """
    def __init__(self,
                 message: WechatMessage,
                 account: Optional[WechatAccount],
                 fan_store: Optional[FanStore] = None):
        self.message = message
        self.account = account
        self.fan_store = fan_store

    def get_account(self) -> WechatAccount:
        if self.account is None:
            raise WechatConfigurationError("The wechat account must be set.")
        return self.account

    @cached_property
    def fan(self) -> Optional[Fan]:
        if self.fan_store is None:
            raise WechatConfigurationError("The fan store must be set.")
        return self.fan_store.find_by_open_id(self.message.from_user)

    def get_fan(self) -> Optional[Fan]:
        """the fan who sent the message, None when unknown"""
        return self.fan

    def remember_fan(self, fan: Optional[Fan]) -> None:
        """replace the cached fan after the sender's record changed during this request"""
        self.__dict__['fan'] = fan
