class WechatError(Exception):
    """base error of the wechat reply layer"""


class WechatConfigurationError(WechatError):
    """the wechat account context was not set before building a reply"""


class MissingRequiredFieldError(WechatError, ValueError):
    """a reply was built without one of its required parameters"""

    def __init__(self, reply_type: str, field: str):
        self.reply_type = reply_type
        self.field = field
        super().__init__(f"{reply_type} reply requires '{field}'")
