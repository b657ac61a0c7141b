import logging
import xml.etree.ElementTree as ET
from typing import Dict, Optional

from dify_plugin.config.logger_format import plugin_logger_handler

from .models import WechatMessage

# 使用自定义处理器设置日志
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(plugin_logger_handler)

# xml tag -> WechatMessage attribute, all optional
OPTIONAL_FIELDS = {
    'MsgId': 'msg_id',
    'Content': 'content',
    'PicUrl': 'pic_url',
    'MediaId': 'media_id',
    'Format': 'format',
    'Recognition': 'recognition',
    'ThumbMediaId': 'thumb_media_id',
    'Title': 'title',
    'Description': 'description',
    'Url': 'url',
    'Event': 'event',
    'EventKey': 'event_key',
}
REQUIRED_FIELDS = ('MsgType', 'FromUserName', 'ToUserName', 'CreateTime')


class MessageParser:
    """message parser"""
    @staticmethod
    def parse_xml(raw_data: str) -> WechatMessage:
        """
        parse XML data to WechatMessage object

        params:
            raw_data: raw XML data

        return:
            WechatMessage object

        exception:
            ValueError: when XML parsing fails or an envelope field is missing
        """
        try:
            xml_data = ET.fromstring(raw_data)
        except ET.ParseError as e:
            logger.error(f"failed to parse XML: {str(e)}")
            raise ValueError(f"failed to parse XML: {str(e)}") from e

        fields: Dict[str, Optional[str]] = {child.tag: child.text for child in xml_data}
        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise ValueError(f"failed to parse XML: missing {', '.join(missing)}")

        message = WechatMessage(
            msg_type=fields['MsgType'],
            from_user=fields['FromUserName'],
            to_user=fields['ToUserName'],
            create_time=fields['CreateTime'],
            **{attr: fields.get(tag) for tag, attr in OPTIONAL_FIELDS.items()}
        )
        if message.msg_type == 'event':
            logger.info(f"parsed event message: event type={message.event}, event key={message.event_key}")
        return message
