import time
from typing import Optional, Dict, Any, Mapping


class WechatMessage:
    """wechat inbound message entity class"""
    def __init__(self,
                 msg_type: str,
                 from_user: str,
                 to_user: str,
                 create_time: str,
                 msg_id: Optional[str] = None,
                 content: Optional[str] = None,
                 pic_url: Optional[str] = None,
                 media_id: Optional[str] = None,
                 format: Optional[str] = None,
                 recognition: Optional[str] = None,
                 thumb_media_id: Optional[str] = None,
                 title: Optional[str] = None,
                 description: Optional[str] = None,
                 url: Optional[str] = None,
                 event: Optional[str] = None,
                 event_key: Optional[str] = None):
        """
        initialize the wechat message object

        params:
            msg_type: message type ('text', 'image', 'voice', 'video', 'link', 'event' etc.)
            from_user: sender's OpenID (the fan)
            to_user: receiver's ID (original ID of the public account)
            create_time: message creation time
            msg_id: message ID, absent for events
            content: text message content
            pic_url: image link of image messages
            media_id: media ID of image, voice or video messages
            format: voice format
            recognition: voice recognition result, when enabled for the account
            thumb_media_id: media ID of the video thumbnail
            title, description, url: link message fields
            event, event_key: event type and key of event messages
        """
        self.msg_type = msg_type
        self.from_user = from_user
        self.to_user = to_user
        self.create_time = create_time
        self.msg_id = msg_id
        self.content = content
        self.pic_url = pic_url
        self.media_id = media_id
        self.format = format
        self.recognition = recognition
        self.thumb_media_id = thumb_media_id
        self.title = title
        self.description = description
        self.url = url
        self.event = event
        self.event_key = event_key

    def __str__(self) -> str:
        if self.msg_type == 'text':
            return f"WechatMessage(type={self.msg_type}, from={self.from_user}, content={self.content})"
        elif self.msg_type == 'event':
            return f"WechatMessage(type={self.msg_type}, from={self.from_user}, event={self.event}, event_key={self.event_key})"
        return f"WechatMessage(type={self.msg_type}, from={self.from_user})"


class WechatAccount:
    """the public account a request was sent to"""
    def __init__(self, app_id: Optional[str], token: str, name: Optional[str] = None):
        self.app_id = app_id
        self.token = token
        self.name = name

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> Optional['WechatAccount']:
        """
        build the account from plugin settings

        return:
            the account, or None when no wechat token is configured
        """
        token = settings.get('wechat_token')
        if not token:
            return None
        return cls(
            app_id=settings.get('app_id'),
            token=token,
            name=settings.get('account_name'),
        )

    def __repr__(self) -> str:
        return f"WechatAccount(app_id={self.app_id}, name={self.name})"


class Fan:
    """a subscriber of the public account, keyed by open id"""
    def __init__(self,
                 open_id: str,
                 app_id: Optional[str] = None,
                 subscribed_at: Optional[int] = None,
                 extra: Optional[Dict[str, Any]] = None):
        self.open_id = open_id
        self.app_id = app_id
        self.subscribed_at = subscribed_at if subscribed_at is not None else int(time.time())
        self.extra = dict(extra or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'open_id': self.open_id,
            'app_id': self.app_id,
            'subscribed_at': self.subscribed_at,
            'extra': self.extra,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Fan':
        return cls(
            open_id=data['open_id'],
            app_id=data.get('app_id'),
            subscribed_at=data.get('subscribed_at'),
            extra=data.get('extra'),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Fan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Fan(open_id={self.open_id}, app_id={self.app_id})"
