from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .exceptions import MissingRequiredFieldError


def _require(reply_type: str, **fields: Any) -> None:
    for name, value in fields.items():
        if value is None:
            raise MissingRequiredFieldError(reply_type, name)


class Reply(ABC):
    """passive reply payload base class"""
    msg_type = ''

    @abstractmethod
    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        """
        build the reply fields that follow the envelope

        params:
            legacy_media_keys: nest voice and music replies under 'Image'
                like the deployed consumer expects, instead of 'Voice'/'Music'

        return:
            ordered payload dictionary starting with MsgType
        """
        pass


class TextReply(Reply):
    msg_type = 'text'

    def __init__(self, content: str):
        _require(self.msg_type, content=content)
        self.content = content

    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        return {'MsgType': self.msg_type, 'Content': self.content}


class Article:
    """one card of a news reply"""
    def __init__(self, title: str, description: str, pic_url: str, url: str):
        _require('news', title=title, description=description, pic_url=pic_url, url=url)
        self.title = title
        self.description = description
        self.pic_url = pic_url
        self.url = url

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'Article':
        """accept {'title', 'description', 'picUrl', 'url'} (pic_url is also accepted)"""
        return cls(
            title=data.get('title'),
            description=data.get('description'),
            pic_url=data.get('picUrl', data.get('pic_url')),
            url=data.get('url'),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            'Title': self.title,
            'Description': self.description,
            'PicUrl': self.pic_url,
            'Url': self.url,
        }


ArticleLike = Union[Article, Mapping[str, Any]]


class NewsReply(Reply):
    msg_type = 'news'

    def __init__(self, articles: Union[ArticleLike, Sequence[ArticleLike]]):
        _require(self.msg_type, articles=articles)
        # a single article may be passed without wrapping it in a list
        if isinstance(articles, (Article, Mapping)):
            articles = [articles]
        self.articles: List[Article] = [
            article if isinstance(article, Article) else Article.from_mapping(article)
            for article in articles
        ]

    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        return {
            'MsgType': self.msg_type,
            'ArticleCount': len(self.articles),
            'Articles': [article.to_payload() for article in self.articles],
        }


class ImageReply(Reply):
    msg_type = 'image'

    def __init__(self, media_id: str):
        _require(self.msg_type, media_id=media_id)
        self.media_id = media_id

    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        return {'MsgType': self.msg_type, 'Image': {'MediaId': self.media_id}}


class VoiceReply(Reply):
    msg_type = 'voice'

    def __init__(self, media_id: str):
        _require(self.msg_type, media_id=media_id)
        self.media_id = media_id

    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        key = 'Image' if legacy_media_keys else 'Voice'
        return {'MsgType': self.msg_type, key: {'MediaId': self.media_id}}


class VideoReply(Reply):
    msg_type = 'video'

    def __init__(self, media_id: str, thumb_media_id: str):
        _require(self.msg_type, media_id=media_id, thumb_media_id=thumb_media_id)
        self.media_id = media_id
        self.thumb_media_id = thumb_media_id

    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        return {
            'MsgType': self.msg_type,
            'Video': {
                'MediaId': self.media_id,
                'ThumbMediaId': self.thumb_media_id,
            },
        }


class MusicReply(Reply):
    msg_type = 'music'

    def __init__(self,
                 title: str,
                 description: str,
                 music_url: str,
                 thumb_media_id: str,
                 hq_music_url: Optional[str] = None):
        _require(self.msg_type, title=title, description=description,
                 music_url=music_url, thumb_media_id=thumb_media_id)
        self.title = title
        self.description = description
        self.music_url = music_url
        self.hq_music_url = hq_music_url if hq_music_url is not None else music_url
        self.thumb_media_id = thumb_media_id

    def to_payload(self, legacy_media_keys: bool = True) -> Dict[str, Any]:
        key = 'Image' if legacy_media_keys else 'Music'
        return {
            'MsgType': self.msg_type,
            key: {
                'Title': self.title,
                'Description': self.description,
                'MusicUrl': self.music_url,
                'HQMusicUrl': self.hq_music_url,
                'ThumbMediaId': self.thumb_media_id,
            },
        }
