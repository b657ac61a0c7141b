import pytest

from endpoints.wechat.exceptions import MissingRequiredFieldError
from endpoints.wechat.replies import (
    Article,
    MusicReply,
    NewsReply,
    Reply,
    TextReply,
    VideoReply,
    VoiceReply,
)


def _article(n=1):
    return Article(f"title {n}", f"description {n}", f"http://pic/{n}", f"http://url/{n}")


def test_single_article_is_wrapped_like_one_element_list():
    article = _article()

    assert NewsReply(article).to_payload() == NewsReply([article]).to_payload()


@pytest.mark.parametrize("count", [0, 1, 5])
def test_article_count_matches_articles(count):
    payload = NewsReply([_article(n) for n in range(count)]).to_payload()

    assert payload["ArticleCount"] == count
    assert len(payload["Articles"]) == count


def test_article_mapping_uses_pic_url_key():
    payload = NewsReply({
        "title": "t",
        "description": "d",
        "picUrl": "http://pic",
        "url": "http://url",
    }).to_payload()

    assert payload["Articles"] == [
        {"Title": "t", "Description": "d", "PicUrl": "http://pic", "Url": "http://url"}
    ]


def test_article_mapping_missing_field_raises():
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        NewsReply({"title": "t", "description": "d", "url": "http://url"})

    assert exc_info.value.field == "pic_url"


def test_music_hq_url_falls_back_to_music_url():
    payload = MusicReply("t", "d", "http://music", "thumb").to_payload()

    assert payload["Image"]["HQMusicUrl"] == "http://music"


def test_music_hq_url_kept_when_given():
    payload = MusicReply("t", "d", "http://music", "thumb", hq_music_url="http://hq").to_payload()

    assert payload["Image"]["HQMusicUrl"] == "http://hq"
    assert payload["Image"]["MusicUrl"] == "http://music"


def test_voice_and_music_nest_under_image_by_default():
    assert VoiceReply("m1").to_payload() == {"MsgType": "voice", "Image": {"MediaId": "m1"}}
    assert "Image" in MusicReply("t", "d", "u", "thumb").to_payload()


def test_voice_and_music_own_keys_without_legacy_media_keys():
    assert VoiceReply("m1").to_payload(legacy_media_keys=False) == {
        "MsgType": "voice",
        "Voice": {"MediaId": "m1"},
    }
    assert "Music" in MusicReply("t", "d", "u", "thumb").to_payload(legacy_media_keys=False)


def test_video_payload():
    assert VideoReply("m1", "t1").to_payload()["Video"] == {"MediaId": "m1", "ThumbMediaId": "t1"}


def test_required_fields():
    with pytest.raises(MissingRequiredFieldError):
        TextReply(None)
    with pytest.raises(MissingRequiredFieldError):
        VideoReply("m1", None)
    with pytest.raises(MissingRequiredFieldError):
        MusicReply("t", "d", "u", None)


def test_reply_base_is_abstract():
    with pytest.raises(TypeError):
        Reply()
