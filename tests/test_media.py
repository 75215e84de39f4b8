"""Tests for image and video extraction rules."""

from feedlist.media import IMAGE_RULES, extract_image, extract_video, resolve


def _attrs(**values):
    return {"_text": "", "_attributes": values}


def test_direct_image_field_wins():
    item = {"image": "direct.png", "media:thumbnail": _attrs(url="thumb.jpg")}
    assert extract_image(item) == "direct.png"


def test_thumbnail_beats_content():
    item = {
        "media:content": _attrs(url="content.jpg", type="image/jpeg"),
        "media:thumbnail": _attrs(url="thumb.jpg"),
    }
    assert resolve(item, IMAGE_RULES) == ("thumb.jpg", "thumbnail")


def test_underscore_dialect_is_accepted():
    assert extract_image({"media_thumbnail": _attrs(url="u.jpg")}) == "u.jpg"
    assert extract_image({"media_content": _attrs(url="c.png", type="image/png")}) == "c.png"


def test_content_matches_jpeg_extension_without_type():
    assert extract_image({"media:content": _attrs(url="https://cdn.example.com/p.jpeg")}) == (
        "https://cdn.example.com/p.jpeg"
    )


def test_repeated_content_uses_first_entry():
    item = {"media:content": [_attrs(url="one.jpg", type="image/jpeg"), _attrs(url="two.jpg")]}
    assert extract_image(item) == "one.jpg"


def test_enclosure_image():
    assert extract_image({"enclosure": _attrs(url="e.gif", type="image/gif")}) == "e.gif"


def test_raw_thumbnail_text():
    assert extract_image({"media:thumbnail": "t.jpg"}) == "t.jpg"


def test_podcast_image_href():
    assert extract_image({"itunes:image": _attrs(href="pod.png")}) == "pod.png"
    assert extract_image({"itunes_image": {"href": "pod2.png"}}) == "pod2.png"


def test_deep_search_fallback_finds_nested_thumbnail():
    item = {"title": "x", "media:group": {"media:thumbnail": _attrs(url="deep.jpg")}}
    assert extract_image(item) == "deep.jpg"


def test_malformed_nodes_degrade_to_no_match():
    item = {
        "media:thumbnail": {"_attributes": "oops"},
        "media:content": {"_attributes": None},
        "enclosure": 5,
        "itunes:image": ["not", "a", "mapping"],
    }
    assert extract_image(item) == ""
    assert extract_video(item) == ""
    assert extract_image(None) == ""
    assert extract_image("just text") == ""


def test_video_rules():
    assert extract_video({"video": "v.mp4"}) == "v.mp4"
    assert extract_video({"enclosure": _attrs(url="e.mp4", type="video/mp4")}) == "e.mp4"
    assert extract_video({"media_content": _attrs(url="c.webm", type="video/webm")}) == "c.webm"


def test_video_content_is_not_an_image():
    item = {"media:content": _attrs(url="clip.mp4", type="video/mp4")}
    assert extract_image(item) == ""
    assert extract_video(item) == "clip.mp4"


def test_video_has_no_deep_search():
    item = {"media:group": {"media:content": _attrs(url="deep.mp4", type="video/mp4")}}
    assert extract_video(item) == ""
