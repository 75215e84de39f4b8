"""Tests for XML parsing and element conversion."""

from feedlist.xmlnode import element_to_dict, find_elements, parse_xml


def test_element_to_dict_conversion_rules():
    root = parse_xml(
        b"""<item xmlns:media="http://search.yahoo.com/mrss/">
          <title>Hello</title>
          <category>a</category>
          <category>b</category>
          <guid isPermaLink="false">id-1</guid>
          <description><![CDATA[<b>bold</b>]]></description>
          <media:group><media:thumbnail url="t.jpg" width="10"/></media:group>
        </item>"""
    )
    data = element_to_dict(root)

    assert data["title"] == "Hello"
    assert data["category"] == ["a", "b"]
    assert data["guid"] == {"_text": "id-1", "_attributes": {"ispermalink": "false"}}
    assert data["description"] == "<b>bold</b>"
    assert data["media:group"]["media:thumbnail"]["_attributes"] == {"url": "t.jpg", "width": "10"}


def test_empty_and_attribute_only_elements():
    root = parse_xml('<item><title/><enclosure url="a.mp3"/><tag>x</tag><tag/></item>')
    assert element_to_dict(root) == {
        "title": "",
        "enclosure": {"_text": "", "_attributes": {"url": "a.mp3"}},
        "tag": ["x", ""],
    }


def test_find_elements_matches_qualified_names_in_document_order():
    root = parse_xml(
        b"""<rss xmlns:media="http://search.yahoo.com/mrss/"><channel>
          <item><media:content url="1"/></item>
          <item><media:content url="2"/></item>
        </channel></rss>"""
    )

    assert len(find_elements(root, "item")) == 2
    assert [el.get("url") for el in find_elements(root, "media:content")] == ["1", "2"]
    assert find_elements(root, "content") == []


def test_fragment_without_single_root_is_wrapped():
    root = parse_xml("<item>1</item><item>2</item>")
    assert root.tag == "document"
    assert len(find_elements(root, "item")) == 2


def test_str_payload_with_encoding_declaration():
    root = parse_xml('<?xml version="1.0" encoding="ISO-8859-1"?><rss><title>Café</title></rss>')
    assert element_to_dict(root) == {"title": "Café"}


def test_unparseable_payloads_return_none():
    assert parse_xml("") is None
    assert parse_xml(b"   ") is None
    assert parse_xml("plain words") is None
