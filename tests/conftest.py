import pytest


RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Example</title>
    <item>
      <title>First</title>
      <description>&lt;p&gt;Hello &amp;amp; bye&lt;img src="x.jpg"/&gt;&lt;/p&gt;</description>
      <media:thumbnail url="a.jpg"/>
    </item>
    <item>
      <title>Second</title>
      <description>plain</description>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def rss_bytes():
    return RSS
