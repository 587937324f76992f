"""
Opedia Blogs API — Sanitization Unit Tests
============================================

What:  HTML stripping, escaping, email normalization and page parsing.
"""

import pytest

from opedia_blogs.sanitize import escape_html, normalize_email, strip_html
from opedia_blogs.services.blog_service import parse_page


class TestStripHtml:

    def test_script_element_removed_with_content(self):
        assert strip_html("<script>x</script>") == ""

    def test_disallowed_tag_removed_text_kept(self):
        assert strip_html("<iframe src='x'></iframe>Hello") == "Hello"

    def test_event_handler_attribute_dropped(self):
        cleaned = strip_html('<b onclick="steal()">bold</b>')
        assert "onclick" not in cleaned
        assert "bold" in cleaned

    def test_plain_text_unchanged(self):
        assert strip_html("Just words") == "Just words"

    def test_none_becomes_empty(self):
        assert strip_html(None) == ""


class TestEscapeHtml:

    def test_markup_characters_escaped(self):
        assert escape_html("<b>") == "&lt;b&gt;"

    def test_quotes_and_slashes_escaped(self):
        assert escape_html("a'b\"c/d\\e`f") == "a&#x27;b&quot;c&#x2F;d&#x5C;e&#96;f"

    def test_ampersand_escaped_once(self):
        assert escape_html("&lt;") == "&amp;lt;"


class TestNormalizeEmail:

    @pytest.mark.parametrize("raw, expected", [
        ("John.Doe+news@GoogleMail.com", "johndoe@gmail.com"),
        ("j.d@gmail.com", "jd@gmail.com"),
        ("Someone+tag@Outlook.com", "someone@outlook.com"),
        ("jane-promo@yahoo.com", "jane@yahoo.com"),
        ("Me+x@icloud.com", "me@icloud.com"),
        ("ivan@ya.ru", "ivan@yandex.ru"),
        ("Someone.Else+tag@Example.ORG", "someone.else+tag@example.org"),
    ])
    def test_normalization(self, raw, expected):
        assert normalize_email(raw) == expected


class TestParsePage:

    @pytest.mark.parametrize("raw, expected", [
        (None, 1),
        ("", 1),
        ("abc", 1),
        ("0", 1),
        ("1", 1),
        ("2", 2),
        ("3abc", 3),
        (" 4", 4),
        ("-2", -2),
    ])
    def test_parse_page(self, raw, expected):
        assert parse_page(raw) == expected
