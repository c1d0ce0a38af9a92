"""BeautifulSoup-backed document adapter tests."""

from src.extraction.document import HtmlDocument

PAGE = """
<html>
<head><title>Shop</title></head>
<body>
  <header class="site-header  top">
    <img class="brand-logo big" alt="Company LOGO" src="/logo.png">
  </header>
  <nav>Menu</nav>
  <main><p>Hello <b>world</b></p></main>
</body>
</html>
"""


def test_attribute_contains_selectors():
    document = HtmlDocument.parse(PAGE)
    assert len(document.select('[class*="logo"]')) == 1
    assert len(document.select('img[alt*="logo" i]')) == 1
    assert document.select('img[alt*="logo"]') == []


def test_class_attribute_is_raw_string():
    document = HtmlDocument.parse(PAGE)
    assert document.first_attr("header", "class") == "site-header  top"
    assert document.select_one(".top").tag == "header"


def test_missing_values():
    document = HtmlDocument.parse(PAGE)
    assert document.select_one("article") is None
    assert document.first_attr("article", "class") is None
    assert document.first_text("article") == ""
    assert document.first_attr("img", "width") is None


def test_closest_includes_self_and_ancestors():
    document = HtmlDocument.parse(PAGE)
    img = document.select_one("img")

    assert img.closest("header").tag == "header"
    assert img.closest("img") == img
    assert img.closest("footer") is None


def test_parent_stops_at_root():
    document = HtmlDocument.parse(PAGE)
    assert document.select_one("b").parent().tag == "p"
    assert document.select_one("html").parent() is None


def test_invalid_selector_matches_nothing():
    document = HtmlDocument.parse(PAGE)
    assert document.select("img[") == []
    assert document.select_one("img[") is None
    assert document.select_one("img").closest("header[") is None


def test_text_without_leaves_tree_untouched():
    document = HtmlDocument.parse(PAGE)

    stripped = document.text_without("body", ["nav", "header"])

    assert "Menu" not in stripped
    assert "Hello world" in stripped
    assert "Menu" in document.first_text("body")
    assert document.select_one("nav") is not None


def test_text_without_missing_root():
    document = HtmlDocument.parse("<p>x</p>")
    assert document.text_without("article", ["nav"]) == ""
