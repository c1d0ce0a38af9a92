"""Internal link extraction tests."""

from src.extraction.document import HtmlDocument
from src.extraction.links import extract_links

from conftest import BASE_URL


def _links(body: str, **kwargs):
    return extract_links(HtmlDocument.parse(f"<body>{body}</body>"), BASE_URL, **kwargs)


def test_product_page_links(product_document):
    links = extract_links(product_document, BASE_URL)

    assert [(link.url, link.category, link.text) for link in links] == [
        ("https://example.com/", "navigation", "/"),
        ("https://example.com/about", "navigation", "About us"),
        ("https://example.com/products", "navigation", "Products"),
        ("https://example.com/contact", "footer", "Contact"),
    ]
    assert all(link.is_internal for link in links)


def test_skipped_schemes_and_fragments():
    links = _links(
        '<a href="#top">Top</a>'
        '<a href="javascript:void(0)">JS</a>'
        '<a href="mailto:hi@example.com">Mail</a>'
        '<a href="tel:+81-3-0000">Call</a>'
        '<a href="ftp://example.com/file">FTP</a>'
        '<a href="/pricing#plans">Plans</a>'
        '<a href="/pricing">Pricing</a>'
    )
    assert [(link.url, link.text) for link in links] == [("https://example.com/pricing", "Plans")]


def test_subdomains_are_internal():
    links = _links(
        '<a href="https://blog.example.com/post">Blog</a>'
        '<a href="https://notexample.com/">Other</a>'
        '<a href="https://twitter.com/acme">Twitter</a>'
    )
    assert [link.url for link in links] == ["https://blog.example.com/post"]


def test_category_from_path_hint():
    links = _links('<div><a href="/company/info">Company</a><a href="/cart">Cart</a></div>')
    assert {link.url: link.category for link in links} == {
        "https://example.com/company/info": "content",
        "https://example.com/cart": "other",
    }


def test_sorted_by_category_then_url_length():
    links = _links(
        '<footer><a href="/legal">Legal</a></footer>'
        '<main><a href="/a-long-article-path">Article</a><a href="/post">Post</a></main>'
        '<nav><a href="/shop">Shop</a></nav>'
    )
    assert [(link.category, link.url) for link in links] == [
        ("navigation", "https://example.com/shop"),
        ("content", "https://example.com/post"),
        ("content", "https://example.com/a-long-article-path"),
        ("footer", "https://example.com/legal"),
    ]


def test_text_is_collapsed_and_limit_applies():
    body = "".join(f'<a href="/p{i}">  Page\n {i} </a>' for i in range(40))
    links = _links(body, limit=10)

    assert len(links) == 10
    assert links[0].text == "Page 0"


def test_category_ignores_the_anchor_own_class():
    links = _links('<main><a class="menu" href="/menu-item">Menu item</a></main><a class="footer" href="/x">X</a>')
    assert {link.url: link.category for link in links} == {
        "https://example.com/menu-item": "content",
        "https://example.com/x": "other",
    }
