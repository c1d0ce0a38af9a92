"""Fixtures: settings, a sample product page and mock HTTP transports."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from src.config import Settings
from src.extraction.document import HtmlDocument
from src.extraction.engine import ExtractionEngine
from src.extraction.fetcher import PageFetcher

BASE_URL = "https://example.com/shop/"

PRODUCT_PAGE = """\
<!doctype html>
<html>
<head>
  <title>Acme Coffee Roasters</title>
  <meta name="description" content="Small-batch coffee roasted every morning in Kyoto.">
  <meta property="og:title" content="Acme Coffee">
  <meta property="og:image" content="/media/og-cover.jpg">
  <meta name="theme-color" content="#1e3a8a">
  <link rel="stylesheet" href="https://fonts.example.com/css?accent=#e76f51">
  <style>
    .cta { background: #2a9d8f; color: #fff; }
    .card { border-color: #f60; }
  </style>
</head>
<body>
  <header class="site-header" style="background-color: rgb(38, 70, 83)">
    <a href="/"><img class="site-logo" src="/assets/site-logo.png" alt="Acme" width="160" height="40"></a>
    <nav><a href="/about">About us</a> <a href="/products">Products</a></nav>
  </header>
  <main>
    <h1>Fresh coffee, delivered</h1>
    <h2>Roasted this morning</h2>
    <div class="hero-banner">
      <img src="/media/hero.jpg" alt="Beans on a table" width="1200" height="600">
    </div>
    <p>Our beans are roasted in small batches and shipped the same day. Coffee lovers
       and busy students alike rely on our subscription for their daily cup of coffee.
       Plans start at $25 per month or ¥1,980 for the trial box.</p>
    <ul>
      <li>Free shipping on every order</li>
      <li>Cancel anytime</li>
      <li>Roasted within 24 hours of shipping</li>
    </ul>
    <img src="/media/gallery-1.jpg" alt="">
    <img src="/media/loading.gif" data-src="/media/gallery-2.jpg" alt="Cup of coffee">
    <img src="https://lorempixel.com/400/200/food.jpg" alt="Food">
    <img src="/media/cup.jpg" alt="No image found">
    <svg><path fill="#e9c46a" stroke="currentColor"></path><rect fill="none"></rect></svg>
  </main>
  <footer><a href="/contact">Contact</a> <a href="https://twitter.com/acme">Twitter</a></footer>
</body>
</html>
"""


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def product_document() -> HtmlDocument:
    return HtmlDocument.parse(PRODUCT_PAGE)


def html_transport(html: str, status_code: int = 200) -> httpx.MockTransport:
    """Transport that serves *html* for every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=html.encode("utf-8"),
            headers={"content-type": "text/html; charset=utf-8"},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def make_engine(settings: Settings) -> Callable[[httpx.AsyncBaseTransport], ExtractionEngine]:
    def factory(transport: httpx.AsyncBaseTransport) -> ExtractionEngine:
        fetcher = PageFetcher.from_settings(settings, transport=transport)
        return ExtractionEngine(settings, fetcher=fetcher)

    return factory
