from bs4 import BeautifulSoup

from cld_loader.config import ImageConfig
from cld_loader.content import rewrite_html

BASE = "https://res.cloudinary.com/demo/image/upload/"

PAGE = f"""
<html>
  <head>
    <meta property="og:image" content="{BASE}v17/w_1200,c_fill/social.png">
    <meta name="twitter:image" content="{BASE}f_auto/q_auto/social.png">
    <meta name="description" content="{BASE}v17/not-an-image-tag.png">
    <link rel="preload" as="image" href="{BASE}v17/hero.jpg">
    <link rel="stylesheet" href="/styles.css">
  </head>
  <body>
    <img src="{BASE}v17/q_80/hero.jpg" width="300" alt="Hero">
    <img src="{BASE}logo.png" alt="Logo" srcset="{BASE}logo.png 1x">
    <img src="/assets/local.png" alt="Local">
  </body>
</html>
"""


def _parse(html):
    return BeautifulSoup(html, "html.parser")


def test_rewrites_img_tags():
    result = rewrite_html(PAGE)
    soup = _parse(result.html)
    hero, logo, local = soup.find_all("img")

    assert hero["src"] == BASE + "w_300/f_auto/q_auto/hero.jpg"
    assert hero["srcset"] == (
        BASE + "w_384/f_auto/q_auto/hero.jpg 1x, " + BASE + "w_640/f_auto/q_auto/hero.jpg 2x"
    )
    assert logo["src"] == BASE + "f_auto/q_auto/logo.png"
    assert logo["srcset"] == BASE + "logo.png 1x"
    assert local["src"] == "/assets/local.png"
    assert not local.has_attr("srcset")


def test_rewrites_preview_meta_and_preload():
    soup = _parse(rewrite_html(PAGE).html)
    og = soup.find("meta", attrs={"property": "og:image"})
    twitter = soup.find("meta", attrs={"name": "twitter:image"})
    description = soup.find("meta", attrs={"name": "description"})
    preload = soup.find("link", attrs={"as": "image"})

    assert og["content"] == BASE + "f_auto/q_auto/social.png"
    assert twitter["content"] == BASE + "f_auto/q_auto/social.png"
    assert description["content"] == BASE + "v17/not-an-image-tag.png"
    assert preload["href"] == BASE + "f_auto/q_auto/hero.jpg"


def test_reports_rewritten_images():
    result = rewrite_html(PAGE)
    originals = [image.original_src for image in result.images]
    assert len(result.images) == 5
    assert BASE + "v17/q_80/hero.jpg" in originals
    assert "/assets/local.png" not in originals
    assert result.images[0].alt_text == "Hero"


def test_explicit_width_overrides_attribute():
    config = ImageConfig(device_sizes=[640, 1280], image_sizes=[])
    soup = _parse(rewrite_html(PAGE, config=config, width=640).html)
    hero = soup.find("img")
    assert hero["src"] == BASE + "w_640/f_auto/q_auto/hero.jpg"
    assert hero["srcset"] == (
        BASE + "w_640/f_auto/q_auto/hero.jpg 1x, " + BASE + "w_1280/f_auto/q_auto/hero.jpg 2x"
    )


def test_html_without_cdn_images_is_unchanged():
    html = '<p><img src="https://example.com/a.png" alt="A"></p>'
    result = rewrite_html(html)
    assert result.images == []
    img = _parse(result.html).find("img")
    assert img["src"] == "https://example.com/a.png"
    assert not img.has_attr("srcset")


def test_no_srcset_when_config_has_no_sizes():
    config = ImageConfig(device_sizes=[], image_sizes=[])
    result = rewrite_html(f'<img src="{BASE}v1/a.jpg" alt="A">', config=config)
    img = _parse(result.html).find("img")
    assert img["src"] == BASE + "f_auto/q_auto/a.jpg"
    assert not img.has_attr("srcset")
    assert 'srcset=""' not in result.html


def test_untouched_markup_is_returned_verbatim():
    html = '<head><meta charset="utf-8"><link rel="icon" href="/favicon.ico"></head><img src="/a.png">'
    assert rewrite_html(html).html == html
