import httpx
import pytest


SITE = "https://ogomovies.com.pk"


def result_item(href="", image="", title=""):
    """One <div class="result-item"> block as rendered on the search page."""
    link = f'<a href="{href}">' if href else "<a>"
    img = f'<img src="{image}" alt="poster" />' if image else ""
    title_div = f'<div class="title"><a href="{href}">{title}</a></div>' if title else ""
    return (
        '<div class="result-item"><article>'
        f'<div class="image"><div class="thumbnail animation-2">{link}{img}</a></div></div>'
        f'<div class="details">{title_div}<div class="meta"><span class="year">2024</span></div></div>'
        "</article></div>"
    )


def make_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def search_page():
    return (
        '<html><body><div class="search-page">'
        + result_item(href=f"{SITE}/movies/foo-2024/", image="https://img.example/foo.jpg", title=" Foo ")
        + result_item(href=f"{SITE}/movies/broken-2023/", image="https://img.example/broken.jpg")
        + result_item(href=f"{SITE}/movies/bar-2022/", title="Bar")
        + "</div></body></html>"
    )


@pytest.fixture
def detail_page():
    return """
    <html><head>
    <meta property="og:url" content="https://ogomovies.com.pk/movies/foo-2024/" />
    <link rel="canonical" href="https://ogomovies.com.pk/movies/foo-canonical/" />
    </head><body>
    <div class="extra"><span class="date" itemprop="dateCreated">Mar. 01, 2024</span></div>
    <div id="info" class="sbox">
      <h2>Synopsis</h2>
      <div class="wp-content" itemprop="description">
        <p>A <b>hero</b> rises &amp; falls.</p>
        <p>Second paragraph.</p>
      </div>
      <div class="custom_fields"><b class="variante">Original title</b> <span class="valor"> Foo Original </span></div>
    </div>
    <div id="playex"><div class="play-box-iframe">
      <iframe class="metaframe rptss" src="https://player.example/embed/1" frameborder="0"></iframe>
      <iframe class="metaframe rptss" src="https://player.example/embed/2" frameborder="0"></iframe>
    </div></div>
    </body></html>
    """


@pytest.fixture
def series_page():
    return """
    <html><body><ul class="episodios">
      <li class="episodiotitle"><a href="https://ogomovies.com.pk/episodes/show-1x1/">Pilot</a>
        <div class="numerando"> 1 - 1 </div></li>
      <li class="episodiotitle"><a href="https://ogomovies.com.pk/episodes/show-1x2/">Second</a>
        <div class="numerando">1 - 2</div></li>
    </ul></body></html>
    """


@pytest.fixture(name="result_item")
def result_item_fixture():
    return result_item


@pytest.fixture
def mock_client():
    """Factory for an AsyncClient whose requests are answered by ``handler``."""
    return make_client
