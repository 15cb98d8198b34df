# scraper.py
"""
Metadata extractors for the ogomovies catalog (ogomovies.com.pk).

Three interchangeable backends implement the same four operations:
- ApiExtractor: queries the WordPress REST API and scrapes posters from movie pages
- HtmlExtractor: works on pre-fetched HTML only, no network access
- SiteExtractor: fetches the site's pages itself and hands them to HtmlExtractor

Every public operation degrades to an empty or default value instead of raising.
"""
from httpx import AsyncClient, AsyncHTTPTransport, Response
from urllib.parse import quote
from dataclasses import dataclass
import logging
import asyncio
from typing import Callable, List, Optional, Protocol

from config import (
    HTTP_RETRIES,
    HTTP_TIMEOUT,
    LOG_LEVEL,
    MAX_SEARCH_RESULTS,
    MOVIES_ENDPOINT,
    NO_DESCRIPTION,
    SEARCH_ENDPOINT,
    SEARCH_SUBTYPE,
    SITE_BASE_URL,
    USER_AGENT,
)
from errors import degrade_on_failure
from models import DetailRecord, Episode, SearchResult
from parsing import (
    build_detail_record,
    collapse_whitespace,
    extract_marker_frame_src,
    extract_movie_slug_from_url,
    extract_poster,
    extract_year_from_slug,
    parse_details,
    parse_episodes,
    parse_search_results,
    parse_stream_url,
    strip_markup,
)

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Dependency to provide HTTP client
async def get_http_client():
    transport = AsyncHTTPTransport(retries=HTTP_RETRIES)
    client = AsyncClient(
        transport=transport,
        headers={"User-Agent": USER_AGENT},
        timeout=HTTP_TIMEOUT,
        follow_redirects=True
    )
    try:
        yield client
    finally:
        await client.aclose()

async def fetch(client: AsyncClient, url: str) -> Response:
    logger.info(f"Fetching URL: {url}")
    response = await client.get(url)
    response.raise_for_status()
    return response

def _rendered(post: dict, key: str) -> str:
    """Plain text of a REST API ``{key: {rendered: ...}}`` field."""
    field = post.get(key) or {}
    if isinstance(field, dict):
        field = field.get('rendered') or ''
    return collapse_whitespace(strip_markup(str(field)))


class Extractor(Protocol):
    name: str

    async def search(self, query: str) -> List[SearchResult]: ...

    async def details(self, reference: str) -> List[DetailRecord]: ...

    async def episodes(self, reference: str) -> List[Episode]: ...

    async def resolve_stream(self, reference: str) -> Optional[str]: ...


class ApiExtractor:
    """Search and details come from the REST API; posters and streams from the movie pages."""

    name = "api"

    def __init__(self, client: AsyncClient):
        self.client = client

    @degrade_on_failure(list, "api search")
    async def search(self, query: str) -> List[SearchResult]:
        search_term = (query or '').strip()
        if not search_term:
            return []

        url = f"{SEARCH_ENDPOINT}?search={quote(search_term)}&subtype={SEARCH_SUBTYPE}&per_page={MAX_SEARCH_RESULTS}"
        response = await fetch(self.client, url)
        hits = response.json()
        if not isinstance(hits, list):
            logger.warning(f"Unexpected search payload for '{search_term}': {type(hits).__name__}")
            return []

        # gather keeps the API's ordering regardless of which poster lookup finishes first
        built = await asyncio.gather(*[self._build_search_result(hit) for hit in hits[:MAX_SEARCH_RESULTS]])
        results = [result for result in built if result is not None]
        logger.info(f"Found {len(results)} results for search term: {search_term}")
        return results

    @degrade_on_failure(lambda: None, "api search item")
    async def _build_search_result(self, hit: dict) -> Optional[SearchResult]:
        title = hit.get('title') or ''
        if isinstance(title, dict):
            title = title.get('rendered') or ''
        title = collapse_whitespace(strip_markup(str(title)))
        href = (hit.get('url') or '').strip()
        if not title or not href:
            logger.debug(f"Skipping search hit due to missing title or URL: {hit}")
            return None
        image = await self._fetch_poster(href)
        return SearchResult(title=title, image=image, href=href)

    @degrade_on_failure(str, "poster lookup")
    async def _fetch_poster(self, url: str) -> str:
        response = await fetch(self.client, url)
        return extract_poster(response.text)

    @degrade_on_failure(lambda: [build_detail_record('', '', '', NO_DESCRIPTION)], "api details")
    async def details(self, reference: str) -> List[DetailRecord]:
        description = aliases = airdate = ''
        slug = extract_movie_slug_from_url(reference)
        if slug:
            airdate = extract_year_from_slug(slug)
            post = await self._fetch_post(slug)
            if post is not None:
                description = _rendered(post, 'content')
                aliases = _rendered(post, 'title')
        else:
            logger.debug(f"No slug in reference: {reference!r}")
        return [build_detail_record(description, aliases, airdate, NO_DESCRIPTION)]

    @degrade_on_failure(lambda: None, "post lookup")
    async def _fetch_post(self, slug: str) -> Optional[dict]:
        response = await fetch(self.client, f"{MOVIES_ENDPOINT}?slug={quote(slug)}")
        posts = response.json()
        if isinstance(posts, list) and posts and isinstance(posts[0], dict):
            return posts[0]
        logger.debug(f"No post found for slug: {slug}")
        return None

    @degrade_on_failure(list, "api episodes")
    async def episodes(self, reference: str) -> List[Episode]:
        # Every title on the site is a single movie
        href = (reference or '').strip()
        if not href:
            return []
        return [Episode(href=href, number='1')]

    @degrade_on_failure(lambda: None, "api stream")
    async def resolve_stream(self, reference: str) -> Optional[str]:
        url = (reference or '').strip()
        if not url:
            return None
        response = await fetch(self.client, url)
        stream_url = extract_marker_frame_src(response.text)
        if not stream_url:
            logger.info(f"No player iframe found on {url}")
        return stream_url


class HtmlExtractor:
    """Every argument is an HTML document that the caller already fetched."""

    name = "html"

    @degrade_on_failure(list, "html search")
    async def search(self, query: str) -> List[SearchResult]:
        return parse_search_results(query)

    @degrade_on_failure(list, "html details")
    async def details(self, reference: str) -> List[DetailRecord]:
        return parse_details(reference)

    @degrade_on_failure(list, "html episodes")
    async def episodes(self, reference: str) -> List[Episode]:
        return parse_episodes(reference)

    @degrade_on_failure(lambda: None, "html stream")
    async def resolve_stream(self, reference: str) -> Optional[str]:
        return parse_stream_url(reference)


class SiteExtractor:
    """Fetches ogomovies pages and runs the HTML extractors over them."""

    name = "site"

    def __init__(self, client: AsyncClient, html_extractor: Optional[HtmlExtractor] = None):
        self.client = client
        self.html = html_extractor or HtmlExtractor()

    async def _fetch_page(self, url: str) -> str:
        response = await fetch(self.client, url)
        return response.text

    @degrade_on_failure(list, "site search")
    async def search(self, query: str) -> List[SearchResult]:
        search_term = (query or '').strip()
        if not search_term:
            return []
        html = await self._fetch_page(f"{SITE_BASE_URL}/?s={quote(search_term)}")
        results = await self.html.search(html)
        logger.info(f"Found {len(results)} results for search term: {search_term}")
        return results

    @degrade_on_failure(list, "site details")
    async def details(self, reference: str) -> List[DetailRecord]:
        url = (reference or '').strip()
        if not url:
            return []
        return await self.html.details(await self._fetch_page(url))

    @degrade_on_failure(list, "site episodes")
    async def episodes(self, reference: str) -> List[Episode]:
        url = (reference or '').strip()
        if not url:
            return []
        episodes = await self.html.episodes(await self._fetch_page(url))
        if not episodes:
            # The page resolved but declares no canonical URL
            return [Episode(href=url, number='1')]
        return episodes

    @degrade_on_failure(lambda: None, "site stream")
    async def resolve_stream(self, reference: str) -> Optional[str]:
        url = (reference or '').strip()
        if not url:
            return None
        return await self.html.resolve_stream(await self._fetch_page(url))


@dataclass(frozen=True)
class ExtractorEntry:
    name: str
    build: Callable[[Optional[AsyncClient]], Extractor]


EXTRACTORS = {
    "api": ExtractorEntry(name="api", build=ApiExtractor),
    "site": ExtractorEntry(name="site", build=SiteExtractor),
    "html": ExtractorEntry(name="html", build=lambda client=None: HtmlExtractor()),
}


def get_extractor(mode: str, client: Optional[AsyncClient] = None) -> Extractor:
    entry = EXTRACTORS.get((mode or '').strip().lower())
    if not entry:
        raise ValueError(f"Unknown extractor mode: {mode}")
    return entry.build(client)
