# parsing.py
"""
Pattern-based field extractors for ogomovies pages.

Each field has its own extractor so that a miss on one field never affects
the others. Where the page offers more than one place to find a value the
extractor walks an explicit fallback chain, in order, and stops at the first
hit. Nothing here raises on a pattern miss; a missing field comes back as an
empty string, None, or an empty list.
"""
from bs4 import BeautifulSoup
import logging
import re
from typing import List, Optional
from urllib.parse import urlsplit

from config import MAX_SEARCH_RESULTS, NOT_AVAILABLE, STREAM_FRAME_MARKER
from models import DetailRecord, Episode, SearchResult

logger = logging.getLogger(__name__)

# Search results page: one <div class="result-item"> ... </article> block per hit
RESULT_ITEM_RE = re.compile(r'<div class="result-item">[\s\S]*?</article>')
RESULT_HREF_RE = re.compile(r'<a\s+href="([^"]+)"')
RESULT_IMAGE_RE = re.compile(r'<img[^>]+src="([^"]+)"')
RESULT_TITLE_RE = re.compile(r'<div\s+class="title">\s*<a[^>]*>([^<]+)</a>')

# Detail page fields
SYNOPSIS_RE = re.compile(
    r'<h2>\s*Synopsis\s*</h2>[\s\S]*?<div[^>]*itemprop="description"[^>]*>\s*<p>([\s\S]*?)</p>',
    re.IGNORECASE,
)
ORIGINAL_TITLE_RE = re.compile(
    r'<b[^>]*>\s*Original\s+title\s*</b>\s*<span[^>]*>([^<]+)</span>',
    re.IGNORECASE,
)
RELEASE_DATE_RE = re.compile(r'<span\s+class="date"[^>]*>([^<]+)</span>', re.IGNORECASE)

# Episode list items and canonical URL sources
EPISODE_ITEM_RE = re.compile(
    r'<li[^>]*class="episodiotitle"[\s\S]*?<a[^>]+href="([^"]+)"[\s\S]*?'
    r'<div[^>]*class="numerando"[^>]*>\s*([^<]+)\s*</div>',
    re.IGNORECASE,
)
OG_URL_RE = re.compile(r'<meta\s+property="og:url"\s+content="([^"]+)"', re.IGNORECASE)
CANONICAL_LINK_RE = re.compile(r'<link\s+rel="canonical"\s+href="([^"]+)"', re.IGNORECASE)

# Poster image on a movie page
OG_IMAGE_RE = re.compile(r'<meta\s+property="og:image"\s+content="([^"]+)"', re.IGNORECASE)

# Player frames
ANY_FRAME_RE = re.compile(r'<iframe[^>]+src="([^"]+)"', re.IGNORECASE)

YEAR_RE = re.compile(r'\b(?:19|20)\d{2}\b')


def marker_frame_pattern(marker: str = STREAM_FRAME_MARKER) -> re.Pattern:
    return re.compile(
        r'<iframe[^>]+class="[^"]*' + re.escape(marker) + r'[^"]*"[^>]+src="([^"]+)"',
        re.IGNORECASE,
    )


MARKER_FRAME_RE = marker_frame_pattern()


def _first_group(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ''


# Normalization helpers

def strip_markup(fragment: str) -> str:
    """Remove tags and decode entities from an HTML fragment."""
    if not fragment:
        return ''
    return BeautifulSoup(fragment, 'html.parser').get_text().strip()


def collapse_whitespace(text: str) -> str:
    return re.sub(r'\s+', ' ', text or '').strip()


def extract_movie_slug_from_url(url: str) -> Optional[str]:
    """
    Extract the content slug from an ogomovies page URL.
    Examples:
        https://ogomovies.com.pk/movies/foo-2024/ -> foo-2024
        https://ogomovies.com.pk/tvshows/bar/?ref=x -> bar
    """
    if not url:
        return None
    # Remove query parameters and fragments
    url = url.strip().split('?')[0].split('#')[0]
    match = re.search(r'/movies/([^/]+)', url)
    if match:
        return match.group(1)
    segments = [segment for segment in urlsplit(url).path.split('/') if segment]
    return segments[-1] if segments else None


def extract_year_from_slug(slug: str) -> str:
    """Return the last four-digit year in a slug, or '' when there is none."""
    years = YEAR_RE.findall(slug or '')
    return years[-1] if years else ''


def build_detail_record(description: str, aliases: str, airdate: str,
                        description_sentinel: str = NOT_AVAILABLE) -> DetailRecord:
    return DetailRecord(
        description=description or description_sentinel,
        aliases=aliases or NOT_AVAILABLE,
        airdate=airdate or NOT_AVAILABLE,
    )


# Search results

def parse_search_results(html: str) -> List[SearchResult]:
    results = []
    for item_html in RESULT_ITEM_RE.findall(html):
        href = _first_group(RESULT_HREF_RE, item_html).strip()
        image = _first_group(RESULT_IMAGE_RE, item_html).strip()
        title = _first_group(RESULT_TITLE_RE, item_html).strip()
        if not href or not title:
            logger.debug(f"Skipping result item due to missing title or URL: {href!r} {title!r}")
            continue
        results.append(SearchResult(title=title, image=image, href=href))
        if len(results) >= MAX_SEARCH_RESULTS:
            break
    return results


def extract_poster(html: str) -> str:
    return _first_group(OG_IMAGE_RE, html).strip()


# Details

def extract_description(html: str) -> str:
    return strip_markup(_first_group(SYNOPSIS_RE, html))


def extract_original_title(html: str) -> str:
    return _first_group(ORIGINAL_TITLE_RE, html).strip()


def extract_release_date(html: str) -> str:
    return _first_group(RELEASE_DATE_RE, html).strip()


def parse_details(html: str) -> List[DetailRecord]:
    description = extract_description(html)
    aliases = extract_original_title(html)
    airdate = extract_release_date(html)
    if not (description or aliases or airdate):
        logger.debug("No detail fields found on page")
        return []
    return [build_detail_record(description, aliases, airdate)]


# Episodes

def extract_canonical_url(html: str) -> str:
    """og:url first, then <link rel="canonical">."""
    for pattern in (OG_URL_RE, CANONICAL_LINK_RE):
        url = _first_group(pattern, html).strip()
        if url:
            return url
    return ''


def parse_episode_list(html: str) -> List[Episode]:
    return [
        Episode(href=href, number=number.strip())
        for href, number in EPISODE_ITEM_RE.findall(html)
    ]


def parse_episodes(html: str) -> List[Episode]:
    episodes = parse_episode_list(html)
    if episodes:
        return episodes
    # No episode list: treat the page as a single movie
    url = extract_canonical_url(html)
    if url:
        logger.debug(f"No episode list found, using canonical URL: {url}")
        return [Episode(href=url, number='1')]
    return []


# Stream

def extract_marker_frame_src(html: str, pattern: re.Pattern = MARKER_FRAME_RE) -> Optional[str]:
    return _first_group(pattern, html) or None


def extract_first_frame_src(html: str) -> Optional[str]:
    return _first_group(ANY_FRAME_RE, html) or None


def parse_stream_url(html: str) -> Optional[str]:
    stream_url = extract_marker_frame_src(html)
    if stream_url:
        return stream_url
    logger.debug("No player iframe found, falling back to the first iframe")
    return extract_first_frame_src(html)
