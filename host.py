# host.py
"""
The four entry points a media-browsing host calls, each returning JSON text.

    search_results(keyword)      -> [{"title", "image", "href"}, ...]
    extract_details(reference)   -> [{"description", "aliases", "airdate"}] or []
    extract_episodes(reference)  -> [{"href", "number"}, ...]
    extract_stream_url(reference) -> "https://..." or null
"""
from typing import List, Optional

from pydantic import TypeAdapter

from models import DetailRecord, Episode, SearchResult
from scraper import Extractor

_search_adapter = TypeAdapter(List[SearchResult])
_details_adapter = TypeAdapter(List[DetailRecord])
_episodes_adapter = TypeAdapter(List[Episode])
_stream_adapter = TypeAdapter(Optional[str])


async def search_results(keyword: str, extractor: Extractor) -> str:
    results = await extractor.search(keyword)
    return _search_adapter.dump_json(results).decode()


async def extract_details(reference: str, extractor: Extractor) -> str:
    details = await extractor.details(reference)
    return _details_adapter.dump_json(details).decode()


async def extract_episodes(reference: str, extractor: Extractor) -> str:
    episodes = await extractor.episodes(reference)
    return _episodes_adapter.dump_json(episodes).decode()


async def extract_stream_url(reference: str, extractor: Extractor) -> str:
    stream_url = await extractor.resolve_stream(reference)
    return _stream_adapter.dump_json(stream_url).decode()
