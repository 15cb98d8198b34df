#  app.py
import logging
from fastapi import FastAPI, HTTPException, Depends, Path, Query, Request
from typing import List, Optional
from models import DetailRecord, Episode, ErrorResponse, SearchResult, StreamTarget
from config import EXTRACTOR_MODE
from scraper import Extractor, get_extractor, get_http_client
from httpx import AsyncClient

# Configure logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Ogomovies Metadata API",
    description="Search results, movie details, episodes and stream URLs extracted from ogomovies.com.pk, either through its REST API or from its HTML pages.",
    version="1.0.0"
)

# Modes that fetch pages themselves; "html" needs the page in the request body
NETWORK_MODES = {'api', 'site'}
HTML_OPERATIONS = {'search', 'details', 'episodes', 'stream'}

def resolve_extractor(mode: Optional[str], client: AsyncClient) -> Extractor:
    mode = (mode or EXTRACTOR_MODE).strip().lower()
    if mode not in NETWORK_MODES:
        raise HTTPException(status_code=400, detail=f"Invalid mode. Supported modes: {', '.join(sorted(NETWORK_MODES))}")
    return get_extractor(mode, client)

# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    return {
        "message": "Ogomovies Metadata API",
        "version": "1.0.0",
        "default_mode": EXTRACTOR_MODE,
        "endpoints": {
            "search": "/search?keyword={keyword}&mode={api|site}",
            "details": "/details?url={url}&mode={api|site}",
            "episodes": "/episodes?url={url}&mode={api|site}",
            "stream": "/stream?url={url}&mode={api|site}",
            "html": "POST /html/{search|details|episodes|stream} with the page HTML as body"
        },
        "documentation": "/docs"
    }

@app.get(
    "/search",
    response_model=List[SearchResult],
    responses={400: {"model": ErrorResponse, "description": "Invalid mode"}},
    summary="Search for movies",
    description="Search the catalog by keyword. At most 10 results are returned. Example: `?keyword=Dune&mode=api`"
)
async def search(
    keyword: str = Query(..., description="Search keyword"),
    mode: Optional[str] = Query(None, description="Extractor mode: api or site"),
    client: AsyncClient = Depends(get_http_client)
):
    extractor = resolve_extractor(mode, client)
    return await extractor.search(keyword)

@app.get(
    "/details",
    response_model=List[DetailRecord],
    responses={400: {"model": ErrorResponse, "description": "Invalid mode"}},
    summary="Get movie details",
    description="Description, original title and release date for a movie page URL. Returns zero or one record."
)
async def details(
    url: str = Query(..., description="Movie page URL"),
    mode: Optional[str] = Query(None, description="Extractor mode: api or site"),
    client: AsyncClient = Depends(get_http_client)
):
    extractor = resolve_extractor(mode, client)
    return await extractor.details(url)

@app.get(
    "/episodes",
    response_model=List[Episode],
    responses={400: {"model": ErrorResponse, "description": "Invalid mode"}},
    summary="List episodes",
    description="Episode links for a page URL. Movies yield a single episode numbered 1."
)
async def episodes(
    url: str = Query(..., description="Movie or series page URL"),
    mode: Optional[str] = Query(None, description="Extractor mode: api or site"),
    client: AsyncClient = Depends(get_http_client)
):
    extractor = resolve_extractor(mode, client)
    return await extractor.episodes(url)

@app.get(
    "/stream",
    response_model=StreamTarget,
    responses={400: {"model": ErrorResponse, "description": "Invalid mode"}},
    summary="Resolve the stream URL",
    description="Source URL of the page's player iframe, or null when the page has none."
)
async def stream(
    url: str = Query(..., description="Movie or episode page URL"),
    mode: Optional[str] = Query(None, description="Extractor mode: api or site"),
    client: AsyncClient = Depends(get_http_client)
):
    extractor = resolve_extractor(mode, client)
    return StreamTarget(url=await extractor.resolve_stream(url))

@app.post(
    "/html/{operation}",
    responses={400: {"model": ErrorResponse, "description": "Invalid operation"}},
    summary="Extract from posted HTML",
    description="Run one extraction over an HTML document sent as the request body. Example: `POST /html/episodes`"
)
async def extract_from_html(
    request: Request,
    operation: str = Path(..., description="One of search, details, episodes, stream")
):
    operation = operation.strip().lower()
    if operation not in HTML_OPERATIONS:
        raise HTTPException(status_code=400, detail=f"Invalid operation. Supported operations: {', '.join(sorted(HTML_OPERATIONS))}")

    html = (await request.body()).decode('utf-8', errors='replace')
    logger.info(f"Processing HTML {operation} request ({len(html)} characters)")
    extractor = get_extractor("html")
    if operation == 'search':
        return await extractor.search(html)
    if operation == 'details':
        return await extractor.details(html)
    if operation == 'episodes':
        return await extractor.episodes(html)
    return StreamTarget(url=await extractor.resolve_stream(html))
