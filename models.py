# models.py
from pydantic import BaseModel, Field
from typing import Optional

class SearchResult(BaseModel):
    title: str = Field(..., description="Movie title")
    image: str = Field(default="", description="Poster URL, empty when none was found")
    href: str = Field(..., description="Movie page URL")

    class Config:
        from_attributes = True

class DetailRecord(BaseModel):
    description: str = Field(..., description="Plain-text synopsis")
    aliases: str = Field(..., description="Original or alternate title")
    airdate: str = Field(..., description="Release date or year")

    class Config:
        from_attributes = True

class Episode(BaseModel):
    href: str = Field(..., description="Episode page URL")
    number: str = Field(..., description="Episode number label")

    class Config:
        from_attributes = True

class StreamTarget(BaseModel):
    url: Optional[str] = Field(default=None, description="Playable stream URL, null when none was found")

    class Config:
        from_attributes = True

class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")
    code: Optional[int] = Field(None, description="HTTP status code")
    details: Optional[str] = Field(None, description="Additional error details")

    class Config:
        from_attributes = True
