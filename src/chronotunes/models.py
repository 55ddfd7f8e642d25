"""Pydantic data models for chronotunes.

Catalog records, the ephemeral query, and the playlist output all
validate through these schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Song(BaseModel):
    """A catalog entry.

    Titles and artists may repeat across entries; ids may not.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Unique identifier within a catalog")
    title: str = Field(min_length=1, description="Display title")
    artist: str = Field(min_length=1, description="Performing or credited artist")
    year: int = Field(description="Release or origin year")
    genre: str = Field(default="", description="Free-text category label")
    cultural_region: str = Field(
        default="", description="Geographic or cultural association (e.g. 'Dutch', 'Global')"
    )
    historical_significance: str = Field(default="", description="Optional descriptive text")

    # Inert streaming links, never used for scoring
    spotify_url: str | None = Field(default=None, description="Spotify track URL")
    youtube_url: str | None = Field(default=None, description="YouTube URL")
    apple_music_url: str | None = Field(default=None, description="Apple Music URL")


class ScoredSong(BaseModel):
    """A song paired with its combined weight for one query."""

    model_config = ConfigDict(frozen=True)

    song: Song
    weight: float = Field(ge=0.0, description="temporal weight x location relevance")


class PlaylistQuery(BaseModel):
    """A (year, location) pair submitted by a caller."""

    year: int = Field(description="Historical year of interest")
    location: str = Field(description="Free-text location")


class PlaylistResult(BaseModel):
    """Final output of playlist generation."""

    query_year: int = Field(description="Query year, echoed back")
    query_location: str = Field(description="Query location, echoed back")
    generated_at: datetime = Field(description="Wall-clock time at generation")
    songs: list[Song] = Field(
        default_factory=list, description="Selected songs in presentation order"
    )
