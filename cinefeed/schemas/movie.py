from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cinefeed.core.enums import GenreHelper, ImageSize

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

def image_url(path: Optional[str], size: ImageSize) -> Optional[str]:
    """Absolute CDN URL for a relative image path, or None without a path"""
    if path is None:
        return None
    return f"{IMAGE_BASE_URL}/{size.value}{path}"

class TMDBModel(BaseModel):
    """Base for immutable TMDB payload models"""
    model_config = ConfigDict(frozen=True, extra="ignore")

class MovieDisplayMixin:
    """Derived display values shared by Movie and MovieDetails"""

    @property
    def poster_url(self) -> Optional[str]:
        return image_url(self.poster_path, ImageSize.POSTER)

    @property
    def backdrop_url(self) -> Optional[str]:
        return image_url(self.backdrop_path, ImageSize.BACKDROP)

    @property
    def thumbnail_url(self) -> Optional[str]:
        return image_url(self.poster_path, ImageSize.THUMBNAIL)

    @property
    def formatted_rating(self) -> str:
        return f"{self.vote_average:.1f}"

    @property
    def rating_percentage(self) -> float:
        return self.vote_average * 10

    @property
    def formatted_release_date(self) -> str:
        if not self.release_date:
            return "Unknown"
        try:
            return datetime.strptime(self.release_date, "%Y-%m-%d").strftime("%b %d, %Y")
        except ValueError:
            return self.release_date

class Movie(MovieDisplayMixin, TMDBModel):
    """TMDB movie list item; identity is ``id`` alone"""
    id: int
    title: str
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = Field(..., ge=0, le=10)
    vote_count: int = Field(..., ge=0)
    popularity: float = Field(..., ge=0)
    adult: bool
    video: bool
    genre_ids: Optional[List[int]] = None

    def __eq__(self, other):
        if not isinstance(other, Movie):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def genre_names(self) -> List[str]:
        return [GenreHelper.get_movie_genre_name(genre_id) for genre_id in self.genre_ids or []]

class MovieResponse(TMDBModel):
    """Paged movie list"""
    page: int
    results: List[Movie]
    total_pages: int
    total_results: int

class Genre(TMDBModel):
    id: int
    name: str

class ProductionCompany(TMDBModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: Optional[str] = None

    @property
    def logo_url(self) -> Optional[str]:
        return image_url(self.logo_path, ImageSize.THUMBNAIL)

class ProductionCountry(TMDBModel):
    iso_3166_1: str
    name: str

class SpokenLanguage(TMDBModel):
    iso_639_1: str
    name: str
    english_name: Optional[str] = None

class MovieDetails(MovieDisplayMixin, TMDBModel):
    """Full record returned by /movie/{id}"""
    id: int
    title: str
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = Field(..., ge=0, le=10)
    vote_count: int = Field(..., ge=0)
    popularity: float = Field(..., ge=0)
    adult: bool
    video: bool
    runtime: Optional[int] = None
    budget: Optional[int] = None
    revenue: Optional[int] = None
    status: Optional[str] = None
    tagline: Optional[str] = None
    homepage: Optional[str] = None
    imdb_id: Optional[str] = None
    genres: Optional[List[Genre]] = None
    production_companies: Optional[List[ProductionCompany]] = None
    production_countries: Optional[List[ProductionCountry]] = None
    spoken_languages: Optional[List[SpokenLanguage]] = None

    @property
    def formatted_runtime(self) -> Optional[str]:
        if not self.runtime:
            return None
        hours, minutes = divmod(self.runtime, 60)
        if hours == 0:
            return f"{minutes}m"
        return f"{hours}h {minutes}m"

    def to_movie(self) -> Movie:
        """List-item view of these details, e.g. for adding to the watchlist"""
        return Movie(
            genre_ids=[genre.id for genre in self.genres or []],
            **self.model_dump(include=set(Movie.model_fields) - {"genre_ids"})
        )
