from enum import Enum, IntEnum

class MovieGenre(IntEnum):
    """TMDB Movie Genres - https://developer.themoviedb.org/reference/genre-movie-list"""
    ACTION = 28
    ADVENTURE = 12
    ANIMATION = 16
    COMEDY = 35
    CRIME = 80
    DOCUMENTARY = 99
    DRAMA = 18
    FAMILY = 10751
    FANTASY = 14
    HISTORY = 36
    HORROR = 27
    MUSIC = 10402
    MYSTERY = 9648
    ROMANCE = 10749
    SCIENCE_FICTION = 878
    TV_MOVIE = 10770
    THRILLER = 53
    WAR = 10752
    WESTERN = 37

class MovieCategory(str, Enum):
    """Home feed rows"""
    TRENDING = "Trending"
    NOW_PLAYING = "Now Playing"
    POPULAR = "Popular"
    TOP_RATED = "Top Rated"
    UPCOMING = "Upcoming"
    BOLLYWOOD = "Bollywood"
    SOUTH_INDIAN = "South Indian"

class ImageSize(str, Enum):
    """Size tokens understood by the TMDB image CDN"""
    POSTER = "w500"
    BACKDROP = "w1280"
    PROFILE = "w185"
    THUMBNAIL = "w92"

class LoadingPolicy(str, Enum):
    """Which completions clear the loading flag of an orchestrated load"""
    PRIMARY = "primary"
    ALL_SETTLED = "all_settled"

class LoadPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PARTIALLY_LOADED = "partially_loaded"
    COMPLETED = "completed"

# Original-language filters for Indian cinema
HINDI_LANGUAGES = "hi"
SOUTH_INDIAN_LANGUAGES = "te,ta,ml,kn"
INDIAN_LANGUAGES = "hi,te,ta,ml,kn,bn,gu,mr,pa,en"

class GenreHelper:
    """Genre lookups"""

    @staticmethod
    def get_movie_genre_name(genre_id: int) -> str:
        """Return the display name for a movie genre id"""
        try:
            return MovieGenre(genre_id).name.replace('_', ' ').title()
        except ValueError:
            return "Unknown"

    @staticmethod
    def get_all_movie_genres() -> dict:
        """Return all movie genres as {id: name}"""
        return {genre.value: genre.name.replace('_', ' ').title() for genre in MovieGenre}
