import argparse
import asyncio
import logging

from cinefeed.core.config import get_settings
from cinefeed.core.tmdb_service import ServiceContainer, TMDBServiceFactory

logger = logging.getLogger(__name__)

async def run(services: ServiceContainer, movie_id: int = None, query: str = None) -> None:
    if movie_id is not None:
        await services.movie_detail.load_movie_details(movie_id)
        state = services.movie_detail.state
        title = state.movie_details.title if state.movie_details else "?"
        logger.info(f"{title}: {len(state.cast)} cast, {len(state.videos)} trailers, "
                    f"{len(state.similar_movies)} similar")
    elif query:
        await services.search.search_movies(query)
        for movie in services.search.state.results:
            logger.info(f"{movie.id}  {movie.title}  ({movie.formatted_rating})")
    else:
        await services.home_feed.load_initial_data()
        state = services.home_feed.state
        if state.featured_movie:
            logger.info(f"Featured: {state.featured_movie.title} ({state.featured_source.value})")
        for name in ("trending_movies", "now_playing_movies", "popular_movies", "top_rated_movies",
                     "upcoming_movies", "bollywood_movies", "south_indian_movies"):
            logger.info(f"{name}: {len(getattr(state, name))}")

    if services.home_feed.state.error_message or services.movie_detail.state.error_message \
            or services.search.state.error_message:
        logger.warning("Some requests failed, see errors above")

def main() -> None:
    parser = argparse.ArgumentParser(description="Load TMDB screens from the command line")
    parser.add_argument("--movie", type=int, help="Load the detail screen of a movie id")
    parser.add_argument("--search", help="Run a search query")
    args = parser.parse_args()

    settings = get_settings()
    TMDBServiceFactory.configure_logging(settings)
    services = TMDBServiceFactory.create_all_services(settings)
    try:
        asyncio.run(run(services, args.movie, args.search))
    finally:
        services.close()

if __name__ == "__main__":
    main()
