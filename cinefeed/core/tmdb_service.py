import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .config import Settings, get_settings
from .interfaces import KeyValueStore, TMDBConfig
from .services import MovieService
from .store import InMemoryStore, RedisStore
from .tmdb_client import TMDBClient
from cinefeed.services.home_feed_service import HomeFeedService
from cinefeed.services.movie_detail_service import MovieDetailService
from cinefeed.services.search_service import SearchService
from cinefeed.services.watchlist_service import WatchlistService

logger = logging.getLogger(__name__)

@dataclass
class ServiceContainer:
    """Long-lived service instances owned by the caller"""
    client: TMDBClient
    movie_service: MovieService
    executor: ThreadPoolExecutor
    home_feed: HomeFeedService
    movie_detail: MovieDetailService
    search: SearchService
    watchlist: WatchlistService

    def close(self) -> None:
        self.executor.shutdown(wait=False, cancel_futures=True)
        self.client.close()

class TMDBServiceFactory:
    """Factory class for creating TMDB services"""

    @staticmethod
    def configure_logging(settings: Settings) -> None:
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

    @staticmethod
    def create_store(settings: Settings) -> KeyValueStore:
        """Redis when REDIS_URL is configured, otherwise process memory"""
        if settings.REDIS_URL:
            return RedisStore(settings.REDIS_URL)
        logger.info("REDIS_URL not set, watchlist will not outlive the process")
        return InMemoryStore()

    @staticmethod
    def create_all_services(settings: Optional[Settings] = None,
                            store: Optional[KeyValueStore] = None) -> ServiceContainer:
        """Create one instance of every service, wired together"""
        settings = settings or get_settings()
        if not settings.TMDB_API_KEY:
            logger.warning("TMDB_API_KEY is empty, requests will be rejected")

        config = TMDBConfig.from_settings(settings)
        client = TMDBClient(config)
        movie_service = MovieService(client, region=settings.TMDB_REGION)
        executor = ThreadPoolExecutor(max_workers=settings.MAX_CONCURRENT_REQUESTS,
                                      thread_name_prefix="tmdb")

        return ServiceContainer(
            client=client,
            movie_service=movie_service,
            executor=executor,
            home_feed=HomeFeedService(movie_service, executor, settings.LOADING_POLICY),
            movie_detail=MovieDetailService(movie_service, executor, settings.LOADING_POLICY,
                                            cast_limit=settings.DETAIL_CAST_LIMIT),
            search=SearchService(movie_service, executor,
                                 debounce_seconds=settings.SEARCH_DEBOUNCE_SECONDS),
            watchlist=WatchlistService(store or TMDBServiceFactory.create_store(settings),
                                       key=settings.WATCHLIST_KEY),
        )
