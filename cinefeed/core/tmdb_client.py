import logging
from typing import Dict, Optional, Type

from .decoder import decode
from .exceptions import TMDBError
from .interfaces import TMDBClientInterface, TMDBConfig, T
from .request_builder import RequestBuilder
from .transport import HTTPTransport

logger = logging.getLogger(__name__)

class TMDBClient(TMDBClientInterface):
    """Concrete implementation of TMDB client"""

    def __init__(self, config: TMDBConfig, transport: Optional[HTTPTransport] = None):
        self.config = config
        self.request_builder = RequestBuilder(config)
        self.transport = transport or HTTPTransport(config)

    def make_request(self, endpoint: str, params: Optional[Dict[str, str]] = None,
                     response_model: Type[T] = None) -> T:
        """Build, execute and decode one API call.

        Raises one of InvalidURLError, ServerError, DecodingError or
        NetworkUnavailableError.
        """
        try:
            url = self.request_builder.build_url(endpoint, params)
            body = self.transport.get(url)
            return decode(body, response_model)
        except TMDBError as e:
            logger.error(f"Request to {endpoint} failed: {e.message}")
            raise

    def close(self) -> None:
        self.transport.close()
