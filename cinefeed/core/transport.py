import logging
import time
from typing import Optional

import requests

from .exceptions import NetworkUnavailableError, ServerError
from .interfaces import TMDBConfig
from .request_builder import mask_api_key

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

class HTTPTransport:
    """Executes single GET requests against the TMDB API"""

    def __init__(self, config: TMDBConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json"
        })

    def get(self, url: str) -> bytes:
        """Fetch ``url`` and return the raw body of a 2xx response.

        The connect and per-read timeouts are ``request_timeout``; the whole
        exchange, body included, must finish within ``resource_timeout``.
        """
        deadline = time.monotonic() + self.config.resource_timeout
        logger.info(f"Making request to: {mask_api_key(url)}")
        try:
            response = self.session.get(
                url,
                timeout=(self.config.request_timeout, self.config.request_timeout),
                stream=True
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise NetworkUnavailableError()

        try:
            if not 200 <= response.status_code <= 299:
                logger.error(f"API request failed: {response.status_code}")
                raise ServerError(response.status_code)

            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    logger.error(f"Resource timeout after {self.config.resource_timeout}s")
                    raise NetworkUnavailableError()
                chunks.append(chunk)
            return b"".join(chunks)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error reading response body: {str(e)}")
            raise NetworkUnavailableError()
        finally:
            response.close()

    def close(self) -> None:
        self.session.close()
