from typing import Dict, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from .exceptions import InvalidURLError
from .interfaces import TMDBConfig

class RequestBuilder:
    """Builds fully qualified, authenticated TMDB URLs"""

    def __init__(self, config: TMDBConfig):
        self.config = config

    def build_url(self, endpoint: str, parameters: Optional[Dict[str, str]] = None) -> str:
        """Join base URL and endpoint, then append auth, language and caller params.

        Caller parameters are applied after the fixed ones, so a caller key
        that collides with ``api_key`` or ``language`` replaces it.
        """
        url = f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidURLError()

        query = {
            "api_key": self.config.api_key,
            "language": self.config.language,
        }
        for key, value in (parameters or {}).items():
            query[key] = str(value)

        try:
            encoded = urlencode(query, quote_via=quote)
        except UnicodeEncodeError:
            raise InvalidURLError()

        return urlunsplit((parts.scheme, parts.netloc, parts.path, encoded, ""))

def mask_api_key(url: str) -> str:
    """Return ``url`` with the api_key value hidden, for logging"""
    parts = urlsplit(url)
    query = [
        (key, "***" if key == "api_key" else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, quote_via=quote, safe="*")))
