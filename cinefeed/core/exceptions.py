from typing import Optional

# Transport / decoding errors

class TMDBError(Exception):
    """Base exception for TMDB API calls"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class InvalidURLError(TMDBError):
    """Raised when a request URL cannot be built"""
    def __init__(self, message: str = "Invalid URL"):
        super().__init__(message)

class ServerError(TMDBError):
    """Raised when the API answers with a non-2xx status"""
    def __init__(self, status_code: int):
        super().__init__(f"Server error with code: {status_code}", status_code)

class DecodingError(TMDBError):
    """Raised when a response body does not match the expected model"""
    def __init__(self, message: str = "Failed to decode response"):
        super().__init__(message)

class NetworkUnavailableError(TMDBError):
    """Raised when no response was received (DNS, reset, timeout)"""
    def __init__(self, message: str = "Network unavailable"):
        super().__init__(message)

# Presentation errors

class BaseAppException(Exception):
    """Base exception for user-facing errors"""
    error_code = "UNKNOWN"

    def __init__(self, message: str, retryable: bool):
        self.message = message
        self.retryable = retryable
        super().__init__(self.message)

    def to_dict(self):
        """Return error response as dictionary with error code"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "retryable": self.retryable
        }

class NetworkErrorException(BaseAppException):
    """Raised for failed requests that did reach the network"""
    error_code = "NETWORK_ERROR"

    def __init__(self, message: str):
        super().__init__(f"Network Error: {message}", retryable=True)

class InvalidDataException(BaseAppException):
    """Raised when the server sent data we cannot read"""
    error_code = "INVALID_DATA"

    def __init__(self, message: str = "Invalid data received from server"):
        super().__init__(message, retryable=False)

class NoInternetConnectionException(BaseAppException):
    """Raised when the device is offline"""
    error_code = "NO_INTERNET_CONNECTION"

    def __init__(self, message: str = "No internet connection available"):
        super().__init__(message, retryable=True)

class APIKeyMissingException(BaseAppException):
    """Raised when the API rejects our key"""
    error_code = "API_KEY_MISSING"

    def __init__(self, message: str = "API key is missing or invalid"):
        super().__init__(message, retryable=False)

class RateLimitExceededException(BaseAppException):
    """Raised when the API throttles us"""
    error_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str = "Too many requests. Please try again later"):
        super().__init__(message, retryable=True)

class MovieNotFoundException(BaseAppException):
    """Raised when a movie id does not exist"""
    error_code = "MOVIE_NOT_FOUND"

    def __init__(self, message: str = "Movie not found"):
        super().__init__(message, retryable=False)

class UnknownException(BaseAppException):
    """Raised for anything else"""
    error_code = "UNKNOWN"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, retryable=True)

def to_app_error(error: Exception) -> BaseAppException:
    """Translate a client-level error into the user-facing taxonomy"""
    if isinstance(error, BaseAppException):
        return error
    if isinstance(error, NetworkUnavailableError):
        return NoInternetConnectionException()
    if isinstance(error, DecodingError):
        return InvalidDataException()
    if isinstance(error, ServerError):
        if error.status_code == 401:
            return APIKeyMissingException()
        if error.status_code == 404:
            return MovieNotFoundException()
        if error.status_code == 429:
            return RateLimitExceededException()
        return NetworkErrorException(error.message)
    if isinstance(error, TMDBError):
        return NetworkErrorException(error.message)
    return UnknownException()
