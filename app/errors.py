from pymongo.errors import ConnectionFailure

CONNECTION_ERROR_MESSAGE = (
    "Could not connect to MongoDB. Make sure MongoDB is running "
    "and MONGODB_URI is correct."
)

_REFUSED_MARKERS = ("ECONNREFUSED", "Connection refused", "ServerSelectionTimeoutError")


class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    pass


def _mentions_refused(exc) -> bool:
    text = str(exc) if exc is not None else ""
    return any(marker.lower() in text.lower() for marker in _REFUSED_MARKERS)


def is_connection_error(exc: BaseException) -> bool:
    if isinstance(exc, ConnectionFailure):
        return True
    return _mentions_refused(exc) or _mentions_refused(exc.__cause__)


def describe_store_error(exc: BaseException, fallback: str) -> str:
    if is_connection_error(exc):
        return CONNECTION_ERROR_MESSAGE
    return str(exc) or fallback
