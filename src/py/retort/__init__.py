from .http.model import (
	HTTPResponse,
	BaseResponse,
	Transport,
	StreamTransport,
	BufferTransport,
	ResponseError,
	LockedResponseError,
	ResponseAlreadySentError,
	EncodingError,
)  # NOQA: F401
from .http.formatter import ResponseFormatter, Encoders  # NOQA: F401
from .utils.xml import xmlEncode, singularize  # NOQA: F401


def respond(transport: Transport | None = None) -> ResponseFormatter:
	"""Creates a new response on the given transport, and returns its
	formatter."""
	return ResponseFormatter(HTTPResponse(transport))


# EOF
