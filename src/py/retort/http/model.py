import io
from abc import ABC, abstractmethod
from http import HTTPStatus
from http.cookies import SimpleCookie
from typing import BinaryIO

from ..utils.io import END_CHUNK, asBytes, chunked
from ..utils.logging import event

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`. Normalized names are
	cached in the `headers` default, which grows with every distinct name
	seen, so arbitrary client-supplied names should not be passed here."""
	if name in headers:
		return headers[name]
	key: str = name.lower()
	if key in headers:
		return headers[key]
	else:
		normalized: str = "-".join(_.capitalize() for _ in name.split("-"))
		headers[key] = normalized
		return normalized


def statusMessage(status: int) -> str:
	try:
		return HTTPStatus(status).phrase
	except ValueError:
		return "Unknown Status"


# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class ResponseError(Exception):
	"""Base class for the errors raised when producing a response."""


class LockedResponseError(ResponseError):
	"""Raised when a locked response (typically, one that was sent) is
	modified."""


class ResponseAlreadySentError(LockedResponseError):
	"""Raised when a response is sent twice."""


class EncodingError(ResponseError, ValueError):
	"""Raised when a value can't be encoded in the requested format."""


# -----------------------------------------------------------------------------
#
# TRANSPORT
#
# -----------------------------------------------------------------------------


class Transport(ABC):
	"""The raw byte sink a response is written to."""

	@abstractmethod
	def write(self, data: bytes) -> int:
		...

	@abstractmethod
	def flush(self) -> None:
		...


class StreamTransport(Transport):
	"""Writes to a binary file-like object (a socket file, `sys.stdout.buffer`)."""

	__slots__ = ["stream", "written"]

	def __init__(self, stream: BinaryIO):
		self.stream: BinaryIO = stream
		self.written: int = 0

	def write(self, data: bytes) -> int:
		n = self.stream.write(data)
		self.written += len(data)
		return n

	def flush(self) -> None:
		self.stream.flush()


class BufferTransport(StreamTransport):
	"""Keeps everything that was written in memory."""

	def __init__(self) -> None:
		super().__init__(io.BytesIO())

	def getvalue(self) -> bytes:
		stream = self.stream
		assert isinstance(stream, io.BytesIO)
		return stream.getvalue()


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class BaseResponse(ABC):
	"""The operations a response offers to the formatters. Headers and body
	are buffered until `send()`, while `raw()` gives direct access to the
	transport once the head is written."""

	@abstractmethod
	def setHeader(self, name: str, value: str | int | None) -> "BaseResponse":
		...

	@abstractmethod
	def replaceBody(self, content: str) -> "BaseResponse":
		...

	@abstractmethod
	def appendToBody(self, content: str) -> "BaseResponse":
		...

	@abstractmethod
	def enableChunkedMode(self) -> "BaseResponse":
		...

	@abstractmethod
	def disableCaching(self) -> "BaseResponse":
		...

	@abstractmethod
	def send(self) -> "BaseResponse":
		...

	@abstractmethod
	def raw(self) -> Transport:
		...


class HTTPResponse(BaseResponse):
	"""An HTTP/1.1 response written to a transport."""

	__slots__ = [
		"protocol",
		"status",
		"message",
		"headers",
		"cookies",
		"body",
		"transport",
		"isHeadSent",
		"isSent",
		"isLocked",
		"isChunked",
	]

	def __init__(
		self,
		transport: Transport | None = None,
		status: int = 200,
		headers: dict[str, str] | None = None,
		body: str = "",
		protocol: str = "HTTP/1.1",
	):
		self.protocol: str = protocol
		self.status: int = status
		self.message: str = statusMessage(status)
		self.headers: dict[str, str] = {}
		self.cookies: SimpleCookie = SimpleCookie()
		self.body: str = body
		self.transport: Transport = transport or BufferTransport()
		self.isHeadSent: bool = False
		self.isSent: bool = False
		self.isLocked: bool = False
		self.isChunked: bool = False
		for k, v in (headers or {}).items():
			self.setHeader(k, v)

	# =========================================================================
	# LOCKING
	# =========================================================================

	def lock(self) -> "HTTPResponse":
		self.isLocked = True
		return self

	def unlock(self) -> "HTTPResponse":
		self.isLocked = False
		return self

	def _ensureUnlocked(self) -> None:
		if self.isLocked:
			raise LockedResponseError(
				f"Response is locked and can't be modified: {self}"
			)

	# =========================================================================
	# STATUS & HEADERS
	# =========================================================================

	def setStatus(self, status: int, message: str | None = None) -> "HTTPResponse":
		self._ensureUnlocked()
		self.status = status
		self.message = message or statusMessage(status)
		return self

	def getHeader(self, name: str) -> str | None:
		return self.headers.get(headername(name))

	def setHeader(self, name: str, value: str | int | None) -> "HTTPResponse":
		self._ensureUnlocked()
		if value is None:
			self.headers.pop(headername(name), None)
		else:
			self.headers[headername(name)] = str(value)
		return self

	def setHeaders(self, headers: dict[str, str | int | None]) -> "HTTPResponse":
		for k, v in headers.items():
			self.setHeader(k, v)
		return self

	def cookie(
		self,
		name: str,
		value: str,
		expires: int | None = None,
		path: str | None = "/",
		domain: str | None = None,
		secure: bool = False,
		httpOnly: bool = False,
	) -> "HTTPResponse":
		"""Adds a `Set-Cookie` header, `expires` being a number of seconds
		from now."""
		self._ensureUnlocked()
		self.cookies[name] = value
		morsel = self.cookies[name]
		if expires is not None:
			morsel["expires"] = expires
		if path:
			morsel["path"] = path
		if domain:
			morsel["domain"] = domain
		if secure:
			morsel["secure"] = True
		if httpOnly:
			morsel["httponly"] = True
		return self

	def disableCaching(self) -> "HTTPResponse":
		self.setHeader("Pragma", "no-cache")
		self.setHeader("Cache-Control", "no-store, no-cache")
		return self

	# =========================================================================
	# BODY
	# =========================================================================

	def replaceBody(self, content: str) -> "HTTPResponse":
		self._ensureUnlocked()
		self.body = content
		return self

	def appendToBody(self, content: str) -> "HTTPResponse":
		self._ensureUnlocked()
		self.body += content
		return self

	def prependToBody(self, content: str) -> "HTTPResponse":
		self._ensureUnlocked()
		self.body = content + self.body
		return self

	# =========================================================================
	# SENDING
	# =========================================================================

	def head(self) -> bytes:
		"""Serializes the status line and the headers."""
		lines: list[str] = [f"{self.protocol} {self.status} {self.message}"]
		lines += (f"{k}: {v}" for k, v in self.headers.items())
		lines += (f"Set-Cookie: {_.OutputString()}" for _ in self.cookies.values())
		lines.append("")
		lines.append("")
		# NOTE: Header values are limited to Latin-1
		return "\r\n".join(lines).encode("latin-1")

	def _writeHead(self) -> None:
		if not self.isHeadSent:
			self.transport.write(self.head())
			self.isHeadSent = True

	def enableChunkedMode(self) -> "HTTPResponse":
		"""Switches to a chunked transfer encoding, sending the head right away
		and then any buffered body as a first chunk."""
		if self.isSent:
			raise ResponseAlreadySentError("Response was already sent, can't chunk it")
		if not self.isChunked:
			self.setHeader("Content-Length", None)
			self.setHeader("Transfer-Encoding", "chunked")
			self.isChunked = True
			self._writeHead()
		if self.body:
			self.transport.write(chunked(self.body))
			self.body = ""
		return self

	def raw(self) -> Transport:
		"""Returns the transport for writing bytes that bypass the body. The
		head must have been written, either by switching to chunked mode or
		by sending the response."""
		if not self.isHeadSent:
			raise ResponseError("The head must be sent before writing raw bytes")
		return self.transport

	def send(self) -> "HTTPResponse":
		if self.isSent:
			raise ResponseAlreadySentError("Response was already sent")
		if self.isChunked:
			if self.body:
				self.transport.write(chunked(self.body))
				self.body = ""
			self.transport.write(END_CHUNK)
		else:
			payload: bytes = asBytes(self.body)
			if self.getHeader("Content-Length") is None:
				self.setHeader("Content-Length", len(payload))
			self._writeHead()
			self.transport.write(payload)
		self.transport.flush()
		self.isSent = True
		self.lock()
		event(
			"Response sent",
			self.status,
			ContentType=self.getHeader("Content-Type"),
			Chunked=self.isChunked,
		)
		return self

	def redirect(self, url: str, status: int = 302) -> "HTTPResponse":
		self.setStatus(status)
		self.setHeader("Location", url)
		self.replaceBody("")
		return self.send()

	def __str__(self) -> str:
		return f"Response({self.protocol} {self.status} {self.message} {self.headers})"


# EOF
