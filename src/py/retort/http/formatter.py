import os.path
from pathlib import Path
from pprint import pformat
from typing import Any, Callable, NamedTuple

from ..config import FILE_CHUNK_SIZE, XML_ROOT
from ..utils.files import mimetype
from ..utils.htmpl import H, escape, raw
from ..utils.io import chunked
from ..utils.json import jsonText
from ..utils.logging import debug, warning
from ..utils.primitives import isComposite
from ..utils.xml import scalarText, xmlEncode
from .model import BaseResponse, EncodingError

# -----------------------------------------------------------------------------
#
# ENCODERS
#
# -----------------------------------------------------------------------------


class Encoders(NamedTuple):
	"""The encoding functions used by a formatter, so that they can be
	swapped (in tests, or for faster implementations)."""

	json: Callable[[Any], str] = jsonText
	escape: Callable[[str], str] = escape
	pretty: Callable[[Any], str] = pformat
	mimetype: Callable[[str], str] = mimetype


DEFAULT_ENCODERS: Encoders = Encoders()


# -----------------------------------------------------------------------------
#
# FORMATTER
#
# -----------------------------------------------------------------------------


class ResponseFormatter:
	"""Wraps a response to finalize it in a given format. All the methods
	return the formatter so that calls can be chained. The `json`, `xml` and
	`file` methods send the response; `dump` only appends to its body, and
	`chunk` writes chunks directly to the transport.

	Values are written as given: the JSONP prefix, the download file name
	and the XML element names are not escaped, so they must not come from
	untrusted input."""

	__slots__ = ["response", "encoders"]

	def __init__(
		self, response: BaseResponse, encoders: Encoders = DEFAULT_ENCODERS
	):
		self.response: BaseResponse = response
		self.encoders: Encoders = encoders

	def chunk(self, content: str | bytes | None = None) -> "ResponseFormatter":
		"""Switches the response to chunked mode and, when given, writes the
		content as a chunk. The terminating chunk is written when the
		response is sent."""
		self.response.enableChunkedMode()
		if content is not None:
			transport = self.response.raw()
			transport.write(chunked(content))
			transport.flush()
		return self

	def dump(self, value: Any) -> "ResponseFormatter":
		"""Appends an HTML-escaped, pretty printed rendering of the value
		to the body."""
		text: str = (
			self.encoders.pretty(value) if isComposite(value) else scalarText(value)
		)
		block: str = self.encoders.escape(text)
		self.response.appendToBody(f"{H.pre(raw(block))}{H.br()}\n")
		return self

	def file(
		self,
		path: str | Path,
		filename: str | None = None,
		mimetype: str | None = None,
	) -> "ResponseFormatter":
		"""Sends the file at the given path as an attachment. The body is
		replaced by the file's contents and caching is disabled."""
		self.response.replaceBody("")
		self.response.disableCaching()
		try:
			f = open(path, "rb")
		except OSError as e:
			warning("Could not read file", Path=str(path), Error=str(e))
			raise
		with f:
			resolved: str = mimetype or self.encoders.mimetype(str(path))
			size: int = os.fstat(f.fileno()).st_size
			name: str = os.path.basename(path) if filename is None else filename
			self.response.setHeader("Content-Type", resolved)
			self.response.setHeader("Content-Length", size)
			self.response.setHeader(
				"Content-Disposition", f'attachment; filename="{name}"'
			)
			self.response.send()
			# The file is streamed, a failure from there truncates the body
			transport = self.response.raw()
			while block := f.read(FILE_CHUNK_SIZE):
				transport.write(block)
			transport.flush()
		debug("Sent file", Path=str(path), Length=size)
		return self

	def json(self, value: Any, jsonpPrefix: str | None = None) -> "ResponseFormatter":
		"""Sends the value as JSON, or as JSONP when a prefix is given. Caching
		is disabled."""
		self.response.replaceBody("")
		self.response.disableCaching()
		try:
			payload: str = self.encoders.json(value)
		except ValueError as e:
			warning("Could not encode value as JSON", Error=str(e))
			raise EncodingError(f"Could not encode value as JSON: {e}") from e
		if jsonpPrefix is not None:
			self.response.setHeader("Content-Type", "text/javascript")
			self.response.replaceBody(f"{jsonpPrefix}({payload});")
		else:
			self.response.setHeader("Content-Type", "application/json")
			self.response.replaceBody(payload)
		self.response.send()
		return self

	def xml(self, value: Any, root: str = XML_ROOT) -> "ResponseFormatter":
		"""Sends the value encoded with `xmlEncode`. Caching is disabled."""
		self.response.replaceBody("")
		self.response.disableCaching()
		self.response.setHeader("Content-Type", "application/xml")
		self.response.replaceBody(self.xmlEncode(value, root))
		self.response.send()
		return self

	def xmlEncode(self, value: Any, rootNode: str = XML_ROOT) -> str:
		return xmlEncode(value, rootNode)


# EOF
