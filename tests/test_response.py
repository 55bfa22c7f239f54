import io

import pytest

from retort import (
	BufferTransport,
	HTTPResponse,
	LockedResponseError,
	ResponseAlreadySentError,
	ResponseError,
	StreamTransport,
)
from retort.http.model import headername


def test_headername():
	assert headername("content-type") == "Content-Type"
	assert headername("CONTENT-DISPOSITION") == "Content-Disposition"
	# -- Normalized names are memoized, keyed by their lowercase form
	cache: dict[str, str] = {}
	assert headername("x-custom-header", headers=cache) == "X-Custom-Header"
	assert cache == {"x-custom-header": "X-Custom-Header"}
	assert headername("X-CUSTOM-HEADER", headers=cache) == "X-Custom-Header"
	assert len(cache) == 1


def test_head():
	assert HTTPResponse().head() == b"HTTP/1.1 200 OK\r\n\r\n"
	r = HTTPResponse(status=404, headers={"content-type": "text/plain"})
	assert r.head() == b"HTTP/1.1 404 Not Found\r\nContent-Type: text/plain\r\n\r\n"
	assert r.setStatus(799).message == "Unknown Status"


def test_headers():
	r = HTTPResponse()
	r.setHeader("x-count", 2)
	assert r.getHeader("X-Count") == "2"
	r.setHeader("X-Count", None)
	assert r.getHeader("X-Count") is None
	# Removing a missing header is fine
	r.setHeader("X-Count", None)


def test_body():
	r = HTTPResponse()
	r.appendToBody("b").prependToBody("a").appendToBody("c")
	assert r.body == "abc"
	r.replaceBody("")
	assert r.body == ""


def test_send():
	transport = BufferTransport()
	r = HTTPResponse(transport, body="héllo")
	r.send()
	assert transport.getvalue() == (
		b"HTTP/1.1 200 OK\r\nContent-Length: 6\r\n\r\nh\xc3\xa9llo"
	)
	assert r.isSent and r.isLocked


def test_locked_after_send():
	r = HTTPResponse().send()
	with pytest.raises(LockedResponseError):
		r.setHeader("X-Late", "1")
	with pytest.raises(LockedResponseError):
		r.appendToBody("late")
	with pytest.raises(ResponseAlreadySentError):
		r.send()
	with pytest.raises(ResponseAlreadySentError):
		r.enableChunkedMode()
	r.unlock().setHeader("X-Late", "1")


def test_chunked_mode():
	transport = BufferTransport()
	r = HTTPResponse(transport, headers={"Content-Length": "10"})
	r.enableChunkedMode().enableChunkedMode()
	r.appendToBody("abc")
	r.send()
	head, _, body = transport.getvalue().partition(b"\r\n\r\n")
	assert b"Content-Length" not in head
	assert head.count(b"Transfer-Encoding: chunked") == 1
	assert body == b"3\r\nabc\r\n0\r\n\r\n"


def test_raw():
	r = HTTPResponse()
	with pytest.raises(ResponseError):
		r.raw()
	r.send()
	assert r.raw() is r.transport


def test_cookie():
	r = HTTPResponse()
	r.cookie("session", "abc", httpOnly=True, secure=True)
	head = r.head()
	assert b"Set-Cookie: session=abc" in head
	assert b"HttpOnly" in head
	assert b"Secure" in head
	assert b"Path=/" in head


def test_redirect():
	transport = BufferTransport()
	HTTPResponse(transport, body="ignored").redirect("/login")
	assert transport.getvalue() == (
		b"HTTP/1.1 302 Found\r\nLocation: /login\r\nContent-Length: 0\r\n\r\n"
	)


def test_stream_transport():
	stream = io.BytesIO()
	transport = StreamTransport(stream)
	HTTPResponse(transport, body="ok").send()
	assert stream.getvalue().endswith(b"\r\n\r\nok")
	assert transport.written == len(stream.getvalue())


# EOF
