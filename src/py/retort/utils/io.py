DEFAULT_ENCODING: str = "utf8"
EOL: bytes = b"\r\n"
# Terminates a chunked body
END_CHUNK: bytes = b"0\r\n\r\n"


def asBytes(value: str | bytes | None) -> bytes:
	if isinstance(value, bytes):
		return value
	elif isinstance(value, str):
		return bytes(value, DEFAULT_ENCODING)
	elif value is None:
		return b""
	else:
		raise ValueError(f"Expected bytes or str, got: {value}")


def chunked(value: str | bytes) -> bytes:
	"""Frames the value as one chunk of a chunked transfer encoding: the
	hexadecimal byte length, CRLF, the bytes and CRLF."""
	data = asBytes(value)
	return b"%x%s%s%s" % (len(data), EOL, data, EOL)


# EOF
