import mimetypes
from pathlib import Path

import magic

mimetypes.init()


def mimetype(path: Path | str) -> str:
	"""Identifies the MIME type of the file at the given path by sniffing its
	content with libmagic, falling back to its extension when libmagic
	can't tell."""
	name = str(path)
	return (
		magic.from_file(name, mime=True)
		or mimetypes.guess_type(name)[0]
		or "application/octet-stream"
	)


# EOF
