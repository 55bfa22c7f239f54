import argparse
import sys
from pathlib import Path
from typing import Any, BinaryIO, TextIO

from . import config
from .http.formatter import ResponseFormatter
from .http.model import HTTPResponse, ResponseError, StreamTransport
from .utils.json import unjson
from .utils.logging import LogLevel, error, exception, logged

# --
# Renders a value as a complete HTTP response on stdout, which is useful to
# check what a handler would send:
#
# ```
# echo '{"users":[{"name":"Ann"}]}' | retort xml
# ```

FORMATS: list[str] = ["json", "xml", "dump", "file", "chunk"]


def parser() -> argparse.ArgumentParser:
	res = argparse.ArgumentParser(
		prog="retort",
		description="Renders a value as an HTTP response",
		formatter_class=argparse.ArgumentDefaultsHelpFormatter,
	)
	res.add_argument("format", choices=FORMATS, help="The response format")
	res.add_argument(
		"input",
		nargs="?",
		help="The JSON document to render (or the file to send), stdin when omitted",
	)
	res.add_argument(
		"--jsonp", action="store", dest="jsonp", help="JSONP function prefix"
	)
	res.add_argument(
		"--root",
		action="store",
		dest="root",
		default=config.XML_ROOT,
		help="XML root element name",
	)
	res.add_argument(
		"--filename", action="store", dest="filename", help="Download file name"
	)
	res.add_argument(
		"--mimetype", action="store", dest="mimetype", help="Download MIME type"
	)
	res.add_argument(
		"--chunk",
		action="store",
		dest="chunk",
		type=int,
		default=1_024,
		help="Maximum number of characters per chunk",
	)
	return res


def read(path: str | None, stdin: TextIO) -> str:
	return Path(path).read_text(config.DEFAULT_ENCODING) if path else stdin.read()


def render(
	options: argparse.Namespace, formatter: ResponseFormatter, stdin: TextIO
) -> None:
	response = formatter.response
	match options.format:
		case "file":
			if not options.input:
				raise ValueError("The file format needs an input path")
			formatter.file(options.input, options.filename, options.mimetype)
		case "chunk":
			text: str = read(options.input, stdin)
			response.setHeader("Content-Type", "text/plain; charset=utf-8")
			size: int = max(1, options.chunk)
			formatter.chunk()
			for i in range(0, len(text), size):
				formatter.chunk(text[i : i + size])
			response.send()
		case _:
			value: Any = unjson(read(options.input, stdin))
			if options.format == "json":
				formatter.json(value, options.jsonp)
			elif options.format == "xml":
				formatter.xml(value, options.root)
			else:
				response.setHeader("Content-Type", "text/html; charset=utf-8")
				formatter.dump(value)
				response.send()


def main(
	args: list[str] | None = None,
	*,
	stdin: TextIO | None = None,
	stdout: BinaryIO | None = None,
) -> int:
	options = parser().parse_args(args)
	response = HTTPResponse(StreamTransport(stdout or sys.stdout.buffer))
	try:
		render(options, ResponseFormatter(response), stdin or sys.stdin)
	except (OSError, ValueError, ResponseError) as e:
		error(f"Could not render {options.format} response: {e}", 1)
		if logged(LogLevel.Debug):
			exception(e)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())

# EOF
