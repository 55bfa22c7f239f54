import sys
from dataclasses import dataclass

from retort import HTTPResponse, ResponseFormatter, StreamTransport

# --
# Writes the same data as JSON, JSONP, XML and chunks to stdout, with the
# full HTTP response head, as a handler would send them.


@dataclass
class User:
	name: str
	roles: list[str]


USERS: dict[str, list[User]] = {
	"users": [User("Ann", ["admin", "editor"]), User("Bo", ["viewer"])]
}


def formatter() -> ResponseFormatter:
	return ResponseFormatter(HTTPResponse(StreamTransport(sys.stdout.buffer)))


for render in (
	lambda _: _.json(USERS),
	lambda _: _.json(USERS, "onUsers"),
	lambda _: _.xml(USERS),
	lambda _: _.chunk("Hello, ").chunk("World!").response.send(),
):
	render(formatter())
	sys.stdout.buffer.write(b"\n\n")
# EOF
