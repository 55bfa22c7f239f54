import io

from retort.__main__ import main
from retort.utils import logging
from retort.utils.logging import LogLevel


def run(*args: str, stdin: str = "") -> tuple[int, bytes]:
	stdout = io.BytesIO()
	code = main(list(args), stdin=io.StringIO(stdin), stdout=stdout)
	return code, stdout.getvalue()


def test_json():
	code, out = run("json", stdin='{"a": [1, 2]}')
	assert code == 0
	assert out.startswith(b"HTTP/1.1 200 OK\r\n")
	assert out.endswith(b'\r\n\r\n{"a":[1,2]}')


def test_jsonp():
	code, out = run("json", "--jsonp", "cb", stdin="[]")
	assert code == 0
	assert out.endswith(b"cb([]);")


def test_xml(tmp_path):
	path = tmp_path / "users.json"
	path.write_text('{"users": [{"name": "Ann"}]}')
	code, out = run("xml", str(path))
	assert code == 0
	assert b"<users>\n\t<user>\n\t\t<name>Ann</name>\n\t</user>\n</users>\n" in out
	code, out = run("xml", "--root", "result", stdin="[1, 2]")
	assert out.endswith(b"<result>\n\t<result>1</result>\n\t<result>2</result>\n</result>\n")


def test_dump():
	code, out = run("dump", stdin='"<b>"')
	assert code == 0
	assert out.endswith(b"<pre>&lt;b&gt;</pre><br />\n")


def test_chunk():
	code, out = run("chunk", "--chunk", "3", stdin="abcdefg")
	assert code == 0
	assert out.endswith(b"3\r\nabc\r\n3\r\ndef\r\n1\r\ng\r\n0\r\n\r\n")


def test_file(tmp_path):
	path = tmp_path / "data.csv"
	path.write_text("a,b\n")
	code, out = run("file", str(path), "--filename", "export.csv")
	assert code == 0
	assert b'filename="export.csv"' in out
	assert out.endswith(b"\r\n\r\na,b\n")


def test_errors(tmp_path):
	assert run("file", str(tmp_path / "missing"))[0] == 1
	assert run("file")[0] == 1
	assert run("json", stdin="{not json")[0] == 1
	assert run("json", stdin="[NaN]")[0] == 1


def test_errors_traceback_in_debug(monkeypatch):
	stream = io.StringIO()
	monkeypatch.setattr(logging, "ERR", stream)
	monkeypatch.setattr(logging, "THRESHOLD", LogLevel.Debug)
	assert run("json", stdin="{not json")[0] == 1
	output = stream.getvalue()
	assert "Could not render json response" in output
	assert "!!! EXCP [JSONDecodeError]" in output


# EOF
