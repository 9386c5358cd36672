import pytest


def build_line(
    path: str = "/api/users",
    status: str = "200",
    day: str = "10/Oct/2023",
    forwarded: str = "-",
    client: str = "10.0.0.1",
) -> str:
    """Combined-format access log line; status lands in column 8, forwarded-for in column 10."""
    return f'{client} - - [{day}:10:00:00 +0000] "GET {path} HTTP/1.1" {status} 512 {forwarded} "curl/8.0"\n'


@pytest.fixture
def make_line():
    return build_line


@pytest.fixture
def write_log(tmp_path):
    """Write lines to ``tmp_path/<name>`` and return the path as a string."""
    def _write(name: str, lines: list[str]) -> str:
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return str(path)
    return _write
