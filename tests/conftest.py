import pytest
from pathlib import Path

LINES_FIXTURE = "line 1\nline 2\nline 3\nline 4"

TOML_FIXTURE = """\
[server]
port = 8080
host = "localhost"
ratio = 1.5
enabled = true
released = 2024-01-15

[arrays]
numbers = [1, 2, 3, 4, 5]
names = ["alpha", "beta"]

[[servers]]
name = "first"

[[servers]]
name = "second"
"""

YAML_FIXTURE = """\
server:
  port: 8080
  host: localhost
  ratio: 1.5
  enabled: true
  released: 2024-01-15
arrays:
  numbers: [1, 2, 3, 4, 5]
  names:
    - alpha
    - beta
servers:
  - name: first
  - name: second
"""


@pytest.fixture
def write_file(tmp_path: Path):
    """Writes `content` to `tmp_path / name` and returns the path as a string."""
    def _write(name: str, content: str) -> str:
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return str(target)
    return _write


@pytest.fixture
def lines_file(write_file) -> str:
    return write_file("lines.txt", LINES_FIXTURE)


@pytest.fixture
def toml_file(write_file) -> str:
    return write_file("sample.toml", TOML_FIXTURE)


@pytest.fixture
def yaml_file(write_file) -> str:
    return write_file("sample.yaml", YAML_FIXTURE)
