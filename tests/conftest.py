import pathlib

import pytest


def write(base: pathlib.Path, relative: str, text: str) -> pathlib.Path:
    path = base.joinpath(*relative.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A working directory holding an index page and a few templates."""
    write(tmp_path, "index.html", "<html><body>X</body></html>")
    write(tmp_path, "app/widgets/x.html", "<p>x</p>")
    write(tmp_path, "app/widgets/y.html", "<p>y</p>")
    write(tmp_path, "app/demo/card.dust", "{title}")
    monkeypatch.chdir(tmp_path)
    return tmp_path
