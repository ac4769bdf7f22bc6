from pathlib import Path

import pytest


def make_window(root: Path, window_id: str, content: str | None = None, tag: str | None = None) -> Path:
    directory = root.joinpath(*window_id.split("/"))
    directory.mkdir(parents=True, exist_ok=True)
    if content is not None:
        (directory / "content").write_text(content, encoding="utf-8")
    if tag is not None:
        (directory / "tag").write_text(tag, encoding="utf-8")
    return directory


@pytest.fixture
def root(tmp_path: Path) -> Path:
    path = tmp_path / "fs"
    path.mkdir()
    return path


@pytest.fixture
def cwd(tmp_path: Path) -> str:
    path = tmp_path / "cwd"
    path.mkdir()
    return str(path)
