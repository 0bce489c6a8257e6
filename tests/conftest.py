import pytest

from logger import reset_logger


@pytest.fixture(autouse=True)
def fresh_logger():
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def tree(tmp_path):
    """Returns a helper that writes {relative path: content} under a root dir."""
    root = tmp_path / "root"
    root.mkdir()

    def make(files):
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return make
