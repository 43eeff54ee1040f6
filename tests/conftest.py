import pytest
from click.testing import CliRunner

from markdown_preview.folding import FoldStateStore
from markdown_preview.renderer import MarkdownRenderer


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def fold_store() -> FoldStateStore:
    return FoldStateStore()


@pytest.fixture()
def renderer(fold_store: FoldStateStore) -> MarkdownRenderer:
    """Renderer with default settings sharing the `fold_store` fixture."""
    return MarkdownRenderer(fold_state=fold_store)
