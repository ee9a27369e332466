"""
Pytest configuration and shared fixtures for page context tests.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock
from typing import Callable, Dict

# Add backend app to path
sys.path.insert(0, str(Path(__file__).parent.parent / "app"))


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create files (relative path -> content) under root"""
    for relative_path, content in files.items():
        file_path = root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    return root


# ==================== Instruction Store Fixtures ====================

@pytest.fixture
def instructions_dir(tmp_path) -> Path:
    """Empty instructions directory inside a plugin root."""
    directory = tmp_path / "instructions"
    directory.mkdir()
    return directory


@pytest.fixture
def make_instructions(instructions_dir) -> Callable[[Dict[str, str]], Path]:
    """Factory that writes instruction files and returns the directory."""
    def _make(files: Dict[str, str]) -> Path:
        return write_tree(instructions_dir, files)
    return _make


@pytest.fixture
def sample_instruction_set() -> Dict[str, str]:
    """A multi-tenant instruction set bound to example.com."""
    return {
        "app/_config.json": '{"domains": ["example.com", "*.example.com"]}',
        "app/_base.md": "Root instructions\n",
        "app/seo/_base.md": "SEO section",
        "app/seo/_dynamic/_base.md": "SEO item",
        "app/projects/_base.md": "Projects section",
        "app/projects/overview.md": "  Projects overview  ",
    }


# ==================== Mock Page Fixture ====================

@pytest.fixture
def mock_page():
    """Create a mock Playwright page object."""
    page = AsyncMock()
    page.url = "https://example.com/test"

    async def goto(url, **kwargs):
        page.url = url
        return None

    page.goto = AsyncMock(side_effect=goto)
    page.title = AsyncMock(return_value="Test Page")
    page.screenshot = AsyncMock(return_value=b"fake_screenshot_data")
    page.context = Mock()

    return page
