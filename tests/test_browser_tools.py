"""Tests for the browser tool catalog against a mocked Playwright page."""

from unittest.mock import AsyncMock, MagicMock, patch

import jsonschema
import pytest

from lola.domain.tool import browser_tools
from lola.domain.tool.browser_tools import create_browser_tool_registry, create_browser_tools
from lola.domain.tool.tool_registry import ToolActionError


@pytest.fixture
def page():
    page = MagicMock()
    page.url = "https://example.com/"
    for method in ("goto", "title", "query_selector", "select_option", "fill", "press", "click", "evaluate"):
        setattr(page, method, AsyncMock())
    page.title.return_value = "Example Domain"
    return page


class TestCatalog:
    def test_catalog_size_and_names(self):
        tools = create_browser_tools()
        names = [t.name for t in tools]
        assert len(tools) == 32
        assert len(set(names)) == len(names)
        assert all(name.startswith("browser_") for name in names)

    def test_schemas_are_valid(self):
        for tool in create_browser_tools():
            jsonschema.validators.validator_for(tool.parameters).check_schema(tool.parameters)
            assert tool.description

    def test_registry(self):
        registry = create_browser_tool_registry()
        assert "browser_goto" in registry
        assert registry.get_tool_info("browser_goto").timeout == 45


class TestNavigation:
    @pytest.mark.asyncio
    async def test_goto(self, page):
        with patch.object(browser_tools.asyncio, "sleep", new=AsyncMock()):
            result = await browser_tools.goto(page, "https://example.com")
        page.goto.assert_awaited_once()
        assert "Title: Example Domain" in result

    @pytest.mark.asyncio
    async def test_goto_rejects_relative_url(self, page):
        with pytest.raises(ToolActionError, match="not an absolute"):
            await browser_tools.goto(page, "example.com")
        page.goto.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_google_encodes_query(self, page):
        await browser_tools.search_google(page, "python asyncio & locks")
        url = page.goto.await_args.args[0]
        assert url == "https://www.google.com/search?q=python+asyncio+%26+locks"


class TestReading:
    @pytest.mark.asyncio
    async def test_extract_text_missing_element(self, page):
        page.query_selector.return_value = None
        result = await browser_tools.extract_text(page, "#nope")
        assert result == "No element found for selector: #nope"

    @pytest.mark.asyncio
    async def test_extract_text_clips(self, page):
        element = MagicMock()
        element.inner_text = AsyncMock(return_value="  " + "a" * 50 + "  ")
        page.query_selector.return_value = element

        result = await browser_tools.extract_text(page, "main", max_chars=10)

        assert result == "Extracted text (10 chars) from main:\naaaaaaaaaa"

    @pytest.mark.asyncio
    async def test_visible_text(self, page):
        page.evaluate.return_value = "Hello world"
        result = await browser_tools.extract_visible_text(page)
        assert result == "Visible text (11 chars):\nHello world"


class TestInteraction:
    @pytest.mark.asyncio
    async def test_select_option_needs_value_or_label(self, page):
        with pytest.raises(ToolActionError):
            await browser_tools.select_option(page, "select#size")
        page.select_option.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_click_hidden_element(self, page):
        page.wait_for_selector = AsyncMock()
        element = MagicMock()
        element.is_visible = AsyncMock(return_value=False)
        page.query_selector.return_value = element

        with pytest.raises(ToolActionError, match="not visible"):
            await browser_tools.click(page, "#menu")
        page.click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_click_wait_failure_wrapped(self, page):
        page.wait_for_selector = AsyncMock(side_effect=TimeoutError("Timeout 10000ms exceeded"))

        with pytest.raises(ToolActionError, match="Could not click #menu: Timeout 10000ms exceeded"):
            await browser_tools.click(page, "#menu")

    @pytest.mark.asyncio
    async def test_type_text_with_enter(self, page):
        result = await browser_tools.type_text(page, "input[name=q]", "lola", press_enter=True)
        page.press.assert_awaited_once_with("input[name=q]", "Enter")
        assert result.endswith("and pressed Enter")

    @pytest.mark.asyncio
    async def test_frame_index_out_of_range(self, page):
        page.frames = [MagicMock()]
        with pytest.raises(ToolActionError, match="Invalid frame index 3"):
            await browser_tools.frame_click(page, 3, "button")
