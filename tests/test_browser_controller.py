"""Tests for the shared browser guard, with the Playwright launch stubbed out."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from lola.domain.models.agent_state import ToolInvocation
from lola.domain.tool.tool_executor import ToolExecutor
from lola.domain.tool.tool_registry import ToolRegistry
from lola.infrastructure.browser.browser_controller import BrowserController

from tests.conftest import FakePage, make_tools


@pytest.fixture
def controller():
    controller = BrowserController()
    controller._ensure_page = AsyncMock(return_value=FakePage())
    return controller


class TestBrowserController:
    @pytest.mark.asyncio
    async def test_concurrent_acquire_never_overlaps(self, controller):
        active = 0
        overlaps = []

        async def use_page(name):
            nonlocal active
            async with controller.acquire() as page:
                active += 1
                overlaps.append(active)
                assert controller.in_use
                await asyncio.sleep(0.01)
                page.actions.append(name)
                active -= 1

        await asyncio.gather(*[use_page(str(i)) for i in range(4)])

        assert max(overlaps) == 1
        assert not controller.in_use
        assert controller._ensure_page.await_count == 4

    @pytest.mark.asyncio
    async def test_lock_released_when_action_raises(self, controller):
        with pytest.raises(ValueError):
            async with controller.acquire():
                raise ValueError("selector not found")

        assert not controller.in_use

    @pytest.mark.asyncio
    async def test_acquire_after_close_raises(self, controller):
        await controller.close()

        with pytest.raises(RuntimeError, match="closed"):
            async with controller.acquire():
                pass

    @pytest.mark.asyncio
    async def test_executor_reports_closed_browser(self, controller):
        executor = ToolExecutor(ToolRegistry(make_tools()), controller, default_timeout=1.0)
        await controller.close()

        result = await executor.execute(ToolInvocation(id="call_1", name="echo", arguments={"text": "hi"}))

        assert not result.success
        assert result.error == "echo failed: Browser has been closed"

    @pytest.mark.asyncio
    async def test_close_twice_is_safe(self):
        controller = BrowserController()
        browser = AsyncMock()
        context = AsyncMock()
        driver = AsyncMock()
        controller._browser, controller._context, controller._playwright = browser, context, driver

        await controller.close()
        await controller.close()

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        driver.stop.assert_awaited_once()
        assert not controller.is_started

    @pytest.mark.asyncio
    async def test_close_survives_resource_errors(self):
        controller = BrowserController()
        controller._browser = AsyncMock()
        controller._browser.close.side_effect = RuntimeError("target closed")

        await controller.close()

        assert controller._browser is None
