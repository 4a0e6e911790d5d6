from typing import Any, Protocol, AsyncContextManager
import asyncio
import time
import structlog

from lola.domain.models.agent_state import ToolInvocation, ToolResult
from lola.domain.tool.tool_registry import ToolActionError, ToolRegistry
from lola.domain.tool.tool_validator import ToolParameterValidator
from lola.infrastructure.observability.logging import agent_logger, metrics

logger = structlog.get_logger(__name__)

# Metric label for names the registry does not know
UNKNOWN_TOOL_METRIC = "unknown"


class SharedBrowser(Protocol):
    def acquire(self) -> AsyncContextManager[Any]: ...


# Execution with validation, serialization on the shared browser and timeouts
class ToolExecutor:
    """Runs registry tools; every failure becomes an error result, never an exception"""

    def __init__(
        self,
        registry: ToolRegistry,
        browser: SharedBrowser,
        default_timeout: float = 30.0,
        preview_chars: int = 200
    ):
        self.registry = registry
        self.browser = browser
        self.default_timeout = default_timeout
        self.preview_chars = preview_chars

    async def execute(self, invocation: ToolInvocation, session_id: str = "") -> ToolResult:
        """Look up, validate and run one tool invocation"""

        start = time.perf_counter()
        result = await self._execute(invocation)
        result.duration_ms = (time.perf_counter() - start) * 1000

        metric_name = self._metric_name(invocation)
        metrics.record_latency(f"tool.{metric_name}", result.duration_ms)
        if not result.success:
            metrics.increment_counter("tool.failures", tags={"tool": metric_name})

        agent_logger.log_tool_execution(
            tool_name=invocation.name,
            session_id=session_id,
            input_data=invocation.arguments,
            output_preview=result.output[:self.preview_chars] if result.success else None,
            duration_ms=round(result.duration_ms, 1),
            success=result.success,
            error=result.error
        )
        return result

    def _metric_name(self, invocation: ToolInvocation) -> str:
        if invocation.malformed_reason or invocation.name not in self.registry:
            return UNKNOWN_TOOL_METRIC
        return invocation.name

    async def _execute(self, invocation: ToolInvocation) -> ToolResult:
        name = invocation.name

        if invocation.malformed_reason:
            return self._failure(name, f"Invalid arguments for {name or 'tool call'}: {invocation.malformed_reason}")

        tool = self.registry.get_tool_info(name)
        if tool is None:
            available = ", ".join(sorted(t.name for t in self.registry.get_available_tools())) or "none"
            return self._failure(name, f"Unknown tool '{name}'. Available tools: {available}")

        validation = ToolParameterValidator.validate_tool_call(tool, invocation.arguments)
        if not validation.is_valid:
            return self._failure(name, "; ".join(validation.errors))

        timeout = tool.timeout or self.default_timeout

        try:
            if tool.requires_browser:
                async with self.browser.acquire() as page:
                    output = await asyncio.wait_for(tool.handler(page, **invocation.arguments), timeout)
            else:
                output = await asyncio.wait_for(tool.handler(None, **invocation.arguments), timeout)

        except asyncio.TimeoutError:
            return self._failure(name, f"{name} timed out after {timeout:g}s")
        except ToolActionError as e:
            return self._failure(name, str(e))
        except Exception as e:
            logger.debug("Tool raised", tool_name=name, exc_info=True)
            return self._failure(name, f"{name} failed: {e}")

        return ToolResult(tool_name=name, success=True, output=str(output))

    @staticmethod
    def _failure(name: str, error: str) -> ToolResult:
        return ToolResult(tool_name=name, success=False, error=error)
