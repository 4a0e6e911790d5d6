from typing import Dict, List, Any, Optional, Callable, Awaitable, Iterable
from pydantic import BaseModel, ConfigDict, Field


# handler(page, **arguments) -> observation text
ToolHandler = Callable[..., Awaitable[str]]


class ToolActionError(Exception):
    """Raised by a handler when the requested action cannot be carried out.

    The message is shown to the planner as-is, so it should say what to try next.
    """


class ToolSpec(BaseModel):
    """One named capability the planner may invoke"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        description="JSON Schema for the tool arguments"
    )
    handler: ToolHandler
    category: str = "general"
    requires_browser: bool = True
    timeout: Optional[float] = Field(None, description="Per-tool override of the executor timeout, in seconds")

    def to_openai_tool(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolRegistry:
    """Registry for managing available tools"""

    def __init__(self, tools: Optional[Iterable[ToolSpec]] = None):
        self.tools: Dict[str, ToolSpec] = {}
        self.tool_categories: Dict[str, List[str]] = {}

        for tool in tools or []:
            self.register_tool(tool)

    def register_tool(self, tool: ToolSpec):
        """Register a new tool"""

        if tool.name in self.tools:
            raise ValueError(f"Tool already registered: {tool.name}")

        self.tools[tool.name] = tool

        if tool.category not in self.tool_categories:
            self.tool_categories[tool.category] = []
        self.tool_categories[tool.category].append(tool.name)

    def get_tool_info(self, name: str) -> Optional[ToolSpec]:
        """Get a specific tool, or None if it is not registered"""

        return self.tools.get(name)

    def get_available_tools(self) -> List[ToolSpec]:
        return list(self.tools.values())

    def get_tools_by_category(self, category: str) -> List[ToolSpec]:
        tool_names = self.tool_categories.get(category, [])
        return [self.tools[name] for name in tool_names if name in self.tools]

    def search_tools(self, query: str) -> List[ToolSpec]:
        """Search tools by name or description"""

        query_lower = query.lower()
        return [
            tool for tool in self.tools.values()
            if query_lower in tool.name.lower() or query_lower in tool.description.lower()
        ]

    def as_openai_tools(self) -> List[Dict[str, Any]]:
        """Tool catalog in the function-calling format accepted by bind_tools"""

        return [tool.to_openai_tool() for tool in self.tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)
