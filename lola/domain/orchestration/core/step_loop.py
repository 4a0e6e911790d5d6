from typing import TypedDict, Annotated, List, Dict, Any, Optional, Literal, Sequence
from langgraph.graph import StateGraph, END
from langgraph.graph.message import add_messages
from langchain_core.messages import BaseMessage, AIMessage, HumanMessage, SystemMessage, ToolMessage
import structlog

from lola.domain.models.agent_state import AgentStatus, ToolInvocation, message_text, has_tool_requests
from lola.domain.prompts.system_prompt import create_system_prompt
from lola.domain.tool.tool_executor import ToolExecutor
from lola.infrastructure.llm.planner import Planner
from lola.infrastructure.observability.logging import agent_logger

logger = structlog.get_logger(__name__)

DEFAULT_STEP_LIMIT = 60


class WorkflowState(TypedDict):
    """State for the plan/act graph"""
    messages: Annotated[List[BaseMessage], add_messages]
    step_count: int
    step_limit: int
    session_id: str


class StepLoop:
    """Bounded plan/act/observe cycle driving one job.

    ``planner`` (Think) either answers or requests tools; ``tool_executor``
    (Act + Observe) runs every requested call and counts one step for the
    whole batch. Once ``step_count`` reaches ``step_limit`` the graph leaves
    through ``limit_reached`` instead of planning again, so a job makes at most
    ``step_limit`` tool rounds.
    """

    def __init__(
        self,
        planner: Planner,
        tool_executor: ToolExecutor,
        system_prompt: Optional[SystemMessage] = None,
        step_limit: int = DEFAULT_STEP_LIMIT
    ):
        if step_limit < 1:
            raise ValueError(f"step_limit must be at least 1, got {step_limit}")

        self.planner = planner
        self.tool_executor = tool_executor
        self.system_prompt = system_prompt or create_system_prompt()
        self.step_limit = step_limit
        self.workflow = self._create_workflow()

    def _create_workflow(self):
        """Create the Think/Act/Observe graph"""

        workflow = StateGraph(WorkflowState)

        workflow.add_node(AgentStatus.THINKING.value, self.planning_node)
        workflow.add_node(AgentStatus.EXECUTING.value, self.tool_execution_node)
        workflow.add_node(AgentStatus.STEP_LIMIT.value, self.step_limit_node)

        workflow.set_entry_point(AgentStatus.THINKING.value)

        workflow.add_conditional_edges(
            AgentStatus.THINKING.value,
            self.route_after_planning,
            {
                "act": AgentStatus.EXECUTING.value,
                "done": END
            }
        )

        workflow.add_conditional_edges(
            AgentStatus.EXECUTING.value,
            self.route_after_tools,
            {
                "think": AgentStatus.THINKING.value,
                "limit": AgentStatus.STEP_LIMIT.value
            }
        )

        workflow.add_edge(AgentStatus.STEP_LIMIT.value, END)

        return workflow.compile()

    async def run(
        self,
        messages: Sequence[BaseMessage],
        step_limit: Optional[int] = None,
        session_id: str = ""
    ) -> List[BaseMessage]:
        """Drive one job; returns the input turns followed by every turn produced"""

        limit = step_limit or self.step_limit

        initial_state: WorkflowState = {
            "messages": list(messages),
            "step_count": 0,
            "step_limit": limit,
            "session_id": session_id
        }

        # Each cycle visits two nodes; the graph's own limit must never fire first
        config = {"recursion_limit": 2 * limit + 5}

        result = await self.workflow.ainvoke(initial_state, config=config)
        return list(result["messages"])

    async def planning_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Think: ask the planner for an answer or tool calls"""

        logger.debug("Planning", session_id=state["session_id"], step_count=state["step_count"])

        prompt = [self.system_prompt, *self._planner_view(state["messages"])]
        response = await self.planner.ainvoke(prompt)

        return {"messages": [response]}

    async def tool_execution_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Act + Observe: run each requested tool and record its observation"""

        last_message = state["messages"][-1]
        invocations = [ToolInvocation.from_tool_call(call) for call in last_message.tool_calls]
        invocations += [ToolInvocation.from_invalid_tool_call(call) for call in last_message.invalid_tool_calls]

        observations = []
        for invocation in invocations:
            result = await self.tool_executor.execute(invocation, session_id=state["session_id"])
            observations.append(
                ToolMessage(
                    content=result.to_observation(),
                    tool_call_id=invocation.id,
                    name=invocation.name or None,
                    status="success" if result.success else "error"
                )
            )

        return {"messages": observations, "step_count": state["step_count"] + 1}

    async def step_limit_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Done without an answer: close the job with the best text available"""

        logger.warning(
            "Step limit reached",
            session_id=state["session_id"],
            step_limit=state["step_limit"]
        )

        best_text = self._latest_assistant_text(state["messages"])
        if not best_text:
            best_text = f"Stopped after {state['step_limit']} steps without a final answer."

        return {"messages": [AIMessage(content=best_text)]}

    def route_after_planning(self, state: WorkflowState) -> Literal["act", "done"]:
        last_message = state["messages"][-1]
        decision = "act" if has_tool_requests(last_message) else "done"

        agent_logger.log_step_transition(
            session_id=state["session_id"],
            from_node=AgentStatus.THINKING.value,
            to_node=AgentStatus.EXECUTING.value if decision == "act" else AgentStatus.DONE.value,
            step_count=state["step_count"],
            step_limit=state["step_limit"]
        )
        return decision

    def route_after_tools(self, state: WorkflowState) -> Literal["think", "limit"]:
        decision = "limit" if state["step_count"] >= state["step_limit"] else "think"

        agent_logger.log_step_transition(
            session_id=state["session_id"],
            from_node=AgentStatus.EXECUTING.value,
            to_node=AgentStatus.STEP_LIMIT.value if decision == "limit" else AgentStatus.THINKING.value,
            step_count=state["step_count"],
            step_limit=state["step_limit"]
        )
        return decision

    @staticmethod
    def _planner_view(messages: Sequence[BaseMessage]) -> List[BaseMessage]:
        """History as sent to the planner.

        FIFO eviction can leave tool results at the head whose requesting
        assistant turn is gone; the planner API rejects those, so they are
        skipped here. Stored memory is untouched.
        """

        start = 0
        while start < len(messages) and isinstance(messages[start], ToolMessage):
            start += 1
        return list(messages[start:])

    @staticmethod
    def _latest_assistant_text(messages: Sequence[BaseMessage]) -> str:
        """Most recent non-empty assistant text of the current job"""

        for message in reversed(messages):
            if isinstance(message, HumanMessage):
                break
            if isinstance(message, AIMessage):
                text = message_text(message).strip()
                if text:
                    return text
        return ""
