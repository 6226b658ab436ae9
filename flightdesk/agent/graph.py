"""
LangGraph dispatch round: one user turn in, one reply out.

Architecture:
    [agent] → has tool call? → Yes → [dispatch] → [END]
                             → No  → [END]  → model text is the reply

Unlike a ReAct loop the tool result is not fed back to the model: the string
produced by the dispatcher is the assistant's turn. When the model returns
several tool calls only the first one is executed.

Each ScheduleAssistant compiles its own graph on first use, bound to the store
and weather client it was built with.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from langgraph.graph import StateGraph, END
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from flightdesk.agent.catalog import tool_schemas
from flightdesk.agent.dispatch import APOLOGY, ToolDispatcher
from flightdesk.agent.llm import get_llm
from flightdesk.agent.prompts import build_system_prompt
from flightdesk.agent.state import AgentState
from flightdesk.models.chat import ChatTurn
from flightdesk.schedule.store import ScheduleStore

logger = logging.getLogger("flightdesk-agent")

EMPTY_REPLY = "No response from AI."


@dataclass
class TurnResult:
    answer: str
    tool_used: str | None = None
    data_changed: bool = False
    history: list[ChatTurn] = field(default_factory=list)


def first_tool_request(message: BaseMessage) -> tuple[str | None, str | dict | None] | None:
    """(name, arguments) of the first tool call on an AI message, or None.

    Calls whose arguments failed to parse show up in `invalid_tool_calls` with
    the raw string; they are returned as-is so the dispatcher can reject them.
    """
    tool_calls = getattr(message, "tool_calls", None) or []
    invalid = getattr(message, "invalid_tool_calls", None) or []
    if len(tool_calls) + len(invalid) > 1:
        logger.info("Model requested %d tool calls, executing only the first",
                    len(tool_calls) + len(invalid))
    if tool_calls:
        return tool_calls[0]["name"], tool_calls[0]["args"]
    if invalid:
        return invalid[0].get("name"), invalid[0].get("args")
    return None


def message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class ScheduleAssistant:
    def __init__(self, store: ScheduleStore, weather, llm=None,
                 on_data_changed: Callable[[], None] | None = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.dispatcher = ToolDispatcher(store, weather, on_data_changed)
        self._llm = llm
        self._clock = clock
        self._compiled = None

    def _build_graph(self) -> StateGraph:
        """Wire up agent → (dispatch) → END."""

        llm = (self._llm or get_llm()).bind_tools(tool_schemas())

        def agent_node(state: AgentState) -> dict:
            response = llm.invoke(state["messages"])
            return {"messages": [response]}

        def should_dispatch(state: AgentState) -> str:
            if first_tool_request(state["messages"][-1]) is not None:
                return "dispatch"
            return END

        def dispatch_node(state: AgentState) -> dict:
            name, arguments = first_tool_request(state["messages"][-1])
            outcome = self.dispatcher.dispatch(name, arguments)
            return {
                "answer": outcome.message,
                "tool_used": name,
                "data_changed": outcome.data_changed,
                "system_note": outcome.system_note,
            }

        graph = StateGraph(AgentState)
        graph.add_node("agent", agent_node)
        graph.add_node("dispatch", dispatch_node)
        graph.set_entry_point("agent")
        graph.add_conditional_edges("agent", should_dispatch, {"dispatch": "dispatch", END: END})
        graph.add_edge("dispatch", END)

        return graph

    def _get_graph(self):
        if self._compiled is None:
            self._compiled = self._build_graph().compile()
        return self._compiled

    def build_messages(self, message: str, history: list[ChatTurn]) -> list[BaseMessage]:
        """Preamble + prior turns + the new user turn.

        System turns from the history are folded into the preamble, since the
        chat model only accepts a system message at the start.
        """
        notes = [turn.content for turn in history if turn.role == "system"]
        messages: list[BaseMessage] = [
            SystemMessage(content=build_system_prompt(self.store.get_flights(), self._clock(), notes))
        ]
        for turn in history:
            if turn.role == "user":
                messages.append(HumanMessage(content=turn.content))
            elif turn.role == "assistant":
                messages.append(AIMessage(content=turn.content))
        messages.append(HumanMessage(content=message))
        return messages

    async def ask(self, message: str, history: list[ChatTurn] | None = None) -> TurnResult:
        """Run one round and return the reply plus the extended history.

        Never raises: a failing model call becomes the generic apology.
        """
        history = list(history or [])
        user_turn = ChatTurn(role="user", content=message)

        try:
            graph = self._get_graph()
            result = await graph.ainvoke(
                {"messages": self.build_messages(message, history)},
                config={"recursion_limit": 5},
            )
        except Exception as e:
            logger.exception("Agent round failed: %s", e)
            return TurnResult(
                answer=APOLOGY,
                history=history + [user_turn, ChatTurn(role="assistant", content=APOLOGY)],
            )

        answer = result.get("answer") or message_text(result["messages"][-1]) or EMPTY_REPLY
        turns = [user_turn, ChatTurn(role="assistant", content=answer)]
        if result.get("system_note"):
            turns.append(ChatTurn(role="system", content=result["system_note"]))

        return TurnResult(
            answer=answer,
            tool_used=result.get("tool_used"),
            data_changed=bool(result.get("data_changed")),
            history=history + turns,
        )
