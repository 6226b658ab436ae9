"""
Shared state that flows between the nodes of one dispatch round.

`messages` uses the `add_messages` reducer so the agent node's reply is
appended to the preamble and history instead of replacing them. The other
keys are filled in by the dispatch node when the model asks for a tool.
"""
from typing import Annotated
from typing_extensions import TypedDict
from langgraph.graph.message import add_messages
from langchain_core.messages import BaseMessage


class AgentState(TypedDict, total=False):
    # Preamble, prior turns, the new user turn and the model's response
    messages: Annotated[list[BaseMessage], add_messages]
    answer: str
    tool_used: str | None
    data_changed: bool
    system_note: str | None
