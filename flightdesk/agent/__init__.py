"""
Schedule assistant: natural language commands against the flight schedule.

Usage:
    from flightdesk.agent import ScheduleAssistant
    assistant = ScheduleAssistant(store, weather_client)
    result = await assistant.ask("Move F2 to 3pm", history)
    # result.answer == "Flight F2 has been updated.", result.data_changed is True
"""
from flightdesk.agent.dispatch import ToolDispatcher, ToolOutcome
from flightdesk.agent.graph import ScheduleAssistant, TurnResult

__all__ = ["ScheduleAssistant", "ToolDispatcher", "ToolOutcome", "TurnResult"]
