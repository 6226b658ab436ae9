"""
The five tools the agent may call, in the order they are advertised.

This is configuration data: each ToolSpec is rendered to a function-calling
JSON schema and bound to the model on every turn. The description is what the
model reads to decide when to call a tool, so keep it specific. Execution of
the tools lives in dispatch.py.
"""
from pydantic import BaseModel


class ToolParameter(BaseModel):
    type: str = "string"
    description: str
    required: bool = False


class ToolSpec(BaseModel):
    name: str
    description: str
    parameters: dict[str, ToolParameter] = {}

    @property
    def required(self) -> list[str]:
        return [name for name, param in self.parameters.items() if param.required]

    def to_schema(self) -> dict:
        """Render as an OpenAI-style function tool (accepted by ChatAnthropic.bind_tools)."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {
                        name: {"type": param.type, "description": param.description}
                        for name, param in self.parameters.items()
                    },
                    "required": self.required,
                },
            },
        }


TOOL_CATALOG: list[ToolSpec] = [
    ToolSpec(
        name="check_warnings",
        description="Check for double-booked aircraft (same plane, overlapping times) in the current flight schedule.",
    ),
    ToolSpec(
        name="add_flight",
        description="Add a new flight to the schedule.",
        parameters={
            "departureAirport": ToolParameter(description="Departure airport code (e.g., JFK)", required=True),
            "arrivalAirport": ToolParameter(description="Arrival airport code (e.g., SFO)", required=True),
            "aircraftId": ToolParameter(description="Aircraft ID (e.g., A1, A2, A3)", required=True),
            "departureTime": ToolParameter(description="Departure time as ISO string", required=True),
        },
    ),
    ToolSpec(
        name="edit_flight",
        description="Edit an existing flight. Provide the flightId and any fields to update.",
        parameters={
            "flightId": ToolParameter(description="ID of the flight to edit", required=True),
            "departureAirport": ToolParameter(description="New departure airport code (optional)"),
            "arrivalAirport": ToolParameter(description="New arrival airport code (optional)"),
            "aircraftId": ToolParameter(description="New aircraft ID (optional)"),
            "departureTime": ToolParameter(description="New departure time as ISO string (optional)"),
        },
    ),
    ToolSpec(
        name="delete_flight",
        description="Delete a flight from the schedule. Provide the flightId.",
        parameters={
            "flightId": ToolParameter(description="ID of the flight to delete", required=True),
        },
    ),
    ToolSpec(
        name="check_weather",
        description="Check the weather forecast for a flight. Provide the flightId.",
        parameters={
            "flightId": ToolParameter(description="ID of the flight to check weather for", required=True),
        },
    ),
]


def get_tool(name: str) -> ToolSpec | None:
    for spec in TOOL_CATALOG:
        if spec.name == name:
            return spec
    return None


def tool_schemas() -> list[dict]:
    return [spec.to_schema() for spec in TOOL_CATALOG]
