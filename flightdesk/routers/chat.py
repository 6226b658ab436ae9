"""
Chat router: natural language commands against the schedule.

One request is one dispatch round: the model either answers in text or picks
a tool, the tool runs against the shared store, and the reply comes back with
the extended conversation history. `data_changed` tells the client to re-read
GET /flights.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from flightdesk.agent import ScheduleAssistant
from flightdesk.config import settings
from flightdesk.dependencies import get_assistant
from flightdesk.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger("flightdesk-api.chat")

router = APIRouter()


@router.post("/", response_model=ChatResponse)
async def chat(request: ChatRequest, assistant: ScheduleAssistant = Depends(get_assistant)):
    """Run one round of the schedule assistant and return its reply."""

    # Checked per request so the schedule endpoints work without a key
    if not settings.anthropic_api_key:
        raise HTTPException(
            status_code=503,
            detail="Chat is unavailable: ANTHROPIC_API_KEY not configured",
        )

    try:
        result = await assistant.ask(request.message, request.history)
    except Exception as e:
        logger.exception("Agent error: %s", e)
        raise HTTPException(status_code=500, detail=f"Agent error: {str(e)}")

    return ChatResponse(
        answer=result.answer,
        tool_used=result.tool_used,
        data_changed=result.data_changed,
        history=result.history,
    )
