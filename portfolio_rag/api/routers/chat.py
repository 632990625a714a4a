"""
Streaming chat endpoint.

Routes: POST /chat

The response is a text/event-stream of `token` events followed by one
`complete` event. Errors raised before the first token become ordinary
JSON error responses; errors after streaming has started are sent as an
`error` event because the status line has already been written.

Dependencies: portfolio_rag.application.services.chat_service
System role: Server-sent events chat HTTP API
"""

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from portfolio_rag.api.deps import get_chat_service
from portfolio_rag.application.services.chat_service import ChatService
from portfolio_rag.core.exceptions import PortfolioRAGException
from portfolio_rag.models.chat import ChatRequest
from portfolio_rag.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.post("/chat")
async def chat(
    request: Request,
    body: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Stream an answer to the latest user message.

    Args:
        request: Incoming request, polled for client disconnects
        body: Conversation, oldest first
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: Server-sent events
    """
    tokens = chat_service.stream_chat(body.messages)

    # Pull the first token before committing to a 200 so early failures
    # still produce a proper status code
    try:
        first_token = await anext(tokens)
    except StopAsyncIteration:
        first_token = None

    return StreamingResponse(
        _event_stream(request, tokens, first_token),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


async def _event_stream(
    request: Request,
    tokens: AsyncIterator[str],
    first_token: str | None,
) -> AsyncIterator[str]:
    parts: list[str] = []
    try:
        if first_token is not None:
            parts.append(first_token)
            yield StreamEvent(event=StreamEventType.TOKEN, data={"token": first_token, "index": 0}).to_sse()

        async for token in tokens:
            if await request.is_disconnected():
                logger.info(f"Client disconnected after {len(parts)} tokens")
                return
            parts.append(token)
            yield StreamEvent(
                event=StreamEventType.TOKEN,
                data={"token": token, "index": len(parts) - 1},
            ).to_sse()

        yield StreamEvent(event=StreamEventType.COMPLETE, data={"full_answer": "".join(parts)}).to_sse()
    except PortfolioRAGException as e:
        logger.error(f"Chat stream failed after {len(parts)} tokens: {e}")
        yield StreamEvent(
            event=StreamEventType.ERROR,
            data={"code": type(e).__name__, "message": e.message},
        ).to_sse()
    finally:
        await tokens.aclose()
