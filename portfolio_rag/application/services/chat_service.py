"""
Chat service for portfolio Q&A.

Retrieves context for the latest user message, builds the system prompt
and streams the model's answer token by token. Conversation history is
supplied by the client on every request; nothing is persisted.

Dependencies: langchain_core, langchain_google_genai, portfolio_rag.core.prompt_builder
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from starlette.concurrency import run_in_threadpool

from portfolio_rag.application.services.retrieval_service import RetrievalService
from portfolio_rag.configs.llm import LLMSettings
from portfolio_rag.core.exceptions import ChatModelError, ValidationError
from portfolio_rag.core.prompt_builder import build_system_prompt
from portfolio_rag.models.chat import ChatMessage
from portfolio_rag.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def build_chat_model(settings: LLMSettings) -> BaseChatModel:
    """Create the Gemini chat model with a single attempt per request."""
    from langchain_google_genai import ChatGoogleGenerativeAI

    kwargs: dict = {}
    if settings.google_api_key:
        kwargs["google_api_key"] = settings.google_api_key

    return ChatGoogleGenerativeAI(
        model=settings.chat_model,
        temperature=settings.temperature,
        max_output_tokens=settings.max_output_tokens,
        timeout=settings.request_timeout,
        max_retries=1,
        **kwargs,
    )


def _chunk_text(content) -> str:
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else "")
            for item in content
        )
    return str(content) if content else ""


def to_langchain_messages(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    return [
        HumanMessage(content=m.content) if m.role == "user" else AIMessage(content=m.content)
        for m in messages
    ]


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates retrieval, prompt assembly and streaming generation.
    """

    def __init__(
        self,
        chat_model: BaseChatModel,
        retrieval_service: RetrievalService,
        display_name: str,
        top_k: int = 3,
    ) -> None:
        """
        Initialize chat service.

        Args:
            chat_model: LangChain chat model used for generation
            retrieval_service: Context retrieval
            display_name: Portfolio owner's name used in the prompt
            top_k: Passages retrieved per question
        """
        self.chat_model = chat_model
        self.retrieval_service = retrieval_service
        self.display_name = display_name
        self.top_k = top_k

    async def stream_answer(self, messages: Sequence[BaseMessage]) -> AsyncIterator[str]:
        """
        Stream text deltas from the chat model.

        Args:
            messages: System prompt followed by the conversation

        Yields:
            str: Non-empty text deltas in arrival order

        Raises:
            ChatModelError: If the provider fails at any point
        """
        token_count = 0
        try:
            # aclosing ends the provider stream as soon as this generator is closed
            async with aclosing(self.chat_model.astream(list(messages))) as stream:
                async for chunk in stream:
                    text = _chunk_text(chunk.content)
                    if text:
                        token_count += 1
                        yield text
        except ChatModelError:
            raise
        except Exception as e:
            logger.error(
                f"Chat model stream failed after {token_count} tokens: {type(e).__name__}: {e}"
            )
            raise ChatModelError(
                f"Failed to generate response: {e}",
                details={"error_type": type(e).__name__, "tokens_sent": token_count},
            ) from e

        logger.info(f"Chat stream finished, tokens={token_count}")

    async def stream_chat(self, messages: Sequence[ChatMessage]) -> AsyncIterator[str]:
        """
        Answer the latest user message with retrieved context.

        Flow:
        1. Validate the last message is a non-blank user message
        2. Retrieve context for it
        3. Build the system prompt and prepend it to the conversation
        4. Stream the answer

        Args:
            messages: Conversation, oldest first

        Yields:
            str: Answer text deltas

        Raises:
            ValidationError: If the last message is not a user message
            ChatModelError: If generation fails
        """
        if not messages:
            raise ValidationError("Invalid messages format", field="messages")
        last = messages[-1]
        if last.role != "user" or not last.content.strip():
            raise ValidationError("Last message must be a non-empty user message", field="messages")

        question = last.content
        context_items = await run_in_threadpool(self.retrieval_service.retrieve, question, self.top_k)
        log_with_context(
            logger,
            logging.INFO,
            f"Retrieved {len(context_items)} context passages",
            question=question,
            sources=[item.source for item in context_items],
        )

        system_prompt = build_system_prompt(self.display_name, context_items, question)
        conversation = [SystemMessage(content=system_prompt), *to_langchain_messages(messages)]

        async with aclosing(self.stream_answer(conversation)) as tokens:
            async for token in tokens:
                yield token
