"""
Portfolio assistant system prompt.

Defines the system prompt template that grounds answers in retrieved
knowledge base passages.

Dependencies: langchain_core.prompts
System role: Prompt template for the chat assistant
"""

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

from portfolio_rag.models.chat import RetrievedContext

NO_CONTEXT_MESSAGE = "No relevant context found in knowledge base."

SYSTEM_PROMPT = """You are the AI assistant on {persona_name}'s portfolio website. You speak about {persona_name} in the third person and help visitors learn about their professional background, skills, projects and experience.

## Context from knowledge base
{context}

## Instructions
1. Use the provided context to give accurate, specific answers about {persona_name}
2. Higher relevance scores indicate passages that better match the question
3. If the context does not contain the answer, say that you don't have that information rather than guessing
4. Be conversational, friendly and concise; use short paragraphs or bullet points for lists
5. Stay on topic: answer questions about {persona_name}'s work, skills, projects, education and how to get in touch
6. For unrelated requests (general trivia, coding help, opinions on other people), politely redirect the visitor to ask about {persona_name}
7. Never invent contact details, employers, dates or credentials that are not in the context

## Question
{question}"""

SYSTEM_PROMPT_TEMPLATE = PromptTemplate.from_template(SYSTEM_PROMPT)


def format_context(context_items: Sequence[RetrievedContext]) -> str:
    """
    Render retrieved passages as a ranked context block.

    Args:
        context_items: Passages ordered by relevance

    Returns:
        str: One block per passage with rank, score and source
    """
    if not context_items:
        return NO_CONTEXT_MESSAGE

    blocks = [
        f"[{rank}] (relevance: {item.score:.2f}) Source: {item.source}\n{item.content.strip()}"
        for rank, item in enumerate(context_items, start=1)
    ]
    return "\n\n".join(blocks)


def build_system_prompt(
    persona_name: str,
    context_items: Sequence[RetrievedContext],
    question: str,
) -> str:
    """
    Assemble the system prompt for one chat turn.

    Args:
        persona_name: Name of the portfolio owner
        context_items: Retrieved passages
        question: Latest user question

    Returns:
        str: Complete system prompt
    """
    return SYSTEM_PROMPT_TEMPLATE.format(
        persona_name=persona_name,
        context=format_context(context_items),
        question=question.strip(),
    )
