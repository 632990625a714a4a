"""
Heuristic chunk classifier.

Tags chunks with content type, category, importance and technology
keywords by matching fixed keyword lists against the lower-cased file name
and text. Rules are checked in order and the first match wins. False
positives are expected.

Dependencies: portfolio_rag.models.classification
System role: Metadata enrichment during document ingestion
"""

from portfolio_rag.models.classification import (
    Category,
    Classification,
    ContentType,
    Importance,
)

CONTENT_TYPE_RULES: list[tuple[ContentType, tuple[str, ...]]] = [
    (ContentType.SKILL, ("skill", "programming", "proficien", "tech stack", "languages", "frameworks")),
    (ContentType.PROJECT, ("project", "portfolio", "built ", "developed", "github.com", "case study")),
    (ContentType.EXPERIENCE, ("experience", "employment", "worked at", "work history", "internship", "position")),
    (ContentType.EDUCATION, ("education", "university", "degree", "bachelor", "master", "college", "certification")),
    (ContentType.CONTACT, ("contact", "email", "phone", "linkedin", "reach me", "@")),
]

CATEGORY_RULES: list[tuple[Category, tuple[str, ...]]] = [
    (Category.BLOCKCHAIN, ("blockchain", "solidity", "web3", "ethereum", "smart contract", "defi", "nft")),
    (Category.AI, ("machine learning", "artificial intelligence", "llm", "langchain", "neural", "openai", "nlp", "rag ")),
    (Category.FRONTEND, ("frontend", "front-end", "react", "next.js", "vue", "angular", "tailwind", "css", "html")),
    (Category.BACKEND, ("backend", "back-end", "node.js", "express", "fastapi", "django", "flask", "rest api", "graphql")),
    (Category.DATABASE, ("database", "postgres", "mysql", "mongodb", "redis", "sql", "vector store")),
    (Category.DEVOPS, ("devops", "docker", "kubernetes", "ci/cd", "terraform", "aws", "deployment")),
]

IMPORTANCE_RULES: list[tuple[Importance, tuple[str, ...]]] = [
    (Importance.HIGH, ("resume", "cv", "about", "summary", "skill", "experience", "profile")),
    (Importance.LOW, ("hobby", "hobbies", "misc", "draft", "archive")),
]

TECH_VOCABULARY: tuple[str, ...] = (
    "python",
    "javascript",
    "typescript",
    "react",
    "next.js",
    "vue",
    "angular",
    "node.js",
    "express",
    "fastapi",
    "django",
    "solidity",
    "ethereum",
    "web3",
    "rust",
    "java",
    "docker",
    "kubernetes",
    "aws",
    "postgresql",
    "mongodb",
    "redis",
    "graphql",
    "tailwind",
    "langchain",
    "openai",
    "tensorflow",
    "pytorch",
)


def _first_match(haystack: str, rules, default):
    for value, keywords in rules:
        if any(keyword in haystack for keyword in keywords):
            return value
    return default


def extract_tags(text: str) -> list[str]:
    """Return vocabulary terms present in the text, in vocabulary order."""
    lowered = text.lower()
    return [term for term in TECH_VOCABULARY if term in lowered]


def classify(file_name: str, text: str) -> Classification:
    """
    Classify a chunk of portfolio text.

    Args:
        file_name: Name of the uploaded file
        text: Chunk text

    Returns:
        Classification: Content type, category, importance and tags
    """
    haystack = f"{file_name.lower()} {text.lower()}"
    return Classification(
        content_type=_first_match(haystack, CONTENT_TYPE_RULES, ContentType.GENERAL),
        category=_first_match(haystack, CATEGORY_RULES, Category.GENERAL),
        importance=_first_match(haystack, IMPORTANCE_RULES, Importance.MEDIUM),
        tags=extract_tags(text),
    )
