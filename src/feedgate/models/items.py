from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PreprintRecord(BaseModel):
    """One paper extracted from an arXiv Atom entry block.

    Every field is optional at extraction time; the research aggregator
    drops records without a title.
    """

    title: str | None = None
    summary: str | None = None
    authors: list[str] = Field(default_factory=list)
    link: str | None = None  # Atom <id>, the abs page URL
    published: str | None = None  # Raw Atom timestamp, e.g. "2026-10-17T17:59:58Z"
    category: str


class Community(BaseModel):
    name: str
    category: str
    members: str
    url: str
    description: str


class QuizQuestion(BaseModel):
    id: int
    category: str
    question: str
    options: list[str]
    correct: int  # Index into options
    difficulty: str


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=2000)
    room: str | None = None


class ChatReply(BaseModel):
    success: bool = True
    response: str
    room: str
    timestamp: datetime
