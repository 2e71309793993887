"""Static reference data and the placeholder chat responder."""

from __future__ import annotations

import random
from datetime import UTC, datetime

from feedgate.models.items import ChatReply, ChatRequest, Community, QuizQuestion

COMMUNITIES: list[Community] = [
    Community(
        name="Hacker News",
        category="News",
        members="5M+",
        url="https://news.ycombinator.com",
        description="Tech news and discussions",
    ),
    Community(
        name="Reddit r/programming",
        category="Discussion",
        members="6M+",
        url="https://reddit.com/r/programming",
        description="Programming discussions",
    ),
    Community(
        name="Dev.to",
        category="Blogging",
        members="1M+",
        url="https://dev.to",
        description="Developer community",
    ),
    Community(
        name="Stack Overflow",
        category="Q&A",
        members="20M+",
        url="https://stackoverflow.com",
        description="Programming Q&A",
    ),
    Community(
        name="GitHub",
        category="Code",
        members="100M+",
        url="https://github.com",
        description="Code hosting platform",
    ),
    Community(
        name="Product Hunt",
        category="Products",
        members="5M+",
        url="https://producthunt.com",
        description="New product launches",
    ),
    Community(
        name="Indie Hackers",
        category="Startup",
        members="500K+",
        url="https://indiehackers.com",
        description="Indie maker community",
    ),
    Community(
        name="Hashnode",
        category="Blogging",
        members="500K+",
        url="https://hashnode.com",
        description="Developer blogging",
    ),
]

QUIZ_QUESTIONS: list[QuizQuestion] = [
    QuizQuestion(
        id=1,
        category="Web Dev",
        question="What does HTML stand for?",
        options=[
            "Hyper Text Markup Language",
            "High Tech Modern Language",
            "Home Tool Markup Language",
            "Hyperlinks and Text Markup Language",
        ],
        correct=0,
        difficulty="easy",
    ),
    QuizQuestion(
        id=2,
        category="JavaScript",
        question="Which company developed JavaScript?",
        options=["Microsoft", "Netscape", "Google", "Mozilla"],
        correct=1,
        difficulty="medium",
    ),
    QuizQuestion(
        id=3,
        category="AI/ML",
        question="What does GPU stand for?",
        options=[
            "General Processing Unit",
            "Graphics Processing Unit",
            "Global Processing Unit",
            "Graphical Performance Unit",
        ],
        correct=1,
        difficulty="easy",
    ),
]

CANNED_REPLIES: list[str] = [
    "That's an interesting question! Let me think about it...",
    "Great point! Here's what I know about that...",
    "I can help with that! Based on my knowledge...",
    "Excellent question! The answer is...",
]


def reply_to(request: ChatRequest) -> ChatReply:
    """Answer a chat message with a canned reply. No model behind it yet."""
    return ChatReply(
        response=random.choice(CANNED_REPLIES),
        room=request.room or "general",
        timestamp=datetime.now(UTC),
    )
