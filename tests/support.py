"""Shared fixtures for API tests: in-memory SQLite app, seed data and session cookies."""

import unittest
from datetime import datetime, timezone
from functools import lru_cache

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from brainfeed.core.config import Settings
from brainfeed.core.security import hash_password
from brainfeed.main import create_app
from brainfeed.models import Article, Author, Base, Category, User
from brainfeed.schemas.auth import SessionData

TEST_PASSWORD = "password123"
API = "/api/v1"


@lru_cache
def _test_password_hash() -> str:
    # Minimum bcrypt cost keeps the suite fast
    return hash_password(TEST_PASSWORD, rounds=4)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "SESSION_SECRET": "test-session-secret",
        "LLM_BASE_URL": "http://llm.test/v1",
        "LLM_MODEL": "test-model",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_memory_session_factory() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_content(db: Session) -> dict[str, int]:
    """Insert two staff users, two categories, two authors and four articles (one per state)."""
    admin = User(username="admin", password_hash=_test_password_hash(), role="admin", name="Admin User")
    writer = User(username="writer1", password_hash=_test_password_hash(), role="writer", name="Writer One")
    tech = Category(name="Tech & AI", slug="tech-ai", description="AI, coding, security")
    science = Category(name="Science & STEM", slug="science-stem", description=None)
    chen = Author(name="Dr. Sarah Chen", avatar="https://img.test/chen.png", role="Science Editor")
    johnson = Author(name="Marcus Johnson", avatar="https://img.test/mj.png", role="Tech Reporter")
    db.add_all([admin, writer, tech, science, chen, johnson])
    db.flush()

    def article(slug: str, title: str, status: str, category: Category, author: Author,
                day: int, featured: bool = False, writer_id: int | None = None) -> Article:
        return Article(
            title=title,
            slug=slug,
            excerpt=f"Excerpt of {title}",
            content=f"Content of {title}",
            cover_image=f"https://img.test/{slug}.jpg",
            category_id=category.id,
            author_id=author.id,
            writer_id=writer_id,
            is_featured=featured,
            read_time=6,
            status=status,
            clicks=0,
            published_at=datetime(2026, 1, day, 12, 0, tzinfo=timezone.utc),
        )

    approved_ai = article("future-of-ai", "The Future of AI in Classrooms", "approved", tech, chen, 3, featured=True)
    approved_quantum = article("quantum-basics", "Understanding Quantum Computing", "approved", science, chen, 2)
    pending = article("pending-draft", "Cybersecurity Tips for Students", "pending", tech, johnson, 4, writer_id=writer.id)
    rejected = article("rejected-piece", "Solar Car Spotlight", "rejected", science, johnson, 1, writer_id=writer.id)
    db.add_all([approved_ai, approved_quantum, pending, rejected])
    db.commit()
    return {
        "admin": admin.id,
        "writer": writer.id,
        "tech": tech.id,
        "science": science.id,
        "chen": chen.id,
        "johnson": johnson.id,
        "future-of-ai": approved_ai.id,
        "quantum-basics": approved_quantum.id,
        "pending-draft": pending.id,
        "rejected-piece": rejected.id,
    }


class ApiTestCase(unittest.TestCase):
    """Fresh app over a seeded in-memory database for every test."""

    def setUp(self) -> None:
        self.settings = make_settings()
        self.session_factory = make_memory_session_factory()
        with self.session_factory() as db:
            self.ids = seed_content(db)
        self.app = create_app(self.settings, session_factory=self.session_factory)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        self.session_factory.kw["bind"].dispose()

    def token_for(self, role: str) -> str:
        user_id = self.ids["admin"] if role == "admin" else self.ids["writer"]
        username = "admin" if role == "admin" else "writer1"
        return self.app.state.session_manager.create(
            SessionData(user_id=user_id, username=username, role=role)
        )

    def login_as(self, role: str) -> None:
        """Attach a signed session cookie for role to the test client."""
        self.client.cookies.set(self.settings.SESSION_COOKIE_NAME, self.token_for(role))

    def logout_client(self) -> None:
        self.client.cookies.clear()
