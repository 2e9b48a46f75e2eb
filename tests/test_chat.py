"""Tests for the chat assistant: completion client (mocked httpx) and the /chat endpoints."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from pydantic import SecretStr
from sqlalchemy import func, select

from brainfeed.models import Conversation
from brainfeed.services.chat import (
    FALLBACK_REPLY,
    ChatServiceError,
    find_conversation,
    get_or_create_conversation,
    request_completion,
)
from tests.support import API, ApiTestCase, make_memory_session_factory, make_settings

HISTORY = [{"role": "user", "content": "What is quantum computing?"}]


def _response(status_code: int = 200, body: object = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body
    return resp


def _mock_client(mock_client_class: MagicMock, post: AsyncMock) -> MagicMock:
    instance = MagicMock()
    instance.post = post
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)
    return instance


class TestRequestCompletion(unittest.TestCase):
    """request_completion posts the history and extracts the first choice."""

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_returns_assistant_content(self, mock_client_class: MagicMock) -> None:
        post = AsyncMock(return_value=_response(body={
            "choices": [{"message": {"role": "assistant", "content": "Qubits!"}}],
        }))
        _mock_client(mock_client_class, post)
        settings = make_settings(LLM_API_KEY=SecretStr("sk-test"), LLM_MAX_COMPLETION_TOKENS=256)

        reply = asyncio.run(request_completion(HISTORY, settings))

        self.assertEqual(reply, "Qubits!")
        args, kwargs = post.call_args
        self.assertEqual(args[0], "http://llm.test/v1/chat/completions")
        self.assertEqual(kwargs["json"]["model"], "test-model")
        self.assertEqual(kwargs["json"]["messages"], HISTORY)
        self.assertEqual(kwargs["json"]["max_completion_tokens"], 256)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer sk-test")

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_no_api_key_sends_no_auth_header(self, mock_client_class: MagicMock) -> None:
        post = AsyncMock(return_value=_response(body={"choices": [{"message": {"content": "hi"}}]}))
        _mock_client(mock_client_class, post)
        asyncio.run(request_completion(HISTORY, make_settings()))
        self.assertNotIn("Authorization", post.call_args[1]["headers"])

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_empty_content_falls_back(self, mock_client_class: MagicMock) -> None:
        for body in (
            {"choices": []},
            {"choices": [{"message": {"content": ""}}]},
            {"choices": [{"message": {"content": None}}]},
        ):
            _mock_client(mock_client_class, AsyncMock(return_value=_response(body=body)))
            self.assertEqual(asyncio.run(request_completion(HISTORY, make_settings())), FALLBACK_REPLY)

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_connect_error_is_upstream_unavailable(self, mock_client_class: MagicMock) -> None:
        _mock_client(mock_client_class, AsyncMock(side_effect=httpx.ConnectError("refused")))
        with self.assertRaises(ChatServiceError) as ctx:
            asyncio.run(request_completion(HISTORY, make_settings()))
        self.assertTrue(ctx.exception.upstream_unavailable)
        self.assertIn("unreachable", ctx.exception.message)

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_timeout_is_upstream_unavailable(self, mock_client_class: MagicMock) -> None:
        _mock_client(mock_client_class, AsyncMock(side_effect=httpx.ReadTimeout("slow")))
        with self.assertRaises(ChatServiceError) as ctx:
            asyncio.run(request_completion(HISTORY, make_settings()))
        self.assertTrue(ctx.exception.upstream_unavailable)

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_bad_status(self, mock_client_class: MagicMock) -> None:
        _mock_client(mock_client_class, AsyncMock(return_value=_response(status_code=500, body={})))
        with self.assertRaises(ChatServiceError) as ctx:
            asyncio.run(request_completion(HISTORY, make_settings()))
        self.assertFalse(ctx.exception.upstream_unavailable)
        self.assertIn("500", ctx.exception.message)

    @patch("brainfeed.services.chat.httpx.AsyncClient")
    def test_missing_choices(self, mock_client_class: MagicMock) -> None:
        _mock_client(mock_client_class, AsyncMock(return_value=_response(body={"error": "x"})))
        with self.assertRaises(ChatServiceError):
            asyncio.run(request_completion(HISTORY, make_settings()))


class TestGetOrCreateConversation(unittest.TestCase):
    """A first message racing another first message reuses the stored conversation."""

    def setUp(self) -> None:
        self.session_factory = make_memory_session_factory()
        self.db = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.session_factory.kw["bind"].dispose()

    def test_creates_once(self) -> None:
        first = get_or_create_conversation(self.db, "visitor-9")
        second = get_or_create_conversation(self.db, "visitor-9")
        self.assertEqual(first.id, second.id)

    def test_lost_insert_race_returns_existing(self) -> None:
        with self.session_factory() as other:
            other.add(Conversation(session_id="visitor-9"))
            other.commit()
        existing = find_conversation(self.db, "visitor-9")

        # Lookup misses, as if the other insert landed right after it
        with patch(
            "brainfeed.services.chat.find_conversation",
            side_effect=[None, existing],
        ):
            conversation = get_or_create_conversation(self.db, "visitor-9")

        self.assertEqual(conversation.id, existing.id)
        self.assertEqual(self.db.execute(select(func.count(Conversation.id))).scalar_one(), 1)


class TestChatEndpoints(ApiTestCase):
    """POST /chat/message and GET /chat/history/{session_id}."""

    @patch("brainfeed.api.v1.chat.request_completion", new_callable=AsyncMock)
    def test_message_round_trip(self, mock_completion: AsyncMock) -> None:
        mock_completion.side_effect = ["First answer", "Second answer"]

        first = self.client.post(
            f"{API}/chat/message",
            json={"sessionId": "visitor-1", "message": "Hello"},
        )
        self.assertEqual(first.status_code, 200)
        body = first.json()
        self.assertEqual(body["response"], "First answer")
        self.assertEqual(
            [a["slug"] for a in body["suggestedArticles"]],
            ["future-of-ai", "quantum-basics"],
        )

        second = self.client.post(
            f"{API}/chat/message",
            json={"sessionId": "visitor-1", "message": "Tell me more"},
        )
        self.assertEqual(second.json()["conversationId"], body["conversationId"])
        sent_history = mock_completion.call_args_list[1][0][0]
        self.assertEqual(
            sent_history,
            [
                {"role": "user", "content": "Hello"},
                {"role": "assistant", "content": "First answer"},
                {"role": "user", "content": "Tell me more"},
            ],
        )

        history = self.client.get(f"{API}/chat/history/visitor-1")
        self.assertEqual(history.status_code, 200)
        messages = history.json()["messages"]
        self.assertEqual(len(messages), 4)
        self.assertEqual(messages[0]["content"], "Second answer")
        self.assertEqual(messages[-1]["content"], "Hello")
        self.assertEqual(history.json()["sessionId"], "visitor-1")

    @patch("brainfeed.api.v1.chat.request_completion", new_callable=AsyncMock)
    def test_unreachable_model_is_503(self, mock_completion: AsyncMock) -> None:
        mock_completion.side_effect = ChatServiceError("down", upstream_unavailable=True)
        response = self.client.post(
            f"{API}/chat/message",
            json={"sessionId": "visitor-2", "message": "Hi"},
        )
        self.assertEqual(response.status_code, 503)

    @patch("brainfeed.api.v1.chat.request_completion", new_callable=AsyncMock)
    def test_bad_upstream_answer_is_502(self, mock_completion: AsyncMock) -> None:
        mock_completion.side_effect = ChatServiceError("bad body")
        response = self.client.post(
            f"{API}/chat/message",
            json={"sessionId": "visitor-3", "message": "Hi"},
        )
        self.assertEqual(response.status_code, 502)

    def test_empty_message_is_400(self) -> None:
        response = self.client.post(
            f"{API}/chat/message",
            json={"sessionId": "visitor-4", "message": ""},
        )
        self.assertEqual(response.status_code, 400)

    def test_unknown_history_is_404(self) -> None:
        self.assertEqual(self.client.get(f"{API}/chat/history/nobody").status_code, 404)


if __name__ == "__main__":
    unittest.main()
