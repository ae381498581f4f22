"""
Pytest configuration and fixtures for the trivia client tests.
"""
import asyncio
import json
import sys
import os
import pytest
import httpx

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.trivia import Question


class ManualClock:
    """Stand-in for asyncio.sleep; time only moves when the test calls advance()."""

    def __init__(self):
        self._waiters = []
        self.requested = []

    async def sleep(self, seconds):
        self.requested.append(seconds)
        future = asyncio.get_running_loop().create_future()
        self._waiters.append(future)
        await future

    async def advance(self, ticks: int = 1):
        for _ in range(ticks):
            for _ in range(10):
                if any(not future.done() for future in self._waiters):
                    break
                await asyncio.sleep(0)
            waiters, self._waiters = self._waiters, []
            for future in waiters:
                if not future.done():
                    future.set_result(None)
            for _ in range(3):
                await asyncio.sleep(0)


class FakeTriviaAPI:
    """Records requests and answers them from canned payloads."""

    def __init__(self, categories=None, questions=None):
        self.categories = categories
        self.questions = questions
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("api_category.php"):
            payload = self.categories
        else:
            payload = self.questions
        if isinstance(payload, httpx.Response):
            return payload
        if isinstance(payload, Exception):
            raise payload
        return httpx.Response(200, content=json.dumps(payload).encode())

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def category_payload():
    return {
        "trivia_categories": [
            {"id": 9, "name": "General Knowledge"},
            {"id": 18, "name": "Science: Computers"},
            {"id": 23, "name": "History"},
        ]
    }


@pytest.fixture
def question_payload():
    """Sample api.php response, HTML-escaped the way Open Trivia DB sends it"""
    return {
        "response_code": 0,
        "results": [
            {
                "category": "General Knowledge",
                "type": "multiple",
                "difficulty": "easy",
                "question": "&quot;Test&quot; &amp; more",
                "correct_answer": "Paris",
                "incorrect_answers": ["London", "Berlin", "Madrid"],
            },
            {
                "category": "Science: Computers",
                "type": "boolean",
                "difficulty": "medium",
                "question": "Linus Torvalds wrote the first Linux kernel.",
                "correct_answer": "True",
                "incorrect_answers": ["False"],
            },
            {
                "category": "Entertainment: Japanese Anime &amp; Manga",
                "type": "multiple",
                "difficulty": "hard",
                "question": "Who&#039;s the author of &quot;One Piece&quot;?",
                "correct_answer": "Eiichiro Oda",
                "incorrect_answers": ["Masashi Kishimoto", "Akira Toriyama", "Tite Kubo"],
            },
        ],
    }


@pytest.fixture
def fake_api(category_payload, question_payload):
    return FakeTriviaAPI(categories=category_payload, questions=question_payload)


@pytest.fixture
def manual_clock():
    return ManualClock()


@pytest.fixture
def sample_questions():
    """Three ready-made questions for session tests"""
    return [
        Question(category="Geography", type="multiple", difficulty="easy",
                 prompt="Capital of France?", correct_answer="Paris",
                 incorrect_answers=["London", "Berlin", "Madrid"]),
        Question(category="Science", type="boolean", difficulty="medium",
                 prompt="Water boils at 100C at sea level.", correct_answer="True",
                 incorrect_answers=["False"]),
        Question(category="History", type="multiple", difficulty="hard",
                 prompt="First man on the moon?", correct_answer="Neil Armstrong",
                 incorrect_answers=["Buzz Aldrin", "Yuri Gagarin", "John Glenn"]),
    ]
