"""Tests for QuestionStore insert / expiry deletion."""

import pytest
from sqlmodel import create_engine

from fragekasten.services.question_store import QuestionStore, QuestionStoreError


@pytest.fixture
def store():
    return QuestionStore()


class TestInsert:
    def test_insert_computes_expiry(self, store, stored_questions):
        question = store.insert("Hello there, how are you?", "203.0.113.7", "agent/1.0", ttl=600, now=1_000)

        assert question.id is not None
        assert question.expire_after == 1_600

        rows = stored_questions()
        assert len(rows) == 1
        assert rows[0].content == "Hello there, how are you?"
        assert rows[0].ip_address == "203.0.113.7"
        assert rows[0].user_agent == "agent/1.0"
        assert rows[0].created_at is not None

    def test_insert_defaults_to_current_time(self, store):
        import time

        before = int(time.time())
        question = store.insert("What is your favourite colour?", "203.0.113.7", "", ttl=60)
        after = int(time.time())

        assert before + 60 <= question.expire_after <= after + 60

    def test_insert_failure_raises_store_error(self):
        # Fresh in-memory database without the asks table
        broken = QuestionStore(engine=create_engine("sqlite://"))
        with pytest.raises(QuestionStoreError):
            broken.insert("Hello there, how are you?", "203.0.113.7", "", ttl=60)


class TestDeleteExpired:
    def test_removes_record_once_expired(self, store, stored_questions):
        store.insert("Will this be removed?", "203.0.113.7", "", ttl=100, now=1_000)

        assert store.delete_expired(1_101) == 1
        assert stored_questions() == []

    def test_keeps_record_at_exact_expiry(self, store, stored_questions):
        store.insert("Will this survive?", "203.0.113.7", "", ttl=100, now=1_000)

        assert store.delete_expired(1_100) == 0
        assert len(stored_questions()) == 1

    def test_keeps_record_before_expiry(self, store, stored_questions):
        store.insert("Will this survive?", "203.0.113.7", "", ttl=100, now=1_000)

        assert store.delete_expired(1_050) == 0
        assert len(stored_questions()) == 1

    def test_only_expired_records_removed(self, store, stored_questions):
        store.insert("Old question number one", "203.0.113.7", "", ttl=10, now=1_000)
        store.insert("Old question number two", "203.0.113.8", "", ttl=20, now=1_000)
        store.insert("Fresh question here", "203.0.113.9", "", ttl=500, now=1_000)

        assert store.delete_expired(1_100) == 2
        remaining = stored_questions()
        assert [q.content for q in remaining] == ["Fresh question here"]

    def test_repeated_sweep_is_idempotent(self, store, stored_questions):
        store.insert("Old question number one", "203.0.113.7", "", ttl=10, now=1_000)
        store.insert("Fresh question here", "203.0.113.9", "", ttl=500, now=1_000)

        assert store.delete_expired(1_100) == 1
        assert store.delete_expired(1_100) == 0
        assert store.delete_expired(1_200) == 0
        assert len(stored_questions()) == 1

    def test_empty_table(self, store):
        assert store.delete_expired(10_000) == 0

    def test_delete_failure_raises_store_error(self):
        broken = QuestionStore(engine=create_engine("sqlite://"))
        with pytest.raises(QuestionStoreError):
            broken.delete_expired(1_000)
