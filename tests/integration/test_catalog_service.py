"""Shared exercise catalog: dedup, search, concurrent create."""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidInput, NotFoundOrUnauthorized, Unauthenticated
from app.models.exercise import Exercise
from app.services import catalog

pytestmark = pytest.mark.integration

ALICE = "user_alice"
BOB = "user_bob"


async def _catalog_size(db: AsyncSession) -> int:
    return await db.scalar(select(func.count()).select_from(Exercise))


class TestGetOrCreate:
    async def test_same_name_ignoring_case_returns_same_row(self, db_session: AsyncSession):
        first = await catalog.get_or_create_exercise(db_session, "Bench Press")
        second = await catalog.get_or_create_exercise(db_session, "bench press")
        assert first.id == second.id
        assert second.name == "Bench Press"
        assert await _catalog_size(db_session) == 1

    async def test_name_is_trimmed(self, db_session: AsyncSession):
        exercise = await catalog.get_or_create_exercise(db_session, "  Overhead Press  ")
        assert exercise.name == "Overhead Press"
        again = await catalog.get_or_create_exercise(db_session, "OVERHEAD PRESS")
        assert again.id == exercise.id

    async def test_catalog_is_shared_between_users(self, db_session: AsyncSession):
        a = await catalog.create_exercise(db_session, ALICE, {"name": "Squat"})
        b = await catalog.create_exercise(db_session, BOB, {"name": "squat"})
        assert a.id == b.id

    async def test_concurrent_insert_returns_existing_row(self, db_session: AsyncSession, monkeypatch):
        """The lookup misses (another request has not committed yet when we read),
        the insert hits the unique index, and the winner's row is returned."""
        existing = await catalog.get_or_create_exercise(db_session, "Deadlift")
        real_find = catalog.find_exercise_by_name
        calls = []

        async def find_missing_once(db, name):
            calls.append(name)
            if len(calls) == 1:
                return None
            return await real_find(db, name)

        monkeypatch.setattr(catalog, "find_exercise_by_name", find_missing_once)
        result = await catalog.get_or_create_exercise(db_session, "DEADLIFT")

        assert result.id == existing.id
        assert len(calls) == 2
        assert await _catalog_size(db_session) == 1

    async def test_unique_index_ignores_case(self, db_session: AsyncSession):
        db_session.add(Exercise(name="Pull Up"))
        await db_session.flush()
        db_session.add(Exercise(name="pull up"))
        with pytest.raises(IntegrityError):
            await db_session.flush()
        await db_session.rollback()

    async def test_create_requires_caller_and_name(self, db_session: AsyncSession):
        with pytest.raises(Unauthenticated):
            await catalog.create_exercise(db_session, None, {"name": "Squat"})
        with pytest.raises(InvalidInput):
            await catalog.create_exercise(db_session, ALICE, {"name": "   "})
        assert await _catalog_size(db_session) == 0


class TestListAndSearch:
    @pytest.fixture
    async def seeded(self, db_session: AsyncSession) -> None:
        for name in ["Squat", "Bench Press", "Incline Bench Press", "Deadlift", "Front Squat", "100%_Effort"]:
            await catalog.get_or_create_exercise(db_session, name)

    async def test_list_is_ordered_by_name(self, db_session: AsyncSession, seeded):
        names = [e.name for e in await catalog.list_exercises(db_session, ALICE)]
        assert names == sorted(names)
        assert len(names) == 6

    async def test_search_is_case_insensitive_substring(self, db_session: AsyncSession, seeded):
        names = [e.name for e in await catalog.search_exercises(db_session, ALICE, "bench")]
        assert names == ["Bench Press", "Incline Bench Press"]

    async def test_search_limit(self, db_session: AsyncSession, seeded):
        assert len(await catalog.search_exercises(db_session, ALICE, "", limit=2)) == 2
        # default limit is 10
        assert len(await catalog.search_exercises(db_session, ALICE, "")) == 6

    async def test_search_wildcards_are_literal(self, db_session: AsyncSession, seeded):
        assert [e.name for e in await catalog.search_exercises(db_session, ALICE, "%_")] == ["100%_Effort"]
        assert await catalog.search_exercises(db_session, ALICE, "_q") == []

    async def test_reads_require_caller(self, db_session: AsyncSession, seeded):
        with pytest.raises(Unauthenticated):
            await catalog.list_exercises(db_session, None)
        with pytest.raises(Unauthenticated):
            await catalog.search_exercises(db_session, None, "squat")

    async def test_get_exercise(self, db_session: AsyncSession, seeded):
        squat = (await catalog.search_exercises(db_session, ALICE, "front"))[0]
        assert (await catalog.get_exercise(db_session, BOB, squat.id)).name == "Front Squat"
        with pytest.raises(NotFoundOrUnauthorized):
            await catalog.get_exercise(db_session, BOB, uuid.uuid4())
