"""Tests for user queries."""

import pytest
from unittest.mock import AsyncMock, MagicMock


class TestCountUsers:
    """Tests for count_users query."""

    @pytest.mark.asyncio
    async def test_groups_by_pause_state(self):
        """Should add paused and active groups into a total."""
        from core.queries.users import count_users

        mock_conn = AsyncMock()
        mock_result = MagicMock()
        mock_result.mappings.return_value = [
            {"is_paused": False, "n": 4},
            {"is_paused": True, "n": 1},
        ]
        mock_conn.execute.return_value = mock_result

        counts = await count_users(mock_conn)

        assert counts == {"total": 5, "active": 4, "paused": 1}

    @pytest.mark.asyncio
    async def test_no_users(self):
        """Should report zeros when the table is empty."""
        from core.queries.users import count_users

        mock_conn = AsyncMock()
        mock_result = MagicMock()
        mock_result.mappings.return_value = []
        mock_conn.execute.return_value = mock_result

        assert await count_users(mock_conn) == {"total": 0, "active": 0, "paused": 0}


class TestUpdateNextDueIfCadence:
    """Tests for the compare-and-set reschedule."""

    @pytest.mark.asyncio
    async def test_reports_applied_update(self):
        from datetime import datetime, timezone

        from core.enums import Cadence
        from core.queries.users import update_next_due_if_cadence

        mock_conn = AsyncMock()
        mock_conn.execute.return_value = MagicMock(rowcount=1)
        now = datetime.now(timezone.utc)

        assert await update_next_due_if_cadence(
            mock_conn, "111", Cadence.weekly, next_due_at=now, now=now
        ) is True

    @pytest.mark.asyncio
    async def test_reports_lost_race(self):
        from datetime import datetime, timezone

        from core.enums import Cadence
        from core.queries.users import update_next_due_if_cadence

        mock_conn = AsyncMock()
        mock_conn.execute.return_value = MagicMock(rowcount=0)
        now = datetime.now(timezone.utc)

        assert await update_next_due_if_cadence(
            mock_conn, "111", Cadence.weekly, next_due_at=now, now=now
        ) is False

    @pytest.mark.asyncio
    async def test_cas_against_real_table(self, db_engine):
        """A cadence change between read and write wins over the reschedule."""
        from datetime import datetime, timedelta, timezone

        from core.database import get_transaction
        from core.enums import Cadence
        from core.queries.users import (
            get_user_by_external_id,
            insert_user,
            update_next_due_if_cadence,
            update_user,
        )

        now = datetime(2024, 1, 1, 9, tzinfo=timezone.utc)
        async with get_transaction() as conn:
            await insert_user(conn, "111", "dm", Cadence.weekly, now + timedelta(days=7), now)
            await update_user(conn, "111", now, cadence=Cadence.daily)

            applied = await update_next_due_if_cadence(
                conn, "111", Cadence.weekly, next_due_at=now + timedelta(days=30), now=now
            )
            row = await get_user_by_external_id(conn, "111")

        assert applied is False
        assert row["next_due_at"] == now + timedelta(days=7)
