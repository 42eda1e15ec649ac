"""
Unit Tests for dashboard snapshot assembly and caching
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from core.watchlist import NEWS_TOPICS, WATCHLIST
from services import dashboard
from services.models import DashboardSnapshot


def _snapshot(brief: str = "brief") -> DashboardSnapshot:
    return DashboardSnapshot(generated_at=datetime.now(timezone.utc), sections=[], stocks=[], brief=brief)


class TestBuildDashboard:
    @pytest.mark.asyncio
    async def test_assembles_sections_stocks_and_brief(self, make_client, upstream_handler):
        async with make_client(upstream_handler) as client:
            snapshot = await dashboard.build_dashboard(client=client)

        assert len(snapshot.sections) == len(NEWS_TOPICS)
        assert len(snapshot.stocks) == len(WATCHLIST)
        assert snapshot.generated_at.tzinfo is not None
        assert snapshot.brief.startswith("# AI 24h Radar 简报\n")
        assert "- NVIDIA (NVDA)：$102.00 (+2.00%)" in snapshot.brief
        assert upstream_handler.calls == {"news": len(NEWS_TOPICS), "chart": len(WATCHLIST)}

    @pytest.mark.asyncio
    async def test_second_build_served_from_response_cache(self, make_client, upstream_handler):
        async with make_client(upstream_handler) as client:
            await dashboard.build_dashboard(client=client)
            await dashboard.build_dashboard(client=client)

        assert upstream_handler.calls == {"news": len(NEWS_TOPICS), "chart": len(WATCHLIST)}


class TestGetDashboard:
    @pytest.mark.asyncio
    async def test_reuses_cached_snapshot(self):
        build = AsyncMock(side_effect=[_snapshot("first"), _snapshot("second")])
        with patch.object(dashboard, "build_dashboard", build):
            first = await dashboard.get_dashboard()
            again = await dashboard.get_dashboard()

        assert first.brief == again.brief == "first"
        assert build.await_count == 1

    @pytest.mark.asyncio
    async def test_force_rebuilds(self):
        build = AsyncMock(side_effect=[_snapshot("first"), _snapshot("second")])
        with patch.object(dashboard, "build_dashboard", build):
            await dashboard.get_dashboard()
            forced = await dashboard.get_dashboard(force=True)
            cached = await dashboard.get_dashboard()

        assert forced.brief == "second"
        assert cached.brief == "second"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_build(self):
        async def slow_build():
            await asyncio.sleep(0.01)
            return _snapshot()

        build = AsyncMock(side_effect=slow_build)
        with patch.object(dashboard, "build_dashboard", build):
            results = await asyncio.gather(*(dashboard.get_dashboard() for _ in range(5)))

        assert build.await_count == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio
    async def test_refresh_dashboard_forces_rebuild(self):
        build = AsyncMock(side_effect=[_snapshot("first"), _snapshot("second")])
        with patch.object(dashboard, "build_dashboard", build):
            await dashboard.get_dashboard()
            await dashboard.refresh_dashboard()

        assert dashboard.SNAPSHOT_CACHE.get(dashboard.SNAPSHOT_KEY).brief == "second"
