"""Tests for the catalog sync page loop."""

import pytest
from postgrest.exceptions import APIError

import syncer.main as sync_main
from syncer.anilist_fetcher import CatalogPage
from syncer.main import SyncState, run_sync
from syncer.supabase_updater import ANIME_TABLE
from utils.errors import SourceUnavailable


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    calls: list[float] = []
    monkeypatch.setattr(sync_main.time, "sleep", calls.append)
    return calls


@pytest.fixture
def source(monkeypatch):
    """Install a scripted AniList: a list of CatalogPage or exceptions, one per call."""

    fetched: list[tuple[int, int]] = []

    def install(*pages):
        script = list(pages)

        def fake_fetch_page(page, per_page=50):
            fetched.append((page, per_page))
            outcome = script.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome

        monkeypatch.setattr(sync_main, "fetch_page", fake_fetch_page)
        return fetched

    return install


def media_batch(make_media, start: int, count: int) -> list[dict]:
    return [make_media(i) for i in range(start, start + count)]


def test_two_pages_then_stop(source, store, sleeps, make_media) -> None:
    fetched = source(
        CatalogPage(page=1, media=media_batch(make_media, 1, 50), has_next_page=True),
        CatalogPage(page=2, media=media_batch(make_media, 51, 10), has_next_page=False),
    )

    result = run_sync(store, per_page=50, delay=1.0)

    assert result.state is SyncState.DONE
    assert result.ok
    assert result.total_synced == 60
    assert result.pages_synced == 2
    assert fetched == [(1, 50), (2, 50)]
    assert len(store.upsert_calls) == 2
    assert all(call["on_conflict"] == "id" for call in store.upsert_calls)
    assert len(store.tables[ANIME_TABLE]) == 60
    assert sleeps == [1.0]


def test_upsert_failure_on_first_page_stops_run(source, store, sleeps, make_media, capsys) -> None:
    fetched = source(
        CatalogPage(page=1, media=media_batch(make_media, 1, 50), has_next_page=True),
        CatalogPage(page=2, media=media_batch(make_media, 51, 50), has_next_page=False),
    )
    store.fail_with = APIError({"message": "payload too large", "code": "PGRST000", "hint": None, "details": None})

    result = run_sync(store)

    assert result.state is SyncState.FAILED
    assert result.total_synced == 0
    assert result.failed_page == 1
    assert len(fetched) == 1
    assert sleeps == []
    output = capsys.readouterr().out
    assert "Error syncing page 1" in output
    assert "Total anime synced: 0" in output


def test_fetch_failure_keeps_earlier_pages(source, store, sleeps, make_media) -> None:
    source(
        CatalogPage(page=1, media=media_batch(make_media, 1, 50), has_next_page=True),
        SourceUnavailable("AniList API error on page 2: 502"),
    )

    result = run_sync(store)

    assert result.state is SyncState.FAILED
    assert result.failed_page == 2
    assert result.total_synced == 50
    assert isinstance(result.error, SourceUnavailable)
    assert len(store.tables[ANIME_TABLE]) == 50


def test_empty_page_ends_run(source, store, sleeps, make_media) -> None:
    fetched = source(
        CatalogPage(page=1, media=media_batch(make_media, 1, 5), has_next_page=True),
        CatalogPage(page=2, media=[], has_next_page=True),
    )

    result = run_sync(store)

    assert result.state is SyncState.DONE
    assert result.total_synced == 5
    assert len(fetched) == 2
    assert len(store.upsert_calls) == 1


def test_malformed_record_fails_the_page(source, store, sleeps, make_media) -> None:
    broken = make_media(2)
    del broken["id"]
    source(CatalogPage(page=1, media=[make_media(1), broken], has_next_page=False))

    result = run_sync(store)

    assert result.state is SyncState.FAILED
    assert result.total_synced == 0
    assert store.upsert_calls == []


def test_second_run_converges_to_same_rows(source, store, sleeps, make_media) -> None:
    page = CatalogPage(page=1, media=media_batch(make_media, 1, 10), has_next_page=False)

    source(page)
    run_sync(store)
    first = {key: dict(row) for key, row in store.tables[ANIME_TABLE].items()}

    source(page)
    run_sync(store)
    second = store.tables[ANIME_TABLE]

    assert len(second) == len(first) == 10
    assert second == first
