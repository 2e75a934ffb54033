import asyncio
import threading
from dataclasses import replace

import pytest

from conftest import make_movie, make_response, wait_until
from cinefeed.core.enums import LoadingPolicy, LoadPhase, MovieCategory
from cinefeed.core.exceptions import MovieNotFoundException, NoInternetConnectionException, NetworkUnavailableError, ServerError
from cinefeed.services.home_feed_service import HomeFeedService, HomeFeedState, highest_rated

A = make_movie(1, 7.0)
B = make_movie(2, 8.0)
C = make_movie(3, 9.0)
T1 = make_movie(10, 6.0)
T2 = make_movie(11, 6.5)

def apply(state, merge, movies):
    return replace(state, **merge(make_response(movies), state))

@pytest.mark.asyncio
async def test_load_fills_every_slot(movie_service):
    movie_service.get_trending_movies.return_value = make_response([T1, T2])
    movie_service.get_bollywood_movies.return_value = make_response([A, B])
    movie_service.get_south_indian_movies.return_value = make_response([C])
    movie_service.get_popular_movies.return_value = make_response([C, A])

    service = HomeFeedService(movie_service)
    await service.load_initial_data()

    state = service.state
    assert state.trending_movies == [T1, T2]
    assert state.popular_movies == [C, A]
    assert state.featured_movie == B
    assert state.featured_source is MovieCategory.BOLLYWOOD
    assert state.is_loading is False
    assert state.phase is LoadPhase.COMPLETED
    assert state.last_error is None

def test_highest_rated_prefers_first_among_ties():
    first, second = make_movie(1, 8.0), make_movie(2, 8.0)
    assert highest_rated([make_movie(0, 1.0), first, second]) is first
    assert highest_rated([]) is None

@pytest.mark.parametrize("order", [("bollywood", "south"), ("south", "bollywood")])
def test_bollywood_beats_higher_rated_south_indian(order):
    merges = {
        "bollywood": (HomeFeedService._merge_bollywood, [A, B]),
        "south": (HomeFeedService._merge_south_indian, [C]),
    }
    state = HomeFeedState()
    for name in order:
        merge, movies = merges[name]
        state = apply(state, merge, movies)
    assert state.featured_movie == B

def test_south_indian_is_fallback_when_bollywood_empty():
    state = apply(HomeFeedState(), HomeFeedService._merge_bollywood, [])
    state = apply(state, HomeFeedService._merge_south_indian, [A, C])
    assert state.featured_movie == C

@pytest.mark.parametrize("order", [("trending", "upcoming"), ("upcoming", "trending")])
def test_trending_is_last_fallback(order):
    state = apply(HomeFeedState(), HomeFeedService._merge_bollywood, [])
    state = apply(state, HomeFeedService._merge_south_indian, [])
    merges = {
        "trending": (HomeFeedService._merge_trending, [T1, T2]),
        "upcoming": (HomeFeedService._merge_upcoming, []),
    }
    for name in order:
        merge, movies = merges[name]
        state = apply(state, merge, movies)
    assert state.featured_movie == T1
    assert state.featured_source is MovieCategory.TRENDING

def test_late_bollywood_replaces_trending_fallback():
    state = apply(HomeFeedState(), HomeFeedService._merge_trending, [T1])
    state = apply(state, HomeFeedService._merge_upcoming, [])
    state = apply(state, HomeFeedService._merge_bollywood, [A])
    assert state.featured_movie == A

@pytest.mark.asyncio
async def test_failures_do_not_block_siblings(movie_service):
    movie_service.get_bollywood_movies.side_effect = ServerError(404)
    movie_service.get_trending_movies.return_value = make_response([T1])
    movie_service.get_top_rated_movies.return_value = make_response([A])

    service = HomeFeedService(movie_service)
    await service.load_initial_data()

    state = service.state
    assert state.trending_movies == [T1]
    assert state.top_rated_movies == [A]
    assert state.bollywood_movies == []
    assert isinstance(state.last_error, MovieNotFoundException)
    assert state.error_message == "Movie not found"
    assert state.is_loading is False

@pytest.mark.asyncio
async def test_failure_keeps_previous_slot_values(movie_service):
    movie_service.get_popular_movies.return_value = make_response([A])
    service = HomeFeedService(movie_service)
    await service.load_initial_data()

    movie_service.get_popular_movies.return_value = None
    movie_service.get_popular_movies.side_effect = NetworkUnavailableError()
    await service.refresh_data()

    assert service.state.popular_movies == [A]
    assert isinstance(service.state.last_error, NoInternetConnectionException)

@pytest.mark.asyncio
async def test_primary_policy_clears_loading_before_slow_siblings(movie_service):
    gate = threading.Event()

    def slow_trending(page=1):
        gate.wait(5)
        return make_response([T1])

    movie_service.get_trending_movies.side_effect = slow_trending
    service = HomeFeedService(movie_service, loading_policy=LoadingPolicy.PRIMARY)
    load = asyncio.create_task(service.load_initial_data())
    try:
        await wait_until(lambda: not service.state.is_loading)
        assert service.state.trending_movies == []
        assert service.state.phase is LoadPhase.COMPLETED
    finally:
        gate.set()
    await load
    assert service.state.trending_movies == [T1]

@pytest.mark.asyncio
async def test_primary_policy_failed_primary_still_clears_loading(movie_service):
    movie_service.get_upcoming_movies.side_effect = ServerError(500)
    service = HomeFeedService(movie_service, loading_policy=LoadingPolicy.PRIMARY)
    await service.load_initial_data()
    assert service.state.is_loading is False
    assert service.state.error_message == "Network Error: Server error with code: 500"

@pytest.mark.asyncio
async def test_all_settled_policy_waits_for_every_call(movie_service):
    gate = threading.Event()

    def slow_trending(page=1):
        gate.wait(5)
        return make_response([T1])

    movie_service.get_trending_movies.side_effect = slow_trending
    service = HomeFeedService(movie_service, loading_policy=LoadingPolicy.ALL_SETTLED)
    load = asyncio.create_task(service.load_initial_data())
    try:
        await wait_until(lambda: service.state.phase is LoadPhase.PARTIALLY_LOADED)
        await asyncio.sleep(0.05)
        assert service.state.is_loading is True
    finally:
        gate.set()
    await load
    assert service.state.is_loading is False
    assert service.state.phase is LoadPhase.COMPLETED

@pytest.mark.asyncio
async def test_subscribers_see_slot_updates(movie_service):
    movie_service.get_trending_movies.return_value = make_response([T1])
    service = HomeFeedService(movie_service)
    seen = []
    unsubscribe = service.subscribe(lambda changed, state: seen.append(changed))

    await service.load_initial_data()
    assert frozenset({"is_loading", "phase", "last_error", "error_message"}) in seen
    assert any("trending_movies" in changed for changed in seen)
    assert any("featured_movie" in changed for changed in seen)

    unsubscribe()
    count = len(seen)
    await service.load_initial_data()
    assert len(seen) == count

@pytest.mark.asyncio
async def test_load_more_appends_next_page_without_duplicates(movie_service):
    movie_service.get_popular_movies.side_effect = [
        make_response([A, B]),
        make_response([B, C], page=2),
    ]
    service = HomeFeedService(movie_service)
    await service.load_initial_data()
    await service.load_more_movies(MovieCategory.POPULAR)

    assert service.state.popular_movies == [A, B, C]
    assert movie_service.get_popular_movies.call_args_list[1].args == (2,)

def gated(*steps):
    """side_effect answering successive calls; each step waits on its event first"""
    pending = iter(steps)

    def call(page=1):
        event, response = next(pending)
        event.wait(5)
        return response

    return call

@pytest.mark.asyncio
async def test_all_settled_overlapping_loads_newest_batch_owns_loading(movie_service):
    first, second = threading.Event(), threading.Event()
    movie_service.get_trending_movies.side_effect = gated(
        (first, make_response([T1])), (second, make_response([T2])))
    service = HomeFeedService(movie_service, loading_policy=LoadingPolicy.ALL_SETTLED)
    try:
        old = asyncio.create_task(service.load_initial_data())
        await wait_until(lambda: movie_service.get_trending_movies.call_count == 1)
        new = asyncio.create_task(service.load_initial_data())
        await wait_until(lambda: movie_service.get_trending_movies.call_count == 2)

        first.set()
        await old
        assert service.state.trending_movies == [T1]
        assert service.state.is_loading is True
        assert service.state.phase is not LoadPhase.COMPLETED

        second.set()
        await new
    finally:
        first.set()
        second.set()
    assert service.state.trending_movies == [T2]
    assert service.state.is_loading is False
    assert service.state.phase is LoadPhase.COMPLETED

@pytest.mark.asyncio
async def test_primary_overlapping_loads_stale_primary_keeps_loading(movie_service):
    first, second = threading.Event(), threading.Event()
    movie_service.get_upcoming_movies.side_effect = gated(
        (first, make_response([A])), (second, make_response([B])))
    service = HomeFeedService(movie_service, loading_policy=LoadingPolicy.PRIMARY)
    try:
        old = asyncio.create_task(service.load_initial_data())
        await wait_until(lambda: movie_service.get_upcoming_movies.call_count == 1)
        new = asyncio.create_task(service.load_initial_data())
        await wait_until(lambda: movie_service.get_upcoming_movies.call_count == 2)

        first.set()
        await old
        assert service.state.upcoming_movies == [A]
        assert service.state.is_loading is True

        second.set()
        await new
    finally:
        first.set()
        second.set()
    assert service.state.upcoming_movies == [B]
    assert service.state.is_loading is False
    assert service.state.phase is LoadPhase.COMPLETED

@pytest.mark.asyncio
async def test_cancelled_load_clears_loading(movie_service):
    gate = threading.Event()
    movie_service.get_trending_movies.side_effect = gated((gate, make_response([T1])))
    service = HomeFeedService(movie_service)
    load = asyncio.create_task(service.load_initial_data())
    try:
        await wait_until(lambda: movie_service.get_trending_movies.call_count == 1)
        assert service.state.is_loading is True
        load.cancel()
        with pytest.raises(asyncio.CancelledError):
            await load
    finally:
        gate.set()
    assert service.state.is_loading is False
    assert service.state.phase is LoadPhase.COMPLETED
    assert service.state.trending_movies == []
