"""
Unit tests for the quote service
"""

import asyncio
import random
from unittest.mock import Mock

import pytest

from quote_service import QuoteService, GameStats, extract_quotes
from utils.exceptions import (
    InvalidGameError, NoQuotesFoundError, UpstreamFetchError, MalformedResponseError, ErrorKind
)
from tests.conftest import TEST_GAMES
from tests.mocks import InMemoryQuoteSource


@pytest.mark.unit
class TestRandomQuote:
    """Test cases for random quote selection"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("game_id,filename", TEST_GAMES)
    async def test_quote_from_each_registered_game(self, service, test_quote_files, game_id, filename):
        result = await service.get_random_quote_from_game(game_id)

        assert result.game_id == game_id
        assert result.game == test_quote_files[filename]['gameName']
        assert result.quote in test_quote_files[filename]['quotes']

    @pytest.mark.asyncio
    async def test_invalid_game_is_rejected_before_fetching(self, service, in_memory_source):
        with pytest.raises(InvalidGameError) as exc_info:
            await service.get_random_quote_from_game("halo-6")

        assert exc_info.value.kind == ErrorKind.INVALID_GAME
        assert exc_info.value.status_code == 400
        assert "Invalid game: halo-6" in exc_info.value.message
        assert "halo-ce, halo-2, halo-3, halo-reach" in exc_info.value.message
        assert in_memory_source.fetched == []

    @pytest.mark.asyncio
    async def test_game_lookup_is_case_sensitive(self, service):
        with pytest.raises(InvalidGameError):
            await service.get_random_quote_from_game("Halo-2")

    @pytest.mark.asyncio
    async def test_quote_from_all_games_picks_registered_game(self, service, test_quote_files):
        files_by_id = dict(TEST_GAMES)

        for _ in range(20):
            result = await service.get_random_quote_from_all_games()
            assert result.game_id in files_by_id
            assert result.quote in test_quote_files[files_by_id[result.game_id]]['quotes']

    @pytest.mark.asyncio
    async def test_all_games_selection_is_uniform_over_registry(self, test_service_config, in_memory_source):
        rng = Mock(spec=random.Random)
        rng.choice.side_effect = lambda seq: seq[-1]
        service = QuoteService(config=test_service_config, source=in_memory_source, rng=rng)

        result = await service.get_random_quote_from_all_games()

        # 第一次选择在注册表条目中进行，与语录数量无关
        assert rng.choice.call_args_list[0].args[0] == TEST_GAMES
        assert result.game_id == "halo-reach"
        assert in_memory_source.fetched == ["halo-reach.json"]

    @pytest.mark.asyncio
    async def test_get_random_quote_dispatch(self, service, in_memory_source):
        specific = await service.get_random_quote("halo-3")
        assert specific.game_id == "halo-3"

        # 空字符串等同于未指定
        any_game = await service.get_random_quote("")
        assert any_game.game_id in dict(TEST_GAMES)

    @pytest.mark.asyncio
    async def test_empty_quotes_raises_no_quotes_found(self, test_service_config):
        source = InMemoryQuoteSource({"halo-2.json": {"gameName": "Halo 2", "quotes": []}})
        service = QuoteService(config=test_service_config, source=source)

        with pytest.raises(NoQuotesFoundError) as exc_info:
            await service.get_random_quote("halo-2")

        assert exc_info.value.message == "No quotes found in halo-2"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_missing_game_name_falls_back_to_identifier(self, test_service_config):
        source = InMemoryQuoteSource({"halo-3.json": {"quotes": ["Finish the fight."]}})
        service = QuoteService(config=test_service_config, source=source)

        result = await service.get_random_quote("halo-3")

        assert result.to_dict() == {"quote": "Finish the fight.", "game": "halo-3", "gameId": "halo-3"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("game_name", [42, ["Halo 3"], {"name": "Halo 3"}, True, ""])
    async def test_non_string_game_name_falls_back_to_identifier(self, test_service_config, game_name):
        source = InMemoryQuoteSource({"halo-3.json": {"gameName": game_name, "quotes": ["Finish the fight."]}})
        service = QuoteService(config=test_service_config, source=source)

        result = await service.get_random_quote("halo-3")

        assert result.game == "halo-3"

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self, test_service_config):
        source = InMemoryQuoteSource({}, failures={
            "halo-2.json": UpstreamFetchError("Failed to fetch quotes: 503 Service Unavailable")
        })
        service = QuoteService(config=test_service_config, source=source)

        with pytest.raises(UpstreamFetchError, match="Failed to fetch quotes"):
            await service.get_random_quote("halo-2")


@pytest.mark.unit
class TestExtractQuotes:
    """Test cases for quote file validation"""

    def test_valid_quotes(self):
        assert extract_quotes({"quotes": ["a", "b"]}, "halo-2") == ["a", "b"]

    @pytest.mark.parametrize("payload", [
        {},
        {"quotes": None},
        {"quotes": []},
        {"quotes": "not a list"},
        {"quotes": ["fine", 42]},
        {"quotes": {"0": "dict"}},
    ])
    def test_invalid_quotes(self, payload):
        with pytest.raises(NoQuotesFoundError, match="No quotes found in halo-2"):
            extract_quotes(payload, "halo-2")


@pytest.mark.unit
class TestStats:
    """Test cases for stats aggregation"""

    @pytest.mark.asyncio
    async def test_stats_totals(self, service, test_quote_files):
        stats = await service.get_stats()

        assert stats.total_games == len(TEST_GAMES)
        assert stats.total_quotes == sum(len(f['quotes']) for f in test_quote_files.values())
        assert stats.total_quotes == sum(entry.count for entry in stats.games)

    @pytest.mark.asyncio
    async def test_stats_follow_registry_order(self, service):
        stats = await service.get_stats()

        assert [entry.game_id for entry in stats.games] == [game_id for game_id, _ in TEST_GAMES]
        assert list(stats.to_dict()['quotesPerGame']) == [game_id for game_id, _ in TEST_GAMES]

    @pytest.mark.asyncio
    async def test_stats_fetches_run_concurrently(self, test_service_config, test_quote_files):
        source = InMemoryQuoteSource(dict(test_quote_files), barrier_size=len(TEST_GAMES))
        service = QuoteService(config=test_service_config, source=source)

        stats = await asyncio.wait_for(service.get_stats(), timeout=2)

        assert source.max_in_flight == len(TEST_GAMES)
        assert stats.total_games == len(TEST_GAMES)

    @pytest.mark.asyncio
    async def test_single_failure_is_recorded_in_line(self, test_service_config, test_quote_files):
        source = InMemoryQuoteSource(dict(test_quote_files), failures={
            "halo-3.json": UpstreamFetchError("Failed to fetch quotes: 503 Service Unavailable")
        })
        service = QuoteService(config=test_service_config, source=source)

        stats = await service.get_stats()
        per_game = stats.to_dict()['quotesPerGame']

        assert per_game['halo-3'] == {
            'gameName': 'halo-3',
            'count': 0,
            'error': 'Failed to fetch quotes: 503 Service Unavailable',
        }
        assert 'error' not in per_game['halo-2']
        assert stats.total_quotes == sum(
            len(test_quote_files[filename]['quotes'])
            for game_id, filename in TEST_GAMES if game_id != 'halo-3'
        )
        # 失败不会取消其它请求
        assert sorted(source.fetched) == sorted(filename for _, filename in TEST_GAMES)

    @pytest.mark.asyncio
    async def test_unexpected_errors_become_failure_records(self, test_service_config, test_quote_files):
        source = InMemoryQuoteSource(dict(test_quote_files), failures={
            "halo-ce.json": MalformedResponseError("Malformed JSON in halo-ce.json"),
            "halo-2.json": RuntimeError(""),
        })
        service = QuoteService(config=test_service_config, source=source)

        stats = await service.get_stats()
        per_game = {entry.game_id: entry for entry in stats.games}

        assert per_game['halo-ce'].error == "Malformed JSON in halo-ce.json"
        assert per_game['halo-2'].error == "Internal server error"
        assert per_game['halo-3'].ok

    @pytest.mark.asyncio
    async def test_non_list_quotes_counts_as_zero(self, test_service_config, test_quote_files):
        files = dict(test_quote_files)
        files["halo-reach.json"] = {"gameName": "Halo: Reach", "quotes": "oops"}
        service = QuoteService(config=test_service_config, source=InMemoryQuoteSource(files))

        stats = await service.get_stats()

        assert stats.games[-1] == GameStats(game_id="halo-reach", game_name="Halo: Reach", count=0)

    @pytest.mark.asyncio
    async def test_non_string_game_name_keeps_aggregate(self, test_service_config, test_quote_files):
        files = dict(test_quote_files)
        files["halo-ce.json"] = {"gameName": 42, "quotes": ["a", "b"]}
        service = QuoteService(config=test_service_config, source=InMemoryQuoteSource(files))

        stats = await service.get_stats()

        assert stats.games[0] == GameStats(game_id="halo-ce", game_name="halo-ce", count=2)
        assert all(isinstance(entry.game_name, str) for entry in stats.games)


@pytest.mark.unit
class TestApiInfo:
    """Test cases for the info document"""

    def test_info_lists_registry_in_order(self, service):
        info = service.get_api_info()

        assert info['availableGames'] == [game_id for game_id, _ in TEST_GAMES]
        assert info['example'] == '/quote?game=halo-2'
        assert set(info['endpoints']) == {'/quote', '/quote?game=<game-id>', '/stats'}

    @pytest.mark.asyncio
    async def test_initialize_and_close_delegate_to_source(self, service, in_memory_source):
        await service.initialize()
        assert not in_memory_source.closed

        await service.close()
        assert in_memory_source.closed
