from __future__ import annotations

import asyncio
import json
from unittest.mock import patch

import pytest
import requests

from timing_archive.errors import MalformedPayloadError
from timing_archive.streams import StreamCache, StreamOutcome

SESSION = "2023/2023-03-05_Bahrain_Grand_Prix/2023-03-05_Race/"
TRACK_STATUS = '00:00:04.215{"Status":"1","Message":"AllClear"}\r\n00:41:12.050{"Status":"2","Message":"Yellow"}\r\n'


def _cache(config, descriptor_index: int = 0) -> StreamOutcome:
    descriptor = config.streams[descriptor_index]
    return asyncio.run(StreamCache(config).cache_stream(SESSION, descriptor.name, descriptor))


def test_fetched_stream_is_parsed_and_persisted(archive, config) -> None:
    archive.add(SESSION + "TrackStatus.jsonStream", TRACK_STATUS, bom=True)

    assert _cache(config) is StreamOutcome.FETCHED

    path = config.data_root / SESSION / "TrackStatus.json"
    expected = [
        {"00:00:04.215": {"Status": "1", "Message": "AllClear"}},
        {"00:41:12.050": {"Status": "2", "Message": "Yellow"}},
    ]
    assert path.read_text(encoding="utf-8") == json.dumps(expected, ensure_ascii=False, indent=2)


def test_local_name_drops_stream_extension(archive, config) -> None:
    archive.add(SESSION + "Position.z.jsonStream", '00:00:01.000"7ZbBasE"')

    _cache(config, 1)

    assert (config.data_root / SESSION / "Position.z.json").exists()


def test_existing_artifact_suppresses_fetch_even_if_invalid(archive, config) -> None:
    path = config.data_root / SESSION / "TrackStatus.json"
    path.parent.mkdir(parents=True)
    path.write_text("not json at all", encoding="utf-8")

    assert _cache(config) is StreamOutcome.CACHED
    assert archive.calls == []
    assert path.read_text(encoding="utf-8") == "not json at all"


def test_unavailable_stream_is_skipped(archive, config) -> None:
    assert _cache(config) is StreamOutcome.UNAVAILABLE

    session_dir = config.data_root / SESSION
    assert session_dir.is_dir()
    assert list(session_dir.iterdir()) == []


def test_transport_failure_skips_only_that_stream(config) -> None:
    with patch("timing_archive.remote.requests.get") as get:
        get.side_effect = requests.Timeout("slow")
        assert _cache(config) is StreamOutcome.UNAVAILABLE

    assert not (config.data_root / SESSION / "TrackStatus.json").exists()


def test_malformed_payload_is_fatal_and_writes_nothing(archive, config) -> None:
    archive.add(SESSION + "TrackStatus.jsonStream", "12:34:56.789{bad json")

    with pytest.raises(MalformedPayloadError):
        _cache(config)

    assert not (config.data_root / SESSION / "TrackStatus.json").exists()


def test_session_streams_run_in_mapping_order(archive, config) -> None:
    archive.add(SESSION + "TrackStatus.jsonStream", TRACK_STATUS)

    outcomes = asyncio.run(StreamCache(config).cache_session(SESSION))

    assert outcomes == [StreamOutcome.FETCHED, StreamOutcome.UNAVAILABLE]
    assert archive.calls == [
        "https://archive.test/static/" + SESSION + "TrackStatus.jsonStream",
        "https://archive.test/static/" + SESSION + "Position.z.jsonStream",
    ]


def test_concurrent_requests_for_one_artifact_fetch_once(archive, config) -> None:
    archive.add(SESSION + "TrackStatus.jsonStream", TRACK_STATUS)
    cache = StreamCache(config)
    descriptor = config.streams[0]

    async def cache_twice():
        return await asyncio.gather(
            cache.cache_stream(SESSION, descriptor.name, descriptor),
            cache.cache_stream(SESSION, descriptor.name, descriptor),
        )

    assert asyncio.run(cache_twice()) == [StreamOutcome.FETCHED, StreamOutcome.FETCHED]
    assert len(archive.calls) == 1
