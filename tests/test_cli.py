"""
Tests for the publana-admin console.
"""

import pytest

from publana.cli import build_parser, run
from publana.modules.storage import MemoryOptionStore

OPTION_KEY = "publana_api_tokens"


async def run_command(store, *argv):
    return await run(build_parser().parse_args(list(argv)), store, OPTION_KEY)


@pytest.mark.asyncio
async def test_generate_adds_token():
    store = MemoryOptionStore()

    assert await run_command(store, "generate") == 0

    tokens = await store.get(OPTION_KEY)
    assert len(tokens) == 1
    assert len(tokens[0]) == 64


@pytest.mark.asyncio
async def test_list_initializes_empty_set():
    store = MemoryOptionStore()

    assert await run_command(store, "list") == 0
    assert await store.get(OPTION_KEY) == []


@pytest.mark.asyncio
async def test_list_with_reveal():
    store = MemoryOptionStore({OPTION_KEY: ["t" * 64]})

    assert await run_command(store, "list", "--reveal") == 0
    assert await store.get(OPTION_KEY) == ["t" * 64]


@pytest.mark.asyncio
async def test_revoke_removes_token():
    store = MemoryOptionStore({OPTION_KEY: ["keep", "drop", "drop"]})

    assert await run_command(store, "revoke", "drop") == 0
    assert await store.get(OPTION_KEY) == ["keep"]


@pytest.mark.asyncio
async def test_revoke_unknown_token():
    store = MemoryOptionStore({OPTION_KEY: ["keep"]})

    assert await run_command(store, "revoke", "missing") == 0
    assert await store.get(OPTION_KEY) == ["keep"]


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_revoke_requires_token():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["revoke"])
