import math

import pytest

from argtrail.parser import ArgumentParser


@pytest.mark.asyncio
async def test_string_option_last_occurrence_wins():
    parser = ArgumentParser()
    parser.add_option("-n, --name")
    result = await parser.parse("-n first rest -n second")
    assert result.argv["n"] == "second"
    assert result.argv["name"] == "second"
    assert result.argv["_"] == ["rest"]
    entry = result.get_type("name")
    assert entry.type_tag == "string"
    assert entry.token_indices == [3, 4]
    assert entry.raw_tokens == ["-n", "second"]


@pytest.mark.asyncio
async def test_scalar_without_value():
    parser = ArgumentParser()
    parser.add_option("-s")
    parser.add_option("-n", type="number")
    result = await parser.parse("-s -n")
    assert result.argv["s"] == ""
    assert math.isnan(result.argv["n"])
    assert result.code == 0


@pytest.mark.asyncio
async def test_scalar_defaults():
    parser = ArgumentParser()
    parser.add_option("--name")
    parser.add_option("--port", type="number", default=8080)
    result = await parser.parse("")
    assert result.argv["name"] is None
    assert result.argv["port"] == 8080
    assert result.get_type("port").origin == "default"
    assert result.get_type("port").token_indices == []


@pytest.mark.asyncio
async def test_number_option():
    parser = ArgumentParser()
    parser.add_option("-p, --port", type="number", strict=True)
    result = await parser.parse("--port 8080")
    assert result.argv["port"] == 8080
    assert result.code == 0

    result = await parser.parse("--port http")
    assert math.isnan(result.argv["port"])
    assert result.code == 1
    assert result.output == (
        'Value "NaN" is invalid for argument p or port. Please specify a number.'
    )


@pytest.mark.asyncio
async def test_enum_option():
    parser = ArgumentParser()
    parser.add_option("--env", type="enum", choices=["dev", "prod"])
    result = await parser.parse("--env prod")
    assert result.argv["env"] == "prod"

    result = await parser.parse("--env qa")
    assert result.argv["env"] == "qa"
    assert result.code == 1
    assert result.output == (
        'Value "qa" is invalid for argument env. Choices are: dev, prod'
    )


@pytest.mark.asyncio
async def test_boolean_option():
    parser = ArgumentParser()
    parser.add_option("-v, --verbose", type="boolean")

    result = await parser.parse("-v file")
    assert result.argv["verbose"] is True
    assert result.argv["_"] == ["file"]
    assert result.get_type("v").token_indices == [0]

    result = await parser.parse("--verbose=no")
    assert result.argv["v"] is False

    result = await parser.parse("")
    assert result.argv["verbose"] is False
    assert result.get_type("verbose").origin == "default"


@pytest.mark.asyncio
async def test_aliases_share_one_value():
    parser = ArgumentParser()
    parser.add_array("-t, --tags")
    result = await parser.parse("-t a --tags b")
    assert result.argv["t"] is result.argv["tags"]
    assert result.argv["tags"] == ["a", "b"]
    assert result.values == {"t": ["a", "b"], "tags": ["a", "b"]}
    assert result.positionals == []
