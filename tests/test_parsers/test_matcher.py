import pytest

from argtrail.parser import ArgumentParser


@pytest.mark.asyncio
async def test_key_value_tokens():
    parser = ArgumentParser()
    parser.add_option("-n, --name")
    parser.add_array("--files")

    result = await parser.parse("--name=joe --files=a,b c")
    assert result.argv["name"] == "joe"
    assert result.argv["files"] == ["a", "b", "c"]
    assert result.get_type("name").raw_tokens == ["--name=joe"]
    assert result.get_type("files").token_indices == [1, 2]


@pytest.mark.asyncio
async def test_key_value_keeps_extra_equals_in_value():
    parser = ArgumentParser()
    parser.add_option("-d, --define")
    result = await parser.parse("-d=key=value")
    assert result.argv["define"] == "key=value"


@pytest.mark.asyncio
async def test_unknown_key_value_is_positional():
    parser = ArgumentParser()
    parser.add_option("--name")
    result = await parser.parse("--other=1 --name x")
    assert result.argv["_"] == ["--other=1"]
    assert result.argv["name"] == "x"


@pytest.mark.asyncio
async def test_separator_makes_everything_positional():
    parser = ArgumentParser()
    parser.add_array("-a")
    result = await parser.parse(["-a", "x", "--", "-a", "y"])
    assert result.argv["a"] == ["x"]
    assert result.argv["_"] == ["--", "-a", "y"]
    assert result.get_type("_").token_indices == [2, 3, 4]
    assert result.get_type("_").origin == "positional"


@pytest.mark.asyncio
async def test_open_schema_folds_unknown_flags():
    parser = ArgumentParser()
    parser.add_array("-a")

    result = await parser.parse("-z y -a x -q")
    assert result.code == 0
    assert result.argv["_"] == ["-z", "y"]
    assert result.argv["a"] == ["x", "-q"]


@pytest.mark.asyncio
async def test_closed_schema_reports_unknown_flags():
    parser = ArgumentParser(allow_unknown=False)
    parser.add_array("-a")

    result = await parser.parse("-a x -z y")
    assert result.code == 1
    assert result.output == "Unknown argument: -z"
    assert result.argv["a"] == ["x"]
    assert result.argv["_"] == ["y"]
    assert result.errors == []


@pytest.mark.asyncio
async def test_closed_schema_accepts_negative_numbers():
    parser = ArgumentParser(allow_unknown=False)
    parser.add_array("-n", of="number")
    result = await parser.parse("-n -1 -2.5 -.5")
    assert result.code == 0
    assert result.argv["n"] == [-1, -2.5, -0.5]


@pytest.mark.asyncio
async def test_closed_schema_separator_allows_flag_like_positionals():
    parser = ArgumentParser(allow_unknown=False)
    parser.add_option("-a")
    result = await parser.parse("-a x -- -z")
    assert result.code == 0
    assert result.argv["_"] == ["--", "-z"]


@pytest.mark.asyncio
async def test_array_stops_at_next_recognized_flag():
    parser = ArgumentParser()
    parser.add_array("-a, --alpha")
    parser.add_array("-b, --beta")
    result = await parser.parse("-a 1 2 --beta 3 -a=4")
    assert result.argv["alpha"] == ["1", "2", "4"]
    assert result.argv["beta"] == ["3"]
    assert result.get_type("alpha").token_indices == [0, 1, 2, 5]
