import math
from pathlib import Path

import pytest

from argtrail.parser import ArgumentParser, ParseResult, TypeNode


def assert_no_errors(result: ParseResult):
    assert result.errors == []
    assert result.output == ""
    assert result.code == 0


def assert_type_details(
    result: ParseResult,
    index,
    names,
    type_tag,
    value,
    origin,
    token_indices,
    raw_tokens,
):
    entry = result.details.types[index]
    assert entry.names == names
    assert entry.type_tag == type_tag
    if value is not None:
        assert entry.value == value
    assert entry.origin == origin
    assert entry.token_indices == token_indices
    assert entry.raw_tokens == raw_tokens


@pytest.mark.asyncio
async def test_array_specific_declarations():
    parser = ArgumentParser()
    parser.add_array("-a, --array <vals..>")
    parser.add_array("-s, --strings <one or more strings>")
    parser.add_array("-n, --numbers <n1 [n2 n3..]>", of="number")

    result = await parser.parse(
        "before -a one two -s one,two -s three four -n=1 2 3,4 -- after"
    )
    assert_no_errors(result)

    assert result.argv["a"] == ["one", "two"]
    assert result.argv["array"] == ["one", "two"]
    assert result.argv["s"] == ["one", "two", "three", "four"]
    assert result.argv["strings"] == ["one", "two", "three", "four"]
    assert result.argv["n"] == [1, 2, 3, 4]
    assert result.argv["numbers"] == [1, 2, 3, 4]
    assert result.argv["_"] == ["before", "--", "after"]

    assert result.details.args == [
        "before", "-a", "one", "two", "-s", "one,two", "-s", "three", "four",
        "-n=1", "2", "3,4", "--", "after",
    ]  # fmt: skip

    assert len(result.details.types) == 4
    assert_type_details(result, 0, ["_"], "array:string", ["before", "--", "after"], "positional", [0, 12, 13], ["before", "--", "after"])  # fmt: skip
    assert_type_details(result, 1, ["a", "array"], "array:string", ["one", "two"], "flag", [1, 2, 3], ["-a", "one", "two"])  # fmt: skip
    assert_type_details(result, 2, ["s", "strings"], "array:string", ["one", "two", "three", "four"], "flag", [4, 5, 6, 7, 8], ["-s", "one,two", "-s", "three", "four"])  # fmt: skip
    assert_type_details(result, 3, ["n", "numbers"], "array:number", [1, 2, 3, 4], "flag", [9, 10, 11], ["-n=1", "2", "3,4"])  # fmt: skip


@pytest.mark.asyncio
async def test_array_generic_declarations():
    parser = ArgumentParser()
    parser.add_option("--array", type="array")
    parser.add_option("--strings", type="array:string")
    parser.add_option("--numbers", type="array:number")
    parser.add_option("--enums", type="array:enum", choices=["good", "bad", "ugly"])
    parser.add_option("--paths", type="array:path")
    parser.add_option("--files", type="array:file")
    parser.add_option("--dirs", type="array:dir")

    result = await parser.parse(
        "--array a,b --strings c d --dirs i --numbers one 2 --enums good bad "
        "--paths e f --files=g,h --dirs j"
    )
    assert_no_errors(result)

    assert result.argv["_"] == []
    assert result.argv["array"] == ["a", "b"]
    assert result.argv["strings"] == ["c", "d"]
    numbers = result.argv["numbers"]
    assert math.isnan(numbers[0])
    assert numbers[1] == 2
    assert result.argv["enums"] == ["good", "bad"]
    assert result.argv["paths"] == ["e", "f"]
    assert result.argv["files"] == ["g", "h"]
    assert result.argv["dirs"] == ["i", "j"]

    assert len(result.details.types) == 8
    assert_type_details(result, 0, ["_"], "array:string", [], "default", [], [])
    assert_type_details(result, 1, ["array"], "array:string", ["a", "b"], "flag", [0, 1], ["--array", "a,b"])  # fmt: skip
    assert_type_details(result, 2, ["strings"], "array:string", ["c", "d"], "flag", [2, 3, 4], ["--strings", "c", "d"])  # fmt: skip
    assert_type_details(result, 3, ["numbers"], "array:number", None, "flag", [7, 8, 9], ["--numbers", "one", "2"])  # fmt: skip
    assert_type_details(result, 4, ["enums"], "array:enum", ["good", "bad"], "flag", [10, 11, 12], ["--enums", "good", "bad"])  # fmt: skip
    assert_type_details(result, 5, ["paths"], "array:path", ["e", "f"], "flag", [13, 14, 15], ["--paths", "e", "f"])  # fmt: skip
    assert_type_details(result, 6, ["files"], "array:file", ["g", "h"], "flag", [16], ["--files=g,h"])  # fmt: skip
    assert_type_details(result, 7, ["dirs"], "array:dir", ["i", "j"], "flag", [5, 6, 17, 18], ["--dirs", "i", "--dirs", "j"])  # fmt: skip


@pytest.mark.asyncio
async def test_array_default_value():
    parser = ArgumentParser()
    parser.add_array("--defaultDefault")
    parser.add_array("--customDefaultArray", default=["hi", "there"])
    parser.add_array("--customDefaultValue", default="string")

    result = await parser.parse("")
    assert_no_errors(result)
    assert result.argv["defaultDefault"] == []
    assert result.argv["customDefaultArray"] == ["hi", "there"]
    assert result.argv["customDefaultValue"] == ["string"]
    assert result.get_type("customDefaultArray").origin == "default"

    result = await parser.parse("--customDefaultArray joe bob --customDefaultValue yo")
    assert_no_errors(result)
    assert result.argv["defaultDefault"] == []
    assert result.argv["customDefaultArray"] == ["joe", "bob"]
    assert result.argv["customDefaultValue"] == ["yo"]


@pytest.mark.asyncio
async def test_array_default_is_not_shared_between_parses():
    parser = ArgumentParser()
    parser.add_array("--list", default=["a"])

    first = await parser.parse("")
    first.argv["list"].append("b")
    second = await parser.parse("")
    assert second.argv["list"] == ["a"]


@pytest.mark.asyncio
async def test_array_custom_delimiter():
    parser = ArgumentParser()
    parser.add_array("--dash <one-two-n..>", delimiter="-")
    result = await parser.parse("--dash a-b-c d,e f")
    assert_no_errors(result)
    assert result.argv["dash"] == ["a", "b", "c", "d,e", "f"]


@pytest.mark.asyncio
async def test_array_delimiter_disabled():
    parser = ArgumentParser()
    parser.add_array("--whole", delimiter=False)
    result = await parser.parse("--whole a,b c,d,e")
    assert_no_errors(result)
    assert result.argv["whole"] == ["a,b", "c,d,e"]


@pytest.mark.asyncio
async def test_array_not_cumulative():
    parser = ArgumentParser()
    parser.add_array("--lastFlagWins", cumulative=False)
    result = await parser.parse(
        "--lastFlagWins a b --lastFlagWins c d --lastFlagWins e f"
    )
    assert_no_errors(result)
    assert result.argv["lastFlagWins"] == ["e", "f"]
    entry = result.get_type("lastFlagWins")
    assert entry.token_indices == [6, 7, 8]
    assert entry.raw_tokens == ["--lastFlagWins", "e", "f"]


@pytest.mark.asyncio
async def test_array_nested():
    parser = ArgumentParser()
    parser.add_array(
        "-N, --nested <values>",
        of=TypeNode.array_of("string", cumulative=False),
        delimiter=False,
        help="Interesting CLI choice here",
    )
    result = await parser.parse("-N a b -N c,d -N=e f")
    assert_no_errors(result)

    nested = result.argv["nested"]
    assert len(nested) == 3
    assert nested[0] == ["a", "b"]
    assert nested[1] == ["c", "d"]
    assert nested[2] == ["e", "f"]

    assert len(result.details.types) == 2
    assert_type_details(result, 1, ["N", "nested"], "array:array:string", None, "flag", [0, 1, 2, 3, 4, 5, 6], ["-N", "a", "b", "-N", "c,d", "-N=e", "f"])  # fmt: skip


@pytest.mark.asyncio
async def test_array_nested_from_tag():
    parser = ArgumentParser()
    parser.add_option("-N", type="array:array:number")
    result = await parser.parse("-N 1 2 -N 3,4")
    assert_no_errors(result)
    assert result.argv["N"] == [[1, 2], [3, 4]]


@pytest.mark.asyncio
async def test_array_required():
    parser = ArgumentParser()
    parser.add_array("-a|--array", required=True)

    result = await parser.parse("")
    assert result.code == 1
    assert "Missing required argument: a or array" in result.output
    assert result.errors == []

    result = await parser.parse("-a")
    assert_no_errors(result)
    assert result.argv["a"] == [""]
    assert result.argv["array"] == [""]

    result = await parser.parse("-a hi")
    assert_no_errors(result)
    assert result.argv["a"] == ["hi"]
    assert result.argv["array"] == ["hi"]


@pytest.mark.asyncio
async def test_array_strict():
    parser = ArgumentParser()
    parser.add_array("n", of="number", strict=True)
    parser.add_option("e", type="array:enum", choices=["node", "java", "rust"])
    parser.add_option("p", type="array:path", must_exist=True)

    result = await parser.parse("-n no -e ruby -p blerg_dne")
    assert result.code == 3
    assert 'Value "NaN" is invalid for argument n. Please specify a number.' in result.output
    assert 'Value "ruby" is invalid for argument e. Choices are: node, java, rust' in result.output
    assert "The path does not exist: blerg_dne" in result.output
    assert result.errors == []

    result = await parser.parse(f"-p {Path(__file__)} -e node -n 0")
    assert_no_errors(result)
    assert result.argv["n"] == [0]
    assert result.argv["e"] == ["node"]
    assert result.argv["p"] == [str(Path(__file__))]


@pytest.mark.asyncio
async def test_array_fixed_arity():
    parser = ArgumentParser()
    parser.add_array("-p, --pair", nargs=2)
    result = await parser.parse("-p a b c -p=d e")
    assert_no_errors(result)
    assert result.argv["pair"] == ["a", "b", "d", "e"]
    assert result.argv["_"] == ["c"]
    assert result.get_type("pair").token_indices == [0, 1, 2, 4, 5]
