import asyncio
from pathlib import Path

from argtrail.config import loader
from argtrail.console import console
from argtrail.diagnostics_table import build_diagnostics_table
from argtrail.parser import ArgumentParser, TypeNode


async def main() -> None:
    parser = loader(Path(__file__).parent / "schema.yaml")
    result = await parser.parse(
        "-s api worker -r us-west-2,eu-west-1 -p 80 443 http --dry-run"
    )
    console.print(build_diagnostics_table(result, title="deploy"))
    for line in result.failures:
        console.print(f"[failure]{line}[/]")

    matrix = ArgumentParser(program="matrix")
    matrix.add_array(
        "-r, --row <cells..>",
        of=TypeNode.array_of("number"),
        delimiter=False,
    )
    result = await matrix.parse("-r 1 2 3 -r 4,5,6")
    console.print(build_diagnostics_table(result, title="matrix"))


if __name__ == "__main__":
    asyncio.run(main())
