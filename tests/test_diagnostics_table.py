import pytest
from rich.console import Console

from argtrail.diagnostics_table import build_diagnostics_table
from argtrail.parser import ArgumentParser


@pytest.mark.asyncio
async def test_build_diagnostics_table():
    parser = ArgumentParser()
    parser.add_array("-n, --numbers", of="number", strict=True)
    result = await parser.parse("pos -n 1 x")

    table = build_diagnostics_table(result)
    assert table.row_count == 2

    recorder = Console(record=True, width=140)
    recorder.print(table)
    text = recorder.export_text()
    assert "n, numbers" in text
    assert "array:number" in text
    assert "[1, NaN]" in text
    assert "1:-n" in text
