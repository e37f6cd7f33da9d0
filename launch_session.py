"""Run one AI command against the configured backend on a small demo sheet."""

import asyncio
import sys

import sheet_selection as ss
from sheet_selection.config import get_settings
from sheet_selection.logging import setup_logging


async def main(command: str) -> None:
    settings = get_settings()
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)

    grid = ss.TraitletsGrid.from_rows([
        ["Region", "Q1", "Q2", "Q3"],
        ["North", 120, 135, 150],
        ["South", 98, 101, 110],
        ["East", 143, 150, 139],
    ])
    session = ss.EditorSession.from_settings(settings)
    session.attach_grid(grid)

    grid.select_cell(1, 1, 3, 3)
    print(f"Selection: {session.selected_range} ({session.selection_count} cells)")

    session.open_command()
    response = await session.execute_command(command)
    print(f"Success: {response.success if response else False}")
    print(session.status_text)
    await session.close()


if __name__ == "__main__":
    asyncio.run(main(" ".join(sys.argv[1:]) or "sum each column"))
