"""EditorSession: reactive state for one spreadsheet editing session."""

from __future__ import annotations

from typing import Any

import param
from loguru import logger

from ..command.models import CommandRequest, CommandResponse
from ..command.placement import Placement, apply_response
from ..command.sheet_context import DEFAULT_MAX_CELLS, build_sheet_context
from ..command.transport import (
    CommandTransport,
    CommandTransportError,
    HttpCommandTransport,
)
from ..config import Settings
from ..core.cell import Cell
from ..core.column_label import cell_label
from ..widget.grid_handle import GridHandle
from ..widget.restore import RestoreGuard, Scheduler
from ..widget.selection import SelectionStore


class EditorSession(param.Parameterized):
    """Session-scoped context object tying the grid, selection and backend.

    Holds the SelectionStore (the only holder of the grid handle) and
    exposes display state for the surrounding UI. Opening the command
    palette snapshots the grid selection; executing a command sends it to
    the backend and writes the result back through the store.
    """

    # --- Grid dimensions ---
    n_rows = param.Integer(default=100, bounds=(1, None))
    n_cols = param.Integer(default=26, bounds=(1, None))

    # --- Command palette ---
    command_open = param.Boolean(default=False)
    is_processing = param.Boolean(default=False)

    # --- Selection display ---
    selected_range = param.String(default="")
    selection_count = param.Integer(default=0, bounds=(0, None))

    # --- Status text ---
    status_text = param.String(default="")

    # --- Sheet context ---
    include_sheet_context = param.Boolean(default=True)
    sheet_context_max_cells = param.Integer(default=DEFAULT_MAX_CELLS, bounds=(0, None))

    def __init__(
        self,
        transport: CommandTransport | None = None,
        scheduler: Scheduler | None = None,
        restore_guard: RestoreGuard | None = None,
        **params: Any,
    ) -> None:
        super().__init__(**params)
        self._transport = transport
        self._store = SelectionStore(scheduler=scheduler, restore_guard=restore_guard)
        self._store.on_change(self._on_selection_change)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: CommandTransport | None = None,
        scheduler: Scheduler | None = None,
    ) -> EditorSession:
        """Build a session configured from :class:`Settings`."""
        if transport is None:
            transport = HttpCommandTransport(
                base_url=settings.backend_url, timeout=settings.request_timeout,
            )
        guard = RestoreGuard(
            settle=settings.restore_settle_seconds,
            timeout=settings.restore_timeout_seconds,
        )
        return cls(
            transport=transport,
            scheduler=scheduler,
            restore_guard=guard,
            n_rows=settings.grid_rows,
            n_cols=settings.grid_cols,
            sheet_context_max_cells=settings.sheet_context_max_cells,
        )

    @property
    def store(self) -> SelectionStore:
        return self._store

    @property
    def selected_cells(self) -> tuple[Cell, ...]:
        return self._store.selected_cells

    def attach_grid(self, handle: GridHandle) -> None:
        """Hold ``handle`` for this session and follow its selection."""
        n_rows, n_cols = getattr(handle, "n_rows", None), getattr(handle, "n_cols", None)
        if isinstance(n_rows, int) and isinstance(n_cols, int):
            self.param.update(n_rows=n_rows, n_cols=n_cols)
        self._store.attach(handle)

    def _on_selection_change(self, cells: tuple[Cell, ...]) -> None:
        self.selected_range = self._store.range_text
        self.selection_count = len(cells)

    # --- Command palette ---

    def open_command(self) -> bool:
        """Open the command palette for the grid's current selection.

        Refused while a command is processing or when nothing is selected.
        """
        if self.is_processing:
            return False
        self._store.update_from_query(self._store.grid_handle)
        if not self._store.selected_cells:
            return False
        self.command_open = True
        return True

    def close_command(self) -> None:
        """Close the palette and clear the selection snapshot."""
        self.command_open = False
        self._store.clear()

    def build_request(self, command: str) -> CommandRequest:
        """Command payload for the current selection."""
        context = None
        handle = self._store.grid_handle
        if self.include_sheet_context and handle is not None:
            context = build_sheet_context(handle, self.sheet_context_max_cells)
        return CommandRequest(
            command=command,
            selected_cells=self._store.selected_cells,
            selected_ranges=tuple(self._store.range_labels),
            sheet_context=tuple(context) if context is not None else None,
        )

    async def execute_command(self, command: str) -> CommandResponse | None:
        """Send ``command`` for the current selection and place the result.

        Returns None without contacting the backend when a command is
        already processing, nothing is selected, or no transport is set.
        The session always ends up not processing and closed.
        """
        if self.is_processing or self._transport is None:
            return None
        if not command.strip() or not self._store.selected_cells:
            return None

        request = self.build_request(command)
        self._set_processing(True)
        try:
            response = await self._transport.execute(request)
        except CommandTransportError as e:
            logger.error("Command failed: {}", e)
            self.status_text = f"Error: {e}"
            return None
        else:
            if response.success:
                placement = self._place(request, response)
                self.status_text = self._describe(placement)
            else:
                logger.warning("Backend rejected command: {}", response.error)
                self.status_text = f"Error: {response.error or 'command failed'}"
            return response
        finally:
            self._set_processing(False)
            self.close_command()

    def _place(self, request: CommandRequest, response: CommandResponse) -> Placement:
        return apply_response(
            self._store, request.selected_cells, response, self.n_rows, self.n_cols,
        )

    @staticmethod
    def _describe(placement: Placement) -> str:
        if placement.target is not None:
            return f"Result written to {cell_label(*placement.target)}"
        if placement.column_cells:
            return f"{len(placement.column_cells)} column formula(s) written"
        return ""

    def _set_processing(self, flag: bool) -> None:
        self.is_processing = flag
        self._store.set_processing(flag)

    async def close(self) -> None:
        """Release the transport and the grid handle."""
        if self._transport is not None:
            await self._transport.close()
        self._store.detach()
