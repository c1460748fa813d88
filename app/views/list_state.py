"""
List-management view state.

One instance backs one list page: it loads rows through a `ListSource`,
derives the filtered and paginated view synchronously from the current
filter values, and drives the create/edit/view/delete dialogs. Every
successful mutation is followed by a full refetch of the list and stats.
"""
import asyncio
import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Set

from app.core.filtering import FieldFilter, apply_filters, page_count, paginate
from app.core.results import ApiResponse
from app.services.export import export_csv

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class DialogMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"
    DELETE_CONFIRM = "delete_confirm"


@dataclass
class ListSource:
    """Service calls behind one page"""
    fetch: Callable[[], Awaitable[ApiResponse]]
    create: Callable[[Row], Awaitable[ApiResponse]]
    update: Callable[[str, Row], Awaitable[ApiResponse]]
    permanent_delete: Callable[[str], Awaitable[ApiResponse]]
    fetch_stats: Optional[Callable[[], Awaitable[ApiResponse]]] = None
    on_view: Optional[Callable[[str], Awaitable[ApiResponse]]] = None


@dataclass
class ListPageConfig:
    data_type: str
    entity_label: str
    filters: Sequence[FieldFilter] = ()
    required_fields: Sequence[str] = ()
    blank_form: Row = field(default_factory=dict)
    page_size: int = 10


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ListViewState:
    def __init__(self, config: ListPageConfig, source: ListSource):
        self.config = config
        self.source = source

        self.status = FetchStatus.IDLE
        self.items: List[Row] = []
        self.stats: Any = None
        self.error: Optional[str] = None
        self.banner: Optional[str] = None
        self.flash: Optional[str] = None

        self.filter_values: Dict[str, Any] = {}
        self.page = 1

        self.dialog = DialogMode.CLOSED
        self.selected: Optional[Row] = None
        self.form: Row = {}
        self.form_error: Optional[str] = None
        self.busy = False

        self._background: Set[asyncio.Future] = set()

    # -- derived view -----------------------------------------------------

    @property
    def filtered(self) -> List[Row]:
        return apply_filters(self.items, self.config.filters, self.filter_values)

    @property
    def page_items(self) -> List[Row]:
        return paginate(self.filtered, self.page, self.config.page_size)

    @property
    def total_pages(self) -> int:
        return page_count(len(self.filtered), self.config.page_size)

    # -- loading ----------------------------------------------------------

    async def mount(self) -> None:
        await self.refresh()

    async def retry(self) -> None:
        self.error = None
        await self.refresh()

    async def refresh(self) -> None:
        """
        Reload rows and stats. A failure before the first successful load
        puts the page in the error state; a later failure keeps the rows
        already shown and raises a dismissible banner instead.
        """
        loaded_before = self.status == FetchStatus.LOADED
        if not loaded_before:
            self.status = FetchStatus.LOADING

        result = await self.source.fetch()
        if result.success:
            self.items = list(result.data or [])
            self.status = FetchStatus.LOADED
            self.error = None
            self.banner = None
        elif loaded_before:
            self.banner = result.error or f"Failed to refresh {self.config.data_type}"
        else:
            self.items = []
            self.status = FetchStatus.ERROR
            self.error = result.error or f"Failed to load {self.config.data_type}"

        if self.source.fetch_stats is not None and result.success:
            stats = await self.source.fetch_stats()
            if stats.success:
                self.stats = stats.data
            else:
                logger.warning("Stats for %s unavailable: %s", self.config.data_type, stats.error)

    def dismiss_banner(self) -> None:
        self.banner = None

    def dismiss_flash(self) -> None:
        self.flash = None

    # -- filters and paging -----------------------------------------------

    def set_filter(self, key: str, value: Any) -> None:
        self.filter_values[key] = value
        self.page = 1

    def clear_filters(self) -> None:
        self.filter_values = {}
        self.page = 1

    def set_page(self, page: int) -> None:
        self.page = max(1, page)

    # -- dialogs ----------------------------------------------------------

    def open_create(self) -> None:
        self._open(DialogMode.CREATE, None, copy.deepcopy(self.config.blank_form))

    def open_edit(self, row: Row) -> None:
        form = {key: copy.deepcopy(row.get(key, default)) for key, default in self.config.blank_form.items()}
        self._open(DialogMode.EDIT, row, form)

    def open_view(self, row: Row) -> None:
        self._open(DialogMode.VIEW, row, {})
        if self.source.on_view is not None:
            # Not awaited; the dialog opens regardless of the outcome
            task = asyncio.ensure_future(self.source.on_view(row["id"]))
            self._background.add(task)
            task.add_done_callback(self._view_finished)

    def _view_finished(self, task: asyncio.Future) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.warning("View hook failed for %s: %s", self.config.data_type, task.exception())
        elif not task.result().success:
            logger.warning("View hook failed for %s: %s", self.config.data_type, task.result().error)

    def request_delete(self, row: Row) -> None:
        self._open(DialogMode.DELETE_CONFIRM, row, {})

    def cancel(self) -> None:
        self._open(DialogMode.CLOSED, None, {})

    def _open(self, mode: DialogMode, row: Optional[Row], form: Row) -> None:
        self.dialog = mode
        self.selected = row
        self.form = form
        self.form_error = None

    # -- mutations --------------------------------------------------------

    async def submit(self, form: Optional[Row] = None) -> Optional[bool]:
        """
        Save the create/edit form. Returns None when ignored (busy or no
        form dialog open), False on a validation or save failure.
        """
        if self.busy or self.dialog not in (DialogMode.CREATE, DialogMode.EDIT):
            return None
        if form is not None:
            self.form = form

        missing = [name for name in self.config.required_fields if _missing(self.form.get(name))]
        if missing:
            self.form_error = f"Please fill in all required fields: {', '.join(missing)}"
            return False

        editing = self.dialog == DialogMode.EDIT
        self.busy = True
        try:
            if editing:
                result = await self.source.update(self.selected["id"], self.form)
            else:
                result = await self.source.create(self.form)
        finally:
            self.busy = False

        if not result.success:
            self.form_error = result.error or f"Failed to save {self.config.entity_label.lower()}"
            return False

        self.flash = f"{self.config.entity_label} {'updated' if editing else 'created'} successfully"
        self.cancel()
        await self.refresh()
        return True

    async def confirm_delete(self) -> Optional[bool]:
        if self.busy or self.dialog != DialogMode.DELETE_CONFIRM or self.selected is None:
            return None

        self.busy = True
        try:
            result = await self.source.permanent_delete(self.selected["id"])
        finally:
            self.busy = False

        if not result.success:
            self.form_error = result.error or f"Failed to delete {self.config.entity_label.lower()}"
            return False

        self.flash = f"{self.config.entity_label} deleted successfully"
        self.cancel()
        await self.refresh()
        return True

    # -- export -----------------------------------------------------------

    def export_csv(self) -> ApiResponse:
        return export_csv(self.filtered, self.config.data_type)
