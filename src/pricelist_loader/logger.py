import logging
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

from rich.console import ConsoleRenderable, Group
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table
from rich.text import Text
from rich.traceback import Traceback

logger = logging.getLogger("pricelist_loader")
logger.addHandler(logging.NullHandler())


def log_start_end(func):
    """Log the start and end of the decorated region processing step.

    The decorated method is expected to take the region code as its
    first positional argument after `self`."""

    def wrap(*args, **kwargs):
        self = args[0]
        # log start of the step
        try:
            fname = f"{kwargs.get('region_code', args[1])}/{func.__name__}"
        except Exception:
            fname = func.__name__
        logger.debug("Starting %s", fname)

        # update the progress bar of the regions with the step name
        if self.progress_tracker:
            # drop `process_` prefix and prettify
            self.progress_tracker.update_regions(
                step=func.__name__[8:].replace("_", " ")
            )

        # actually run step
        result = func(*args, **kwargs)

        # log end of the step and return
        logger.debug("Finished %s", fname)
        return result

    return wrap


def _version() -> str:
    try:
        return version("aws-pricelist-loader")
    except PackageNotFoundError:
        return "dev"


# https://github.com/Textualize/rich/issues/1532#issuecomment-1062431265
class PlRichHandler(RichHandler):
    """Extend RichHandler with function name logged in the right column."""

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Optional[Traceback],
        message_renderable: "ConsoleRenderable",
    ):
        path = Path(record.pathname).name + ":" + record.funcName
        level = self.get_level_text(record)
        time_format = None if self.formatter is None else self.formatter.datefmt
        log_time = datetime.fromtimestamp(record.created)

        log_renderable = self._log_render(
            self.console,
            [message_renderable] if not traceback else [message_renderable, traceback],
            log_time=log_time,
            time_format=time_format,
            level=level,
            path=path,
            line_no=record.lineno,
            link_path=record.pathname if self.enable_link_path else None,
        )
        return log_renderable


class ProgressPanel:
    regions: Progress = Progress(
        TimeElapsedColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TextColumn("({task.completed} of {task.total} regions): {task.fields[step]}"),
        expand=False,
    )
    tasks: Progress = Progress(
        TimeElapsedColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        expand=False,
        transient=True,
    )
    metadata: Text = Text(justify="left")
    panels: Table = Table.grid(padding=1)

    def __init__(self, *args, **kwargs):
        self.panels.add_row(
            Group(
                Panel(
                    self.metadata,
                    title="AWS Price List Loader v" + _version(),
                    title_align="left",
                ),
                Panel(
                    self.regions,
                    title="Regions",
                    title_align="left",
                ),
            ),
            Panel(
                self.tasks,
                title="Running tasks",
                title_align="left",
                expand=False,
            ),
        )


class RegionProgressTracker:
    """Tracking the progress of the region documents and the steps within them."""

    progress_panel: ProgressPanel
    """
    A `rich` panel including progress bars.
    Should not be used directly, see the `regions`, `tasks` and `metadata` attributes.
    """
    # reexport Progress attributes of the ProgressPanel
    regions: Progress
    """[rich.progress.Progress][] for tracking the processed regions."""
    tasks: Progress
    """[rich.progress.Progress][] for tracking the SKUs and terms within a region."""
    metadata: Text
    """[rich.text.Text][] metadata, e.g. data source and database connection."""
    task_ids: List[TaskID]
    """List of active task ids."""

    def __init__(self, progress_panel: ProgressPanel):
        self.progress_panel = progress_panel
        self.regions = progress_panel.regions
        self.tasks = progress_panel.tasks
        self.metadata = progress_panel.metadata
        self.task_ids = []

    def start_regions(self, name: str, total: int) -> TaskID:
        """Starts a progress bar for the regions of a service.

        Args:
            name: Name to show in front of the progress bar, e.g. the service name.
            total: Overall number of regions to show in the progress bar.

        Returns:
            TaskId: The progress bar's identifier to be referenced in future updates.
        """
        return self.regions.add_task(name, total=total, step="")

    def advance_regions(self, advance: int = 1) -> None:
        """Increment the number of finished regions."""
        self.regions.update(self.regions.task_ids[-1], advance=advance)

    def update_regions(self, **kwargs) -> None:
        """Update the regions' progress bar.

        Useful fields:
        - `step`: Name of the currently running step to be shown on the progress bar.
        """
        self.regions.update(self.regions.task_ids[-1], **kwargs)

    def start_task(self, name: str, total: int) -> TaskID:
        """Starts a progress bar in the list of current jobs.

        Besides returning the `TaskID`, it will also register in `self.task_ids`
        as the last task, which will be the default value for future `advance_task`,
        `hide_task` etc calls. The latter will remove the `TaskID` from the `task_ids`.

        Args:
            name: Name to show in front of the progress bar.
            total: Overall number of steps to show in the progress bar.

        Returns:
            TaskId: The progress bar's identifier to be referenced in future updates.
        """
        self.task_ids.append(self.tasks.add_task(name, total=total))
        return self.last_task()

    def last_task(self) -> TaskID:
        """Return the last registered TaskID."""
        return self.task_ids[-1]

    def advance_task(self, task_id: Optional[TaskID] = None, advance: int = 1):
        """Increment the number of finished steps.

        Args:
            task_id: The progress bar's identifier returned by `start_task`.
                Defaults to the most recently created task.
            advance: Number of steps to advance.
        """
        self.tasks.update(self.last_task() if task_id is None else task_id, advance=advance)

    def hide_task(self, task_id: Optional[TaskID] = None):
        """Hide a task from the list of progress bars.

        Args:
            task_id: The progress bar's identifier returned by `start_task`.
                Defaults to the most recently created task.
        """
        self.tasks.update(self.last_task() if task_id is None else task_id, visible=False)
        self.task_ids.pop()
