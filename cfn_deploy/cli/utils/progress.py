# cfn_deploy/cli/utils/progress.py
"""Progress display utilities"""

from contextlib import contextmanager
from typing import Callable, Generator

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    MofNCompleteColumn,
    TaskID,
)


@contextmanager
def deploy_progress(console: Console = None) -> Generator[Progress, None, None]:
    """Spinner and counter shown while a deployment runs"""
    with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console or Console(),
            transient=True,
    ) as progress:
        yield progress


def upload_callback(progress: Progress,
                    task_id: TaskID,
                    done_description: str = "Waiting for stack...") -> Callable[[int, int], None]:
    """Build an upload progress callback that drives a progress task

    Args:
        progress: Progress display
        task_id: Task to update
        done_description: Description once every upload finished

    Returns:
        Callback(completed, total)
    """
    def _callback(completed: int, total: int) -> None:
        progress.update(task_id, completed=completed, total=total)
        if completed >= total:
            progress.update(task_id, description=done_description)

    return _callback
