# cfn_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS
from ...models import DeployRequest, DeployResult, StackEvent

console = Console()


def _status_style(status: str) -> str:
    """Pick a colour for a stack or resource status"""
    if status.endswith("_FAILED") or "ROLLBACK" in status:
        return "red"
    if status.endswith("_IN_PROGRESS"):
        return "yellow"
    if status.endswith("_COMPLETE"):
        return "green"
    return "white"


def format_stack_event(event: StackEvent) -> str:
    """Render a stack event as a single line of console markup"""
    timestamp = event.timestamp.strftime("%Y-%m-%d %H:%M:%S") if event.timestamp else "-"
    style = _status_style(event.resource_status)
    line = (
        f"[dim]{timestamp}[/dim] "
        f"[{style}]{event.resource_status}[/{style}] "
        f"{event.resource_type} [bold]{event.logical_resource_id}[/bold]"
    )
    if event.status_reason:
        line += f" [dim]{escape(event.status_reason)}[/dim]"
    return line


def print_stack_event(event: Optional[StackEvent],
                      error: Optional[Exception],
                      target: Console = None) -> None:
    """Event callback that prints to the console"""
    target = target or console
    if error is not None:
        target.print(f"[yellow]Unable to fetch stack events: {escape(str(error))}[/yellow]")
    elif event is not None:
        target.print(format_stack_event(event))


def format_deploy_request(request: DeployRequest) -> Table:
    """Summary table of a deployment request"""
    table = Table(title="Deployment", show_header=False, box=box.SIMPLE)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Stack", request.stack_name)
    table.add_row("Region", request.region)
    table.add_row("Templates", f"{request.template_folder} (main: {request.main_template})")
    bucket = request.bucket
    if request.bucket_folder:
        bucket = f"{bucket}/{request.bucket_folder}"
    table.add_row("Bucket", bucket)

    if request.parameters:
        table.add_row("Parameters", ", ".join(f"{k}={v}" for k, v in request.parameters.items()))
    if request.tags:
        table.add_row("Tags", ", ".join(f"{k}={v}" for k, v in request.tags.items()))

    return table


def format_deploy_result(result: DeployResult, target: Console = None) -> None:
    """Format and display deploy operation result"""
    target = target or console

    if result.success:
        lines = [
            f"[green]{EMOJI_SUCCESS}[/green] Deployment successful!",
            "",
            f"[bold]Stack:[/bold] {result.stack_name}",
            f"[bold]Stack ID:[/bold] {result.stack_id}",
            f"[bold]Action:[/bold] {result.action.value}",
            f"[bold]Status:[/bold] {result.outcome.status}",
            f"[bold]Version:[/bold] {result.version}",
            f"[bold]Template:[/bold] {result.template_url}",
        ]
        if result.duration is not None:
            lines.append(f"[dim]Duration: {result.duration:.2f}s[/dim]")

        target.print(Panel("\n".join(lines), title="Deploy Result", border_style="green"))
        return

    lines = [f"[red]{EMOJI_ERROR} Deploy failed:[/red] {escape(str(result.error))}"]

    if result.uploads is not None and result.uploads.has_errors:
        lines.append("")
        lines.append(
            f"[yellow]Uploaded {len(result.uploads.successful)} of {len(result.uploads)} files[/yellow]"
        )
        for upload in result.uploads:
            if not upload.success:
                lines.append(f"  [red]• {escape(str(upload.file))}: {escape(str(upload.error))}[/red]")

    if result.outcome is not None and result.outcome.status:
        lines.append("")
        lines.append(f"[bold]Stack status:[/bold] {result.outcome.status}")

    target.print(Panel("\n".join(lines), title="Deploy Error", border_style="red"))
