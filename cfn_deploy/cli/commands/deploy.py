"""Deploy command implementation"""

import sys

import click
from rich.console import Console
from rich.markup import escape

from ..utils.output import format_deploy_request, format_deploy_result, print_stack_event
from ..utils.progress import deploy_progress, upload_callback
from ...api import Deployer
from ...api.exceptions import InputError
from ...constants import (
    DEFAULT_MAIN_TEMPLATE,
    DEFAULT_REGION,
    ENV_BUCKET,
    ENV_BUCKET_FOLDER,
    ENV_MAIN_TEMPLATE,
    ENV_REGION,
    ENV_STACK_NAME,
    STACK_TIMEOUT,
)
from ...models import DeployRequest
from ...utils.stack_utils import parse_key_value_list

console = Console()

REQUIRED_OPTIONS = ("stackname", "main_template", "region", "bucket")


def validate_required(ctx: click.Context, **values) -> None:
    """Fail with the command help if a required option or the folder is missing"""
    for name in REQUIRED_OPTIONS:
        if not values.get(name):
            _usage_error(ctx, f"Missing required '{name}' param")

    if not values.get("template_folder"):
        _usage_error(ctx, "Expected template folder as argument")


def _usage_error(ctx: click.Context, message: str) -> None:
    console.print(f"[red]Error![/red] {escape(message)}")
    console.print(ctx.get_help(), markup=False)
    sys.exit(1)


@click.command()
@click.argument('template_folder', required=False)
@click.option('-n', '--stackname', envvar=ENV_STACK_NAME,
              help='Name of the stack to create or update')
@click.option('-m', '--main', 'main_template', envvar=ENV_MAIN_TEMPLATE,
              default=DEFAULT_MAIN_TEMPLATE, show_default=True,
              help='Name of the main CloudFormation template')
@click.option('-r', '--region', envvar=ENV_REGION, default=DEFAULT_REGION,
              show_default=True, help='Region to deploy to')
@click.option('-b', '--bucket', envvar=ENV_BUCKET,
              help='Name of the S3 bucket to upload templates to')
@click.option('-k', '--bucketfolder', envvar=ENV_BUCKET_FOLDER, default='',
              help='Optional bucket folder to upload templates to')
@click.option('-p', '--params', default='',
              help='Stack parameters, in the format ParamOne=ValueOne,ParamTwo=ValueTwo')
@click.option('-t', '--tags', default='',
              help='Stack tags, in the format TagNameOne=TagValueOne,TagNameTwo=TagValueTwo')
@click.option('--events/--no-events', default=True,
              help='Stream stack events while waiting')
@click.option('--timeout', type=int, default=STACK_TIMEOUT, show_default=True,
              help='Seconds to wait for the stack to finish')
@click.pass_context
def deploy(ctx, template_folder, stackname, main_template, region, bucket,
           bucketfolder, params, tags, events, timeout):
    """Deploy templates

    Uploads every file in TEMPLATE_FOLDER to S3 under a content-derived
    version, then creates or updates the stack from the main template and
    waits for it to finish.

    The uploaded layout is:

        bucket/[bucketfolder/]stackname/version/templates/...

    Two parameters are always passed to the stack: Version and
    TemplateBaseUrl (the S3 folder holding the main template).

    Examples:

        # Deploy the templates in ./templates
        cfn-deploy deploy -n my-stack -b my-bucket ./templates

        # With parameters and tags
        cfn-deploy deploy -n my-stack -b my-bucket \\
            -p Env=prod,InstanceType=t3.small -t Team=infra ./templates
    """
    validate_required(ctx, template_folder=template_folder, stackname=stackname,
                      main_template=main_template, region=region, bucket=bucket)

    try:
        stack_params = parse_key_value_list(params)
        stack_tags = parse_key_value_list(tags)
    except InputError as e:
        console.print(f"[red]Error![/red] {escape(str(e))}")
        sys.exit(1)

    request = DeployRequest(
        stack_name=stackname,
        template_folder=template_folder,
        bucket=bucket,
        main_template=main_template,
        region=region,
        bucket_folder=bucketfolder or "",
        parameters=stack_params,
        tags=stack_tags,
    )
    console.print(format_deploy_request(request))

    try:
        deployer = Deployer(region=region, timeout=timeout)

        with deploy_progress(console) as progress:
            task_id = progress.add_task("Uploading templates...", total=None)
            on_event = None
            if events:
                on_event = lambda event, error: print_stack_event(event, error, progress.console)

            result = deployer.deploy(
                request,
                on_event=on_event,
                on_upload=upload_callback(progress, task_id)
            )

    except KeyboardInterrupt:
        console.print("\n[yellow]Deployment cancelled[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if ctx.obj is not None and ctx.obj.debug:
            console.print_exception()
        sys.exit(1)

    format_deploy_result(result, console)

    if not result.success:
        sys.exit(1)
