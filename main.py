#!/usr/bin/env python3
"""
PlanForge - AI-assisted project planning

Turn a project idea into epics, tasks and user stories, generate code,
architecture diagrams and pseudocode from them, and push items to Jira.
"""

import click
import json
import logging
import sys
from pathlib import Path

from planforge.config import Config
from planforge.errors import PlanForgeError
from planforge.plantuml import image_url
from planforge.workbench import PlanForgeAPIClient, Workbench, WorkbenchError


def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    # Configure root logger
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.addHandler(console_handler)

    # Reduce noise from external libraries
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)


def load_backlog(path: str) -> dict:
    """Read a backlog file as written by the generate command"""
    with open(path, 'r') as f:
        backlog = json.load(f)
    if not isinstance(backlog, dict):
        raise click.ClickException(f"{path} does not contain a JSON object with epics, tasks and stories")
    return backlog


def get_services(ctx):
    from api.dependencies import build_services

    if ctx.obj.get('services') is None:
        ctx.obj['services'] = build_services(ctx.obj['config'])
    return ctx.obj['services']


@click.group()
@click.option('--config', '-c', default='config.yaml', help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """PlanForge - AI-assisted project planning"""
    setup_logging(verbose)

    # Load configuration
    try:
        config_obj = Config(config)
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    ctx.obj = {'config': config_obj, 'services': None}


@cli.command()
@click.option('--host', default=None, help='Bind address (defaults to server.host)')
@click.option('--port', default=None, type=int, help='Port (defaults to server.port)')
@click.option('--reload', is_flag=True, help='Reload on code changes')
@click.pass_context
def serve(ctx, host, port, reload):
    """Run the PlanForge API server"""
    import uvicorn

    server = ctx.obj['config'].server
    uvicorn.run(
        "api.main:app",
        host=host or server.get('host') or '0.0.0.0',
        port=port or int(server.get('port') or 5001),
        reload=reload
    )


@cli.command()
@click.pass_context
def models(ctx):
    """List the models generation requests can use"""
    services = get_services(ctx)
    try:
        for model in services.llm_client.list_models():
            click.echo(model)
    except PlanForgeError as e:
        click.echo(f"❌ Failed to fetch models: {e.details}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def projects(ctx):
    """List the Jira projects visible to the configured account"""
    services = get_services(ctx)
    try:
        for project in services.jira_client.list_projects():
            click.echo(f"{project['key']}\t{project['name']}")
    except PlanForgeError as e:
        click.echo(f"❌ Failed to fetch Jira projects: {e.details}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('idea')
@click.option('--model', '-m', required=True, help='Model id (gpt-*, claude-* or a local model name)')
@click.option('--output', '-o', default=None, help='Write the backlog JSON to this file')
@click.pass_context
def generate(ctx, idea, model, output):
    """Generate epics, tasks and stories from a project idea"""
    logger = logging.getLogger(__name__)
    services = get_services(ctx)

    try:
        requirements = services.generator.generate_requirements(idea, model)
    except PlanForgeError as e:
        click.echo(f"❌ Failed to generate requirements: {e.details}", err=True)
        sys.exit(1)

    text = json.dumps(requirements, indent=2)
    if output:
        Path(output).write_text(text)
        logger.info(f"✅ Backlog written to {output}")
    else:
        click.echo(text)


@cli.command()
@click.option('--input', '-i', 'input_path', required=True, help='Backlog JSON file')
@click.option('--model', '-m', default=None, help='Override the configured architecture model')
@click.pass_context
def architecture(ctx, input_path, model):
    """Generate a PlantUML architecture diagram for a backlog"""
    config = ctx.obj['config']
    services = get_services(ctx)
    backlog = load_backlog(input_path)

    try:
        diagram = services.generator.generate_architecture(
            backlog.get('epics') or [], backlog.get('tasks') or [], backlog.get('stories') or [], model
        )
    except PlanForgeError as e:
        click.echo(f"❌ Failed to generate valid architecture diagram: {e.details}", err=True)
        sys.exit(1)

    click.echo(diagram)
    click.echo(f"\nImage: {image_url(diagram, config.get_plantuml_server_url())}")


@cli.command()
@click.option('--input', '-i', 'input_path', required=True, help='Backlog JSON file')
@click.option('--model', '-m', default=None, help='Override the configured pseudocode model')
@click.pass_context
def pseudocode(ctx, input_path, model):
    """Generate pseudocode for a backlog"""
    services = get_services(ctx)
    backlog = load_backlog(input_path)

    try:
        click.echo(services.generator.generate_pseudocode(
            backlog.get('epics') or [], backlog.get('tasks') or [], backlog.get('stories') or [], model
        ))
    except PlanForgeError as e:
        click.echo(f"❌ Failed to generate pseudocode: {e.details}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--input', '-i', 'input_path', required=True, help='Backlog JSON file')
@click.option('--project', '-p', 'project_key', default=None, help='Jira project key (defaults to the first project)')
@click.option('--type', '-t', 'item_types', multiple=True, type=click.Choice(['epic', 'task', 'story']),
              help='Only submit items of this type (repeatable)')
@click.pass_context
def submit(ctx, input_path, project_key, item_types):
    """Create Jira issues for the items of a backlog"""
    logger = logging.getLogger(__name__)
    services = get_services(ctx)
    backlog = load_backlog(input_path)

    selected = item_types or ('epic', 'task', 'story')
    failures = 0
    for item_type, key in (('epic', 'epics'), ('task', 'tasks'), ('story', 'stories')):
        if item_type not in selected:
            continue
        for item in backlog.get(key) or []:
            try:
                created = services.issue_mapper.submit_item(item, item_type, project_key)
                logger.info(f"✅ {item.get('id')} -> {created.get('key')}")
            except PlanForgeError as e:
                failures += 1
                logger.error(f"❌ {item.get('id')}: {e.details}")

    if failures:
        click.echo(f"❌ {failures} item(s) could not be created", err=True)
        sys.exit(1)


@cli.command()
@click.argument('idea')
@click.option('--api-url', default='http://localhost:5001', help='Base URL of a running PlanForge API')
@click.option('--model', '-m', default=None, help='Model id (defaults to the first model the API lists)')
@click.option('--architecture', 'with_architecture', is_flag=True, help='Also generate the architecture diagram')
@click.option('--pseudocode', 'with_pseudocode', is_flag=True, help='Also generate pseudocode')
@click.option('--output', '-o', default=None, help='Write the backlog JSON to this file')
@click.pass_context
def plan(ctx, idea, api_url, model, with_architecture, with_pseudocode, output):
    """Run a planning session against a running PlanForge API"""
    logger = logging.getLogger(__name__)
    workbench = Workbench(
        PlanForgeAPIClient(api_url),
        model=model,
        plantuml_server_url=ctx.obj['config'].get_plantuml_server_url()
    )

    try:
        if workbench.model is None:
            workbench.load_models()
        logger.info(f"Using model {workbench.model}")

        workbench.generate_requirements(idea)
        backlog = {'epics': workbench.epics, 'tasks': workbench.tasks, 'stories': workbench.stories}
        if output:
            Path(output).write_text(json.dumps(backlog, indent=2))
            logger.info(f"✅ Backlog written to {output}")
        else:
            click.echo(json.dumps(backlog, indent=2))

        if with_architecture:
            click.echo(workbench.generate_architecture())
            click.echo(f"\nImage: {workbench.architecture_image_url}")
        if with_pseudocode:
            click.echo(workbench.generate_pseudocode())
    except WorkbenchError as e:
        click.echo(f"❌ {e.message}: {e.details or ''}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--output', '-o', default='openapi.json', help='Where to write the schema')
def openapi(output):
    """Generate static OpenAPI JSON documentation"""
    from api.main import app

    with open(output, 'w') as f:
        json.dump(app.openapi(), f, indent=2)

    click.echo(f"✅ OpenAPI schema generated: {output}")


if __name__ == '__main__':
    cli()
