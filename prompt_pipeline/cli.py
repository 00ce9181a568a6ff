"""Prompt Pipeline CLI."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _build_orchestrator():
    from .config import PipelineConfig
    from .orchestrator import Orchestrator

    return Orchestrator.from_config(PipelineConfig.from_env())


@click.group()
def main():
    """Prompt Pipeline - retrieval-augmented prompts for AI coding tools."""
    from .utils.logging import setup_logging

    setup_logging("prompt_pipeline")


@main.command()
def version():
    """Show version."""
    from . import __version__
    console.print(f"prompt-pipeline v{__version__}")


@main.command()
def init():
    """Initialize the knowledge database tables."""
    from .db.config import get_db_path
    from .db.migrations import run_migrations

    db_path = get_db_path()
    console.print(f"[blue]Initializing database at {db_path}[/blue]")

    run_migrations(db_path)

    console.print("[green]Database initialized successfully![/green]")


@main.command()
def tools():
    """List supported tools."""
    from .profiles.registry import ToolProfileRegistry

    registry = ToolProfileRegistry.default()

    table = Table(title="Supported Tools")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Strategies")

    for tool_id in registry.tool_ids():
        profile = registry.get(tool_id)
        table.add_row(
            tool_id,
            profile.display_name,
            profile.category.value,
            ", ".join(s.strategy_type.value for s in profile.strategies),
        )

    console.print(table)


@main.command()
def stages():
    """Show pipeline stages and their progression."""
    from .models import PromptStage
    from .pipeline.states import next_stage
    from .pipeline.requests import task_type_for_stage

    table = Table(title="Stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Task Type")
    table.add_column("Next")

    for stage in PromptStage:
        table.add_row(stage.value, task_type_for_stage(stage), next_stage(stage).value)

    console.print(table)


@main.command()
@click.argument("project_type", default="web_app")
def tasks(project_type: str):
    """Suggest typical tasks for a project type (web_app, mobile_app, ecommerce, blog)."""
    from .pipeline.requests import task_suggestions

    for task in task_suggestions(project_type):
        console.print(f"  - {task}")


@main.command()
@click.option("--tool", "-t", "tool_id", default="lovable", help="Target tool id")
@click.option("--stage", "-s", default="app_skeleton", help="Pipeline stage")
@click.option("--name", "-n", required=True, help="App name")
@click.option("--description", "-d", required=True, help="What the app does")
@click.option("--platform", "platforms", multiple=True, default=("web",), help="web and/or mobile")
@click.option("--design-style", type=click.Choice(["minimal", "playful", "business"]), default=None)
@click.option("--style-description", default=None, help="Free-text style preference")
@click.option("--audience", default=None, help="Target audience")
@click.option("--complexity", type=click.Choice(["simple", "medium", "complex"]), default="medium")
@click.option("--experience", type=click.Choice(["beginner", "intermediate", "advanced"]), default=None)
@click.option("--strategy", type=click.Choice(["structured", "conversational", "incremental"]), default=None,
              help="Force a strategy instead of selecting one")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def generate(tool_id, stage, name, description, platforms, design_style, style_description,
             audience, complexity, experience, strategy, as_json):
    """Generate a prompt for one stage of an app idea."""
    from .errors import PromptPipelineError
    from .models import PromptStage, StrategyType
    from .pipeline.requests import build_task_context

    try:
        prompt_stage = PromptStage.from_string(stage)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--stage")

    app_idea = {
        "app_name": name,
        "idea_description": description,
        "platforms": list(platforms),
        "design_style": design_style,
        "style_description": style_description,
        "target_audience": audience,
        "project_complexity": complexity,
        "technical_experience": experience,
    }

    try:
        with _build_orchestrator() as orchestrator:
            profile = orchestrator.registry.get(tool_id)
            task, project = build_task_context(app_idea, prompt_stage, profile)
            result = orchestrator.generate_prompt(
                task, project, tool_id,
                strategy=StrategyType(strategy) if strategy else None,
            )
    except PromptPipelineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(result.prompt)
    console.print()
    conf = result.confidence_score
    conf_style = "green" if conf >= 0.9 else "yellow" if conf >= 0.7 else "red"
    console.print(f"[bold]Strategy:[/bold] {result.applied_strategy.value}")
    console.print(f"[bold]Confidence:[/bold] [{conf_style}]{conf:.0%}[/{conf_style}]")
    if result.next_suggested_stage:
        console.print(f"[bold]Next stage:[/bold] {result.next_suggested_stage.value}")
    if result.degraded:
        console.print(f"[yellow]Degraded: {'; '.join(result.degradation_reasons)}[/yellow]")
    for suggestion in result.enhancement_suggestions:
        console.print(f"  - {suggestion}")


@main.command()
@click.argument("text")
@click.option("--file", "from_file", is_flag=True, help="Treat TEXT as a path to a prompt file")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def validate(text: str, from_file: bool, as_json: bool):
    """Score a prompt's quality out of 100."""
    from .validation import validate_prompt

    if from_file:
        text = Path(text).read_text(encoding="utf-8")

    result = validate_prompt(text)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    style = "green" if result.is_valid else "red"
    console.print(f"[{style}]Score: {result.score}/100 ({'valid' if result.is_valid else 'invalid'})[/{style}]")
    for issue in result.issues:
        console.print(f"  [yellow]! {issue}[/yellow]")
    for suggestion in result.suggestions:
        console.print(f"  - {suggestion}")


@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.option("--collection", "-c", type=click.Choice(["knowledge_documents", "prompt_templates"]),
              default="knowledge_documents", help="Target collection")
def ingest(path: str, collection: str):
    """Ingest a JSON list of documents into the knowledge database."""
    from .config import PipelineConfig
    from .db.migrations import run_migrations
    from .retrieval.embeddings import OpenAIEmbeddingProvider
    from .retrieval.ingestion import KnowledgeIngestor
    from .retrieval.sqlite_store import SQLiteKnowledgeStore

    config = PipelineConfig.from_env()
    run_migrations(config.db_path)

    ingestor = KnowledgeIngestor(
        OpenAIEmbeddingProvider(model=config.embedding_model),
        SQLiteKnowledgeStore(config.db_path, collection),
    )
    ids = ingestor.ingest_file(Path(path))

    console.print(f"[green]Ingested {len(ids)} documents ({len(set(ids))} unique) into {collection}[/green]")


if __name__ == "__main__":
    main()
