"""
RecToSpec - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--provider, --model, --lang, ...)
    2. Environment variables (GOOGLE_GENERATIVE_AI_API_KEY, RECTOSPEC__LLM__TIMEOUT, ...)
    3. Project config (.rectospec/config.json)
    4. User config (~/.rectospec/config.json)

Usage:
    rectospec init
    rectospec generate recording.json --lang en
    rectospec compile recording.feature -o ./tests
"""

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rectospec import __version__
from rectospec.config import (
    PROVIDER_ENV_VARS,
    SUPPORTED_LANGUAGES,
    SUPPORTED_PROVIDERS,
    ConfigStore,
    RuntimeSettings,
)
from rectospec.exceptions import RecToSpecError
from rectospec.llm.gateway import GenerationGateway
from rectospec.pipeline import generate_gherkin, generate_playwright, generate_suggestion
from rectospec.prompts import (
    FOCUS_AREAS,
    GherkinGenerationOptions,
    PlaywrightGenerationOptions,
    SuggestionOptions,
)
from rectospec.recording import normalize_file
from rectospec.templates import generate_config_file
from rectospec.utils.file_system import (
    read_text_file,
    resolve_output_path,
    resolve_within,
    write_text_file,
)
from rectospec.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# Create the CLI app
app = typer.Typer(
    name="rectospec",
    help="Chrome Recorder to Gherkin to Playwright - AI-powered test automation tool",
    add_completion=False,
)

console = Console()


def build_store() -> ConfigStore:
    """Configuration store for the current directory and user."""
    return ConfigStore()


def build_gateway(store: ConfigStore) -> GenerationGateway:
    """Gateway used by the generation commands."""
    return GenerationGateway(store, settings=RuntimeSettings())


def load_env_files() -> None:
    """Load the first .env file found in the working directory."""
    for env_path in [Path(".env"), Path(".env.local")]:
        if env_path.exists():
            load_dotenv(env_path)
            break


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print failures and exit with status 1."""
    try:
        yield
    except RecToSpecError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]✗ Unexpected error occurred: {escape(str(e))}[/red]")
        logger.exception("Command failed")
        raise typer.Exit(1)


def header(title: str) -> None:
    console.print(Panel.fit(f"[bold blue]RecToSpec[/bold blue] - {title}", border_style="blue"))


def next_steps(steps: Sequence[str]) -> None:
    console.print("\n[bold]Next steps:[/bold]")
    for i, step in enumerate(steps, 1):
        console.print(f"  {i}. {step}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """Record in Chrome, get Gherkin and Playwright tests."""
    load_env_files()
    settings = RuntimeSettings()
    setup_logging(
        level="DEBUG" if verbose else settings.logging.level,
        log_file=settings.logging.file,
        json_format=settings.logging.json_format,
    )


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing configuration"),
    global_scope: bool = typer.Option(False, "--global", "-g", help="Save to ~/.rectospec instead of ./.rectospec"),
):
    """
    Initialize RecToSpec configuration.

    Asks for the LLM provider, its API key, the Gherkin language and whether
    to generate edge-case scenarios.
    """
    header("Initial Setup")
    scope = "global" if global_scope else "local"

    with handle_errors():
        store = build_store()
        path = store.get_config_path_by_scope(scope)

        if path.is_file() and not force:
            console.print(f"[yellow]Configuration file already exists: {path}[/yellow]")
            if not typer.confirm("Do you want to overwrite the existing configuration?", default=False):
                console.print("[dim]Setup cancelled[/dim]")
                return

        provider = prompt_choice("Select LLM provider", SUPPORTED_PROVIDERS, "google")
        api_key = prompt_api_key(provider)
        language = prompt_choice("Select Gherkin generation language", SUPPORTED_LANGUAGES, "ja")
        include_edge_cases = typer.confirm("Generate edge case scenarios automatically?", default=True)

        store.update(
            {
                "llm": {"provider": provider, "apiKeys": {provider: api_key}},
                "language": language,
                "generation": {"includeEdgeCases": include_edge_cases},
            },
            scope=scope,
        )

    console.print(f"[green]✓ Configuration saved[/green] [dim]({path})[/dim]")
    console.print("\n[bold green]Setup completed![/bold green]")
    console.print("Next step: [cyan]rectospec generate <recording.json>[/cyan]")


def prompt_choice(message: str, choices: Sequence[str], default: str) -> str:
    """Ask until the answer is one of ``choices``."""
    while True:
        answer = typer.prompt(f"{message} ({'/'.join(choices)})", default=default).strip()
        if answer in choices:
            return answer
        console.print(f"[red]Please choose one of: {', '.join(choices)}[/red]")


def prompt_api_key(provider: str) -> str:
    """Ask for a non-empty API key without echoing it."""
    while True:
        api_key = typer.prompt(f"Enter {provider} API key", hide_input=True).strip()
        if api_key:
            return api_key
        console.print("[red]Please enter an API key[/red]")


@app.command()
def generate(
    recording_file: Path = typer.Argument(..., help="Chrome Recorder JSON file path"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path (default: <recording>.feature)"),
    lang: Optional[str] = typer.Option(None, "--lang", help="Language: ja, en (default: from config)"),
    edge_cases: Optional[bool] = typer.Option(None, "--edge-cases/--no-edge-cases", help="Generate edge case scenarios"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="LLM provider: google, anthropic"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model name (default: provider default)"),
):
    """
    Generate a Gherkin file from a Chrome Recorder JSON export.

    Examples:
        rectospec generate recording.json
        rectospec generate recording.json -o test.feature --lang en
        rectospec generate recording.json --no-edge-cases
    """
    header("Gherkin Generation")

    with handle_errors():
        store = build_store()
        config = store.load()

        recording_path = recording_file.resolve()
        recording = normalize_file(recording_path)
        console.print(f"[green]✓[/green] Recording parsed ({recording.metadata.step_count} steps)")
        console.print(f"[dim]Title:[/dim] {escape(recording.title)}")
        console.print(f"[dim]Start URL:[/dim] {escape(recording.metadata.url)}")

        options = GherkinGenerationOptions(
            language=lang or config.language,
            include_edge_cases=config.generation.include_edge_cases if edge_cases is None else edge_cases,
        )

        with console.status("Generating Gherkin..."):
            gherkin = asyncio.run(generate_gherkin(
                recording,
                options,
                build_gateway(store),
                provider=provider,
                model=model,
            ))

        output_path = resolve_output_path(recording_path, output, ".feature")
        write_text_file(output_path, gherkin)

    console.print(f"[green]✓ Created: {output_path}[/green]")
    console.print(f"\nNext step: [cyan]rectospec compile {output_path}[/cyan]")


@app.command("compile")
def compile_feature(
    feature_file: Path = typer.Argument(..., help="Gherkin feature file path"),
    output: Path = typer.Option(Path("./tests"), "--output", "-o", help="Output directory path"),
    typescript: Optional[bool] = typer.Option(None, "--typescript/--no-typescript", help="Generate TypeScript (default: from config)"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="LLM provider: google, anthropic"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model name (default: provider default)"),
):
    """
    Generate Playwright test code from a Gherkin feature file.

    Writes a page object, a test spec and test data under the output
    directory, plus a Playwright config when the project has none.
    """
    header("Playwright Code Generation")

    with handle_errors():
        store = build_store()
        config = store.load()
        use_typescript = config.output.typescript if typescript is None else typescript

        feature_path = feature_file.resolve()
        gherkin = read_text_file(feature_path)
        console.print(f"[dim]Feature file:[/dim] {feature_path.name}")
        console.print(f"[dim]Output directory:[/dim] {output}")
        console.print(f"[dim]TypeScript:[/dim] {'Yes' if use_typescript else 'No'}")

        with console.status("Generating Playwright code..."):
            code = asyncio.run(generate_playwright(
                gherkin,
                PlaywrightGenerationOptions(typescript=use_typescript),
                build_gateway(store),
                provider=provider,
                model=model,
            ))

        output_dir = output.resolve()
        # Check every model-supplied name before writing any file
        planned = [
            (label, resolve_within(output_dir, generated.filename), generated.code)
            for label, generated in code.files()
        ]
        written = []
        for label, path, content in planned:
            write_text_file(path, content)
            written.append((label, path))

        config_result = generate_config_file(output_dir, typescript=use_typescript)
        if not config_result.skipped:
            write_text_file(config_result.path, config_result.content)

    console.print("[bold green]✓ Playwright test code generated successfully[/bold green]\n")
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("File")
    table.add_column("Path")
    for label, path in written:
        table.add_row(label, str(path))
    if not config_result.skipped:
        table.add_row("Playwright Config", str(config_result.path))
    console.print(table)
    if config_result.skipped:
        console.print(f"[dim]Existing Playwright config kept: {config_result.path}[/dim]")

    next_steps([
        "Review and customize the generated code",
        "Install Playwright: npm install -D @playwright/test",
        "Run tests: npx playwright test",
    ])


@app.command()
def suggest(
    feature_file: Path = typer.Argument(..., help="Gherkin feature file path"),
    focus: str = typer.Option("all", "--focus", help=f"Focus area: {', '.join(FOCUS_AREAS)}"),
    lang: Optional[str] = typer.Option(None, "--lang", help="Language: ja, en (default: from config)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the suggestion to a file instead of printing it"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="LLM provider: google, anthropic"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model name (default: provider default)"),
):
    """
    Suggest an improved version of a Gherkin feature file.

    Examples:
        rectospec suggest login.feature --focus completeness
        rectospec suggest login.feature -o login.improved.feature
    """
    with handle_errors():
        store = build_store()
        config = store.load()

        options = SuggestionOptions(
            current_content=read_text_file(feature_file.resolve()),
            language=lang or config.language,
            focus_area=focus,
        )

        with console.status("Generating suggestion..."):
            suggestion = asyncio.run(generate_suggestion(
                options,
                build_gateway(store),
                provider=provider,
                model=model,
            ))

        if output:
            write_text_file(output.resolve(), suggestion)

    if output:
        console.print(f"[green]✓ Created: {output.resolve()}[/green]")
    else:
        console.print(suggestion, markup=False, highlight=False)


@app.command("init-config")
def init_config(
    output: Path = typer.Option(Path("./tests"), "--output", "-o", help="Test directory path"),
    typescript: bool = typer.Option(True, "--typescript/--no-typescript", help="Generate a TypeScript config"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Base URL for Playwright config"),
):
    """Generate a Playwright configuration file in the current directory."""
    header("Playwright Config Generation")
    console.print(f"[dim]Test directory:[/dim] {output}")
    console.print(f"[dim]TypeScript:[/dim] {'Yes' if typescript else 'No'}")
    if base_url:
        console.print(f"[dim]Base URL:[/dim] {base_url}")

    with handle_errors():
        result = generate_config_file(output.resolve(), base_url=base_url, typescript=typescript)
        if result.skipped:
            console.print("[yellow]Config file already exists, skipping[/yellow]")
            console.print(f"[dim]Existing config file: {result.path}[/dim]")
            console.print("\nTo regenerate the config file, remove or rename it and run this command again.")
            return
        write_text_file(result.path, result.content)

    console.print(f"[green]✓ Created: {result.path}[/green]")
    next_steps([
        "Review and customize the configuration if needed",
        "Install Playwright: npm install -D @playwright/test",
        "Generate test code: rectospec compile <feature-file>",
        "Run tests: npx playwright test",
    ])


@app.command("config-show")
def config_show():
    """Show the configuration in effect (API keys masked)."""
    with handle_errors():
        store = build_store()
        path = store.resolve_active_path()
        config = store.load()

    console.print(f"[dim]Config file:[/dim] {path or 'none (built-in defaults)'}")
    console.print_json(data=config.masked_document())

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Provider")
    table.add_column("Environment variable")
    table.add_column("API key")
    for name in SUPPORTED_PROVIDERS:
        env_var = PROVIDER_ENV_VARS[name]
        if store.get_api_key(name) is None:
            status = "[red]missing[/red]"
        else:
            status = "[green]set[/green]"
        table.add_row(name, env_var, status)
    console.print(table)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]RecToSpec[/bold] v{__version__}")


if __name__ == "__main__":
    app()
