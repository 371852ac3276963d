import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from attribution_cli.ci import base_reference, export_to_env, head_reference, read_event, require_env_file
from attribution_cli.config import Settings
from attribution_cli.declaration import resolve_declared, validate_declared
from attribution_cli.detectors.identity import load_classifier_config
from attribution_cli.errors import AttributionError
from attribution_cli.git_client import GitHistory
from attribution_cli.pipeline import build_report, collect_details, resolve_range
from attribution_cli.report import render_markdown, render_summary
from attribution_cli.ui import build_details_table, console, error, info, render_verdict

app = typer.Typer(help="AI vs Human attribution for pull requests", add_completion=False)


def _patterns_path(history: GitHistory, patterns_file: str) -> Path:
    p = Path(patterns_file)
    return p if p.is_absolute() else Path(history.working_dir) / p


def _load_settings(**overrides) -> Settings:
    return Settings.from_env().override(**overrides)


@app.command(name="run")
def run_cmd(
    path: str = typer.Option(".", help="Path to the Git repository"),
    patterns_file: Optional[str] = typer.Option(None, help="Extra AI author patterns, one regex per line"),
    volume_mode: Optional[str] = typer.Option(None, help="'changed' (added+deleted) or legacy 'added'"),
    timeout: Optional[float] = typer.Option(None, help="Timeout in seconds for the PR body refetch"),
):
    """CI mode: compute attribution for the current pull_request event and export it to GITHUB_ENV."""
    try:
        settings = _load_settings(patterns_file=patterns_file, volume_mode=volume_mode, api_timeout=timeout)
        env_file = require_env_file(settings.env_file)
        event = read_event(settings.event_path)
        history = GitHistory.open(path)
        classifier = load_classifier_config(_patterns_path(history, settings.patterns_file))

        base_sha, head_sha, commits = resolve_range(
            history, base_reference(event, settings.base_ref), head_reference(event)
        )
        info(f"Classifying {len(commits)} commit(s) in {base_sha[:7]}..{head_sha[:7]}")
        details = collect_details(history, commits, classifier, settings.volume_mode)

        declared = resolve_declared(event.body, settings, event.number)
        report = build_report(base_sha, head_sha, details, declared, settings.volume_mode)
        summary = render_summary(report)
        export_to_env(env_file, render_markdown(report), summary)
    except AttributionError as e:
        error(str(e))
        raise typer.Exit(code=e.exit_code)

    print(summary)


@app.command(name="scan")
def scan_cmd(
    path: str = typer.Option(".", help="Path to the Git repository"),
    base: str = typer.Option("HEAD~1", help="Base revision (exclusive)"),
    head: str = typer.Option("HEAD", help="Head revision (inclusive)"),
    declared: Optional[int] = typer.Option(None, help="Declared AI percentage to combine with the computed one"),
    patterns_file: Optional[str] = typer.Option(None, help="Extra AI author patterns, one regex per line"),
    volume_mode: Optional[str] = typer.Option(None, help="'changed' (added+deleted) or legacy 'added'"),
    markdown: bool = typer.Option(False, "--markdown", help="Print the Markdown report"),
    export_json: bool = typer.Option(False, "--json", help="Export results as JSON"),
):
    """Preview the attribution of a local commit range without touching GITHUB_ENV."""
    try:
        settings = _load_settings(patterns_file=patterns_file, volume_mode=volume_mode)
        if declared is not None:
            declared = validate_declared(declared)
        history = GitHistory.open(path)
        classifier = load_classifier_config(_patterns_path(history, settings.patterns_file))
        base_sha, head_sha, commits = resolve_range(history, base, head)
        details = collect_details(history, commits, classifier, settings.volume_mode)
        report = build_report(base_sha, head_sha, details, declared, settings.volume_mode)
    except AttributionError as e:
        error(str(e))
        raise typer.Exit(code=e.exit_code)

    if export_json:
        print(json.dumps({
            "base": report.base_sha,
            "head": report.head_sha,
            "computed_percent": report.computed_percent,
            "declared_percent": report.declared_percent,
            "final_percent": report.final_percent,
            "ai_volume": report.totals.ai_volume,
            "human_volume": report.totals.human_volume,
            "commits": [
                {"sha": d.sha, "author": d.author, "volume": d.volume, "label": d.label}
                for d in report.details
            ],
        }, indent=2))
        return

    if markdown:
        print(render_markdown(report), end="")
        return

    console.print(build_details_table(report))
    render_verdict(report)
    print(render_summary(report))


def main():
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
