from attribution_cli.models import Report

VOLUME_LABELS = {"changed": "added+deleted", "added": "added only"}

MARKER = "<!-- ai-attribution-marker -->"


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def render_markdown(report: Report) -> str:
    totals = report.totals
    metric = VOLUME_LABELS.get(report.volume_mode, report.volume_mode)
    declared = f"{report.declared_percent}%" if report.declared_percent is not None else "n/a"
    rows = [
        f"| `{d.short_sha}` | {_escape_cell(d.author)} | {d.volume} | {d.label} |"
        for d in report.details
    ]
    lines = [
        MARKER,
        "**AI Attribution (recomputed at HEAD):**",
        "",
        f"- **Computed AI% (by diff volume):** {report.computed_percent}%",
        f"- **Declared AI% (from PR body):** {declared}",
        f"- **Final AI% (max of both):** {report.final_percent}%",
        "",
        f"- AI diff volume ({metric}): {totals.ai_volume}",
        f"- Human diff volume ({metric}): {totals.human_volume}",
        f"- Total diff volume: {totals.total_volume}",
        "",
        "<details><summary>Per-commit details</summary>",
        "",
        "| Commit | Author | Changed (±) | Label |",
        "|---|---|---:|---|",
        *rows,
        "</details>",
    ]
    return "\n".join(lines) + "\n"


def render_summary(report: Report) -> str:
    declared = f"{report.declared_percent}%" if report.declared_percent is not None else "n/a"
    return (
        f"Computed {report.computed_percent}% · Declared {declared} · "
        f"Final {report.final_percent}% ({report.base_sha[:7]}..{report.head_sha[:7]})"
    )
