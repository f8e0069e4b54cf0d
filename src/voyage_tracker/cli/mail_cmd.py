"""Mail ingestion commands."""
from __future__ import annotations

import typer

from voyage_tracker.cli.state import CliState, reported_errors
from voyage_tracker.ingest.mail import MailInbox, MergeReport, merge_relay_mail, merge_tracker_fixes

app = typer.Typer(help="Merge tracker fixes and relayed mail from the configured inbox")

MERGE_ALL = typer.Option(False, "--merge-all", help="Search the full mail history instead of since the last update")


def _report(report: MergeReport, label: str) -> None:
    if report.deduplicated:
        typer.echo(f"Deduplicated {len(report.deduplicated)} {label}:")
        for point in report.deduplicated:
            typer.echo(str(point))
    if report.added:
        typer.echo(f"Added {len(report.added)} {label} to voyage:")
        for point in report.added:
            typer.echo(str(point))
    if not report.added and not report.deduplicated:
        typer.echo(f"No new {label} found.")


def _update(state: CliState, tracker: bool, relay: bool, merge_all: bool) -> None:
    with reported_errors():
        voyage = state.load()
        mail = state.config.mail
        with MailInbox(mail) as inbox:
            if tracker:
                _report(merge_tracker_fixes(voyage, inbox, mail, merge_all), "tracker fixes")
            if relay:
                _report(merge_relay_mail(voyage, inbox, mail, merge_all), "relay messages")
        voyage.update()
        state.save(voyage)
    typer.echo(f"\n{voyage}")


@app.command("update-tracker")
def update_tracker(ctx: typer.Context, merge_all: bool = MERGE_ALL) -> None:
    """Check the inbox for new tracker fixes."""
    _update(ctx.obj, tracker=True, relay=False, merge_all=merge_all)


@app.command("update-relay")
def update_relay(ctx: typer.Context, merge_all: bool = MERGE_ALL) -> None:
    """Check the inbox for new relayed mail."""
    _update(ctx.obj, tracker=False, relay=True, merge_all=merge_all)


@app.command("update")
def update(ctx: typer.Context, merge_all: bool = MERGE_ALL) -> None:
    """Merge tracker fixes and relayed mail, then show the voyage."""
    _update(ctx.obj, tracker=True, relay=True, merge_all=merge_all)
