"""CLI commands for the wedding RSVP."""

import asyncio
from pathlib import Path

import typer

from src.calendar_export.events import CALENDAR_FILENAME
from src.calendar_export.ics import generate_ics_content
from src.config.logging import setup_logging
from src.config.settings import settings
from src.guests.dtos import Event, ExistingRSVPDTO, GuestNotFoundError, LookupFailedError
from src.rsvp_form.client import RSVPApiClient, get_rsvp_api_client
from src.rsvp_form.controller import RSVPFormController
from src.rsvp_form.state import FormStep

app = typer.Typer(help="CLI commands for the wedding RSVP")


def _api_client(api_url: str, demo: bool | None) -> RSVPApiClient:
    return get_rsvp_api_client(api_url, demo=demo, latency=settings.demo_latency_seconds)


def _print_summary(rsvp: ExistingRSVPDTO) -> None:
    if not rsvp.attending:
        typer.secho("  Not attending", fg=typer.colors.YELLOW)
    for guest in rsvp.guests:
        label = " (guest)" if guest.is_plus_one else ""
        events = ", ".join(event.label for event in guest.events)
        typer.secho(f"  - {guest.name}{label}: {events}", fg=typer.colors.BLUE)
        if guest.dietary:
            typer.secho(f"      Dietary: {guest.dietary}", fg=typer.colors.BLUE)
    for guest in rsvp.not_attending_guests:
        typer.secho(f"  - {guest.name}: not attending", fg=typer.colors.MAGENTA)
    typer.secho(f"  Submitted by: {rsvp.submitted_by}", fg=typer.colors.CYAN)
    if rsvp.message:
        typer.secho(f"  Message: {rsvp.message}", fg=typer.colors.CYAN)


def _prompt_events(name: str, current: list[Event]) -> list[Event]:
    return [
        event
        for event in Event
        if typer.confirm(f"  {name} - {event.label}?", default=event in current)
    ]


@app.callback()
def main():
    setup_logging()


@app.command()
def lookup(
    first_name: str = typer.Argument(..., help="Guest first name"),
    last_name: str = typer.Argument(..., help="Guest last name"),
    api_url: str = typer.Option(settings.rsvp_api_url, "--api-url", help="RSVP API base URL"),
    demo: bool = typer.Option(None, "--demo/--no-demo", help="Use the in-memory demo guest list"),
):
    """Find an invitation and show the party it covers."""
    api = _api_client(api_url, demo)
    try:
        result = asyncio.run(api.lookup_guest(first_name, last_name))
    except GuestNotFoundError:
        typer.secho(f"No invitation found for {first_name} {last_name}", fg=typer.colors.RED)
        raise typer.Exit(1)
    except LookupFailedError as e:
        typer.secho(f"Lookup failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    party = result.party
    typer.secho(f"Invitation found for {party.leader.full_name}", fg=typer.colors.GREEN)
    typer.secho(f"  Party: {party.leader.party_name or 'solo'}", fg=typer.colors.BLUE)
    for member in party.members:
        kind = "" if member.is_adult else " (child)"
        typer.secho(f"  - {member.full_name}{kind}", fg=typer.colors.BLUE)
    typer.secho(f"  Plus-one offered: {'yes' if party.has_plus_one else 'no'}", fg=typer.colors.CYAN)

    if result.existing_rsvp is not None:
        typer.echo()
        typer.secho("Already responded:", fg=typer.colors.GREEN)
        _print_summary(result.existing_rsvp)


async def _find_invitation(form: RSVPFormController) -> None:
    while form.state.step in (FormStep.START, FormStep.NOT_FOUND):
        first_name = typer.prompt("First name")
        last_name = typer.prompt("Last name")
        await form.find_invitation(first_name, last_name)
        if form.state.error:
            typer.secho(form.state.error, fg=typer.colors.RED)


def _collect_details(form: RSVPFormController) -> None:
    for guest in form.state.guests:
        attending = typer.confirm(f"Is {guest.full_name} attending?", default=not guest.not_attending)
        if not attending:
            form.update_guest(guest.id, not_attending=True)
            continue
        events = _prompt_events(guest.first_name, guest.events)
        dietary = typer.prompt("  Dietary requirements", default=guest.dietary, show_default=False)
        form.update_guest(guest.id, not_attending=False, events=events, dietary=dietary)

    if form.state.offers_plus_one:
        plus_one = form.state.plus_one
        name = typer.prompt(
            "Plus-one name (leave empty for none)", default=plus_one.name, show_default=False
        )
        if name.strip():
            events = _prompt_events(name, plus_one.events)
            dietary = typer.prompt("  Dietary requirements", default=plus_one.dietary, show_default=False)
            form.set_plus_one(name, events=events, dietary=dietary)
        else:
            form.set_plus_one("")

    message = typer.prompt("Message for the couple", default=form.state.message, show_default=False)
    form.set_message(message)


async def _run_form(form: RSVPFormController) -> None:
    await _find_invitation(form)

    if form.state.step == FormStep.LOCKED:
        typer.secho("Your party has already responded:", fg=typer.colors.GREEN)
        _print_summary(form.state.existing_rsvp)
        return

    while form.state.step in (FormStep.DETAILS, FormStep.REVIEW):
        if form.state.step == FormStep.DETAILS:
            _collect_details(form)
            await form.submit_details()
            if form.state.error:
                typer.secho(form.state.error, fg=typer.colors.RED)
            continue

        typer.secho("Please review your RSVP:", fg=typer.colors.GREEN)
        _print_summary(form.review_summary())
        if not typer.confirm("Submit?", default=True):
            form.back()
            continue
        await form.submit()
        if form.state.error:
            typer.secho(form.state.error, fg=typer.colors.RED)
            if not typer.confirm("Try again?", default=True):
                return

    if form.state.step == FormStep.DECLINED:
        typer.secho("We're sorry you can't make it. Your response has been recorded.", fg=typer.colors.YELLOW)
    elif form.state.step == FormStep.SUBMITTED:
        typer.secho("Thank you! Your RSVP has been submitted.", fg=typer.colors.GREEN)

    if form.calendar_link:
        typer.secho(f"Add to Google Calendar: {form.calendar_link}", fg=typer.colors.CYAN)


@app.command()
def rsvp(
    api_url: str = typer.Option(settings.rsvp_api_url, "--api-url", help="RSVP API base URL"),
    demo: bool = typer.Option(None, "--demo/--no-demo", help="Use the in-memory demo guest list"),
):
    """Walk through the RSVP form interactively."""
    form = RSVPFormController(_api_client(api_url, demo))
    asyncio.run(_run_form(form))


@app.command()
def calendar(
    output: Path = typer.Option(
        Path(CALENDAR_FILENAME),
        "--output",
        "-o",
        help="Where to write the .ics file",
    ),
):
    """Write the wedding weekend events to an iCalendar file."""
    output.write_text(generate_ics_content(), encoding="utf-8", newline="")
    typer.secho(f"Calendar written to {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
