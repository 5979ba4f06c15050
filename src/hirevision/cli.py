"""Typer CLI entrypoint for the recruiter dashboard."""

from __future__ import annotations

import asyncio
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, get_args

import typer
from pydantic import ValidationError

from .config import load_app_config
from .container import DashboardContainer, create_container
from .core import Tab, ViewStateController
from .errors import DashboardError, NetworkError, SessionError
from .logging import configure_logging
from .render import (
    render_candidates,
    render_interviews,
    render_overview,
    render_questions,
)
from .schemas import DateRange, ExperienceLevel, FilterCriteria, User

app = typer.Typer(help="Recruiter dashboard CLI.")
questions_app = typer.Typer(help="Manage interview questions.")
job_app = typer.Typer(help="View or edit the job description.")
app.add_typer(questions_app, name="questions")
app.add_typer(job_app, name="job")

JOB_DESCRIPTION_FIELD = "job_description"


ExperienceOption = Enum(
    "ExperienceOption",
    {level: level for level in get_args(ExperienceLevel)},
    type=str,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Recruiter dashboard backed by a hosted data store."""
    configure_logging(log_level)
    if ctx.obj is not None:
        return
    try:
        settings = load_app_config(config)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc
    ctx.obj = create_container(settings=settings)


@app.command()
def overview(ctx: typer.Context) -> None:
    """Show headline metrics and the job description."""
    asyncio.run(_overview(ctx.obj))


@app.command()
def candidates(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Match title, name, email or experience."),
    experience: Optional[List[ExperienceOption]] = typer.Option(
        None, "--experience", "-e", help="Experience bucket; repeat to select several."
    ),
    rating_min: float = typer.Option(0.0, min=0.0, help="Minimum derived rating."),
    start: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Earliest submission date."),
    end: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Latest submission date (inclusive)."),
) -> None:
    """List candidates matching the given filters."""
    criteria = FilterCriteria(
        experience_levels=[level.value for level in experience] if experience else ["all"],
        search_query=search,
        rating_min=rating_min,
        date_range=DateRange(
            start=start.date() if start else None,
            end=end.date() if end else None,
        ),
    )
    asyncio.run(_candidates(ctx.obj, criteria))


@app.command()
def interviews(ctx: typer.Context) -> None:
    """List the recruiter's interviews, newest first."""
    asyncio.run(_interviews(ctx.obj))


@app.command()
def chat(
    ctx: typer.Context,
    prompt: str = typer.Argument(..., help="Question about your pipeline."),
) -> None:
    """Ask the recruiter assistant a question."""
    asyncio.run(_chat(ctx.obj, prompt))


@app.command()
def logout(ctx: typer.Context) -> None:
    """Sign out of the current session."""
    asyncio.run(_logout(ctx.obj))


@questions_app.command("list")
def questions_list(ctx: typer.Context) -> None:
    """Show the recruiter's interview questions."""
    asyncio.run(_questions(ctx.obj))


@questions_app.command("add")
def questions_add(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Question text."),
) -> None:
    """Add a question to the recruiter's interview."""
    asyncio.run(_questions(ctx.obj, add=text))


@questions_app.command("remove")
def questions_remove(
    ctx: typer.Context,
    question_id: str = typer.Argument(..., help="Identifier of the question to delete."),
) -> None:
    """Delete a question by identifier."""
    asyncio.run(_questions(ctx.obj, remove=question_id))


@job_app.command("show")
def job_show(ctx: typer.Context) -> None:
    """Print the job description."""
    asyncio.run(_job(ctx.obj))


@job_app.command("edit")
def job_edit(
    ctx: typer.Context,
    text: Optional[str] = typer.Option(None, "--text", "-t", help="New job description; opens an editor when omitted."),
) -> None:
    """Replace the job description."""
    asyncio.run(_job(ctx.obj, edit=True, text=text))


async def _require_user(container: DashboardContainer) -> User:
    try:
        user = await container.session().get_current_user()
    except SessionError as exc:
        _fail(exc.user_message)
    if user is None:
        _fail(SessionError.default_message)
    return user


async def _load_records(container: DashboardContainer, user: User, tab: Tab) -> ViewStateController:
    controller: ViewStateController = container.view_state()
    controller.set_tab(tab)
    repository = container.candidates()
    await controller.load(lambda: repository.fetch(user.id))
    if controller.error:
        _banner(controller.error)
    return controller


async def _overview(container: DashboardContainer) -> None:
    user = await _require_user(container)
    controller = await _load_records(container, user, Tab.OVERVIEW)
    manager = container.job_description(recruiter_id=user.id)
    await manager.load()
    if manager.error:
        _banner(manager.error)
    typer.echo(render_overview(user, controller.metrics, manager.job_description))


async def _candidates(container: DashboardContainer, criteria: FilterCriteria) -> None:
    user = await _require_user(container)
    controller = await _load_records(container, user, Tab.CANDIDATES)
    controller.set_criteria(criteria)
    typer.echo(
        render_candidates(
            controller.filtered_records,
            total=len(controller.records),
            is_top_applicant=controller.is_top_applicant,
        )
    )


async def _interviews(container: DashboardContainer) -> None:
    user = await _require_user(container)
    try:
        items = await container.candidates().list_interviews(user.id)
    except DashboardError as exc:
        _fail(exc.user_message)
    typer.echo(render_interviews(items))


async def _questions(
    container: DashboardContainer,
    *,
    add: str | None = None,
    remove: str | None = None,
) -> None:
    user = await _require_user(container)
    manager = container.questions(recruiter_id=user.id)
    await manager.list()
    if manager.error:
        _fail(manager.error)
    if add is not None:
        if not add.strip():
            raise typer.BadParameter("Question text must not be blank.", param_hint="text")
        if await manager.add(add) is None:
            _fail(manager.error or "Question was not added.")
    if remove is not None:
        if not await manager.remove(remove):
            _fail(manager.error or "Question was not removed.")
    typer.echo(render_questions(manager.questions))


async def _job(container: DashboardContainer, *, edit: bool = False, text: str | None = None) -> None:
    user = await _require_user(container)
    manager = container.job_description(recruiter_id=user.id)
    await manager.load()
    if manager.error:
        _fail(manager.error)
    if edit:
        controller: ViewStateController = container.view_state()
        controller.begin_edit(JOB_DESCRIPTION_FIELD, manager.job_description)
        draft = text if text is not None else typer.edit(manager.job_description)
        if draft is None:
            controller.cancel_edit(JOB_DESCRIPTION_FIELD)
            typer.echo("Edit cancelled.")
            return
        controller.update_draft(JOB_DESCRIPTION_FIELD, draft.strip())
        if not await manager.save(controller.finish_edit(JOB_DESCRIPTION_FIELD)):
            _fail(manager.error or "Failed to save job description.")
        typer.echo("Job description saved.")
    typer.echo(manager.job_description or "No job description set.")


async def _chat(container: DashboardContainer, prompt: str) -> None:
    try:
        user = await container.session().get_current_user()
    except SessionError:
        user = None
    try:
        reply = await container.chat_client().send(prompt, user.id if user else None)
    except NetworkError as exc:
        _fail(exc.user_message)
    if reply is None:
        raise typer.BadParameter("Prompt must not be blank.", param_hint="prompt")
    if not reply.ok:
        _fail(reply.text)
    typer.echo(reply.text)


async def _logout(container: DashboardContainer) -> None:
    try:
        await container.session().sign_out()
    except SessionError as exc:
        _fail(exc.user_message)
    typer.echo("Signed out.")


def _banner(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def _fail(message: str) -> None:
    _banner(message)
    raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
