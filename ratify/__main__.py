"""CLI entry point"""
import click
from ratify.config import PIN_PATTERN, settings
from ratify.errors import RatifyError
from ratify.state import AppState
from ratify.utils.logging import setup_logging


def _settings(data_file):
    if data_file:
        return settings.model_copy(update={"data_file": data_file})
    return settings


@click.group()
@click.option("--data-file", default=None, help="Path to the JSON data file (defaults to DATA_FILE)")
@click.pass_context
def cli(ctx, data_file):
    """Ratify membership voting CLI"""
    ctx.obj = _settings(data_file)
    setup_logging(ctx.obj.log_level, ctx.obj.log_json)


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT)")
@click.pass_obj
def serve(app_settings, host, port):
    """Run the HTTP API"""
    import uvicorn
    from ratify.main import create_app

    uvicorn.run(create_app(app_settings), host=host or app_settings.host, port=port or app_settings.port)


@cli.command("add-member")
@click.argument("name")
@click.option("--pin", prompt=True, hide_input=True, confirmation_prompt=True, help="4-12 digit PIN")
@click.pass_obj
def add_member(app_settings, name, pin):
    """Add a member to the roster"""
    if not PIN_PATTERN.fullmatch(pin):
        raise click.BadParameter("PIN must be 4-12 digits", param_hint="--pin")
    state = AppState.from_settings(app_settings)
    try:
        member = state.ballots.add_member(name, pin)
    except RatifyError as e:
        raise click.ClickException(e.message)
    click.echo(f"Added member {member.name}")


@cli.command()
@click.pass_obj
def members(app_settings):
    """List roster members"""
    state = AppState.from_settings(app_settings)
    for member in state.ballots.list_members():
        click.echo(member.name)


@cli.command()
@click.pass_obj
def candidates(app_settings):
    """List candidates with their derived status"""
    state = AppState.from_settings(app_settings)
    for c in state.ballots.list_candidates():
        yes = sum(1 for v in c.votes.values() if v)
        no = len(c.votes) - yes
        click.echo(f"{c.id}  {c.first_name} {c.last_initial}.  {c.status.value}  yes={yes} no={no} of {c.total_members}")


@cli.command()
@click.pass_obj
def recompute(app_settings):
    """Rewrite the data file with freshly derived tallies"""
    state = AppState.from_settings(app_settings)
    try:
        updated = state.ballots.recompute_all()
    except RatifyError as e:
        raise click.ClickException(e.message)
    click.echo(f"Recomputed {len(updated)} candidates")


if __name__ == "__main__":
    cli()
