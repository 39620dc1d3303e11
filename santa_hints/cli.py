from __future__ import annotations

import click
from flask import current_app
from flask.cli import AppGroup

from .policies import get_store
from .security import hash_admin_password
from .services.assignments import AssignmentError, regenerate


santa_cli = AppGroup("santa", help="Secret Santa maintenance commands.")


@santa_cli.command("regenerate")
def regenerate_command():
    """Issue new codes and a new assignment, dropping all hints."""
    try:
        entries = regenerate(get_store(), current_app.config["SANTA_ROSTER"])
    except AssignmentError as e:
        raise click.ClickException(str(e)) from e

    for entry in entries:
        click.echo(f"{entry.participant.name}\t{entry.participant.code}\t-> {entry.gives_to_name}")


@santa_cli.command("hash-password")
@click.password_option()
def hash_password_command(password: str):
    """Print an ADMIN_PASS_HASH value for the given password."""
    click.echo(hash_admin_password(password))
