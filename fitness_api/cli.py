"""
Maintenance commands, run through the Flask CLI:

    flask --app fitness_api init-db
    flask --app fitness_api promote-admin someone@example.com
"""
import click
from flask import Flask

from models import storage
from models.db_storage import classes
from models.user import User


def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Create all tables for the configured DATABASE_URL."""
        # create_app() already ran storage.reload(), which creates missing tables
        click.echo(f"OK: tables ready at {app.config['DATABASE_URL']}")
        for name, cls in classes.items():
            click.echo(f"  {name}: {storage.count(cls)} rows")

    @app.cli.command("promote-admin")
    @click.argument("email")
    @click.option("--revoke", is_flag=True, help="Remove admin rights instead of granting them.")
    def promote_admin(email, revoke):
        """Grant (or revoke) administrator rights for EMAIL."""
        user = storage.get_session().query(User).filter(User.email == email).first()
        if user is None:
            raise click.ClickException(f"No user with email {email}")
        user.is_admin = not revoke
        user.save()
        click.echo(f"OK: {email} is now {user.role}")
