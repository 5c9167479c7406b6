import click
from database.db import db
from models.user import User
from utils.auth import MIN_PASSWORD_LENGTH, hash_password
from utils.seed import ensure_default_users


def register_commands(app):

    @app.cli.command("init-db")
    def init_db():
        db.create_all()
        click.echo("Database tables ensured.")

    @app.cli.command("seed-users")
    def seed_users():
        created = ensure_default_users()
        if created:
            click.echo(f"Created default users: {', '.join(created)}")
        else:
            click.echo("Default users already exist.")

    @app.cli.command("list-users")
    def list_users():
        for u in User.query.order_by(User.id).all():
            click.echo(f"{u.id:>3} | {u.username:20} | {u.role:8} | active={u.is_active} | last_login={u.last_login}")

    @app.cli.command("set-password")
    @click.argument("username")
    @click.argument("newpass")
    def set_password(username, newpass):
        user = User.query.filter_by(username=username).first()
        if not user:
            raise click.ClickException("User not found")
        if len(newpass) < MIN_PASSWORD_LENGTH:
            raise click.ClickException(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        user.password_hash = hash_password(newpass)
        db.session.commit()
        click.echo(f"Password reset for {username}")
