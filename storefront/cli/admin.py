"""Operator CLI commands for roles, verification codes and attempt pruning."""

from datetime import datetime, timedelta, timezone

import typer
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from storefront.db.session import SessionLocal
from storefront.models.user_role import ADMIN_ROLE, UserRole
from storefront.services.admin_codes import seed_codes as seed_verification_codes
from storefront.stores.attempts import AttemptStore

app = typer.Typer(help="Storefront operator commands.")


@app.command("grant-admin")
def grant_admin(user_id: str):
    """Grant the admin role to an identity provider user id."""
    db = SessionLocal()

    try:
        existing = db.execute(
            select(UserRole).where(UserRole.user_id == user_id, UserRole.role == ADMIN_ROLE)
        ).scalar_one_or_none()
        if existing is not None:
            typer.echo(f"User {user_id} is already an admin.")
            return

        db.add(UserRole(user_id=user_id, role=ADMIN_ROLE))
        db.commit()
        typer.echo(f"Admin role granted to user: {user_id}")
    except SQLAlchemyError as e:
        db.rollback()
        typer.echo(f"Error granting admin role: {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command("seed-codes")
def seed_codes(
    start: int = typer.Option(1, help="First code number."),
    count: int = typer.Option(100, help="How many consecutive codes to create."),
):
    """Create consecutive verification codes, skipping existing ones."""
    db = SessionLocal()

    try:
        created = seed_verification_codes(db, start, count)
        typer.echo(f"Created {len(created)} verification code(s).")
    except SQLAlchemyError as e:
        db.rollback()
        typer.echo(f"Error seeding codes: {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command("prune-attempts")
def prune_attempts(
    older_than_minutes: int = typer.Option(60, help="Delete attempts older than this."),
):
    """Delete lookup attempts that fall outside every throttling window."""
    db = SessionLocal()

    try:
        cutoff = datetime.now(timezone.utc) - timedelta(minutes=older_than_minutes)
        removed = AttemptStore(db).prune(cutoff)
        typer.echo(f"Pruned {removed} lookup attempt(s).")
    except SQLAlchemyError as e:
        db.rollback()
        typer.echo(f"Error pruning attempts: {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


if __name__ == "__main__":
    app()
