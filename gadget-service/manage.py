# manage.py
import asyncio
import getpass

import typer
from sqlalchemy.future import select
from tabulate import tabulate

from codenames import default_generator
from database import AsyncSessionLocal, engine
from gadget_service import GadgetService
from models import Base, GadgetDB, GadgetStatus, UserDB, UserRole
from security import get_password_hash

cli = typer.Typer(help="IMF Gadget API administration")

SEED_USERS = [
    ("admin@imf.gov", "admin123", UserRole.ADMIN),
    ("agent@imf.gov", "agent123", UserRole.AGENT),
]

SEED_GADGETS = [
    ("Facial Recognition Scanner", "Advanced biometric scanner with quantum encryption", GadgetStatus.AVAILABLE),
    ("Stealth Communication Device", "Encrypted communication with satellite uplink", GadgetStatus.DEPLOYED),
    ("Electromagnetic Pulse Generator", "Portable EMP device for disabling electronics", GadgetStatus.AVAILABLE),
    ("Holographic Projector", "Creates realistic 3D holograms for distraction", GadgetStatus.AVAILABLE),
    ("Nano Surveillance Drone", "Microscopic drone with live video feed", GadgetStatus.DEPLOYED),
]


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_user(email: str, password: str, role: UserRole) -> bool:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(UserDB).where(UserDB.email == email))
        if result.scalar_one_or_none():
            return False
        session.add(UserDB(email=email, hashed_password=get_password_hash(password), role=role.value))
        await session.commit()
        return True


async def register_user(email: str, password: str, role: UserRole) -> bool:
    await create_tables()
    return await create_user(email, password, role)


async def seed_database() -> None:
    await create_tables()
    for email, password, role in SEED_USERS:
        created = await create_user(email, password, role)
        typer.echo(f"{'Created' if created else 'Kept'} {role.value}: {email}")

    async with AsyncSessionLocal() as session:
        service = GadgetService(session, default_generator)
        for name, description, status in SEED_GADGETS:
            existing = await session.execute(select(GadgetDB).where(GadgetDB.name == name))
            if existing.scalars().first():
                typer.echo(f"Kept gadget: {name}")
                continue
            gadget = await service.create_gadget(name, description)
            if status != GadgetStatus.AVAILABLE:
                gadget = await service.update_gadget(gadget.id, status=status.value)
            typer.echo(f"Created gadget: {gadget.codename} ({gadget.name})")


async def fetch_rows(*columns):
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(*columns))
        return result.all()


@cli.command("init-db")
def init_db():
    """Create all database tables."""
    asyncio.run(create_tables())
    typer.echo("Database tables created.")


@cli.command()
def seed():
    """Insert the default admin/agent accounts and sample gadgets."""
    asyncio.run(seed_database())
    typer.echo("Database seeded.")


@cli.command("add-user")
def add_user(
    email: str = typer.Argument(...),
    role: UserRole = typer.Option(UserRole.AGENT, help="Role of the new user"),
):
    """Add a user with an explicit role."""
    password = getpass.getpass("Password: ")
    if len(password) < 6:
        typer.echo("Password must be at least 6 characters long")
        raise typer.Exit(1)
    if not asyncio.run(register_user(email, password, role)):
        typer.echo("User already exists")
        raise typer.Exit(1)
    typer.echo(f"Created {role.value}: {email}")


@cli.command("list-users")
def list_users():
    """List all users."""
    rows = asyncio.run(fetch_rows(UserDB.id, UserDB.email, UserDB.role, UserDB.created_at))
    typer.echo(tabulate(rows, headers=["id", "email", "role", "created_at"]))


@cli.command("list-gadgets")
def list_gadgets():
    """List all gadgets."""
    rows = asyncio.run(
        fetch_rows(GadgetDB.id, GadgetDB.codename, GadgetDB.name, GadgetDB.status, GadgetDB.mission_success_probability)
    )
    typer.echo(tabulate(rows, headers=["id", "codename", "name", "status", "success %"]))


if __name__ == "__main__":
    cli()
