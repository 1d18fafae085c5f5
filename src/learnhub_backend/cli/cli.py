import logging
import click
import uvicorn
from dotenv import load_dotenv

# settings are read from the environment on first import
load_dotenv()

from learnhub_backend.database import get_engine
from learnhub_backend.model import Base
from learnhub_backend.settings import settings
from .admin import create_user

@click.command()
def init_db():
    """Create all tables on the configured database."""
    Base.metadata.create_all(get_engine())
    click.echo("Database schema created")

@click.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, default=False)
def serve(host, port, reload):
    uvicorn.run("learnhub_backend.server:app", host=host, port=port, reload=reload, workers=1)

@click.group()
def cli():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

cli.add_command(init_db,"init-db")
cli.add_command(create_user,"create-user")
cli.add_command(serve,"serve")

if __name__ == '__main__':
    cli()
