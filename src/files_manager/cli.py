# cli.py
import logging

import click

from database.mongo_adapter import MongoAdapter
from files_manager.config.settings import get_settings

# Configure logging
logger = logging.getLogger(__name__)

@click.group()
def cli():
    """CLI commands for the Files Manager API"""
    pass

@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    for name, value in settings.get_environment_dict().items():
        print(f"  {name}: {value}")

@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host, port, reload):
    """Run the API server with uvicorn"""
    import uvicorn

    settings = get_settings()
    port = port or settings.port
    print(f"Starting Files Manager API on {host}:{port}")
    uvicorn.run(
        "files_manager.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )

@cli.command()
def init_db():
    """Create MongoDB indexes used by listing queries"""
    settings = get_settings()
    adapter = MongoAdapter(
        settings.mongo_connection_string,
        db_name=settings.db_database,
        timeout_ms=settings.db_timeout_ms,
    )
    try:
        adapter.init_collections()
        print(f"✅ Indexes created in {settings.db_database}")
    finally:
        adapter.close()

if __name__ == "__main__":
    cli()
