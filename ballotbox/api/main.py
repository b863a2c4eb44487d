"""FastAPI application entry point for ballotbox."""

from fastapi import FastAPI

from ballotbox import __version__
from ballotbox.api.dependencies.election import get_election_config
from ballotbox.api.middleware.logging_middleware import LoggingMiddleware
from ballotbox.api.routes.election import router as election_router
from ballotbox.bootstrap.logging import configure_logging_from_config


def create_app() -> FastAPI:
    """Build the application with logging configured from the environment."""
    configure_logging_from_config(get_election_config())

    application = FastAPI(
        title="ballotbox Election API",
        description="Single-election lifecycle: enrollment, voting window, tallies",
        version=__version__,
    )
    application.add_middleware(LoggingMiddleware)
    application.include_router(election_router)
    return application


app = create_app()
