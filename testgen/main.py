"""
Single entrypoint for the API test case generator service.

Run from project root: uvicorn testgen.main:app  (or python -m testgen)
"""
from fastapi import FastAPI

from testgen import __version__
from testgen.api import register_routes
from testgen.core.logging_config import configure_logging


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.
    """
    configure_logging()

    app = FastAPI(
        title="API Testcase Generator",
        description=(
            "Rule-based generation of test cases from Postman collections "
            "and web page elements, with optional security, accessibility, "
            "performance and exploratory enhancement passes."
        ),
        version=__version__,
    )

    register_routes(app)

    return app


app = create_app()
