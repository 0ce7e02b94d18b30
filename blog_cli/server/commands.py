import typer
import uvicorn

from blog_api.core.settings import settings


app = typer.Typer(help="Run the API server")


@app.command("run")
def run(
    host: str = typer.Option(None, "--host", help="Defaults to SERVER_HOST"),
    port: int = typer.Option(None, "--port", help="Defaults to SERVER_PORT"),
):
    """
    Serve the API with uvicorn. Migrations run before the first request.
    """
    uvicorn.run(
        "blog_api.main:app",
        host=host or settings.SERVER_HOST,
        port=port or settings.SERVER_PORT,
    )
