# blog_cli/main.py


import typer
from blog_cli.db.commands import app as db_app
from blog_cli.server.commands import app as server_app
from blog_cli.auth.commands import app as auth_app

app = typer.Typer(help="Blog API management commands")
app.add_typer(db_app, name="db")
app.add_typer(server_app, name="server")
app.add_typer(auth_app, name="auth")

if __name__ == "__main__":
    app()
