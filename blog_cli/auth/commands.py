from datetime import timedelta

import typer

from blog_api.auth.tokens import TokenAuthenticator
from blog_api.core.errors import TokenError
from blog_api.core.settings import settings


app = typer.Typer(help="Token commands (issue, inspect)")


def _authenticator() -> TokenAuthenticator:
    return TokenAuthenticator(
        settings.JWT_SECRET,
        ttl=timedelta(hours=settings.JWT_EXPIRY_HOURS),
        algorithm=settings.JWT_ALGORITHM,
        issuer=settings.JWT_ISSUER,
    )


@app.command("issue-token")
def issue_token(
    user_id: int = typer.Option(..., "--user-id", help="Subject user ID"),
    email: str = typer.Option(..., "--email", help="Subject email"),
    username: str = typer.Option(..., "--username", "-u", help="Subject username"),
):
    """
    Mint an access token signed with JWT_SECRET, for testing the API by hand.
    """
    token, expires_at = _authenticator().issue(user_id, email, username)
    typer.echo(token)
    typer.echo(f"Expires at: {expires_at.isoformat()}", err=True)


@app.command("inspect-token")
def inspect_token(token: str = typer.Argument(..., help="Token to validate")):
    """
    Validate a token and print its claims.
    """
    try:
        claims = _authenticator().validate(token)
    except TokenError as exc:
        typer.echo(f"Rejected: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=1)

    typer.echo(f"user_id:    {claims.user_id}")
    typer.echo(f"email:      {claims.email}")
    typer.echo(f"username:   {claims.username}")
    typer.echo(f"issued_at:  {claims.issued_at.isoformat()}")
    typer.echo(f"expires_at: {claims.expires_at.isoformat()}")
