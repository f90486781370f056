"""
Command-line interface for spotify-web.

Developer helpers around the authorization flows and the converters.

Commands:
    spotify-web authorize-url [--scope S]... [--state S] [--show-dialog]
                                         Print the user authorization URL
    spotify-web token                    Request a client credentials token
    spotify-web exchange <code>          Exchange an authorization code
    spotify-web decode <kind> <file>     Decode a JSON payload and print it

Options:
    --config <path>                      Path to config.yaml
    --verbose                            Log at DEBUG level

Usage:
    spotify-web authorize-url --scope user-read-email --scope user-top-read --state xyz
    spotify-web decode track track.json
"""

import functools
import pprint
import sys
import time
from pathlib import Path

import click
import requests

from spotify_web import __version__
from spotify_web.authorization.flows import AuthorizationCodeFlow, ClientCredentialsFlow
from spotify_web.core.config import Config, load_config
from spotify_web.core.exceptions import SpotifyWebError
from spotify_web.core.logger import get_logger, setup_logging, shutdown_logging
from spotify_web.objectmodel.enums import AuthorizationScopes
from spotify_web.objectmodel.models import (
    Album,
    Artist,
    Episode,
    Paging,
    PrivateUser,
    PublicUser,
    SimplifiedShow,
    SimplifiedTrack,
    Track,
)
from spotify_web.serialization.enum_converters import AUTHORIZATION_SCOPES_CONVERTER
from spotify_web.serialization.options import create_default_options, deserialize


logger = get_logger(__name__)

# decode KIND -> object type
DECODE_KINDS = {
    "track": Track,
    "simplified-track": SimplifiedTrack,
    "album": Album,
    "artist": Artist,
    "episode": Episode,
    "show": SimplifiedShow,
    "user": PublicUser,
    "private-user": PrivateUser,
    "track-page": Paging[Track],
    "artist-page": Paging[Artist],
}

SCOPE_TOKENS = [AUTHORIZATION_SCOPES_CONVERTER.encode(scope) for scope in AuthorizationScopes]


def mask_secret(value: str) -> str:
    """Show only the first and last four characters of a secret."""
    if len(value) <= 12:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


def handle_error(func):
    """
    Turn library and network errors into a message on stderr and exit code 1.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SpotifyWebError, requests.RequestException) as e:
            logger.debug("Command failed: %r", e)
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)
            sys.exit(1)
    return wrapper


def _load_config(ctx: click.Context) -> Config:
    config = load_config(ctx.obj["config_path"])
    level = "DEBUG" if ctx.obj["verbose"] else config.logging.level
    setup_logging(level, log_file=config.logging.file)
    return config


def _echo_token(token) -> None:
    scopes = AUTHORIZATION_SCOPES_CONVERTER.encode_set(token.scope)
    expires = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(token.expires_at))
    click.echo(f"Access token: {mask_secret(token.value)}")
    click.echo(f"Token type:   {token.token_type}")
    click.echo(f"Scopes:       {' '.join(scopes) or '(none)'}")
    click.echo(f"Expires at:   {expires} ({token.expires_in}s)")


@click.group()
@click.version_option(__version__, prog_name="spotify-web")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Path to config.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level")
@click.pass_context
def cli(ctx, config_path, verbose):
    """spotify-web - Spotify Web API authorization and payload tools."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    setup_logging("DEBUG" if verbose else "WARNING")
    ctx.call_on_close(shutdown_logging)


@cli.command("authorize-url")
@click.option("--scope", "scopes", multiple=True, type=click.Choice(SCOPE_TOKENS),
              help="Scope to request (repeatable)")
@click.option("--state", default=None, help="Opaque state echoed back in the redirect")
@click.option("--show-dialog/--no-show-dialog", default=None,
              help="Force or skip the consent dialog")
@click.option("--redirect-uri", default=None, help="Overrides spotify.redirect_uri")
@click.pass_context
@handle_error
def authorize_url(ctx, scopes, state, show_dialog, redirect_uri):
    """Print the URL a user visits to authorize the application."""
    config = _load_config(ctx)
    redirect_uri = redirect_uri or config.spotify.redirect_uri
    if not redirect_uri:
        raise click.UsageError("No redirect URI: pass --redirect-uri or set spotify.redirect_uri")

    url = AuthorizationCodeFlow.create_authorization_url(
        config.spotify.client_id,
        redirect_uri,
        state=state,
        scopes=AUTHORIZATION_SCOPES_CONVERTER.decode_set(scopes),
        show_dialog=show_dialog,
    )
    click.echo(url)


@cli.command()
@click.pass_context
@handle_error
def token(ctx):
    """Request an application token with the client credentials grant."""
    config = _load_config(ctx)
    flow = ClientCredentialsFlow.from_config(config)
    _echo_token(flow.get_access_token())


@cli.command()
@click.argument("code")
@click.pass_context
@handle_error
def exchange(ctx, code):
    """Exchange an authorization CODE for access and refresh tokens."""
    config = _load_config(ctx)
    flow = AuthorizationCodeFlow.from_config(config, code)
    _echo_token(flow.get_access_token())
    click.echo(f"Refresh token: {'issued' if flow.refresh_token else 'not issued'}")


@cli.command()
@click.argument("kind", type=click.Choice(sorted(DECODE_KINDS)))
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict/--lenient", default=None,
              help="Fail on objects missing required fields (default: serialization.strict)")
@click.pass_context
@handle_error
def decode(ctx, kind, file, strict):
    """Decode the JSON document in FILE as KIND and print the result."""
    if strict is None:
        # decode needs no credentials, so config.yaml is read only when named
        strict = _load_config(ctx).serialization.strict if ctx.obj["config_path"] else False
    options = create_default_options(strict=strict)
    value = deserialize(file.read_bytes(), DECODE_KINDS[kind], options)
    click.echo(pprint.pformat(value, sort_dicts=False))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
