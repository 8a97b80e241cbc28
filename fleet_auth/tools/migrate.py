"""Aplica as migrações do Alembic e, opcionalmente, o seed do tenant demo."""

import click

from fleet_auth.core.logging import setup_logging
from fleet_auth.db.bootstrap import run_migrations, run_migrations_and_seed


@click.command()
@click.option("--url", default=None, help="URL do banco (padrão: DATABASE_URL).")
@click.option("--revision", default="head", show_default=True, help="Revisão alvo.")
@click.option("--seed/--no-seed", default=False, help="Cria as permissões base e o tenant demo.")
def cli(url: str | None, revision: str, seed: bool) -> None:
    """Atualiza o schema auth até a revisão pedida."""
    setup_logging()
    if seed:
        if revision != "head":
            raise click.UsageError("--seed só funciona com --revision head")
        run_migrations_and_seed(url)
    else:
        run_migrations(revision, url)
    click.echo(click.style(f"Schema at {revision}", fg="green"))


if __name__ == "__main__":
    cli()
