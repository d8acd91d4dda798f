import click

from cli.fetch_transactions import fetch_transactions


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Backtesting transaction corpus
cli.add_command(fetch_transactions, "fetch_transactions")
