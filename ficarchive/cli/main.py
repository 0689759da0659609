"""Main CLI application using Cyclopts."""

import cyclopts

from ficarchive.cli.commands import config, serve, sort, suspension

app = cyclopts.App(
    name="ficarchive",
    help="Fan-fiction archive - request policy service",
)

app.command(serve.serve, name="serve")
app.command(suspension.unban_time, name="unban-time")
app.command(sort.sort_order, name="sort-order")
app.command(config.app, name="config")


def main() -> None:
    app()
