"""Config inspection commands."""

import sys

import cyclopts
import yaml

from ficarchive.cli.console import get_console
from ficarchive.config import Config

app = cyclopts.App(name="config", help="Inspect archive configuration")

_SECRET_FIELDS = {("session", "secret_key")}


@app.command
def show(section: str | None = None) -> None:
    """Print the effective configuration as YAML.

    Args:
        section: Only show this top-level section (e.g. session, navigation).
    """
    console = get_console()
    data = Config().model_dump(mode="json")  # type: ignore[call-arg]
    for parent, key in _SECRET_FIELDS:
        if data.get(parent, {}).get(key):
            data[parent][key] = "********"

    if section is not None:
        if section not in data:
            console.error(f"Unknown section: {section}", hint=f"One of: {', '.join(data)}")
            sys.exit(1)
        data = {section: data[section]}
    console.print(yaml.safe_dump(data, sort_keys=False), highlight=False, markup=False)
