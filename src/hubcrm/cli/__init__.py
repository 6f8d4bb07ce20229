"""CLI package for hubcrm.

The main Typer app is created in app.py and commands are registered from
each module.
"""

# Import command modules to register commands with the app
import hubcrm.cli.commands_crm  # noqa: F401, E402
import hubcrm.cli.commands_oauth  # noqa: F401, E402
from hubcrm.cli.app import app

__all__ = ["app"]
