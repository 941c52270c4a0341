"""Access to the wired application from CLI commands.

Commands use the ``AppContainer`` placed in ``ctx.obj`` when there is one;
otherwise the application is bootstrapped against ``GIGCAL_DB_URL``.
"""

from __future__ import annotations

import click

from gigcal.bootstrap import AppContainer, bootstrap
from gigcal.entrypoints.api import AvailabilityAPI


def get_api(ctx: click.Context) -> AvailabilityAPI:
    """AvailabilityAPI for this invocation, bootstrapped once per run."""
    root = ctx.find_root()
    if (app := ctx.find_object(AppContainer)) is None:
        app = bootstrap()
        root.obj = app
    return AvailabilityAPI(app)
