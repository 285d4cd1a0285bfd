from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from fin_browser.config.model import GlobalConfig
from fin_browser.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(
                            global_config.subtitle,
                            className="text-muted",
                            id=IDs.Control.NAVBAR_SUBTITLE,
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    f"Locale: {global_config.locale}",
                    className="ms-auto text-muted small fin-navbar-locale",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm fin-navbar",
    )
