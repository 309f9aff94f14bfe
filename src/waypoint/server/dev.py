"""Serving — hands the frozen app to uvicorn.

Socket bring-up, binding and connection handling belong to uvicorn;
this module only wires the live App object into it.
"""

import logging
import socket

import uvicorn

logger = logging.getLogger("waypoint.server")


class _Server(uvicorn.Server):
    """uvicorn server that announces itself once the sockets are bound."""

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        # uvicorn exits or sets should_exit when the bind or lifespan fails
        if self.started and not self.should_exit:
            logger.info("HTTP listening on http://%s:%s", self.config.host, self.config.port)


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    log_level: str = "info",
) -> None:
    """Serve *app* on ``host:port`` until interrupted.

    Args:
        app: ASGI callable (waypoint App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level name.
    """
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=log_level,
        lifespan="on",
    )
    _Server(config).run()
