import logging
import os
import socket

from tableset.ui.dash_app import create_dash_app
from tableset.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("tableset.app")

app = create_dash_app(os.getenv("TABLESET_CONFIG_ROOT", "config"))
server = app.server


def find_free_port(start_port: int, attempts: int = 100) -> int:
    """First port at or after start_port with nothing listening on localhost."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


def choose_port(preferred_port: int) -> int:
    port = find_free_port(preferred_port)
    if port != preferred_port:
        logger.warning(
            "Preferred port taken, using the next free one",
            extra={"preferred_port": preferred_port, "port": port},
        )
    return port


if __name__ == "__main__":
    port = choose_port(int(os.getenv("PORT", "8051")))
    debug = os.getenv("DEBUG", "0") == "1"

    logger.info("Starting tableset server", extra={"port": port, "debug": debug})
    app.run(host="0.0.0.0", port=port, debug=debug)
