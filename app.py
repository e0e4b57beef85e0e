import logging
import os
import socket

from college_browser.logging_config import configure_logging
from college_browser.ui.dash_app import create_dash_app

CONFIG_ROOT_ENV = "COLLEGE_BROWSER_CONFIG_ROOT"
DEFAULT_PORT = 8050
PORT_SEARCH_SPAN = 100

configure_logging()
logger = logging.getLogger("college_browser.app")

app = create_dash_app(os.getenv(CONFIG_ROOT_ENV, "config"))
server = app.server


def _port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        return sock.connect_ex(("localhost", port)) == 0


def pick_port(preferred: int, span: int = PORT_SEARCH_SPAN) -> int:
    """First free port in [preferred, preferred + span); preferred if none is."""
    for port in range(preferred, preferred + span):
        if not _port_in_use(port):
            return port
    return preferred


def main() -> None:
    preferred = int(os.getenv("PORT", str(DEFAULT_PORT)))
    port = pick_port(preferred)
    if port != preferred:
        logger.warning("Port taken, using next free one", extra={"preferred": preferred, "port": port})

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
