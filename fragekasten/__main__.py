"""Run the Fragekasten server: ``python -m fragekasten``."""

import uvicorn

from fragekasten.config import settings


def main() -> None:
    # log_config=None keeps the structlog setup from fragekasten.main
    uvicorn.run(
        "fragekasten.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        proxy_headers=False,
        # ResponseHeadersMiddleware sets the only Server header
        server_header=False,
    )


if __name__ == "__main__":
    main()
