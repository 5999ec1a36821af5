"""
Run the storefront API with uvicorn.

HOST and PORT come from the environment (PORT is set by the hosting platform).
"""
import logging
import os

import uvicorn

logger = logging.getLogger("start_api")


def listen_port(default: int = 8000) -> int:
    raw = os.environ.get("PORT", str(default))
    if not raw.isdigit():
        raise SystemExit(f"PORT must be a number, got {raw!r}")
    return int(raw)


def main() -> None:
    host = os.environ.get("HOST", "0.0.0.0")
    port = listen_port()
    logger.info(f"Starting storefront API on {host}:{port}")
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        # TLS terminates at the load balancer
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
