from __future__ import annotations

import argparse
import time

from .runtime.server import TesseraServer, run


def main() -> None:
    p = argparse.ArgumentParser(prog="tessera", description="tessera: ticket ownership registry service")
    p.add_argument("--host", default=None, help="bind address (default: TESSERA_HOST or 127.0.0.1)")
    p.add_argument("--port", type=int, default=None, help="bind port (default: TESSERA_PORT or 8000)")
    p.add_argument("--authority", default=None, help="principal to bind as the registry authority at startup")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ... (default: TESSERA_LOG_LEVEL)")
    args = p.parse_args()

    srv = run(
        host=args.host,
        port=args.port,
        authority=args.authority,
        log_level=args.log_level,
        new_server=True,
    )
    if not isinstance(srv, TesseraServer):
        raise RuntimeError(f"Expected a new server, attached to {srv.base_url} instead")
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
