import argparse
import os

import uvicorn

from items_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the items API")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--attempts", type=int, help="Database connection attempts before giving up")
    parser.add_argument("--delay", type=float, help="Seconds to wait between connection attempts")

    args = parser.parse_args()

    if args.attempts is not None:
        os.environ["DB_CONNECT_ATTEMPTS"] = str(args.attempts)
    if args.delay is not None:
        os.environ["DB_CONNECT_DELAY"] = str(args.delay)
    get_settings.cache_clear()

    # lifespan="on": a failed pool startup exits non-zero before the socket is bound
    uvicorn.run(
        "items_api.main:get_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    main()
