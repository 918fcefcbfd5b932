"""Run the API with uvicorn.

    python -m agropecuario
    python -m agropecuario --port 9000 --reload
"""

import argparse

import uvicorn

from agropecuario.config import settings


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="API REST Agropecuario")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Listen port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "agropecuario.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
