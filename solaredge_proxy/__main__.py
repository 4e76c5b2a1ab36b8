"""
Run the energy proxy under uvicorn: ``python -m solaredge_proxy``.

CHANGELOG:
- 2026-10-12: Initial creation
"""

import argparse

import uvicorn

from solaredge_proxy.logging_config import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="SolarEdge energy proxy")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    args = parser.parse_args()

    configure_logging()
    uvicorn.run(
        "solaredge_proxy.api.main:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
