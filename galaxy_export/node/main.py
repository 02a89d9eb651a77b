import argparse
import logging
import sys
from typing import List, Optional
from uuid import UUID

import uvicorn

from galaxy_export.config import settings
from galaxy_export.node.app import create_app
from galaxy_export.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="galaxy-node", description="Serve one star system over HTTP")
    parser.add_argument("--name", required=True, help="Name for this star system")
    parser.add_argument("--id", type=UUID, default=None, help="System UUID (derived from the name if omitted)")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=settings.NODE_PORT)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    app = create_app(args.name, system_id=args.id, address=f"{args.host}:{args.port}")
    system = app.state.system
    logging.info(f"Star system '{system.name}' ({system.star_type.star_class} {system.star_type.description}) "
                 f"at ({system.x:.1f}, {system.y:.1f}, {system.z:.1f}) is now online")

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
