"""
Run the geo_atlas development server.

    python -m geo_atlas [--config atlas_config.yaml] [--host 127.0.0.1] [--port 5000]

The config file can also be given in the GEO_ATLAS_CONFIG environment variable.
"""

import argparse
import logging
import os
from pathlib import Path

from geo_atlas.atlas_config import AtlasConfig
from geo_atlas.logging_config import setup_logging
from geo_atlas.web import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="geo_atlas family mapping server")
    parser.add_argument('--config', type=Path, default=os.environ.get('GEO_ATLAS_CONFIG'),
                        help="YAML configuration file (default: shipped atlas_config.yaml)")
    parser.add_argument('--host', default='127.0.0.1', help="Bind address")
    parser.add_argument('--port', type=int, default=5000, help="Port")
    parser.add_argument('--debug', action='store_true', help="Enable Flask debug mode")
    args = parser.parse_args()

    config = AtlasConfig.from_yaml(args.config)
    setup_logging(config.log_level, config.log_file)
    logger.info(f"Starting geo_atlas on http://{args.host}:{args.port}")

    app = create_app(config)
    app.run(debug=args.debug, host=args.host, port=args.port)


if __name__ == '__main__':
    main()
