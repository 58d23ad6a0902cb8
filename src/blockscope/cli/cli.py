# src/blockscope/cli/cli.py
import argparse
import sys
from typing import List, Optional

import uvicorn

from ..api import create_app
from ..config import ExplorerConfig
from ..monitoring import LogConfig
from ..utils.logger import get_logger

class CLI:
    def __init__(self):
        self.config: Optional[ExplorerConfig] = None

    def main(self, args: List[str]):
        parser = self.create_parser()
        args = parser.parse_args(args)

        if not hasattr(args, 'func'):
            parser.print_help()
            return

        args.func(args)

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='blockscope block explorer')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Start the explorer web application')
        serve.add_argument('--config', default=None, help='Path to YAML config file')
        serve.add_argument('--host', default=None, help='Bind host')
        serve.add_argument('--port', type=int, default=None, help='Bind port')
        serve.add_argument('--log-level', default=None, help='Console log level')
        serve.set_defaults(func=self.serve)

        return parser

    def load_config(self, args) -> ExplorerConfig:
        self.config = ExplorerConfig(args.config)
        if args.host:
            self.config.update('server.host', args.host)
        if args.port:
            self.config.update('server.port', args.port)
        if args.log_level:
            self.config.update('monitoring.log_level', args.log_level)
        return self.config

    def serve(self, args):
        config = self.load_config(args)
        LogConfig(
            log_dir=config.get('monitoring.log_dir'),
            level=config.get('monitoring.log_level', 'INFO')
        ).setup_logging()

        logger = get_logger(__name__)
        logger.info(f"Loaded configuration (config file: {config.config_path})")
        app = create_app(config=config)
        host = config.get('server.host')
        port = config.get('server.port')
        print(f"blockscope listening on http://{host}:{port}")
        uvicorn.run(app, host=host, port=port, log_config=None)

def main():
    cli = CLI()
    cli.main(sys.argv[1:])

if __name__ == "__main__":
    main()
