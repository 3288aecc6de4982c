# src/chainview/cli/cli.py
import argparse
import asyncio
import json
import sys
from typing import List, Optional

import uvicorn

from ..api.server import create_app
from ..config.settings import Settings
from ..exceptions import ChainviewError
from ..explorer.api import ExplorerAPI
from ..explorer.listing import ListingPolicy
from ..monitoring.logging_config import LogConfig
from ..monitoring.metrics import ExplorerMetrics
from ..network.monitor import NodeMonitor, StaticMonitor
from ..storage.database import LedgerStore

class CLI:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)

        if not hasattr(args, 'func'):
            parser.print_help()
            return 1

        if self.settings is None:
            self.settings = Settings(args.config)

        try:
            return args.func(args) or 0
        except ChainviewError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='chainview explorer CLI')
        parser.add_argument('--config', default=None, help='Path to the YAML config file')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Run the HTTP API')
        serve.add_argument('--host', default=None, help='Bind host')
        serve.add_argument('--port', type=int, default=None, help='Bind port')
        serve.set_defaults(func=self.serve)

        block = subparsers.add_parser('block', help='Show a block by hash or height')
        block.add_argument('key', help='Block hash or height')
        block.set_defaults(func=self.show_block)

        tx = subparsers.add_parser('tx', help='Show a transaction')
        tx.add_argument('txid', help='Transaction id')
        tx.set_defaults(func=self.show_transaction)

        address = subparsers.add_parser('address', help='Show an address with its history')
        address.add_argument('address', help='Address hash')
        address.set_defaults(func=self.show_address)

        balance = subparsers.add_parser('balance', help='Show an address balance')
        balance.add_argument('address', help='Address hash')
        balance.set_defaults(func=self.show_balance)

        height = subparsers.add_parser('height', help='Poll seed nodes once and show the network height')
        height.set_defaults(func=self.show_height)

        return parser

    def explorer(self, monitor=None) -> ExplorerAPI:
        store = LedgerStore(self.settings.get('database.path'))
        return ExplorerAPI(
            store,
            monitor if monitor is not None else StaticMonitor(),
            policy=ListingPolicy.from_settings(self.settings),
        )

    def serve(self, args):
        LogConfig(
            log_dir=self.settings.get('monitoring.log_dir', 'logs'),
            level=self.settings.get('monitoring.log_level', 'INFO'),
        ).setup_logging()
        metrics = ExplorerMetrics(port=self.settings.get('monitoring.metrics_port'))
        app = create_app(self.settings, metrics=metrics)
        uvicorn.run(
            app,
            host=args.host or self.settings.get('api.host'),
            port=args.port or self.settings.get('api.port'),
        )

    def show_block(self, args):
        self._print(self.explorer().get_block(args.key).model_dump())

    def show_transaction(self, args):
        self._print(self.explorer().get_transaction(args.txid).model_dump())

    def show_address(self, args):
        self._print(self.explorer().get_address(args.address).model_dump())

    def show_balance(self, args):
        self._print(self.explorer().get_balance(args.address).model_dump())

    def show_height(self, args):
        monitor = NodeMonitor(
            seed_nodes=self.settings.get('monitor.seed_nodes'),
            request_timeout=self.settings.get('monitor.request_timeout'),
        )
        asyncio.run(monitor.refresh())
        self._print(self.explorer(monitor).get_height().model_dump())

    @staticmethod
    def _print(payload):
        print(json.dumps(payload, indent=2))

def main():
    cli = CLI()
    sys.exit(cli.main(sys.argv[1:]))

if __name__ == "__main__":
    main()
