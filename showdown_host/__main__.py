import argparse
import asyncio
import logging

from showdown.models import GameConfig

from .server import DealServer

logging.basicConfig(level=logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(description="Showdown deal server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument(
        "--register",
        action="append",
        metavar="NAME",
        help="Allow NAME to play (repeatable; omit to accept any name)",
    )
    parser.add_argument("--max-players", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="Fixed shuffle seed for every deal")
    parser.add_argument("--history-limit", type=int, default=100, help="Completed deals kept for lookup")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    config = GameConfig(
        max_players=args.max_players,
        registered_players=frozenset(args.register) if args.register else None,
        seed=args.seed,
    )

    server = DealServer(config, history_limit=args.history_limit)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
