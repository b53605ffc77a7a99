"""Entry point for blogboard CLI."""

import asyncio
import logging
import sys

NOUNS = {"category", "task", "post", "widget"}


def main():
    # No subcommand = TUI mode
    if len(sys.argv) < 2 or (sys.argv[1] not in NOUNS and not sys.argv[1].startswith("-")):
        from blogboard.config import load_config
        from blogboard.errors import ConfigError
        from blogboard.ui import BlogboardApp

        path = sys.argv[1] if len(sys.argv) > 1 else None
        try:
            config = load_config(path)
        except ConfigError as e:
            print(f"error: {e.message}", file=sys.stderr)
            sys.exit(1)
        app = BlogboardApp.from_config(config)
        app.run()
        return

    from blogboard.cli import build_parser

    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
            level=logging.INFO,
        )

    sys.exit(asyncio.run(args.func(args)))


if __name__ == "__main__":
    main()
