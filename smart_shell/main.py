"""
smart-shell - Main entry point.
Starts the MCP server, or previews a translation from the command line.
"""

import sys
import argparse

from smart_shell import __version__
from smart_shell.config import Config
from smart_shell.log import configure_logging
from smart_shell.proxy import CommandProxy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smart-shell",
        description="smart-shell - project-aware, OS-translating command proxy (MCP server)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  smart-shell                          Start the MCP server on stdio
  smart-shell translate "rm -rf dist"  Show the command for this OS
  smart-shell translate "ls -la" --os windows
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'smart-shell {__version__}'
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help='Directory holding command-map.json and project-commands.json '
             '(default: the packaged copies)'
    )

    parser.add_argument(
        '--settings',
        type=str,
        help='JSON settings file (default: ~/.smart-shell/settings.json)'
    )

    parser.add_argument(
        '--cwd',
        type=str,
        help='Working directory for commands and flavor detection'
    )

    parser.add_argument(
        '--strict-config',
        action='store_true',
        default=None,
        help='Fail on malformed config files instead of reseeding them'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command')
    subparsers.add_parser('serve', help='Run the MCP server on stdio (default)')

    translate = subparsers.add_parser('translate', help='Translate a command without running it')
    translate.add_argument('raw_command', help='Command line to translate')
    translate.add_argument(
        '--os',
        choices=['windows', 'linux', 'darwin'],
        help='Target OS (default: this machine)'
    )

    return parser


def main(argv=None):
    """Main entry point for smart-shell."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config(overrides={
            "config_dir": args.config_dir,
            "cwd": args.cwd,
            "strict_config": args.strict_config,
            "os": getattr(args, "os", None),
            "log_level": "DEBUG" if args.debug else None,
        }, settings_file=args.settings)
        configure_logging(config.get("log_level"), config.get("log_file"))
        proxy = CommandProxy.from_config(config)

        if args.command == 'translate':
            from smart_shell.highlighting import print_translation

            result = proxy.translate_command(args.raw_command)
            if "errorCode" in result:
                print(f"[Error] {result['message']}", file=sys.stderr)
                return 1
            print_translation(result["os"], result["original"], result["translated"])
            return 0

        from smart_shell.server import serve
        serve(proxy)
        return 0

    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"[Fatal Error] {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
