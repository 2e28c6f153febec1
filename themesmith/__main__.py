"""Entry point for `python -m themesmith`."""

import sys


def main():
    from themesmith.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
