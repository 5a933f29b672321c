#!/usr/bin/env python3
import logging
import sys

from config import LOG_LEVEL


def main():
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
    )

    if len(sys.argv) > 1:
        if sys.argv[1] == "cli":
            from cli import main as cli_main
            cli_main()
        elif sys.argv[1] == "page":
            from cli import page_command
            sys.exit(page_command(sys.argv[2:]))
        else:
            print("Usage: python main.py [cli|page N]")
    else:
        print("Mushaf page layout")
        print("\nUsage:")
        print("  python main.py cli                 - Start the interactive CLI")
        print("  python main.py page N [--width W]  - Print the layout of page N")
        print("                 [--viewport] [--remote] [--fallback] [--deadline S] [--json]")


if __name__ == "__main__":
    main()
