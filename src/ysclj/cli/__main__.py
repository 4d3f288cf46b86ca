"""
Main Entry Point for the ysclj CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `ysclj.cli.commands`.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from ysclj import __version__
from ysclj.cli import commands
from ysclj.config import parse_cli_key_values
from ysclj.utils.console import console


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="ysclj: YAMLScript to Clojure compiler")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: COMPILE ---
  cmd_comp = subparsers.add_parser("compile", help="Compile a JSON parse tree to Clojure")
  cmd_comp.add_argument("path", type=Path, help="Input JSON file")
  cmd_comp.add_argument("--out", type=Path, default=None, help="Output file (default: stdout)")
  cmd_comp.add_argument("--no-format", action="store_true", help="Skip the zprint formatter")
  cmd_comp.add_argument("--style", default=None, help="zprint style (default: from toml or 'community')")
  cmd_comp.add_argument(
    "--config",
    nargs="*",
    help="Configuration flags in key=value format (e.g. zprint_command=/opt/bin/zprint)",
  )

  # --- Command: GRAMMAR ---
  cmd_gram = subparsers.add_parser("grammar", help="List lexical patterns or test one")
  cmd_gram.add_argument("name", nargs="?", default=None, help="Pattern name (e.g. xnum)")
  cmd_gram.add_argument("--match", dest="text", default=None, help="Text to match against the pattern")

  # --- Command: YSPATH ---
  cmd_path = subparsers.add_parser("yspath", help="Show the library search path")
  cmd_path.add_argument("document", type=Path, nargs="?", default=None, help="Document being compiled")

  args = parser.parse_args(argv)

  if args.verbose:
    console.set_level(logging.DEBUG)

  if args.command == "compile":
    return commands.handle_compile(
      args.path,
      args.out,
      no_format=args.no_format,
      style=args.style,
      overrides=parse_cli_key_values(args.config),
    )

  elif args.command == "grammar":
    return commands.handle_grammar(args.name, args.text)

  elif args.command == "yspath":
    return commands.handle_yspath(args.document)

  return 0
