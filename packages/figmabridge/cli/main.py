"""Command-line interface for figmabridge."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Awaitable, Callable
import logging
import sys

from rich.console import Console
from rich.table import Table
import yaml

from figmabridge.core.api.figma.errors import FigmaError
from figmabridge.core.assets import AssetStatus, ImageRequest
from figmabridge.core.config import (
    AppConfig,
    ExecutionMode,
    configure_logging_from_config,
    load_app_config,
    load_dotenv_file,
    resolve_api_key,
)
from figmabridge.core.logging import to_plain
from figmabridge.core.session import FigmaSession

console = Console()
logger = logging.getLogger(__name__)


def parse_node_spec(value: str) -> ImageRequest:
    """Parse ``NODE_ID=FILE_NAME[=IMAGE_REF]`` into an ImageRequest.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed
    """
    parts = value.split("=")
    if len(parts) not in (2, 3) or not all(parts):
        raise argparse.ArgumentTypeError(
            f"Invalid node '{value}': expected NODE_ID=FILE_NAME or NODE_ID=FILE_NAME=IMAGE_REF"
        )
    node_id, file_name = parts[0], parts[1]
    image_ref = parts[2] if len(parts) == 3 else None
    return ImageRequest.from_file_name(node_id, file_name, image_ref)


def _print_yaml(payload: object) -> None:
    text = yaml.safe_dump(to_plain(payload), default_flow_style=False, sort_keys=False)
    console.print(text, markup=False, highlight=False, end="")


async def cmd_file(args: argparse.Namespace, config: AppConfig) -> int:
    async with FigmaSession(config) as session:
        design = await session.retriever.get_file(args.file_key, args.depth)
    _print_yaml(design)
    return 0


async def cmd_node(args: argparse.Namespace, config: AppConfig) -> int:
    async with FigmaSession(config) as session:
        design = await session.retriever.get_node(args.file_key, args.node_id, args.depth)
    _print_yaml(design)
    return 0


async def cmd_images(args: argparse.Namespace, config: AppConfig) -> int:
    out_dir = args.out or config.assets.output_dir

    async with FigmaSession(config) as session:
        outcomes = await session.pipeline.resolve_images_detailed(args.file_key, args.node, out_dir)

    table = Table(title=f"Images for {args.file_key}")
    table.add_column("Node")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Path / error")
    for outcome in outcomes:
        status = outcome.status.value
        color = "green" if outcome.status is AssetStatus.DOWNLOADED else "red"
        table.add_row(
            outcome.request.node_id,
            outcome.request.file_name,
            f"[{color}]{status}[/{color}]",
            outcome.path or outcome.error or "",
        )
    console.print(table)

    downloaded = sum(1 for o in outcomes if o.status is AssetStatus.DOWNLOADED)
    console.print(f"[bold]{downloaded} images downloaded[/bold] to {out_dir}")

    missing = len(args.node) - downloaded
    if missing:
        console.print(f"[red]{missing} of {len(args.node)} images could not be downloaded[/red]")
        return 1
    return 0


COMMANDS: dict[str, Callable[[argparse.Namespace, AppConfig], Awaitable[int]]] = {
    "file": cmd_file,
    "node": cmd_node,
    "images": cmd_images,
}


def _apply_cli_overrides(args: argparse.Namespace, config: AppConfig) -> AppConfig:
    updates: dict[str, object] = {}
    if args.mode:
        updates["mode"] = ExecutionMode(args.mode)
    if args.log_level:
        updates["logging"] = config.logging.model_copy(update={"level": args.log_level.upper()})
    return config.model_copy(update=updates) if updates else config


def run(args: argparse.Namespace) -> int:
    """Run one subcommand and return its exit code."""
    load_dotenv_file()

    try:
        config = _apply_cli_overrides(args, load_app_config(args.config))
    except (OSError, ValueError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return 1

    configure_logging_from_config(config)

    api_key, source = resolve_api_key(args.figma_api_key, config)
    if not api_key:
        console.print("[red]ERROR: Figma API key is required[/red]")
        console.print("\nProvide one of:")
        console.print("  --figma-api-key <key>")
        console.print("  export FIGMA_API_KEY='your-key-here'  (or put it in .env)")
        console.print("  figma.api_key in the config file")
        return 1

    logger.debug(f"Using Figma API key from {source.value}")
    config = config.model_copy(
        update={"figma": config.figma.model_copy(update={"api_key": api_key})}
    )

    try:
        return asyncio.run(COMMANDS[args.cmd](args, config))
    except FigmaError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="figmabridge",
        description="figmabridge - fetch Figma design trees and download their images",
    )
    p.add_argument("--figma-api-key", default=None, help="Figma personal access token")
    p.add_argument(
        "--config",
        default=None,
        help="Path to config file (.yaml/.yml/.json, default: figmabridge.yaml)",
    )
    p.add_argument(
        "--mode",
        choices=[m.value for m in ExecutionMode],
        default=None,
        help="Execution mode (development writes YAML payload dumps)",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    file_cmd = sub.add_parser("file", help="Print the simplified design of a file")
    file_cmd.add_argument("file_key", help="Figma file key")
    file_cmd.add_argument("--depth", type=int, default=None, help="Tree depth to fetch")

    node_cmd = sub.add_parser("node", help="Print the simplified design of a node")
    node_cmd.add_argument("file_key", help="Figma file key")
    node_cmd.add_argument("node_id", help="Node id (e.g. 1234:5678)")
    node_cmd.add_argument("--depth", type=int, default=None, help="Tree depth to fetch")

    images_cmd = sub.add_parser("images", help="Download rendered images and image fills")
    images_cmd.add_argument("file_key", help="Figma file key")
    images_cmd.add_argument(
        "--out", default=None, help="Output directory (default: assets.output_dir)"
    )
    images_cmd.add_argument(
        "--node",
        action="append",
        required=True,
        type=parse_node_spec,
        metavar="NODE_ID=FILE_NAME[=IMAGE_REF]",
        help="Image to download; repeat for more. An image ref downloads the image fill.",
    )

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    args = build_arg_parser().parse_args(argv)
    sys.exit(run(args))
