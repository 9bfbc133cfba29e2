"""
Command-line interface for ascii-recolor.

Exit Codes:
    0   - Success
    1   - Error (validation failed, recoloring failed, backend failed)
    130 - Interrupted (Ctrl+C)
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import shlex
import sys
from collections.abc import Sequence
from pathlib import Path

from .alignment import ColorAlignment, Custom, Horizontal, Vertical, recolor_ascii
from .backend import Backend, get_distro_ascii, run
from .canvas import normalize_ascii
from .color_profile import (
    AnsiMode,
    ColorProfile,
    ProfilePreset,
    TerminalTheme,
    parse_custom_profile,
)
from .config import Config, alignment_config, load_config, save_config
from .distros import fore_back
from .errors import BackendError, RecolorError, ValidationError

logger = logging.getLogger("ascii_recolor")


def parse_custom_colors(value: str) -> Custom:
    """
    Parse "slot:index" pairs, e.g. "1:0,3:2".

    Raises:
        ValidationError: If a pair is malformed
    """
    colors: dict[int, int] = {}
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if ":" not in part:
            msg = f"Invalid custom color: {part!r}. Expected 'slot:index'"
            raise ValidationError(msg)
        slot, index = part.split(":", 1)
        try:
            colors[int(slot)] = int(index)
        except ValueError:
            msg = f"Invalid custom color: {part!r}. Slot and index must be integers"
            raise ValidationError(msg) from None
    try:
        return Custom(colors)
    except RecolorError as e:
        raise ValidationError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-recolor",
        description="Recolor neofetch ascii art with a gradient color profile.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  %(prog)s --distro Fedora -p transgender
  %(prog)s --ascii logo.txt -a vertical --theme light
  %(prog)s --ascii - -a custom --custom-colors 1:0,2:3 < logo.txt
  %(prog)s --distro Ubuntu --run -b fastfetch
""",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        help="JSON config file (command line flags take precedence)",
    )
    parser.add_argument(
        "--save-config",
        type=Path,
        metavar="FILE",
        help="Write the effective configuration to FILE",
    )
    parser.add_argument(
        "--ascii",
        metavar="FILE",
        help="Ascii art file with ${c1}..${c6} placeholders ('-' for stdin)",
    )
    parser.add_argument(
        "--distro",
        metavar="NAME",
        help="Distro whose ascii art and fore/back recommendation to use",
    )
    parser.add_argument(
        "-p",
        "--preset",
        choices=[p.name.lower() for p in ProfilePreset],
        metavar="PRESET",
        help="Color profile preset (default: rainbow)",
    )
    parser.add_argument(
        "--custom-profile",
        metavar="COLORS",
        help="Custom profile: '#hex,#hex,...'",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in AnsiMode],
        help="Color mode (default: rgb)",
    )
    parser.add_argument(
        "--theme",
        choices=[t.value for t in TerminalTheme],
        help="Terminal theme (default: dark)",
    )
    parser.add_argument(
        "-a",
        "--align",
        choices=["horizontal", "vertical", "custom"],
        help="Color alignment (default: horizontal)",
    )
    parser.add_argument(
        "--custom-colors",
        metavar="MAP",
        help="Slot to palette index map for custom alignment, e.g. '1:0,3:2'",
    )
    parser.add_argument(
        "--no-fore-back",
        action="store_true",
        help="Ignore the distro's recommended fore/back slots",
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=[b.value for b in Backend],
        help="Fetch backend used with --run (default: neofetch)",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Print the art through the backend instead of stdout",
    )
    parser.add_argument(
        "--args",
        metavar="ARGS",
        help="Extra arguments passed to the backend",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List color profile presets and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def _merge_config(config: Config, args: argparse.Namespace) -> Config:
    changes: dict[str, object] = {}
    if args.preset:
        changes["preset"] = args.preset
    if args.mode:
        changes["mode"] = AnsiMode(args.mode)
    if args.theme:
        changes["light_dark"] = TerminalTheme(args.theme)
    if args.backend:
        changes["backend"] = Backend(args.backend)
    if args.args is not None:
        try:
            changes["args"] = tuple(shlex.split(args.args))
        except ValueError as e:
            raise ValidationError(f"Invalid --args: {e}") from e
    if args.distro:
        changes["distro"] = args.distro

    align: ColorAlignment | None = None
    if args.align == "horizontal":
        align = Horizontal()
    elif args.align == "vertical":
        align = Vertical()
    elif args.align == "custom" or args.custom_colors:
        align = parse_custom_colors(args.custom_colors or "")
    if align is not None:
        changes["color_align"] = alignment_config(align)

    return config.model_copy(update=changes)


def _read_ascii(source: str) -> str:
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Cannot read ascii file {source}: {e}") from e
    return normalize_ascii(text.rstrip("\n"))


def cli_main(argv: Sequence[str] | None = None) -> int:
    """
    Command-line interface entry point.

    Returns:
        Integer exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    if args.list_presets:
        for preset in ProfilePreset:
            print(f"  {preset.name.lower()}")
        return 0

    try:
        config = load_config(args.config) if args.config else Config()
        config = _merge_config(config, args)
        logger.debug("Effective config: %s", config)

        profile: ColorProfile = (
            parse_custom_profile(args.custom_profile)
            if args.custom_profile
            else config.profile_preset.profile
        )

        if args.ascii:
            asc = _read_ascii(args.ascii)
            pair = fore_back(config.distro) if config.distro else None
        else:
            asc, pair = get_distro_ascii(config.distro, config.backend)

        align = config.alignment
        if pair is not None and not args.no_fore_back and not isinstance(align, Custom):
            logger.debug("Using fore/back slots %s", pair)
            align = dataclasses.replace(align, fore_back=pair)

        colored = recolor_ascii(align, asc, profile, config.mode, config.light_dark)

        if args.save_config:
            save_config(config, args.save_config)

        if args.run:
            run(colored, config.backend, config.args)
        else:
            print(colored)

        return 0

    except ValidationError as e:
        logger.error("Validation error: %s", e)
        return 1
    except BackendError as e:
        logger.error("Backend error: %s", e)
        return 1
    except RecolorError as e:
        logger.error("Recolor error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
