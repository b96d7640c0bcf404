"""Command-line interface for ChromaGen.

Usage:
    chromagen shades "#3b82f6"
    chromagen dark-variant "#1e3a8a" --role primary
    chromagen contrast "#0f172a" "#f8fafc"
    chromagen export palette.json --format css
    chromagen usage check 203.0.113.7 --database usage.db
    chromagen serve --port 8000
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from chromagen import __version__
from chromagen.config import get_settings
from chromagen.design_system.color import (
    calculate_dark_variant,
    classify_role,
    generate_shades,
    get_contrast_ratio,
    get_wcag_rating,
    is_valid_hex,
)
from chromagen.domain.colors import ExportFormat, Palette
from chromagen.domain.usage import UsageLimits
from chromagen.exceptions import ChromaGenError, InvalidHexColorError, StoreUnavailableError
from chromagen.repositories.sqlite import SQLiteKeyValueStore
from chromagen.services.palette import PaletteServiceImpl
from chromagen.services.usage import UsageServiceImpl

FORMAT_CHOICES = {
    "tailwind": ExportFormat.TAILWIND,
    "css": ExportFormat.CSS_VARS,
    "json": ExportFormat.JSON,
}


def parse_hex_arg(value: str) -> str:
    candidate = value if value.startswith("#") else f"#{value}"
    if not is_valid_hex(candidate):
        raise InvalidHexColorError(value)
    return candidate


def get_default_db_path() -> Path:
    return get_settings().sqlite_path


def cmd_version(args: argparse.Namespace) -> int:
    """Print version."""
    print(f"chromagen {__version__}")
    return 0


def cmd_shades(args: argparse.Namespace) -> int:
    """Print the 50-950 shade ramp for a color."""
    try:
        base = parse_hex_arg(args.hex)
    except InvalidHexColorError as e:
        print(f"Error: {e.message}")
        return 1

    for stop, value in generate_shades(base).items():
        print(f"{stop:>4}  {value}")
    return 0


def cmd_dark_variant(args: argparse.Namespace) -> int:
    """Print the dark-mode counterpart of a color."""
    try:
        base = parse_hex_arg(args.hex)
    except InvalidHexColorError as e:
        print(f"Error: {e.message}")
        return 1

    category = classify_role(args.role)
    print(f"{base} -> {calculate_dark_variant(base, args.role)} ({category.value})")
    return 0


def cmd_contrast(args: argparse.Namespace) -> int:
    """Print the WCAG contrast ratio between two colors."""
    try:
        fg = parse_hex_arg(args.foreground)
        bg = parse_hex_arg(args.background)
    except InvalidHexColorError as e:
        print(f"Error: {e.message}")
        return 1

    ratio = get_contrast_ratio(fg, bg)
    rating = get_wcag_rating(ratio)
    print(f"Contrast {fg} on {bg}: {ratio:.2f}:1")
    print(f"Rating: {rating.score} ({rating.label})")
    return 0


def _load_palette(path: Path, service: PaletteServiceImpl) -> Palette:
    """Read a palette file: a list of colors or an object with a ``colors`` list.

    Other keys of the object, such as a generated ``mood``, are ignored.
    """
    data = json.loads(path.read_text())
    colors = data.get("colors", []) if isinstance(data, dict) else data
    palette = Palette()
    for entry in colors:
        hex_color = parse_hex_arg(entry["hex"])
        palette.add(
            service.create_token(
                entry.get("name", hex_color),
                hex_color,
                entry.get("role"),
                entry.get("darkHex"),
            )
        )
    return palette


def cmd_export(args: argparse.Namespace) -> int:
    """Export a palette file as Tailwind v4, CSS variables or JSON."""
    path = Path(args.palette)
    if not path.exists():
        print(f"Palette file not found: {path}")
        return 1

    service = PaletteServiceImpl()
    try:
        palette = _load_palette(path, service)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        print(f"Error: invalid palette file: {e}")
        return 1
    except ChromaGenError as e:
        print(f"Error: {e.message}")
        return 1

    print(service.export(palette, FORMAT_CHOICES[args.format]))
    return 0


def _usage_service(args: argparse.Namespace) -> tuple[UsageServiceImpl, SQLiteKeyValueStore]:
    settings = get_settings()
    db_path = Path(args.database) if args.database else get_default_db_path()
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreUnavailableError(str(e)) from e
    store = SQLiteKeyValueStore(db_path)
    try:
        store.initialize()
    except StoreUnavailableError:
        store.close()
        raise
    limits = UsageLimits(
        daily_free=settings.daily_free_quota,
        share_bonus=settings.share_bonus,
        record_ttl_seconds=settings.record_ttl_seconds,
    )
    service = UsageServiceImpl(store, limits=limits, key_prefix=settings.usage_key_prefix)
    return service, store


def cmd_usage_check(args: argparse.Namespace) -> int:
    """Show today's quota for an identifier."""
    try:
        service, store = _usage_service(args)
        try:
            status = service.check(args.identifier)
        finally:
            store.close()
    except ChromaGenError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Identifier: {args.identifier}")
    print(f"Remaining: {status.remaining}/{status.total}")
    print(f"Bonus available: {'yes' if status.can_use_bonus else 'no'}")
    print(f"Resets at: {status.reset_at}")
    return 0


def cmd_usage_consume(args: argparse.Namespace) -> int:
    """Use one generation for an identifier."""
    try:
        service, store = _usage_service(args)
        try:
            result = service.consume(args.identifier)
        finally:
            store.close()
    except ChromaGenError as e:
        print(f"Error: {e.message}")
        return 1

    if not result.success:
        print(f"Daily limit reached for {args.identifier}")
        return 1
    print(f"Consumed one generation, {result.remaining} remaining")
    return 0


def cmd_usage_claim_bonus(args: argparse.Namespace) -> int:
    """Claim the share bonus for an identifier."""
    try:
        service, store = _usage_service(args)
        try:
            result = service.claim_bonus(args.identifier)
        finally:
            store.close()
    except ChromaGenError as e:
        print(f"Error: {e.message}")
        return 1

    print(result.message)
    return 0 if result.success else 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "chromagen.api.app:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload or settings.api_reload,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="chromagen",
        description="ChromaGen - palette tooling and usage quota administration",
    )
    subparsers = parser.add_subparsers(dest="command")

    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    shades_parser = subparsers.add_parser("shades", help="Print a shade ramp")
    shades_parser.add_argument("hex", help="Base color (#rrggbb)")
    shades_parser.set_defaults(func=cmd_shades)

    dark_parser = subparsers.add_parser("dark-variant", help="Print a dark-mode variant")
    dark_parser.add_argument("hex", help="Light-mode color (#rrggbb)")
    dark_parser.add_argument("--role", default=None, help="Role tag, e.g. background")
    dark_parser.set_defaults(func=cmd_dark_variant)

    contrast_parser = subparsers.add_parser("contrast", help="WCAG contrast of two colors")
    contrast_parser.add_argument("foreground", help="Foreground color (#rrggbb)")
    contrast_parser.add_argument("background", help="Background color (#rrggbb)")
    contrast_parser.set_defaults(func=cmd_contrast)

    export_parser = subparsers.add_parser("export", help="Export a palette JSON file")
    export_parser.add_argument("palette", help="Path to palette JSON")
    export_parser.add_argument(
        "--format", choices=sorted(FORMAT_CHOICES), default="tailwind"
    )
    export_parser.set_defaults(func=cmd_export)

    usage_parser = subparsers.add_parser("usage", help="Inspect daily usage quota")
    usage_sub = usage_parser.add_subparsers(dest="usage_command")
    for name, func, help_text in (
        ("check", cmd_usage_check, "Show remaining quota"),
        ("consume", cmd_usage_consume, "Consume one generation"),
        ("claim-bonus", cmd_usage_claim_bonus, "Claim the share bonus"),
    ):
        sub = usage_sub.add_parser(name, help=help_text)
        sub.add_argument("identifier", help="Quota identifier (client IP)")
        sub.add_argument("--database", help="Path to SQLite usage database")
        sub.set_defaults(func=func)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.add_argument("--reload", action="store_true")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
