"""
Command-line interface for the sub-mini tube component.
Configures a tube, reports its layout and exports drawings.
"""
import argparse
import json
import logging
import sys
from typing import Optional

from ..core.component import SubminiTube
from ..core.diagnostics import capture_layout_diagnostic
from ..core.models import ComponentState, Display, Font, Orientation, PinCount, Point
from ..core.render import RenderContext, draw_icon, draw_tube
from ..core.svg import render_drawing_to_svg
from ..core.units import parse_size, format_size
from ..kicad_adapter.connection import connect_to_kicad, check_kicad_available
from ..kicad_adapter.graphics_renderer import render_tube_to_board

__version__ = "0.1.0"


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="subminitube",
        description="Lay out and draw a sub-miniature (pencil) vacuum tube",
        epilog="Sizes accept a unit suffix, e.g. 0.2in, 5mm, 40px"
    )

    parser.add_argument(
        "--load",
        metavar="FILE",
        help="Start from a tube saved with --export-json"
    )

    parser.add_argument(
        "--name",
        help="Instance name (default: V1)"
    )

    parser.add_argument(
        "--value",
        help="Part value, e.g. 5840"
    )

    parser.add_argument(
        "--orientation",
        type=int,
        choices=[o.degrees for o in Orientation],
        help="Rotation in degrees (default: 0)"
    )

    parser.add_argument(
        "--folded",
        action="store_true",
        default=None,
        help="Lay the tube flat with leads in a single chain"
    )

    parser.add_argument(
        "--unfolded",
        dest="folded",
        action="store_false",
        default=None,
        help="Stand the tube on its leads (default)"
    )

    parser.add_argument(
        "--pins",
        type=int,
        choices=[p.value for p in PinCount],
        help="Lead count (default: 8)"
    )

    parser.add_argument(
        "--lead-length",
        type=parse_size,
        help="Lead length for folded tubes (default: 0.2in)"
    )

    parser.add_argument(
        "--lead-spacing",
        type=parse_size,
        help="Spacing between leads (default: 0.1in)"
    )

    parser.add_argument(
        "--display",
        choices=[d.value for d in Display],
        help="Label content (default: name)"
    )

    parser.add_argument(
        "--anchor",
        nargs=2,
        type=int,
        metavar=("X", "Y"),
        help="Anchor position in pixels (default: 0 0)"
    )

    # Rendering options
    parser.add_argument(
        "--outline",
        action="store_true",
        help="Render in outline (drag preview) mode"
    )

    parser.add_argument(
        "--selected",
        action="store_true",
        help="Render as selected"
    )

    parser.add_argument(
        "--font-size",
        type=float,
        default=14.0,
        help="Label font size in pixels (default: 14)"
    )

    # Export options
    parser.add_argument(
        "--export-json",
        metavar="FILE",
        help="Save the tube configuration to JSON"
    )

    parser.add_argument(
        "--export-svg",
        metavar="FILE",
        help="Export the tube drawing as SVG"
    )

    parser.add_argument(
        "--icon",
        metavar="FILE",
        help="Export the 32x32 palette icon as SVG"
    )

    parser.add_argument(
        "--board",
        action="store_true",
        help="Draw the tube on the PCB open in KiCad"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the layout diagnostic without writing anything"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_tube(args: argparse.Namespace) -> SubminiTube:
    """
    Create a tube from parsed arguments.

    Options not given on the command line keep the loaded (or default) value.

    Args:
        args: Parsed CLI arguments

    Returns:
        Configured SubminiTube
    """
    if args.load:
        with open(args.load) as f:
            tube = SubminiTube.from_dict(json.load(f))
    else:
        tube = SubminiTube()

    if args.name is not None:
        tube.name = args.name
    if args.value is not None:
        tube.value = args.value
    if args.orientation is not None:
        tube.orientation = Orientation.from_degrees(args.orientation)
    if args.folded is not None:
        tube.folded = args.folded
    if args.pins is not None:
        tube.pin_count = PinCount.from_int(args.pins)
    if args.lead_length is not None:
        tube.lead_length = args.lead_length
    if args.lead_spacing is not None:
        tube.lead_spacing = args.lead_spacing
    if args.display is not None:
        tube.display = Display(args.display)
    if args.anchor is not None:
        tube.set_control_point(Point(*args.anchor), 0)
    return tube


def export_tube_json(tube: SubminiTube, filename: str) -> None:
    """
    Export tube configuration to JSON file.

    Args:
        tube: Tube to save
        filename: Output filename
    """
    with open(filename, 'w') as f:
        json.dump(tube.to_dict(), f, indent=2)

    print(f"✓ Exported tube configuration to {filename}")


def main(argv: Optional[list] = None):
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (for testing)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        tube = build_tube(args)
        print(f"Sub-Mini Tube {tube.name}: {tube.pin_count} leads, "
              f"{tube.orientation.degrees}°, {'folded' if tube.folded else 'standing'}")
        print(f"  - Lead spacing: {format_size(tube.lead_spacing)}")
        print(f"  - Lead length: {format_size(tube.lead_length)}")

        if args.dry_run:
            print()
            print(capture_layout_diagnostic(tube).summary())
            print("\n✓ Dry run complete (nothing written)")
            return

        if args.export_json:
            export_tube_json(tube, args.export_json)

        context = RenderContext(
            component_state=ComponentState.SELECTED if args.selected else ComponentState.NORMAL,
            outline_mode=args.outline,
            font=Font(size=args.font_size),
        )
        drawing = draw_tube(tube, context)

        if args.export_svg:
            with open(args.export_svg, 'w') as f:
                f.write(render_drawing_to_svg(drawing))
            print(f"✓ Exported tube SVG to {args.export_svg}")

        if args.icon:
            with open(args.icon, 'w') as f:
                f.write(render_drawing_to_svg(draw_icon(32, 32), margin=0.0))
            print(f"✓ Exported icon SVG to {args.icon}")

        if args.board:
            if not check_kicad_available():
                print("ERROR: kicad-python is not installed.")
                print("Install it with: pip install 'subminitube[kicad]'")
                sys.exit(1)

            print("Connecting to KiCad...")
            session = connect_to_kicad()
            print(f"✓ Connected to KiCad {session.version or ''}".rstrip())
            footprint = render_tube_to_board(session.board, drawing)
            print("✓ Tube graphic created, please place it on your board")
            session.board.interactive_move(footprint.id)

        print("\nDone!")

    except ConnectionError as e:
        print(f"\nCONNECTION ERROR: {e}")
        print("\nMake sure:")
        print("  1. KiCad is running")
        print("  2. A PCB file is open")
        print("  3. API server is enabled (Preferences > Plugins)")
        sys.exit(1)

    except (OSError, json.JSONDecodeError) as e:
        print(f"\nFILE ERROR: {e}")
        sys.exit(1)

    except ValueError as e:
        print(f"\nCONFIGURATION ERROR: {e}")
        sys.exit(1)

    except ImportError as e:
        print(f"\nERROR: {e}")
        sys.exit(1)

    except RuntimeError as e:
        print(f"\nRUNTIME ERROR: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
