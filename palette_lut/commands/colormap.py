"""Print a named colormap as RGB triplets.

Samples the named gradient into BINS evenly spaced colours. With --table,
the colormap is turned into a Palette Color Lookup Table first and the
materialized table is printed instead (16-bit tables are resampled to 256
rows).

Defaults come from PALETTE_LUT_COLORMAP and PALETTE_LUT_BINS.

Available maps: VIRIDIS, INFERNO, MAGMA, GRAY, BLUE_RED, PHASE, PORTLAND, HOT.
PHASE is printed in reverse order of its gradient.

Example:
    palette-lut colormap VIRIDIS --bins 16
    palette-lut colormap HOT --bins 256 --table --first-value 0 --json
"""

from palette_lut.core.colormap import create_color_map, is_reversed, resolve_color_map
from palette_lut.core.lut import build_palette_color_lookup_table
from palette_lut.core.types import Command, Report

command = Command(
    name='colormap',
    help='Print a named colormap, optionally as a materialized lookup table.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('name', nargs='?', default=None, help='Colormap name (default: PALETTE_LUT_COLORMAP or GRAY)')
    parser.add_argument('-b', '--bins', type=int, default=None, help='Number of colours (default: 256)')
    parser.add_argument('-t', '--table', action='store_true', help='Build a lookup table from the colormap')
    parser.add_argument('-f', '--first-value', type=int, default=0, help='First value mapped (with --table)')
    parser.add_argument('-w', '--bits', type=int, default=8, choices=(8, 16), help='Bits per entry (with --table)')


@command.run
def run(args, report: Report) -> None:
    settings = args.settings
    colormap = resolve_color_map(args.name) if args.name else settings.colormap
    bins = args.bins if args.bins is not None else settings.bins
    colours = create_color_map(colormap, bins)

    report.title = f'{colormap.value} colormap'
    report.add('bins', bins)
    report.add('reversed', is_reversed(colormap))

    if not args.table:
        report.set_rows(colours)
        return

    lut = build_palette_color_lookup_table(colours, first_value_mapped=args.first_value, bits_per_entry=args.bits)
    report.title = f'{colormap.value} palette color lookup table'
    report.uid = lut.uid
    report.first_value_mapped = lut.first_value_mapped
    report.bits_per_entry = lut.bits_per_entry
    report.set_rows(lut.data)
