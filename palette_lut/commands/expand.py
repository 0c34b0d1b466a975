"""Expand a segmented lookup table program into its entries.

The program is given as integers, three per segment: opcode, length and
operand. Opcode 0 (Discrete) repeats the operand, opcode 1 (Linear)
interpolates from the previous entry to the operand. Opcode 2 (Indirect)
is rejected as unsupported.

Example:
    palette-lut expand -n 4 -w 8 0 1 10 1 3 20
    palette-lut expand -n 5 0 5 100 --json
"""

from palette_lut.core.segmented import expand_segmented_lut, parse_segments
from palette_lut.core.types import Command, Report

command = Command(
    name='expand',
    help='Expand a segment program (opcode, length, operand ...) into entries.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('program', nargs='+', type=int, help='Segment program values')
    parser.add_argument('-n', '--entries', type=int, required=True, help='Number of entries (0 means 65536)')
    parser.add_argument('-w', '--bits', type=int, default=8, help='Bits per entry, 8 or 16 (default: 8)')


@command.run
def run(args, report: Report) -> None:
    values = expand_segmented_lut(args.program, args.entries, args.bits)
    report.title = 'segmented lookup table data'
    report.bits_per_entry = args.bits
    report.add('segments', len(parse_segments(args.program)))
    report.add('entries', args.entries)
    report.set_values(values)
