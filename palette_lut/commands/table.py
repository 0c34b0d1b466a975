"""Materialize a Palette Color Lookup Table described by a JSON document.

Reads PATH, or stdin when PATH is '-' or omitted. The document holds the
descriptors and, per channel, either explicit or segmented data:

    {
      "descriptor": [4, 0, 8],
      "red_data": [0, 85, 170, 255],
      "green_data": [0, 0, 0, 0],
      "blue_segmented_data": [0, 1, 0, 1, 3, 255],
      "uid": "2.25.1234"
    }

"descriptor" applies to all three channels; "red_descriptor",
"green_descriptor" and "blue_descriptor" may be given instead. The uid is
generated when omitted. 16-bit tables print as 256 rescaled rows.

Example:
    palette-lut table palette.json
    cat palette.json | palette-lut table --json
"""

import json
import sys

from palette_lut.core.lut import PaletteColorLookupTable
from palette_lut.core.types import Command, Report

command = Command(
    name='table',
    help='Materialize a lookup table from a JSON document (descriptors + channel data).',
)

_CHANNELS = ('red', 'green', 'blue')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('path', nargs='?', default='-', help="JSON document (default: '-' for stdin)")


def _read_document(path: str) -> dict:
    if path == '-':
        doc = json.load(sys.stdin)
    else:
        with open(path, encoding='utf-8') as f:
            doc = json.load(f)
    if not isinstance(doc, dict):
        raise ValueError('Lookup table document must be a JSON object.')
    return doc


def table_from_document(doc: dict) -> PaletteColorLookupTable:
    """Construct a table from a decoded JSON document."""
    shared = doc.get('descriptor')
    kwargs = {}
    for channel in _CHANNELS:
        descriptor = doc.get(f'{channel}_descriptor', shared)
        if descriptor is None:
            raise ValueError(f'Missing "{channel}_descriptor" (or shared "descriptor").')
        kwargs[f'{channel}_descriptor'] = descriptor
        kwargs[f'{channel}_data'] = doc.get(f'{channel}_data')
        kwargs[f'{channel}_segmented_data'] = doc.get(f'{channel}_segmented_data')
    return PaletteColorLookupTable(**kwargs, uid=doc.get('uid'))


@command.run
def run(args, report: Report) -> None:
    lut = table_from_document(_read_document(args.path))
    report.title = 'palette color lookup table'
    report.uid = lut.uid
    report.first_value_mapped = lut.first_value_mapped
    report.bits_per_entry = lut.bits_per_entry
    report.add('number of entries', lut.number_of_entries)
    report.set_rows(lut.data)
