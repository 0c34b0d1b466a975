"""Tests for palette_lut.core.lut: validation, materialization and caching."""

import threading

import numpy as np
import pytest
from palette_lut.core.colormap import create_color_map
from palette_lut.core.errors import (
    DataConflictError,
    DescriptorMismatchError,
    LengthMismatchError,
    MissingDataError,
    NonIntegralValueError,
    OutOfRangeError,
    UnsupportedBitsPerEntryError,
    UnsupportedSegmentError,
)
from palette_lut.core.lut import PaletteColorLookupTable, build_palette_color_lookup_table
from palette_lut.core.types import ChannelDescriptor, ExplicitData, SegmentedData


def _lut(descriptor=(4, 0, 8), **kwargs) -> PaletteColorLookupTable:
    data = {
        'red_data': [0, 1, 2, 3],
        'green_data': [10, 11, 12, 13],
        'blue_data': [20, 21, 22, 23],
    }
    data.update(kwargs)
    return PaletteColorLookupTable(
        red_descriptor=descriptor,
        green_descriptor=descriptor,
        blue_descriptor=descriptor,
        **data,
    )


def _mixed(red, green, blue) -> PaletteColorLookupTable:
    return PaletteColorLookupTable(red, green, blue, red_data=[0] * 4, green_data=[0] * 4, blue_data=[0] * 4)


def _ramp_lut(red, green, blue) -> PaletteColorLookupTable:
    d = (0, 0, 16)
    return PaletteColorLookupTable(d, d, d, red_data=red, green_data=green, blue_data=blue)


class TestDescriptors:
    def test_entries_must_agree(self):
        with pytest.raises(DescriptorMismatchError):
            _mixed((4, 0, 8), (5, 0, 8), (4, 0, 8))

    def test_first_value_must_agree(self):
        with pytest.raises(DescriptorMismatchError):
            _mixed((4, 0, 8), (4, 0, 8), (4, 1, 8))

    def test_bits_must_agree(self):
        with pytest.raises(DescriptorMismatchError):
            _mixed((4, 0, 8), (4, 0, 16), (4, 0, 8))

    def test_unsupported_bits(self):
        with pytest.raises(UnsupportedBitsPerEntryError):
            _lut(descriptor=(4, 0, 12))

    def test_descriptor_objects(self):
        d = ChannelDescriptor(number_of_entries=4, first_value_mapped=100, bits_per_entry=8)
        lut = _lut(descriptor=d)
        assert lut.first_value_mapped == 100
        assert lut.descriptor == d

    def test_descriptor_must_have_three_values(self):
        with pytest.raises(ValueError):
            _lut(descriptor=(4, 0))

    def test_zero_entries_means_65536(self):
        ramp = np.arange(65536, dtype=np.uint16)
        lut = _ramp_lut(ramp, ramp, ramp)
        assert lut.number_of_entries == 65536
        assert lut.descriptor.number_of_entries == 0

    def test_zero_entries_rejects_short_data(self):
        with pytest.raises(LengthMismatchError):
            _lut(descriptor=(0, 0, 8), red_data=[0] * 256, green_data=[0] * 256, blue_data=[0] * 256)


    @pytest.mark.parametrize('entries', [-3, 70000])
    def test_entry_count_out_of_range(self, entries):
        with pytest.raises(OutOfRangeError):
            _lut(descriptor=(entries, 0, 8))

    def test_descriptor_object_checks_entry_count(self):
        with pytest.raises(OutOfRangeError):
            ChannelDescriptor(number_of_entries=65537, first_value_mapped=0, bits_per_entry=8)

    def test_explicit_65536_entries_allowed(self):
        assert ChannelDescriptor(65536, 0, 16).entry_count == 65536

    def test_fractional_descriptor_field(self):
        with pytest.raises(NonIntegralValueError):
            _lut(descriptor=(4.5, 0, 8))

    def test_whole_float_descriptor_field(self):
        assert _lut(descriptor=(4.0, 0, 8)).number_of_entries == 4


class TestChannelData:
    def test_fractional_explicit_entry(self):
        with pytest.raises(NonIntegralValueError):
            _lut(red_data=[0, 1.7, 2, 3])

    def test_fractional_segment_value(self):
        with pytest.raises(NonIntegralValueError):
            _lut(red_data=None, red_segmented_data=[0, 4, 2.5])

    def test_numpy_integers_accepted(self):
        lut = _lut(red_data=np.arange(4, dtype=np.int64))
        assert lut.red == ExplicitData(values=(0, 1, 2, 3))

    @pytest.mark.parametrize('channel', ['red', 'green', 'blue'])
    def test_both_sources_conflict(self, channel):
        with pytest.raises(DataConflictError):
            _lut(**{f'{channel}_segmented_data': [0, 4, 1]})

    @pytest.mark.parametrize('channel', ['red', 'green', 'blue'])
    def test_missing_source(self, channel):
        with pytest.raises(MissingDataError):
            _lut(**{f'{channel}_data': None})

    @pytest.mark.parametrize('channel', ['red', 'green', 'blue'])
    def test_explicit_length(self, channel):
        with pytest.raises(LengthMismatchError):
            _lut(**{f'{channel}_data': [1, 2, 3]})

    def test_sources_are_tagged(self):
        lut = _lut(blue_data=None, blue_segmented_data=[0, 4, 9])
        assert lut.red == ExplicitData(values=(0, 1, 2, 3))
        assert lut.blue == SegmentedData(program=(0, 4, 9))

    def test_construction_does_not_decode(self):
        lut = _lut(blue_data=None, blue_segmented_data=[2, 1, 0])
        with pytest.raises(UnsupportedSegmentError):
            lut.get_table()


class TestEightBit:
    def test_zips_channels(self):
        lut = _lut()
        assert lut.data.shape == (4, 3)
        assert lut.data.dtype == np.uint8
        assert lut.data.tolist() == [[0, 10, 20], [1, 11, 21], [2, 12, 22], [3, 13, 23]]

    def test_length_matches_entries(self):
        lut = _lut()
        assert len(lut.get_table()) == lut.number_of_entries
        assert len(lut) == 4

    def test_segmented_channels(self):
        lut = _lut(
            red_data=None,
            red_segmented_data=[0, 4, 255],
            blue_data=None,
            blue_segmented_data=[0, 1, 10, 1, 3, 20],
        )
        assert lut.data.tolist() == [[255, 10, 10], [255, 11, 13], [255, 12, 17], [255, 13, 20]]

    def test_value_out_of_range(self):
        lut = _lut(red_data=[0, 1, 2, 300])
        with pytest.raises(OutOfRangeError):
            lut.data


    def test_zero_entries_explicit_8bit(self):
        ramp = np.arange(65536) % 256
        lut = _lut(descriptor=(0, 0, 8), red_data=ramp, green_data=ramp, blue_data=ramp[::-1])
        assert lut.data.shape == (65536, 3)
        assert lut.data.dtype == np.uint8
        assert len(lut.get_table()) == 65536
        assert lut.data[257].tolist() == [1, 1, 254]

    def test_zero_entries_segmented_8bit(self):
        program = [0, 65536, 42]
        lut = _lut(
            descriptor=(0, 0, 8),
            red_data=None,
            red_segmented_data=program,
            green_data=None,
            green_segmented_data=program,
            blue_data=None,
            blue_segmented_data=program,
        )
        assert lut.data.shape == (65536, 3)
        assert (lut.data == 42).all()


class TestSixteenBit:
    def test_full_ramp_is_resampled(self):
        ramp = np.arange(65536, dtype=np.uint16)
        lut = _ramp_lut(ramp, ramp, ramp[::-1])
        table = lut.data
        assert table.shape == (256, 3)
        assert table.dtype == np.uint8
        expected = np.floor(np.arange(256) * 256 * 255 / 65535 + 0.5).astype(int)
        assert table[:, 0].tolist() == expected.tolist()
        assert table[0].tolist() == [0, 0, 255]
        assert table[255, 0] == 254

    def test_small_table_still_has_256_rows(self):
        lut = _lut(
            descriptor=(4, 0, 16),
            red_data=[0, 65535, 0, 65535],
            green_data=[0, 0, 0, 0],
            blue_data=[65535] * 4,
        )
        table = lut.data
        assert len(table) == 256
        assert table[0].tolist() == [0, 0, 255]
        assert table[64].tolist() == [255, 0, 255]

    def test_segmented_16_bit(self):
        lut = _lut(
            descriptor=(0, 0, 16),
            red_data=None,
            green_data=None,
            blue_data=None,
            red_segmented_data=[0, 65536, 65535],
            green_segmented_data=[0, 1, 0, 1, 65535, 65535],
            blue_segmented_data=[0, 65536, 0],
        )
        table = lut.data
        assert len(table) == 256
        assert set(table[:, 0].tolist()) == {255}
        assert table[0, 1] == 0
        assert set(table[:, 2].tolist()) == {0}


class TestMaterializationErrors:
    def test_short_segmented_channel(self):
        lut = _lut(red_data=None, red_segmented_data=[0, 2, 1])
        with pytest.raises(LengthMismatchError):
            lut.data

    def test_all_channels_short(self):
        lut = _lut(
            red_data=None,
            green_data=None,
            blue_data=None,
            red_segmented_data=[0, 2, 1],
            green_segmented_data=[0, 2, 1],
            blue_segmented_data=[0, 2, 1],
        )
        with pytest.raises(LengthMismatchError):
            lut.data

    def test_failure_leaves_cache_unset(self):
        lut = _lut(red_data=None, red_segmented_data=[0, 1, 1, 2, 1, 0])
        for _ in range(2):
            with pytest.raises(UnsupportedSegmentError):
                lut.data


class TestCaching:
    def test_idempotent(self):
        lut = _lut()
        first = lut.get_table()
        second = lut.get_table()
        assert first is second
        assert np.array_equal(first, lut.data)

    def test_read_only(self):
        lut = _lut()
        with pytest.raises(ValueError):
            lut.data[0, 0] = 99

    def test_concurrent_first_access(self):
        lut = _lut(
            descriptor=(0, 0, 16),
            red_data=None,
            green_data=None,
            blue_data=None,
            red_segmented_data=[0, 1, 0, 1, 65535, 65535],
            green_segmented_data=[0, 65536, 7],
            blue_segmented_data=[0, 65536, 9],
        )
        results = []

        def read():
            results.append(lut.data)

        threads = [threading.Thread(target=read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(results) == 8
        assert all(r is results[0] for r in results)


class TestIdentity:
    def test_supplied_uid(self):
        assert _lut(uid='1.2.3').uid == '1.2.3'

    def test_generated_uid(self):
        a, b = _lut(), _lut()
        assert a.uid.startswith('2.25.')
        assert a.uid != b.uid

    def test_immutable(self):
        lut = _lut()
        with pytest.raises(AttributeError):
            lut.uid = 'x'
        with pytest.raises(AttributeError):
            lut._data = None
        with pytest.raises(AttributeError):
            del lut._sources

    def test_equality(self):
        assert _lut(uid='1.2') == _lut(uid='1.2')
        assert _lut(uid='1.2') != _lut(uid='1.3')
        assert hash(_lut(uid='1.2')) == hash(_lut(uid='1.2'))

    def test_repr(self):
        assert 'uid=' in repr(_lut(uid='1.2'))


class TestBuildFromColormap:
    def test_round_trips_8_bit(self):
        colours = create_color_map('VIRIDIS', 16)
        lut = build_palette_color_lookup_table(colours, first_value_mapped=32)
        assert lut.number_of_entries == 16
        assert lut.first_value_mapped == 32
        assert lut.bits_per_entry == 8
        assert [tuple(row) for row in lut.data.tolist()] == colours

    def test_generates_uid(self):
        lut = build_palette_color_lookup_table([(1, 2, 3)])
        assert lut.uid.startswith('2.25.')

    def test_full_size_records_zero(self):
        colours = np.zeros((65536, 3), dtype=np.uint16)
        lut = build_palette_color_lookup_table(colours, bits_per_entry=16)
        assert lut.descriptor.number_of_entries == 0
        assert len(lut.data) == 256

    def test_rejects_non_triplets(self):
        with pytest.raises(ValueError):
            build_palette_color_lookup_table([(1, 2), (3, 4)])

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            build_palette_color_lookup_table([])
