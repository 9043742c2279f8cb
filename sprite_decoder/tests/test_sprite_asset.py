"""
Tests for sprite_asset.py - header, pointer table and frame assembly
"""

import struct

import pytest

from sprite_decoder.byte_reader import ByteSource
from sprite_decoder.exceptions import (
    OutOfBoundsError,
    UnexpectedMarkerError,
    UnterminatedPlacementListError,
)
from sprite_decoder.oam_parser import PlacementSize
from sprite_decoder.settings import DecoderSettings
from sprite_decoder.sprite_asset import (
    SpriteAssetDecoder,
    decode_sprite_asset,
    resolve_asset_address,
)


class TestDecodeSpriteAsset:
    """Test full asset decoding"""

    @pytest.mark.unit
    def test_single_frame(self, single_frame_asset):
        data, address = single_frame_asset
        frames = decode_sprite_asset(data, address)

        assert len(frames) == 1
        frame = frames[0]
        assert len(frame.tilemap) == 1
        assert frame.tilemap[0].pixels == (1,) * 64
        assert frame.palette.value(1) == 0x7FFF
        assert len(frame.placements) == 1
        placement = frame.placements[0]
        assert placement.size == PlacementSize(1, 1)
        assert (placement.screen_x, placement.screen_y) == (128, 128)

    @pytest.mark.unit
    def test_deterministic(self, single_frame_asset):
        data, address = single_frame_asset
        assert decode_sprite_asset(data, address) == decode_sprite_asset(data, address)

    @pytest.mark.unit
    def test_frames_in_table_order(self, asset_builder):
        frames = [
            {"tiles": [[i + 1] * 64], "records": [[0, i, 0, 0, 0]],
             "delay": 10 + i, "end_flag": i}
            for i in range(3)
        ]
        data, address = asset_builder(frames)
        decoded = decode_sprite_asset(data, address)

        assert [f.tilemap[0].pixels[0] for f in decoded] == [1, 2, 3]
        assert [f.placements[0].offset_x for f in decoded] == [0, 1, 2]
        assert [f.delay for f in decoded] == [10, 11, 12]
        assert [f.end_flag for f in decoded] == [0, 1, 2]

    @pytest.mark.unit
    def test_pointers_relative_to_header_end(self, asset_builder):
        # The same asset bytes decode identically at any address
        frames = [{"tiles": [[3] * 64], "records": [[0, 0, 0, 0, 0]]}]
        data_a, address_a = asset_builder(frames)
        data_b, address_b = asset_builder(frames, prefix=b"\x00" * 0x123)
        assert address_b == 0x123
        assert decode_sprite_asset(data_a, address_a) == decode_sprite_asset(data_b, address_b)

    @pytest.mark.unit
    def test_unused_pointer_value_ignored(self, asset_builder):
        frames = [{"tiles": [[2] * 64], "records": [[0, 0, 0, 0, 0]]}]
        data_a, _ = asset_builder(frames, unused_ptr=0)
        data_b, _ = asset_builder(frames, unused_ptr=0xFFFFFFFF)
        assert decode_sprite_asset(data_a, 0) == decode_sprite_asset(data_b, 0)

    @pytest.mark.unit
    def test_zero_animations(self, asset_builder):
        data, address = asset_builder([])
        assert decode_sprite_asset(data, address) == []

    @pytest.mark.unit
    def test_accepts_byte_source(self, single_frame_asset):
        data, address = single_frame_asset
        assert len(decode_sprite_asset(ByteSource(data), address)) == 1

    @pytest.mark.unit
    def test_asset_view(self, single_frame_asset):
        data, address = single_frame_asset
        asset = SpriteAssetDecoder(data).decode(address)
        assert asset.address == address
        assert asset.anchor == address + 4
        assert asset.header.animation_count == 1
        assert asset.header.markers_valid
        assert len(asset.frames) == 1


class TestDecodeErrors:
    """Test failure modes"""

    @pytest.mark.unit
    def test_bad_markers_strict(self, asset_builder):
        data, address = asset_builder([], markers=(0x02, 0x03))
        with pytest.raises(UnexpectedMarkerError) as exc_info:
            decode_sprite_asset(data, address)
        assert exc_info.value.markers == (0x02, 0x03)

    @pytest.mark.unit
    def test_bad_markers_lenient(self, asset_builder):
        frames = [{"tiles": [[1] * 64], "records": [[0, 0, 0, 0, 0]]}]
        data, address = asset_builder(frames, markers=(0x00, 0x02))
        settings = DecoderSettings(strict_markers=False)
        with pytest.warns(UserWarning, match="Unexpected header markers"):
            frames = decode_sprite_asset(data, address, settings)
        assert len(frames) == 1

    @pytest.mark.unit
    def test_truncated_buffer(self, single_frame_asset):
        data, address = single_frame_asset
        with pytest.raises(OutOfBoundsError):
            decode_sprite_asset(data[:-3], address)

    @pytest.mark.unit
    def test_address_past_end(self, single_frame_asset):
        data, _ = single_frame_asset
        with pytest.raises(OutOfBoundsError):
            decode_sprite_asset(data, len(data))

    @pytest.mark.unit
    def test_missing_sentinel(self, asset_builder):
        frames = [{
            "tiles": [[1] * 64],
            "records": [[0, 0, 0, 0, 0]] * 4,
            "terminate": False,
        }]
        data, address = asset_builder(frames)
        data += b"\x00" * 50
        settings = DecoderSettings(max_placements=4)
        with pytest.raises(UnterminatedPlacementListError):
            decode_sprite_asset(data, address, settings)


class TestResolveAssetAddress:
    """Test the asset table lookup"""

    @pytest.mark.unit
    def test_masks_to_24_bits(self):
        data = bytearray(0x31EA8 + 16)
        struct.pack_into("<I", data, 0x31EA8 + 4, 0x08123456)
        assert resolve_asset_address(bytes(data), 1) == 0x123456

    @pytest.mark.unit
    def test_custom_table(self):
        data = struct.pack("<II", 0xFF000010, 0x00ABCDEF)
        settings = DecoderSettings(asset_table_address=0)
        assert resolve_asset_address(data, 0, settings) == 0x10
        assert resolve_asset_address(data, 1, settings) == 0xABCDEF

    @pytest.mark.unit
    def test_out_of_bounds(self):
        with pytest.raises(OutOfBoundsError):
            resolve_asset_address(b"\x00" * 16, 0)

    @pytest.mark.unit
    def test_negative_index(self):
        with pytest.raises(ValueError):
            resolve_asset_address(b"\x00" * 16, -1)
