"""Tests for thread_matcher.core.convert — hex parsing and RGB → XYZ → Lab."""

import pytest
from thread_matcher.core.convert import hex_string, parse_hex, rgb_to_lab, rgb_to_xyz, to_linear, xyz_to_lab
from thread_matcher.core.types import LabColor, RGBColor, XYZColor


class TestParseHex:
    def test_no_hash(self):
        assert parse_hex('FF5733') == RGBColor(255, 87, 51)

    def test_hash_lowercase(self):
        assert parse_hex('#ff5733') == RGBColor(255, 87, 51)

    def test_black(self):
        assert parse_hex('000000') == RGBColor(0, 0, 0)

    def test_white(self):
        assert parse_hex('#FFFFFF') == RGBColor(255, 255, 255)

    def test_whitespace_trimmed(self):
        assert parse_hex('  #FF5733\n') == RGBColor(255, 87, 51)

    def test_too_short(self):
        assert parse_hex('12345') is None

    def test_too_long(self):
        assert parse_hex('1234567') is None

    def test_non_hex_characters(self):
        assert parse_hex('GGGGGG') is None

    def test_short_form_rejected(self):
        assert parse_hex('#fff') is None

    def test_only_one_hash_stripped(self):
        assert parse_hex('##FF5733') is None

    def test_int_literal_forms_rejected(self):
        # int(x, 16) would accept these
        assert parse_hex('0xFFFF') is None
        assert parse_hex('+FFFFF') is None
        assert parse_hex('FF_FFF') is None

    def test_empty(self):
        assert parse_hex('') is None
        assert parse_hex('#') is None


class TestHexString:
    def test_uppercase_no_prefix(self):
        assert hex_string(RGBColor(255, 87, 51)) == 'FF5733'

    def test_zero_padded(self):
        assert hex_string(RGBColor(0, 0, 0)) == '000000'
        assert hex_string(RGBColor(1, 10, 15)) == '010A0F'

    def test_parse_then_format(self):
        assert hex_string(parse_hex('#a1b2c3')) == 'A1B2C3'


class TestRGBColor:
    def test_equality_componentwise(self):
        assert RGBColor(1, 2, 3) == RGBColor(1, 2, 3)
        assert RGBColor(1, 2, 3) != RGBColor(3, 2, 1)

    def test_hashable(self):
        assert len({RGBColor(1, 2, 3), RGBColor(1, 2, 3), RGBColor(0, 0, 0)}) == 2

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            RGBColor(256, 0, 0)
        with pytest.raises(ValueError):
            RGBColor(0, -1, 0)

    def test_non_int_rejected(self):
        with pytest.raises(ValueError):
            RGBColor(1.5, 0, 0)

    def test_immutable(self):
        c = RGBColor(1, 2, 3)
        with pytest.raises(AttributeError):
            c.r = 5


class TestToLinear:
    def test_endpoints(self):
        assert to_linear(0) == 0.0
        assert to_linear(255) == 1.0

    def test_linear_segment(self):
        # 10/255 = 0.0392 <= 0.04045
        assert to_linear(10) == pytest.approx((10 / 255.0) / 12.92)

    def test_power_segment(self):
        assert to_linear(128) == pytest.approx(((128 / 255.0 + 0.055) / 1.055) ** 2.4)


class TestRgbToXyz:
    def test_black(self):
        assert rgb_to_xyz(RGBColor(0, 0, 0)) == XYZColor(0.0, 0.0, 0.0)

    def test_white_is_d65(self):
        xyz = rgb_to_xyz(RGBColor(255, 255, 255))
        assert xyz.x == pytest.approx(95.047, abs=1e-6)
        assert xyz.y == pytest.approx(100.0, abs=1e-4)
        assert xyz.z == pytest.approx(108.883, abs=1e-6)

    def test_ff5733(self):
        xyz = rgb_to_xyz(RGBColor(255, 87, 51))
        assert xyz.x == pytest.approx(45.250941353691, abs=1e-6)
        assert xyz.y == pytest.approx(28.322158096481, abs=1e-6)
        assert xyz.z == pytest.approx(6.215338296453, abs=1e-6)


class TestRgbToLab:
    def test_ff5733_reference_values(self):
        lab = rgb_to_lab(RGBColor(255, 87, 51))
        assert lab.l == pytest.approx(60.178678899764, abs=1e-6)
        assert lab.a == pytest.approx(62.064538272437, abs=1e-6)
        assert lab.b == pytest.approx(54.335309469797, abs=1e-6)

    def test_deterministic(self):
        assert rgb_to_lab(RGBColor(255, 87, 51)) == rgb_to_lab(parse_hex('#ff5733'))

    def test_black(self):
        assert rgb_to_lab(RGBColor(0, 0, 0)) == LabColor(0.0, 0.0, 0.0)

    def test_white(self):
        lab = rgb_to_lab(RGBColor(255, 255, 255))
        assert lab.l == pytest.approx(100.0, abs=1e-3)
        assert lab.a == pytest.approx(0.0, abs=1e-3)
        assert lab.b == pytest.approx(0.0, abs=1e-3)

    def test_red(self):
        lab = rgb_to_lab(RGBColor(255, 0, 0))
        assert lab.l == pytest.approx(53.240794141307, abs=1e-6)
        assert lab.a == pytest.approx(80.092459596411, abs=1e-6)
        assert lab.b == pytest.approx(67.203196515853, abs=1e-6)

    def test_green_has_negative_a(self):
        assert rgb_to_lab(RGBColor(0, 255, 0)).a < 0

    def test_blue_has_negative_b(self):
        assert rgb_to_lab(RGBColor(0, 0, 255)).b < 0

    def test_gray_is_neutral(self):
        lab = rgb_to_lab(RGBColor(128, 128, 128))
        assert lab.l == pytest.approx(53.585015771669, abs=1e-6)
        assert abs(lab.a) < 1e-3
        assert abs(lab.b) < 1e-3

    def test_dark_gray_uses_linear_branch(self):
        # Y/Yn for (10,10,10) is below 0.008856
        lab = rgb_to_lab(RGBColor(10, 10, 10))
        assert lab.l == pytest.approx(2.741759516573, abs=1e-6)

    def test_xyz_to_lab_matches_composition(self):
        c = RGBColor(12, 200, 99)
        assert xyz_to_lab(rgb_to_xyz(c)) == rgb_to_lab(c)
