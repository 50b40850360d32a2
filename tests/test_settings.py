#!/usr/bin/env python
"""
Settings Tests

Tests for axis detection parameters and YAML settings loading.
"""

import sys
import tempfile
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from axis_pipeline.settings import AxisDetectionParams, params_from_dict, load_params
from axis_pipeline.constants import (
    DEFAULT_RASTER_RESOLUTION,
    CLUSTER_ANGLE_TOLERANCE_DEG,
    PAIR_ANGLE_TOLERANCE_DEG,
    CORRIDOR_MARGIN_RATIO,
)


def write_settings(text: str) -> Path:
    handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
    with handle:
        handle.write(text)
    return Path(handle.name)


class TestParams:
    """Tests for parameter defaults and overrides."""

    def test_defaults(self):
        params = AxisDetectionParams()
        assert params.raster_resolution == DEFAULT_RASTER_RESOLUTION
        assert params.cluster_angle_tolerance == CLUSTER_ANGLE_TOLERANCE_DEG
        assert params.pair_angle_tolerance == PAIR_ANGLE_TOLERANCE_DEG
        assert params.corridor_margin == CORRIDOR_MARGIN_RATIO
        assert params.sort_segments is True
        print("  [PASS] Defaults")

    def test_overrides(self):
        params = params_from_dict({"raster_resolution": 0.005, "pair_angle_tolerance": 3})
        assert params.raster_resolution == 0.005
        assert params.pair_angle_tolerance == 3
        assert params.cluster_rho_tolerance == AxisDetectionParams().cluster_rho_tolerance
        print("  [PASS] Overrides")

    def test_override_base(self):
        base = AxisDetectionParams(corridor_margin=0.5)
        params = params_from_dict({"hough_max_lines": 4}, base=base)
        assert params.corridor_margin == 0.5 and params.hough_max_lines == 4
        print("  [PASS] Overrides on a custom base")

    def test_unknown_key(self):
        try:
            params_from_dict({"raster_resolutoin": 0.005})
        except ValueError as e:
            assert "raster_resolutoin" in str(e)
            print("  [PASS] Unknown key rejected")
            return
        raise AssertionError("Expected ValueError for unknown key")

    def test_to_dict(self):
        d = AxisDetectionParams().to_dict()
        assert d["hough_max_lines"] == 15
        assert params_from_dict(d) == AxisDetectionParams()
        print("  [PASS] To dict")


class TestLoadParams:
    """Tests for YAML loading."""

    def test_section(self):
        path = write_settings("axis_detection:\n  corridor_margin: 0.3\n  sort_segments: false\n")
        try:
            params = load_params(path)
        finally:
            path.unlink()
        assert params.corridor_margin == 0.3
        assert params.sort_segments is False
        print("  [PASS] axis_detection section")

    def test_top_level(self):
        path = write_settings("cluster_rho_tolerance: 4\n")
        try:
            params = load_params(path)
        finally:
            path.unlink()
        assert params.cluster_rho_tolerance == 4
        print("  [PASS] Top-level keys")

    def test_empty_file(self):
        path = write_settings("")
        try:
            params = load_params(path)
        finally:
            path.unlink()
        assert params == AxisDetectionParams()
        print("  [PASS] Empty file -> defaults")

    def test_not_a_mapping(self):
        path = write_settings("- 1\n- 2\n")
        try:
            load_params(path)
        except ValueError:
            print("  [PASS] Non-mapping rejected")
            return
        finally:
            path.unlink()
        raise AssertionError("Expected ValueError for a list document")

    def test_missing_file(self):
        try:
            load_params(project_root / "config" / "does_not_exist.yaml")
        except FileNotFoundError:
            print("  [PASS] Missing file rejected")
            return
        raise AssertionError("Expected FileNotFoundError")

    def test_shipped_settings_match_defaults(self):
        params = load_params(project_root / "config" / "settings.yaml")
        assert params == AxisDetectionParams(), f"Shipped settings differ: {params}"
        print("  [PASS] Shipped settings match defaults")


def run_all_tests():
    """Run all settings tests."""
    print("=" * 60)
    print("Settings Tests")
    print("=" * 60)
    print()

    all_passed = True

    for name, test_class in [
        ("Params", TestParams),
        ("Load Params", TestLoadParams),
    ]:
        print(f"{name} Tests:")
        print("-" * 40)
        tests = test_class()
        for attr in sorted(dir(tests)):
            if not attr.startswith("test_"):
                continue
            try:
                getattr(tests, attr)()
            except AssertionError as e:
                print(f"  [FAIL] {attr}: {e}")
                all_passed = False
            except Exception as e:
                print(f"  [ERROR] {attr}: {e}")
                all_passed = False
        print()

    print("=" * 60)
    if all_passed:
        print("ALL SETTINGS TESTS PASSED")
        return 0
    else:
        print("SOME TESTS FAILED")
        return 1


if __name__ == "__main__":
    sys.exit(run_all_tests())
