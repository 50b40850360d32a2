#!/usr/bin/env python
"""
Line Clustering Tests

Tests for:
- Normal-form (theta, rho) of line segments
- Duplicate detection between a seed and a candidate
- Greedy clustering of raw detections
"""

import sys
import random
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from axis_pipeline.lines import (
    LineSegment,
    normal_form,
    angle_difference,
    is_duplicate_detection,
    cluster_line_segments,
)
from axis_pipeline.constants import CLUSTER_ANGLE_TOLERANCE_DEG, CLUSTER_RHO_TOLERANCE


def make_segment(theta: float, rho: float, offset: float = 0.0) -> LineSegment:
    """Create a segment with explicit theta/rho (endpoints are placeholders)."""
    return LineSegment(point1=(offset, 0.0), point2=(offset + 10.0, 0.0), theta=theta, rho=rho)


def flatten(clusters):
    return [seg for cluster in clusters for seg in cluster.segments]


class TestNormalForm:
    """Tests for theta/rho derivation."""

    def test_horizontal_segment(self):
        """Horizontal segments have theta -90 and rho = -y."""
        theta, rho = normal_form((0, 5), (10, 5))
        assert abs(theta + 90) < 1e-9, f"Expected theta -90, got {theta}"
        assert abs(rho + 5) < 1e-9, f"Expected rho -5, got {rho}"

        # Reversed direction describes the same line
        theta_r, rho_r = normal_form((10, 5), (0, 5))
        assert abs(theta_r - theta) < 1e-9
        assert abs(rho_r - rho) < 1e-9

        print("  [PASS] Horizontal segment normal form")

    def test_vertical_segment(self):
        """Vertical segments have theta 0 and rho = x."""
        seg = LineSegment.from_endpoints((3, 0), (3, 10))
        assert abs(seg.theta) < 1e-9, f"Expected theta 0, got {seg.theta}"
        assert abs(seg.rho - 3) < 1e-9, f"Expected rho 3, got {seg.rho}"
        assert abs(seg.length - 10) < 1e-9

        print("  [PASS] Vertical segment normal form")

    def test_theta_range(self):
        """Theta always falls in [-90, 90)."""
        for p2 in [(10, 1), (10, -1), (-10, 1), (-10, -1), (1, 10), (-1, -10)]:
            theta, _ = normal_form((0, 0), p2)
            assert -90 <= theta < 90, f"Theta {theta} out of range for {p2}"

        print("  [PASS] Theta range")

    def test_angle_difference_wraps(self):
        """Angles on both sides of the seam are close."""
        assert abs(angle_difference(89.5, -89.5) - 1.0) < 1e-9
        assert abs(angle_difference(10, 4) - 6) < 1e-9

        print("  [PASS] Angle difference wrap-around")


class TestDuplicateDetection:
    """Tests for seed/candidate comparison."""

    def test_within_tolerance(self):
        seed = make_segment(0, 0)
        assert is_duplicate_detection(seed, make_segment(9.9, 9.9))
        print("  [PASS] Candidate within tolerance")

    def test_tolerance_is_exclusive(self):
        """A difference equal to the tolerance does not match."""
        seed = make_segment(0, 0)
        assert not is_duplicate_detection(seed, make_segment(CLUSTER_ANGLE_TOLERANCE_DEG, 0))
        assert not is_duplicate_detection(seed, make_segment(0, CLUSTER_RHO_TOLERANCE))
        print("  [PASS] Tolerances are exclusive")

    def test_both_conditions_required(self):
        seed = make_segment(0, 0)
        assert not is_duplicate_detection(seed, make_segment(2, 50))
        assert not is_duplicate_detection(seed, make_segment(45, 2))
        print("  [PASS] Angle and rho both required")

    def test_across_theta_seam(self):
        """(89, 20) and (-89, -21) are the same line seen from both sides."""
        seed = make_segment(89, 20)
        assert is_duplicate_detection(seed, make_segment(-89, -21))
        assert not is_duplicate_detection(seed, make_segment(-89, 21))
        print("  [PASS] Duplicate across theta seam")


class TestClustering:
    """Tests for greedy clustering."""

    def test_near_duplicates_form_one_cluster(self):
        """Four segments pairwise within tolerance give one cluster."""
        segments = [
            make_segment(0, 0),
            make_segment(3, 2),
            make_segment(6, 4),
            make_segment(9, 6),
        ]

        clusters = cluster_line_segments(segments)

        assert len(clusters) == 1, f"Expected 1 cluster, got {len(clusters)}"
        assert len(clusters[0]) == 4
        print("  [PASS] Near duplicates clustered")

    def test_clustering_is_partition(self):
        """Every segment ends in exactly one cluster."""
        segments = [
            make_segment(0, 0),
            make_segment(45, 100),
            make_segment(3, 5),
            make_segment(48, 103),
            make_segment(-60, 50),
            make_segment(1, 40),
        ]

        clusters = cluster_line_segments(segments)
        members = flatten(clusters)

        assert len(members) == len(segments), "Clusters must cover every segment once"
        assert {id(s) for s in members} == {id(s) for s in segments}
        assert all(len(c) > 0 for c in clusters), "Clusters must be non-empty"
        print(f"  [PASS] Partition: {len(segments)} segments -> {len(clusters)} clusters")

    def test_no_transitive_closure(self):
        """A segment close to a member but not to the seed starts a new cluster."""
        segments = [make_segment(0, 0), make_segment(8, 0), make_segment(16, 0)]

        clusters = cluster_line_segments(segments)

        thetas = [[s.theta for s in c.segments] for c in clusters]
        assert thetas == [[0, 8], [16]], f"Unexpected clusters {thetas}"
        print("  [PASS] Only the seed is compared")

    def test_order_independent_when_sorted(self):
        """Shuffled input gives the same clusters."""
        segments = [make_segment(t, r) for t, r in [(0, 0), (8, 0), (16, 0), (50, 3), (52, 9)]]
        expected = [[(s.theta, s.rho) for s in c.segments] for c in cluster_line_segments(segments)]

        rng = random.Random(7)
        for _ in range(5):
            shuffled = segments[:]
            rng.shuffle(shuffled)
            result = [[(s.theta, s.rho) for s in c.segments] for c in cluster_line_segments(shuffled)]
            assert result == expected, f"Expected {expected}, got {result}"

        print("  [PASS] Deterministic ordering")

    def test_input_order_kept_without_sorting(self):
        segments = [make_segment(16, 0), make_segment(0, 0), make_segment(8, 0)]

        clusters = cluster_line_segments(segments, sort_segments=False)

        thetas = [[s.theta for s in c.segments] for c in clusters]
        assert thetas == [[16, 8], [0]], f"Unexpected clusters {thetas}"
        print("  [PASS] Detection order kept when sorting disabled")

    def test_cluster_ids(self):
        segments = [make_segment(0, 0), make_segment(45, 0), make_segment(-45, 0)]

        clusters = cluster_line_segments(segments)

        assert [c.cluster_id for c in clusters] == [1, 2, 3]
        print("  [PASS] Cluster ids")

    def test_custom_tolerances(self):
        segments = [make_segment(0, 0), make_segment(3, 0)]

        assert len(cluster_line_segments(segments, angle_tolerance=2)) == 2
        assert len(cluster_line_segments(segments, angle_tolerance=4)) == 1
        print("  [PASS] Custom tolerances")

    def test_empty_input(self):
        assert cluster_line_segments([]) == []
        print("  [PASS] Empty input")


def run_all_tests():
    """Run all line clustering tests."""
    print("=" * 60)
    print("Line Clustering Tests")
    print("=" * 60)
    print()

    all_passed = True

    for name, test_class in [
        ("Normal Form", TestNormalForm),
        ("Duplicate Detection", TestDuplicateDetection),
        ("Clustering", TestClustering),
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
        print("ALL LINE CLUSTERING TESTS PASSED")
        return 0
    else:
        print("SOME TESTS FAILED")
        return 1


if __name__ == "__main__":
    sys.exit(run_all_tests())
