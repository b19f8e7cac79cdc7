import unittest

import numpy as np

from weightedcanny.hysteresis import (
    binarize_edges,
    follow_edge,
    perform_hysteresis,
    thresholds_to_bounds,
)


class Test_thresholds_to_bounds(unittest.TestCase):
    def test_default_thresholds(self):
        assert thresholds_to_bounds(0.5, 1.0) == (50000, 100000)

    def test_floors(self):
        assert thresholds_to_bounds(0.123456, 0.999999) == (12345, 99999)


class Test_follow_edge(unittest.TestCase):
    def test_stops_without_qualifying_neighbor(self):
        magnitude = [[0, 0, 0], [0, 200, 0], [0, 0, 0]]
        thresholded = [[0] * 3 for _ in range(3)]

        truncated = follow_edge(magnitude, thresholded, 1, 1, 50, 3)

        assert truncated is False
        assert thresholded == [[0, 0, 0], [0, 200, 0], [0, 0, 0]]

    def test_truncates_after_max_steps(self):
        magnitude = [[60] * 4 for _ in range(6)]
        magnitude[0][0] = 200
        thresholded = [[0] * 4 for _ in range(6)]

        truncated = follow_edge(magnitude, thresholded, 0, 0, 50, 4)

        assert truncated is True
        assert [thresholded[y][0] for y in range(6)] == [200, 60, 60, 60, 0, 0]
        assert all(thresholded[y][x] == 0 for y in range(6) for x in range(1, 4))


class Test_perform_hysteresis(unittest.TestCase):
    def test_weak_pixels_need_a_strong_seed(self):
        magnitude = np.zeros((5, 5), dtype=np.int64)
        magnitude[2, 2] = 99

        thresholded = perform_hysteresis(magnitude, 50, 100)

        assert thresholded.dtype == np.int64
        assert np.all(thresholded == 0)

    def test_follows_only_the_first_branch(self):
        magnitude = np.zeros((7, 7), dtype=np.int64)
        magnitude[3, 3] = 200
        magnitude[3, 2] = 60
        magnitude[3, 4] = 60

        thresholded = perform_hysteresis(magnitude, 50, 100)

        assert thresholded[3, 3] == 200
        assert thresholded[3, 2] == 60
        assert thresholded[3, 4] == 0

    def test_scans_columns_before_rows(self):
        magnitude = np.zeros((7, 7), dtype=np.int64)
        magnitude[3, 3] = 200
        magnitude[2, 3] = 60  # x=3, y=2
        magnitude[4, 2] = 60  # x=2, y=4

        thresholded = perform_hysteresis(magnitude, 50, 100)

        assert thresholded[4, 2] == 60
        assert thresholded[2, 3] == 0

    def test_below_low_is_never_linked(self):
        magnitude = np.zeros((5, 5), dtype=np.int64)
        magnitude[2, 2] = 200
        magnitude[2, 3] = 49

        thresholded = perform_hysteresis(magnitude, 50, 100)

        assert thresholded[2, 2] == 200
        assert thresholded[2, 3] == 0

    def test_chase_is_bounded_by_width(self):
        magnitude = np.full((6, 4), 60, dtype=np.int64)
        magnitude[0, 0] = 200

        thresholded = perform_hysteresis(magnitude, 50, 100)

        assert np.count_nonzero(thresholded) == 4
        assert np.all(thresholded[0:4, 0] > 0)

    def test_connected_seeds(self):
        magnitude = np.zeros((5, 6), dtype=np.int64)
        magnitude[2, 1:5] = [200, 200, 60, 200]

        thresholded = perform_hysteresis(magnitude, 50, 100)

        assert np.array_equal(thresholded[2, 1:5], [200, 200, 60, 200])
        assert np.count_nonzero(thresholded) == 4

    def test_confirmed_values_are_copied_from_input(self):
        rng = np.random.default_rng(0)
        magnitude = rng.integers(0, 200000, size=(20, 30)).astype(np.int64)

        thresholded = perform_hysteresis(magnitude, 50000, 100000)

        confirmed = thresholded > 0
        assert np.array_equal(thresholded[confirmed], magnitude[confirmed])
        assert np.all(magnitude[confirmed] >= 50000)
        assert np.all(confirmed[magnitude >= 100000])


class Test_binarize_edges(unittest.TestCase):
    def test_positive_values_are_edges(self):
        thresholded = np.zeros((5, 5), dtype=np.int64)
        thresholded[2, 1] = 7
        thresholded[3, 4] = 1

        edges = binarize_edges(thresholded)

        assert edges.dtype == np.bool_
        assert np.count_nonzero(edges) == 2
        assert edges[2, 1]
        assert edges[3, 4]

    def test_first_and_last_rows_are_cleared(self):
        thresholded = np.full((4, 3), 5, dtype=np.int64)

        edges = binarize_edges(thresholded)

        assert not edges[0].any()
        assert not edges[-1].any()
        assert edges[1:3].all()
