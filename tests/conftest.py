import matplotlib
import pytest

matplotlib.use("Agg")

# Points and squared distances shared by the linkage tests.
MEDIAN_DATA = [[10, 3], [3, 10], [2, 8], [2, 5], [3, 8], [10, 3],
               [1, 3], [8, 1], [2, 9], [2, 5], [3, 3], [9, 4]]

MEDIAN_DISTANCE_ROWS = [
    [98.0],
    [89.0, 5.0],
    [68.0, 26.0, 9.0],
    [74.0, 4.0, 1.0, 10.0],
    [0.0, 98.0, 89.0, 68.0, 74.0],
    [81.0, 53.0, 26.0, 5.0, 29.0, 81.0],
    [8.0, 106.0, 85.0, 52.0, 74.0, 8.0, 53.0],
    [100.0, 2.0, 1.0, 16.0, 2.0, 100.0, 37.0, 100.0],
    [68.0, 26.0, 9.0, 0.0, 10.0, 68.0, 5.0, 52.0, 16.0],
    [49.0, 49.0, 26.0, 5.0, 25.0, 49.0, 4.0, 29.0, 37.0, 5.0],
    [2.0, 72.0, 65.0, 50.0, 52.0, 2.0, 65.0, 10.0, 74.0, 50.0, 37.0],
]


@pytest.fixture
def median_data():
    return [list(item) for item in MEDIAN_DATA]


@pytest.fixture
def median_rows():
    return [list(row) for row in MEDIAN_DISTANCE_ROWS]
