import numpy as np
import pytest

HEADER = "Id,SepalLengthCm,SepalWidthCm,PetalLengthCm,PetalWidthCm,Species"

TEN_ROWS = """Id,SepalLengthCm,SepalWidthCm,PetalLengthCm,PetalWidthCm,Species
1,5.1,3.5,1.4,0.2,Iris-setosa
2,4.9,3.0,1.4,0.2,Iris-setosa
3,4.7,3.2,1.3,0.2,Iris-setosa
4,7.0,3.2,4.7,1.4,Iris-versicolor
5,6.4,3.2,4.5,1.5,Iris-versicolor
6,6.9,3.1,4.9,1.5,Iris-versicolor
7,5.5,2.3,4.0,1.3,Iris-versicolor
8,6.3,3.3,6.0,2.5,Iris-virginica
9,5.8,2.7,5.1,1.9,Iris-virginica
10,7.1,3.0,5.9,2.1,Iris-virginica
"""

CLASS_CENTERS = {
    "Iris-setosa": (5.0, 3.4, 1.5, 0.2),
    "Iris-versicolor": (5.9, 2.8, 4.3, 1.3),
    "Iris-virginica": (6.6, 3.0, 5.6, 2.0),
}


@pytest.fixture
def ten_row_csv():
    return TEN_ROWS


@pytest.fixture
def iris_like_csv():
    """30 rows, 10 per class, jittered around per-class means."""
    rng = np.random.default_rng(0)
    lines = [HEADER]
    row_id = 1
    for label, center in CLASS_CENTERS.items():
        for _ in range(10):
            values = np.round(np.asarray(center) + rng.uniform(-0.2, 0.2, size=4), 2)
            lines.append(f"{row_id}," + ",".join(str(v) for v in values) + f",{label}")
            row_id += 1
    return "\n".join(lines) + "\n"
