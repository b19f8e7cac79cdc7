import timeit

import numpy as np

import weightedcanny as wc
from weightedcanny.testutils import make_cross_image, make_half_plane_image


def main():
    for size in [64, 128, 256, 512]:
        time_wc = timeit.timeit(
            "wc.detect_edges(image)",
            number=10,
            setup=(
                "import numpy as np; "
                "import weightedcanny as wc; "
                "rng = np.random.default_rng(0); "
                f"image = rng.integers(0, 256, size=({size}, {size}))")
        )
        print(f"[size={size:04d}] weightedcanny={time_wc / 10:.4f}s per image")

    image = make_cross_image()
    detector = wc.CannyDetector(image)
    for overrides in [
        {},
        {"horizontal_weight": 0.0},
        {"vertical_weight": 0.0},
        {"wrap_horizontally": False},
        {"kernel_width": 5, "kernel_sigma": 2.0},
    ]:
        result = detector.detect_edges(**overrides)
        print(f"{overrides}: {result.nb_edge_pixels} edge pixels")
        wc.io.show_edges(result.edges)

    # the step between the last and the first column is only found with wrapping
    detector = wc.CannyDetector(make_half_plane_image(width=64, height=64, split=32))
    for wrap in [True, False]:
        edges = detector.detect_edges(wrap_horizontally=wrap, wrap_vertically=True).edges
        print(f"wrap_horizontally={wrap}: edge at last column: {bool(edges[:, -1].any())}")
        wc.io.show_edges(np.hstack([edges, np.ones((64, 1), dtype=bool), edges]))


if __name__ == "__main__":
    main()
