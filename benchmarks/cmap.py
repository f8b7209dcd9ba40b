"""
Benchmark table directory and cmap decoding on a large synthetic font.
"""

import logging
import time

from sfntinfo import Font
from tests.data import build_font

LOG = logging.getLogger("benchmark-cmap")
# Every BMP code point below the surrogates, half of them through the
# glyph array
SEGMENTS = [
    (start, start + 255, 1, None if (start // 256) % 2 else list(range(1, 257)))
    for start in range(0, 0xD800, 256)
]


def benchmark_one(data: bytes) -> None:
    """Decode everything in the font."""
    font = Font(data)
    _ = font.family_name
    _ = font.glyph_count
    _ = len(font.cmap)


if __name__ == "__main__":
    logging.basicConfig(level=logging.ERROR)
    data = build_font(segments=SEGMENTS, num_glyphs=257)
    niter = 5
    cmap_time = 0.0
    for iter in range(niter + 1):
        start = time.time()
        benchmark_one(data)
        if iter != 0:
            cmap_time += time.time() - start
    print("Decoding took %.2f s / iter" % (cmap_time / niter,))
