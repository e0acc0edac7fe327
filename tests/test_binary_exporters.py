# ==============================================================================
# Файл: tests/test_binary_exporters.py
# Назначение: Юнит-тесты для функций сохранения UV-карт и кадров.
# ==============================================================================
import unittest
import numpy as np
import tempfile
import os
import struct

# Добавляем путь к проекту, чтобы можно было импортировать пакет
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from PIL import Image

from uv_mapper.algorithms.uv_map import build_uv_map, generate_uv_map
from uv_mapper.core.export import (
    load_frame,
    read_raw_uv_map,
    read_uv_map_rg32f,
    uv_map_to_bytes,
    write_frame_png,
    write_raw_uv_map,
    write_uv_map_preview,
    write_uv_map_rg32f,
)
from uv_mapper.core.types import MapGeometry


class TestBinaryExporters(unittest.TestCase):
    """Набор тестов для проверки корректности упаковки и сохранения данных."""

    def test_rg32f_layout(self):
        """Буфер - это пары float32 little-endian в построчном порядке."""
        print("\n[TEST] Running test_rg32f_layout...")
        uv = generate_uv_map(3, 5, 4, 2, 2)
        raw = uv_map_to_bytes(uv)
        self.assertEqual(len(raw), 5 * 4 * 2 * 4)

        values = struct.unpack(f'<{5 * 4 * 2}f', raw)
        # пиксель (x=3, y=2) -> смещение (2 * 5 + 3) * 2
        offset = (2 * 5 + 3) * 2
        self.assertEqual(values[offset], float(uv[2, 3, 0]))
        self.assertEqual(values[offset + 1], float(uv[2, 3, 1]))
        print("[TEST] test_rg32f_layout: OK")

    def test_write_and_read_rg32f(self):
        print("\n[TEST] Running test_write_and_read_rg32f...")
        uv = generate_uv_map(42, 40, 24, 8, 8)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "map.rg32f")
            write_uv_map_rg32f(path, uv)
            self.assertEqual(os.path.getsize(path), 40 * 24 * 8)
            self.assertFalse(os.path.exists(path + ".tmp"))

            loaded = read_uv_map_rg32f(path, 40, 24)
            self.assertTrue(np.array_equal(loaded, uv))

            with self.assertRaises(ValueError):
                read_uv_map_rg32f(path, 41, 24)
            self.assertIsNone(read_uv_map_rg32f(os.path.join(tmp, "missing.rg32f"), 1, 1))
        print("[TEST] test_write_and_read_rg32f: OK")

    def test_bad_shape(self):
        with self.assertRaises(ValueError):
            uv_map_to_bytes(np.zeros((4, 4, 3), dtype=np.float32))


class TestNumpyExporters(unittest.TestCase):

    def test_raw_round_trip(self):
        result = build_uv_map("ganlvtech", MapGeometry(24, 16, 8, 8), kind="restore",
                              encoded_region=(2, 2, 20, 12))
        with tempfile.TemporaryDirectory() as tmp:
            prefix = os.path.join(tmp, "uv", "ganlvtech")
            write_raw_uv_map(prefix, result)
            loaded = read_raw_uv_map(prefix)
            self.assertIsNone(read_raw_uv_map(os.path.join(tmp, "nope")))

        self.assertEqual(loaded.kind, "restore")
        self.assertEqual(loaded.seed, result.seed)
        self.assertEqual(loaded.seed_token, "ganlvtech")
        self.assertEqual(loaded.geometry, result.geometry)
        self.assertEqual(loaded.encoded_region, (2, 2, 20, 12))
        self.assertTrue(np.array_equal(loaded.uv, result.uv))


class TestImageExporters(unittest.TestCase):

    def test_preview_png(self):
        uv = generate_uv_map(1, 32, 16, 8, 8)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "preview.png")
            write_uv_map_preview(path, uv)
            with Image.open(path) as img:
                self.assertEqual(img.size, (32, 16))
                self.assertEqual(img.mode, "RGB")

    def test_frame_round_trip(self):
        rng = np.random.default_rng(1)
        frame = rng.integers(0, 256, size=(10, 12, 4), dtype=np.uint8)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "frame.png")
            write_frame_png(path, frame)
            loaded = load_frame(path)
        self.assertEqual(loaded.shape, (10, 12, 4))
        self.assertTrue(np.array_equal(loaded, frame))


if __name__ == '__main__':
    unittest.main()
