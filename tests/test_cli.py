# ==============================================================================
# Файл: tests/test_cli.py
# Назначение: Интеграционные тесты скрипта run_uv_mapper.py.
# ==============================================================================
import contextlib
import io
import os
import tempfile
import unittest
import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

import run_uv_mapper
from uv_mapper.core.export import load_frame, read_uv_map_rg32f, write_frame_png
from uv_mapper.numerics.rng import hashcode


class TestCli(unittest.TestCase):

    def test_seed_command(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = run_uv_mapper.main(["seed", "hello"])
        self.assertEqual(code, 0)
        self.assertEqual(buf.getvalue().strip().splitlines()[-1], str(hashcode(b"hello")))

    def test_generate_command(self):
        with tempfile.TemporaryDirectory() as tmp:
            prefix = os.path.join(tmp, "out", "map")
            code = run_uv_mapper.main([
                "generate", "--seed", "1", "--size", "32", "16", "--cell", "8", "8",
                "--out", prefix, "--npz", "--preview",
            ])
            self.assertEqual(code, 0)
            for suffix in (".rg32f", ".npz", ".meta.json", ".preview.png"):
                self.assertTrue(os.path.exists(prefix + suffix), suffix)
            uv = read_uv_map_rg32f(prefix + ".rg32f", 32, 16)
            self.assertEqual(uv.shape, (16, 32, 2))

    def test_apply_and_restore(self):
        rng = np.random.default_rng(11)
        frame = rng.integers(0, 256, size=(16, 32, 4), dtype=np.uint8)
        with tempfile.TemporaryDirectory() as tmp:
            src = os.path.join(tmp, "src.png")
            enc = os.path.join(tmp, "enc.png")
            dec = os.path.join(tmp, "dec.png")
            write_frame_png(src, frame)
            self.assertEqual(run_uv_mapper.main(["apply", src, enc, "--seed", "abc", "--cell", "8", "8"]), 0)
            self.assertEqual(
                run_uv_mapper.main(["apply", enc, dec, "--seed", "abc", "--cell", "8", "8", "--restore"]), 0
            )
            self.assertTrue(np.array_equal(load_frame(dec), frame))

    def test_invalid_settings_exit_code(self):
        with tempfile.TemporaryDirectory() as tmp:
            code = run_uv_mapper.main([
                "generate", "--size", "0", "16", "--out", os.path.join(tmp, "m"),
            ])
        self.assertEqual(code, 2)


if __name__ == '__main__':
    unittest.main()
