# ==============================================================================
# Файл: tests/test_filters.py
# Назначение: Юнит-тесты жизненного цикла фильтров и графического контекста.
# ==============================================================================
import unittest
import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from uv_mapper.algorithms.uv_map import generate_uv_map
from uv_mapper.core.errors import FilterStateError, GraphicsError, UnknownFilterError
from uv_mapper.core.settings import load_settings
from uv_mapper.filters import (
    REGISTRY,
    GraphicsContext,
    UvRestoreFilter,
    UvShuffleFilter,
    create_filter,
)

SMALL = {"seed": "42", "width": 32, "height": 16, "cell_size_x": 8, "cell_size_y": 8}


class TestGraphicsContext(unittest.TestCase):

    def test_texture_requires_context(self):
        ctx = GraphicsContext()
        data = np.zeros((2, 3, 2), dtype=np.float32)
        with self.assertRaises(GraphicsError):
            ctx.create_texture(3, 2, data)
        with ctx.enter():
            tex = ctx.create_texture(3, 2, data)
            self.assertEqual(ctx.live_textures, 1)
        with self.assertRaises(GraphicsError):
            ctx.destroy_texture(tex)
        with ctx.enter():
            ctx.destroy_texture(tex)
            with self.assertRaises(GraphicsError):
                ctx.destroy_texture(tex)
        self.assertEqual(ctx.live_textures, 0)

    def test_texture_shape_and_format_checked(self):
        ctx = GraphicsContext()
        with ctx.enter():
            with self.assertRaises(GraphicsError):
                ctx.create_texture(4, 4, np.zeros((4, 4, 3), dtype=np.float32))
            with self.assertRaises(GraphicsError):
                ctx.create_texture(4, 4, np.zeros((4, 4, 2)), fmt="R8")

    def test_texture_owns_copy(self):
        ctx = GraphicsContext()
        data = np.zeros((1, 1, 2), dtype=np.float32)
        with ctx.enter():
            tex = ctx.create_texture(1, 1, data)
        data[0, 0, 0] = 1.0
        self.assertEqual(float(tex.data[0, 0, 0]), 0.0)

    def test_reentrant(self):
        ctx = GraphicsContext()
        with ctx.enter():
            with ctx.enter():
                self.assertTrue(ctx.is_entered)
            self.assertTrue(ctx.is_entered)
        self.assertFalse(ctx.is_entered)


class TestShuffleFilter(unittest.TestCase):

    def test_registry(self):
        self.assertIs(REGISTRY["uv_mapper.shuffle"], UvShuffleFilter)
        self.assertIs(REGISTRY["uv_mapper.restore"], UvRestoreFilter)
        with self.assertRaises(UnknownFilterError):
            create_filter("uv_mapper.nope", SMALL)

    def test_description(self):
        flt = UvShuffleFilter()
        self.assertEqual(flt.get_name(), "Video UV Mapper")
        defaults = flt.get_defaults()
        self.assertEqual((defaults["seed"], defaults["width"], defaults["height"]), ("0", 1920, 1080))
        names = [p.name for p in flt.get_properties()]
        self.assertEqual(names[:5], ["seed", "width", "height", "cell_size_x", "cell_size_y"])
        width_prop = flt.get_properties()[1]
        self.assertEqual((width_prop.min, width_prop.max), (1, 3840))
        self.assertEqual(width_prop.clamp(99999), 3840)
        self.assertIn("encoded_region", [p.name for p in UvRestoreFilter.get_properties()])

    def test_lifecycle(self):
        ctx = GraphicsContext()
        flt = create_filter("uv_mapper.shuffle", SMALL, graphics=ctx)
        self.assertTrue(flt.is_alive)
        self.assertEqual(ctx.live_textures, 1)
        self.assertEqual(flt.result.seed, 42)
        self.assertTrue(np.array_equal(flt.texture.data, generate_uv_map(42, 32, 16, 8, 8)))

        first = flt.texture
        flt.update({**SMALL, "seed": "43"})
        self.assertEqual(ctx.live_textures, 1)
        self.assertNotEqual(flt.texture.texture_id, first.texture_id)
        self.assertTrue(np.array_equal(flt.texture.data, generate_uv_map(43, 32, 16, 8, 8)))

        frame = np.zeros((16, 32, 4), dtype=np.uint8)
        self.assertEqual(flt.render(frame).shape, (16, 32, 4))

        flt.destroy()
        self.assertEqual(ctx.live_textures, 0)
        self.assertFalse(flt.is_alive)
        with self.assertRaises(FilterStateError):
            flt.render(frame)
        with self.assertRaises(FilterStateError):
            flt.update(SMALL)
        flt.destroy()  # повторный destroy - без эффекта

    def test_create_twice(self):
        flt = UvShuffleFilter().create(SMALL)
        with self.assertRaises(FilterStateError):
            flt.create(SMALL)
        flt.destroy()

    def test_update_is_idempotent(self):
        flt = UvShuffleFilter().create(SMALL)
        before = flt.texture.data.tobytes()
        flt.update(dict(SMALL))
        self.assertEqual(flt.texture.data.tobytes(), before)
        flt.destroy()

    def test_host_values_are_clamped(self):
        flt = UvShuffleFilter().create({**SMALL, "cell_size_x": 0, "seed": 7})
        self.assertEqual(flt.settings.cell_size_x, 1)
        self.assertEqual(flt.settings.seed, "7")
        flt.destroy()

    def test_accepts_settings_object(self):
        settings = load_settings(SMALL)
        with UvShuffleFilter().create(settings) as flt:
            self.assertIs(flt.settings, settings)
        self.assertFalse(flt.is_alive)

    def test_failed_update_keeps_old_texture(self):
        ctx = GraphicsContext()
        flt = UvShuffleFilter(ctx).create(SMALL)
        old = flt.texture

        def boom(*args, **kwargs):
            raise GraphicsError("out of video memory")

        ctx.create_texture = boom
        with self.assertRaises(GraphicsError):
            flt.update({**SMALL, "seed": "1"})
        self.assertIs(flt.texture, old)
        self.assertEqual(flt.settings.seed, "42")
        del ctx.create_texture
        flt.destroy()
        self.assertEqual(ctx.live_textures, 0)


class TestRestoreFilter(unittest.TestCase):

    def test_shuffle_then_restore(self):
        rng = np.random.default_rng(3)
        frame = rng.integers(0, 256, size=(16, 32, 4), dtype=np.uint8)
        ctx = GraphicsContext()
        with create_filter("uv_mapper.shuffle", SMALL, ctx) as enc, \
                create_filter("uv_mapper.restore", SMALL, ctx) as dec:
            self.assertEqual(ctx.live_textures, 2)
            shuffled = enc.render(frame)
            restored = dec.render(shuffled)
        self.assertFalse(np.array_equal(shuffled, frame))
        self.assertTrue(np.array_equal(restored, frame))
        self.assertEqual(ctx.live_textures, 0)

    def test_encoded_region_setting(self):
        flt = UvRestoreFilter().create({**SMALL, "encoded_region": "4, 2, 16, 8"})
        self.assertEqual(flt.settings.encoded_region, (4, 2, 16, 8))
        self.assertEqual(flt.result.encoded_region, (4, 2, 16, 8))
        uv = flt.texture.data
        self.assertTrue(np.all(uv[..., 0] > 4 / 32) and np.all(uv[..., 0] < 20 / 32))
        flt.destroy()


if __name__ == '__main__':
    unittest.main()
