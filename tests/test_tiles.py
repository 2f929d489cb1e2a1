"""
Unit tests for tile-spec generation and the end-to-end spec → draw path.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class TestGenerateTileSpecs(unittest.TestCase):

    def test_count_and_unique_ids(self):
        from artgrid.procedural.tiles import generate_tile_specs

        specs = generate_tile_specs(16, {"seed": 100})
        self.assertEqual(len(specs), 16)
        self.assertEqual(len({s.id for s in specs}), 16)

    def test_types_cycle(self):
        from artgrid.procedural.tiles import generate_tile_specs

        specs = generate_tile_specs(16, {"seed": 100})
        cycle = ["pixel", "wave", "fractal", "diagonal", "grain"]
        self.assertEqual([s.type for s in specs], [cycle[i % 5] for i in range(16)])

    def test_seed_derivation(self):
        from artgrid.procedural.tiles import generate_tile_specs

        specs = generate_tile_specs(16, {"seed": 100})
        self.assertEqual([s.seed for s in specs], [100 + i for i in range(16)])
        self.assertEqual(specs[0].id, "pixel-100-0")
        self.assertEqual(specs[7].id, "fractal-107-7")
        self.assertEqual([s.index for s in specs], list(range(16)))

    def test_labels(self):
        from artgrid.procedural.tiles import generate_tile_specs, get_type_label

        specs = generate_tile_specs(5, {"seed": 1})
        self.assertEqual(
            [s.label for s in specs],
            ["Moving Lights", "Waveform", "Light Rays", "Diagonal Strata", "Soft Grain"],
        )
        self.assertEqual(get_type_label("mystery"), "mystery")

    def test_shared_style_copied(self):
        from artgrid.procedural.tiles import generate_tile_specs

        specs = generate_tile_specs(3, {"seed": 9, "palette": "Pastel", "complexity": 22, "designerMode": True})
        for s in specs:
            self.assertEqual(s.palette, "Pastel")
            self.assertEqual(s.complexity, 10)
            self.assertTrue(s.designer_mode)

    def test_unknown_palette_resolves(self):
        from artgrid.procedural.tiles import generate_tile_specs

        self.assertEqual(generate_tile_specs(1, {"seed": 9, "palette": "Sepia"})[0].palette, "Cool")

    def test_without_seed_draws_fresh_seeds(self):
        from artgrid.procedural import tiles

        fresh = iter([555, 777, 999])
        with mock.patch.object(tiles, "generate_seed", side_effect=lambda: next(fresh)):
            specs = tiles.generate_tile_specs(3)
        self.assertEqual([s.seed for s in specs], [555, 777, 999])
        self.assertEqual(len({s.id for s in specs}), 3)

    def test_zero_seed_is_unseeded(self):
        from artgrid.procedural import tiles

        with mock.patch.object(tiles, "generate_seed", return_value=4242) as gen:
            specs = tiles.generate_tile_specs(2, {"seed": 0})
        self.assertEqual(gen.call_count, 2)
        self.assertEqual([s.seed for s in specs], [4242, 4242])
        self.assertEqual(len({s.id for s in specs}), 2)  # index keeps ids unique

    def test_empty_and_negative_count(self):
        from artgrid.procedural.tiles import generate_tile_specs

        self.assertEqual(generate_tile_specs(0, {"seed": 1}), [])
        self.assertEqual(generate_tile_specs(-4, {"seed": 1}), [])

    def test_specs_are_immutable(self):
        import dataclasses

        from artgrid.procedural.tiles import generate_tile_specs

        spec = generate_tile_specs(1, {"seed": 3})[0]
        with self.assertRaises(dataclasses.FrozenInstanceError):
            spec.seed = 4

    def test_build_tile_specs_from_settings(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.procedural.tiles import build_tile_specs

        specs = build_tile_specs(GridSettings(grid_size=3, seed=50, palette="Warm", complexity=2))
        self.assertEqual(len(specs), 9)
        self.assertEqual(specs[-1].seed, 58)
        self.assertEqual(specs[-1].palette, "Warm")


class TestEndToEnd(unittest.TestCase):

    def test_specs_draw_and_fill_surface(self):
        from artgrid.procedural.canvas import Canvas
        from artgrid.procedural.generators import draw_pattern
        from artgrid.procedural.tiles import generate_tile_specs

        specs = generate_tile_specs(4, {"seed": 1, "palette": "Neon", "complexity": 5})
        for spec in specs:
            with self.subTest(tile=spec.id):
                canvas = Canvas(96, 96)
                draw_pattern(canvas, 96, 96, spec.type, spec.render_options(time=0.5))
                self.assertTrue((canvas.to_array()[..., 3] == 255).all())

    def test_spec_render_options(self):
        from artgrid.procedural.tiles import generate_tile_specs

        spec = generate_tile_specs(2, {"seed": 10, "palette": "Warm", "complexity": 6})[1]
        opts = spec.render_options(time=2.0)
        self.assertEqual((opts.seed, opts.palette, opts.complexity, opts.time), (11, "Warm", 6, 2.0))
        self.assertEqual(spec.to_dict()["id"], "wave-11-1")


if __name__ == "__main__":
    unittest.main()
