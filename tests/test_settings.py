"""
Unit tests for grid settings: query/JSON round-trips, surprise, regeneration, config defaults.
Run from project root: python -m pytest tests/ -v
"""
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class TestGridSettings(unittest.TestCase):

    def test_defaults(self):
        from artgrid.procedural.schema import GridSettings

        s = GridSettings()
        self.assertEqual((s.grid_size, s.palette, s.complexity), (4, "Cool", 4))
        self.assertEqual(s.animation_speed, 1.0)
        self.assertFalse(s.is_animating)
        self.assertFalse(s.designer_mode)
        self.assertIsNone(s.seed)
        self.assertEqual(s.tile_count, 16)

    def test_clamps_and_fallbacks(self):
        from artgrid.procedural.schema import GridSettings

        s = GridSettings(grid_size=40, palette="Nope", complexity=-2, animation_speed=9)
        self.assertEqual(s.grid_size, 12)
        self.assertEqual(s.palette, "Cool")
        self.assertEqual(s.complexity, 0)
        self.assertEqual(s.animation_speed, 3.0)


class TestQueryRoundTrip(unittest.TestCase):

    def test_parse_query(self):
        from artgrid.settings import settings_from_query

        s = settings_from_query("?seed=42&cols=3&palette=Neon&complexity=7&live=1&designer=1")
        self.assertEqual(s.seed, 42)
        self.assertEqual(s.grid_size, 3)
        self.assertEqual(s.palette, "Neon")
        self.assertEqual(s.complexity, 7)
        self.assertTrue(s.is_animating)
        self.assertTrue(s.designer_mode)

    def test_flags_only_true_for_one(self):
        from artgrid.settings import settings_from_query

        s = settings_from_query({"live": "true", "designer": "0"})
        self.assertFalse(s.is_animating)
        self.assertFalse(s.designer_mode)

    def test_bad_integer_is_ignored(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import settings_from_query

        base = GridSettings(seed=5, grid_size=2)
        with self.assertLogs("artgrid.settings", level="WARNING"):
            s = settings_from_query("seed=abc&cols=6", base=base)
        self.assertEqual(s.seed, 5)
        self.assertEqual(s.grid_size, 6)

    def test_integer_prefix_is_used(self):
        from artgrid.settings import settings_from_query

        s = settings_from_query("seed=12abc&cols=3.9&complexity=%206x")
        self.assertEqual(s.seed, 12)
        self.assertEqual(s.grid_size, 3)
        self.assertEqual(s.complexity, 6)

    def test_query_clamps(self):
        from artgrid.settings import settings_from_query

        s = settings_from_query("complexity=15&palette=DoesNotExist")
        self.assertEqual(s.complexity, 10)
        self.assertEqual(s.palette, "Cool")

    def test_round_trip(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import settings_from_query, settings_to_query

        s = GridSettings(grid_size=5, palette="Pastel", complexity=2, is_animating=True, seed=12345)
        query = settings_to_query(s)
        self.assertEqual(query, "seed=12345&cols=5&palette=Pastel&complexity=2&live=1")
        back = settings_from_query(query)
        self.assertEqual((back.seed, back.grid_size, back.palette, back.complexity), (12345, 5, "Pastel", 2))
        self.assertTrue(back.is_animating)
        self.assertFalse(back.designer_mode)

    def test_missing_seed_not_emitted(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import settings_to_query

        self.assertNotIn("seed=", settings_to_query(GridSettings()))


class TestJsonBlob(unittest.TestCase):

    def test_round_trip(self):
        import json

        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import settings_from_json, settings_to_json

        s = GridSettings(grid_size=6, palette="Warm", complexity=9, animation_speed=2.0, designer_mode=True, seed=77)
        blob = settings_to_json(s)
        self.assertEqual(json.loads(blob)["gridSize"], 6)
        self.assertEqual(json.loads(blob)["designerMode"], True)
        self.assertEqual(settings_from_json(blob), s)

    def test_partial_blob_merges_over_defaults(self):
        from artgrid.settings import settings_from_json

        s = settings_from_json('{"palette": "Monochrome", "seed": 3}')
        self.assertEqual(s.palette, "Monochrome")
        self.assertEqual(s.seed, 3)
        self.assertEqual(s.grid_size, 4)

    def test_invalid_blob_gives_defaults(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import settings_from_json

        with self.assertLogs("artgrid.settings", level="WARNING"):
            self.assertEqual(settings_from_json("{not json"), GridSettings())
        with self.assertLogs("artgrid.settings", level="WARNING"):
            self.assertEqual(settings_from_json("[1, 2]"), GridSettings())
        with self.assertLogs("artgrid.settings", level="WARNING"):
            self.assertEqual(settings_from_json('{"gridSize": "big"}'), GridSettings())
        self.assertEqual(settings_from_json(None), GridSettings())

    def test_invalid_blob_keeps_base(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import settings_from_json

        base = GridSettings(grid_size=7, palette="Neon")
        with self.assertLogs("artgrid.settings", level="WARNING"):
            self.assertEqual(settings_from_json("{oops", base=base), base)
        self.assertEqual(settings_from_json('{"complexity": 1}', base=base).grid_size, 7)

    def test_save_and_load_file(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import load_settings, save_settings

        s = GridSettings(grid_size=3, palette="Pastel", complexity=8, animation_speed=0.5, seed=2024)
        with tempfile.TemporaryDirectory() as d:
            path = save_settings(Path(d) / "nested" / "grid.json", s)
            self.assertTrue(path.exists())
            self.assertEqual(load_settings(path), s)

    def test_load_missing_file_gives_base(self):
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import load_settings

        base = GridSettings(seed=11)
        self.assertEqual(load_settings(Path("/nonexistent/grid.json"), base=base), base)
        self.assertEqual(load_settings(Path("/nonexistent/grid.json")), GridSettings())


class TestSurpriseAndRegenerate(unittest.TestCase):

    def test_surprise_ranges(self):
        import random

        from artgrid.procedural.data.palettes import PALETTE_NAMES
        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import surprise_settings

        base = GridSettings(designer_mode=True, is_animating=True)
        rng = random.Random(1)
        for _ in range(100):
            s = surprise_settings(base, rng)
            self.assertTrue(2 <= s.grid_size <= 8)
            self.assertIn(s.palette, PALETTE_NAMES)
            self.assertTrue(0 <= s.complexity <= 10)
            self.assertTrue(0.25 <= s.animation_speed <= 3.0)
            self.assertTrue(0 <= s.seed < 1_000_000_000)
            self.assertTrue(s.designer_mode)
            self.assertTrue(s.is_animating)

    def test_surprise_is_reproducible_with_rng(self):
        import random

        from artgrid.procedural.schema import GridSettings
        from artgrid.settings import surprise_settings

        base = GridSettings()
        self.assertEqual(surprise_settings(base, random.Random(9)), surprise_settings(base, random.Random(9)))

    def test_regenerate_replaces_seed_only(self):
        from artgrid import settings as settings_mod
        from artgrid.procedural.schema import GridSettings

        base = GridSettings(grid_size=3, palette="Neon", seed=1)
        with mock.patch.object(settings_mod, "generate_seed", return_value=31337):
            s = settings_mod.regenerate(base)
        self.assertEqual(s.seed, 31337)
        self.assertEqual((s.grid_size, s.palette), (3, "Neon"))
        self.assertEqual(base.seed, 1)


class TestConfig(unittest.TestCase):

    def test_missing_file_gives_defaults(self):
        from artgrid.config import load_config

        cfg = load_config(Path("/nonexistent/config.yaml"))
        self.assertEqual(cfg["render"]["tile_size"], 320)
        self.assertEqual(cfg["grid"]["palette"], "Cool")

    def test_yaml_merges_over_defaults(self):
        from artgrid.config import load_config

        with tempfile.TemporaryDirectory() as d:
            path = Path(d) / "cfg.yaml"
            path.write_text("render:\n  gap: 4\ngrid:\n  palette: Neon\n", encoding="utf-8")
            cfg = load_config(path)
        self.assertEqual(cfg["render"]["gap"], 4)
        self.assertEqual(cfg["render"]["tile_size"], 320)
        self.assertEqual(cfg["grid"]["palette"], "Neon")
        self.assertEqual(cfg["animation"]["fps"], 24)

    def test_env_var_selects_file(self):
        from artgrid.config import CONFIG_ENV_VAR, load_config

        with tempfile.TemporaryDirectory() as d:
            path = Path(d) / "env.yaml"
            path.write_text("animation:\n  fps: 12\n", encoding="utf-8")
            with mock.patch.dict("os.environ", {CONFIG_ENV_VAR: str(path)}):
                cfg = load_config()
        self.assertEqual(cfg["animation"]["fps"], 12)
        self.assertEqual(cfg["animation"]["duration_seconds"], 4.0)

    def test_non_mapping_yaml_rejected(self):
        from artgrid.config import load_config

        with tempfile.TemporaryDirectory() as d:
            path = Path(d) / "bad.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)

    def test_shipped_default_config_loads(self):
        from artgrid.config import load_config

        cfg = load_config()
        self.assertIn("render", cfg)
        self.assertIn("grid", cfg)

    def test_quality_preset(self):
        from artgrid.config import resolve_render_config

        self.assertEqual(resolve_render_config({"render": {"quality": "draft", "tile_size": 999}})["tile_size"], 160)
        self.assertEqual(resolve_render_config({"render": {"tile_size": 999}})["tile_size"], 999)

    def test_output_dir_relative_to_project(self):
        from artgrid.config import get_output_dir

        self.assertTrue(get_output_dir({"output": {"dir": "out"}}).is_absolute())
        self.assertEqual(get_output_dir({"output": {"dir": "/tmp/x"}}), Path("/tmp/x"))

    def test_settings_from_config(self):
        from artgrid.settings import settings_from_config

        s = settings_from_config({"grid": {"grid_size": 2, "palette": "Warm", "unknown": 1}})
        self.assertEqual((s.grid_size, s.palette), (2, "Warm"))


if __name__ == "__main__":
    unittest.main()
