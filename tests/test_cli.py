"""
Tests for the generate_planet command-line entry point.
"""

import json

import pytest

from generate_planet import load_planet_config, main
from planet_generator.errors import ConfigurationError


class TestArguments:

    def test_bad_seed(self, capsys):
        assert main(['--seed', 'abc']) == 1
        assert "Seed must be an integer" in capsys.readouterr().out

    @pytest.mark.parametrize("seed", ["99999999999999999999", "2147483648", "-2147483649"])
    def test_seed_outside_32_bits(self, capsys, tmp_path, seed):
        assert main(["--seed", seed, "--type", "rect", "--width", "4", "--output-dir", str(tmp_path)]) == 1
        assert "Seed must be an integer" in capsys.readouterr().out
        assert not (tmp_path / "lat_lon.png").exists()

    def test_bad_width(self, capsys):
        assert main(['--width', '12.5']) == 1
        assert "Width must be an integer" in capsys.readouterr().out

    def test_width_too_small(self, tmp_path):
        assert main(['--type', 'rect', '--width', '1', '--output-dir', str(tmp_path)]) == 1

    def test_missing_output_dir(self, tmp_path):
        assert main(['--type', 'rect', '--width', '4', '--output-dir', str(tmp_path / 'nope')]) == 1

    def test_unknown_format_is_rejected(self):
        with pytest.raises(SystemExit):
            main(['--format', 'sepia8'])


class TestGeneration:

    def test_rect(self, tmp_path):
        assert main(['--type', 'rect', '--width', '4', '--output-dir', str(tmp_path)]) == 0
        assert (tmp_path / 'lat_lon.png').exists()

    def test_cube_layer(self, tmp_path):
        args = ['-s', '3', '--width', '2', '--format', 'terrain24',
                '--layer', 'terrain_type_def', '--output-dir', str(tmp_path)]
        assert main(args) == 0
        assert len(list(tmp_path.glob('*.png'))) == 6

    def test_config_overrides(self, tmp_path):
        config_path = tmp_path / 'planet.json'
        config_path.write_text(json.dumps({'planet_parameters': {'sea_level': 0.1}}))
        args = ['--type', 'rect', '--width', '4', '--config', str(config_path), '--output-dir', str(tmp_path)]
        assert main(args) == 0

    def test_invalid_config(self, tmp_path):
        config_path = tmp_path / 'planet.json'
        config_path.write_text(json.dumps({'shelf_level': 0.5}))
        args = ['--type', 'rect', '--width', '4', '--config', str(config_path), '--output-dir', str(tmp_path)]
        assert main(args) == 1


class TestLoadPlanetConfig:

    def test_flat_mapping(self, tmp_path):
        path = tmp_path / 'flat.json'
        path.write_text(json.dumps({'river_depth': 0.01}))
        assert load_planet_config(str(path)) == {'river_depth': 0.01}

    def test_section(self, tmp_path):
        path = tmp_path / 'nested.json'
        path.write_text(json.dumps({'planet_parameters': {'river_depth': 0.01}, 'other': 1}))
        assert load_planet_config(str(path)) == {'river_depth': 0.01}

    def test_unreadable(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_planet_config(str(tmp_path / 'missing.json'))

    def test_malformed(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json')
        with pytest.raises(ConfigurationError):
            load_planet_config(str(path))
