import unittest
import pytest
from scoring.utils import load_settings, parse_windows, safe_percentage, DEFAULT_SETTINGS


class TestScoringUtils(unittest.TestCase):
    def test_safe_percentage(self):
        self.assertEqual(safe_percentage(1, 4), 25.0)
        self.assertEqual(safe_percentage(3, 0), 0.0)

    def test_parse_windows(self):
        self.assertEqual(parse_windows('30, 90,180'), [30, 90, 180])
        self.assertEqual(parse_windows([7]), [7])
        with self.assertRaises(ValueError):
            parse_windows('thirty')
        with self.assertRaises(ValueError):
            parse_windows('')
        with self.assertRaises(ValueError):
            parse_windows(30)


def test_load_settings_defaults_when_file_missing(tmp_path, monkeypatch):
    for key in DEFAULT_SETTINGS:
        monkeypatch.delenv('LANDSCAPE_' + key.upper(), raising=False)
    settings = load_settings(str(tmp_path / 'missing.yaml'))
    assert settings == DEFAULT_SETTINGS
    # defaults are copied, not shared
    settings['windows'].append(1)
    assert DEFAULT_SETTINGS['windows'] == [30, 90, 180]


def test_load_settings_precedence(tmp_path, monkeypatch):
    path = tmp_path / 'landscape.yaml'
    path.write_text('windows: [7, 14]\ncontributor_threshold_commits: 3\nproject_threshold_contributors: 2\nunknown: 1\n', encoding='utf-8')
    monkeypatch.setenv('LANDSCAPE_CONTRIBUTOR_THRESHOLD_COMMITS', '4')
    monkeypatch.delenv('LANDSCAPE_WINDOWS', raising=False)
    monkeypatch.delenv('LANDSCAPE_PROJECT_THRESHOLD_CONTRIBUTORS', raising=False)
    settings = load_settings(str(path), overrides={'project_threshold_contributors': 5, 'windows': None})
    assert settings['windows'] == [7, 14]
    assert settings['contributor_threshold_commits'] == 4
    assert settings['project_threshold_contributors'] == 5
    assert 'unknown' not in settings


def test_load_settings_invalid_yaml_falls_back(tmp_path, monkeypatch):
    monkeypatch.delenv('LANDSCAPE_WINDOWS', raising=False)
    path = tmp_path / 'broken.yaml'
    path.write_text('windows: [30, 90\n', encoding='utf-8')
    assert load_settings(str(path))['windows'] == [30, 90, 180]


def test_load_settings_invalid_value_raises(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('contributor_threshold_commits: many\n', encoding='utf-8')
    with pytest.raises(ValueError):
        load_settings(str(path))


def test_repository_config_matches_defaults(monkeypatch):
    for key in DEFAULT_SETTINGS:
        monkeypatch.delenv('LANDSCAPE_' + key.upper(), raising=False)
    assert load_settings() == DEFAULT_SETTINGS


if __name__ == '__main__':
    unittest.main()
