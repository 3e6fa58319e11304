"""
Unit tests for inputs, catalogs and run history.
"""

import json
import pytest

from ampere_analyzer.core.config import AnalyzerInputs, ConfigManager
from ampere_analyzer.core.constants import (
    CoolingProfile, CoolingProfileCatalog, TransistorDatabase, TransistorType,
)
from ampere_analyzer.core.history import HistoryEntry, RunHistory
from ampere_analyzer.core.parameters import normalize_inputs
from ampere_analyzer.solvers.current_search import CurrentSearchEngine


class TestAnalyzerInputs:

    def test_from_predefined_mosfet(self):
        inputs = AnalyzerInputs.from_predefined('IRFZ44N')

        assert inputs.predefined_component == 'irfz44n'
        assert inputs.display_name == 'IRFZ44N'
        assert inputs.rds_on_mohm == 17.5
        assert inputs.vce_sat is None
        assert inputs.max_temperature == 175

    def test_from_predefined_igbt(self):
        inputs = AnalyzerInputs.from_predefined('irg4pc50u', simulation_mode='temp')

        assert inputs.transistor_type == TransistorType.IGBT.value
        assert inputs.vce_sat == 1.65
        assert inputs.rds_on_mohm is None
        assert inputs.simulation_mode == 'temp'

    def test_from_predefined_unknown(self):
        with pytest.raises(KeyError):
            AnalyzerInputs.from_predefined('2n3055')

    def test_every_part_normalizes(self):
        """Every catalog part yields valid parameters."""
        for value in TransistorDatabase.get_all():
            params = normalize_inputs(AnalyzerInputs.from_predefined(value))
            assert params.max_current > 0

    def test_dict_round_trip(self, reference_inputs):
        assert AnalyzerInputs.from_dict(reference_inputs.to_dict()) == reference_inputs

    def test_from_dict_ignores_unknown(self):
        inputs = AnalyzerInputs.from_dict({'max_current': 10.0, 'heatsink_colour': 'black'})
        assert inputs.max_current == 10.0

    def test_display_name_fallback(self):
        assert AnalyzerInputs().display_name == 'N/A'


class TestConfigManager:

    def test_export_import(self, tmp_path, reference_inputs):
        path = tmp_path / 'inputs.json'
        manager = ConfigManager()
        manager.config = reference_inputs

        assert manager.export(str(path))
        assert json.loads(path.read_text(encoding='utf-8'))['rds_on_mohm'] == 10.0

        other = ConfigManager()
        assert other.import_config(str(path))
        assert other.get_config() == reference_inputs

    def test_load_from_path(self, tmp_path, reference_inputs):
        path = tmp_path / 'inputs.json'
        path.write_text(json.dumps(reference_inputs.to_dict()), encoding='utf-8')
        assert ConfigManager(str(path)).get_config() == reference_inputs

    def test_missing_file_defaults(self, tmp_path):
        assert ConfigManager(str(tmp_path / 'none.json')).get_config() == AnalyzerInputs()

    def test_corrupt_file_defaults(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json', encoding='utf-8')

        assert ConfigManager(str(path)).get_config() == AnalyzerInputs()
        assert not ConfigManager().import_config(str(path))

    def test_save(self, tmp_path, reference_inputs):
        path = tmp_path / 'saved.json'
        manager = ConfigManager(str(path))
        manager.config = reference_inputs

        assert manager.save()
        assert path.exists()


class TestCoolingProfileCatalog:

    def test_default_catalog(self):
        catalog = CoolingProfileCatalog()

        assert len(catalog) == 9
        assert 'air-nh-d15' in catalog
        assert catalog.get('air-nh-d15').thermal_resistance == 0.25
        assert catalog.get('unknown') is None

    def test_profile_round_trip(self):
        profile = CoolingProfile('x', 'X', 1.0, 10.0)
        assert CoolingProfile.from_dict(profile.to_dict()) == profile

    def test_custom_catalog(self, test_catalog):
        assert test_catalog.ids() == ['reference', 'weak', 'strong']


class TestRunHistory:

    def _entry(self, params, name):
        return HistoryEntry.create(name, params, CurrentSearchEngine(params).run())

    def test_newest_first(self, scenario_a, scenario_b):
        history = RunHistory()
        history.add(self._entry(scenario_a, 'first'))
        history.add(self._entry(scenario_b, 'second'))

        assert [e.component_name for e in history.entries()] == ['second', 'first']

    def test_limit(self, scenario_c):
        history = RunHistory(limit=3)
        result = CurrentSearchEngine(scenario_c).run()
        for i in range(5):
            history.record(f'run-{i}', scenario_c, result)

        assert len(history) == 3
        assert history.entries()[0].component_name == 'run-4'
        assert history.entries()[-1].component_name == 'run-2'

    def test_entry_snapshot(self, scenario_a):
        entry = self._entry(scenario_a, '')
        data = entry.to_dict()

        assert data['component_name'] == 'N/A'
        assert data['parameters']['simulation_mode'] == 'temp'
        assert data['result']['status'] == 'failed'

    def test_clear(self, scenario_a):
        history = RunHistory()
        history.add(self._entry(scenario_a, 'x'))
        history.clear()
        assert len(history) == 0
