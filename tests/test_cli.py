"""
Unit tests for the command line interface.
"""

import json
import pytest

from ampere_analyzer.cli import main


class TestListing:

    def test_parts(self, capsys):
        assert main(['parts']) == 0
        out = capsys.readouterr().out
        assert 'IRFZ44N' in out
        assert 'Vce(sat)=1.65V' in out

    def test_cooling(self, capsys):
        assert main(['cooling']) == 0
        assert 'air-nh-d15' in capsys.readouterr().out


class TestRun:

    def test_json(self, capsys):
        code = main(['run', '--part', 'irfz44n', '--mode', 'temp', '--steps', '50', '--json'])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data['component'] == 'IRFZ44N'
        assert data['result']['status'] in ('safe', 'failed')
        assert data['parameters']['precision_steps'] == 50
        assert data['summary'].startswith('Result: ')

    def test_text(self, capsys):
        code = main([
            'run', '--name', 'Reference FET', '--max-current', '100', '--max-voltage', '400',
            '--rds-on', '10', '--rise-time', '50', '--fall-time', '50', '--rth-jc', '0.5',
            '--max-temp', '150', '--frequency', '100', '--cooling', 'passive-extruded',
            '--mode', 'temp',
        ])
        out = capsys.readouterr().out

        assert code == 0
        assert 'AMPERE ANALYZER: Reference FET' in out
        assert 'Failure reason:    Thermal' in out

    def test_live(self, capsys):
        code = main(['run', '--part', 'irf540n', '--steps', '10', '--live'])
        out = capsys.readouterr().out

        assert code == 0
        assert '%]' in out
        assert 'Max safe current' in out

    def test_config_file(self, tmp_path, capsys, reference_inputs):
        path = tmp_path / 'inputs.json'
        data = reference_inputs.to_dict()
        data['cooling_profile_id'] = 'passive-extruded'
        path.write_text(json.dumps(data), encoding='utf-8')

        assert main(['run', '--config', str(path), '--algorithm', 'binary', '--json']) == 0
        result = json.loads(capsys.readouterr().out)
        assert result['result']['algorithm'] == 'binary'

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(['run', '--config', str(tmp_path / 'none.json')]) == 2
        assert 'Could not read inputs' in capsys.readouterr().err

    def test_non_numeric_power_rating_in_config(self, tmp_path, capsys, reference_inputs):
        path = tmp_path / 'inputs.json'
        data = reference_inputs.to_dict()
        data.update(cooling_profile_id='passive-extruded', power_dissipation='abc')
        path.write_text(json.dumps(data), encoding='utf-8')

        assert main(['run', '--config', str(path)]) == 2
        assert 'power_dissipation_rating must be a number' in capsys.readouterr().err

    def test_budget_mode_without_budget(self, capsys):
        assert main(['run', '--part', 'irfz44n', '--mode', 'budget']) == 2
        assert 'cooling budget' in capsys.readouterr().err

    def test_invalid_inputs(self, capsys):
        assert main(['run']) == 2
        assert 'Invalid inputs' in capsys.readouterr().err

    def test_unknown_part(self, capsys):
        assert main(['run', '--part', '2n3055']) == 2
        assert '2n3055' in capsys.readouterr().err

    def test_bad_steps(self, capsys):
        assert main(['run', '--part', 'irfz44n', '--steps', '5']) == 2
        assert 'precision_steps' in capsys.readouterr().err


class TestCompareCooling:

    def test_ranking(self, capsys):
        assert main(['compare-cooling', '--part', 'irf3205', '--mode', 'temp',
                     '--steps', '20', '--json']) == 0
        ranking = json.loads(capsys.readouterr().out)

        currents = [entry['result']['max_safe_current'] for entry in ranking]
        assert len(ranking) == 9
        assert currents == sorted(currents, reverse=True)

    def test_table(self, capsys):
        assert main(['compare-cooling', '--part', 'irf3205', '--steps', '20']) == 0
        assert 'cold-plate' in capsys.readouterr().out


class TestLogging:

    def test_verbose(self, capsys):
        assert main(['--verbose', 'parts']) == 0
        assert 'IRFZ44N' in capsys.readouterr().out
        main(['parts'])
