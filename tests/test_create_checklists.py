import pandas as pd
import pytest

from nfc_checklists.create_checklists import build_parser, main, run_pipeline
from nfc_checklists.config import DEFAULT_CONFIG, merge_config
from nfc_checklists.export import EBIRD_COLUMNS
from tests.conftest import make_row

NIGHT = dict(date='09/07/20', recording_start='21:15:00', recording_length='6:00:00')


@pytest.fixture
def clips(write_csv):
    return write_csv([
        make_row('09/07/20 21:20:00', species='wiwa', **NIGHT),
        make_row('09/07/20 21:40:00', species='', **NIGHT),
        make_row('09/07/20 23:10:00', species='swth', detector='thrush', **NIGHT),
        make_row('09/08/20 01:05:00', species='wiwa', **NIGHT),
        make_row('09/08/20 03:14:00', species='wiwa', **NIGHT),
    ])


def test_parser_flags():
    args = build_parser().parse_args(['clips.csv', '--start', '2020/09/07 22:00:00',
                                      '--end', '2020/09/08 02:00:00', '--export'])
    assert args.input == 'clips.csv'
    assert args.start == '2020/09/07 22:00:00'
    assert args.export is True
    assert args.no_color is False


def test_main_prints_summary(clips, capsys):
    assert main([str(clips), '--no-color']) == 0
    out = capsys.readouterr().out

    assert 'Loaded 5 detections' in out
    assert 'Date: 09/07/20' in out
    assert 'Hour: 21:15' in out
    assert 'Duration: 45 mins.' in out
    assert 'Tseeps:\t 1' in out
    assert 'Date: 09/08/20' in out
    assert 'Hour: 3:00' in out
    assert 'Duration: 15 mins.' in out
    assert '\033[' not in out


def test_main_with_filter_and_export(clips, tmp_path, capsys):
    out_path = tmp_path / 'export.csv'
    code = main([str(clips), '--no-color', '--export', '--output', str(out_path),
                 '--start', '2020/09/07 22:30:00', '--end', '2020/09/08 02:00:00'])
    assert code == 0

    out = capsys.readouterr().out
    assert 'Hour: 21:15' not in out
    assert 'Hour: 23:00' in out

    written = pd.read_csv(out_path, header=None, names=EBIRD_COLUMNS, dtype=str,
                          keep_default_na=False)
    assert written['Common Name'].tolist() == ["Swainson's Thrush", "Wilson's Warbler"]
    assert written['Start Time'].tolist() == ['23:00', '1:00']
    assert written['Date'].tolist() == ['9/07/2020', '9/08/2020']
    assert written['Duration'].tolist() == ['60', '60']


def test_main_reports_missing_columns(write_csv, capsys):
    path = write_csv([make_row('09/07/20 21:20:00')], columns=['season', 'date', 'species'])
    assert main([str(path)]) == 1
    assert 'Error:' in capsys.readouterr().err


def test_main_reports_orphan_events(write_csv, capsys):
    path = write_csv([make_row('09/08/20 05:00:00', date='09/07/20', recording_start='21:00:00',
                               recording_length='2:00:00')])
    assert main([str(path)]) == 1
    assert 'has no bucket' in capsys.readouterr().err


def test_main_reports_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.csv')]) == 1
    assert 'Error:' in capsys.readouterr().err


def test_run_pipeline_returns_results(clips, tmp_path):
    plot_path = tmp_path / 'hourly.png'
    config = merge_config(DEFAULT_CONFIG, {'paths': {'export': str(tmp_path / 'export.csv')}})
    results = run_pipeline(str(clips), config, export=True, plot_path=str(plot_path))

    assert len(results['events']) == 5
    assert results['time_filter'] is None
    assert results['buckets']['09/07/20']['21:15:00'][0].species == 'wiwa'
    assert len(results['export_df']) == 5
    assert plot_path.exists()


def test_main_reports_short_row(tmp_path, capsys):
    path = tmp_path / 'clips.csv'
    path.write_text(
        'season,date,real_detection_time,recording_start,recording_length,species,detector\n'
        'Fall 2020,09/07/20,09/07/20 23:45:10,23:30:00,1:00:00,wiwa\n'
    )
    assert main([str(path)]) == 1
    assert 'Error: Row 2: missing value for detector' in capsys.readouterr().err
