"""Tests for the ehex-tool CLI and command registry."""

import json
import shutil
import sys
from pathlib import Path

import pytest
from ehex.__main__ import main
from ehex.core.image import EhexImage
from ehex.core.types import Command
from ehex.registry import all_commands, discover, get
from PIL import Image

FIXTURES_DIR = Path(__file__).parent / 'fixtures'

EXPECTED_COMMANDS = {'convert', 'export', 'import', 'info', 'new', 'paint', 'resize', 'sample', 'view'}


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside tmp_path, with no .env above it and no EHEX_* overrides."""
    (tmp_path / '.git').mkdir()
    for name in ('EHEX_FORMAT', 'EHEX_WIDTH', 'EHEX_HEIGHT', 'EHEX_BRUSH', 'EHEX_ALLOW_LEGACY'):
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    shutil.copy(FIXTURES_DIR / 'sample.ehex', tmp_path / 'sample.ehex')
    shutil.copy(FIXTURES_DIR / 'legacy.ehex', tmp_path / 'legacy.ehex')
    return tmp_path


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> None:
    monkeypatch.setattr(sys, 'argv', ['ehex-tool', *argv])
    main()


class TestRegistry:
    def test_discovers_all_commands(self):
        assert set(discover()) == EXPECTED_COMMANDS

    def test_commands_are_command_objects(self):
        for cmd in all_commands().values():
            assert isinstance(cmd, Command)

    def test_docstring_attached(self):
        assert get('paint').doc.startswith('Paint a square brush stroke')

    def test_unknown(self):
        with pytest.raises(KeyError):
            get('undo')

    def test_only_creators_skip_loading(self):
        creators = {name for name, cmd in all_commands().items() if not cmd.loads}
        assert creators == {'new', 'sample', 'import'}


class TestInfoAndView:
    def test_info_text(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'info', 'sample.ehex')
        out = capsys.readouterr().out
        assert 'sample.ehex (8×8, EHEX2 V2)' in out
        assert 'distinct: 15' in out

    def test_info_json(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'info', 'sample.ehex', '--json')
        parsed = json.loads(capsys.readouterr().out)
        assert parsed['dimensions'] == {'width': 8, 'height': 8}
        assert parsed['version'] == 2
        assert parsed['commands']['info']['cells'] == 64
        assert parsed['commands']['info']['histogram']["7 '#'"] == 8

    def test_info_legacy_json(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'info', 'legacy.ehex', '--legacy', '--json')
        parsed = json.loads(capsys.readouterr().out)
        assert parsed['channels'] == 4
        assert parsed['commands']['info']['histogram']['#FF0000FF'] == 1

    def test_legacy_rejected_without_flag(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'info', 'legacy.ehex')
        assert exc.value.code == 1
        assert 'not supported' in capsys.readouterr().err

    def test_legacy_allowed_by_env(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        (workdir / '.env').write_text('EHEX_ALLOW_LEGACY=1\n')
        _run(monkeypatch, 'info', 'legacy.ehex')
        captured = capsys.readouterr()
        assert 'EHEX V1' in captured.out
        assert 'loaded' in captured.err

    def test_view(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'view', 'sample.ehex')
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == '+--------+'
        assert lines[1] == '| .:-=+*#|'
        assert 'Display: 8x8' in lines[-1]

    def test_view_cursor(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'view', 'sample.ehex', '--x', '0', '--y', '0')
        assert capsys.readouterr().out.splitlines()[1] == '|X.:-=+*#|'

    def test_view_fit_keeps_cursor(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv('COLUMNS', '100')
        monkeypatch.setenv('LINES', '40')
        _run(monkeypatch, 'view', 'sample.ehex', '--fit', '--x', '1', '--y', '0')
        assert capsys.readouterr().out.splitlines()[1] == '| X:-=+*#|'

    def test_missing_file(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'view', 'nothing.ehex')
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith('ehex-tool: error:')

    def test_malformed_file(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        (workdir / 'bad.ehex').write_text('EHEX2\nV2\nSIZE:4x4\nPIXELS:\n0000\n')
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'view', 'bad.ehex')
        assert 'expected 4 pixel rows' in capsys.readouterr().err


class TestEditing:
    def test_new_defaults(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'new', 'blank.ehex')
        image = EhexImage.open(workdir / 'blank.ehex')
        assert (image.width, image.height) == (20, 10)

    def test_new_from_env_and_flags(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv('EHEX_FORMAT', 'v1')
        _run(monkeypatch, 'new', 'rgba.ehex', '--width', '4')
        image = EhexImage.open(workdir / 'rgba.ehex', legacy=True)
        assert (image.format, image.width, image.height) == ('v1', 4, 10)

    def test_new_v1_clamped(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'new', 'big.ehex', '--format', 'v1', '--width', '400', '--height', '90')
        image = EhexImage.open(workdir / 'big.ehex', legacy=True)
        assert (image.format, image.width, image.height) == ('v1', 150, 25)

    @pytest.mark.parametrize('flag', ['--width', '--height'])
    def test_new_zero_size_reported(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys, flag):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'new', 'zero.ehex', flag, '0')
        assert exc.value.code == 1
        assert 'at least 1x1' in capsys.readouterr().err
        assert not (workdir / 'zero.ehex').exists()

    def test_new_without_path(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'new')
        assert len(list(workdir.glob('image_*.ehex'))) == 1

    def test_sample(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'sample', 'made.ehex')
        assert (workdir / 'made.ehex').read_text() == (FIXTURES_DIR / 'sample.ehex').read_text()

    def test_paint_in_place(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'paint', 'sample.ehex', '--x', '6', '--y', '6', '--value', 'f', '--brush', '3')
        image = EhexImage.open(workdir / 'sample.ehex')
        assert image.cell_value(6, 6) == 15
        assert image.cell_value(7, 7) == 15
        assert image.cell_value(5, 5) == 10
        assert 'painted: 4' in capsys.readouterr().out

    def test_paint_default_value(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'paint', 'sample.ehex', '--x', '0', '--y', '0', '--out', 'copy.ehex')
        assert EhexImage.open(workdir / 'copy.ehex').cell_value(0, 0) == 1
        assert EhexImage.open(workdir / 'sample.ehex').cell_value(0, 0) == 0

    def test_paint_v1_colour(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'paint', 'legacy.ehex', '--legacy', '--x', '0', '--y', '1', '--value', '#00FF0080')
        image = EhexImage.open(workdir / 'legacy.ehex', legacy=True)
        assert image.cell_value(0, 1) == (0, 255, 0, 128)

    def test_paint_bad_value(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'paint', 'sample.ehex', '--x', '0', '--y', '0', '--value', '16')
        assert 'out of range' in capsys.readouterr().err

    def test_paint_needs_coordinates(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'paint', 'sample.ehex', '--value', '3')
        assert '--x and --y' in capsys.readouterr().err

    def test_resize(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'resize', 'sample.ehex', '--width', '200', '--height', '4', '--json')
        parsed = json.loads(capsys.readouterr().out)
        assert parsed['commands']['resize']['to'] == '150x4'
        assert parsed['commands']['resize']['clamped'] is True
        image = EhexImage.open(workdir / 'sample.ehex')
        assert (image.width, image.height) == (150, 4)
        assert image.cell_value(3, 3) == 6

    def test_resize_zero_reported(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'resize', 'sample.ehex', '--width', '0')
        assert exc.value.code == 1
        assert 'at least 1x1' in capsys.readouterr().err
        image = EhexImage.open(workdir / 'sample.ehex')
        assert (image.width, image.height) == (8, 8)


class TestConversion:
    def test_convert(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'convert', 'legacy.ehex')
        image = EhexImage.open(workdir / 'legacy_v2.ehex')
        assert image.format == 'v2'
        assert [image.cell_value(x, y) for y in range(2) for x in range(2)] == [5, 5, 0, 15]

    def test_export_and_import(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'export', 'sample.ehex', '--scale', '2')
        with Image.open(workdir / 'sample.png') as png:
            assert png.size == (16, 16)
            assert png.mode == 'L'
        _run(monkeypatch, 'import', 'sample.png', '--out', 'back.ehex')
        image = EhexImage.open(workdir / 'back.ehex')
        assert (image.width, image.height) == (16, 16)
        assert image.cell_value(15, 15) == 14

    def test_import_v1(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        Image.new('RGBA', (3, 2), (1, 2, 3, 4)).save(workdir / 'tiny.png')
        _run(monkeypatch, 'import', 'tiny.png', '--format', 'v1')
        image = EhexImage.open(workdir / 'tiny.ehex', legacy=True)
        assert image.cell_value(2, 1) == (1, 2, 3, 4)

    def test_import_v1_clamped(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        Image.new('RGBA', (1200, 200), (1, 2, 3, 4)).save(workdir / 'wide.png')
        _run(monkeypatch, 'import', 'wide.png', '--format', 'v1')
        image = EhexImage.open(workdir / 'wide.ehex', legacy=True)
        assert (image.width, image.height) == (150, 25)
        assert image.cell_value(149, 24) == (1, 2, 3, 4)


class TestHelp:
    def test_help_topic(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'help', 'convert')
        assert 'round((r + g + b) / 3 / 255 * 15)' in capsys.readouterr().out

    def test_help_list(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'help')
        out = capsys.readouterr().out
        for name in EXPECTED_COMMANDS:
            assert name in out

    def test_format_reference(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        _run(monkeypatch, 'format')
        out = capsys.readouterr().out
        assert 'EHEX2' in out
        assert 'PIXELS:' in out

    def test_no_command(self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch)
        assert exc.value.code == 1
