"""
Tests for the bash_bundler command line.
"""
import os
import shutil
import subprocess

import pytest

from bash_bundler import main
from bundling import __version__, log

FIXTURES = os.path.join(os.path.dirname(__file__), 'fixtures')

BUNDLED_ONE = '''yell() {
    echo "$1 !!!" | tr '[:lower:]' '[:upper:]'
}
print() {
    echo "$1"
}
yell "hallo"
print "hallo"
'''

BUNDLED_SOURCE = '''yell() {
    echo "$1 !!!" | tr '[:lower:]' '[:upper:]'
}
print() {
    echo "$1"
}

this_is_from_sourced_file() {
    yell "$1 !!!!!!"
}

yell "hallo"
print "hallo"
'''


def call_shell(script):
    return subprocess.run(['sh', '-c', script], capture_output=True, text=True).stdout


class TestCli:
    """End to end runs of main()."""

    def test_comment(self, capsys):
        assert main([os.path.join(FIXTURES, 'one.sh')]) == 0
        assert capsys.readouterr().out == BUNDLED_ONE

    def test_comment_disabled(self, capsys):
        assert main([os.path.join(FIXTURES, 'one.sh'), '--disable-comment']) == 0

        assert capsys.readouterr().out == (
            '# import ./bash/one_utils.sh\n'
            '# import ./bash/one_more_utils.sh\n'
            'yell "hallo"\n'
            'print "hallo"\n'
        )

    def test_source(self, capsys):
        assert main([os.path.join(FIXTURES, 'source.sh'), '--enable-source']) == 0
        assert capsys.readouterr().out == BUNDLED_SOURCE

    def test_source_disabled(self, capsys):
        assert main([os.path.join(FIXTURES, 'source.sh')]) == 0

        assert capsys.readouterr().out == (
            'source ./bash/source_utils.sh\n'
            '\n'
            'yell "hallo"\n'
            'print "hallo"\n'
        )

    def test_config(self, capsys, monkeypatch):
        monkeypatch.chdir(FIXTURES)

        assert main(['--config', 'config.toml']) == 0
        assert capsys.readouterr().out == BUNDLED_SOURCE

    def test_flags_override_config(self, capsys, monkeypatch):
        monkeypatch.chdir(FIXTURES)

        assert main(['one.sh', '-c', 'config.toml']) == 0
        # config.toml disables `# import`, so one.sh stays as written
        assert capsys.readouterr().out.startswith('# import ./bash/one_utils.sh\n')

    def test_output_file(self, tmp_path, capsys):
        target = tmp_path / 'bundle.sh'

        assert main([os.path.join(FIXTURES, 'one.sh'), '-o', str(target)]) == 0

        assert target.read_text() == BUNDLED_ONE
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'Bundle written to' in captured.err

    def test_output_ends_with_newline(self, script_tree, capsys):
        root = script_tree({'main.sh': 'echo "no newline"'})

        assert main([str(root / 'main.sh')]) == 0
        assert capsys.readouterr().out == 'echo "no newline"\n'

    def test_circular(self, capsys):
        assert main([os.path.join(FIXTURES, 'circular.sh')]) == 1

        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'Circular import found' in captured.err

    def test_missing_root(self, tmp_path, capsys):
        assert main([str(tmp_path / 'nope.sh')]) == 1
        assert 'Cannot read file' in capsys.readouterr().err

    def test_max_depth_flag(self, capsys):
        assert main([os.path.join(FIXTURES, 'source.sh'), '--enable-source', '--max-depth', '1']) == 1
        assert 'Nesting deeper than 1' in capsys.readouterr().err

    def test_file_or_config_required(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code != 0

    def test_config_without_root_path(self, tmp_path, capsys):
        config = tmp_path / 'bundler.toml'
        config.write_text('[bundler]\nreplace_source = true\n')

        assert main(['-c', str(config)]) == 2
        assert 'no root_path given' in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        config = tmp_path / 'bundler.toml'
        config.write_text('[bundler]\nreplace_source = 3.5\n')

        assert main(['-c', str(config), os.path.join(FIXTURES, 'one.sh')]) == 2
        assert 'Invalid configuration' in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_logs_to_stderr(self, capsys, monkeypatch):
        monkeypatch.setattr(log, '_VERBOSE', False)

        assert main([os.path.join(FIXTURES, 'one.sh'), '--verbose']) == 0

        captured = capsys.readouterr()
        assert captured.out == BUNDLED_ONE
        assert 'DEBUG:' in captured.err
        assert 'one_utils.sh' in captured.err


@pytest.mark.skipif(shutil.which('sh') is None, reason="needs a POSIX shell")
class TestBundledScriptRuns:
    """The bundle must be a working shell script."""

    def test_comment_bundle(self, capsys):
        main([os.path.join(FIXTURES, 'one.sh')])
        assert call_shell(capsys.readouterr().out) == "HALLO !!!\nhallo\n"

    def test_source_bundle(self, capsys):
        main([os.path.join(FIXTURES, 'source.sh'), '--enable-source'])
        assert call_shell(capsys.readouterr().out) == "HALLO !!!\nhallo\n"
