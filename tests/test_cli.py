"""Тесты командной строки occ."""

import pytest

from occ.cli import main
from tests.infrastructure import run_cli, write


class TestEval:

    def test_eval_prints_result_with_newline(self, workdir, capsys):
        assert main(["-e", "{join '-' 'a' 'b'}"]) == 0
        assert capsys.readouterr().out == "a-b\n"

    def test_var_flags(self, workdir, capsys):
        assert main(["-e", "{greeting}, {name}", "--var", "greeting=Hi", "--var", "name=a=b"]) == 0
        assert capsys.readouterr().out == "Hi, a=b\n"

    def test_seed_makes_output_repeatable(self, workdir, capsys):
        main(["-e", "{randomNumber} {randomNumber}", "--seed", "11"])
        first = capsys.readouterr().out
        main(["-e", "{randomNumber} {randomNumber}", "--seed", "11"])

        assert capsys.readouterr().out == first


class TestFile:

    def test_file_is_written_verbatim(self, workdir, capsys):
        write(workdir / "page.occ", "Hello {name}\n{!note}", dedent=False)

        assert main(["page.occ", "--var", "name=World"]) == 0
        assert capsys.readouterr().out == "Hello World\n"

    def test_missing_file(self, workdir, capsys):
        assert main(["nope.occ"]) == 2
        assert "nope.occ" in capsys.readouterr().err


class TestConfig:

    def test_occ_yaml_from_cwd(self, workdir, capsys):
        write(workdir / "occ.yaml", """
            variables:
              name: Config
        """)

        assert main(["-e", "{name}"]) == 0
        assert capsys.readouterr().out == "Config\n"

    def test_flags_override_config(self, workdir, capsys):
        write(workdir / "occ.yaml", """
            seed: 1
            variables:
              name: Config
        """)

        assert main(["-e", "{name}", "--var", "name=Flag"]) == 0
        assert capsys.readouterr().out == "Flag\n"

    def test_explicit_config_path(self, workdir, capsys):
        write(workdir / "settings" / "dev.yaml", """
            variables:
              env: dev
        """)

        assert main(["-e", "{env}", "--config", "settings/dev.yaml"]) == 0
        assert capsys.readouterr().out == "dev\n"

    def test_invalid_config(self, workdir, capsys):
        write(workdir / "occ.yaml", "timeout: soon\n")

        assert main(["-e", "x"]) == 2
        assert "occ.yaml.timeout" in capsys.readouterr().err


class TestErrors:

    def test_syntax_error_shows_trace(self, workdir, capsys):
        assert main(["-e", "{}"]) == 2

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Expression expected\n{}\n ^\n"

    def test_undefined_tag(self, workdir, capsys):
        assert main(["-e", "{missing}"]) == 2
        assert "missing is not defined" in capsys.readouterr().err

    def test_builtin_argument_error(self, workdir, capsys):
        assert main(["-e", "{random}"]) == 2
        assert "Must provide arguments" in capsys.readouterr().err

    def test_excessive_nesting(self, workdir, capsys):
        depth = 2000
        source = "{f " * depth + "'a'" + "}" * depth

        assert main(["-e", source]) == 2
        assert capsys.readouterr().err.startswith("Nesting too deep\n")

    def test_bad_var_format(self, workdir, capsys):
        assert main(["-e", "x", "--var", "novalue"]) == 2
        assert "name=value" in capsys.readouterr().err

    def test_version(self, workdir, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])

        assert exc.value.code == 0
        assert capsys.readouterr().out.startswith("occ ")


class TestSubprocess:

    def test_module_entry_point(self, workdir):
        cp = run_cli(workdir, "-e", "{x=`hi`}{x}")

        assert cp.returncode == 0, cp.stderr
        assert cp.stdout == "hi\n"

    def test_repl_without_arguments(self, workdir):
        cp = run_cli(workdir, stdin="{x='a'}{x}\n{x}{x}\n.exit\n")

        assert cp.returncode == 0, cp.stderr
        assert cp.stdout.splitlines()[:2] == ["> a", "> aa"]

    def test_verbose_logs_to_stderr(self, workdir):
        cp = run_cli(workdir, "-e", "ok", "--verbose")

        assert cp.returncode == 0
        assert cp.stdout == "ok\n"
        assert "[DEBUG]" in cp.stderr
