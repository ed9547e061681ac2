"""
Process-level tests for TypeScriptCompiler.

These tests start a real process: a small Python script standing in for tsc.
"""

import sys
import tempfile
import textwrap
import time
from unittest.mock import patch

import pytest

from tscompile.build.compiler import TypeScriptCompiler
from tscompile.build.compiler_options import CompilerOptions
from tscompile.packages.executable_resolver import ExecutableResolver

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="fake compiler relies on a shebang script"
)

FAKE_TSC = textwrap.dedent(
    """\
    #!{python}
    import os
    import sys
    import time
    from pathlib import Path

    args = sys.argv[1:]
    source = Path(args[0])
    out_dir = Path(args[args.index("--outDir") + 1])
    mode = os.environ.get("FAKE_TSC_MODE", "ok")

    if mode == "hang":
        time.sleep(60)
    elif mode == "fail":
        sys.stderr.write(f"{{source.name}}(1,1): error TS1005: ';' expected.\\n")
        sys.exit(2)
    else:
        js = out_dir / (source.stem + ".js")
        js.write_text("// file=" + os.environ["file"] + "\\n", encoding="utf-8")
        if "--sourceMap" in args:
            Path(str(js) + ".map").write_text('{{"file":"' + js.name + '"}}', encoding="utf-8")
    """
)


@pytest.fixture
def fake_tsc(tmp_path):
    """Write an executable fake tsc script."""
    script = tmp_path / "bin" / "tsc"
    script.parent.mkdir()
    script.write_text(FAKE_TSC.format(python=sys.executable), encoding="utf-8")
    script.chmod(0o755)
    return script


@pytest.fixture
def temp_dir(tmp_path):
    temp = tmp_path / "temp"
    temp.mkdir()
    with patch.object(tempfile, "gettempdir", return_value=str(temp)):
        yield temp


@pytest.fixture
def source_file(tmp_path):
    source = tmp_path / "src" / "main.ts"
    source.parent.mkdir()
    source.write_text("let answer: number = 42;\n", encoding="utf-8")
    return source


def make_compiler(fake_tsc, timeout=10.0, **option_kwargs):
    return TypeScriptCompiler(
        options=CompilerOptions(**option_kwargs),
        timeout=timeout,
        executable_resolver=ExecutableResolver(str(fake_tsc)),
    )


class TestCompilerProcess:
    """Test suite running the fake compiler as a real process."""

    def test_compile_temp_mode(self, fake_tsc, temp_dir, source_file):
        """Test output is produced, returned and cleaned up."""
        compiler = make_compiler(fake_tsc)

        result = compiler.compile(source_file)

        assert result.success is True
        assert result.exit_code == 0
        assert result.source == f"// file={source_file}\n"
        assert list(temp_dir.iterdir()) == []

    def test_compile_temp_mode_with_source_map(self, fake_tsc, temp_dir, source_file):
        """Test the staged copy is compiled and then removed."""
        compiler = make_compiler(fake_tsc, source_map=True)

        result = compiler.compile(source_file)

        assert result.source == f"// file={temp_dir / 'main.ts'}\n"
        assert result.source_map == '{"file":"main.js"}'
        assert list(temp_dir.iterdir()) == []
        assert source_file.exists()

    def test_compile_save_to_disk(self, fake_tsc, temp_dir, source_file):
        """Test output is left next to the input."""
        compiler = make_compiler(fake_tsc, save_to_disk=True, source_map=True)

        result = compiler.compile(source_file)

        assert (source_file.parent / "main.js").exists()
        assert (source_file.parent / "main.js.map").exists()
        assert result.source == f"// file={source_file}\n"
        assert result.source_map == '{"file":"main.js"}'

    def test_compile_failure(self, fake_tsc, temp_dir, source_file, monkeypatch):
        """Test compiler errors are returned, not raised."""
        monkeypatch.setenv("FAKE_TSC_MODE", "fail")
        compiler = make_compiler(fake_tsc)

        result = compiler.compile(source_file)

        assert result.success is False
        assert result.exit_code == 2
        assert "main.ts(1,1): error TS1005" in result.error

    def test_compile_timeout(self, fake_tsc, temp_dir, source_file, monkeypatch):
        """Test a hanging compiler is killed after the timeout."""
        monkeypatch.setenv("FAKE_TSC_MODE", "hang")
        compiler = make_compiler(fake_tsc, timeout=1.0)

        start = time.time()
        result = compiler.compile(source_file)
        elapsed = time.time() - start

        assert elapsed < 30
        assert result.timed_out is True
        assert result.exit_code == TypeScriptCompiler.TIMEOUT_EXIT_CODE
        assert result.error is not None
        assert result.source is None
