from __future__ import annotations

from pathlib import Path
import subprocess
import sys


EXPECTED_FILES = {
    "CacheGroupViewWalker.java",
    "CacheViewWalker.java",
    "ServiceViewWalker.java",
    "ComputeTaskViewWalker.java",
    "ClientConnectionViewWalker.java",
}
WALKER_PACKAGE_PATH = Path(
    "org", "apache", "ignite", "internal", "managers", "systemview", "walker"
)


def _tool_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _fixture_views_xml() -> Path:
    return _tool_root() / "tests" / "fixtures" / "views_minimal.xml"


def _run(args: list[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    run_cwd = _tool_root() if cwd is None else cwd
    return subprocess.run(
        [sys.executable, str(_tool_root() / "walker_gen.py"), *args],
        cwd=run_cwd,
        capture_output=True,
        text=True,
        check=False,
    )


def test_t_01_generate_writes_every_configured_walker(tmp_path: Path) -> None:
    src_root = tmp_path / "java"

    result = _run(["--src-root", str(src_root)])

    assert result.returncode == 0, result.stdout + result.stderr
    assert "System view walkers generated:" in result.stdout
    assert "Total: 5 walkers" in result.stdout
    assert {p.name for p in (src_root / WALKER_PACKAGE_PATH).glob("*.java")} == (
        EXPECTED_FILES
    )


def test_t_02_default_src_root_is_relative_to_working_directory(tmp_path: Path) -> None:
    result = _run([], cwd=tmp_path)

    assert result.returncode == 0, result.stdout + result.stderr
    walker_dir = tmp_path / "modules" / "core" / "src" / "main" / "java" / WALKER_PACKAGE_PATH
    assert {p.name for p in walker_dir.glob("*.java")} == EXPECTED_FILES


def test_t_03_second_run_is_byte_identical(tmp_path: Path) -> None:
    src_root = tmp_path / "java"
    _run(["--src-root", str(src_root)])
    first = {p.name: p.read_bytes() for p in (src_root / WALKER_PACKAGE_PATH).iterdir()}

    result = _run(["--src-root", str(src_root)])
    second = {p.name: p.read_bytes() for p in (src_root / WALKER_PACKAGE_PATH).iterdir()}

    assert result.returncode == 0
    assert first == second
    assert "(5 unchanged)" in result.stdout


def test_t_04_check_fails_on_stale_walker_and_passes_after_regeneration(
    tmp_path: Path,
) -> None:
    src_root = tmp_path / "java"
    _run(["--src-root", str(src_root)])
    stale = src_root / WALKER_PACKAGE_PATH / "CacheViewWalker.java"
    stale.write_text("// stale\n", encoding="utf-8")

    failed = _run(["--check", "--src-root", str(src_root)])

    assert failed.returncode == 1
    assert "Out of date: CacheViewWalker.java" in failed.stdout
    assert stale.read_text(encoding="utf-8") == "// stale\n"

    _run(["--src-root", str(src_root)])
    passed = _run(["--check", "--src-root", str(src_root)])

    assert passed.returncode == 0
    assert "System view walkers checked:" in passed.stdout


def test_t_05_list_views_prints_registry_table(tmp_path: Path) -> None:
    result = _run(["--list-views"])

    assert result.returncode == 0
    assert result.stdout.startswith("System views in views.xml 2.8.0:")
    assert "5 configured for generation" in result.stdout


def test_t_06_info_prints_attribute_table() -> None:
    result = _run(["--info", "ClientConnectionView"])

    assert result.returncode == 0
    assert "org.apache.ignite.spi.systemview.view.ClientConnectionView" in result.stdout
    assert "connectionId" in result.stdout
    assert "acceptLong" in result.stdout
    assert "toString" not in result.stdout


def test_t_07_info_unknown_view_exits_1() -> None:
    result = _run(["--info", "NoSuchView", "--views-xml", str(_fixture_views_xml())])

    assert result.returncode == 1
    assert "not found" in result.stderr


def test_t_08_missing_configured_view_fails_with_view_and_step(tmp_path: Path) -> None:
    src_root = tmp_path / "java"

    result = _run(["--views-xml", str(_fixture_views_xml()), "--src-root", str(src_root)])

    assert result.returncode == 1
    assert "Error: org.apache.ignite.spi.systemview.view.CacheGroupView: lookup failed" in (
        result.stdout
    )
    assert not src_root.exists()


def test_t_09_config_error_prints_code_and_hint(tmp_path: Path) -> None:
    result = _run(["--views-xml", str(tmp_path / "missing.xml")])

    assert result.returncode == 1
    assert "Config error [PATH_NOT_FOUND]" in result.stdout
    assert "Hint:" in result.stdout


def test_t_10_argparse_usage_error_exits_2() -> None:
    result = _run(["--list-views", "--info", "CacheView"])

    assert result.returncode == 2


def test_t_11_non_utf8_walker_is_stale_then_regenerated(tmp_path: Path) -> None:
    src_root = tmp_path / "java"
    _run(["--src-root", str(src_root)])
    edited = src_root / WALKER_PACKAGE_PATH / "ServiceViewWalker.java"
    edited.write_bytes(b"// caf\xe9 latin-1\n")

    checked = _run(["--check", "--src-root", str(src_root)])

    assert checked.returncode == 1
    assert "Traceback" not in checked.stderr
    assert "Out of date: ServiceViewWalker.java" in checked.stdout

    regenerated = _run(["--src-root", str(src_root)])

    assert regenerated.returncode == 0, regenerated.stdout + regenerated.stderr
    assert edited.read_bytes().startswith(b"/*\n * Licensed to the Apache")


def test_t_12_info_shared_simple_name_lists_candidates(tmp_path: Path) -> None:
    views_xml = tmp_path / "views.xml"
    views_xml.write_text(
        '<registry version="1.0.0">'
        '<view class="b.NodeView" /><view class="a.NodeView" />'
        "</registry>\n",
        encoding="utf-8",
    )

    result = _run(["--info", "NodeView", "--views-xml", str(views_xml)])

    assert result.returncode == 1
    assert "use one of: a.NodeView, b.NodeView" in result.stderr
