import argparse
import sys
import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

import pytest

GENERATOR_DIR = Path(__file__).resolve().parent.parent
if str(GENERATOR_DIR) not in sys.path:
    sys.path.insert(0, str(GENERATOR_DIR))

import walker_gen  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

SAMPLE_VIEW = "org.example.views.SampleView"
EMPTY_VIEW = "org.example.views.EmptyView"
PRIMITIVES_VIEW = "org.example.views.PrimitivesView"


@pytest.fixture
def fixture_views_xml() -> Path:
    return FIXTURES_DIR / "views_minimal.xml"


@pytest.fixture
def write_registry(tmp_path: Path) -> Callable[[str], Path]:
    def _write_registry(inner_xml: str, version: str = "1.0.0") -> Path:
        path = tmp_path / "views.xml"
        path.write_text(
            f'<registry version="{version}">{inner_xml}</registry>\n',
            encoding="utf-8",
        )
        return path

    return _write_registry


@pytest.fixture
def make_registry_root() -> Callable[[str], ET.Element]:
    def _make_registry_root(inner_xml: str) -> ET.Element:
        return ET.fromstring(f"<registry>{inner_xml}</registry>")

    return _make_registry_root


@pytest.fixture
def make_args(tmp_path: Path) -> Callable[..., argparse.Namespace]:
    views_xml = tmp_path / "views.xml"
    views_xml.write_text("<registry />\n", encoding="utf-8")

    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "views_xml": views_xml,
            "src_root": tmp_path / "src",
            "check": False,
            "list_views": False,
            "info": None,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args


@pytest.fixture
def make_accessor() -> Callable[..., walker_gen.AccessorDecl]:
    def _make_accessor(
        name: str,
        type_name: str = "int",
        *,
        order: int | None = None,
        is_static: bool = False,
    ) -> walker_gen.AccessorDecl:
        return walker_gen.AccessorDecl(
            name=name, type_name=type_name, order=order, is_static=is_static
        )

    return _make_accessor


@pytest.fixture
def make_view() -> Callable[..., walker_gen.ViewType]:
    def _make_view(
        accessors: list[walker_gen.AccessorDecl],
        name: str = SAMPLE_VIEW,
    ) -> walker_gen.ViewType:
        return walker_gen.ViewType(name=name, accessors=tuple(accessors))

    return _make_view
