import argparse
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

GENERATOR_DIR = Path(__file__).resolve().parent.parent
if str(GENERATOR_DIR) not in sys.path:
    sys.path.insert(0, str(GENERATOR_DIR))

import glgen  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

SCENARIO_XML = """
<registry>
    <enums namespace="GL">
        <enum value="0x0001" name="A"/>
        <enum value="0x0002" name="B"/>
    </enums>
    <commands namespace="GL">
        <command><proto>void <name>F</name></proto></command>
    </commands>
    <feature api="gl" name="GL_VERSION_1_0" number="1.0">
        <require>
            <enum name="A"/>
            <command name="F"/>
        </require>
    </feature>
    <feature api="gl" name="GL_VERSION_2_0" number="2.0">
        <require>
            <enum name="B"/>
        </require>
        <remove profile="core">
            <enum name="A"/>
        </remove>
    </feature>
</registry>
"""


@pytest.fixture
def fixture_gl_xml() -> Path:
    return FIXTURES_DIR / "gl_minimal.xml"


@pytest.fixture
def existing_paths(tmp_path: Path, fixture_gl_xml: Path) -> dict[str, Path]:
    gl_xml = tmp_path / "gl.xml"
    gl_xml.write_bytes(fixture_gl_xml.read_bytes())
    return {"gl_xml": gl_xml, "output_dir": tmp_path / "out"}


@pytest.fixture
def make_args(existing_paths: dict[str, Path]) -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "gl": None,
            "gles": None,
            "profile": None,
            "core": False,
            "package": None,
            "output_dir": existing_paths["output_dir"],
            "gl_xml": existing_paths["gl_xml"],
            "force_update": False,
            "verbose": False,
            "list_features": False,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args


@pytest.fixture
def make_registry_xml() -> Callable[[str], bytes]:
    def _make_registry_xml(inner_xml: str) -> bytes:
        return f"<registry>{inner_xml}</registry>".encode("utf-8")

    return _make_registry_xml


@pytest.fixture
def scenario_xml() -> bytes:
    return SCENARIO_XML.encode("utf-8")


@pytest.fixture
def make_target() -> Callable[..., glgen.TargetConfig]:
    def _make_target(
        version: str = "1.0",
        *,
        api: str = "gl",
        profile: str = "",
        core_profile: bool = False,
    ) -> glgen.TargetConfig:
        parsed = glgen.parse_gl_version(version)
        return glgen.TargetConfig(
            api=api,
            version=parsed,
            profile=profile,
            core_profile=core_profile,
            package_label="gl",
            profile_tag=glgen.format_profile_tag(api, parsed, profile, core_profile),
        )

    return _make_target
