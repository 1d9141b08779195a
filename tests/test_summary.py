from pathlib import Path

import pytest

import glgen


def _surface(api: str, tag: str, n_typedefs: int, n_enums: int, n_cmds: int) -> glgen.ResolvedSurface:
    void = glgen.TypeDescriptor("void")
    return glgen.ResolvedSurface(
        api=api,
        version=glgen.GLVersion(3, 1),
        profile_tag=tag,
        package_label="gl",
        typedefs=tuple(f"typedef int T{i};" for i in range(n_typedefs)),
        enums=tuple(glgen.EnumEntry(f"GL_E{i}", str(i)) for i in range(n_enums)),
        commands=tuple(glgen.CommandDef(f"glC{i}", void) for i in range(n_cmds)),
    )


def _package(output_dir: Path, *counts: int) -> glgen.PackageWriteResult:
    files = tuple(
        glgen.FileWriteResult(
            filename=f"gl_m{i}.mojo",
            path=output_dir / f"gl_m{i}.mojo",
            line_count=count,
            byte_count=count * 10,
        )
        for i, count in enumerate(counts)
    )
    return glgen.PackageWriteResult(output_dir=output_dir, files=files)


def test_build_generation_summary() -> None:
    surfaces = (_surface("gl", "gl 3.1", 3, 2, 1), _surface("gles2", "", 3, 1, 0))
    packages = (_package(Path("out/gl/gl"), 10), _package(Path("out/gl/gles2"), 5))

    summary = glgen.build_generation_summary("gl", "gl.xml", surfaces, packages)

    assert summary.targets == (
        glgen.TargetCounts("gl 3.1", 3, 2, 1),
        glgen.TargetCounts("gles2 3.1", 3, 1, 0),
    )
    assert summary.packages == packages


def test_build_generation_summary_length_mismatch() -> None:
    with pytest.raises(ValueError):
        glgen.build_generation_summary(
            "gl", "gl.xml", (_surface("gl", "gl 3.1", 0, 0, 0),), ()
        )


def test_format_generation_summary() -> None:
    summary = glgen.GenerationSummary(
        package_label="gl",
        source_label="gl.xml",
        targets=(glgen.TargetCounts("gl 4.6 core", 60, 1200, 650),),
        packages=(_package(Path("out/gl/gl"), 1500, 20),),
    )

    assert glgen.format_generation_summary(summary).splitlines() == [
        "OpenGL bindings generated (gl):",
        "",
        "  Source:     gl.xml",
        "",
        "  Targets:",
        "    gl 4.6 core                     60 typedefs   1200 enums   650 commands",
        "",
        "  Files written:",
        "    gl/gl_m0.mojo                 1,500 lines",
        "    gl/gl_m1.mojo                    20 lines",
        "",
        "  Total: 1,520 lines across 2 files",
        "",
        "  Verify: mojo package out/gl/gl -o /tmp/gl.mojopkg",
    ]


def test_print_generation_summary(capsys: pytest.CaptureFixture[str]) -> None:
    summary = glgen.GenerationSummary("gl", "gl.xml", (), ())

    glgen.print_generation_summary(summary)

    out = capsys.readouterr().out
    assert out.startswith("OpenGL bindings generated (gl):\n")
    assert "  Total: 0 lines across 0 files\n" in out
