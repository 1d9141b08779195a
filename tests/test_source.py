import logging
from pathlib import Path

import pytest

import glgen

PAYLOAD = b"<registry/>"


@pytest.fixture
def fake_fetch(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    calls: list[int] = []

    def _fetch(*args: object, **kwargs: object) -> bytes:
        calls.append(1)
        return PAYLOAD

    monkeypatch.setattr(glgen, "fetch_registry", _fetch)
    return calls


def test_explicit_file_is_read_directly(
    fixture_gl_xml: Path, fake_fetch: list[int], tmp_path: Path
) -> None:
    source = glgen.load_registry(fixture_gl_xml, cache_dir=tmp_path / "cache")

    assert source.data == fixture_gl_xml.read_bytes()
    assert source.label == str(fixture_gl_xml)
    assert fake_fetch == []
    assert not (tmp_path / "cache").exists()


def test_missing_explicit_file_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        glgen.load_registry(tmp_path / "nope.xml")


def test_download_populates_cache(fake_fetch: list[int], tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"

    source = glgen.load_registry(None, cache_dir=cache_dir)

    assert source == glgen.RegistrySource(PAYLOAD, glgen.REGISTRY_URL)
    assert (cache_dir / glgen.CACHE_FILE_NAME).read_bytes() == PAYLOAD
    assert fake_fetch == [1]


def test_cache_hit_skips_download(
    fake_fetch: list[int], tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    cached = cache_dir / glgen.CACHE_FILE_NAME
    cached.write_bytes(b"<registry><comment/></registry>")

    with caplog.at_level(logging.INFO, logger="glgen"):
        source = glgen.load_registry(None, cache_dir=cache_dir)

    assert source == glgen.RegistrySource(cached.read_bytes(), str(cached))
    assert fake_fetch == []
    assert "Using cached registry file" in caplog.text
    assert "--force-update" in caplog.text


def test_force_update_refreshes_cache(fake_fetch: list[int], tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    cached = cache_dir / glgen.CACHE_FILE_NAME
    cached.write_bytes(b"stale")

    source = glgen.load_registry(None, force_update=True, cache_dir=cache_dir)

    assert source.data == PAYLOAD
    assert cached.read_bytes() == PAYLOAD
    assert fake_fetch == [1]


def test_unusable_cache_dir_downloads_without_caching(
    fake_fetch: list[int], tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="glgen"):
        source = glgen.load_registry(None, cache_dir=blocker / "cache")

    assert source == glgen.RegistrySource(PAYLOAD, glgen.REGISTRY_URL)
    assert fake_fetch == [1]
    assert "Cannot create cache directory" in caplog.text


def test_registry_cache_dir_honours_xdg(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

    assert glgen.registry_cache_dir() == tmp_path / glgen.CACHE_DIR_NAME


def test_registry_cache_dir_defaults_to_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert glgen.registry_cache_dir() == tmp_path / ".cache" / glgen.CACHE_DIR_NAME


def test_fetch_registry_reads_response(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    class FakeResponse:
        def __enter__(self) -> "FakeResponse":
            return self

        def __exit__(self, *exc: object) -> None:
            seen["closed"] = True

        def read(self) -> bytes:
            return PAYLOAD

    def fake_urlopen(url: str, timeout: float) -> FakeResponse:
        seen["url"] = url
        seen["timeout"] = timeout
        return FakeResponse()

    monkeypatch.setattr(glgen.urllib.request, "urlopen", fake_urlopen)

    assert glgen.fetch_registry(timeout=5.0) == PAYLOAD
    assert seen == {"url": glgen.REGISTRY_URL, "timeout": 5.0, "closed": True}
