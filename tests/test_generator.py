import plistlib
from pathlib import Path
from types import SimpleNamespace

import pytest

from applinks_entitlements.entitlements import (
    ASSOCIATED_DOMAINS,
    EntitlementsGenerator,
    generate_associated_domains_entitlements,
)
from applinks_entitlements.types import Host, PluginPreferences


def _ios_dir(root: Path, name: str = "MyApp") -> Path:
    return root / "platforms" / "ios" / name


def _read(path: Path) -> dict:
    return plistlib.loads(path.read_bytes())


def test_paths_are_computed_at_construction(tmp_path) -> None:
    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    assert gen.debug_path == str(_ios_dir(tmp_path) / "Entitlements-Debug.plist")
    assert gen.release_path == str(_ios_dir(tmp_path) / "Entitlements-Release.plist")


def test_generate_creates_missing_dirs_and_files(tmp_path) -> None:
    EntitlementsGenerator(str(tmp_path), "MyApp").generate([{"name": "a.com"}, {"name": "b.com"}])

    for fname in ("Entitlements-Debug.plist", "Entitlements-Release.plist"):
        doc = _read(_ios_dir(tmp_path) / fname)
        assert doc == {ASSOCIATED_DOMAINS: ["applinks:a.com", "applinks:b.com"]}


def test_generate_preserves_other_keys_per_file(tmp_path) -> None:
    ios = _ios_dir(tmp_path)
    ios.mkdir(parents=True)
    (ios / "Entitlements-Debug.plist").write_bytes(
        plistlib.dumps({"other-key": "value", ASSOCIATED_DOMAINS: ["applinks:stale.com"]})
    )
    (ios / "Entitlements-Release.plist").write_bytes(
        plistlib.dumps({"aps-environment": "production"}, fmt=plistlib.FMT_BINARY)
    )

    EntitlementsGenerator(str(tmp_path), "MyApp").generate([Host(name="x.com")])

    assert _read(ios / "Entitlements-Debug.plist") == {
        "other-key": "value",
        ASSOCIATED_DOMAINS: ["applinks:x.com"],
    }
    assert _read(ios / "Entitlements-Release.plist") == {
        "aps-environment": "production",
        ASSOCIATED_DOMAINS: ["applinks:x.com"],
    }


def test_generate_is_idempotent(tmp_path) -> None:
    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    hosts = [{"name": "a.com"}, {"name": "a.com"}]

    gen.generate(hosts)
    first = Path(gen.debug_path).read_bytes()
    gen.generate(hosts)
    second = Path(gen.debug_path).read_bytes()

    assert first == second
    assert _read(Path(gen.debug_path))[ASSOCIATED_DOMAINS] == ["applinks:a.com"]


def test_generate_empty_hosts_writes_empty_list(tmp_path) -> None:
    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    gen.generate([])
    assert _read(Path(gen.release_path)) == {ASSOCIATED_DOMAINS: []}


def test_generate_writes_utf8_xml(tmp_path) -> None:
    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    gen.generate([{"name": "bücher.example"}])
    text = Path(gen.debug_path).read_text(encoding="utf-8")
    assert text.startswith("<?xml")
    assert "applinks:bücher.example" in text


def test_malformed_file_is_replaced_with_warning(tmp_path, capsys) -> None:
    ios = _ios_dir(tmp_path)
    ios.mkdir(parents=True)
    (ios / "Entitlements-Debug.plist").write_text("<plist><dict><key>broken", encoding="utf-8")

    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    gen.generate([{"name": "a.com"}])

    assert _read(Path(gen.debug_path)) == {ASSOCIATED_DOMAINS: ["applinks:a.com"]}
    assert "Entitlements-Debug.plist" in capsys.readouterr().err


def test_malformed_file_aborts_in_strict_mode(tmp_path) -> None:
    ios = _ios_dir(tmp_path)
    ios.mkdir(parents=True)
    broken = ios / "Entitlements-Release.plist"
    broken.write_text("not a plist", encoding="utf-8")

    gen = EntitlementsGenerator(str(tmp_path), "MyApp", strict=True)
    with pytest.raises(SystemExit) as e:
        gen.generate([{"name": "a.com"}])

    assert "invalid entitlements plist" in str(e.value)
    assert broken.read_text(encoding="utf-8") == "not a plist"
    assert not Path(gen.debug_path).exists()


def test_write_failure_propagates(tmp_path) -> None:
    # `platforms` is a file, so the directory tree cannot be created.
    (tmp_path / "platforms").write_text("", encoding="utf-8")
    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    with pytest.raises(OSError):
        gen.generate([{"name": "a.com"}])


def test_render_does_not_touch_disk(tmp_path) -> None:
    gen = EntitlementsGenerator(str(tmp_path), "MyApp")
    out = gen.render([{"name": "a.com"}])
    assert set(out) == {gen.debug_path, gen.release_path}
    assert out[gen.debug_path] == {ASSOCIATED_DOMAINS: ["applinks:a.com"]}
    assert not (tmp_path / "platforms").exists()


def test_hook_entry_reads_project_name_from_config(tmp_path) -> None:
    (tmp_path / "config.xml").write_text(
        '<?xml version="1.0"?>\n'
        '<widget xmlns="http://www.w3.org/ns/widgets" id="com.example.app">\n'
        "  <name>Demo App</name>\n"
        "</widget>\n",
        encoding="utf-8",
    )
    context = SimpleNamespace(opts=SimpleNamespace(projectRoot=str(tmp_path)))
    prefs = PluginPreferences(hosts=(Host(name="demo.example.com"),))

    generate_associated_domains_entitlements(context, prefs)

    doc = _read(_ios_dir(tmp_path, "Demo App") / "Entitlements-Release.plist")
    assert doc == {ASSOCIATED_DOMAINS: ["applinks:demo.example.com"]}


def test_verbose_lines_share_tool_prefix(tmp_path, capsys) -> None:
    gen = EntitlementsGenerator(str(tmp_path), "MyApp", verbose=True)
    gen.generate([{"name": "a.com"}])
    out = capsys.readouterr().out
    assert f"[applinks-entitlements] Wrote {gen.debug_path}" in out
    assert f"[applinks-entitlements] Wrote {gen.release_path}" in out
