#!/usr/bin/env python3
"""Standalone test runner that writes results to a file."""
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

results = []

def log(msg):
    results.append(msg)

def run_all():
    # --- Test 1: pattern imports ---
    try:
        from composer_modifier.core.pattern import compile_pattern, most_specific
        log("PASS: pattern imports")
    except Exception as e:
        log(f"FAIL: pattern imports: {e}")
        return

    # --- Test 2: pattern matching ---
    try:
        p = compile_pattern("foo/*")
        assert p.matches("foo/bar") == True
        assert p.matches("foo/") == True
        assert p.matches("foo") == False
        assert compile_pattern("").matches("") == True
        assert compile_pattern("a.b").matches("axb") == False
        log("PASS: pattern matching")
    except Exception as e:
        log(f"FAIL: pattern matching: {e}")

    # --- Test 3: pattern identity ---
    try:
        assert {compile_pattern("monolog/*"): "x"}[compile_pattern("monolog/*")] == "x"
        literal = compile_pattern("symfony/console")
        assert most_specific([compile_pattern("symfony/*"), literal]) is literal
        log("PASS: pattern identity")
    except Exception as e:
        log(f"FAIL: pattern identity: {e}")

    # --- Test 4: manifest model ---
    try:
        from composer_modifier.models.manifest import Manifest
        m = Manifest.from_dict({"name": "acme/app", "license": "MIT", "x-custom": 1})
        d = m.to_dict()
        assert d == {"name": "acme/app", "license": "MIT", "x-custom": 1}
        assert Manifest.from_dict(d) == m
        log("PASS: manifest model")
    except Exception as e:
        log(f"FAIL: manifest model: {e}")

    # --- Test 5: parse errors ---
    try:
        from composer_modifier.core.errors import DocumentParseError
        from composer_modifier.parsers.composer import load_manifest
        try:
            load_manifest('{"require": {}}', source="composer.json")
            log("FAIL: parse errors: no error raised")
        except DocumentParseError as e:
            assert "error parsing composer.json" in str(e)
            log("PASS: parse errors")
    except Exception as e:
        log(f"FAIL: parse errors: {e}")

    # --- Test 6: directive model ---
    try:
        from composer_modifier.models.directive import ModifyDirective
        d = ModifyDirective.from_dict({"remove": {"require": {"monolog/*": ""}}})
        assert [name for name, _, _ in d.sections()] == ["remove"]
        log("PASS: directive model")
    except Exception as e:
        log(f"FAIL: directive model: {e}")

    # --- Test 7: remove scenario ---
    try:
        from composer_modifier.core.applier import apply_directive, apply_remove_require
        m = Manifest(name="acme/app", require={"monolog/monolog": "^2.0", "psr/log": "^1.0"})
        result = apply_directive(m, d)
        assert result.manifest.require == {"psr/log": "^1.0"}
        assert apply_remove_require(m, {}).require == m.require
        log("PASS: remove scenario")
    except Exception as e:
        log(f"FAIL: remove scenario: {e}")

    # --- Test 8: missing package scenario ---
    try:
        missing = ModifyDirective.from_dict({"remove": {"require": {"acme/missing-pkg": ""}}})
        assert apply_directive(m, missing).manifest.require == m.require
        log("PASS: missing package scenario")
    except Exception as e:
        log(f"FAIL: missing package scenario: {e}")

    # --- Test 9: file exporter ---
    try:
        import asyncio
        import json
        import tempfile
        from pathlib import Path
        from composer_modifier.exporters.file_export import ManifestFileExporter

        async def test_file_export():
            with tempfile.TemporaryDirectory() as tmpdir:
                path = Path(tmpdir) / "composer.json"
                exp = ManifestFileExporter(path=path)
                await exp.export(m)
                await exp.finalize()
                data = json.loads(path.read_text(encoding="utf-8"))
                assert data["name"] == "acme/app"
                return True

        asyncio.run(test_file_export())
        log("PASS: file exporter")
    except Exception as e:
        log(f"FAIL: file exporter: {e}")

    # --- Test 10: settings ---
    try:
        from composer_modifier.core.settings import ModifierSettings
        assert ModifierSettings.from_dict({"indent": 2}).indent == 2
        log("PASS: settings")
    except Exception as e:
        log(f"FAIL: settings: {e}")

    # --- Test 11: Lazy __init__ import ---
    try:
        import composer_modifier
        assert composer_modifier.__version__ == "0.1.0"
        assert composer_modifier.PackagePattern is not None
        log("PASS: composer_modifier.__version__")
    except Exception as e:
        log(f"FAIL: composer_modifier.__version__: {e}")


if __name__ == "__main__":
    run_all()
    output = "\n".join(results)

    outpath = os.path.join(os.path.dirname(__file__), "test_results.txt")
    with open(outpath, "w") as f:
        f.write(output + "\n")
        total = len(results)
        passed = sum(1 for r in results if r.startswith("PASS"))
        failed = total - passed
        f.write(f"\n=== {passed}/{total} passed, {failed} failed ===\n")

    # Also print to stdout
    print(output)
    print(f"\n=== {passed}/{total} passed, {failed} failed ===")

    sys.exit(0 if failed == 0 else 1)
