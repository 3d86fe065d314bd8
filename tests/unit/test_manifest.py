from tokensync.manifest.check import COMPONENT_FILES, check_structure


def _make_component(root, name, files=COMPONENT_FILES):
    component = root / "components" / name
    component.mkdir(parents=True)
    for file_name in files:
        (component / file_name).touch()


def test_check_structure_pass(tmp_path):
    pkg = tmp_path / "tokensync"
    pkg.mkdir()

    # Valid Structure
    for name in ["adapters", "components", "rules"]:
        d = pkg / name
        d.mkdir()
        (d / "__init__.py").touch()
    _make_component(pkg, "palette")

    errors = check_structure(pkg)
    assert len(errors) == 0


def test_check_structure_fail(tmp_path):
    pkg = tmp_path / "tokensync"
    pkg.mkdir()

    # 1. Illegal dir
    (pkg / "utils").mkdir()  # 'utils' not allowed root

    # 2. Missing init
    (pkg / "adapters").mkdir()  # missing __init__

    # 3. Root file
    (pkg / "script.py").touch()

    errors = check_structure(pkg)
    assert len(errors) >= 3
    assert any("Illegal dir" in e and "utils" in e for e in errors)
    assert any("Missing __init__" in e and "adapters" in e for e in errors)
    assert any("Illegal file" in e and "script.py" in e for e in errors)


def test_component_missing_files(tmp_path):
    pkg = tmp_path / "tokensync"
    (pkg / "components").mkdir(parents=True)
    (pkg / "components" / "__init__.py").touch()
    _make_component(pkg, "reconcile", files=("__init__.py", "_impl.py"))

    errors = check_structure(pkg)
    assert "Component 'reconcile' missing component.py" in errors
    assert "Component 'reconcile' missing ports.py" in errors


def test_missing_root(tmp_path):
    errors = check_structure(tmp_path / "absent")
    assert errors == [f"{tmp_path / 'absent'} directory not found!"]
