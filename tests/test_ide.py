import json

import pytest

from zyn.ide import generate_clion_config, generate_qtcreator_config, generate_vscode_files


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "zyn.toml").write_text(
        '[project]\nname = "app"\nlanguage = "cpp"\nstandard = "c++20"\n'
        'compiler = "clang++"\n\n[directories]\ninclude = "headers"\n'
    )
    return tmp_path


def test_vscode_properties(project):
    result = generate_vscode_files()
    text = (project / ".vscode" / "c_cpp_properties.json").read_text()
    assert result is None
    assert text.startswith('{\n  "configurations": [')
    data = json.loads(text)
    assert data["version"] == 4
    (entry,) = data["configurations"]
    assert entry["compilerPath"] == "clang++"
    assert entry["cppStandard"] == "c++20"
    assert entry["cStandard"] == "c11"
    assert entry["includePath"] == ["headers", ".zyn/build", ".zyn/deps"]
    assert entry["defines"] == []


def test_vscode_c_language_standard(project):
    (project / "zyn.toml").write_text('[project]\nlanguage = "c"\nstandard = "c99"\n')
    result = generate_vscode_files()
    assert result is None
    (entry,) = json.loads((project / ".vscode" / "c_cpp_properties.json").read_text())[
        "configurations"
    ]
    assert entry["cStandard"] == "c99"
    assert entry["cppStandard"] == "c++17"


def test_vscode_tasks_and_launch(project):
    result = generate_vscode_files()
    assert result is None
    tasks = json.loads((project / ".vscode" / "tasks.json").read_text())
    assert tasks["version"] == "2.0.0"
    assert tasks["tasks"][0]["command"] == "zyn run --release"
    assert tasks["tasks"][0]["group"] == {"kind": "build", "isDefault": True}
    launch = json.loads((project / ".vscode" / "launch.json").read_text())
    config = launch["configurations"][0]
    assert config["program"] == "./zyn_build/app"
    assert config["cwd"] == "${workspaceFolder}"
    assert config["setupCommands"][0]["text"] == "-enable-pretty-printing"


def test_clion_config(project):
    result = generate_clion_config()
    assert result is None
    text = (project / ".clion" / "CMakeLists.txt").read_text()
    assert "  include_directories(\n    headers\n    .zyn/build\n    .zyn/deps\n  )" in text
    assert "add_executable(zyn_build src/main.cpp)" in text


def test_qtcreator_config(project):
    result = generate_qtcreator_config()
    assert result is None
    text = (project / ".qtcreator" / "ZynProject.pro").read_text()
    assert "  INCLUDEPATH += headers .zyn/build .zyn/deps\n" in text
    assert "TEMPLATE = app" in text


def test_missing_config_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        generate_qtcreator_config()