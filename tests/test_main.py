"""Tests for wallmesh/main.py: run_export and the CLI."""
import json
import logging
import os

import pytest

from wallmesh import __version__
from wallmesh.config import ExportConfig
from wallmesh import main as main_module
from wallmesh.generators.wall_mesh_generator import ExportStatus, WallMeshResult
from wallmesh.io.obj_exporter import validate_obj_file
from wallmesh.main import main, run_export
from wallmesh.models.mesh import MeshData
from wallmesh.models.wall import WallSpec


ROOM = {"id": "room", "closed": True,
        "points": [[0, 0], [100, 0], [100, 100], [0, 100]]}
SPUR = {"id": "spur", "name": "Spur", "points": [[0, 300], [100, 300]]}


@pytest.fixture
def walls_file(tmp_path):
    path = tmp_path / "walls.json"
    path.write_text(json.dumps({"wallThickness": 0.5, "walls": [ROOM, SPUR]}),
                    encoding='utf-8')
    return str(path)


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# --- run_export ---

def test_run_export_together(tmp_path, square_room):
    far = WallSpec.from_coords([(0, 500), (100, 500)])
    config = ExportConfig(scenario_name="level", output_dir=str(tmp_path))
    run = run_export([far, square_room], config)

    assert run.success
    assert run.status == ExportStatus.OK
    assert run.output_files == [os.path.join(str(tmp_path), "level.obj")]
    assert run.stats.walls_loaded == 2
    assert run.stats.walls_exported == 2
    assert run.stats.faces == 12 + 32
    assert validate_obj_file(run.output_files[0]) == []


def test_run_export_separately(tmp_path, straight_wall, square_room):
    unnamed = WallSpec.from_coords([(0, 500), (10, 500)])
    config = ExportConfig(
        scenario_name="level", output_dir=str(tmp_path), export_together=False
    )
    run = run_export([straight_wall, square_room, unnamed], config)

    assert run.success
    names = sorted(os.path.basename(p) for p in run.output_files)
    assert names == ["level_Line 3.obj", "level_North.obj", "level_Room 2.obj"]


def test_run_export_separately_unique_names(tmp_path):
    walls = [
        WallSpec.from_coords([(0, 0), (100, 0)], name="Kitchen"),
        WallSpec.from_coords([(0, 500), (100, 500)], name="Kitchen"),
        WallSpec.from_coords([(0, 900), (100, 900)], name="kitchen"),
    ]
    config = ExportConfig(output_dir=str(tmp_path), export_together=False)
    run = run_export(walls, config)

    assert run.success
    assert run.stats.walls_exported == 3
    assert len(set(run.output_files)) == 3
    assert [os.path.basename(p) for p in run.output_files] == [
        "walls-scene_Kitchen.obj",
        "walls-scene_Kitchen_2.obj",
        "walls-scene_kitchen_3.obj",
    ]
    for path in run.output_files:
        assert os.path.exists(path)


def test_run_export_separately_path_separators_replaced(tmp_path):
    walls = [WallSpec.from_coords([(0, 0), (100, 0)], name="Hall/East")]
    config = ExportConfig(
        scenario_name="level", output_dir=str(tmp_path), export_together=False
    )
    run = run_export(walls, config)

    assert run.success
    assert run.output_files == [os.path.join(str(tmp_path), "level_Hall_East.obj")]
    assert os.path.exists(run.output_files[0])


def test_run_export_separately_numbers_by_batch_position(
        tmp_path, straight_wall, corner_wall):
    config = ExportConfig(
        scenario_name="level", output_dir=str(tmp_path),
        export_together=False, visible_ids=frozenset({"b"}),
    )
    run = run_export([straight_wall, corner_wall], config)
    assert [os.path.basename(p) for p in run.output_files] == ["level_Line 2.obj"]


def test_run_export_rejects_invalid_mesh(tmp_path, monkeypatch):
    broken = MeshData()
    broken.add_vertex(0, 0, 0)
    broken.add_triangle(1, 2, 3)
    monkeypatch.setattr(
        main_module, 'generate_wall_mesh',
        lambda walls, config: WallMeshResult(
            status=ExportStatus.OK, mesh=broken, wall_count=1
        ),
    )
    config = ExportConfig(scenario_name="level", output_dir=str(tmp_path))
    run = run_export([WallSpec.from_coords([(0, 0), (1, 0)])], config)

    assert not run.success
    assert run.status == ExportStatus.FAILED
    assert "invalid mesh" in run.errors[0]
    assert run.output_files == []
    assert not os.path.exists(os.path.join(str(tmp_path), "level.obj"))


def test_run_export_separately_skips_degenerate(tmp_path, straight_wall):
    config = ExportConfig(output_dir=str(tmp_path), export_together=False)
    run = run_export([straight_wall, WallSpec.from_coords([(1, 1)])], config)
    assert run.success
    assert len(run.output_files) == 1
    assert any("skipped" in w for w in run.warnings)


def test_run_export_empty(tmp_path):
    config = ExportConfig(output_dir=str(tmp_path))
    run = run_export([], config)
    assert not run.success
    assert run.status == ExportStatus.EMPTY
    assert run.output_files == []
    assert not os.path.exists(os.path.join(str(tmp_path), "walls-scene.obj"))


def test_run_export_separately_empty(tmp_path):
    config = ExportConfig(output_dir=str(tmp_path), export_together=False)
    run = run_export([WallSpec.from_coords([(1, 1)])], config)
    assert not run.success
    assert run.status == ExportStatus.EMPTY


# --- CLI ---

def test_cli_exports(tmp_path, walls_file):
    out = tmp_path / "out"
    code = main(["--input", walls_file, "--output-dir", str(out),
                 "--name", "level", "--grid-size", "40", "--no-log-file"])
    assert code == 0
    obj = out / "level.obj"
    assert obj.exists()
    assert validate_obj_file(str(obj)) == []
    text = obj.read_text(encoding='utf-8')
    assert "# Walls: 2" in text


def test_cli_only_filter(tmp_path, walls_file):
    out = tmp_path / "out"
    code = main(["-i", walls_file, "--output-dir", str(out), "--name", "level",
                 "--only", "spur", "--no-log-file"])
    assert code == 0
    text = (out / "level.obj").read_text(encoding='utf-8')
    assert "# Walls: 1" in text
    assert len([l for l in text.splitlines() if l.startswith("f ")]) == 12


def test_cli_separate(tmp_path, walls_file):
    out = tmp_path / "out"
    code = main(["-i", walls_file, "--output-dir", str(out), "--name", "level",
                 "--separate", "--no-log-file"])
    assert code == 0
    assert (out / "level_Room 1.obj").exists()
    assert (out / "level_Spur.obj").exists()


def test_cli_writes_log_file(tmp_path, walls_file):
    out = tmp_path / "out"
    code = main(["-i", walls_file, "--output-dir", str(out), "--name", "level"])
    assert code == 0
    assert (out / "level.log").exists()


def test_cli_missing_input(tmp_path):
    code = main(["-i", str(tmp_path / "nope.json"),
                 "--output-dir", str(tmp_path), "--no-log-file"])
    assert code == 1


def test_cli_empty_batch(tmp_path, capsys):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"walls": []}), encoding='utf-8')
    code = main(["-i", str(path), "--output-dir", str(tmp_path), "--no-log-file"])
    assert code == 1
    assert "Nothing to export" in capsys.readouterr().out


def test_cli_invalid_height(tmp_path, walls_file):
    code = main(["-i", walls_file, "--output-dir", str(tmp_path),
                 "--height", "0", "--no-log-file"])
    assert code == 1


def test_cli_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out
