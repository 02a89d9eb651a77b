import json
import os
import stat

import pytest

from galaxy_export.models.schemas import GalaxySnapshot
from galaxy_export.services.aggregation_service import build_snapshot
from galaxy_export.services.file_service import read_snapshot, serialize_snapshot, write_snapshot
from galaxy_export.utils.errors import OutputWriteError, SerializationError

from conftest import make_system


@pytest.fixture
def snapshot():
    return build_snapshot([
        make_system("Sol", "G", 0, 0, 0),
        make_system("Vega", "A", 3, 0, 0, last_seen_at="2024-05-03T00:00:00Z"),
    ])


def test_serialized_layout(snapshot):
    text = serialize_snapshot(snapshot)
    data = json.loads(text)

    assert list(data) == ["systems", "timestamp", "node_count"]
    assert data["node_count"] == 2
    assert data["timestamp"] == "2024-05-01T12:30:45Z"
    assert data["systems"][0]["star_type"]["class"] == "G"
    assert text.startswith('{\n  "systems"')


def test_write_then_read_gives_same_snapshot(tmp_path, snapshot):
    path = write_snapshot(snapshot, tmp_path / "galaxy.json")
    restored = read_snapshot(path)

    assert restored == snapshot
    assert [s.name for s in restored.systems] == ["Sol", "Vega"]


def test_write_overwrites_with_readable_permissions(tmp_path, snapshot):
    target = tmp_path / "galaxy.json"
    target.write_text("stale")

    write_snapshot(snapshot, target)

    assert json.loads(target.read_text())["node_count"] == 2
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o644
    assert os.listdir(tmp_path) == ["galaxy.json"]


def test_write_failure_leaves_nothing_behind(tmp_path, snapshot):
    target = tmp_path / "missing" / "galaxy.json"
    with pytest.raises(OutputWriteError):
        write_snapshot(snapshot, target)
    assert not target.exists()


def test_serialization_failure_writes_nothing(tmp_path, snapshot, monkeypatch):
    def explode(self, **kwargs):
        raise ValueError("cannot encode")

    monkeypatch.setattr(GalaxySnapshot, "model_dump_json", explode)
    target = tmp_path / "galaxy.json"

    with pytest.raises(SerializationError):
        write_snapshot(snapshot, target)
    assert not target.exists()


def test_read_rejects_malformed_snapshot(tmp_path):
    path = tmp_path / "galaxy.json"
    path.write_text(json.dumps({"systems": [], "node_count": 0}))
    with pytest.raises(SerializationError):
        read_snapshot(path)
