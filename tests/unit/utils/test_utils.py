from pathlib import Path

from fsmkit.core.exceptions import ConfigError, FsmError, LockKeyError, StatesLockedError
from fsmkit.core.utils.io import append_jsonl, iter_yaml_files, read_yaml
from fsmkit.core.utils.merge import deep_merge, merge_arrays


def test_deep_merge_does_not_mutate():
    base = {"a": 1, "b": {"c": 2}}
    merged = deep_merge(base, {"b": {"d": 3}})
    assert merged == {"a": 1, "b": {"c": 2, "d": 3}}
    assert base == {"a": 1, "b": {"c": 2}}


def test_merge_arrays_modes():
    assert merge_arrays([1, 2], [3]) == [3]
    assert merge_arrays([1, 2], ["+", 3]) == [1, 2, 3]
    assert merge_arrays([1, 2], ["=", 3]) == [3]
    assert merge_arrays([1, 2], []) == [1, 2]


def test_iter_yaml_files_prefers_yaml(tmp_path: Path):
    (tmp_path / "b.yml").write_text("x: 1\n", encoding="utf-8")
    (tmp_path / "a.yml").write_text("x: 1\n", encoding="utf-8")
    (tmp_path / "a.yaml").write_text("x: 2\n", encoding="utf-8")
    assert [p.name for p in iter_yaml_files(tmp_path)] == ["a.yaml", "b.yml"]
    assert iter_yaml_files(tmp_path / "missing") == []


def test_read_yaml_defaults(tmp_path: Path):
    assert read_yaml(tmp_path / "missing.yaml", default={}) == {}
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert read_yaml(empty, default={"d": 1}) == {"d": 1}


def test_append_jsonl_creates_parent(tmp_path: Path):
    path = tmp_path / "nested" / "events.jsonl"
    append_jsonl(path=path, payload={"a": 1})
    append_jsonl(path=path, payload={"b": (1, 2)})
    assert path.read_text(encoding="utf-8").splitlines() == ['{"a": 1}', '{"b": [1, 2]}']


def test_error_hierarchy():
    assert issubclass(StatesLockedError, RuntimeError)
    assert issubclass(LockKeyError, ValueError)
    assert issubclass(ConfigError, ValueError)
    err = ConfigError("bad", context={"path": "x"})
    assert isinstance(err, FsmError)
    assert err.to_json_error() == {"message": "bad", "code": "ConfigError", "context": {"path": "x"}}
    assert FsmError().context == {}
