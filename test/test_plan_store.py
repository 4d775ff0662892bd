import json

from storage.plan_store import PlanStore


def test_plans_roundtrip(tmp_path):
    store = PlanStore(path=str(tmp_path / "plans.json"))
    first = store.save("u1", {"summary": "a"}, title="First")
    second = store.save("u1", {"summary": "b"})

    listed = store.list("u1")
    assert {p["id"] for p in listed} == {first.id, second.id}
    assert listed[0]["created_at"] >= listed[1]["created_at"]

    reloaded = PlanStore(path=str(tmp_path / "plans.json"))
    assert reloaded.get("u1", first.id).plan == {"summary": "a"}
    assert reloaded.get("u2", first.id) is None


def test_delete_only_own_plan(tmp_path):
    store = PlanStore(path=str(tmp_path / "plans.json"))
    saved = store.save("u1", {})
    assert store.delete("u2", saved.id) is False
    assert store.delete("u1", saved.id) is True
    assert store.list("u1") == []


def test_missing_file_is_empty(tmp_path):
    store = PlanStore(path=str(tmp_path / "nested" / "plans.json"))
    assert store.list("u1") == []


def test_corrupted_file(tmp_path):
    p = tmp_path / "plans.json"
    p.write_text("{not valid json")
    store = PlanStore(path=str(p))
    assert store.list("u1") == []
    store.save("u1", {"summary": "fresh"})
    assert len(store.list("u1")) == 1


def test_malformed_records_are_skipped(tmp_path):
    p = tmp_path / "plans.json"
    p.write_text(json.dumps([
        {"id": "good", "user_id": "u1", "title": "Ok", "created_at": "2026-01-05T12:00:00+00:00", "plan": {}},
        {"id": "bad", "user_id": "u1", "title": "Broken"},
    ]))
    store = PlanStore(path=str(p))

    assert [r["id"] for r in store.list("u1")] == ["good"]
    assert store.get("u1", "bad") is None
    assert store.get("u1", "good").title == "Ok"
