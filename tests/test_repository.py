import json

import pytest

from gtsim_core.errors import StoreError
from gtsim_core.io.store import JsonFileStore
from gtsim_core.services.repository import ResultRepository, ResultsView


class FailingStore:
    def select_results(self):
        raise StoreError("connection refused")

    def delete_result(self, result_id):
        raise StoreError("connection refused")


def _always(answer):
    return lambda prompt: answer


@pytest.fixture
def view(store_path):
    view = ResultsView(ResultRepository(JsonFileStore(store_path)))
    view.load()
    return view


def test_list_is_newest_first_with_model_joined(store_path):
    outcome = ResultRepository(JsonFileStore(store_path)).list()
    assert outcome.ok
    assert outcome.notification.to_dict() == {"type": "success", "message": "获取仿真结果成功", "duration": 3000}
    assert [r.id for r in outcome.value] == ["r2", "r1"]
    assert outcome.value[1].model.name == "囚徒困境"
    assert [p.name for p in outcome.value[1].players] == ["A", "B"]


def test_list_failure_returns_empty_and_notifies():
    outcome = ResultRepository(FailingStore()).list()
    assert not outcome.ok
    assert outcome.value == []
    assert outcome.notification.to_dict() == {"type": "error", "message": "获取仿真结果失败", "duration": 3000}


def test_missing_store_file_is_a_transport_failure(tmp_path):
    outcome = ResultRepository(JsonFileStore(tmp_path / "absent.json")).list()
    assert outcome.value == []
    assert outcome.notification.type == "error"


def test_rows_without_model_are_skipped(store_path):
    data = json.loads(store_path.read_text(encoding="utf-8"))
    data["simulation_results"].append({"id": "r3", "model_id": "gone", "results": [], "created_at": "2024-05-01T00:00:00Z"})
    store_path.write_text(json.dumps(data), encoding="utf-8")
    outcome = ResultRepository(JsonFileStore(store_path)).list()
    assert [r.id for r in outcome.value] == ["r2", "r1"]


def test_loading_flag_clears_after_failure():
    view = ResultsView(ResultRepository(FailingStore()))
    assert view.loading
    view.load()
    assert not view.loading
    assert view.records == []


def test_declined_delete_has_no_side_effects(view, store_path):
    view.select("r1")
    outcome = view.delete("r1", confirm=_always(False))
    assert not outcome.ok
    assert outcome.notification is None
    assert [r.id for r in view.records] == ["r2", "r1"]
    assert view.selected.id == "r1"
    assert len(JsonFileStore(store_path).select_results()) == 2


def test_delete_selected_clears_selection(view, store_path):
    view.select("r1")
    outcome = view.delete("r1", confirm=_always(True))
    assert outcome.ok
    assert outcome.notification.message == "删除成功"
    assert [r.id for r in view.records] == ["r2"]
    assert view.selected is None
    assert [r["id"] for r in JsonFileStore(store_path).select_results()] == ["r2"]


def test_delete_other_keeps_selection(view):
    view.select("r2")
    view.delete("r1", confirm=_always(True))
    assert view.selected.id == "r2"


def test_delete_unknown_id_notifies_and_keeps_list(view):
    outcome = view.delete("nope", confirm=_always(True))
    assert not outcome.ok
    assert outcome.notification.to_dict() == {"type": "error", "message": "删除失败", "duration": 3000}
    assert [r.id for r in view.records] == ["r2", "r1"]


def test_delete_transport_failure_leaves_state(view):
    view.repository = ResultRepository(FailingStore())
    view.select("r1")
    outcome = view.delete("r1", confirm=_always(True))
    assert outcome.notification.message == "删除失败"
    assert len(view.records) == 2
    assert view.selected.id == "r1"


def test_confirmation_prompt_is_shown(view):
    prompts = []
    view.delete("r2", confirm=lambda prompt: prompts.append(prompt) or False)
    assert prompts == ["确定要删除这个仿真结果吗？"]
