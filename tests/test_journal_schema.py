import pytest

from reflection_journal.journal_schema import Reflection, ActionPlan, MAX_ACTION_PLANS


def test_reflection_to_dict_uses_stored_field_names():
    reflection = Reflection(
        id=1714521600000,
        date="2024-05-01",
        content="Did X",
        action_plans=[ActionPlan(id=1714521600001, text="Plan A")]
    )

    assert reflection.to_dict() == {
        "id": 1714521600000,
        "date": "2024-05-01",
        "content": "Did X",
        "actionPlans": [{"id": 1714521600001, "text": "Plan A", "completed": False}],
    }


def test_action_plan_completed_defaults_false():
    plan = ActionPlan.from_dict({"id": 5, "text": "Walk"})
    assert plan.completed is False


def test_from_dict_without_action_plans():
    reflection = Reflection.from_dict({"id": 1, "date": "2024-01-01", "content": "x"})
    assert reflection.action_plans == []


def test_from_dict_rejects_non_list_plans():
    with pytest.raises(ValueError):
        Reflection.from_dict({"id": 1, "date": "2024-01-01", "content": "x", "actionPlans": {}})


def test_find_action_plan_and_capacity():
    plans = [ActionPlan(id=i, text=str(i)) for i in range(MAX_ACTION_PLANS)]
    reflection = Reflection(id=100, date="2024-01-01", content="x", action_plans=plans)

    assert reflection.find_action_plan(1).text == "1"
    assert reflection.find_action_plan(99) is None
    assert reflection.can_add_action_plan() is False


@pytest.mark.parametrize("data", [1, None, ["x"], "text"])
def test_from_dict_rejects_non_objects(data):
    with pytest.raises(TypeError):
        Reflection.from_dict(data)
    with pytest.raises(TypeError):
        ActionPlan.from_dict(data)


@pytest.mark.parametrize("completed", ["false", 0, 1, None])
def test_action_plan_completed_must_be_bool(completed):
    with pytest.raises(TypeError):
        ActionPlan.from_dict({"id": 5, "text": "Walk", "completed": completed})
