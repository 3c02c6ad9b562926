"""
Tests for the task wire model.
"""

import pytest
from pydantic import ValidationError

from smart_tasks.domain.entities import TaskDraft
from smart_tasks.infrastructure.task_payload import TASK_LIST_ADAPTER, TaskPayload
from tests.factories import CREATED_AT, make_task


class TestTaskPayload:
    """Test TaskPayload parsing and serialization."""

    def test_parses_camel_case_keys(self):
        payload = TaskPayload.model_validate(
            {
                "id": "7",
                "title": "Water plants",
                "description": "Balcony",
                "isCompleted": True,
                "createdAt": "2024-05-01T09:30:00Z",
            }
        )

        assert payload.completed is True
        assert payload.created_at == CREATED_AT

    def test_accepts_completed_key(self):
        payload = TaskPayload.model_validate({"id": 1, "title": "x", "completed": True})
        assert payload.completed is True

    def test_integer_id_coerced_to_string(self):
        payload = TaskPayload.model_validate({"id": 42, "title": "x"})
        assert payload.id == "42"

    def test_blank_id_becomes_none(self):
        payload = TaskPayload.model_validate({"id": "  ", "title": "x"})
        assert payload.id is None

    def test_boolean_id_rejected(self):
        with pytest.raises(ValidationError):
            TaskPayload.model_validate({"id": True, "title": "x"})

    def test_missing_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskPayload.model_validate({"id": "1"})

    def test_null_description_becomes_empty(self):
        payload = TaskPayload.model_validate({"id": "1", "title": "x", "description": None})
        assert payload.description == ""

    def test_unknown_keys_ignored(self):
        payload = TaskPayload.model_validate({"id": "1", "title": "x", "userId": 3})
        assert not hasattr(payload, "userId")

    def test_to_json_dict_uses_wire_keys(self):
        data = TaskPayload.from_task(make_task(completed=True)).to_json_dict()

        assert data == {
            "id": "1",
            "title": "Write report",
            "description": "Description of Write report",
            "isCompleted": True,
            "createdAt": "2024-05-01T09:30:00Z",
        }

    def test_round_trips_task(self):
        task = make_task()
        data = TaskPayload.from_task(task).to_json_dict()
        assert TaskPayload.model_validate(data).to_task() == task

    def test_from_draft_uses_local_id(self):
        draft = TaskDraft(title="Buy milk", created_at=CREATED_AT)
        assert TaskPayload.from_draft(draft).id == draft.local_id

    def test_to_task_requires_id(self):
        with pytest.raises(ValueError, match="no id"):
            TaskPayload(title="x").to_task()

    def test_list_adapter(self):
        payloads = TASK_LIST_ADAPTER.validate_json(
            '[{"id": 1, "title": "a"}, {"id": "2", "title": "b", "isCompleted": true}]'
        )

        assert [payload.id for payload in payloads] == ["1", "2"]
        assert payloads[1].completed is True
