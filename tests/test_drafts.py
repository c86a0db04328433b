"""
Tests for per-date drafts of unfinalized daily sheets.
"""
from core.models import DailyRowInput
from core.services.drafts import clear_draft, draft_key, list_draft_dates, load_draft, save_draft

DAY = "2024-03-05"


class TestDrafts:
    def test_round_trip_keeps_layout(self, store):
        rows = [DailyRowInput(client_id=1, material_sku="PAP-001", ss_qty=4, job_reference="5-Mar-01")]
        save_draft(store, DAY, rows, 1200)

        raw = store.get("daily_entry_draft_2024-03-05")
        assert raw["startReading"] == 1200
        assert raw["rows"][0]["ss_qty"] == 4

        draft = load_draft(store, DAY)
        assert draft.start_reading == 1200
        assert draft.rows == rows

    def test_missing_draft_is_none(self, store):
        assert load_draft(store, DAY) is None

    def test_malformed_drafts_are_ignored(self, store):
        store.set(draft_key(DAY), {"rows": "nope"})
        assert load_draft(store, DAY) is None

        store.set(draft_key(DAY), {"rows": ["not-a-row"]})
        assert load_draft(store, DAY) is None

        store.set(draft_key(DAY), [1, 2, 3])
        assert load_draft(store, DAY) is None

    def test_missing_start_reading_defaults_to_zero(self, store):
        store.set(draft_key(DAY), {"rows": []})
        assert load_draft(store, DAY).start_reading == 0

    def test_clear_and_list(self, store):
        save_draft(store, "2024-03-06", [], 0)
        save_draft(store, DAY, [], 0)
        assert list_draft_dates(store) == ["2024-03-05", "2024-03-06"]

        clear_draft(store, DAY)
        assert list_draft_dates(store) == ["2024-03-06"]
