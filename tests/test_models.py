"""
Tests for record validation and value types.
"""

import pytest

from jobsearch.models import (
    FilterState,
    JobRecord,
    SearchCriteria,
    SelectionState,
    SortSpec,
    validate_record,
)


class TestValidateRecord:
    """Test record validation."""

    def test_valid_record(self, job_dicts):
        """Test a fully populated wire record has no errors."""
        assert validate_record(job_dicts[0]) == []

    def test_id_only_is_valid(self):
        """Test every field but id is optional."""
        assert validate_record({"id": "42"}) == []

    def test_integer_id_is_valid(self):
        """Test a numeric id is accepted."""
        assert validate_record({"id": 42}) == []

    def test_missing_id(self):
        """Test a record without id is rejected."""
        errors = validate_record({"title": "engineer"})
        assert any("id" in err for err in errors)

    def test_blank_id(self):
        """Test a whitespace-only id is rejected."""
        errors = validate_record({"id": "   "})
        assert len(errors) == 1

    def test_non_string_field_is_valid(self):
        """Test scalar values in optional fields are not errors."""
        assert validate_record({"id": "1", "salary": 95000}) == []

    def test_none_field_counts_as_absent(self):
        """Test None in an optional field is accepted."""
        assert validate_record({"id": "1", "salary": None}) == []

    def test_unlisted_work_type_is_valid(self):
        """Test work types beyond remote/onsite/hybrid are accepted."""
        assert validate_record({"id": "1", "workType": "contract"}) == []

    def test_not_a_dict(self):
        """Test non-object payload items are rejected."""
        assert validate_record(["id", "1"]) == ["Record must be an object"]


class TestJobRecord:
    """Test JobRecord wire conversion."""

    def test_from_dict_reads_camel_case(self, job_dicts):
        """Test workType on the wire maps to work_type."""
        record = JobRecord.from_dict(job_dicts[1])
        assert record.id == "2"
        assert record.work_type == "hybrid"

    def test_from_dict_normalizes_work_type(self):
        """Test work type synonyms are normalized for filtering."""
        record = JobRecord.from_dict({"id": "9", "workType": "On-site"})
        assert record.work_type == "onsite"

    def test_from_dict_keeps_unlisted_work_type(self):
        """Test an unlisted work type is kept in normalized text form."""
        record = JobRecord.from_dict({"id": "9", "workType": "Contract "})
        assert record.work_type == "contract"

    def test_from_dict_converts_scalars_to_text(self):
        """Test numeric field values and ids are kept as strings."""
        record = JobRecord.from_dict({"id": 7, "salary": 95000})
        assert record.id == "7"
        assert record.salary == "95000"

    def test_from_dict_invalid_raises(self):
        """Test building from a record without id raises ValueError."""
        with pytest.raises(ValueError):
            JobRecord.from_dict({"title": "no id"})

    def test_to_dict_is_resubmittable(self, job_dicts):
        """Test to_dict gives back the wire record."""
        record = JobRecord.from_dict(job_dicts[0])
        assert record.to_dict() == job_dicts[0]

    def test_to_dict_returns_original_payload(self):
        """Test unmodelled keys and original spellings survive the round trip."""
        payload = {
            "id": "9",
            "title": "Data Engineer",
            "salary": 120000,
            "workType": "On-site",
            "boardId": "b-17",
            "postedAt": "2024-03-01",
            "tags": ["python", "sql"],
        }
        record = JobRecord.from_dict(payload)
        assert record.to_dict() == payload

    def test_raw_payload_is_a_copy(self):
        """Test later changes to the source dict do not reach the record."""
        payload = {"id": "9", "title": "Data Engineer"}
        record = JobRecord.from_dict(payload)
        payload["title"] = "changed"
        assert record.to_dict()["title"] == "Data Engineer"

    def test_raw_payload_ignored_in_equality(self):
        """Test records compare and hash on their modelled fields."""
        a = JobRecord.from_dict({"id": "1", "title": "Dev", "extra": 1})
        b = JobRecord.from_dict({"id": "1", "title": "Dev", "extra": 2})
        assert a == b
        assert hash(a) == hash(b)

    def test_to_dict_without_payload(self):
        """Test a record built in code emits the modelled fields."""
        record = JobRecord("5", title="Dev", work_type="remote")
        assert record.to_dict() == {
            "id": "5",
            "title": "Dev",
            "salary": None,
            "company": None,
            "location": None,
            "workType": "remote",
            "source": None,
        }

    def test_get_accepts_wire_column_name(self, records):
        """Test get() accepts workType as a column name."""
        assert records[0].get("workType") == "remote"

    def test_get_unknown_column(self, records):
        """Test get() rejects columns the record does not have."""
        with pytest.raises(ValueError):
            records[0].get("salary_band")


class TestValueTypes:
    """Test the small immutable state types."""

    def test_criteria_wire_form(self):
        """Test criteria convert work types to a tuple and serialize camelCase."""
        criteria = SearchCriteria("python", "Toronto", ["remote", "hybrid"])
        assert criteria.work_types == ("remote", "hybrid")
        assert criteria.to_dict() == {
            "keywords": "python",
            "location": "Toronto",
            "workTypes": ["remote", "hybrid"],
        }

    def test_filter_with_column(self):
        """Test setting one filter column activates the filter state."""
        filters = FilterState().with_column("company", "acme")
        assert filters.company == "acme"
        assert filters.is_active
        assert not FilterState().is_active

    def test_filter_with_column_none_clears(self):
        """Test a None value clears the column."""
        filters = FilterState(title="dev").with_column("title", None)
        assert filters.title == ""

    def test_filter_unknown_column(self):
        """Test filtering on an unknown column raises ValueError."""
        with pytest.raises(ValueError):
            FilterState().with_column("benefits", "x")

    def test_sort_spec_rejects_bad_direction(self):
        """Test directions other than asc/desc are rejected."""
        with pytest.raises(ValueError):
            SortSpec("title", "up")

    def test_selection_derived_values(self, records):
        """Test ids, count and has_selection follow the selected records."""
        selection = SelectionState(tuple(records[:2]))
        assert selection.ids == ("1", "2")
        assert selection.count == 2
        assert selection.has_selection
        assert not SelectionState().has_selection
