from __future__ import annotations

from stackconf.core.model import Severity, ValidationRecord, ValidationResult


def test_records_are_hashable_despite_instance() -> None:
    result = ValidationResult()
    inst = {"pollPeriod": -1}
    result.log_error("Must be a whole number", inst, "pollPeriod")
    result.log_error("Must be a whole number", {"pollPeriod": -2}, "pollPeriod")

    assert len(set(result.records)) == 1
    record = result.records[0]
    assert hash(record) == hash(ValidationRecord(Severity.ERROR, "Must be a whole number", "pollPeriod"))
    assert record.instance is inst
