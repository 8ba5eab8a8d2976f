import pytest

from rpgmz.storage import (
    DocumentValidationError,
    MissingDocumentError,
    VersionLedger,
    backup_path,
    read_json_raw,
    write_json,
)


def _system(project_dir):
    return project_dir / "data" / "System.json"


def test_current_reads_without_writing(project_dir, ledger):
    assert ledger.current() == 0
    assert not backup_path(_system(project_dir)).exists()


def test_bump_increments_and_persists(project_dir, ledger):
    assert ledger.bump() == 1
    assert ledger.bump() == 2
    assert read_json_raw(_system(project_dir))["versionId"] == 2


def test_bump_preserves_other_fields(project_dir, ledger):
    ledger.bump()
    system = read_json_raw(_system(project_dir))
    assert system == {"versionId": 1, "gameTitle": "Test Game"}


def test_bump_goes_through_backup(project_dir, ledger):
    ledger.bump()
    assert read_json_raw(backup_path(_system(project_dir)))["versionId"] == 0


def test_missing_field_counts_as_zero(project_dir, ledger):
    write_json(_system(project_dir), {"gameTitle": "Test Game"})
    assert ledger.current() == 0
    assert ledger.bump() == 1


@pytest.mark.parametrize("value", ["7", None, True, [3]])
def test_non_numeric_field_counts_as_zero(project_dir, ledger, value):
    write_json(_system(project_dir), {"versionId": value})
    assert ledger.current() == 0
    assert ledger.bump() == 1


def test_float_counter_is_kept(project_dir, ledger):
    write_json(_system(project_dir), {"versionId": 1.5})
    assert ledger.bump() == 2.5


def test_missing_system_json(tmp_path):
    ledger = VersionLedger(tmp_path)
    with pytest.raises(MissingDocumentError):
        ledger.current()
    with pytest.raises(MissingDocumentError):
        ledger.bump()


def test_bump_refuses_non_object(project_dir, ledger):
    write_json(_system(project_dir), [1, 2, 3])
    assert ledger.current() == 0
    with pytest.raises(DocumentValidationError):
        ledger.bump()
    assert read_json_raw(_system(project_dir)) == [1, 2, 3]
