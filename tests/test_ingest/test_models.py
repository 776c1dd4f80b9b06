from pathlib import Path

import pytest

from docgate.ingest.errors import ErrorKind
from docgate.ingest.models import CleanupReport, StorageResult, StorageStats


def test_ok_result_populates_success_shape_only() -> None:
    result = StorageResult.ok(Path("/scratch/user_1_msg_2_3_abcd0123.jpg"))
    assert result.success is True
    assert result.stored_name == "user_1_msg_2_3_abcd0123.jpg"
    assert result.error_message is None
    assert result.error_kind is None
    assert result.to_dict() == {
        "success": True,
        "storedPath": "/scratch/user_1_msg_2_3_abcd0123.jpg",
        "storedName": "user_1_msg_2_3_abcd0123.jpg",
    }


def test_fail_result_populates_failure_shape_only() -> None:
    result = StorageResult.fail(ErrorKind.FETCH_FAILED, "Download failed: boom")
    assert result.success is False
    assert result.stored_path is None
    assert result.stored_name is None
    assert result.to_dict() == {"success": False, "errorMessage": "Download failed: boom"}


def test_mixed_shapes_are_refused() -> None:
    with pytest.raises(ValueError):
        StorageResult(success=True, stored_path=Path("/x"), stored_name="x", error_message="no")
    with pytest.raises(ValueError):
        StorageResult(success=False, stored_path=Path("/x"), error_message="no", error_kind=ErrorKind.IO_FAILURE)
    with pytest.raises(ValueError):
        StorageResult(success=False)


def test_stats_defaults_and_wire_form() -> None:
    stats = StorageStats()
    assert stats.to_dict() == {"fileCount": 0, "totalSizeMB": 0.0, "oldestFileAgeSeconds": 0.0}

    sized = StorageStats(file_count=1, total_size_bytes=2 * 1048576)
    assert sized.total_size_mb == 2.0


def test_cleanup_report_count() -> None:
    report = CleanupReport(deleted=[Path("/a"), Path("/b")], skipped=1)
    assert report.deleted_count == 2
