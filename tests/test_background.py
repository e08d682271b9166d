"""Tests for scheduler-driven work: note autosave and simulated uploads."""

import pytest

from app.models import Event
from app.services.files import list_files
from app.services.notes import NoteAutosaver, list_notes
from app.services.uploads import UploadManager, UploadStatus, safe_filename


class TestNoteAutosave:
    """Tests for debounced note saving."""

    def test_edits_within_window_save_once(self, autosaver: NoteAutosaver, fresh_store, sample_event: Event, wait):
        """Test that rapid edits produce a single save with the last content."""
        for draft in ["P", "Pl", "Plan"]:
            autosaver.edit(sample_event.id, draft)

        assert autosaver.pending(sample_event.id)
        assert wait(lambda: list_notes(fresh_store(), sample_event.id))
        assert wait(lambda: not autosaver.pending(sample_event.id))

        saved = list_notes(fresh_store(), sample_event.id)
        assert [n.content for n in saved] == ["Plan"]

    def test_discard_prevents_write(self, autosaver: NoteAutosaver, fresh_store, sample_event: Event, wait):
        autosaver.edit(sample_event.id, "Never saved")
        assert autosaver.discard(sample_event.id) is True

        assert not wait(lambda: list_notes(fresh_store(), sample_event.id), timeout=0.4)
        assert fresh_store().get(f"notes_{sample_event.id}") is None

    def test_flush_saves_now(self, scheduler, engine, fresh_store, sample_event: Event):
        from sqlmodel import Session

        slow = NoteAutosaver(scheduler, lambda: Session(engine), delay_seconds=30)
        slow.edit(sample_event.id, "Seating plan")

        assert slow.flush(sample_event.id) is True
        assert not slow.pending(sample_event.id)
        assert list_notes(fresh_store(), sample_event.id)[0].content == "Seating plan"
        assert slow.flush(sample_event.id) is False

    def test_discard_without_pending(self, autosaver: NoteAutosaver, sample_event: Event):
        assert autosaver.discard(sample_event.id) is False

    def test_edit_returns_save_time(self, scheduler, engine, sample_event: Event):
        from sqlmodel import Session

        slow = NoteAutosaver(scheduler, lambda: Session(engine), delay_seconds=30)
        run_date = slow.edit(sample_event.id, "Soon")
        job = scheduler.get_job(NoteAutosaver.job_id(sample_event.id))
        assert job is not None
        assert job.next_run_time == run_date
        assert slow.discard(sample_event.id) is True

    def test_events_debounce_independently(
        self, autosaver: NoteAutosaver, fresh_store, sample_event: Event, other_event: Event, wait
    ):
        autosaver.edit(sample_event.id, "Gala notes")
        autosaver.edit(other_event.id, "Retreat notes")

        assert wait(lambda: list_notes(fresh_store(), other_event.id))
        assert wait(lambda: list_notes(fresh_store(), sample_event.id))
        assert list_notes(fresh_store(), sample_event.id)[0].content == "Gala notes"
        assert list_notes(fresh_store(), other_event.id)[0].content == "Retreat notes"


class TestUploads:
    """Tests for simulated upload progress and completion."""

    def test_upload_completes(self, upload_manager: UploadManager, fresh_store, sample_event: Event, wait):
        handle = upload_manager.start(sample_event.id, "floor-plan.pdf", "application/pdf", b"%PDF-1.7")

        assert handle.path.read_bytes() == b"%PDF-1.7"
        assert wait(lambda: handle.done)

        assert handle.status == UploadStatus.COMPLETED
        assert handle.progress == 100
        files = list_files(fresh_store(), sample_event.id)
        assert len(files) == 1
        assert files[0].name == "floor-plan.pdf"
        assert files[0].size == 8
        assert files[0].type == "application/pdf"
        assert files[0].url == f"/uploads/{sample_event.id}/{handle.path.name}"
        assert upload_manager.active(sample_event.id) == []

    def test_progress_is_visible(self, upload_manager: UploadManager, sample_event: Event, wait):
        handle = upload_manager.start(sample_event.id, "a.txt", "text/plain", b"a")
        assert handle.to_dict()["status"] == "uploading"
        assert wait(lambda: handle.done)
        assert handle.to_dict()["file"]["name"] == "a.txt"

    def test_cancel_stops_upload(self, scheduler, engine, tmp_path, fresh_store, sample_event: Event):
        """Test that a cancelled upload never reaches the file list."""
        from sqlmodel import Session

        slow = UploadManager(scheduler, lambda: Session(engine), tmp_path, tick_seconds=5, step=10)
        handle = slow.start(sample_event.id, "big.zip", "application/zip", b"zip")

        assert slow.active(sample_event.id) == [handle]
        assert slow.cancel(handle.id) is True

        assert handle.status == UploadStatus.CANCELLED
        assert not handle.path.exists()
        assert scheduler.get_job(UploadManager.job_id(handle.id)) is None
        assert list_files(fresh_store(), sample_event.id) == []
        assert slow.cancel(handle.id) is False

    def test_failure_is_reported(self, scheduler, tmp_path, sample_event: Event, wait):
        def broken_session():
            raise RuntimeError("storage offline")

        manager = UploadManager(scheduler, broken_session, tmp_path, tick_seconds=0.02, step=50)
        handle = manager.start(sample_event.id, "notes.txt", "text/plain", b"hi")

        assert wait(lambda: handle.done)
        assert handle.status == UploadStatus.FAILED
        assert handle.error == "storage offline"
        assert handle.record is None
        assert not handle.path.exists()

    def test_cancel_refused_once_complete(self, scheduler, engine, tmp_path, fresh_store, sample_event: Event):
        """Test that a cancel arriving after progress hits 100 cannot undo the file."""
        from sqlmodel import Session

        manager = UploadManager(scheduler, lambda: Session(engine), tmp_path, tick_seconds=30, step=100)
        handle = manager.start(sample_event.id, "menu.pdf", "application/pdf", b"%PDF")
        results = []
        stop = manager._stop

        def stop_then_cancel(upload_id):
            stop(upload_id)
            results.append(manager.cancel(upload_id))

        manager._stop = stop_then_cancel
        manager._tick(handle.id)

        assert results == [False]
        assert handle.status == UploadStatus.COMPLETED
        assert handle.path.exists()
        assert [f.id for f in list_files(fresh_store(), sample_event.id)] == [handle.id]

    def test_finished_trackers_are_dropped(self, scheduler, engine, tmp_path, sample_event: Event, wait):
        from sqlmodel import Session

        manager = UploadManager(
            scheduler, lambda: Session(engine), tmp_path,
            tick_seconds=0.02, step=50, retention_seconds=0.2,
        )
        completed = manager.start(sample_event.id, "a.txt", "text/plain", b"a")
        assert wait(lambda: completed.done)
        assert manager.get(completed.id) is completed

        cancelled = manager.start(sample_event.id, "b.txt", "text/plain", b"b")
        manager.cancel(cancelled.id)

        assert wait(lambda: manager.get(completed.id) is None)
        assert wait(lambda: manager.get(cancelled.id) is None)
        assert manager._uploads == {}

    def test_missing_content_type(self, upload_manager: UploadManager, sample_event: Event):
        handle = upload_manager.start(sample_event.id, "blob", "", b"x")
        assert handle.content_type == "application/octet-stream"
        upload_manager.cancel(handle.id)

    @pytest.mark.parametrize(
        "name, expected",
        [("report.pdf", "report.pdf"), ("../../etc/passwd", "passwd"), ("C:\\docs\\a.txt", "a.txt"), ("", "file")],
    )
    def test_safe_filename(self, name, expected):
        assert safe_filename(name) == expected
