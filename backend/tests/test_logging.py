from structlog.testing import capture_logs

from reviewflow.core.logging import get_logger, setup_logging


def test_named_logger_emits_events() -> None:
    with capture_logs() as logs:
        get_logger("reviewflow.tests").warning("Phase failed", job_id="job-1")

    assert logs == [{"event": "Phase failed", "job_id": "job-1", "log_level": "warning"}]


def test_named_logger_works_after_setup(capsys) -> None:
    setup_logging("INFO", json_output=True)

    get_logger("reviewflow.tests").info("Workflow succeeded", job_id="job-2")

    out = capsys.readouterr().out
    assert '"event": "Workflow succeeded"' in out
    assert '"job_id": "job-2"' in out
