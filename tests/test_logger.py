"""Structured logging tests."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from shared.logger import GuardLogger
from passguard.core.engine import PasswordPolicyEngine
from passguard.core.exceptions import PolicyViolation


def _read_entries(path):
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


def test_json_lines_with_context(tmp_path):
    log_file = tmp_path / "guard.log"
    log = GuardLogger(
        "test-json", log_file=log_file, json_logs=True, console_output=False
    )
    with log.operation("batch"):
        log.info("Batch finished", checked=3, failed=1)
    log.warning("Plain entry")

    first, second = _read_entries(log_file)
    assert first["logger"] == "passguard.test-json"
    assert first["component"] == "test-json"
    assert first["operation"] == "batch"
    assert first["message"] == "Batch finished"
    assert first["extra"] == {"checked": 3, "failed": 1}
    assert second["level"] == "WARNING"
    assert "operation" not in second


def test_level_filtering(tmp_path):
    log_file = tmp_path / "guard.log"
    log = GuardLogger(
        "test-level",
        log_level="WARNING",
        log_file=log_file,
        json_logs=True,
        console_output=False,
    )
    log.info("dropped")
    log.error("kept")
    assert [e["message"] for e in _read_entries(log_file)] == ["kept"]


def test_reinstantiation_does_not_duplicate_handlers(tmp_path):
    GuardLogger("test-dup", console_output=False)
    log = GuardLogger("test-dup", log_file=tmp_path / "dup.log", console_output=False)
    assert len(log.underlying.handlers) == 1


def test_timed_records_elapsed(tmp_path):
    log = GuardLogger("test-timed", console_output=False)
    with log.timed("work") as timer:
        pass
    assert timer.elapsed >= 0.0


def test_engine_never_logs_candidates(debug_config):
    config, log_file = debug_config
    engine = PasswordPolicyEngine(config)

    with pytest.raises(PolicyViolation):
        engine.validate("Password123!")
    engine.assess("Fixia2024Secure!")

    text = log_file.read_text(encoding="utf-8")
    assert "Password123!" not in text
    assert "Fixia2024Secure!" not in text

    entries = _read_entries(log_file)
    rejected = [e for e in entries if e["message"] == "Candidate rejected"]
    assert rejected[0]["extra"]["rule_ids"] == ["common_password"]
    assert rejected[0]["operation"] == "validate"


def test_secret_fields_are_redacted(tmp_path):
    log_file = tmp_path / "guard.log"
    log = GuardLogger(
        "test-redact", log_file=log_file, json_logs=True, console_output=False
    )
    log.info("Oops", password="Hunter2!", score=12)

    (entry,) = _read_entries(log_file)
    assert entry["extra"] == {"password": "[redacted]", "score": 12}
    assert "Hunter2!" not in log_file.read_text(encoding="utf-8")


def test_plain_text_file(tmp_path):
    log_file = tmp_path / "guard.txt"
    log = GuardLogger("test-text", log_file=log_file, console_output=False)
    log.info("Engine ready")
    line = log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("[test-text] Engine ready")
    assert "INFO" in line


def test_operation_tag_is_private_to_each_thread(tmp_path):
    log_file = tmp_path / "threads.log"
    log = GuardLogger(
        "test-threads", log_file=log_file, json_logs=True, console_output=False
    )
    first_in, second_in, first_out = (threading.Event() for _ in range(3))

    def first():
        with log.operation("validate"):
            first_in.set()
            assert second_in.wait(5)
            log.info("inside", worker="first")
        first_out.set()

    def second():
        assert first_in.wait(5)
        with log.operation("assess"):
            second_in.set()
            # The first thread leaves its block while this one is still inside.
            assert first_out.wait(5)
            log.info("inside", worker="second")

    workers = [threading.Thread(target=first), threading.Thread(target=second)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(10)
    log.info("after")

    entries = _read_entries(log_file)
    tags = {e["extra"]["worker"]: e["operation"] for e in entries if e["message"] == "inside"}
    assert tags == {"first": "validate", "second": "assess"}
    assert "operation" not in entries[-1]


def test_nested_operations_restore_the_outer_tag(tmp_path):
    log_file = tmp_path / "nested.log"
    log = GuardLogger("test-nested", log_file=log_file, json_logs=True, console_output=False)
    with log.operation("batch"):
        with log.operation("validate"):
            log.info("inner")
        log.info("outer")
    log.info("none")
    assert [e.get("operation") for e in _read_entries(log_file)] == [
        "validate", "batch", None,
    ]


def test_shared_engine_leaves_no_operation_behind(debug_config):
    config, log_file = debug_config
    engine = PasswordPolicyEngine(config)
    candidates = ["Password123!", "Fixia2024Secure!", "short", "MyPass123456!"] * 25

    def work(candidate):
        engine.assess(candidate)
        return engine.is_compliant(candidate)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(work, candidates))
    engine.logger.info("Engine idle")

    entries = _read_entries(log_file)
    assert entries[-1]["message"] == "Engine idle"
    assert "operation" not in entries[-1]
    assert {e["operation"] for e in entries if e["message"] == "Candidate assessed"} == {"assess"}
