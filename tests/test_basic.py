"""Metadata helpers shared by the CLI banner and documentation."""

from __future__ import annotations

from relay_eventlog import __init__conf__, summary_info


def test_summary_info_contains_metadata() -> None:
    summary = summary_info()
    assert "Info for relay_eventlog" in summary
    assert "version" in summary
    assert __init__conf__.version in summary
    assert summary.endswith("\n")


def test_summary_info_is_idempotent() -> None:
    assert summary_info() == summary_info()


def test_print_info_writes_to_stdout_without_writer(capsys) -> None:
    __init__conf__.print_info()

    captured = capsys.readouterr()
    assert captured.out == summary_info()


def test_package_imports_and_builds_a_service() -> None:
    import relay_eventlog
    from relay_eventlog.application.ports import WorkerPoolPort
    from relay_eventlog.adapters import WorkerPool

    service = relay_eventlog.build_service(worker_count=1)

    assert service.state is relay_eventlog.ServiceState.UNINITIALIZED
    assert service.worker_count == 1
    assert "WorkerPoolPort" in relay_eventlog.application.ports.__all__
    assert issubclass(WorkerPool, WorkerPoolPort)
