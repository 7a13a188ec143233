from src.util.daemon import Daemon

def test_start_runs_immediately_and_repeats():
    calls = []

    def reconcile():
        calls.append(len(calls))
        if len(calls) == 3:
            daemon.stop()

    daemon = Daemon(reconcile, interval_seconds=0)
    daemon.start()

    assert calls == [0, 1, 2]

def test_errors_do_not_stop_the_loop(capsys):
    calls = []

    def reconcile():
        calls.append(None)
        if len(calls) == 2:
            daemon.stop()
        raise RuntimeError("apiserver unavailable")

    daemon = Daemon(reconcile, interval_seconds=0)
    daemon.start()

    assert len(calls) == 2
    assert "apiserver unavailable" in capsys.readouterr().err

def test_run_once_reports_outcome():
    assert Daemon(lambda: None, 60).run_once()

    def failing():
        raise ValueError("boom")
    assert not Daemon(failing, 60).run_once()
