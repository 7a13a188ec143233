from src.util.logger import log

def test_log_format(capsys, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    log("Reconciliation complete", "WARNING")
    assert capsys.readouterr().err == "[genet-lifecycle] [WARNING] Reconciliation complete\n"

def test_debug_hidden_by_default(capsys, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    log("Pod a deleted in namespace user-a", "DEBUG")
    log("Deleting pod a")
    assert capsys.readouterr().err == "[genet-lifecycle] [INFO] Deleting pod a\n"

def test_log_level_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    log("Ignoring TTL of pod a", "WARNING")
    log("Error deleting pod a", "ERROR")
    assert capsys.readouterr().err == "[genet-lifecycle] [ERROR] Error deleting pod a\n"

    monkeypatch.setenv("LOG_LEVEL", "debug")
    log("Pod a deleted in namespace user-a", "DEBUG")
    assert "[DEBUG]" in capsys.readouterr().err

def test_unknown_log_level_means_info(capsys, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    log("Deleting pod a")
    log("detail", "DEBUG")
    assert capsys.readouterr().err == "[genet-lifecycle] [INFO] Deleting pod a\n"
