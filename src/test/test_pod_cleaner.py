import datetime
import pytest
from kubernetes import client
from src.services.lifecycle_controller import ReconcileError
from src.services.pod_cleaner import PodCleaner
from src.test.fakes import FakeNamespaceService, FakePodService, fixed_clock, make_pod

PROTECTED = "genet.io/protected-until"
NOW = datetime.datetime(2024, 1, 1, 15, 0, tzinfo=datetime.timezone.utc)

def make_cleaner(namespace_service, pod_service, log):
    return PodCleaner(namespace_service, pod_service, clock=fixed_clock(NOW), log=log)

def test_deletes_unprotected_pods(capture_log):
    pod_service = FakePodService({
        "user-alice": [
            make_pod("keep", {PROTECTED: "2024-01-02T00:00:00Z"}),
            make_pod("edge", {PROTECTED: "2024-01-01T15:00:00Z"}),
            make_pod("lapsed", {PROTECTED: "2024-01-01T00:00:00Z"}),
        ],
        "user-bob": [make_pod("plain")],
    })
    cleaner = make_cleaner(FakeNamespaceService(["user-alice", "user-bob"]), pod_service, capture_log)

    result = cleaner.cleanup_all_pods()

    assert result.to_dict() == {"checked": 4, "deleted": 2, "failed": 0, "protected": 2}
    assert pod_service.delete_attempts == [("user-alice", "lapsed"), ("user-bob", "plain")]

def test_malformed_protection_is_not_protection(capture_log):
    pod_service = FakePodService({"user-a": [make_pod("a", {PROTECTED: "forever"})]})
    cleaner = make_cleaner(FakeNamespaceService(["user-a"]), pod_service, capture_log)

    result = cleaner.cleanup_all_pods()

    assert result.deleted == 1
    assert capture_log.messages("WARNING") == ["Invalid protected-until annotation: forever"]

def test_failures_are_isolated(capture_log):
    pod_service = FakePodService({
        "user-n": [make_pod("a"), make_pod("b")],
        "user-broken": [make_pod("x")],
        "user-m": [make_pod("c")],
    })
    pod_service.list_errors.add("user-broken")
    pod_service.delete_errors.add(("user-n", "a"))
    cleaner = make_cleaner(FakeNamespaceService(["user-n", "user-broken", "user-m"]), pod_service, capture_log)

    result = cleaner.cleanup_all_pods()

    assert pod_service.delete_attempts == [("user-n", "a"), ("user-n", "b"), ("user-m", "c")]
    assert result.deleted == 2
    assert result.failed == 1
    assert result.checked == 3

def test_namespace_list_failure_is_fatal(capture_log):
    namespace_service = FakeNamespaceService([], error=client.ApiException(status=500))
    cleaner = make_cleaner(namespace_service, FakePodService({}), capture_log)

    with pytest.raises(ReconcileError):
        cleaner.cleanup_all_pods()
