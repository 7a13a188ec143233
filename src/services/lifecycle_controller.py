import datetime
from typing import Any, Callable, Dict, Optional
from kubernetes import client
from src.dto.reconciliation_result import ReconciliationResult
from src.services.lifecycle.expiry import is_expired
from src.services.lifecycle.time_window import (
    is_within_auto_delete_window,
    load_timezone,
    parse_target_time
)
from src.services.protocol.kubernetes.namespace_service_protocol import NamespaceServiceProtocol
from src.services.protocol.kubernetes.pod_service_protocol import PodServiceProtocol
from src.util.constants import EXPIRES_AT_ANNOTATION
from src.util.logger import log as default_log

Clock = Callable[[], datetime.datetime]
LogSink = Callable[..., None]

def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)

class ReconcileError(Exception):
    """A pass could not run at all, e.g. the namespaces could not be listed."""

class LifecycleController:
    """Deletes user pods that reached the daily auto-delete window or their TTL.

    Every call to reconcile_all re-reads cluster state; nothing is carried
    over between passes. A pod whose deletion fails stays in place and is
    evaluated again on the next pass.
    """

    def __init__(
        self,
        namespace_service: NamespaceServiceProtocol,
        pod_service: PodServiceProtocol,
        lifecycle_settings: Dict[str, Any],
        clock: Clock = utc_now,
        log: LogSink = default_log
    ):
        self.namespace_service = namespace_service
        self.pod_service = pod_service
        self.clock = clock
        self.log = log

        self.auto_delete_time = lifecycle_settings['autoDeleteTime']
        self.timezone = lifecycle_settings['timezone']
        self.tolerance = datetime.timedelta(minutes=lifecycle_settings['toleranceMinutes'])
        self.location = load_timezone(self.timezone, log=self.log)

    def reconcile_all(self) -> ReconciliationResult:
        self.log("Starting reconciliation...")
        now = self.clock()

        try:
            namespaces = self.namespace_service.list_managed_namespaces()
        except Exception as e:
            raise ReconcileError(f"failed to list namespaces: {e}") from e

        result = ReconciliationResult()
        auto_delete_due = self.is_auto_delete_time(now)

        for namespace in namespaces:
            try:
                pods = self.pod_service.list_pods(namespace)
            except Exception as e:
                self.log(f"Error listing pods in namespace {namespace}: {e}", "ERROR")
                continue

            result.checked += len(pods)
            for pod in pods:
                should_delete, reason = self.should_delete_pod(pod, now, auto_delete_due)
                if should_delete:
                    self.delete_pod(namespace, pod.metadata.name, reason, result)

        self.log(f"Reconciliation complete: checked {result.checked} pods, "
                 f"deleted {result.deleted}, failed {result.failed}")
        return result

    def should_delete_pod(self, pod: client.V1Pod, now: datetime.datetime, auto_delete_due: bool) -> tuple[bool, str]:
        if auto_delete_due:
            return True, f"reached auto-delete time ({self.auto_delete_time} {self.timezone})"

        annotations = pod.metadata.annotations or {}
        expired, reason = is_expired(annotations.get(EXPIRES_AT_ANNOTATION), now)
        if not expired and reason:
            self.log(f"Ignoring TTL of pod {pod.metadata.name}: {reason}", "WARNING")
            return False, ""
        return expired, reason

    def is_auto_delete_time(self, now: Optional[datetime.datetime] = None) -> bool:
        if now is None:
            now = self.clock()

        try:
            parse_target_time(self.auto_delete_time)
        except ValueError as e:
            self.log(f"Auto-delete window disabled: {e}", "WARNING")
            return False

        due = is_within_auto_delete_window(now, self.location, self.auto_delete_time, self.tolerance)
        if due:
            self.log(f"Auto-delete time reached: now={now.astimezone(self.location):%H:%M:%S}, "
                     f"deleteTime={self.auto_delete_time}")
        return due

    def delete_pod(self, namespace: str, name: str, reason: str, result: ReconciliationResult) -> None:
        self.log(f"Deleting pod {name} in namespace {namespace}: {reason}")
        try:
            self.pod_service.delete_pod(namespace, name)
        except Exception as e:
            result.failed += 1
            self.log(f"Error deleting pod {name}: {e}", "ERROR")
            return

        result.deleted += 1
        self.log(f"Successfully deleted pod {name}")

    def startup_check(self, interval_seconds: int) -> None:
        """Refuse to run a loop that could step over the whole window."""
        if datetime.timedelta(seconds=interval_seconds) > self.tolerance:
            raise ValueError(
                f"controller interval {interval_seconds}s exceeds the auto-delete "
                f"tolerance of {self.tolerance}; the window could be missed"
            )
