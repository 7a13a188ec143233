import datetime
from src.dto.reconciliation_result import ReconciliationResult
from src.services.lifecycle.expiry import is_protected
from src.services.lifecycle_controller import Clock, LogSink, ReconcileError, utc_now
from src.services.protocol.kubernetes.namespace_service_protocol import NamespaceServiceProtocol
from src.services.protocol.kubernetes.pod_service_protocol import PodServiceProtocol
from src.util.constants import PROTECTED_UNTIL_ANNOTATION
from src.util.logger import log as default_log

class PodCleaner:
    """Scheduled cleanup: deletes every user pod not protected by protected-until."""

    def __init__(
        self,
        namespace_service: NamespaceServiceProtocol,
        pod_service: PodServiceProtocol,
        clock: Clock = utc_now,
        log: LogSink = default_log
    ):
        self.namespace_service = namespace_service
        self.pod_service = pod_service
        self.clock = clock
        self.log = log

    def cleanup_all_pods(self) -> ReconciliationResult:
        self.log("Starting pod cleanup...")
        now = self.clock()

        try:
            namespaces = self.namespace_service.list_managed_namespaces()
        except Exception as e:
            raise ReconcileError(f"failed to list namespaces: {e}") from e

        result = ReconciliationResult()
        for namespace in namespaces:
            try:
                pods = self.pod_service.list_pods(namespace)
            except Exception as e:
                self.log(f"Error listing pods in namespace {namespace}: {e}", "ERROR")
                continue

            result.checked += len(pods)
            for pod in pods:
                name = pod.metadata.name
                annotations = pod.metadata.annotations or {}
                if self.is_pod_protected(annotations, now):
                    self.log(f"Skipping protected pod {name} in namespace {namespace} "
                             f"(protected until {annotations[PROTECTED_UNTIL_ANNOTATION]})")
                    result.protected += 1
                    continue

                self.log(f"Deleting pod {name} in namespace {namespace} (scheduled cleanup)")
                try:
                    self.pod_service.delete_pod(namespace, name)
                except Exception as e:
                    result.failed += 1
                    self.log(f"Error deleting pod {name}: {e}", "ERROR")
                    continue

                result.deleted += 1
                self.log(f"Successfully deleted pod {name}")

        self.log(f"Cleanup complete: checked {result.checked} pods, deleted {result.deleted}, "
                 f"protected {result.protected}, failed {result.failed}")
        return result

    def is_pod_protected(self, annotations: dict, now: datetime.datetime) -> bool:
        value = annotations.get(PROTECTED_UNTIL_ANNOTATION)
        try:
            return is_protected(value, now)
        except ValueError:
            self.log(f"Invalid protected-until annotation: {value}", "WARNING")
            return False
