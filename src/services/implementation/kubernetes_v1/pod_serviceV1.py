from kubernetes import client
from src.util.constants import MANAGED_LABEL_SELECTOR
from src.util.logger import log
from src.services.protocol.kubernetes.pod_service_protocol import PodServiceProtocol
from typing import List

class PodServiceV1(PodServiceProtocol):
    def __init__(self, config: client.Configuration):
        api_client = client.ApiClient(configuration=config)
        self.v1 = client.CoreV1Api(api_client=api_client)

    def list_pods(self, namespace: str) -> List[client.V1Pod]:
        return self.v1.list_namespaced_pod(
            namespace=namespace,
            label_selector=MANAGED_LABEL_SELECTOR
        ).items

    def delete_pod(self, namespace: str, name: str) -> None:
        self.v1.delete_namespaced_pod(name=name, namespace=namespace)
        log(f"Pod {name} deleted in namespace {namespace}", "DEBUG")
