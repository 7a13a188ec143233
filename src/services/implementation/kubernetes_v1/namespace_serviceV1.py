from kubernetes import client
from src.util.constants import MANAGED_LABEL_SELECTOR, USER_NAMESPACE_PREFIX
from src.services.protocol.kubernetes.namespace_service_protocol import NamespaceServiceProtocol
from typing import List

class NamespaceServiceV1(NamespaceServiceProtocol):
    def __init__(self, config: client.Configuration):
        api_client = client.ApiClient(configuration=config)
        self.v1 = client.CoreV1Api(api_client=api_client)

    def list_managed_namespaces(self) -> List[str]:
        namespaces = self.v1.list_namespace(label_selector=MANAGED_LABEL_SELECTOR)
        return [
            namespace.metadata.name
            for namespace in namespaces.items
            if namespace.metadata.name.startswith(USER_NAMESPACE_PREFIX)
        ]
