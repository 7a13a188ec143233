from typing import Protocol, List
from kubernetes.client import V1Pod

class PodServiceProtocol(Protocol):
    def list_pods(self, namespace: str) -> List[V1Pod]:
        """List all managed pods in a namespace."""
        ...

    def delete_pod(self, namespace: str, name: str) -> None:
        """Delete a pod by name and namespace.

        Raises kubernetes.client.ApiException on failure, including when the
        pod no longer exists.
        """
        ...
