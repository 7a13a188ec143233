from typing import Protocol, List

class NamespaceServiceProtocol(Protocol):
    def list_managed_namespaces(self) -> List[str]:
        """List the names of all per-user namespaces managed by genet.

        Raises kubernetes.client.ApiException if the namespaces cannot be listed.
        """
        ...
