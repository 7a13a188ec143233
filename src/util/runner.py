from kubernetes import client, config
from src.util.setup import load_settings, get_settings
from src.util.logger import log
from src.util.daemon import Daemon
from src.services.lifecycle_controller import LifecycleController
from src.services.pod_cleaner import PodCleaner
from src.services.implementation.kubernetes_v1.namespace_serviceV1 import NamespaceServiceV1
from src.services.implementation.kubernetes_v1.pod_serviceV1 import PodServiceV1


class Runner:
    def __init__(self, config_path=None):
        load_settings(config_path)
        self.init_kubernetes()

    def init_kubernetes(self):
        self.config_path = get_settings()['k8s']['configPath']
        self.config = client.Configuration()
        if self.config_path:
            config.load_kube_config(config_file=self.config_path, client_configuration=self.config)
        else:
            config.load_incluster_config(client_configuration=self.config)

        self.namespace_service = NamespaceServiceV1(config=self.config)
        self.pod_service = PodServiceV1(config=self.config)

    def create_controller(self) -> LifecycleController:
        return LifecycleController(
            namespace_service=self.namespace_service,
            pod_service=self.pod_service,
            lifecycle_settings=get_settings()['lifecycle']
        )

    def run_controller(self):
        controller = self.create_controller()
        interval = get_settings()['controller']['intervalSeconds']
        controller.startup_check(interval)

        lifecycle = get_settings()['lifecycle']
        log(f"Auto-delete time: {lifecycle['autoDeleteTime']} {lifecycle['timezone']}")
        self.daemon = Daemon(controller.reconcile_all, interval)
        self.daemon.start()

    def run_reconcile_once(self):
        self.create_controller().reconcile_all()

    def run_cleanup(self):
        log("Genet pod cleanup - triggered by CronJob")
        PodCleaner(self.namespace_service, self.pod_service).cleanup_all_pods()
