from importlib import import_module

from django.apps import AppConfig

PROCEDURE_MODULES = [
    "apps.rpc.views",
    "apps.accounts.views",
    "apps.patients.views",
    "apps.medicines.views",
    "apps.prescriptions.views",
    "apps.payments.views",
    "apps.reports.views",
    "apps.dashboard.views",
]


class RpcConfig(AppConfig):
    name = "apps.rpc"
    verbose_name = "RPC router"

    def ready(self):
        for module in PROCEDURE_MODULES:
            import_module(module)
