# Copyright 2026 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from .constants import DEFAULT_TRACE_SERVICE_NAME
from .health_check import LISTER_BACKENDS, HealthCheck


class ProbeSettings:
    """
    A container class that stores all settings required to create a health check.

    Its constructor signature mirrors 'k8s_health_probe.HealthCheck' without the
    injectable collaborators.
    """

    def __init__(
        self,
        kubeconfig: str | None = None,
        context: str | None = None,
        namespace: str | None = None,
        backend: str = "kubectl",
        timeout: float | None = None,
        retries: int = 0,
        enable_tracing: bool = False,
        trace_service_name: str = DEFAULT_TRACE_SERVICE_NAME,
    ):
        if backend not in LISTER_BACKENDS:
            raise ValueError(f"Unknown listing backend '{backend}'.")
        if retries < 0:
            raise ValueError("retries must not be negative.")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive.")

        self._kubeconfig = kubeconfig
        self._context = context
        self._namespace = namespace
        self._backend = backend
        self._timeout = timeout
        self._retries = retries
        self._enable_tracing = enable_tracing
        self._trace_service_name = trace_service_name

    @classmethod
    def from_args(cls, args) -> 'ProbeSettings':
        """Builds settings from parsed command line arguments."""
        return cls(
            kubeconfig=args.kubeconfig,
            context=args.context,
            namespace=args.namespace,
            backend=args.backend,
            timeout=args.timeout,
            retries=args.retries,
            enable_tracing=args.enable_tracing,
            trace_service_name=args.trace_service_name,
        )

    def create_health_check(self) -> HealthCheck:
        """Creates an instance of the 'HealthCheck' class"""

        return HealthCheck(
            kubeconfig=self._kubeconfig,
            context=self._context,
            namespace=self._namespace,
            backend=self._backend,
            timeout=self._timeout,
            retries=self._retries,
            enable_tracing=self._enable_tracing,
            trace_service_name=self._trace_service_name,
        )
