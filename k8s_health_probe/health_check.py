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
"""
This module provides HealthCheck, the sequential cluster reachability check:
list nodes, list services, resolve an endpoint, send one request.

Only the two listing steps are fatal. A failed request is reported but the
run still completes normally.
"""

import logging

from .constants import DEFAULT_TRACE_SERVICE_NAME, KUBECTL_HINT
from .listers import ClusterApiLister, KubectlLister, ListingError
from .models import ProbeResult, ResolvedTarget
from .prober import Prober
from .resolver import resolve_target
from .trace_manager import (
    TracerManager, initialize_tracer, set_span_attributes, trace_span
)

EXIT_OK = 0
EXIT_LISTING_FAILED = 1

LISTER_BACKENDS = {
    "kubectl": KubectlLister,
    "api": ClusterApiLister,
}

SEPARATOR = "-" * 52

MANUAL_TARGET_HINTS = [
    "http://<EXTERNAL_LOAD_BALANCER_IP>:<SERVICE_PORT>",
    "http://<NODE_IP>:<NODE_PORT> (for NodePort services)",
    "http://localhost:<LOCAL_PORT> (if using 'kubectl port-forward')",
]


class HealthCheck:
    """
    Runs the node listing, service listing, endpoint resolution and request
    steps in order and maps their outcome to a process exit code.
    """

    def __init__(
        self,
        kubeconfig: str | None = None,
        context: str | None = None,
        namespace: str | None = None,
        backend: str = "kubectl",  # "kubectl" or "api"
        timeout: float | None = None,
        retries: int = 0,
        enable_tracing: bool = False,
        trace_service_name: str = DEFAULT_TRACE_SERVICE_NAME,
        lister=None,
        prober: Prober | None = None,
    ):
        self.trace_service_name = trace_service_name
        self.tracing_manager = None
        self.tracer = None
        if enable_tracing and initialize_tracer(service_name=trace_service_name):
            self.tracing_manager = TracerManager(service_name=trace_service_name)
            self.tracer = self.tracing_manager.tracer

        if lister is None:
            if backend not in LISTER_BACKENDS:
                raise ValueError(
                    f"Unknown listing backend '{backend}'. "
                    f"Expected one of: {', '.join(LISTER_BACKENDS)}")
            lister = LISTER_BACKENDS[backend](
                kubeconfig=kubeconfig,
                context=context,
                namespace=namespace,
                timeout=timeout,
            )
        self.lister = lister
        self.prober = prober or Prober(timeout=timeout, retries=retries)

    def __enter__(self) -> 'HealthCheck':
        if self.tracing_manager:
            self.tracing_manager.start_lifecycle_span()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.prober.close()
        if self.tracing_manager:
            try:
                self.tracing_manager.end_lifecycle_span()
            except Exception as e:
                logging.error(f"Failed to end tracing span: {e}")

    @trace_span("list_nodes")
    def list_nodes(self) -> str:
        return self.lister.list_nodes()

    @trace_span("list_services")
    def list_services(self) -> str:
        return self.lister.list_services()

    @trace_span("resolve")
    def resolve(self, services_listing: str) -> ResolvedTarget:
        target = resolve_target(services_listing)
        set_span_attributes(
            self.tracer,
            **{"probe.target.url": target.url,
               "probe.target.fallback": target.is_fallback})

        if target.is_fallback:
            logging.warning(
                "No obvious external IP found from LoadBalancer services. "
                "You might need to manually specify a target.")
            logging.info("Common targets include (replace with actual values):")
            for hint in MANUAL_TARGET_HINTS:
                logging.info(f"  - {hint}")
            logging.info(
                f"Using placeholder target: {target.url} "
                "(this might not work from outside the cluster without proper routing)")
        else:
            logging.info(f"Using discovered external IP: {target.url}")
        return target

    @trace_span("probe")
    def probe(self, target: ResolvedTarget) -> ProbeResult:
        result = self.prober.probe(target)
        set_span_attributes(
            self.tracer,
            **{"probe.ok": result.ok,
               "probe.status_code": result.status_code or 0})
        return result

    def _print_section(self, title: str):
        print(title)
        print(SEPARATOR)

    def run(self) -> int:
        """Runs every step and returns the process exit code."""
        print("Starting Kubernetes information retrieval and request execution...")
        print(SEPARATOR)

        self._print_section("1. Getting Kubernetes Nodes and their IPs...")
        try:
            nodes_listing = self.list_nodes()
        except ListingError as e:
            logging.error(f"Failed to get Kubernetes nodes. {KUBECTL_HINT}")
            logging.error(str(e))
            return EXIT_LISTING_FAILED
        print(nodes_listing.rstrip("\n"))
        print()

        self._print_section("2. Getting Kubernetes Services...")
        try:
            services_listing = self.list_services()
        except ListingError as e:
            logging.error(f"Failed to get Kubernetes services. {KUBECTL_HINT}")
            logging.error(str(e))
            return EXIT_LISTING_FAILED
        print(services_listing.rstrip("\n"))
        print()

        logging.info("Attempting to find an external IP from Services...")
        target = self.resolve(services_listing)

        print()
        self._print_section(f"3. Sending request to the determined target: {target.url}")
        result = self.probe(target)
        if result.body:
            print(result.body)

        if result.ok:
            logging.info(f"Request succeeded with status {result.status_code}.")
        else:
            logging.error(
                "Request failed. Check the target URL and network connectivity. "
                "You might need to adjust the target manually.")
        print(SEPARATOR)
        print("Health check finished.")
        return EXIT_OK
