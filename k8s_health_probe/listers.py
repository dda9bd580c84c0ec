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
This module provides the node and service listing collaborators.

Both listers return the listing as table text in the layout `kubectl get`
prints, so the resolver can treat their output the same way:

- KubectlLister shells out to the `kubectl` binary.
- ClusterApiLister talks to the API server through the official client
  and renders the tables itself.
"""

import logging
import subprocess
from datetime import datetime, timezone

from kubernetes import client, config
from urllib3.exceptions import HTTPError

from .constants import (
    GET_NODES_ARGS,
    GET_SERVICES_ARGS,
    KUBECTL_BINARY,
    NONE_PLACEHOLDER,
    PENDING_PLACEHOLDER,
)

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
COLUMN_PADDING = 3


class ListingError(RuntimeError):
    """Raised when a node or service listing cannot be obtained."""

    def __init__(self, command: list[str], returncode: int | None = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Listing failed: {' '.join(command)}"
        if returncode is not None:
            message += f" (exit code {returncode})"
        if stderr:
            message += f": {stderr}"
        super().__init__(message)


class KubectlLister:
    """
    Lists nodes and services by running `kubectl`.
    """

    def __init__(
        self,
        kubeconfig: str | None = None,
        context: str | None = None,
        namespace: str | None = None,  # None keeps the kubeconfig's namespace
        timeout: float | None = None,
        kubectl: str = KUBECTL_BINARY,
    ):
        self.kubeconfig = kubeconfig
        self.context = context
        self.namespace = namespace
        self.timeout = timeout
        self.kubectl = kubectl

    def _command(self, args: list[str], namespaced: bool) -> list[str]:
        cmd = [self.kubectl]
        if self.kubeconfig:
            cmd += ["--kubeconfig", self.kubeconfig]
        if self.context:
            cmd += ["--context", self.context]
        cmd += args
        if namespaced and self.namespace:
            cmd += ["-n", self.namespace]
        return cmd

    def _run(self, args: list[str], namespaced: bool = False) -> str:
        cmd = self._command(args, namespaced)
        logging.info(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, check=True, timeout=self.timeout)
        except OSError as e:
            raise ListingError(cmd, stderr=str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise ListingError(
                cmd, stderr=f"timed out after {self.timeout} seconds") from e
        except subprocess.CalledProcessError as e:
            raise ListingError(
                cmd, returncode=e.returncode, stderr=(e.stderr or "").strip()) from e
        return result.stdout

    def list_nodes(self) -> str:
        return self._run(GET_NODES_ARGS)

    def list_services(self) -> str:
        return self._run(GET_SERVICES_ARGS, namespaced=True)


class ClusterApiLister:
    """
    Lists nodes and services through the Kubernetes API.

    In-cluster configuration is tried first, then the local kubeconfig,
    unless a kubeconfig path or context is given explicitly.
    """

    def __init__(
        self,
        kubeconfig: str | None = None,
        context: str | None = None,
        namespace: str | None = None,
        timeout: float | None = None,
        core_v1_api: client.CoreV1Api | None = None,
        clock=None,  # returns the current UTC time; used for the AGE column
    ):
        self.kubeconfig = kubeconfig
        self.context = context
        self.namespace = namespace or "default"
        self.timeout = timeout
        self._core_v1_api = core_v1_api
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def _load_core_v1_api(self) -> client.CoreV1Api:
        if self.kubeconfig or self.context:
            api_client = config.new_client_from_config(
                config_file=self.kubeconfig, context=self.context)
            return client.CoreV1Api(api_client)
        try:
            config.load_incluster_config()
        except config.ConfigException:
            config.load_kube_config()
        return client.CoreV1Api()

    def _call(self, description: list[str], func, **kwargs):
        try:
            if self._core_v1_api is None:
                self._core_v1_api = self._load_core_v1_api()
            logging.info(f"Querying API: {' '.join(description)}")
            if self.timeout is not None:
                kwargs["_request_timeout"] = self.timeout
            return func(self._core_v1_api, **kwargs)
        except client.ApiException as e:
            raise ListingError(description, returncode=e.status, stderr=str(e.reason)) from e
        except (config.ConfigException, HTTPError) as e:
            raise ListingError(description, stderr=str(e)) from e

    def list_nodes(self) -> str:
        node_list = self._call(
            GET_NODES_ARGS, lambda api, **kw: api.list_node(**kw))
        now = self.clock()
        rows = [_node_columns(node, now) for node in node_list.items]
        return render_table(
            ["NAME", "STATUS", "ROLES", "AGE", "VERSION", "INTERNAL-IP",
             "EXTERNAL-IP", "OS-IMAGE", "KERNEL-VERSION", "CONTAINER-RUNTIME"],
            rows)

    def list_services(self) -> str:
        service_list = self._call(
            GET_SERVICES_ARGS + ["-n", self.namespace],
            lambda api, **kw: api.list_namespaced_service(self.namespace, **kw))
        now = self.clock()
        rows = [_service_columns(service, now) for service in service_list.items]
        return render_table(
            ["NAME", "TYPE", "CLUSTER-IP", "EXTERNAL-IP", "PORT(S)", "AGE"], rows)


def render_table(headers: list[str], rows: list[list[str]]) -> str:
    """Renders rows as left aligned columns, like `kubectl get`."""
    if not rows:
        return "No resources found."
    widths = [max(len(str(cell)) for cell in column)
              for column in zip(headers, *rows)]
    lines = []
    for row in [headers, *rows]:
        cells = [str(cell).ljust(width) for cell, width in zip(row, widths)]
        lines.append((" " * COLUMN_PADDING).join(cells).rstrip())
    return "\n".join(lines)


def format_age(created: datetime | None, now: datetime) -> str:
    """Short human readable age, e.g. 45s, 5m, 3h, 12d, 2y."""
    if created is None:
        return "<unknown>"
    seconds = max(int((now - created).total_seconds()), 0)
    if seconds < 120:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 48:
        return f"{hours}h"
    days = hours // 24
    if days < 365 * 2:
        return f"{days}d"
    return f"{days // 365}y"


def _service_external_ip(service) -> str:
    spec = service.spec
    if spec.type == "ExternalName":
        return spec.external_name or NONE_PLACEHOLDER

    addresses = []
    if spec.type == "LoadBalancer":
        load_balancer = service.status.load_balancer if service.status else None
        for ingress in (load_balancer.ingress if load_balancer else None) or []:
            address = ingress.ip or ingress.hostname
            if address:
                addresses.append(address)
    addresses += spec.external_i_ps or []

    if addresses:
        return ",".join(addresses)
    if spec.type == "LoadBalancer":
        return PENDING_PLACEHOLDER
    return NONE_PLACEHOLDER


def _service_ports(spec) -> str:
    ports = []
    for port in spec.ports or []:
        if port.node_port:
            ports.append(f"{port.port}:{port.node_port}/{port.protocol}")
        else:
            ports.append(f"{port.port}/{port.protocol}")
    return ",".join(ports) or NONE_PLACEHOLDER


def _service_columns(service, now: datetime) -> list[str]:
    spec = service.spec
    return [
        service.metadata.name,
        spec.type,
        spec.cluster_ip or NONE_PLACEHOLDER,
        _service_external_ip(service),
        _service_ports(spec),
        format_age(service.metadata.creation_timestamp, now),
    ]


def _node_status(node) -> str:
    status = "NotReady"
    for condition in (node.status.conditions if node.status else None) or []:
        if condition.type == "Ready" and condition.status == "True":
            status = "Ready"
            break
    if node.spec and node.spec.unschedulable:
        status += ",SchedulingDisabled"
    return status


def _node_columns(node, now: datetime) -> list[str]:
    labels = node.metadata.labels or {}
    roles = sorted(
        key[len(ROLE_LABEL_PREFIX):] for key in labels
        if key.startswith(ROLE_LABEL_PREFIX) and key[len(ROLE_LABEL_PREFIX):])

    addresses = {}
    for address in (node.status.addresses if node.status else None) or []:
        addresses.setdefault(address.type, address.address)

    info = node.status.node_info if node.status else None
    return [
        node.metadata.name,
        _node_status(node),
        ",".join(roles) or NONE_PLACEHOLDER,
        format_age(node.metadata.creation_timestamp, now),
        info.kubelet_version if info else "",
        addresses.get("InternalIP", NONE_PLACEHOLDER),
        addresses.get("ExternalIP", NONE_PLACEHOLDER),
        info.os_image if info else "",
        info.kernel_version if info else "",
        info.container_runtime_version if info else "",
    ]
