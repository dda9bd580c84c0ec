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

# Markers found in `kubectl get services` output
LOAD_BALANCER_MARKER = "LoadBalancer"
HEADER_FIRST_FIELDS = ("NAME", "NAMESPACE")

# Column values that never name a reachable address.
# "ClusterIP" shows up in the address column when the table is misaligned.
REJECTED_ADDRESSES = ("<none>", "<pending>", "", "ClusterIP")
NONE_PLACEHOLDER = "<none>"
PENDING_PLACEHOLDER = "<pending>"

# Fallback target: the API server through in-cluster DNS
FALLBACK_SCHEME = "https"
FALLBACK_HOST = "kubernetes.default.svc"
DISCOVERED_SCHEME = "http"

# Listing commands
KUBECTL_BINARY = "kubectl"
GET_NODES_ARGS = ["get", "nodes", "-o", "wide"]
GET_SERVICES_ARGS = ["get", "services"]

KUBECTL_HINT = (
    "Is 'kubectl' configured correctly and are you connected to a cluster?")

DEFAULT_TRACE_SERVICE_NAME = "k8s-health-probe"
