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

from unittest import mock

import pytest

from k8s_health_probe.health_check import HealthCheck
from k8s_health_probe.models import ProbeResult

NODES_LISTING = """\
NAME       STATUS   ROLES           AGE   VERSION   INTERNAL-IP    EXTERNAL-IP   OS-IMAGE             KERNEL-VERSION   CONTAINER-RUNTIME
minikube   Ready    control-plane   12d   v1.30.0   192.168.49.2   <none>        Ubuntu 22.04.4 LTS   6.5.0-35         docker://26.1.1
"""

SERVICES_LISTING = """\
NAME         TYPE           CLUSTER-IP    EXTERNAL-IP    PORT(S)        AGE
kubernetes   ClusterIP      10.96.0.1     <none>         443/TCP        1d
my-app       LoadBalancer   10.96.10.10   34.123.45.67   80:30000/TCP   5m
"""

CLUSTER_IP_ONLY_LISTING = """\
NAME         TYPE        CLUSTER-IP   EXTERNAL-IP   PORT(S)   AGE
kubernetes   ClusterIP   10.96.0.1    <none>        443/TCP   1d
"""


class HealthCheckTestBase:
    def setup_method(self):
        self.lister_mock = mock.MagicMock()
        self.lister_mock.list_nodes.return_value = NODES_LISTING
        self.lister_mock.list_services.return_value = SERVICES_LISTING

        self.prober_mock = mock.MagicMock()

    @pytest.fixture
    def probe_success(self):
        return ProbeResult(
            url="http://34.123.45.67:80",
            ok=True,
            status_code=200,
            body="hello",
        )

    @pytest.fixture
    def probe_failure(self):
        return ProbeResult(
            url="http://34.123.45.67:80",
            error="Connection refused",
        )

    def _create_health_check(self, **kwargs) -> HealthCheck:
        return HealthCheck(
            lister=self.lister_mock, prober=self.prober_mock, **kwargs)

    def _set_probe_result(self, result: ProbeResult):
        self.prober_mock.probe.return_value = result
