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

import pytest

from k8s_health_probe.health_check import HealthCheck
from k8s_health_probe.listers import KubectlLister
from k8s_health_probe.settings import ProbeSettings


def test_create_health_check():
    settings = ProbeSettings(namespace="shop", timeout=4, retries=1)

    health_check = settings.create_health_check()

    assert isinstance(health_check, HealthCheck)
    assert isinstance(health_check.lister, KubectlLister)
    assert health_check.lister.namespace == "shop"
    assert health_check.prober.timeout == 4
    assert health_check.tracer is None


@pytest.mark.parametrize("kwargs", [
    {"backend": "helm"},
    {"retries": -1},
    {"timeout": 0},
    {"timeout": -3.5},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        ProbeSettings(**kwargs)
